"""APDU command and response framing."""

from __future__ import annotations

from dataclasses import dataclass

APDU_STATUS_OK = 0x9000


@dataclass
class APDUCommand:
    """An APDU command; ``raw`` overrides the packed form when set."""

    cla: int
    ins: int
    p1: int = 0
    p2: int = 0
    data: bytes = b""
    raw: bytes | None = None
    force_lc: bool = False

    def to_bytes(self) -> bytes:
        """Pack the command, adding the Lc byte when data is present or forced."""
        if self.raw is not None:
            return bytes(self.raw)
        header = bytes([self.cla, self.ins, self.p1, self.p2])
        if self.force_lc or self.data:
            header += bytes([len(self.data) & 0xFF])
        return header + bytes(self.data)


@dataclass(frozen=True)
class APDUResponse:
    """Response payload with its two-byte status word."""

    data: bytes
    sw: int


class APDUError(Exception):
    """A bare non-success APDU status word."""

    def __init__(self, sw: int) -> None:
        self.sw = sw
        super().__init__(sw)

    def __str__(self) -> str:
        return f"ledger: APDU {self.sw:#04x}"


def parse_apdu_response(buf: bytes) -> APDUResponse:
    """Split a raw reply into payload and trailing status word."""
    if len(buf) < 2:
        raise ValueError("ledger: error parsing APDU response")
    return APDUResponse(data=bytes(buf[:-2]), sw=int.from_bytes(buf[-2:], "big"))