"""BIP32 derivation paths: parsing, formatting and wire serialisation."""

from __future__ import annotations

from typing import Iterable

HARDENED = 1 << 31
_MAX_COMPONENT = 1 << 32


class BIP32Path(tuple):
    """An immutable BIP32 derivation path made of 32-bit components."""

    def __new__(cls, components: Iterable[int] = ()) -> "BIP32Path":
        values = tuple(int(c) for c in components)
        for value in values:
            if not 0 <= value < _MAX_COMPONENT:
                raise ValueError(f"BIP32 component out of range: {value}")
        return super().__new__(cls, values)

    def to_bytes(self) -> bytes:
        """Serialise as a length byte followed by big-endian components."""
        body = b"".join(c.to_bytes(4, "big") for c in self)
        return bytes([len(self) & 0xFF]) + body

    def __add__(self, other: Iterable[int]) -> "BIP32Path":
        return BIP32Path(tuple(self) + tuple(other))

    def __str__(self) -> str:
        parts = []
        for component in self:
            if component & HARDENED:
                parts.append(f"{component & ~HARDENED}'")
            else:
                parts.append(str(component))
        return "/".join(parts)

    def __repr__(self) -> str:
        return f"BIP32Path({str(self)!r})"


TEZOS_BIP32_ROOT = BIP32Path((44 | HARDENED, 1729 | HARDENED))


def bip32_from_bytes(data: bytes) -> BIP32Path:
    """Parse a serialised derivation path; trailing bytes are ignored."""
    if not data:
        raise ValueError("empty BIP32 data")
    count = data[0]
    body = data[1:]
    if len(body) < count * 4:
        raise ValueError("truncated BIP32 data")
    return BIP32Path(
        int.from_bytes(body[offset : offset + 4], "big")
        for offset in range(0, count * 4, 4)
    )


def parse_bip32(src: str) -> BIP32Path:
    """Parse a textual path such as ``m/44'/1729'/0'``."""
    parts = src.split("/")
    if parts[0] == "m":
        parts = parts[1:]
    components = []
    for part in parts:
        if not part:
            raise ValueError(f"invalid BIP32 path: {src}")
        hardened = 0
        if part[-1] in ("'", "h"):
            hardened = HARDENED
            part = part[:-1]
        if not part or not (part.isascii() and part.isdigit()):
            raise ValueError(f"invalid BIP32 path: {src}")
        value = int(part)
        if value >= _MAX_COMPONENT:
            raise ValueError(f"invalid BIP32 path: {src}")
        components.append(value | hardened)
    return BIP32Path(components)