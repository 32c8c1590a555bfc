"""Device transports and commands common to every Ledger application."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from tezvault.apdu import APDU_STATUS_OK, APDUCommand, APDUError, APDUResponse
from tezvault.devices import LedgerDeviceInfo

_CLA_GLOBAL = 0xB0
_INS_VERSION = 0x01
_INS_QUIT = 0xA7


@dataclass(frozen=True)
class DeviceInfo:
    """A device found during enumeration."""

    path: str
    device_info: LedgerDeviceInfo | None = None


class Exchanger(ABC):
    """An open device that exchanges APDUs."""

    @abstractmethod
    def exchange(self, request: APDUCommand) -> APDUResponse:
        """Send a command and return the device's reply."""

    @abstractmethod
    def close(self) -> None:
        """Release the device."""

    def __enter__(self) -> "Exchanger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class Transport(ABC):
    """A way of reaching devices, such as USB HID or TCP."""

    @abstractmethod
    def enumerate(self) -> list[DeviceInfo]:
        """List reachable devices."""

    @abstractmethod
    def open(self, path: str) -> Exchanger:
        """Open the device at ``path``."""


@dataclass(frozen=True)
class AppVersion:
    """Name, version and flags of the running application."""

    name: str
    version: str
    flags: int

    def __str__(self) -> str:
        return f"{self.name} {self.version} / {self.flags:#x}"


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def byte(self) -> int:
        return self.take(1)[0]

    def take(self, n: int) -> bytes:
        if len(self._data) - self._pos < n:
            raise ValueError("ledger: unexpected end of the message")
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk


class LedgerApp:
    """Global commands available regardless of the running application."""

    def __init__(self, exchanger: Exchanger) -> None:
        self.exchanger = exchanger

    def exchange(self, request: APDUCommand) -> APDUResponse:
        return self.exchanger.exchange(request)

    def _checked(self, request: APDUCommand) -> APDUResponse:
        res = self.exchange(request)
        if res.sw != APDU_STATUS_OK:
            raise APDUError(res.sw)
        return res

    def get_app_version(self) -> AppVersion:
        """Return the name, version and flags of the running application."""
        res = self._checked(APDUCommand(cla=_CLA_GLOBAL, ins=_INS_VERSION))
        reader = _Reader(res.data)
        fmt = reader.byte()
        if fmt != 1:
            raise ValueError(f"ledger: invalid version info format: {fmt}")
        name = reader.take(reader.byte())
        version = reader.take(reader.byte())
        flags = int.from_bytes(reader.take(reader.byte()), "big")
        return AppVersion(
            name=name.decode("utf-8", "replace"),
            version=version.decode("utf-8", "replace"),
            flags=flags,
        )

    def quit_app(self) -> None:
        """Ask the device to close the running application."""
        self._checked(APDUCommand(cla=_CLA_GLOBAL, ins=_INS_QUIT))

    def close(self) -> None:
        self.exchanger.close()

    def __enter__(self) -> "LedgerApp":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()