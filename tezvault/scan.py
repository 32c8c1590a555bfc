"""Discovery of Ledger devices running the Tezos application."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from urllib.parse import urlsplit

from tezvault.apdu import APDUError
from tezvault.bip32 import TEZOS_BIP32_ROOT
from tezvault.ledger import Transport
from tezvault.mnemonic import new_mnemonic
from tezvault.tcp import TCPTransport
from tezvault.tezos_errors import TezosError
from tezvault.tezosapp import DerivationType, TezosApp, TezosVersion

__all__ = ["ScannedDevice", "Scanner", "DeviceNotFoundError", "get_scanner"]

log = logging.getLogger(__name__)

_DEVICE_ERRORS = (OSError, ValueError, APDUError, TezosError)


class DeviceNotFoundError(LookupError):
    """No matching Ledger device is attached."""


@dataclass(frozen=True)
class ScannedDevice:
    """A device found by scanning, identified by its Tezos root key."""

    path: str
    version: TezosVersion
    id: str
    short_id: str


class Scanner:
    """Enumerates and opens devices on one transport."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        self._lock = threading.Lock()

    def _open_path(self, path: str) -> tuple[TezosApp, ScannedDevice]:
        app = TezosApp(self.transport.open(path))
        try:
            version = app.get_version()
            root = app.get_public_key(DerivationType.ED25519, TEZOS_BIP32_ROOT, False)
            pkh = root.hash()
            device = ScannedDevice(
                path=path,
                version=version,
                id=str(new_mnemonic(pkh.to_bytes())),
                short_id=pkh.digest[:4].hex(),
            )
        except BaseException:
            app.close()
            raise
        return app, device

    def open(self, device_id: str = "") -> TezosApp:
        """Open the first device whose id or short id matches; any if empty."""
        with self._lock:
            devices = self.transport.enumerate()
            if not devices:
                raise DeviceNotFoundError("no Ledger devices found")
            for info in devices:
                try:
                    app, device = self._open_path(info.path)
                except _DEVICE_ERRORS:
                    continue
                if not device_id or device_id in (device.short_id, device.id):
                    return app
                app.close()
        raise DeviceNotFoundError(f"can't find a device with id {device_id}")

    def scan(self) -> list[ScannedDevice]:
        """Identify every reachable device; failing ones are logged and skipped."""
        with self._lock:
            found = []
            for info in self.transport.enumerate():
                try:
                    app, device = self._open_path(info.path)
                except _DEVICE_ERRORS as exc:
                    log.warning("%s: %s", info.path, exc)
                    continue
                app.close()
                found.append(device)
            return found


def get_scanner(transport: str | Transport) -> Scanner:
    """Return a scanner for a transport object or a transport URL such as ``tcp://host:port``."""
    if isinstance(transport, Transport):
        return Scanner(transport)
    parts = urlsplit(transport)
    host = parts.netloc.rpartition("@")[2]
    kind = parts.scheme if parts.scheme and host else transport
    if kind in ("usb", ""):
        raise ConnectionError("ledger: USB HID transport is not available")
    if kind == "tcp":
        return Scanner(TCPTransport(host, parts.username or ""))
    raise ValueError(f"undefined transport: {kind}")