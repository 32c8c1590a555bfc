"""Vault backed by a Ledger device running the Tezos baking application."""

from __future__ import annotations

import logging
import queue
import re
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from tezvault.keyid import KeyID, parse_key_id
from tezvault.scan import Scanner, get_scanner
from tezvault.tezosapp import TezosApp
from tezvault.vault import KeyReference, Vault, VaultError, register_vault

__all__ = [
    "DEFAULT_CLOSE_AFTER",
    "LedgerConfig",
    "LedgerKey",
    "LedgerVault",
    "new_ledger_vault",
]

log = logging.getLogger(__name__)

DEFAULT_CLOSE_AFTER = 10.0

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "\u00b5s": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_TERM = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|\u00b5s|ms|s|m|h)"
_DURATION_RE = re.compile(f"(?:{_TERM})+")
_TERM_RE = re.compile(_TERM)


def _parse_duration(value: Any) -> float:
    """Seconds from a number or a duration string such as ``1m30s``."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = str(value).strip()
    if text in ("", "0"):
        return 0.0
    if not _DURATION_RE.fullmatch(text):
        raise ValueError(f"invalid duration: {value}")
    return sum(float(num) * _UNITS[unit] for num, unit in _TERM_RE.findall(text))


@dataclass
class LedgerConfig:
    """Ledger backend configuration; ``close_after`` is in seconds, 0 for the default."""

    id: str = ""
    keys: list[str] = field(default_factory=list)
    close_after: float = 0.0
    transport: Any = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LedgerConfig":
        """Build a configuration from a decoded configuration document."""
        keys = data.get("keys") or []
        if isinstance(keys, str) or not all(isinstance(k, str) for k in keys):
            raise ValueError("(Ledger): keys must be a list of strings")
        return cls(
            id=str(data.get("id") or ""),
            keys=list(keys),
            close_after=_parse_duration(data.get("close_after")),
            transport=data.get("transport") or "",
        )


class LedgerKey(KeyReference):
    """A key held by a Ledger device."""

    def __init__(self, key_id: KeyID, public_key: Any, vault: "LedgerVault") -> None:
        self.key_id = key_id
        self._public_key = public_key
        self._vault = vault

    @property
    def public_key(self):
        return self._public_key

    @property
    def vault(self) -> "LedgerVault":
        return self._vault

    @property
    def id(self) -> str:
        return str(self.key_id)

    def sign(self, message: bytes):
        """Ask the device to sign ``message``."""
        return self._vault._submit(_SignRequest(self.key_id, bytes(message), Future()))


@dataclass
class _GetKeyRequest:
    key_id: KeyID
    future: Future


@dataclass
class _SignRequest:
    key_id: KeyID
    data: bytes
    future: Future


class LedgerVault(Vault):
    """Serialises device access on a worker thread and closes idle devices."""

    def __init__(self, config: LedgerConfig, keys: list[KeyID], scanner: Scanner) -> None:
        self.config = config
        self.keys = list(keys)
        self._scanner = scanner
        self._close_after = config.close_after or DEFAULT_CLOSE_AFTER
        self._requests: queue.Queue = queue.Queue()
        self._closed = False
        self._dev: TezosApp | None = None
        self._deadline: float | None = None
        self._thread = threading.Thread(target=self._worker, daemon=True)
        self._thread.start()

    @property
    def name(self) -> str:
        return f"Ledger/{self.config.id}"

    def _submit(self, request):
        if self._closed:
            raise VaultError(f"({self.name}): vault is closed")
        self._requests.put(request)
        try:
            return request.future.result()
        except Exception as exc:
            raise VaultError(f"({self.name}): {exc}") from exc

    def list(self) -> Iterator[LedgerKey]:
        """Yield the configured keys, fetching each public key from the device."""
        for key_id in self.keys:
            yield self._submit(_GetKeyRequest(key_id, Future()))

    def close(self) -> None:
        """Stop the worker and release the device."""
        if self._closed:
            return
        self._closed = True
        self._requests.put(None)
        self._thread.join()

    # worker side

    def _open_device(self, retry: bool) -> TezosApp:
        if self._dev is not None:
            if not retry:
                return self._dev
            self._close_device()
        self._dev = None
        self._dev = self._scanner.open(self.config.id)
        self._deadline = time.monotonic() + self._close_after
        return self._dev

    def _close_device(self) -> bool:
        try:
            self._dev.close()
        except OSError as exc:
            log.error("(%s): %s", self.name, exc)
            return False
        return True

    def _handle_get_key(self, req: _GetKeyRequest) -> None:
        try:
            dev = self._open_device(False)
            pub = dev.get_public_key(req.key_id.derivation, req.key_id.path, False)
        except Exception as exc:
            req.future.set_exception(exc)
            return
        req.future.set_result(LedgerKey(req.key_id, pub, self))

    def _handle_sign(self, req: _SignRequest) -> None:
        # the device may have been reset; reopen it once before giving up
        for attempt in (0, 1):
            try:
                dev = self._open_device(attempt == 1)
            except Exception as exc:
                req.future.set_exception(exc)
                return
            try:
                sig = dev.sign(req.key_id.derivation, req.key_id.path, req.data)
            except Exception as exc:
                if attempt == 1:
                    req.future.set_exception(exc)
                continue
            req.future.set_result(sig)
            return

    def _worker(self) -> None:
        while True:
            timeout = None
            if self._dev is not None and self._deadline is not None:
                timeout = max(0.0, self._deadline - time.monotonic())
            try:
                req = self._requests.get(timeout=timeout)
            except queue.Empty:
                self._deadline = None
                if self._close_device():
                    self._dev = None
                continue
            if req is None:
                if self._dev is not None:
                    self._close_device()
                    self._dev = None
                return
            if isinstance(req, _GetKeyRequest):
                self._handle_get_key(req)
            else:
                self._handle_sign(req)


def new_ledger_vault(config: LedgerConfig) -> LedgerVault:
    """Create a Ledger vault; key ids and the transport are checked up front."""
    keys = [parse_key_id(k) for k in config.keys]
    scanner = get_scanner(config.transport)
    return LedgerVault(config, keys, scanner)


def _factory(config: Any) -> LedgerVault:
    if config is None:
        raise ValueError("(Ledger): config is missing")
    if not isinstance(config, LedgerConfig):
        config = LedgerConfig.from_mapping(config)
    return new_ledger_vault(config)


register_vault("ledger", _factory)