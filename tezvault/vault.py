"""Abstract key stores, the driver registry and key collection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator

__all__ = [
    "KeyReference",
    "Vault",
    "UnsupportedKeyError",
    "VaultError",
    "VaultRegistry",
    "register_vault",
    "registry",
    "collect",
]


class UnsupportedKeyError(Exception):
    """Raised by a key iterator for a key of an unsupported type; it is skipped."""

    def __init__(self, message: str = "unsupported key type") -> None:
        super().__init__(message)


class VaultError(Exception):
    """An error reported by a vault backend, prefixed with the backend name."""


class KeyReference(ABC):
    """A public key whose private counterpart is held by a vault."""

    @property
    @abstractmethod
    def public_key(self):
        """The public key."""

    @property
    @abstractmethod
    def vault(self) -> "Vault":
        """The vault holding the private key."""

    @abstractmethod
    def sign(self, message: bytes):
        """Sign ``message`` and return the signature."""


class Vault(ABC):
    """A secure key store."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name."""

    @abstractmethod
    def list(self) -> Iterator[KeyReference]:
        """Iterate over the stored keys."""

    @abstractmethod
    def close(self) -> None:
        """Release the backend's resources."""

    def __enter__(self) -> "Vault":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


VaultFactory = Callable[[Any], Vault]


class VaultRegistry:
    """Maps driver names to functions that build vaults from configuration."""

    def __init__(self) -> None:
        self._factories: dict[str, VaultFactory] = {}

    def register(self, name: str, factory: VaultFactory) -> None:
        """Register ``factory`` under ``name``, replacing any previous one."""
        self._factories[name] = factory

    def new(self, name: str, config: Any) -> Vault:
        """Build a vault with the driver called ``name``."""
        try:
            factory = self._factories[name]
        except KeyError:
            raise ValueError(f"unknown vault driver: {name}") from None
        return factory(config)

    def __contains__(self, name: object) -> bool:
        return name in self._factories


_REGISTRY = VaultRegistry()


def register_vault(name: str, factory: VaultFactory) -> None:
    """Register a driver in the global registry."""
    _REGISTRY.register(name, factory)


def registry() -> VaultRegistry:
    """Return the global registry."""
    return _REGISTRY


def collect(keys: Iterable[KeyReference]) -> list[KeyReference]:
    """Gather all keys, skipping those the iterator reports as unsupported."""
    iterator = iter(keys)
    result: list[KeyReference] = []
    while True:
        try:
            key = next(iterator)
        except StopIteration:
            return result
        except UnsupportedKeyError:
            continue
        result.append(key)