"""Ledger key identifiers of the form ``<derivation>/<bip32 path>``."""

from __future__ import annotations

from dataclasses import dataclass

from tezvault.bip32 import HARDENED, TEZOS_BIP32_ROOT, BIP32Path, parse_bip32
from tezvault.tezosapp import DerivationType, derivation_type_from_string

__all__ = ["KeyID", "parse_key_id"]


@dataclass(frozen=True)
class KeyID:
    """A derivation type with a full, hardened derivation path."""

    derivation: DerivationType
    path: BIP32Path

    def __str__(self) -> str:
        return f"{self.derivation}/{self.path}"


def parse_key_id(text: str) -> KeyID:
    """Parse a key id; paths not under the Tezos root are placed beneath it."""
    parts = text.split("/", 1)
    if len(parts) != 2:
        raise ValueError(f"error parsing key id: {text}")
    derivation = derivation_type_from_string(parts[0])
    try:
        path = parse_bip32(parts[1])
    except ValueError:
        raise ValueError(f"error parsing key path: {parts[1]}") from None
    if any(not component & HARDENED for component in path):
        raise ValueError("only hardened derivation is supported")
    if tuple(path[:2]) != tuple(TEZOS_BIP32_ROOT):
        path = TEZOS_BIP32_ROOT + path
    if len(path) == 2:
        raise ValueError("root key isn't allowed to use")
    return KeyID(derivation=derivation, path=path)