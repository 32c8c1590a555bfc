"""Tezos key vaults: in-memory keys and Ledger devices over the TCP APDU transport."""

__version__ = "0.1.0"