"""Known Ledger device models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerDeviceInfo:
    """Static information about a Ledger model."""

    id: str
    product_name: str
    product_id_mm: int
    legacy_usb_product_id: int
    usb_only: bool
    memory_size: int


LEDGER_BLUE = LedgerDeviceInfo("blue", "Ledger Blue", 0x00, 0x0000, True, 480 * 1024)
LEDGER_NANO_S = LedgerDeviceInfo("nanoS", "Ledger Nano S", 0x10, 0x0001, True, 320 * 1024)
LEDGER_NANO_SP = LedgerDeviceInfo(
    "nanoSP", "Ledger Nano S Plus", 0x50, 0x0005, True, 1536 * 1024
)
LEDGER_NANO_X = LedgerDeviceInfo(
    "nanoX", "Ledger Nano X", 0x40, 0x0004, False, 2 * 1024 * 1024
)
LEDGER_NANO_FTS = LedgerDeviceInfo(
    "nanoFTS", "Ledger Nano FTS", 0x60, 0x0006, False, 1536 * 1024
)

LEDGER_DEVICES = (
    LEDGER_BLUE,
    LEDGER_NANO_S,
    LEDGER_NANO_SP,
    LEDGER_NANO_X,
    LEDGER_NANO_FTS,
)


def find_model(name: str) -> LedgerDeviceInfo:
    """Look up a model by its id, ignoring case."""
    wanted = name.casefold()
    for device in LEDGER_DEVICES:
        if device.id.casefold() == wanted:
            return device
    raise ValueError("ledger: unknown model")