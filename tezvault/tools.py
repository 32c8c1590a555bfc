"""One-shot device operations used by the command line."""

from __future__ import annotations

from tezvault.keyid import parse_key_id
from tezvault.keys import format_chain_id, parse_chain_id
from tezvault.ledger import Transport
from tezvault.scan import get_scanner
from tezvault.tezosapp import HWM

__all__ = [
    "setup_baking",
    "deauthorize_baking",
    "set_high_watermark",
    "get_high_watermark",
    "get_high_watermarks",
]


def setup_baking(
    transport: str | Transport,
    device_id: str,
    key_id: str,
    chain_id: str = "",
    main_hwm: int = 0,
    test_hwm: int = 0,
) -> str:
    """Authorise a key for baking and return its public key hash."""
    chain = parse_chain_id(chain_id) if chain_id else b"\x00" * 4
    hwm = HWM(chain_id=chain, main=main_hwm, test=test_hwm)
    key = parse_key_id(key_id)
    scanner = get_scanner(transport)
    with scanner.open(device_id) as app:
        pub = app.setup_baking(hwm, key.derivation, key.path)
    return str(pub.hash())


def deauthorize_baking(transport: str | Transport, device_id: str = "") -> None:
    """Remove the baking authorisation from a device."""
    with get_scanner(transport).open(device_id) as app:
        app.deauthorize_baking()


def set_high_watermark(transport: str | Transport, device_id: str, hwm: int) -> None:
    """Reset the main chain high water mark."""
    with get_scanner(transport).open(device_id) as app:
        app.set_high_watermark(hwm)


def get_high_watermark(transport: str | Transport, device_id: str = "") -> int:
    """Return the main chain high water mark."""
    with get_scanner(transport).open(device_id) as app:
        return app.get_high_watermark()


def get_high_watermarks(
    transport: str | Transport, device_id: str = ""
) -> tuple[int, int, str]:
    """Return the main and test high water marks and the chain id."""
    with get_scanner(transport).open(device_id) as app:
        hwm = app.get_high_watermarks()
    return hwm.main, hwm.test, format_chain_id(hwm.chain_id)