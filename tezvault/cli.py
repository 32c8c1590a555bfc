"""Command line for Ledger specific operations."""

from __future__ import annotations

from typing import Iterable

import click

from tezvault.apdu import APDUError
from tezvault.scan import ScannedDevice, get_scanner
from tezvault.tezos_errors import TezosError
from tezvault.tools import (
    deauthorize_baking,
    get_high_watermark,
    get_high_watermarks,
    set_high_watermark,
    setup_baking,
)
from tezvault.vault import VaultError

__all__ = ["format_devices", "main"]

_UINT32 = click.IntRange(0, 0xFFFFFFFF)
_ERRORS = (ValueError, LookupError, OSError, TezosError, APDUError, VaultError)


def format_devices(devices: Iterable[ScannedDevice]) -> str:
    """Render scanned devices as the ``list`` command prints them."""
    entries = (
        f"Path:  \t\t{d.path}\n"
        f"ID:     \t{d.id} / {d.short_id}\n"
        f"Version:\t{d.version}\n"
        for d in devices
    )
    return "".join(entries) + "\n"


def _parse_hwm(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        return 0
    return min(int(text), 0xFFFFFFFF)


@click.group(name="ledger", help="Ledger specific operations")
@click.option("-t", "--transport", default="", help="Transport")
@click.pass_context
def ledger(ctx: click.Context, transport: str) -> None:
    ctx.obj = transport


@ledger.command("list", help="List connected Ledgers")
@click.pass_obj
def list_command(transport: str) -> None:
    devices = get_scanner(transport).scan()
    click.echo(format_devices(devices), nl=False)


@ledger.command("setup-baking", help="Authorize a key for baking")
@click.argument("key_id")
@click.option("-d", "--device", default="", help="Ledger device ID")
@click.option("--main-hwm", type=_UINT32, default=0, help="Main high water mark")
@click.option("--test-hwm", type=_UINT32, default=0, help="Test high water mark")
@click.option("--chain-id", default="", help="Chain ID")
@click.pass_obj
def setup_command(
    transport: str, key_id: str, device: str, main_hwm: int, test_hwm: int, chain_id: str
) -> None:
    pkh = setup_baking(transport, device, key_id, chain_id, main_hwm, test_hwm)
    click.echo(f"Authorized baking for address: {pkh}")


@ledger.command("deauthorize-baking", help="Deauthorize a key")
@click.argument("args", nargs=-1)
@click.option("-d", "--device", default="", help="Ledger device ID")
@click.pass_obj
def deauthorize_command(transport: str, args: tuple, device: str) -> None:
    deauthorize_baking(transport, device)


@ledger.command("set-high-watermark", help="Set high water mark")
@click.argument("hwm")
@click.option("-d", "--device", default="", help="Ledger device ID")
@click.pass_obj
def set_hwm_command(transport: str, hwm: str, device: str) -> None:
    set_high_watermark(transport, device, _parse_hwm(hwm))


@ledger.command("get-high-watermark", help="Get high water mark")
@click.option("-d", "--device", default="", help="Ledger device ID")
@click.pass_obj
def get_hwm_command(transport: str, device: str) -> None:
    click.echo(get_high_watermark(transport, device))


@ledger.command("get-high-watermarks", help="Get all high water marks and chain ID")
@click.option("-d", "--device", default="", help="Ledger device ID")
@click.pass_obj
def get_hwms_command(transport: str, device: str) -> None:
    main_hwm, test_hwm, chain_id = get_high_watermarks(transport, device)
    click.echo(f"Main: {main_hwm}\nTest: {test_hwm}\nChain ID: {chain_id}")


def main(argv=None) -> int:
    """Run the ``ledger`` command and return its exit status."""
    try:
        result = ledger.main(args=argv, prog_name="ledger", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except _ERRORS as exc:
        click.echo(f"Error: {exc}", err=True)
        return 1
    return result if isinstance(result, int) else 0