import pytest

from tezvault.apdu import APDUCommand, APDUError, APDUResponse
from tezvault.ledger import AppVersion, Exchanger, LedgerApp


class FakeExchanger(Exchanger):
    def __init__(self, replies):
        self.replies = list(replies)
        self.requests = []
        self.closed = False

    def exchange(self, request: APDUCommand) -> APDUResponse:
        self.requests.append(request.to_bytes())
        return self.replies.pop(0)

    def close(self) -> None:
        self.closed = True


def _version_payload(name: bytes, version: bytes, flags: bytes) -> bytes:
    return (
        bytes([1, len(name)]) + name
        + bytes([len(version)]) + version
        + bytes([len(flags)]) + flags
    )


def test_get_app_version():
    payload = _version_payload(b"BOL", b"1.6.0", b"\x0e")
    ex = FakeExchanger([APDUResponse(payload, 0x9000)])
    ver = LedgerApp(ex).get_app_version()
    assert ver == AppVersion(name="BOL", version="1.6.0", flags=0x0E)
    assert ex.requests == [bytes([0xB0, 0x01, 0, 0])]


def test_version_string():
    assert str(AppVersion("BOL", "1.6.0", 0x0E)) == "BOL 1.6.0 / 0xe"


def test_empty_flags_give_zero():
    payload = _version_payload(b"App", b"2", b"")
    ex = FakeExchanger([APDUResponse(payload, 0x9000)])
    assert LedgerApp(ex).get_app_version().flags == 0


def test_invalid_format_byte():
    payload = bytes([2]) + _version_payload(b"A", b"1", b"")[1:]
    ex = FakeExchanger([APDUResponse(payload, 0x9000)])
    with pytest.raises(ValueError, match="invalid version info format"):
        LedgerApp(ex).get_app_version()


def test_truncated_version():
    ex = FakeExchanger([APDUResponse(bytes([1, 5]) + b"ab", 0x9000)])
    with pytest.raises(ValueError, match="unexpected end"):
        LedgerApp(ex).get_app_version()


def test_status_error_raises():
    ex = FakeExchanger([APDUResponse(b"", 0x6985)])
    with pytest.raises(APDUError) as info:
        LedgerApp(ex).get_app_version()
    assert info.value.sw == 0x6985


def test_quit_app():
    ex = FakeExchanger([APDUResponse(b"", 0x9000)])
    LedgerApp(ex).quit_app()
    assert ex.requests == [bytes([0xB0, 0xA7, 0, 0])]


def test_quit_app_error():
    ex = FakeExchanger([APDUResponse(b"", 0x6D00)])
    with pytest.raises(APDUError):
        LedgerApp(ex).quit_app()


def test_close_via_context_manager():
    ex = FakeExchanger([])
    with LedgerApp(ex) as app:
        assert app.exchanger is ex
    assert ex.closed is True