import time

import pytest

from tezvault.apdu import APDUResponse
from tezvault.keyid import parse_key_id
from tezvault.keys import Ed25519PublicKey, Ed25519Signature
from tezvault.ledger import DeviceInfo, Exchanger, Transport
from tezvault.ledger_vault import (
    DEFAULT_CLOSE_AFTER,
    LedgerConfig,
    LedgerKey,
    LedgerVault,
    new_ledger_vault,
)
from tezvault.vault import VaultError, collect, registry

PK = bytes(range(32))
SIG = bytes(range(64))
KEY = "ed25519/0'/0'"


class FakeDevice(Exchanger):
    def __init__(self, transport):
        self.transport = transport
        self.closed = False

    def exchange(self, request):
        t = self.transport
        t.commands.append(request)
        if request.ins == 0:
            return APDUResponse(bytes([1, 2, 4, 0]), 0x9000)
        if request.ins == 9:
            return APDUResponse(b"", 0x9000)
        if request.ins == 2:
            return APDUResponse(bytes([33, 2]) + PK, 0x9000)
        if request.ins == 4:
            if request.p1 == 0 and t.sign_failures > 0:
                t.sign_failures -= 1
                return APDUResponse(b"", 0x6985)
            if request.p1 & 0x80:
                return APDUResponse(SIG, 0x9000)
            return APDUResponse(b"", 0x9000)
        return APDUResponse(b"", 0x6D00)

    def close(self):
        self.closed = True


class FakeTransport(Transport):
    def __init__(self, sign_failures=0, present=True):
        self.devices = []
        self.commands = []
        self.sign_failures = sign_failures
        self.present = present

    def enumerate(self):
        return [DeviceInfo(path="fake0")] if self.present else []

    def open(self, path):
        dev = FakeDevice(self)
        self.devices.append(dev)
        return dev


@pytest.fixture
def vault_factory():
    made = []

    def make(transport, **kwargs):
        v = new_ledger_vault(LedgerConfig(keys=[KEY], transport=transport, **kwargs))
        made.append(v)
        return v

    yield make
    for v in made:
        v.close()


def test_list_returns_configured_keys(vault_factory):
    v = vault_factory(FakeTransport())
    keys = collect(v.list())
    assert len(keys) == 1
    assert isinstance(keys[0], LedgerKey)
    assert keys[0].public_key == Ed25519PublicKey(PK)
    assert keys[0].id == str(parse_key_id(KEY))
    assert keys[0].vault is v


def test_name_uses_config_id(vault_factory):
    v = vault_factory(FakeTransport(), id="")
    assert v.name == "Ledger/"


def test_sign_sends_fragments(vault_factory):
    transport = FakeTransport()
    v = vault_factory(transport)
    key = next(v.list())
    sig = key.sign(b"\x11" * 300)
    assert sig == Ed25519Signature(SIG)
    sign_p1 = [c.p1 for c in transport.commands if c.ins == 4]
    assert sign_p1 == [0, 0x01, 0x81]


def test_sign_reopens_device_once(vault_factory):
    transport = FakeTransport(sign_failures=1)
    v = vault_factory(transport)
    key = next(v.list())
    assert key.sign(b"abc") == Ed25519Signature(SIG)
    assert len(transport.devices) == 2
    assert transport.devices[0].closed


def test_sign_fails_after_retry(vault_factory):
    transport = FakeTransport(sign_failures=2)
    v = vault_factory(transport)
    key = next(v.list())
    with pytest.raises(VaultError, match="Conditions of use not satisfied") as info:
        key.sign(b"abc")
    assert str(info.value).startswith("(Ledger/)")


def test_missing_device_is_reported(vault_factory):
    v = vault_factory(FakeTransport(present=False))
    with pytest.raises(VaultError, match="no Ledger devices found"):
        collect(v.list())


def test_idle_device_is_closed_and_reopened(vault_factory):
    transport = FakeTransport()
    v = vault_factory(transport, close_after=0.05)
    collect(v.list())
    deadline = time.monotonic() + 2
    while not transport.devices[0].closed and time.monotonic() < deadline:
        time.sleep(0.01)
    assert transport.devices[0].closed
    collect(v.list())
    assert len(transport.devices) == 2


def test_invalid_key_id_rejected():
    with pytest.raises(ValueError):
        new_ledger_vault(LedgerConfig(keys=["nokey"], transport=FakeTransport()))


def test_closed_vault_refuses_requests(vault_factory):
    v = vault_factory(FakeTransport())
    v.close()
    with pytest.raises(VaultError):
        collect(v.list())


def test_registry_requires_config():
    with pytest.raises(ValueError, match="config is missing"):
        registry().new("ledger", None)


def test_registry_builds_vault_from_mapping():
    v = registry().new(
        "ledger", {"keys": [KEY], "transport": FakeTransport(), "close_after": "500ms"}
    )
    try:
        assert isinstance(v, LedgerVault)
        assert v.config.close_after == 0.5
        assert len(collect(v.list())) == 1
    finally:
        v.close()


def test_config_defaults_and_bad_duration():
    assert LedgerConfig.from_mapping({}).close_after == 0.0
    assert LedgerConfig.from_mapping({"close_after": "1m30s"}).close_after == 90.0
    with pytest.raises(ValueError):
        LedgerConfig.from_mapping({"close_after": "10x"})
    assert DEFAULT_CLOSE_AFTER == 10.0