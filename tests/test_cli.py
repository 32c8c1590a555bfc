import socketserver
import struct
import threading

import pytest

from tezvault.cli import format_devices, main
from tezvault.keyid import parse_key_id
from tezvault.keys import Ed25519PublicKey, format_chain_id
from tezvault.mnemonic import new_mnemonic
from tezvault.scan import ScannedDevice
from tezvault.tezosapp import TezosVersion

PK = bytes(range(32))
CHAIN = b"\x01\x02\x03\x04"


class _State:
    def __init__(self):
        self.main = 5
        self.test = 6
        self.resets = []
        self.setups = []
        self.deauthorized = 0

    def respond(self, ins, payload):
        if ins == 0:
            return bytes([1, 2, 4, 0]), 0x9000
        if ins == 9:
            return b"abc\x00", 0x9000
        if ins in (2, 10):
            if ins == 10:
                self.setups.append(payload)
            return bytes([33, 2]) + PK, 0x9000
        if ins == 8:
            return self.main.to_bytes(4, "big"), 0x9000
        if ins == 11:
            return self.main.to_bytes(4, "big") + self.test.to_bytes(4, "big") + CHAIN, 0x9000
        if ins == 6:
            self.resets.append(int.from_bytes(payload, "big"))
            return b"", 0x9000
        if ins == 12:
            self.deauthorized += 1
            return b"", 0x9000
        return b"", 0x6D00


class _Handler(socketserver.BaseRequestHandler):
    def _read(self, n):
        buf = b""
        while len(buf) < n:
            chunk = self.request.recv(n - len(buf))
            if not chunk:
                return None
            buf += chunk
        return buf

    def handle(self):
        while True:
            header = self._read(4)
            if header is None:
                return
            (length,) = struct.unpack(">I", header)
            apdu = self._read(length)
            if apdu is None:
                return
            data, sw = self.server.state.respond(apdu[1], apdu[5:])
            self.request.sendall(struct.pack(">I", len(data)) + data + sw.to_bytes(2, "big"))


@pytest.fixture
def emulator():
    server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), _Handler)
    server.daemon_threads = True
    server.state = _State()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address
    yield f"tcp://{host}:{port}", f"{host}:{port}", server.state
    server.shutdown()
    server.server_close()


def test_format_devices_layout():
    dev = ScannedDevice(
        path="/dev/a",
        version=TezosVersion(0, 2, 4, 0, "abc"),
        id="able-ant-bad-bat",
        short_id="abcd",
    )
    expected = (
        "Path:  \t\t/dev/a\n"
        "ID:     \table-ant-bad-bat / abcd\n"
        "Version:\tTezos 2.4.0 abc\n"
        "\n"
    )
    assert format_devices([dev]) == expected
    assert format_devices([]) == "\n"


def test_list(emulator, capsys):
    url, addr, _ = emulator
    assert main(["-t", url, "list"]) == 0
    out = capsys.readouterr().out
    pkh = Ed25519PublicKey(PK).hash()
    assert f"Path:  \t\t{addr}\n" in out
    assert f"{new_mnemonic(pkh.to_bytes())} / {pkh.digest[:4].hex()}" in out


def test_get_high_watermark(emulator, capsys):
    url, _, _ = emulator
    assert main(["-t", url, "get-high-watermark"]) == 0
    assert capsys.readouterr().out == "5\n"


def test_get_high_watermarks(emulator, capsys):
    url, _, _ = emulator
    assert main(["-t", url, "get-high-watermarks"]) == 0
    out = capsys.readouterr().out
    assert out == f"Main: 5\nTest: 6\nChain ID: {format_chain_id(CHAIN)}\n"


def test_set_high_watermark(emulator):
    url, _, state = emulator
    assert main(["-t", url, "set-high-watermark", "77"]) == 0
    assert main(["-t", url, "set-high-watermark", "bogus"]) == 0
    assert state.resets == [77, 0]


def test_setup_baking(emulator, capsys):
    url, _, state = emulator
    key = "ed25519/0'/0'"
    code = main(
        ["-t", url, "setup-baking", key, "--main-hwm", "100", "--chain-id", format_chain_id(CHAIN)]
    )
    assert code == 0
    pkh = Ed25519PublicKey(PK).hash()
    assert capsys.readouterr().out == f"Authorized baking for address: {pkh}\n"
    payload = state.setups[0]
    assert payload[:4] == CHAIN
    assert payload[4:8] == (100).to_bytes(4, "big")
    assert payload[12:] == parse_key_id(key).path.to_bytes()


def test_deauthorize_with_matching_short_id(emulator):
    url, _, state = emulator
    short_id = Ed25519PublicKey(PK).hash().digest[:4].hex()
    assert main(["-t", url, "deauthorize-baking", "-d", short_id]) == 0
    assert state.deauthorized == 1


def test_unknown_device_id_fails(emulator, capsys):
    url, _, state = emulator
    assert main(["-t", url, "deauthorize-baking", "-d", "nope"]) == 1
    assert "can't find a device with id nope" in capsys.readouterr().err
    assert state.deauthorized == 0


def test_undefined_transport(capsys):
    assert main(["-t", "foo://localhost:1", "get-high-watermark"]) == 1
    assert "undefined transport: foo" in capsys.readouterr().err


def test_setup_baking_requires_key_id(capsys):
    assert main(["setup-baking"]) == 2
    assert "KEY_ID" in capsys.readouterr().err