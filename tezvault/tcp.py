"""TCP transport for Ledger emulators."""

from __future__ import annotations

import socket
import struct

from tezvault.apdu import APDUCommand, APDUResponse, parse_apdu_response
from tezvault.devices import LEDGER_NANO_S, find_model
from tezvault.ledger import DeviceInfo, Exchanger, Transport


def _split_host_port(address: str) -> tuple[str, int]:
    if address.startswith("["):
        host, sep, rest = address[1:].partition("]")
        if not sep or not rest.startswith(":"):
            raise ConnectionError(f"tcp: missing port in address {address}")
        port_text = rest[1:]
    else:
        host, sep, port_text = address.rpartition(":")
        if not sep:
            raise ConnectionError(f"tcp: missing port in address {address}")
    if not port_text.isdigit():
        raise ConnectionError(f"tcp: invalid port in address {address}")
    return host, int(port_text)


class TCPExchanger(Exchanger):
    """Exchanges length-prefixed APDUs over a stream socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock

    def _recv_exact(self, n: int) -> bytes:
        buf = bytearray()
        while len(buf) < n:
            chunk = self._sock.recv(n - len(buf))
            if not chunk:
                raise ConnectionError("tcp: unexpected EOF")
            buf.extend(chunk)
        return bytes(buf)

    def exchange(self, request: APDUCommand) -> APDUResponse:
        data = request.to_bytes()
        try:
            self._sock.sendall(struct.pack(">I", len(data)) + data)
            (length,) = struct.unpack(">I", self._recv_exact(4))
            reply = self._recv_exact(length + 2)
        except ConnectionError:
            raise
        except OSError as exc:
            raise ConnectionError(f"tcp: {exc}") from exc
        return parse_apdu_response(reply)

    def close(self) -> None:
        self._sock.close()


class TCPTransport(Transport):
    """A single emulated device at a fixed address."""

    def __init__(self, addr: str, model: str = "") -> None:
        self.addr = addr
        self.model = model

    def enumerate(self) -> list[DeviceInfo]:
        device = find_model(self.model) if self.model else LEDGER_NANO_S
        return [DeviceInfo(path=self.addr, device_info=device)]

    def open(self, path: str) -> TCPExchanger:
        host, port = _split_host_port(path)
        try:
            sock = socket.create_connection((host, port))
        except OSError as exc:
            raise ConnectionError(f"tcp: {exc}") from exc
        return TCPExchanger(sock)