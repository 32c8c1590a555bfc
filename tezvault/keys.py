"""Tezos keys, signatures, key hashes and base58check encoding."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {c: i for i, c in enumerate(_ALPHABET)}

_CHAIN_ID_PREFIX = bytes([87, 82, 0])


class Curve(Enum):
    """Signature schemes, valued by their key-hash tag."""

    ED25519 = 0
    SECP256K1 = 1
    P256 = 2

    @property
    def tag(self) -> int:
        return self.value

    @property
    def curve_name(self) -> str:
        return _CURVE_NAMES[self]


_CURVE_NAMES = {
    Curve.ED25519: "ed25519",
    Curve.SECP256K1: "secp256k1",
    Curve.P256: "P-256",
}
_PKH_PREFIX = {
    Curve.ED25519: bytes([6, 161, 159]),
    Curve.SECP256K1: bytes([6, 161, 161]),
    Curve.P256: bytes([6, 161, 164]),
}
_PK_PREFIX = {
    Curve.ED25519: bytes([13, 15, 37, 217]),
    Curve.SECP256K1: bytes([3, 254, 226, 86]),
    Curve.P256: bytes([3, 178, 139, 127]),
}
_SIG_PREFIX = {
    Curve.ED25519: bytes([9, 245, 205, 134, 18]),
    Curve.SECP256K1: bytes([13, 115, 101, 19, 63]),
    Curve.P256: bytes([54, 240, 44, 52]),
}


def _b58encode(data: bytes) -> str:
    n = int.from_bytes(data, "big")
    out = []
    while n:
        n, rem = divmod(n, 58)
        out.append(_ALPHABET[rem])
    zeros = len(data) - len(data.lstrip(b"\x00"))
    return "1" * zeros + "".join(reversed(out))


def _b58decode(text: str) -> bytes:
    n = 0
    for char in text:
        try:
            n = n * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character: {char!r}") from None
    body = n.to_bytes((n.bit_length() + 7) // 8, "big") if n else b""
    zeros = len(text) - len(text.lstrip("1"))
    return b"\x00" * zeros + body


def _checksum(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:4]


def b58check_encode(prefix: bytes, payload: bytes) -> str:
    """Encode ``prefix + payload`` with a double-SHA256 checksum."""
    data = bytes(prefix) + bytes(payload)
    return _b58encode(data + _checksum(data))


def b58check_decode(prefix: bytes, text: str) -> bytes:
    """Decode base58check text, verify checksum and prefix, return the payload."""
    raw = _b58decode(text)
    if len(raw) < 4:
        raise ValueError("base58check data too short")
    data, check = raw[:-4], raw[-4:]
    if _checksum(data) != check:
        raise ValueError("invalid base58check checksum")
    if not data.startswith(bytes(prefix)):
        raise ValueError("unexpected base58check prefix")
    return data[len(prefix):]


def parse_chain_id(text: str) -> bytes:
    """Decode a ``Net...`` chain identifier into its four bytes."""
    payload = b58check_decode(_CHAIN_ID_PREFIX, text)
    if len(payload) != 4:
        raise ValueError(f"invalid chain id length: {len(payload)}")
    return payload


def format_chain_id(chain_id: bytes) -> str:
    """Encode four chain-id bytes as a ``Net...`` string."""
    if len(chain_id) != 4:
        raise ValueError(f"invalid chain id length: {len(chain_id)}")
    return b58check_encode(_CHAIN_ID_PREFIX, chain_id)


def _blake2b(data: bytes, size: int) -> bytes:
    return hashlib.blake2b(data, digest_size=size).digest()


@dataclass(frozen=True)
class PublicKeyHash:
    """A 20-byte public key hash tagged with its curve."""

    curve: Curve
    digest: bytes

    def __post_init__(self) -> None:
        if len(self.digest) != 20:
            raise ValueError(f"invalid public key hash length: {len(self.digest)}")

    def to_bytes(self) -> bytes:
        """Binary form: curve tag byte followed by the digest."""
        return bytes([self.curve.tag]) + self.digest

    def __str__(self) -> str:
        return b58check_encode(_PKH_PREFIX[self.curve], self.digest)


@dataclass(frozen=True)
class Ed25519PublicKey:
    key: bytes

    def __post_init__(self) -> None:
        if len(self.key) != 32:
            raise ValueError(f"invalid public key length: {len(self.key)}")

    def hash(self) -> PublicKeyHash:
        return PublicKeyHash(Curve.ED25519, _blake2b(self.key, 20))

    def __str__(self) -> str:
        return b58check_encode(_PK_PREFIX[Curve.ED25519], self.key)


def _ec_curve(curve: Curve) -> ec.EllipticCurve:
    if curve is Curve.SECP256K1:
        return ec.SECP256K1()
    if curve is Curve.P256:
        return ec.SECP256R1()
    raise ValueError(f"not an ECDSA curve: {curve.curve_name}")


@dataclass(frozen=True)
class ECDSAPublicKey:
    curve: Curve
    x: int
    y: int

    def __post_init__(self) -> None:
        try:
            ec.EllipticCurvePublicNumbers(self.x, self.y, _ec_curve(self.curve)).public_key()
        except ValueError:
            raise ValueError(f"point is not on {self.curve.curve_name}") from None

    def _compressed(self) -> bytes:
        return bytes([2 | (self.y & 1)]) + self.x.to_bytes(32, "big")

    def hash(self) -> PublicKeyHash:
        return PublicKeyHash(self.curve, _blake2b(self._compressed(), 20))

    def __str__(self) -> str:
        return b58check_encode(_PK_PREFIX[self.curve], self._compressed())


@dataclass(frozen=True)
class Ed25519Signature:
    signature: bytes

    def __post_init__(self) -> None:
        if len(self.signature) != 64:
            raise ValueError(f"invalid signature length: {len(self.signature)}")

    def __str__(self) -> str:
        return b58check_encode(_SIG_PREFIX[Curve.ED25519], self.signature)


@dataclass(frozen=True)
class ECDSASignature:
    r: int
    s: int
    curve: Curve

    def to_bytes(self) -> bytes:
        return self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big")

    def __str__(self) -> str:
        return b58check_encode(_SIG_PREFIX[self.curve], self.to_bytes())


class Ed25519PrivateKey:
    """An Ed25519 key that signs the BLAKE2b-256 digest of a message."""

    def __init__(self, key: bytes) -> None:
        if len(key) not in (32, 64):
            raise ValueError(f"invalid private key length: {len(key)}")
        self._key = ed25519.Ed25519PrivateKey.from_private_bytes(bytes(key[:32]))

    def public_key(self) -> Ed25519PublicKey:
        raw = self._key.public_key().public_bytes(
            serialization.Encoding.Raw, serialization.PublicFormat.Raw
        )
        return Ed25519PublicKey(raw)

    def sign(self, message: bytes) -> Ed25519Signature:
        return Ed25519Signature(self._key.sign(_blake2b(message, 32)))