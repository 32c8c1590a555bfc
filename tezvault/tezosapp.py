"""Client for the Tezos wallet and baking applications on a Ledger device."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from tezvault.apdu import APDUCommand, APDUResponse
from tezvault.bip32 import HARDENED, BIP32Path
from tezvault.keys import (
    Curve,
    ECDSAPublicKey,
    ECDSASignature,
    Ed25519PublicKey,
    Ed25519Signature,
)
from tezvault.ledger import LedgerApp
from tezvault.tezos_errors import CLA_TEZOS, ERR_OK, Instruction, TezosError

APP_TEZOS = 0
APP_TEZBAKE = 1

_TAG_COMPRESSED = 2
_TAG_UNCOMPRESSED = 4

# fragmentation is handled by the app itself and varies between apps
MAX_APDU_SIZE = 230
_P1_NEXT = 0x01
_P1_LAST = 0x80


class DerivationType(IntEnum):
    """Key derivation method; it determines the curve."""

    ED25519 = 0
    SECP256K1 = 1
    SECP256R1 = 2
    BIP32_ED25519 = 3
    P256 = 2

    def __str__(self) -> str:
        return _DERIVATION_NAMES[self]


_DERIVATION_NAMES = {
    DerivationType.ED25519: "ed25519",
    DerivationType.SECP256K1: "secp256k1",
    DerivationType.SECP256R1: "P-256",
    DerivationType.BIP32_ED25519: "bip32-ed25519",
}

_DERIVATION_BY_NAME = {
    "ed25519": DerivationType.ED25519,
    "secp256k1": DerivationType.SECP256K1,
    "p-256": DerivationType.SECP256R1,
    "secp256r1": DerivationType.SECP256R1,
    "bip25519": DerivationType.BIP32_ED25519,
    "bip32-ed25519": DerivationType.BIP32_ED25519,
}

_ED_DERIVATIONS = (DerivationType.ED25519, DerivationType.BIP32_ED25519)


def derivation_type_from_string(name: str) -> DerivationType:
    """Return the derivation type for a name such as ``ed25519`` or ``P-256``."""
    try:
        return _DERIVATION_BY_NAME[name.lower()]
    except KeyError:
        raise ValueError(f"unknown key derivation type: {name}") from None


def _ecdsa_curve(derivation: DerivationType) -> Curve:
    return Curve.SECP256K1 if derivation == DerivationType.SECP256K1 else Curve.P256


@dataclass(frozen=True)
class TezosVersion:
    """Version of the running Tezos application."""

    app_class: int
    major: int
    minor: int
    patch: int
    git: str = ""

    def __str__(self) -> str:
        cls = {APP_TEZOS: "Tezos", APP_TEZBAKE: "TezBake"}.get(self.app_class, "Unknown")
        return f"{cls} {self.major}.{self.minor}.{self.patch} {self.git}"


@dataclass(frozen=True)
class HWM:
    """High water marks of the main and test chains, with the chain id."""

    chain_id: bytes = b"\x00" * 4
    main: int = 0
    test: int = 0

    def __post_init__(self) -> None:
        if len(self.chain_id) != 4:
            raise ValueError(f"invalid chain id length: {len(self.chain_id)}")


def _check_path(path: BIP32Path) -> None:
    if any(not component & HARDENED for component in path):
        raise ValueError("only hardened derivation supported")


def _parse_public_key(data: bytes, derivation: DerivationType):
    if len(data) < 2:
        raise ValueError("public key reply is too short")
    length = data[0]
    comp = data[1]
    if length > len(data) - 1:
        raise ValueError("invalid public key reply length")
    key = bytes(data[2 : length + 1])

    if derivation in _ED_DERIVATIONS:
        if comp != _TAG_COMPRESSED:
            raise ValueError(f"invalid compression tag: {comp}")
        if len(key) != 32:
            raise ValueError(f"invalid public key length: {len(key)}")
        return Ed25519PublicKey(key)
    if derivation in (DerivationType.SECP256K1, DerivationType.SECP256R1):
        if comp != _TAG_UNCOMPRESSED:
            raise ValueError(f"invalid compression tag: {comp}")
        if len(key) != 64:
            raise ValueError(f"invalid public key length: {len(key)}")
        return ECDSAPublicKey(
            _ecdsa_curve(derivation),
            int.from_bytes(key[:32], "big"),
            int.from_bytes(key[32:], "big"),
        )
    raise ValueError(f"invalid derivation type: {int(derivation)}")


def _der_length(data: bytes, pos: int) -> tuple[int, int]:
    first = data[pos]
    pos += 1
    if first < 0x80:
        return first, pos
    count = first & 0x7F
    if count == 0 or count > 4 or pos + count > len(data):
        raise ValueError("asn1: invalid length")
    return int.from_bytes(data[pos : pos + count], "big"), pos + count


def _der_integer(data: bytes, pos: int, end: int) -> tuple[int, int]:
    if data[pos] != 0x02:
        raise ValueError("asn1: expected INTEGER")
    length, pos = _der_length(data, pos + 1)
    if length == 0 or pos + length > end:
        raise ValueError("asn1: invalid INTEGER")
    return int.from_bytes(data[pos : pos + length], "big", signed=True), pos + length


def _parse_der_signature(data: bytes) -> tuple[int, int]:
    try:
        if data[0] != 0x30:
            raise ValueError("asn1: expected SEQUENCE")
        length, pos = _der_length(data, 1)
        end = pos + length
        if end > len(data):
            raise ValueError("asn1: truncated SEQUENCE")
        r, pos = _der_integer(data, pos, end)
        s, _ = _der_integer(data, pos, end)
    except IndexError:
        raise ValueError("asn1: truncated data") from None
    return r, s


class TezosApp(LedgerApp):
    """Commands of the Tezos wallet and baking applications."""

    def _checked(self, request: APDUCommand) -> APDUResponse:
        res = self.exchange(request)
        if res.sw != ERR_OK:
            raise TezosError(res.sw)
        return res

    def _simple(self, ins: Instruction) -> APDUResponse:
        return self._checked(APDUCommand(cla=CLA_TEZOS, ins=ins, force_lc=True))

    def get_version(self) -> TezosVersion:
        """Return the application class, version and git commit."""
        res = self._simple(Instruction.VERSION)
        if len(res.data) < 4:
            raise ValueError("invalid version length")
        app_class, major, minor, patch = res.data[:4]
        git = self._simple(Instruction.GIT).data
        return TezosVersion(
            app_class=app_class,
            major=major,
            minor=minor,
            patch=patch,
            git=git.decode("utf-8", "replace").rstrip("\x00"),
        )

    def get_public_key(
        self, derivation: DerivationType, path: BIP32Path, prompt: bool = False
    ):
        """Return the public key derived at ``path``, optionally confirming on screen."""
        _check_path(path)
        ins = Instruction.PROMPT_PUBLIC_KEY if prompt else Instruction.GET_PUBLIC_KEY
        res = self._checked(
            APDUCommand(cla=CLA_TEZOS, ins=ins, p2=int(derivation), data=path.to_bytes())
        )
        return _parse_public_key(res.data, derivation)

    def sign(self, derivation: DerivationType, path: BIP32Path, data: bytes):
        """Sign ``data`` with the key at ``path``, sending it in fragments."""
        data = bytes(data)
        res = self._checked(
            APDUCommand(
                cla=CLA_TEZOS,
                ins=Instruction.SIGN,
                p2=int(derivation),
                data=path.to_bytes(),
            )
        )
        for offset in range(0, len(data), MAX_APDU_SIZE):
            chunk = data[offset : offset + MAX_APDU_SIZE]
            p1 = _P1_NEXT
            if offset + len(chunk) == len(data):
                p1 |= _P1_LAST
            res = self._checked(
                APDUCommand(
                    cla=CLA_TEZOS,
                    ins=Instruction.SIGN,
                    p1=p1,
                    p2=int(derivation),
                    data=chunk,
                )
            )

        reply = bytearray(res.data)
        if derivation in _ED_DERIVATIONS:
            if len(reply) != 64:
                raise ValueError(f"invalid signature length: {len(reply)}")
            return Ed25519Signature(bytes(reply))
        if derivation in (DerivationType.SECP256K1, DerivationType.SECP256R1):
            if reply:
                # the parity flag in the first byte interferes with ASN.1
                reply[0] &= 0xFE
            r, s = _parse_der_signature(bytes(reply))
            return ECDSASignature(r=r, s=s, curve=_ecdsa_curve(derivation))
        raise ValueError(f"invalid derivation type: {int(derivation)}")

    def setup_baking(
        self, hwm: HWM | None, derivation: DerivationType, path: BIP32Path
    ):
        """Authorise the key at ``path`` for baking and set the high water marks."""
        if hwm is None:
            hwm = HWM()
        _check_path(path)
        payload = (
            bytes(hwm.chain_id)
            + hwm.main.to_bytes(4, "big")
            + hwm.test.to_bytes(4, "big")
            + path.to_bytes()
        )
        res = self._checked(
            APDUCommand(
                cla=CLA_TEZOS, ins=Instruction.SETUP, p2=int(derivation), data=payload
            )
        )
        return _parse_public_key(res.data, derivation)

    def deauthorize_baking(self) -> None:
        """Remove the baking authorisation."""
        self._simple(Instruction.DEAUTHORIZE)

    def get_high_watermarks(self) -> HWM:
        """Return both high water marks and the chain id."""
        data = self._simple(Instruction.QUERY_ALL_HWM).data
        if len(data) < 12:
            raise ValueError(f"invalid reply length: {len(data)}")
        return HWM(
            chain_id=bytes(data[8:12]),
            main=int.from_bytes(data[0:4], "big"),
            test=int.from_bytes(data[4:8], "big"),
        )

    def get_high_watermark(self) -> int:
        """Return the main chain high water mark."""
        data = self._simple(Instruction.QUERY_MAIN_HWM).data
        if len(data) < 4:
            raise ValueError(f"invalid reply length: {len(data)}")
        return int.from_bytes(data[:4], "big")

    def set_high_watermark(self, hwm: int) -> None:
        """Reset the main chain high water mark."""
        self._checked(
            APDUCommand(cla=CLA_TEZOS, ins=Instruction.RESET, data=hwm.to_bytes(4, "big"))
        )

    def close(self) -> None:
        self.exchanger.close()