import hashlib

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519

from tezvault.keys import (
    Curve,
    ECDSAPublicKey,
    ECDSASignature,
    Ed25519PrivateKey,
    Ed25519PublicKey,
    PublicKeyHash,
    b58check_decode,
    b58check_encode,
    format_chain_id,
    parse_chain_id,
)

SEED = bytes(range(32))


def test_b58check_round_trip():
    payload = b"\x00\x00payload bytes"
    text = b58check_encode(b"\x01\x02", payload)
    assert text.startswith("1") is False or text
    assert b58check_decode(b"\x01\x02", text) == payload


def test_b58check_preserves_leading_zero_bytes():
    text = b58check_encode(b"", b"\x00\x00\x07")
    assert text.startswith("11")
    assert b58check_decode(b"", text) == b"\x00\x00\x07"


def test_b58check_bad_checksum():
    text = b58check_encode(b"\x01", b"hello")
    corrupted = text[:-1] + ("2" if text[-1] != "2" else "3")
    with pytest.raises(ValueError):
        b58check_decode(b"\x01", corrupted)


def test_b58check_wrong_prefix():
    text = b58check_encode(b"\x01", b"hello")
    with pytest.raises(ValueError, match="prefix"):
        b58check_decode(b"\x02", text)


def test_b58check_invalid_character():
    with pytest.raises(ValueError):
        b58check_decode(b"", "0OIl")


def test_mainnet_chain_id():
    assert parse_chain_id("NetXdQprcVkpaWU") == bytes.fromhex("7a06a770")
    assert format_chain_id(bytes.fromhex("7a06a770")) == "NetXdQprcVkpaWU"


def test_chain_id_length_checked():
    with pytest.raises(ValueError):
        format_chain_id(b"\x01\x02\x03")


def test_ed25519_hash():
    pub = Ed25519PrivateKey(SEED).public_key()
    pkh = pub.hash()
    assert pkh.curve is Curve.ED25519
    assert pkh.to_bytes() == b"\x00" + pkh.digest
    assert str(pkh).startswith("tz1")
    assert b58check_decode(bytes([6, 161, 159]), str(pkh)) == pkh.digest


def test_public_key_length_checked():
    with pytest.raises(ValueError):
        Ed25519PublicKey(b"\x01" * 31)
    with pytest.raises(ValueError):
        PublicKeyHash(Curve.ED25519, b"\x00" * 19)


def test_sign_verifies_over_blake2b_digest():
    priv = Ed25519PrivateKey(SEED)
    sig = priv.sign(b"message")
    verifier = ed25519.Ed25519PublicKey.from_public_bytes(priv.public_key().key)
    digest = hashlib.blake2b(b"message", digest_size=32).digest()
    verifier.verify(sig.signature, digest)
    with pytest.raises(Exception):
        verifier.verify(sig.signature, b"message")
    assert str(sig).startswith("edsig")


def test_ecdsa_public_key_hash_tags():
    for curve, ec_curve in ((Curve.SECP256K1, ec.SECP256K1()), (Curve.P256, ec.SECP256R1())):
        numbers = ec.generate_private_key(ec_curve).public_key().public_numbers()
        pub = ECDSAPublicKey(curve, numbers.x, numbers.y)
        pkh = pub.hash()
        assert pkh.to_bytes()[0] == curve.tag
        assert len(pkh.digest) == 20


def test_ecdsa_point_not_on_curve():
    with pytest.raises(ValueError, match="point is not on P-256"):
        ECDSAPublicKey(Curve.P256, 1, 1)


def test_ecdsa_signature_bytes():
    sig = ECDSASignature(r=5, s=7, curve=Curve.SECP256K1)
    raw = sig.to_bytes()
    assert int.from_bytes(raw[:32], "big") == 5
    assert int.from_bytes(raw[32:], "big") == 7
    assert str(sig).startswith("spsig1")