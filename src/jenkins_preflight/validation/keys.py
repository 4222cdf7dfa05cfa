"""Private key validation.

This module checks that deploy key material referenced by a seed job is a
single PEM encoded RSA private key whose components are consistent.
"""

import base64
import binascii
import re

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from icecream import ic

from jenkins_preflight.models import KeyCheck, KeyFailure

_PEM_BLOCK = re.compile(
    rb"-----BEGIN (?P<type>[A-Z0-9 ]+)-----\r?\n(?P<body>.*?)-----END (?P=type)-----",
    re.DOTALL,
)

# PKCS#1 and PKCS#8 envelopes
_SUPPORTED_BLOCK_TYPES = frozenset({b"RSA PRIVATE KEY", b"PRIVATE KEY"})


def _decode_pem(data: bytes) -> tuple[bytes, bytes] | None:
    """Decode the first PEM block found in data.

    Header lines such as ``Proc-Type`` are skipped.

    Args:
        data: Raw bytes that should contain a PEM block.

    Returns:
        A (block type, DER payload) tuple, or None when no decodable block exists.

    """
    match = _PEM_BLOCK.search(data)
    if match is None:
        return None

    lines = [line.strip() for line in match.group("body").splitlines()]
    payload = b"".join(line for line in lines if line and b":" not in line)
    try:
        der = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
    if not der:
        return None

    return match.group("type"), der


def _check_rsa_consistency(key: rsa.RSAPrivateKey) -> str | None:
    """Verify the algebraic relations between the RSA key components.

    Args:
        key: A parsed RSA private key.

    Returns:
        A description of the first broken relation, or None if the key is consistent.

    """
    numbers = key.private_numbers()
    n = numbers.public_numbers.n
    e = numbers.public_numbers.e
    p, q, d = numbers.p, numbers.q, numbers.d

    if e < 2:
        return "public exponent too small"
    if p <= 1 or q <= 1:
        return "invalid prime"
    if p * q != n:
        return "invalid modulus"
    for prime in (p, q):
        if (d * e) % (prime - 1) != 1:
            return "invalid exponents"
    if numbers.dmp1 != d % (p - 1) or numbers.dmq1 != d % (q - 1):
        return "invalid CRT exponents"
    if (numbers.iqmp * q) % p != 1:
        return "invalid CRT coefficient"

    return None


def validate_private_key(data: bytes) -> KeyCheck:
    """Validate PEM encoded RSA private key material.

    The function never raises for malformed input; every problem is
    reported through the returned KeyCheck.

    Args:
        data: The key material, expected to hold one PEM block.

    Returns:
        KeyCheck with failure set to STRUCTURAL when the key cannot be
        decoded or parsed, MATH when its components are inconsistent,
        and None when the key is valid.

    """
    decoded = _decode_pem(data)
    if decoded is None:
        return KeyCheck(KeyFailure.STRUCTURAL, "undecodable PEM")

    block_type, der = decoded
    ic(block_type)
    if block_type not in _SUPPORTED_BLOCK_TYPES:
        return KeyCheck(KeyFailure.STRUCTURAL, f"unsupported PEM block type '{block_type.decode()}'")

    try:
        key = serialization.load_der_private_key(der, password=None, unsafe_skip_rsa_key_validation=True)
    except (ValueError, TypeError, UnsupportedAlgorithm) as err:
        return KeyCheck(KeyFailure.STRUCTURAL, f"failed to parse private key: {err}")

    if not isinstance(key, rsa.RSAPrivateKey):
        return KeyCheck(KeyFailure.STRUCTURAL, "private key is not an RSA key")

    reason = _check_rsa_consistency(key)
    if reason is not None:
        return KeyCheck(KeyFailure.MATH, reason)

    return KeyCheck(None)
