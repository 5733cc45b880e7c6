"""
Asymmetric signatures: Ed25519
==============================
EdDSA over Curve25519 (RFC 8032). The secret key signs, the public key
verifies, and the public key reveals nothing about the secret.

Secret key: 32-byte seed (first 32 bytes of the .sk file)
Public key: 32-byte compressed Edwards point (first 32 bytes of the .pk file)
Signature:  64 bytes (R || S)

Key files are raw bytes, not PEM: `generate()` returns [seed, public]
and the caller writes them as ed25519.sk and ed25519.pk.

Public keys are decoded as curve points before use, so a file holding 32
bytes that are not a point on the curve is rejected at load time rather
than failing every verification later. Decoding is stricter than plain
point decompression: a y coordinate encoded as a value >= p (a
non-canonical encoding) is refused as well.

Dependencies: cryptography >= 41.0
"""

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from ..errors import KeyMaterialError, VerificationError
from ..keys import read_key_file, take

logger = logging.getLogger(__name__)

KEY_SIZE       = 32
SIGNATURE_SIZE = 64

# Edwards25519: -x^2 + y^2 = 1 + d x^2 y^2  over GF(2^255 - 19)
_P = 2 ** 255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P
_SQRT_M1 = pow(2, (_P - 1) // 4, _P)


def is_valid_point(data: bytes) -> bool:
    """
    Decode a 32-byte compressed point per RFC 8032 section 5.1.3 and
    report whether it lies on the curve.
    """
    if len(data) != KEY_SIZE:
        return False
    y = int.from_bytes(data, "little")
    sign = y >> 255
    y &= (1 << 255) - 1
    if y >= _P:
        return False

    u = (y * y - 1) % _P
    v = (_D * y * y + 1) % _P
    x2 = u * pow(v, _P - 2, _P) % _P

    x = pow(x2, (_P + 3) // 8, _P)
    if (x * x - x2) % _P != 0:
        x = x * _SQRT_M1 % _P
        if (x * x - x2) % _P != 0:
            return False
    if x == 0 and sign:
        return False
    return True


class Ed25519Signer:
    """Ed25519 signing with a 32-byte seed."""

    KEY_SIZE       = KEY_SIZE
    SIGNATURE_SIZE = SIGNATURE_SIZE

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key

    @classmethod
    def try_new(cls, data: bytes) -> "Ed25519Signer":
        seed = take(data, 0, cls.KEY_SIZE, "Ed25519 secret key")
        return cls(Ed25519PrivateKey.from_private_bytes(seed))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Ed25519Signer":
        return cls.try_new(read_key_file(path))

    @staticmethod
    def generate(rng: Optional[Callable[[int], bytes]] = None) -> List[bytes]:
        """
        Return [secret_seed, public_key], 32 bytes each.
        rng(n) must return n cryptographically secure random bytes.
        """
        if rng is None:
            rng = os.urandom
        seed = rng(KEY_SIZE)
        if len(seed) != KEY_SIZE:
            raise KeyMaterialError(f"Random source returned {len(seed)} bytes, wanted {KEY_SIZE}.")
        signer = Ed25519Signer.try_new(seed)
        logger.info("Generated Ed25519 keypair")
        return [seed, signer.export_public_bytes()]

    def export_private_bytes(self) -> bytes:
        return self._private_key.private_bytes(
            serialization.Encoding.Raw,
            serialization.PrivateFormat.Raw,
            serialization.NoEncryption()
        )

    def export_public_bytes(self) -> bytes:
        return self._private_key.public_key().public_bytes(
            serialization.Encoding.Raw,
            serialization.PublicFormat.Raw
        )

    def verifier(self) -> "Ed25519Verifier":
        return Ed25519Verifier(self._private_key.public_key())

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message)


class Ed25519Verifier:
    """Ed25519 verification with a 32-byte public key."""

    KEY_SIZE       = KEY_SIZE
    SIGNATURE_SIZE = SIGNATURE_SIZE

    def __init__(self, public_key: Ed25519PublicKey):
        self._public_key = public_key

    @classmethod
    def try_new(cls, data: bytes) -> "Ed25519Verifier":
        raw = take(data, 0, cls.KEY_SIZE, "Ed25519 public key")
        if not is_valid_point(raw):
            raise KeyMaterialError("Ed25519 public key is not a valid curve point.")
        try:
            public_key = Ed25519PublicKey.from_public_bytes(raw)
        except ValueError as exc:
            raise KeyMaterialError(f"Invalid Ed25519 public key: {exc}") from exc
        return cls(public_key)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Ed25519Verifier":
        return cls.try_new(read_key_file(path))

    def export_public_bytes(self) -> bytes:
        return self._public_key.public_bytes(
            serialization.Encoding.Raw,
            serialization.PublicFormat.Raw
        )

    def verify(self, message: bytes, signature: bytes) -> bool:
        """
        Raises VerificationError if the signature is not 64 bytes.
        Otherwise returns whether it is valid for `message`.
        """
        if len(signature) != self.SIGNATURE_SIZE:
            raise VerificationError(
                f"Ed25519 signature must be {self.SIGNATURE_SIZE} bytes, "
                f"got {len(signature)}."
            )
        try:
            self._public_key.verify(bytes(signature), message)
            return True
        except InvalidSignature:
            return False
