"""
Keyed hash: BLAKE3
==================
BLAKE3 in keyed mode used as a message authentication code.

The same 32-byte key signs and verifies. Output is a 32-byte digest over
the whole message; signing is deterministic, so the same key and message
always give the same signature.

Key:       256-bit (32 bytes), first 32 bytes of the key file
Signature: 256-bit (32 bytes)

Generated keys are 32-character printable passwords (all character
classes), so each key byte carries less than 8 bits of entropy. Key
files produced this way stay readable as text.

Dependencies: blake3
"""

import hmac
import logging
from pathlib import Path
from typing import List, Union

import blake3

from ..errors import KeyMaterialError
from ..genpass import process_genpass
from ..keys import read_key_file, take

logger = logging.getLogger(__name__)


class Blake3Mac:
    """BLAKE3 keyed-hash signing and verification."""

    KEY_SIZE       = 32
    SIGNATURE_SIZE = 32

    def __init__(self, key: bytes):
        if len(key) != self.KEY_SIZE:
            raise KeyMaterialError(f"BLAKE3 key must be {self.KEY_SIZE} bytes.")
        self._key = bytes(key)

    @classmethod
    def try_new(cls, data: bytes) -> "Blake3Mac":
        return cls(take(data, 0, cls.KEY_SIZE, "BLAKE3 key"))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Blake3Mac":
        return cls.try_new(read_key_file(path))

    @staticmethod
    def generate() -> List[bytes]:
        password = process_genpass(Blake3Mac.KEY_SIZE, True, True, True, True)
        logger.info("Generated BLAKE3 key")
        return [password.encode("ascii")]

    def sign(self, message: bytes) -> bytes:
        return blake3.blake3(message, key=self._key).digest()

    def verify(self, message: bytes, signature: bytes) -> bool:
        """
        Recompute and compare. A signature of the wrong length simply
        does not match.
        """
        return hmac.compare_digest(self.sign(message), bytes(signature))
