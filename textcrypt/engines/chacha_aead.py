"""
Authenticated encryption: ChaCha20-Poly1305
===========================================
ChaCha20 stream cipher + Poly1305 authentication tag (RFC 8439).

Key file layout (44 bytes, raw):

    nonce (12) || key (32)

The nonce comes from the key file, not from the message, so every
encryption under one key file reuses the same nonce. Existing key files
and ciphertexts depend on this layout; switching to per-message nonces
would need a new file format.

Ciphertext format: ciphertext || tag(16), as URL-safe base64 without
padding.

Dependencies: cryptography >= 41.0
"""

import logging
from pathlib import Path
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from .. import codec
from ..errors import CryptoError, KeyMaterialError
from ..keys import read_key_file, take

logger = logging.getLogger(__name__)


class ChaCha20Poly1305Engine:
    """ChaCha20-Poly1305 with a file-bound nonce."""

    NONCE_SIZE    = 12
    KEY_SIZE      = 32
    KEY_FILE_SIZE = NONCE_SIZE + KEY_SIZE
    TAG_SIZE      = 16

    def __init__(self, key: bytes, nonce: bytes):
        if len(key) != self.KEY_SIZE:
            raise KeyMaterialError(f"ChaCha20 key must be {self.KEY_SIZE} bytes.")
        if len(nonce) != self.NONCE_SIZE:
            raise KeyMaterialError(f"ChaCha20 nonce must be {self.NONCE_SIZE} bytes.")
        self._key    = bytes(key)
        self._nonce  = bytes(nonce)
        self._cipher = ChaCha20Poly1305(self._key)

    @classmethod
    def try_new(cls, data: bytes) -> "ChaCha20Poly1305Engine":
        nonce = take(data, 0, cls.NONCE_SIZE, "ChaCha20 nonce")
        key   = take(data, cls.NONCE_SIZE, cls.KEY_FILE_SIZE, "ChaCha20 key")
        return cls(key, nonce)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ChaCha20Poly1305Engine":
        return cls.try_new(read_key_file(path))

    @property
    def nonce(self) -> bytes:
        return self._nonce

    def encrypt(self, plaintext: bytes) -> str:
        """Encrypt and authenticate. Returns base64 ciphertext || tag."""
        ct = self._cipher.encrypt(self._nonce, plaintext, None)
        logger.debug(f"Encrypted {len(plaintext)}B -> {len(ct)}B")
        return codec.encode(ct)

    def decrypt(self, encoded: Union[str, bytes]) -> bytes:
        """
        Decode and decrypt. Raises EncodingError on bad base64 and
        CryptoError if the tag does not verify.
        """
        ct = codec.decode(encoded)
        if len(ct) < self.TAG_SIZE:
            raise CryptoError("Ciphertext too short to hold an authentication tag.")
        try:
            return self._cipher.decrypt(self._nonce, ct, None)
        except InvalidTag:
            raise CryptoError(
                "ChaCha20-Poly1305 decryption failed: authentication tag "
                "mismatch. Data tampered or wrong key."
            ) from None
