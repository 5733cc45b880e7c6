"""
textcrypt
=========
Text signing and authenticated encryption behind one dispatch layer.

Engines:
    blake3    KEYED HASH  — BLAKE3 keyed MAC (32-byte key, 32-byte tag)
    ed25519   SIGNATURE   — Ed25519 (32-byte seed / public key, 64-byte signature)
    chacha    AEAD        — ChaCha20-Poly1305 (44-byte nonce||key file)

Every result crossing the dispatch boundary is URL-safe base64 without
padding.

License: Apache 2.0
"""

__version__ = "1.0.0"

from .engines.blake3_mac   import Blake3Mac
from .engines.ed25519_sig  import Ed25519Signer, Ed25519Verifier
from .engines.chacha_aead  import ChaCha20Poly1305Engine
from .errors               import (TextCryptError, SourceError, KeyMaterialError,
                                   EncodingError, VerificationError, CryptoError,
                                   ConfigError)
from .formats              import TextSignFormat, Base64Format
from .genpass              import process_genpass
from .process              import (process_text_sign, process_text_verify,
                                   process_generate_key, write_generated_keys,
                                   process_text_encrypt, process_text_decrypt,
                                   process_encode, process_decode)

__all__ = [
    "Blake3Mac",
    "Ed25519Signer",
    "Ed25519Verifier",
    "ChaCha20Poly1305Engine",
    "TextCryptError",
    "SourceError",
    "KeyMaterialError",
    "EncodingError",
    "VerificationError",
    "CryptoError",
    "ConfigError",
    "TextSignFormat",
    "Base64Format",
    "process_genpass",
    "process_text_sign",
    "process_text_verify",
    "process_generate_key",
    "write_generated_keys",
    "process_text_encrypt",
    "process_text_decrypt",
    "process_encode",
    "process_decode",
]
