"""
Error taxonomy for textcrypt.

Every failure the core can produce is a TextCryptError. Each class also
derives from the closest builtin, so callers that only know about
ValueError / OSError / RuntimeError still catch them.
"""


class TextCryptError(Exception):
    """Base class for all textcrypt errors."""


class SourceError(TextCryptError, OSError):
    """An input or key file could not be read."""


class KeyMaterialError(TextCryptError, ValueError):
    """Key bytes are too short or do not describe a valid key."""


class EncodingError(TextCryptError, ValueError):
    """Text is not valid base64, or plaintext is not valid UTF-8."""


class VerificationError(TextCryptError, ValueError):
    """Signature bytes are structurally invalid (wrong length)."""


class CryptoError(TextCryptError, RuntimeError):
    """Authenticated decryption failed: tampered data or wrong key."""


class ConfigError(TextCryptError, ValueError):
    """Unsupported format token or invalid option."""
