"""
Format selectors: which signing algorithm, which base64 alphabet.
"""

from enum import Enum
from typing import Union

from .errors import ConfigError


class TextSignFormat(Enum):
    BLAKE3  = "blake3"
    ED25519 = "ed25519"

    @classmethod
    def parse(cls, token: Union[str, "TextSignFormat"]) -> "TextSignFormat":
        if isinstance(token, cls):
            return token
        try:
            return cls(token)
        except ValueError:
            raise ConfigError(f"Unsupported sign format: {token!r}") from None

    def __str__(self) -> str:
        return self.value


class Base64Format(Enum):
    STANDARD = "standard"
    URLSAFE  = "urlsafe"

    @classmethod
    def parse(cls, token: Union[str, "Base64Format"]) -> "Base64Format":
        if isinstance(token, cls):
            return token
        try:
            return cls(token)
        except ValueError:
            raise ConfigError(f"Unsupported base64 format: {token!r}") from None

    def __str__(self) -> str:
        return self.value
