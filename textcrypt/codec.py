"""
Binary codec
============
Text representation of signatures and ciphertexts.

Everything at the dispatch boundary uses URL-safe base64 without padding
("-_" alphabet, no trailing "="). The standard padded alphabet is only
offered by the base64 utility command.

Decoding is strict: characters outside the alphabet, padding in the
unpadded format, impossible lengths and non-zero trailing bits are all
rejected with EncodingError, so every byte string has exactly one
accepted text form.
"""

import base64
import binascii
import re
from typing import Union

from .errors import EncodingError
from .formats import Base64Format

_URLSAFE_RE  = re.compile(rb"\A[A-Za-z0-9_-]*\Z")
_STANDARD_RE = re.compile(rb"\A[A-Za-z0-9+/]*={0,2}\Z")


def encode(data: bytes, fmt: Base64Format = Base64Format.URLSAFE) -> str:
    if fmt is Base64Format.STANDARD:
        return base64.b64encode(data).decode("ascii")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(text: Union[str, bytes], fmt: Base64Format = Base64Format.URLSAFE) -> bytes:
    """Decode base64 text. Leading/trailing whitespace is ignored."""
    if isinstance(text, str):
        try:
            text = text.encode("ascii")
        except UnicodeEncodeError:
            raise EncodingError("Invalid base64: non-ASCII input") from None
    text = text.strip()

    if fmt is Base64Format.STANDARD:
        if not _STANDARD_RE.match(text) or len(text) % 4:
            raise EncodingError("Invalid base64 (standard alphabet, padded)")
        padded = text
    else:
        if not _URLSAFE_RE.match(text) or len(text) % 4 == 1:
            raise EncodingError("Invalid base64 (URL-safe alphabet, no padding)")
        padded = text + b"=" * (-len(text) % 4)

    try:
        if fmt is Base64Format.STANDARD:
            data = base64.b64decode(padded, validate=True)
        else:
            data = base64.urlsafe_b64decode(padded)
    except binascii.Error as exc:
        raise EncodingError(f"Invalid base64: {exc}") from exc

    # unused low bits in the last character must be zero
    if encode(data, fmt).encode("ascii") != text:
        raise EncodingError("Invalid base64: non-canonical trailing bits")
    return data
