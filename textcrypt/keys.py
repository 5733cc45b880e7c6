"""
Key loader helpers.

Key files are raw binary with no header. Engines read the whole file and
cut the pieces they need with take(), which refuses short input instead
of returning a truncated slice.
"""

import logging
from pathlib import Path
from typing import Union

from .errors import KeyMaterialError
from .source import read_file

logger = logging.getLogger(__name__)


def read_key_file(path: Union[str, Path]) -> bytes:
    data = read_file(path)
    logger.info(f"Loaded key file {path} ({len(data)}B)")
    return data


def take(data: bytes, start: int, end: int, what: str = "key") -> bytes:
    """
    Return data[start:end], or raise KeyMaterialError if data is shorter
    than `end`. Bytes past `end` are ignored.
    """
    if len(data) < end:
        raise KeyMaterialError(
            f"{what} needs bytes [{start}, {end}), got only {len(data)} bytes."
        )
    return bytes(data[start:end])
