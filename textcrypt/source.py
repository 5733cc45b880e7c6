"""
Byte-source resolver.

"-" means standard input, anything else is a file path. The whole source is
read into memory; nothing downstream streams.
"""

import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .errors import SourceError

logger = logging.getLogger(__name__)

STDIN = "-"


def read_input(ref: Union[str, Path], stdin: Optional[BinaryIO] = None) -> bytes:
    """Return every byte of `ref`. `stdin` overrides sys.stdin.buffer."""
    if str(ref) == STDIN:
        stream = stdin if stdin is not None else getattr(sys.stdin, "buffer", None)
        if stream is None:
            raise SourceError("Cannot read stdin: no standard input available")
        try:
            data = stream.read()
        except (OSError, ValueError) as exc:
            raise SourceError(f"Cannot read stdin: {exc}") from exc
        logger.debug(f"Read {len(data)}B from stdin")
        return data
    return read_file(ref)


def read_file(path: Union[str, Path]) -> bytes:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise SourceError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    logger.debug(f"Read {len(data)}B from {path}")
    return data
