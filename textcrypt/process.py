"""
Dispatch layer.

Each entry point takes an input reference ("-" for stdin), a key file
path and, for signing, a format token. Formats are resolved first, so an
unknown token fails with ConfigError before any file is opened. Results
are returned as text; the CLI prints them.
"""

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from . import codec, config
from .capabilities import KeyGenerator, KeyLoader, TextSign, TextVerify
from .engines.blake3_mac import Blake3Mac
from .engines.chacha_aead import ChaCha20Poly1305Engine
from .engines.ed25519_sig import Ed25519Signer, Ed25519Verifier
from .errors import EncodingError, KeyMaterialError, SourceError
from .formats import Base64Format, TextSignFormat
from .source import read_input

logger = logging.getLogger(__name__)

FormatLike = Union[str, TextSignFormat]
PathLike   = Union[str, Path]


def process_text_sign(input: PathLike, key: PathLike, format: FormatLike,
                      stdin: Optional[BinaryIO] = None) -> str:
    fmt = TextSignFormat.parse(format)
    logger.info(f"Signing with {fmt}")
    loader: KeyLoader[TextSign]
    if fmt is TextSignFormat.BLAKE3:
        loader = Blake3Mac
    elif fmt is TextSignFormat.ED25519:
        loader = Ed25519Signer
    else:
        raise AssertionError(f"unhandled format {fmt}")
    signature = loader.load(key).sign(read_input(input, stdin))
    return codec.encode(signature)


def process_text_verify(input: PathLike, key: PathLike, format: FormatLike,
                        sig: str, stdin: Optional[BinaryIO] = None) -> bool:
    fmt = TextSignFormat.parse(format)
    signature = codec.decode(sig)
    logger.info(f"Verifying {len(signature)}B signature with {fmt}")
    loader: KeyLoader[TextVerify]
    if fmt is TextSignFormat.BLAKE3:
        loader = Blake3Mac
    elif fmt is TextSignFormat.ED25519:
        loader = Ed25519Verifier
    else:
        raise AssertionError(f"unhandled format {fmt}")
    return loader.load(key).verify(read_input(input, stdin), signature)


def process_generate_key(format: FormatLike) -> List[bytes]:
    fmt = TextSignFormat.parse(format)
    generator: KeyGenerator
    if fmt is TextSignFormat.BLAKE3:
        generator = Blake3Mac
    elif fmt is TextSignFormat.ED25519:
        generator = Ed25519Signer
    else:
        raise AssertionError(f"unhandled format {fmt}")
    keys = generator.generate()
    logger.info(f"Generated {len(keys)} key blob(s) for {fmt}")
    return keys


def write_generated_keys(format: FormatLike, keys: List[bytes],
                         output: PathLike) -> List[Path]:
    """
    Persist the blobs from process_generate_key() into directory `output`:
    blake3.txt for BLAKE3, ed25519.sk then ed25519.pk for Ed25519.
    """
    fmt = TextSignFormat.parse(format)
    if fmt is TextSignFormat.BLAKE3:
        names = [config.BLAKE3_KEY_FILE]
    elif fmt is TextSignFormat.ED25519:
        names = [config.ED25519_SK_FILE, config.ED25519_PK_FILE]
    else:
        raise AssertionError(f"unhandled format {fmt}")
    if len(keys) != len(names):
        raise KeyMaterialError(f"{fmt} expects {len(names)} key blobs, got {len(keys)}.")

    written = []
    for name, blob in zip(names, keys):
        path = Path(output) / name
        try:
            path.write_bytes(blob)
        except OSError as exc:
            raise SourceError(f"Cannot write {path}: {exc.strerror or exc}") from exc
        logger.info(f"Wrote {path}")
        written.append(path)
    return written


def process_text_encrypt(input: PathLike, key: PathLike,
                         stdin: Optional[BinaryIO] = None) -> str:
    engine = ChaCha20Poly1305Engine.load(key)
    return engine.encrypt(read_input(input, stdin))


def process_text_decrypt(input: PathLike, key: PathLike,
                         stdin: Optional[BinaryIO] = None) -> str:
    engine = ChaCha20Poly1305Engine.load(key)
    plaintext = engine.decrypt(read_input(input, stdin))
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError("Decrypted plaintext is not valid UTF-8.") from exc


# -- base64 utility -------------------------------------------------------------

def process_encode(input: PathLike, format: Union[str, Base64Format] = config.DEFAULT_BASE64_FORMAT,
                   stdin: Optional[BinaryIO] = None) -> str:
    fmt = Base64Format.parse(format)
    return codec.encode(read_input(input, stdin), fmt)


def process_decode(input: PathLike, format: Union[str, Base64Format] = config.DEFAULT_BASE64_FORMAT,
                   stdin: Optional[BinaryIO] = None) -> bytes:
    fmt = Base64Format.parse(format)
    return codec.decode(read_input(input, stdin), fmt)
