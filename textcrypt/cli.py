"""
textcrypt command line.

    textcrypt text sign     -k blake3.txt -i msg.txt
    textcrypt text verify   -k ed25519.pk --format ed25519 -i msg.txt -s <sig>
    textcrypt text generate --format ed25519 -o keys/
    textcrypt text encrypt  -k chacha.key < msg.txt
    textcrypt text decrypt  -k chacha.key -i msg.enc
    textcrypt genpass -l 24 --no-symbol
    textcrypt base64 encode --format urlsafe -i file.bin

Errors are printed to stderr and the exit status is 1.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__, config
from .errors import TextCryptError
from .formats import Base64Format, TextSignFormat
from .genpass import estimate_strength, process_genpass
from .process import (
    process_decode,
    process_encode,
    process_generate_key,
    process_text_decrypt,
    process_text_encrypt,
    process_text_sign,
    process_text_verify,
    write_generated_keys,
)
from .source import STDIN

logger = logging.getLogger(__name__)


def verify_file(filename: str) -> str:
    if filename == STDIN or Path(filename).exists():
        return filename
    raise argparse.ArgumentTypeError("Input file does not exist")


def verify_path(path: str) -> Path:
    p = Path(path)
    if p.is_dir():
        return p
    raise argparse.ArgumentTypeError("Path does not exist or is not a directory")


def _add_input(p: argparse.ArgumentParser) -> None:
    p.add_argument("-i", "--input", type=verify_file, default=STDIN,
                   help="Input file, '-' for stdin (default)")


def _add_key(p: argparse.ArgumentParser) -> None:
    p.add_argument("-k", "--key", type=verify_file, required=True, help="Key file")


def _add_sign_format(p: argparse.ArgumentParser) -> None:
    p.add_argument("--format", default=config.DEFAULT_SIGN_FORMAT,
                   choices=[f.value for f in TextSignFormat])


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="textcrypt",
                                 description="Sign, verify, encrypt and decrypt text.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    verbosity = ap.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0,
                           help="More logging (-v info, -vv debug)")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    sub = ap.add_subparsers(dest="cmd", required=True)

    # text
    text = sub.add_parser("text", help="Text signing and encryption")
    text_sub = text.add_subparsers(dest="action", required=True)

    p = text_sub.add_parser("sign", help="Sign a message with a private/shared key")
    _add_input(p)
    _add_key(p)
    _add_sign_format(p)

    p = text_sub.add_parser("verify", help="Verify a signed message")
    _add_input(p)
    _add_key(p)
    _add_sign_format(p)
    p.add_argument("-s", "--sig", required=True, help="Signature, URL-safe base64")

    p = text_sub.add_parser("generate", help="Generate a new key (pair)")
    _add_sign_format(p)
    p.add_argument("-o", "--output", type=verify_path, required=True,
                   help="Directory to write the key file(s) into")

    p = text_sub.add_parser("encrypt", help="Encrypt with ChaCha20-Poly1305, print base64")
    _add_input(p)
    _add_key(p)

    p = text_sub.add_parser("decrypt", help="Decrypt base64 ChaCha20-Poly1305 text")
    _add_input(p)
    _add_key(p)

    # genpass
    p = sub.add_parser("genpass", help="Generate a random password")
    p.add_argument("-l", "--length", type=int, default=config.DEFAULT_PASSWORD_LENGTH)
    p.add_argument("--no-uppercase", dest="uppercase", action="store_false")
    p.add_argument("--no-lowercase", dest="lowercase", action="store_false")
    p.add_argument("--no-number", dest="number", action="store_false")
    p.add_argument("--no-symbol", dest="symbol", action="store_false")

    # base64
    b64 = sub.add_parser("base64", help="Base64 encode/decode")
    b64_sub = b64.add_subparsers(dest="action", required=True)
    for name, help_ in (("encode", "Encode input to base64"),
                        ("decode", "Decode base64 input")):
        p = b64_sub.add_parser(name, help=help_)
        _add_input(p)
        p.add_argument("--format", default=config.DEFAULT_BASE64_FORMAT,
                       choices=[f.value for f in Base64Format])

    return ap


def _configure_logging(args: argparse.Namespace) -> None:
    if args.quiet:
        level = logging.ERROR
    elif args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=config.LOG_FORMAT, stream=sys.stderr)


def _run_text(args: argparse.Namespace) -> None:
    if args.action == "sign":
        print(process_text_sign(args.input, args.key, args.format))
    elif args.action == "verify":
        print(str(process_text_verify(args.input, args.key, args.format, args.sig)).lower())
    elif args.action == "generate":
        keys = process_generate_key(args.format)
        for path in write_generated_keys(args.format, keys, args.output):
            print(path)
    elif args.action == "encrypt":
        print(process_text_encrypt(args.input, args.key))
    elif args.action == "decrypt":
        print(process_text_decrypt(args.input, args.key))


def _run_base64(args: argparse.Namespace) -> None:
    if args.action == "encode":
        print(process_encode(args.input, args.format))
    else:
        data = process_decode(args.input, args.format)
        sys.stdout.flush()
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args)

    try:
        if args.cmd == "text":
            _run_text(args)
        elif args.cmd == "genpass":
            password = process_genpass(args.length, args.uppercase, args.lowercase,
                                       args.number, args.symbol)
            print(password)
            print(f"Estimated strength: {estimate_strength(password)}", file=sys.stderr)
        elif args.cmd == "base64":
            _run_base64(args)
    except TextCryptError as e:
        logger.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
