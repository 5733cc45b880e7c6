"""
textcrypt — dispatch, codec, key loader and password generator tests
====================================================================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import io
import random
import string

import pytest
from textcrypt import codec
from textcrypt.engines.chacha_aead import ChaCha20Poly1305Engine
from textcrypt.errors   import (ConfigError, EncodingError, KeyMaterialError,
                                SourceError, VerificationError, CryptoError,
                                TextCryptError)
from textcrypt.formats  import Base64Format, TextSignFormat
from textcrypt.genpass  import estimate_strength, process_genpass
from textcrypt.keys     import take
from textcrypt.process  import (process_decode, process_encode, process_generate_key,
                                process_text_decrypt, process_text_encrypt,
                                process_text_sign, process_text_verify,
                                write_generated_keys)
from textcrypt.source   import read_input

MSG = b"hello, world!"
KEY = bytes(range(32))


@pytest.fixture
def message(tmp_path):
    path = tmp_path / "message.txt"
    path.write_bytes(MSG)
    return path


@pytest.fixture
def blake3_key(tmp_path):
    path = tmp_path / "blake3.txt"
    path.write_bytes(KEY)
    return path


@pytest.fixture
def ed25519_keys(tmp_path):
    sk, pk = process_generate_key("ed25519")
    return write_generated_keys("ed25519", [sk, pk], tmp_path)


@pytest.fixture
def chacha_key(tmp_path):
    path = tmp_path / "chacha.key"
    path.write_bytes(bytes(44))
    return path

# ── Formats ───────────────────────────────────────────────────────────────────
def test_format_tokens():
    assert TextSignFormat.parse("blake3") is TextSignFormat.BLAKE3
    assert TextSignFormat.parse("ed25519") is TextSignFormat.ED25519
    assert TextSignFormat.parse(TextSignFormat.ED25519) is TextSignFormat.ED25519
    assert str(TextSignFormat.BLAKE3) == "blake3"
    assert Base64Format.parse("urlsafe") is Base64Format.URLSAFE

@pytest.mark.parametrize("token", ["rsa", "BLAKE3", "", "hmac"])
def test_unknown_format_rejected(token):
    with pytest.raises(ConfigError):
        TextSignFormat.parse(token)

def test_unknown_format_fails_before_key_io(tmp_path, message):
    missing = tmp_path / "does-not-exist"
    with pytest.raises(ConfigError):
        process_text_sign(message, missing, "rsa")
    with pytest.raises(ConfigError):
        process_text_verify(message, missing, "rsa", "AAAA")
    with pytest.raises(ConfigError):
        process_generate_key("rsa")
    with pytest.raises(ConfigError):
        Base64Format.parse("base32")

def test_errors_share_base_class():
    for cls in (ConfigError, EncodingError, KeyMaterialError, SourceError,
                VerificationError, CryptoError):
        assert issubclass(cls, TextCryptError)
    assert issubclass(SourceError, OSError)
    assert issubclass(KeyMaterialError, ValueError)

# ── Codec ─────────────────────────────────────────────────────────────────────
def test_codec_urlsafe_no_padding():
    data = b"\xfb\xff\xfe"
    assert codec.encode(data) == "-__-"
    assert codec.encode(b"a") == "YQ"
    assert codec.decode("YQ") == b"a"
    assert codec.decode("-__-") == data

def test_codec_standard_padded():
    assert codec.encode(b"a", Base64Format.STANDARD) == "YQ=="
    assert codec.encode(b"\xfb\xff\xfe", Base64Format.STANDARD) == "+//+"
    assert codec.decode("YQ==", Base64Format.STANDARD) == b"a"

def test_codec_ignores_surrounding_whitespace():
    assert codec.decode(b"  YQ\n") == b"a"

@pytest.mark.parametrize("bad", ["YQ==", "+//+", "Y", "YQ$", "é"])
def test_codec_urlsafe_rejects(bad):
    with pytest.raises(EncodingError):
        codec.decode(bad)

@pytest.mark.parametrize("bad", ["YQ", "-__-", "Y===", "YQ=$"])
def test_codec_standard_rejects(bad):
    with pytest.raises(EncodingError):
        codec.decode(bad, Base64Format.STANDARD)

def test_codec_rejects_nonzero_trailing_bits():
    # "YQ" and "YR" carry the same byte; only the first is accepted
    with pytest.raises(EncodingError):
        codec.decode("YR")
    with pytest.raises(EncodingError):
        codec.decode("YR==", Base64Format.STANDARD)
    with pytest.raises(EncodingError):
        codec.decode("-__-AB")

# ── Key loader / source ───────────────────────────────────────────────────────
def test_take_checks_length():
    assert take(b"abcdef", 1, 4) == b"bcd"
    assert take(b"abcdef", 0, 6) == b"abcdef"
    with pytest.raises(KeyMaterialError):
        take(b"abc", 0, 4)

def test_read_input_stdin():
    assert read_input("-", io.BytesIO(MSG)) == MSG

def test_read_input_stdin_failures(monkeypatch):
    class BrokenStream:
        def read(self):
            raise OSError("Input/output error")

    with pytest.raises(SourceError):
        read_input("-", BrokenStream())

    closed = io.BytesIO(MSG)
    closed.close()
    with pytest.raises(SourceError):
        read_input("-", closed)

    monkeypatch.setattr(sys, "stdin", None)
    with pytest.raises(SourceError):
        read_input("-")

def test_read_input_missing_file(tmp_path):
    with pytest.raises(SourceError):
        read_input(tmp_path / "missing.txt")

def test_missing_key_file(tmp_path, message):
    with pytest.raises(SourceError):
        process_text_sign(message, tmp_path / "missing.key", "blake3")

# ── Sign / verify dispatch ────────────────────────────────────────────────────
def test_blake3_sign_verify_dispatch(message, blake3_key):
    sig = process_text_sign(message, blake3_key, "blake3")
    assert len(codec.decode(sig)) == 32
    assert sig == process_text_sign(message, blake3_key, TextSignFormat.BLAKE3)
    assert process_text_verify(message, blake3_key, "blake3", sig) is True

def test_verify_rejects_altered_final_character(message, blake3_key):
    sig = process_text_sign(message, blake3_key, "blake3")
    alphabet = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"
    altered = sig[:-1] + alphabet[alphabet.index(sig[-1]) ^ 1]
    with pytest.raises(EncodingError):
        process_text_verify(message, blake3_key, "blake3", altered)

def test_blake3_verify_flipped_signature(message, blake3_key):
    raw = bytearray(codec.decode(process_text_sign(message, blake3_key, "blake3")))
    raw[0] ^= 0xFF
    assert process_text_verify(message, blake3_key, "blake3", codec.encode(bytes(raw))) is False

def test_blake3_short_key_file(tmp_path, message):
    key = tmp_path / "short.key"
    key.write_bytes(KEY[:31])
    with pytest.raises(KeyMaterialError):
        process_text_sign(message, key, "blake3")

def test_ed25519_sign_verify_dispatch(message, ed25519_keys):
    sk, pk = ed25519_keys
    sig = process_text_sign(message, sk, "ed25519")
    assert len(codec.decode(sig)) == 64
    assert process_text_verify(message, pk, "ed25519", sig) is True

def test_ed25519_verify_wrong_length_signature(message, ed25519_keys):
    _, pk = ed25519_keys
    with pytest.raises(VerificationError):
        process_text_verify(message, pk, "ed25519", codec.encode(b"\x00" * 32))

def test_verify_malformed_base64_is_error(message, blake3_key):
    with pytest.raises(EncodingError):
        process_text_verify(message, blake3_key, "blake3", "***")

def test_sign_from_stdin(blake3_key, message):
    from_file  = process_text_sign(message, blake3_key, "blake3")
    from_stdin = process_text_sign("-", blake3_key, "blake3", stdin=io.BytesIO(MSG))
    assert from_file == from_stdin

# ── Key generation ────────────────────────────────────────────────────────────
def test_generate_blake3_writes_one_file(tmp_path):
    keys = process_generate_key("blake3")
    assert len(keys) == 1 and len(keys[0]) == 32
    paths = write_generated_keys("blake3", keys, tmp_path)
    assert [p.name for p in paths] == ["blake3.txt"]
    assert paths[0].read_bytes() == keys[0]

def test_generate_ed25519_writes_secret_then_public(tmp_path):
    keys = process_generate_key(TextSignFormat.ED25519)
    paths = write_generated_keys("ed25519", keys, tmp_path)
    assert [p.name for p in paths] == ["ed25519.sk", "ed25519.pk"]
    assert [p.read_bytes() for p in paths] == keys

def test_write_generated_keys_count_mismatch(tmp_path):
    with pytest.raises(KeyMaterialError):
        write_generated_keys("ed25519", [b"x" * 32], tmp_path)

def test_write_generated_keys_missing_dir(tmp_path):
    with pytest.raises(SourceError):
        write_generated_keys("blake3", [KEY], tmp_path / "nope")

# ── Encrypt / decrypt dispatch ────────────────────────────────────────────────
def test_encrypt_decrypt_dispatch(tmp_path, message, chacha_key):
    ct = process_text_encrypt(message, chacha_key)
    enc = tmp_path / "message.enc"
    enc.write_text(ct + "\n")
    assert process_text_decrypt(enc, chacha_key) == MSG.decode()

def test_decrypt_with_flipped_key_file(tmp_path, message, chacha_key):
    ct = process_text_encrypt(message, chacha_key)
    bad_key = tmp_path / "bad.key"
    bad_key.write_bytes(bytes(43) + b"\x01")
    with pytest.raises(CryptoError):
        process_text_decrypt("-", bad_key, stdin=io.BytesIO(ct.encode()))

def test_decrypt_non_utf8_plaintext(chacha_key):
    ct = ChaCha20Poly1305Engine.load(chacha_key).encrypt(b"\xff\xfe\xfd")
    with pytest.raises(EncodingError):
        process_text_decrypt("-", chacha_key, stdin=io.BytesIO(ct.encode()))

def test_encrypt_short_key_file(tmp_path, message):
    key = tmp_path / "short.key"
    key.write_bytes(bytes(40))
    with pytest.raises(KeyMaterialError):
        process_text_encrypt(message, key)

# ── base64 utility ────────────────────────────────────────────────────────────
@pytest.mark.parametrize("fmt", ["standard", "urlsafe"])
def test_base64_utility_roundtrip(tmp_path, fmt):
    data = bytes(range(256))
    src = tmp_path / "data.bin"
    src.write_bytes(data)
    encoded = process_encode(src, fmt)
    dst = tmp_path / "data.b64"
    dst.write_text(encoded)
    assert process_decode(dst, fmt) == data

# ── Password generator ────────────────────────────────────────────────────────
def test_genpass_length_and_classes():
    pw = process_genpass(32)
    assert len(pw) == 32
    assert any(c.isupper() for c in pw)
    assert any(c.islower() for c in pw)
    assert any(c.isdigit() for c in pw)
    assert any(c in "!@#$%^&*_" for c in pw)

def test_genpass_excludes_lookalikes():
    pw = process_genpass(200)
    assert not set(pw) & set("IOl0")

def test_genpass_single_class():
    pw = process_genpass(12, upper=False, lower=False, number=True, symbol=False)
    assert pw.isdigit() and len(pw) == 12

def test_genpass_seeded_rng_is_reproducible():
    assert process_genpass(20, rng=random.Random(7)) == process_genpass(20, rng=random.Random(7))

def test_genpass_rejects_bad_options():
    with pytest.raises(ConfigError):
        process_genpass(16, False, False, False, False)
    with pytest.raises(ConfigError):
        process_genpass(3)
    with pytest.raises(ConfigError):
        process_genpass(256)

def test_strength_estimate_range():
    assert 0 <= estimate_strength(process_genpass(16)) <= 4
    assert estimate_strength("password") <= 1
