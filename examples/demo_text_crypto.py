"""
textcrypt — Live Demo: BLAKE3, Ed25519, ChaCha20-Poly1305
=========================================================
Run:  python examples/demo_text_crypto.py

Generates keys into a temporary directory, then signs, verifies,
encrypts and decrypts a message through the dispatch layer, printing
sizes and timings for each engine.
"""

import sys, os, time, tempfile
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pathlib import Path

from textcrypt import codec
from textcrypt.errors  import CryptoError
from textcrypt.process import (process_generate_key, write_generated_keys,
                               process_text_sign, process_text_verify,
                               process_text_encrypt, process_text_decrypt)

LINE = "═" * 70
MSG  = b"hello, world!"

def header(name):
    print(f"\n{LINE}")
    print(f"  {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")


with tempfile.TemporaryDirectory() as tmp:
    tmp = Path(tmp)
    msg_path = tmp / "message.txt"
    msg_path.write_bytes(MSG)

    print(f"\n{LINE}")
    print("  textcrypt — Demo")
    print(LINE)
    print(f"  Message: {MSG.decode()}\n")

    # ── BLAKE3 ───────────────────────────────────────────────────────────────
    header("KEYED HASH — BLAKE3")
    t0   = time.perf_counter()
    key  = write_generated_keys("blake3", process_generate_key("blake3"), tmp)[0]
    sig  = process_text_sign(msg_path, key, "blake3")
    good = process_text_verify(msg_path, key, "blake3", sig)
    elapsed = time.perf_counter() - t0
    ok("Key",          key.read_bytes().decode())
    ok("Signature",    f"{sig} ({len(codec.decode(sig))} bytes)")
    ok("Verified",     str(good))
    ok("Round-trip",   f"{elapsed*1000:.2f} ms")

    # ── Ed25519 ──────────────────────────────────────────────────────────────
    header("SIGNATURE — Ed25519")
    t0     = time.perf_counter()
    sk, pk = write_generated_keys("ed25519", process_generate_key("ed25519"), tmp)
    sig    = process_text_sign(msg_path, sk, "ed25519")
    good   = process_text_verify(msg_path, pk, "ed25519", sig)
    other  = tmp / "tampered.txt"
    other.write_bytes(b"hello, world?")
    bad    = process_text_verify(other, pk, "ed25519", sig)
    elapsed = time.perf_counter() - t0
    ok("Public key",       pk.read_bytes().hex())
    ok("Signature size",   f"{len(codec.decode(sig))} bytes")
    ok("Valid message",    str(good))
    ok("Tampered message", str(bad))
    ok("Round-trip",       f"{elapsed*1000:.2f} ms")

    # ── ChaCha20-Poly1305 ────────────────────────────────────────────────────
    header("AEAD — ChaCha20-Poly1305 (nonce || key file)")
    key = tmp / "chacha.key"
    key.write_bytes(os.urandom(44))
    t0  = time.perf_counter()
    ct  = process_text_encrypt(msg_path, key)
    enc = tmp / "message.enc"
    enc.write_text(ct)
    pt  = process_text_decrypt(enc, key)
    elapsed = time.perf_counter() - t0
    ok("Ciphertext", f"{ct} ({len(codec.decode(ct))} bytes = data + tag 16)")
    ok("Decrypted",  pt)
    ok("Round-trip", f"{elapsed*1000:.2f} ms")

    wrong = tmp / "wrong.key"
    wrong.write_bytes(os.urandom(44))
    try:
        process_text_decrypt(enc, wrong)
    except CryptoError as e:
        ok("Wrong key rejected", type(e).__name__)

print(f"\n{LINE}\n")
