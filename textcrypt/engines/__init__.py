"""Algorithm engines: BLAKE3 keyed hash, Ed25519, ChaCha20-Poly1305."""
