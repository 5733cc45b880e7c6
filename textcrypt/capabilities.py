"""
Capabilities an engine may offer.

Engines do not share a base class. Each one implements only what it can
do: Blake3Mac signs, verifies, loads and generates; Ed25519Signer signs,
loads and generates; Ed25519Verifier verifies and loads;
ChaCha20Poly1305Engine only loads (it encrypts and decrypts on its own
terms).
"""

from pathlib import Path
from typing import List, Protocol, TypeVar, Union, runtime_checkable

T = TypeVar("T", covariant=True)


@runtime_checkable
class TextSign(Protocol):
    def sign(self, message: bytes) -> bytes:
        """Sign the whole message and return the raw signature."""
        ...


@runtime_checkable
class TextVerify(Protocol):
    def verify(self, message: bytes, signature: bytes) -> bool:
        """True if `signature` is valid for `message`."""
        ...


@runtime_checkable
class KeyLoader(Protocol[T]):
    @classmethod
    def load(cls, path: Union[str, Path]) -> T: ...

    @classmethod
    def try_new(cls, data: bytes) -> T: ...


@runtime_checkable
class KeyGenerator(Protocol):
    @staticmethod
    def generate() -> List[bytes]:
        """
        Fresh key material, as the raw blobs to be written to disk.
        Implementations may also accept an optional random source.
        """
        ...
