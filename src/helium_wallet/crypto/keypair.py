"""Ed25519 keypairs and the binary public-key identifier used on the ledger."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from types import TracebackType
from typing import Final, Iterator, Optional, Type

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from ..domain.errors import EncodingError, SigningError
from .address import decode_b58, encode_b58

KEYTYPE_ED25519: Final[int] = 0x01
ED25519_KEY_LENGTH: Final[int] = 32
PUBKEY_BIN_LENGTH: Final[int] = 1 + ED25519_KEY_LENGTH


@dataclass(frozen=True)
class PubKeyBin:
    """Key-type tag byte followed by the raw Ed25519 public key."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != PUBKEY_BIN_LENGTH:
            raise EncodingError(
                f"Public key identifier must be {PUBKEY_BIN_LENGTH} bytes, "
                f"got {len(self.data)}"
            )
        if self.data[0] != KEYTYPE_ED25519:
            raise EncodingError(f"Unsupported key type tag {self.data[0]:#04x}")

    @classmethod
    def from_bytes(cls, data: bytes) -> "PubKeyBin":
        return cls(bytes(data))

    @classmethod
    def from_b58(cls, text: str) -> "PubKeyBin":
        return cls(decode_b58(text, expected_length=PUBKEY_BIN_LENGTH))

    @classmethod
    def from_public_key(cls, public_key: Ed25519PublicKey) -> "PubKeyBin":
        raw = public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return cls(bytes([KEYTYPE_ED25519]) + raw)

    def to_public_key(self) -> Ed25519PublicKey:
        return Ed25519PublicKey.from_public_bytes(self.data[1:])

    def to_bytes(self) -> bytes:
        return self.data

    def to_b58(self) -> str:
        return encode_b58(self.data)

    def __str__(self) -> str:
        return self.to_b58()


class Keypair:
    """An Ed25519 private key plus its public identifier.

    The 32-byte seed lives in a ``bytearray`` that ``close()`` zeroes; use the
    keypair as a context manager so that happens as soon as the command is
    done signing. Only that buffer is wiped: the immutable copy handed to
    ``cryptography`` and the key object it builds are left to the garbage
    collector.
    """

    def __init__(self, seed: bytes) -> None:
        if len(seed) != ED25519_KEY_LENGTH:
            raise SigningError(
                f"Ed25519 seed must be {ED25519_KEY_LENGTH} bytes, got {len(seed)}"
            )
        self._seed = bytearray(seed)
        self._closed = False
        with self.signing_key() as key:
            self.pubkey_bin = PubKeyBin.from_public_key(key.public_key())

    @classmethod
    def generate(cls) -> "Keypair":
        key = Ed25519PrivateKey.generate()
        return cls(
            key.private_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PrivateFormat.Raw,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )

    @classmethod
    def from_pem(cls, pem_str: str) -> "Keypair":
        """Load an unencrypted PKCS#8 Ed25519 private key."""
        try:
            key = serialization.load_pem_private_key(pem_str.encode(), password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningError(f"Invalid private key PEM: {e}") from e
        if not isinstance(key, Ed25519PrivateKey):
            raise SigningError("Private key is not an Ed25519 key")
        return cls(
            key.private_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PrivateFormat.Raw,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @contextmanager
    def signing_key(self) -> Iterator[Ed25519PrivateKey]:
        """Build a library key object from the seed for one signing operation."""
        if self._closed:
            raise SigningError("Keypair has been closed")
        yield Ed25519PrivateKey.from_private_bytes(bytes(self._seed))

    def sign(self, message: bytes) -> bytes:
        with self.signing_key() as key:
            return key.sign(message)

    def close(self) -> None:
        for i in range(len(self._seed)):
            self._seed[i] = 0
        self._closed = True

    def __enter__(self) -> "Keypair":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Keypair(pubkey_bin={self.pubkey_bin})"
