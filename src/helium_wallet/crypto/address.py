"""Text encodings for public-key identifiers and opaque byte blobs.

Two forms exist and are chosen by the call site:

- Base58Check (version byte ``0x00``), used for account addresses.
- Base64, used for envelopes and opaque blobs such as OUI device filters.
  Output uses the standard alphabet; input may use either the standard or
  the URL-safe one.
"""

from __future__ import annotations

import base64
import binascii
from typing import Final, Optional

import base58

from ..domain.errors import EncodingError

ADDRESS_VERSION: Final[int] = 0x00
_URLSAFE_TO_STANDARD: Final[dict[int, int]] = str.maketrans("-_", "+/")


def encode_b58(data: bytes) -> str:
    """Encode identifier bytes as a checksummed base58 address."""
    return base58.b58encode_check(bytes([ADDRESS_VERSION]) + data).decode("ascii")


def decode_b58(text: str, expected_length: Optional[int] = None) -> bytes:
    """Decode a checksummed base58 address back to identifier bytes.

    Raises:
        EncodingError: If the text is not base58, the checksum or version byte
            does not match, or the payload is not ``expected_length`` bytes.
    """
    try:
        payload = base58.b58decode_check(text.strip())
    except ValueError as e:
        raise EncodingError(f"Invalid base58 address {text!r}: {e}") from e
    if not payload or payload[0] != ADDRESS_VERSION:
        raise EncodingError(f"Invalid address version in {text!r}")
    data = payload[1:]
    if expected_length is not None and len(data) != expected_length:
        raise EncodingError(
            f"Invalid address length in {text!r}: "
            f"expected {expected_length} bytes, got {len(data)}"
        )
    return data


def decode_b64(text: str) -> bytes:
    """Decode base64 in either alphabet, ignoring whitespace and missing padding."""
    cleaned = "".join(text.split()).translate(_URLSAFE_TO_STANDARD)
    if len(cleaned) % 4 == 1:
        raise EncodingError("Invalid base64: truncated input")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64: {e}") from e


def encode_b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
