"""Pure validation functions for transaction command arguments.

These functions contain the domain rules that can be tested in isolation
without ledger or staking clients.
"""

from __future__ import annotations

import binascii
from typing import Final

from ....domain.errors import EncodingError, ValidationError

MIN_SUBNET_SIZE: Final[int] = 8
MAX_SUBNET_SIZE: Final[int] = 65536
HASHLOCK_LENGTH: Final[int] = 32


def validate_subnet_size(subnet_size: int) -> None:
    """Validate a requested OUI subnet size. Pure function.

    Raises:
        ValidationError: If the size is not a power of two in [8, 65536].
    """
    if not MIN_SUBNET_SIZE <= subnet_size <= MAX_SUBNET_SIZE:
        raise ValidationError(
            f"Subnet size {subnet_size} must be between "
            f"{MIN_SUBNET_SIZE} and {MAX_SUBNET_SIZE}"
        )
    if subnet_size & (subnet_size - 1):
        raise ValidationError(f"Subnet size {subnet_size} must be a power of two")


def parse_hashlock(hashlock_hex: str) -> bytes:
    """Decode a hex SHA-256 hashlock.

    Raises:
        EncodingError: If the text is not hex or not 32 bytes long.
    """
    try:
        hashlock = bytes.fromhex(hashlock_hex.strip())
    except (ValueError, binascii.Error) as e:
        raise EncodingError(f"Invalid hex hashlock {hashlock_hex!r}: {e}") from e
    if len(hashlock) != HASHLOCK_LENGTH:
        raise EncodingError(
            f"Hashlock must be {HASHLOCK_LENGTH} bytes, got {len(hashlock)}"
        )
    return hashlock
