"""Domain-specific exceptions."""

from __future__ import annotations


class WalletError(Exception):
    """Base class for every error raised by the wallet core."""


class EncodingError(WalletError, ValueError):
    """Raised for malformed base58/base64/hex input, wrong-length identifiers,
    undecodable envelopes or unknown transaction kinds."""


class ValidationError(WalletError, ValueError):
    """Raised when an input violates a domain rule (amounts, subnet sizes,
    payee arguments, transaction kind on re-parse)."""


class SigningError(WalletError):
    """Raised when key material is invalid or a transaction cannot be signed."""


class NetworkError(WalletError):
    """Raised when a call to the ledger API or staking service fails."""
