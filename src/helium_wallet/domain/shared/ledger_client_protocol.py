"""Protocol interfaces for the ledger API and staking service clients.

These protocols let the use cases accept any implementation, so tests can
inject in-memory clients instead of HTTP ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    # Avoid circular imports by only importing types during type checking
    from ...application.shared.envelope import Envelope
    from ...application.wallet.dtos import AccountDTO, SubmissionStatusDTO
    from ...crypto.keypair import PubKeyBin


class LedgerClientProtocol(Protocol):
    """Protocol defining the ledger API calls the wallet needs."""

    def get_account(self, address: str) -> "AccountDTO":
        """Fetch account state (balances and nonces) for a base58 address."""
        ...

    def submit_txn(self, envelope: "Envelope") -> "SubmissionStatusDTO":
        """Submit a fully signed envelope.

        Raises:
            NetworkError: If the ledger API call fails.
        """
        ...


class StakingClientProtocol(Protocol):
    """Protocol for the staking service acting as fee payer."""

    def address(self) -> "PubKeyBin":
        """Return the staking service's payer address."""
        ...
