"""Test implementations of the ledger and staking client protocols."""

from __future__ import annotations

import hashlib
from typing import Optional

from helium_wallet.application.shared.envelope import Envelope
from helium_wallet.application.wallet.dtos import AccountDTO, SubmissionStatusDTO
from helium_wallet.crypto.keypair import PubKeyBin
from helium_wallet.domain.errors import NetworkError


class TestLedgerClient:
    """In-memory implementation of LedgerClientProtocol.

    Tracks calls and submitted envelopes, and can be told to fail
    submissions to exercise error propagation.
    """

    __test__ = False

    def __init__(self, speculative_nonce: int = 0) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.submitted: list[Envelope] = []
        self.accounts: dict[str, AccountDTO] = {}
        self.speculative_nonce = speculative_nonce
        self.submit_error: Optional[NetworkError] = None

    def get_account(self, address: str) -> AccountDTO:
        self.calls.append(("get_account", {"address": address}))
        account = self.accounts.get(address)
        if account is not None:
            return account
        return AccountDTO(
            address=address,
            nonce=self.speculative_nonce,
            speculative_nonce=self.speculative_nonce,
        )

    def submit_txn(self, envelope: Envelope) -> SubmissionStatusDTO:
        self.calls.append(("submit_txn", {"kind": envelope.kind}))
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(envelope)
        return SubmissionStatusDTO(
            hash=hashlib.sha256(envelope.to_binary()).hexdigest(), pending=True
        )


class TestStakingClient:
    """In-memory implementation of StakingClientProtocol."""

    __test__ = False

    def __init__(self, address: PubKeyBin) -> None:
        self._address = address
        self.lookups = 0

    def address(self) -> PubKeyBin:
        self.lookups += 1
        return self._address
