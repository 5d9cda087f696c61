"""Pytest fixtures for use case tests."""

from __future__ import annotations

import pytest

from helium_wallet.application.wallet.use_cases.htlc import HtlcService
from helium_wallet.application.wallet.use_cases.oui import OuiService
from helium_wallet.application.wallet.use_cases.payment import PaymentService
from helium_wallet.crypto.keypair import PubKeyBin
from tests.fixtures import TestLedgerClient, TestStakingClient


@pytest.fixture
def ledger_client() -> TestLedgerClient:
    """In-memory ledger whose accounts report speculative nonce 4."""
    return TestLedgerClient(speculative_nonce=4)


@pytest.fixture
def staking_client(staking_address: PubKeyBin) -> TestStakingClient:
    return TestStakingClient(staking_address)


@pytest.fixture
def payment_service(ledger_client: TestLedgerClient) -> PaymentService:
    return PaymentService(ledger_client)


@pytest.fixture
def htlc_service(ledger_client: TestLedgerClient) -> HtlcService:
    return HtlcService(ledger_client)


@pytest.fixture
def oui_service(
    ledger_client: TestLedgerClient, staking_client: TestStakingClient
) -> OuiService:
    return OuiService(ledger_client, staking_client)
