"""Command-line stories run against in-memory clients."""

from __future__ import annotations

import hashlib
import json
from contextlib import nullcontext

import pytest

from helium_wallet import wallet_main
from helium_wallet.application.shared.envelope import Envelope
from helium_wallet.crypto.keypair import PubKeyBin
from helium_wallet.domain.transactions import OuiV1, PaymentV2
from tests.fixtures import TestLedgerClient, TestStakingClient


@pytest.fixture
def cli_env(
    monkeypatch: pytest.MonkeyPatch,
    wallet_private_key_pem: str,
    ledger_client: TestLedgerClient,
    staking_client: TestStakingClient,
) -> TestLedgerClient:
    monkeypatch.setenv("WALLET_PRIVATE_KEY_PEM", wallet_private_key_pem)
    monkeypatch.delenv("HELIUM_API_URL", raising=False)
    monkeypatch.setattr(
        wallet_main, "LedgerClient", lambda *a, **kw: nullcontext(ledger_client)
    )
    monkeypatch.setattr(
        wallet_main, "StakingClient", lambda *a, **kw: nullcontext(staking_client)
    )
    return ledger_client


def test_pay_prints_unsubmitted_envelope(
    cli_env: TestLedgerClient,
    payee_address: PubKeyBin,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code = wallet_main.main(["pay", "-p", f"{payee_address.to_b58()}=1.5"])

    assert code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["kind"] == "payment_v2"
    assert output["status"] is None
    txn = Envelope.from_text(output["txn"]).unwrap_as(PaymentV2)
    assert txn.payments[0].amount == 150_000_000
    assert txn.nonce == 5
    assert cli_env.submitted == []


def test_pay_commit_hash_only(
    cli_env: TestLedgerClient,
    payee_address: PubKeyBin,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code = wallet_main.main(
        ["pay", "-p", f"{payee_address.to_b58()}=1", "--commit", "--hash"]
    )

    assert code == 0
    expected = hashlib.sha256(cli_env.submitted[0].to_binary()).hexdigest()
    assert capsys.readouterr().out.strip() == expected


def test_oui_create_with_staking_payer(
    cli_env: TestLedgerClient,
    staking_address: PubKeyBin,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code = wallet_main.main(
        [
            "oui",
            "create",
            "--filter",
            "AQIDBA==",
            "--oui",
            "3",
            "--subnet-size",
            "32",
            "--payer",
            "staking",
            "--commit",
        ]
    )

    assert code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["submittable"] is False
    txn = Envelope.from_text(output["txn"]).unwrap_as(OuiV1)
    assert txn.payer == staking_address.to_bytes()
    assert cli_env.submitted == []


def test_invalid_payee_reports_error(
    cli_env: TestLedgerClient, capsys: pytest.CaptureFixture[str]
) -> None:
    code = wallet_main.main(["pay", "-p", "no-equals-sign"])

    assert code == 1
    assert "missing `=`" in capsys.readouterr().err


def test_missing_key_reports_error(
    cli_env: TestLedgerClient,
    monkeypatch: pytest.MonkeyPatch,
    payee_address: PubKeyBin,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.delenv("WALLET_PRIVATE_KEY_PEM")
    code = wallet_main.main(["pay", "-p", f"{payee_address.to_b58()}=1"])

    assert code == 1
    assert "WALLET_PRIVATE_KEY_PEM" in capsys.readouterr().err
