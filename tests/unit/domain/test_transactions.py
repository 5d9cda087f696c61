"""Unit tests for transaction variants and their signature slots."""

import pytest

from helium_wallet.domain.errors import SigningError
from helium_wallet.domain.transactions import (
    TXN_KINDS,
    OuiV1,
    Payment,
    PaymentV2,
    RedeemHtlcV1,
    SignerRole,
    TxnBase,
)

PAYER = b"\x01" + bytes(32)
PAYEE = b"\x01" + bytes([7]) * 32


def test_single_signer_kinds_have_owner_role_only() -> None:
    for kind, cls in TXN_KINDS.items():
        if kind == "oui":
            assert cls.roles() == (SignerRole.OWNER, SignerRole.PAYER)
        else:
            assert cls.roles() == (SignerRole.OWNER,)


def test_with_signature_returns_copy() -> None:
    txn = RedeemHtlcV1(payee=PAYEE, address=PAYER, preimage=b"secret")
    signed = txn.with_signature(SignerRole.OWNER, b"sig")
    assert txn.signature == b""
    assert signed.signature == b"sig"
    assert signed.signature_for(SignerRole.OWNER) == b"sig"


def test_without_signatures_clears_every_slot() -> None:
    txn = OuiV1(
        owner=PAYER,
        requested_subnet_size=8,
        oui=1,
        owner_signature=b"a",
        payer_signature=b"b",
    )
    cleared = txn.without_signatures()
    assert cleared.owner_signature == b""
    assert cleared.payer_signature == b""
    assert cleared.oui == 1


def test_missing_role_raises() -> None:
    txn = PaymentV2(payer=PAYER, payments=(Payment(payee=PAYEE, amount=1),))
    with pytest.raises(SigningError, match="no payer signature"):
        txn.with_signature(SignerRole.PAYER, b"sig")


def test_models_are_frozen() -> None:
    txn = PaymentV2(payer=PAYER, payments=(Payment(payee=PAYEE, amount=1),))
    with pytest.raises(Exception):
        txn.nonce = 3  # type: ignore[misc]


def test_payment_summary_uses_hnt() -> None:
    txn = PaymentV2(
        payer=PAYER,
        payments=(Payment(payee=PAYEE, amount=150_000_000),),
        nonce=5,
    )
    summary = txn.summary()
    assert summary["payments"][0]["amount"] == "1.50000000"
    assert summary["nonce"] == 5


def test_oui_summary_unresolved_payer() -> None:
    txn = OuiV1(owner=PAYER, requested_subnet_size=16, oui=2, filter=b"\xff")
    assert txn.summary()["payer"] is None
    assert txn.summary()["filter"] == "/w=="


def test_base_class_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError, match="summary"):
        TxnBase()
