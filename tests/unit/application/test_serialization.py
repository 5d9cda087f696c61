"""Unit tests for canonical signing bytes and the protobuf wire layout."""

from __future__ import annotations

import os

import pytest

from helium_wallet.application.shared.serialization import signing_bytes
from helium_wallet.application.shared.wire import (
    ENVELOPE_MESSAGE,
    KIND_FIELDS,
    encode_txn,
    message_class,
)
from helium_wallet.domain.transactions import (
    TXN_KINDS,
    CreateHtlcV1,
    OuiV1,
    Payment,
    PaymentV2,
    RedeemHtlcV1,
)

PAYER = b"\x01" + bytes([1]) * 32
PAYEE = b"\x01" + bytes([2]) * 32
CONTRACT = b"\x01" + bytes([3]) * 32


def _payment(signature: bytes = b"") -> PaymentV2:
    return PaymentV2(
        payer=PAYER,
        payments=(Payment(payee=PAYEE, amount=100_000_000),),
        fee=0,
        nonce=5,
        signature=signature,
    )


def _oui(owner_signature: bytes = b"", payer_signature: bytes = b"") -> OuiV1:
    return OuiV1(
        owner=PAYER,
        addresses=(PAYEE,),
        filter=b"\x00\x01",
        requested_subnet_size=32,
        payer=PAYEE,
        staking_fee=1,
        oui=3,
        owner_signature=owner_signature,
        payer_signature=payer_signature,
    )


class TestSigningBytes:
    """Canonical bytes ignore signature slots."""

    def test_payment_ignores_signature(self) -> None:
        assert signing_bytes(_payment()) == signing_bytes(_payment(os.urandom(64)))

    def test_oui_ignores_both_signatures(self) -> None:
        baseline = signing_bytes(_oui())
        assert signing_bytes(_oui(os.urandom(64), b"")) == baseline
        assert signing_bytes(_oui(b"", os.urandom(64))) == baseline
        assert signing_bytes(_oui(os.urandom(64), os.urandom(64))) == baseline

    def test_signature_bytes_absent_from_output(self) -> None:
        garbage = b"\xde\xad\xbe\xef" * 16
        assert garbage not in signing_bytes(_payment(garbage))

    def test_field_changes_change_bytes(self) -> None:
        other = _payment().model_copy(update={"nonce": 6})
        assert signing_bytes(other) != signing_bytes(_payment())

    def test_repeated_encoding_is_stable(self) -> None:
        txn = _oui(b"x")
        assert signing_bytes(txn) == signing_bytes(txn)

    def test_matches_protobuf_decoding(self) -> None:
        message = message_class("blockchain_txn_payment_v2")()
        message.ParseFromString(signing_bytes(_payment(b"sig")))
        assert message.payer == PAYER
        assert message.nonce == 5
        assert message.signature == b""
        assert [p.amount for p in message.payments] == [100_000_000]


class TestWireLayout:
    """The wire schema covers every transaction kind."""

    def test_every_kind_has_an_envelope_field(self) -> None:
        assert set(KIND_FIELDS) == set(TXN_KINDS)
        envelope_fields = {
            f.name: f.number for f in message_class(ENVELOPE_MESSAGE).DESCRIPTOR.fields
        }
        for kind, (number, _) in KIND_FIELDS.items():
            assert envelope_fields[kind] == number

    @pytest.mark.parametrize(
        "txn",
        [
            CreateHtlcV1(
                payer=PAYER,
                payee=PAYEE,
                address=CONTRACT,
                hashlock=bytes(32),
                timelock=1000,
                amount=10,
                nonce=2,
            ),
            RedeemHtlcV1(payee=PAYEE, address=CONTRACT, preimage=b"secret"),
        ],
    )
    def test_encode_txn_non_empty(self, txn) -> None:
        assert encode_txn(txn)

    def test_default_values_are_omitted(self) -> None:
        # proto3 omits zero/empty fields, so an all-default redeem encodes only set fields
        txn = RedeemHtlcV1(payee=b"", address=b"", preimage=b"")
        assert encode_txn(txn) == b""
