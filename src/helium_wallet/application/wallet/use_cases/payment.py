"""Use case for sending one or more payments."""

from __future__ import annotations

from ....crypto.keypair import Keypair, PubKeyBin
from ....crypto.signing import sign_txn
from ....domain.shared.ledger_client_protocol import LedgerClientProtocol
from ....domain.transactions import Payment, PaymentV2, SignerRole
from ...shared.envelope import Envelope
from ..dtos import PayCommandDTO, TxnResultDTO
from .common import finalize


def build_payment(
    payer: PubKeyBin, dto: PayCommandDTO, nonce: int, fee: int = 0
) -> PaymentV2:
    """Build an unsigned payment from parsed payee arguments. Pure function."""
    payments = tuple(
        Payment(
            payee=PubKeyBin.from_b58(payee.address).to_bytes(),
            amount=payee.amount.to_bones(),
        )
        for payee in dto.payees
    )
    return PaymentV2(
        payer=payer.to_bytes(),
        payments=payments,
        fee=fee,
        nonce=nonce,
    )


class PaymentService:
    """Service for building, signing and optionally submitting payments."""

    def __init__(self, ledger: LedgerClientProtocol) -> None:
        self.ledger = ledger

    def pay(self, dto: PayCommandDTO, keypair: Keypair) -> TxnResultDTO:
        account = self.ledger.get_account(keypair.pubkey_bin.to_b58())
        txn = build_payment(keypair.pubkey_bin, dto, account.speculative_nonce + 1)
        envelope = Envelope.wrap(sign_txn(keypair, txn, SignerRole.OWNER))
        return finalize(self.ledger, envelope, commit=dto.commit)
