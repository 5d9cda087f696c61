"""Use cases for creating and redeeming hashed-timelock contracts."""

from __future__ import annotations

from ....crypto.keypair import Keypair, PubKeyBin
from ....crypto.signing import sign_txn
from ....domain.shared.ledger_client_protocol import LedgerClientProtocol
from ....domain.transactions import CreateHtlcV1, RedeemHtlcV1, SignerRole
from ...shared.envelope import Envelope
from ..dtos import CreateHtlcCommandDTO, RedeemHtlcCommandDTO, TxnResultDTO
from .common import finalize
from .txn_validators import parse_hashlock


class HtlcService:
    """Service for HTLC transactions."""

    def __init__(self, ledger: LedgerClientProtocol) -> None:
        self.ledger = ledger

    def create(self, dto: CreateHtlcCommandDTO, keypair: Keypair) -> TxnResultDTO:
        """Lock ``dto.hnt`` in a freshly generated contract address."""
        hashlock = parse_hashlock(dto.hashlock)
        payee = PubKeyBin.from_b58(dto.payee)
        account = self.ledger.get_account(keypair.pubkey_bin.to_b58())
        with Keypair.generate() as contract:
            contract_address = contract.pubkey_bin

        txn = CreateHtlcV1(
            payer=keypair.pubkey_bin.to_bytes(),
            payee=payee.to_bytes(),
            address=contract_address.to_bytes(),
            hashlock=hashlock,
            timelock=dto.timelock,
            amount=dto.hnt.to_bones(),
            fee=0,
            nonce=account.speculative_nonce + 1,
        )
        envelope = Envelope.wrap(sign_txn(keypair, txn, SignerRole.OWNER))
        return finalize(self.ledger, envelope, commit=dto.commit)

    def redeem(self, dto: RedeemHtlcCommandDTO, keypair: Keypair) -> TxnResultDTO:
        """Claim an HTLC balance with its preimage.

        The preimage is not checked against the hashlock here; the ledger
        rejects a wrong one.
        """
        txn = RedeemHtlcV1(
            payee=keypair.pubkey_bin.to_bytes(),
            address=PubKeyBin.from_b58(dto.address).to_bytes(),
            preimage=dto.preimage.encode("utf-8"),
            fee=0,
        )
        envelope = Envelope.wrap(sign_txn(keypair, txn, SignerRole.OWNER))
        return finalize(self.ledger, envelope, commit=dto.commit)
