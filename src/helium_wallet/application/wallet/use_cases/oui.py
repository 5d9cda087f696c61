"""Use cases for allocating an OUI and submitting co-signed OUI transactions."""

from __future__ import annotations

from typing import Optional

from ....crypto.address import decode_b64
from ....crypto.keypair import Keypair, PubKeyBin
from ....crypto.signing import sign_txn
from ....domain.errors import ValidationError
from ....domain.shared.ledger_client_protocol import (
    LedgerClientProtocol,
    StakingClientProtocol,
)
from ....domain.transactions import OuiV1, SignerRole
from ...shared.envelope import Envelope
from ..dtos import CreateOuiCommandDTO, SubmitTxnCommandDTO, TxnResultDTO
from ..payer_resolution import PayerSource, classify_payer, resolve_payer
from .common import finalize
from .txn_validators import validate_subnet_size

OUI_STAKING_FEE = 1


class OuiService:
    """Service for OUI allocation transactions."""

    def __init__(
        self,
        ledger: LedgerClientProtocol,
        staking: Optional[StakingClientProtocol] = None,
    ) -> None:
        self.ledger = ledger
        self.staking = staking

    def _staking_address(self) -> PubKeyBin:
        if self.staking is None:
            raise ValidationError("A staking payer needs a staking service client")
        return self.staking.address()

    def create(self, dto: CreateOuiCommandDTO, keypair: Keypair) -> TxnResultDTO:
        """Build and owner-sign an OUI allocation.

        When this wallet also pays, it signs the payer slot too and the
        transaction may be committed. Otherwise the owner-signed envelope is
        returned for the payer to sign and submit.
        """
        validate_subnet_size(dto.subnet_size)
        filter_bytes = decode_b64(dto.filter)
        addresses = tuple(PubKeyBin.from_b58(a).to_bytes() for a in dto.addresses)
        wallet = keypair.pubkey_bin
        payer = resolve_payer(dto.payer, wallet, self._staking_address)

        txn = OuiV1(
            owner=wallet.to_bytes(),
            addresses=addresses,
            filter=filter_bytes,
            requested_subnet_size=dto.subnet_size,
            payer=payer.to_bytes(),
            oui=dto.oui,
            staking_fee=OUI_STAKING_FEE,
            fee=0,
        )
        txn = sign_txn(keypair, txn, SignerRole.OWNER)
        if payer.source is PayerSource.WALLET:
            txn = sign_txn(keypair, txn, SignerRole.PAYER)

        return finalize(
            self.ledger,
            Envelope.wrap(txn),
            commit=dto.commit,
            submittable=payer.locally_submittable,
        )

    def submit(self, dto: SubmitTxnCommandDTO) -> TxnResultDTO:
        """Submit an OUI transaction received in text form.

        The envelope is only sent once every signature it needs is present:
        the owner's, plus the payer's unless the payer is still unresolved.

        Raises:
            EncodingError: If the text is not a valid envelope.
            ValidationError: If the envelope holds another transaction kind.
        """
        envelope = Envelope.from_text(dto.transaction)
        txn = envelope.unwrap_as(OuiV1)
        payer = classify_payer(txn.payer, PubKeyBin.from_bytes(txn.owner))
        complete = bool(txn.owner_signature) and (
            payer.source is PayerSource.UNRESOLVED or bool(txn.payer_signature)
        )
        return finalize(self.ledger, envelope, commit=dto.commit, submittable=complete)
