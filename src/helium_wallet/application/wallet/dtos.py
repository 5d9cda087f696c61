"""Data Transfer Objects for the wallet application layer."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ...domain.errors import ValidationError
from ...domain.units import Hnt
from ..shared.envelope import Envelope


class AccountDTO(BaseModel):
    """Account state as reported by the ledger API."""

    address: str
    balance: int = 0
    dc_balance: int = 0
    sec_balance: int = 0
    nonce: int = 0
    speculative_nonce: int = 0


class SubmissionStatusDTO(BaseModel):
    """Result of handing an envelope to the ledger API."""

    hash: str
    pending: bool = True


class StakingAddressDTO(BaseModel):
    address: str


class PayeeArg(BaseModel):
    """One ``<address>=<amount>`` payment argument."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    address: str
    amount: Hnt

    @classmethod
    def parse(cls, text: str) -> "PayeeArg":
        address, sep, amount = text.partition("=")
        if not sep:
            raise ValidationError(f"invalid KEY=value: missing `=` in `{text}`")
        address = address.strip()
        if not address:
            raise ValidationError(f"invalid KEY=value: missing address in `{text}`")
        return cls(address=address, amount=Hnt.parse(amount))

    @field_serializer("amount")
    def serialize_amount(self, value: Hnt) -> str:
        return str(value)


class PayCommandDTO(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    payees: list[PayeeArg] = Field(..., min_length=1)
    commit: bool = False


class CreateHtlcCommandDTO(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    payee: str
    hnt: Hnt
    hashlock: str = Field(..., description="Hex encoded SHA-256 digest of the preimage")
    timelock: int = Field(..., ge=0)
    commit: bool = False


class RedeemHtlcCommandDTO(BaseModel):
    address: str
    preimage: str
    commit: bool = False


class CreateOuiCommandDTO(BaseModel):
    addresses: list[str] = Field(default_factory=list)
    filter: str = Field(..., description="Initial device membership filter, base64")
    oui: int = Field(..., ge=0)
    subnet_size: int
    payer: Optional[str] = None
    commit: bool = False


class SubmitTxnCommandDTO(BaseModel):
    transaction: str
    commit: bool = False


class TxnResultDTO(BaseModel):
    """What a transaction command produced.

    ``submittable`` is false when the payer is someone other than this wallet;
    the ``txn`` text must then be handed to that payer to finish and submit.
    """

    kind: str
    txn: str
    summary: dict[str, Any]
    submittable: bool
    status: Optional[SubmissionStatusDTO] = None

    @classmethod
    def from_envelope(
        cls,
        envelope: Envelope,
        *,
        submittable: bool,
        status: Optional[SubmissionStatusDTO] = None,
    ) -> "TxnResultDTO":
        return cls(
            kind=envelope.kind,
            txn=envelope.to_text(),
            summary=envelope.txn.summary(),
            submittable=submittable,
            status=status,
        )

    @property
    def hash(self) -> Optional[str]:
        return self.status.hash if self.status else None


class BalanceDTO(BaseModel):
    address: str
    balance: str
    dc_balance: int
    sec_balance: int

    @classmethod
    def from_account(cls, account: AccountDTO) -> "BalanceDTO":
        return cls(
            address=account.address,
            balance=str(Hnt.from_bones(account.balance)),
            dc_balance=account.dc_balance,
            sec_balance=account.sec_balance,
        )
