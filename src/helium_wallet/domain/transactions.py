"""Ledger transaction variants.

The four supported kinds form a closed union discriminated by ``kind``. Every
site that has to handle each kind (canonical encoding, envelope decoding)
looks the kind up in ``TXN_KINDS`` so a new kind cannot be half-registered.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..crypto.address import encode_b58, encode_b64
from .errors import SigningError
from .units import MAX_BONES, Hnt

U64 = Annotated[int, Field(ge=0, le=MAX_BONES)]
U32 = Annotated[int, Field(ge=0, le=2**32 - 1)]


class SignerRole(str, Enum):
    OWNER = "owner"
    PAYER = "payer"


def _maybe_b58(data: bytes) -> Optional[str]:
    return encode_b58(data) if data else None


class TxnBase(BaseModel):
    """Behaviour shared by every transaction kind."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Role -> name of the bytes field holding that role's signature.
    SIGNATURE_FIELDS: ClassVar[dict[SignerRole, str]] = {
        SignerRole.OWNER: "signature"
    }

    @classmethod
    def roles(cls) -> tuple[SignerRole, ...]:
        return tuple(cls.SIGNATURE_FIELDS)

    @classmethod
    def _signature_field(cls, role: SignerRole) -> str:
        try:
            return cls.SIGNATURE_FIELDS[role]
        except KeyError:
            raise SigningError(
                f"{cls.__name__} has no {role.value} signature"
            ) from None

    def signature_for(self, role: SignerRole) -> bytes:
        return getattr(self, self._signature_field(role))

    def with_signature(self, role: SignerRole, signature: bytes) -> Any:
        return self.model_copy(update={self._signature_field(role): signature})

    def without_signatures(self) -> Any:
        return self.model_copy(
            update={name: b"" for name in self.SIGNATURE_FIELDS.values()}
        )

    @abstractmethod
    def summary(self) -> dict[str, Any]:
        """Human-readable fields shown by the command line."""


class Payment(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    payee: bytes
    amount: U64


class PaymentV2(TxnBase):
    kind: Literal["payment_v2"] = "payment_v2"
    payer: bytes
    payments: tuple[Payment, ...]
    fee: U64 = 0
    nonce: U64 = 0
    signature: bytes = b""

    def summary(self) -> dict[str, Any]:
        return {
            "payer": _maybe_b58(self.payer),
            "payments": [
                {"payee": encode_b58(p.payee), "amount": str(Hnt(p.amount))}
                for p in self.payments
            ],
            "fee": self.fee,
            "nonce": self.nonce,
        }


class CreateHtlcV1(TxnBase):
    kind: Literal["create_htlc"] = "create_htlc"
    payer: bytes
    payee: bytes
    address: bytes
    hashlock: bytes
    timelock: U64
    amount: U64
    fee: U64 = 0
    nonce: U64 = 0
    signature: bytes = b""

    def summary(self) -> dict[str, Any]:
        return {
            "address": encode_b58(self.address),
            "payee": encode_b58(self.payee),
            "amount": str(Hnt(self.amount)),
            "hashlock": self.hashlock.hex(),
            "timelock": self.timelock,
            "nonce": self.nonce,
        }


class RedeemHtlcV1(TxnBase):
    kind: Literal["redeem_htlc"] = "redeem_htlc"
    payee: bytes
    address: bytes
    preimage: bytes
    fee: U64 = 0
    signature: bytes = b""

    def summary(self) -> dict[str, Any]:
        return {
            "address": encode_b58(self.address),
            "payee": encode_b58(self.payee),
            "preimage": self.preimage.decode("utf-8", errors="replace"),
        }


class OuiV1(TxnBase):
    kind: Literal["oui"] = "oui"
    owner: bytes
    addresses: tuple[bytes, ...] = ()
    filter: bytes = b""
    requested_subnet_size: U32
    # Empty means the payer is not resolved yet.
    payer: bytes = b""
    staking_fee: U64 = 0
    fee: U64 = 0
    owner_signature: bytes = b""
    payer_signature: bytes = b""
    oui: U64

    SIGNATURE_FIELDS: ClassVar[dict[SignerRole, str]] = {
        SignerRole.OWNER: "owner_signature",
        SignerRole.PAYER: "payer_signature",
    }

    def summary(self) -> dict[str, Any]:
        return {
            "oui": self.oui,
            "owner": encode_b58(self.owner),
            "payer": _maybe_b58(self.payer),
            "addresses": [encode_b58(a) for a in self.addresses],
            "filter": encode_b64(self.filter),
            "requested_subnet_size": self.requested_subnet_size,
        }


Txn = Annotated[
    Union[PaymentV2, CreateHtlcV1, RedeemHtlcV1, OuiV1],
    Field(discriminator="kind"),
]

TxnModel = Union[PaymentV2, CreateHtlcV1, RedeemHtlcV1, OuiV1]

TXN_KINDS: dict[str, type[TxnBase]] = {
    "payment_v2": PaymentV2,
    "create_htlc": CreateHtlcV1,
    "redeem_htlc": RedeemHtlcV1,
    "oui": OuiV1,
}
