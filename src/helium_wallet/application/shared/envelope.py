from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from ...crypto.address import decode_b64, encode_b64
from ...domain.errors import ValidationError
from ...domain.transactions import Txn, TxnBase
from .wire import decode_envelope, encode_envelope

T = TypeVar("T", bound=TxnBase)


class Envelope(BaseModel):
    """Typed container carrying exactly one transaction.

    The binary form is what the ledger accepts; the text form (base64 of the
    binary form) is what an owner hands to a co-signer and what ``submit``
    commands take back in. Signatures are optional at every stage.
    """

    model_config = ConfigDict(frozen=True)

    txn: Txn

    @classmethod
    def wrap(cls, txn: TxnBase) -> "Envelope":
        return cls(txn=txn)

    @property
    def kind(self) -> str:
        return self.txn.kind

    def to_binary(self) -> bytes:
        return encode_envelope(self.txn)

    @classmethod
    def from_binary(cls, data: bytes) -> "Envelope":
        return cls(txn=decode_envelope(data))

    def to_text(self) -> str:
        return encode_b64(self.to_binary())

    @classmethod
    def from_text(cls, text: str) -> "Envelope":
        """Parse the base64 text form; whitespace and missing padding are tolerated."""
        return cls.from_binary(decode_b64(text))

    def unwrap_as(self, kind_cls: type[T]) -> T:
        """Return the transaction if it is a ``kind_cls``.

        Raises:
            ValidationError: If the envelope carries another kind.
        """
        if not isinstance(self.txn, kind_cls):
            raise ValidationError(
                f"Wrong transaction kind: expected {kind_cls.__name__}, "
                f"got {type(self.txn).__name__}"
            )
        return self.txn
