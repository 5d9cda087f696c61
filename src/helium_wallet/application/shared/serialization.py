from __future__ import annotations

from ...domain.transactions import TxnBase
from .wire import encode_txn


def signing_bytes(txn: TxnBase) -> bytes:
    """Canonical bytes for signing/verifying a transaction.

    Every signature slot is cleared before encoding, so the result depends only
    on the transaction's other fields and each role signs the same message.
    """

    return encode_txn(txn.without_signatures())
