"""Shared helpers for transaction commands."""

from __future__ import annotations

from typing import Optional

from ....domain.shared.ledger_client_protocol import LedgerClientProtocol
from ...shared.envelope import Envelope
from ..dtos import SubmissionStatusDTO, TxnResultDTO


def finalize(
    ledger: LedgerClientProtocol,
    envelope: Envelope,
    *,
    commit: bool,
    submittable: bool = True,
) -> TxnResultDTO:
    """Submit the envelope when asked to and allowed to, and describe the result.

    Envelopes that are not locally submittable are never sent, even with
    ``commit``; the party holding the missing signature submits them.
    """
    status: Optional[SubmissionStatusDTO] = None
    if commit and submittable:
        status = ledger.submit_txn(envelope)
    return TxnResultDTO.from_envelope(envelope, submittable=submittable, status=status)
