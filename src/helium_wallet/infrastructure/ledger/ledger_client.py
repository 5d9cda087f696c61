from __future__ import annotations

import logging
from typing import Any, Optional, Type
from types import TracebackType

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...application.shared.envelope import Envelope
from ...application.wallet.dtos import AccountDTO, SubmissionStatusDTO
from ...domain.errors import NetworkError
from ..http.http_client import HttpClient

logger = logging.getLogger(__name__)


def parse_data(resp: httpx.Response, model: type[BaseModel]) -> Any:
    """Validate the ``data`` member of a ``{"data": ...}`` API response."""
    try:
        body = resp.json()
        return model.model_validate(body["data"])
    except (ValueError, KeyError, TypeError, PydanticValidationError) as e:
        raise NetworkError(f"Unexpected response from {resp.url}: {e}") from e


class LedgerClient:
    """Synchronous client for the ledger HTTP API.

    Methods are intentionally bound to the wallet application DTOs.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._http = HttpClient(base_url, timeout=timeout, transport=transport)

    def get_account(self, address: str) -> AccountDTO:
        resp = self._http.get(f"/accounts/{address}")
        return parse_data(resp, AccountDTO)

    def submit_txn(self, envelope: Envelope) -> SubmissionStatusDTO:
        resp = self._http.post(
            "/pending_transactions", json={"txn": envelope.to_text()}
        )
        status = parse_data(resp, SubmissionStatusDTO)
        logger.info("Submitted %s transaction %s", envelope.kind, status.hash)
        return status

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "LedgerClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
