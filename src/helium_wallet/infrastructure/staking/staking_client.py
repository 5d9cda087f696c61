from __future__ import annotations

from typing import Optional, Type
from types import TracebackType

import httpx

from ...application.wallet.dtos import StakingAddressDTO
from ...crypto.keypair import PubKeyBin
from ...domain.errors import EncodingError, NetworkError
from ..http.http_client import HttpClient
from ..ledger.ledger_client import parse_data


class StakingClient:
    """Synchronous client for the staking service that can act as fee payer."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._http = HttpClient(base_url, timeout=timeout, transport=transport)

    def address(self) -> PubKeyBin:
        resp = self._http.get("/address")
        dto: StakingAddressDTO = parse_data(resp, StakingAddressDTO)
        try:
            return PubKeyBin.from_b58(dto.address)
        except EncodingError as e:
            raise NetworkError(f"Staking service returned an invalid address: {e}") from e

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "StakingClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
