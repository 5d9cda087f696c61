from __future__ import annotations

from ....domain.shared.ledger_client_protocol import LedgerClientProtocol
from ..dtos import BalanceDTO


class BalanceService:
    """Looks up account balances, reported in HNT."""

    def __init__(self, ledger: LedgerClientProtocol) -> None:
        self.ledger = ledger

    def balances(self, addresses: list[str]) -> list[BalanceDTO]:
        return [
            BalanceDTO.from_account(self.ledger.get_account(address))
            for address in addresses
        ]
