"""Deciding who pays the fee for a transaction, and whether we may submit it.

A transaction can be submitted from here only when this wallet is (or may
act as) the payer. When the staking service or any other party pays, the
owner-signed envelope is handed over and that party finishes the job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ...crypto.keypair import PubKeyBin

STAKING_PAYER = "staking"


class PayerSource(str, Enum):
    WALLET = "wallet"
    UNRESOLVED = "unresolved"
    STAKING = "staking"
    THIRD_PARTY = "third_party"


@dataclass(frozen=True)
class ResolvedPayer:
    source: PayerSource
    address: Optional[PubKeyBin]

    @property
    def locally_submittable(self) -> bool:
        # An empty payer field is submitted as self-pay.
        return self.source in (PayerSource.WALLET, PayerSource.UNRESOLVED)

    def to_bytes(self) -> bytes:
        return self.address.to_bytes() if self.address is not None else b""


def resolve_payer(
    payer_arg: Optional[str],
    wallet: PubKeyBin,
    staking_address: Callable[[], PubKeyBin],
) -> ResolvedPayer:
    """Resolve a ``--payer`` argument.

    Args:
        payer_arg: ``None`` for self-pay, ``"staking"`` for the staking
            service, or a base58 address.
        wallet: This wallet's identifier.
        staking_address: Lookup for the staking service address; only called
            when ``payer_arg`` asks for it.

    Raises:
        EncodingError: If ``payer_arg`` is neither ``"staking"`` nor a valid address.
    """
    if payer_arg is None or not payer_arg.strip():
        return ResolvedPayer(PayerSource.WALLET, wallet)

    arg = payer_arg.strip()
    if arg == STAKING_PAYER:
        address = staking_address()
        if address == wallet:
            return ResolvedPayer(PayerSource.WALLET, wallet)
        return ResolvedPayer(PayerSource.STAKING, address)

    address = PubKeyBin.from_b58(arg)
    if address == wallet:
        return ResolvedPayer(PayerSource.WALLET, wallet)
    return ResolvedPayer(PayerSource.THIRD_PARTY, address)


def classify_payer(
    payer: bytes,
    wallet: PubKeyBin,
    staking: Optional[PubKeyBin] = None,
) -> ResolvedPayer:
    """Classify the payer field of an already built transaction."""
    if not payer:
        return ResolvedPayer(PayerSource.UNRESOLVED, None)
    address = PubKeyBin.from_bytes(payer)
    if address == wallet:
        return ResolvedPayer(PayerSource.WALLET, address)
    if staking is not None and address == staking:
        return ResolvedPayer(PayerSource.STAKING, address)
    return ResolvedPayer(PayerSource.THIRD_PARTY, address)
