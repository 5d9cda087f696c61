"""Role-based Ed25519 signing of ledger transactions."""

from __future__ import annotations

from typing import TypeVar

from cryptography.exceptions import InvalidSignature

from ..application.shared.serialization import signing_bytes
from ..domain.errors import EncodingError, SigningError
from ..domain.transactions import SignerRole, TxnBase
from .keypair import Keypair, PubKeyBin

T = TypeVar("T", bound=TxnBase)


def sign_txn(keypair: Keypair, txn: T, role: SignerRole = SignerRole.OWNER) -> T:
    """Return a copy of ``txn`` with ``role``'s signature slot filled.

    Signatures already present on ``txn`` are ignored when computing the
    message, so roles can sign in any order.

    Raises:
        SigningError: If the kind has no such role, the key is unusable or the
            transaction cannot be encoded.
    """
    # Fails early for roles the kind does not have.
    txn.signature_for(role)
    try:
        message = signing_bytes(txn)
    except EncodingError as e:
        raise SigningError(f"Cannot encode transaction for signing: {e}") from e
    signature = keypair.sign(message)
    return txn.with_signature(role, signature)


def verify_txn_signature(
    signer: PubKeyBin, txn: TxnBase, role: SignerRole = SignerRole.OWNER
) -> bool:
    """Check ``role``'s signature against ``signer``. Raises InvalidSignature on failure."""
    signature = txn.signature_for(role)
    if not signature:
        raise InvalidSignature(f"No {role.value} signature present")
    signer.to_public_key().verify(signature, signing_bytes(txn))
    return True
