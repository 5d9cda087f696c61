"""Shared pytest fixtures for wallet tests."""

from __future__ import annotations

from typing import Iterator

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from helium_wallet.crypto.keypair import Keypair, PubKeyBin


@pytest.fixture
def wallet_keypair() -> Iterator[Keypair]:
    """Generate the wallet's own keypair for testing."""
    with Keypair.generate() as keypair:
        yield keypair


@pytest.fixture
def payer_keypair() -> Iterator[Keypair]:
    """Generate a third-party payer keypair for testing."""
    with Keypair.generate() as keypair:
        yield keypair


@pytest.fixture
def staking_address() -> PubKeyBin:
    """Address of the staking service acting as fee payer."""
    with Keypair.generate() as keypair:
        return keypair.pubkey_bin


@pytest.fixture
def payee_address() -> PubKeyBin:
    with Keypair.generate() as keypair:
        return keypair.pubkey_bin


@pytest.fixture
def wallet_private_key_pem() -> str:
    """An unencrypted PKCS#8 Ed25519 key as the settings would carry it."""
    private_key = Ed25519PrivateKey.generate()
    pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return pem.decode("utf-8")
