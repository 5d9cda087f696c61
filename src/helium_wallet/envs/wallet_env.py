from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, field_validator

from ..crypto.keypair import Keypair
from ..domain.errors import SigningError

DEFAULT_API_URL = "https://api.helium.io/v1"
DEFAULT_STAKING_URL = "https://onboarding.dewi.org/api/v2"


def _validate_base_url(name: str, v: str) -> str:
    if not v:
        raise ValueError(f"{name} cannot be empty")
    parsed = urlparse(v)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"{name} must start with http:// or https://")
    if not parsed.netloc:
        raise ValueError(f"{name} must include a host")
    return v.rstrip("/")


class Settings(BaseModel):
    """Wallet settings, built once at startup and passed to the clients."""

    wallet_private_key_pem: Optional[str] = None
    api_base_url: str = DEFAULT_API_URL
    staking_base_url: str = DEFAULT_STAKING_URL
    http_timeout: float = 10.0
    log_level: str = "WARNING"

    @field_validator("wallet_private_key_pem")
    @classmethod
    def validate_wallet_private_key_pem(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the wallet key, when given, is a usable Ed25519 PEM."""
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Wallet private key cannot be empty")
        try:
            Keypair.from_pem(v).close()
        except SigningError as e:
            raise ValueError(f"Invalid wallet private key PEM: {e}") from e
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        return _validate_base_url("API base URL", v)

    @field_validator("staking_base_url")
    @classmethod
    def validate_staking_base_url(cls, v: str) -> str:
        return _validate_base_url("Staking base URL", v)

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def load_keypair(self) -> Keypair:
        if self.wallet_private_key_pem is None:
            raise SigningError("WALLET_PRIVATE_KEY_PEM is required for this command")
        return Keypair.from_pem(self.wallet_private_key_pem)


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        wallet_private_key_pem=os.environ.get("WALLET_PRIVATE_KEY_PEM") or None,
        api_base_url=os.environ.get("HELIUM_API_URL", DEFAULT_API_URL),
        staking_base_url=os.environ.get("HELIUM_STAKING_URL", DEFAULT_STAKING_URL),
        http_timeout=float(os.environ.get("HTTP_TIMEOUT", "10.0")),
        log_level=os.environ.get("LOG_LEVEL", "WARNING"),
    )
