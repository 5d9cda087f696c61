"""Test fixtures for in-memory client implementations."""

from .test_clients import TestLedgerClient, TestStakingClient

__all__ = ["TestLedgerClient", "TestStakingClient"]
