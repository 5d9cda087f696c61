"""Build, sign and submit Helium ledger transactions."""

__version__ = "1.3.11.dev0"
