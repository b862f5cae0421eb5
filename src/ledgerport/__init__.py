"""Ledgerport: import bank CSV exports into a local ledger."""

__version__ = "0.1.0"
