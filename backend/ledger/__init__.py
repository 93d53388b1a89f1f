"""Ledger - personal finance tracker (API, client and terminal UI)."""

__version__ = "0.1.0"
