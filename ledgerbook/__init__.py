"""Ledgerbook: double-entry bookkeeping and bank reconciliation."""

__version__ = "1.0.0"
