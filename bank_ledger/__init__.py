"""
Bank Ledger — account ledger engine for a banking back office.

Entry points are the two services:
- AccountLifecycleManager: open, update, close, find, list accounts
- LedgerEngine: deposit, withdraw, transfer, list transactions
"""

__version__ = "0.1.0"
