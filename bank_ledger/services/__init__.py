"""Business logic services."""

from bank_ledger.services.account_lifecycle import AccountLifecycleManager
from bank_ledger.services.ledger_engine import LedgerEngine

__all__ = ["AccountLifecycleManager", "LedgerEngine"]
