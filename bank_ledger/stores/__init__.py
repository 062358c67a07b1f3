"""Storage access layer."""

from bank_ledger.stores.account_store import AccountStore
from bank_ledger.stores.client_store import ClientStore
from bank_ledger.stores.transaction_store import TransactionStore

__all__ = ["AccountStore", "ClientStore", "TransactionStore"]
