"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from bank_ledger.models.base import Base
from bank_ledger.models.enums import (
    AccountStatus,
    Currency,
    TransactionType,
    TransactionStatus,
)
from bank_ledger.models.client import Client
from bank_ledger.models.account import Account
from bank_ledger.models.transaction_record import TransactionRecord

__all__ = [
    "Base",
    "AccountStatus",
    "Currency",
    "TransactionType",
    "TransactionStatus",
    "Client",
    "Account",
    "TransactionRecord",
]
