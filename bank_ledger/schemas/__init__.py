"""Result schemas returned to callers."""

from bank_ledger.schemas.account import AccountResponse, AccountPage
from bank_ledger.schemas.transaction import (
    TransactionRecordResponse,
    TransactionPage,
)

__all__ = [
    "AccountResponse",
    "AccountPage",
    "TransactionRecordResponse",
    "TransactionPage",
]
