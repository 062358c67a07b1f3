"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored. An unknown currency or
status is caught at the database level, not just in
Python validation. Values are persisted as their literal
names.
"""

import enum


class AccountStatus(str, enum.Enum):
    """Lifecycle of a customer account. CLOSED is terminal."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Currency(str, enum.Enum):
    RUB = "RUB"
    USD = "USD"
    EUR = "EUR"
    CNY = "CNY"


class TransactionType(str, enum.Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER = "TRANSFER"


class TransactionStatus(str, enum.Enum):
    """
    Outcome of a recorded operation.

    The ledger engine only ever writes COMPLETED: a failed
    operation is rolled back and leaves no record. PENDING
    and FAILED stay in the enum so existing rows and the
    database constraint remain valid.
    """
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
