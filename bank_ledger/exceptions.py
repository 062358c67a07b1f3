"""
Error taxonomy for the ledger core.

Every business-rule failure is a BankingOperationError carrying an
ErrorKind and the structured context of the rejected call (account
id, attempted value, ...). Callers can either catch a specific
subclass or switch on `error.kind`.

Infrastructure faults are StorageError. They share the BankLedgerError
root but are not BankingOperationErrors, so a caller can always tell
"the bank said no" apart from "the database is unavailable".
"""

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_ACCOUNT_NUMBER = "DUPLICATE_ACCOUNT_NUMBER"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    ACCOUNT_CLOSED = "ACCOUNT_CLOSED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    SELF_TRANSFER_NOT_ALLOWED = "SELF_TRANSFER_NOT_ALLOWED"
    NON_ZERO_BALANCE_ON_CLOSE = "NON_ZERO_BALANCE_ON_CLOSE"
    CURRENCY_CHANGE_ON_NON_ZERO_BALANCE = "CURRENCY_CHANGE_ON_NON_ZERO_BALANCE"
    STORAGE = "STORAGE"


class BankLedgerError(Exception):
    """Base exception for everything raised by bank_ledger."""

    kind: ErrorKind

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(message)


class BankingOperationError(BankLedgerError):
    """A recoverable business-rule failure visible to the caller."""


class NotFoundError(BankingOperationError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, key: Any):
        super().__init__(f"{entity} {key} not found", entity=entity, key=key)


class DuplicateAccountNumberError(BankingOperationError):
    kind = ErrorKind.DUPLICATE_ACCOUNT_NUMBER

    def __init__(self, account_number: str):
        super().__init__(
            f"Account number {account_number} is already in use",
            account_number=account_number,
        )


class InvalidFormatError(BankingOperationError):
    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, field: str, value: Any):
        super().__init__(
            f"Invalid {field}: {value!r}", field=field, value=value
        )


class InvalidAmountError(BankingOperationError):
    kind = ErrorKind.INVALID_AMOUNT

    def __init__(self, amount: Any, reason: str = "amount must be positive"):
        super().__init__(
            f"Invalid amount {amount!r}: {reason}", amount=amount
        )


class AccountClosedError(BankingOperationError):
    kind = ErrorKind.ACCOUNT_CLOSED

    def __init__(self, account_id: int):
        super().__init__(
            f"Account {account_id} is closed", account_id=account_id
        )


class InsufficientFundsError(BankingOperationError):
    kind = ErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, account_id: int, available, requested):
        super().__init__(
            f"Insufficient funds on account {account_id}: "
            f"available={available}, requested={requested}",
            account_id=account_id,
            available=available,
            requested=requested,
        )


class CurrencyMismatchError(BankingOperationError):
    kind = ErrorKind.CURRENCY_MISMATCH

    def __init__(self, source_currency, destination_currency):
        super().__init__(
            f"Currency mismatch: {source_currency} -> {destination_currency}",
            source_currency=source_currency,
            destination_currency=destination_currency,
        )


class SelfTransferNotAllowedError(BankingOperationError):
    kind = ErrorKind.SELF_TRANSFER_NOT_ALLOWED

    def __init__(self, account_id: int):
        super().__init__(
            f"Cannot transfer from account {account_id} to itself",
            account_id=account_id,
        )


class NonZeroBalanceOnCloseError(BankingOperationError):
    kind = ErrorKind.NON_ZERO_BALANCE_ON_CLOSE

    def __init__(self, account_id: int, balance):
        super().__init__(
            f"Cannot close account {account_id} with balance {balance}",
            account_id=account_id,
            balance=balance,
        )


class CurrencyChangeOnNonZeroBalanceError(BankingOperationError):
    kind = ErrorKind.CURRENCY_CHANGE_ON_NON_ZERO_BALANCE

    def __init__(self, account_id: int, current_currency, requested_currency):
        super().__init__(
            f"Cannot change currency of account {account_id} from "
            f"{current_currency} to {requested_currency} "
            f"while the balance is not zero",
            account_id=account_id,
            current_currency=current_currency,
            requested_currency=requested_currency,
        )


class StorageError(BankLedgerError):
    """The storage layer failed (connectivity, lock timeout, constraint)."""

    kind = ErrorKind.STORAGE

    def __init__(self, operation: str):
        super().__init__(
            f"Storage failure during {operation}", operation=operation
        )
