"""
Validation rules for ledger and lifecycle operations.

Pure functions: no session, no I/O. Each rule raises the
specific BankingOperationError for its failure, so the
caller gets a precise diagnostic instead of a boolean.
"""

import re
from decimal import Decimal, InvalidOperation

from bank_ledger.exceptions import (
    AccountClosedError,
    CurrencyMismatchError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidFormatError,
    SelfTransferNotAllowedError,
)
from bank_ledger.models.account import Account
from bank_ledger.models.enums import Currency


ACCOUNT_NUMBER_PATTERN = re.compile(r"^\d{20}$")
BANK_CODE_PATTERN = re.compile(r"^04\d{7}$")

CENT = Decimal("0.01")
# Largest value a Numeric(15, 2) column can hold
MAX_AMOUNT = Decimal("9999999999999.99")


def validate_account_number(account_number: str | None) -> str:
    if (
        not isinstance(account_number, str)
        or not ACCOUNT_NUMBER_PATTERN.fullmatch(account_number)
    ):
        raise InvalidFormatError("account number", account_number)
    return account_number


def validate_bank_code(bank_code: str | None) -> str:
    if (
        not isinstance(bank_code, str)
        or not BANK_CODE_PATTERN.fullmatch(bank_code)
    ):
        raise InvalidFormatError("bank code", bank_code)
    return bank_code


def validate_currency(currency: Currency | str | None) -> Currency:
    """Parse a currency code into the Currency enum."""
    if isinstance(currency, Currency):
        return currency
    try:
        return Currency(currency)
    except ValueError:
        raise InvalidFormatError("currency", currency)


def validate_amount(amount) -> Decimal:
    """
    Check a monetary amount and return it as a 2-place Decimal.

    Accepts Decimal, int, or a numeric string. Rejects None,
    zero, negatives, NaN/Infinity, values above MAX_AMOUNT,
    and values with more than two fractional digits. Amounts
    are never rounded: 10.005 is an error, not 10.00 or 10.01.
    """
    if amount is None or isinstance(amount, bool):
        raise InvalidAmountError(amount, "amount is required")

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        raise InvalidAmountError(amount, "not a number")

    if not value.is_finite():
        raise InvalidAmountError(amount, "amount must be finite")
    if value <= 0:
        raise InvalidAmountError(amount)
    if value > MAX_AMOUNT:
        raise InvalidAmountError(amount, f"amount exceeds {MAX_AMOUNT}")

    quantized = value.quantize(CENT)
    if quantized != value:
        raise InvalidAmountError(amount, "at most two fractional digits allowed")
    return quantized


def check_account_open(account: Account) -> None:
    if not account.is_open:
        raise AccountClosedError(account.id)


def check_not_self_transfer(from_account_id: int, to_account_id: int) -> None:
    if from_account_id == to_account_id:
        raise SelfTransferNotAllowedError(from_account_id)


def check_currency_match(source: Account, destination: Account) -> None:
    if source.currency != destination.currency:
        raise CurrencyMismatchError(
            source.currency.value, destination.currency.value
        )


def check_sufficient_funds(account: Account, amount: Decimal) -> None:
    if account.balance < amount:
        raise InsufficientFundsError(account.id, account.balance, amount)


def check_balance_capacity(account: Account, amount: Decimal) -> None:
    """Reject a credit that would push the balance past MAX_AMOUNT."""
    if account.balance + amount > MAX_AMOUNT:
        raise InvalidAmountError(
            amount, f"balance of account {account.id} would exceed {MAX_AMOUNT}"
        )


def validate_page(offset: int, limit: int) -> None:
    """Reject page bounds the caller should never send."""
    if offset < 0:
        raise ValueError(f"offset must not be negative, got {offset}")
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
