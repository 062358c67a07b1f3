"""
Tests for the pure validation rules.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from bank_ledger.exceptions import (
    AccountClosedError,
    CurrencyMismatchError,
    ErrorKind,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidFormatError,
    SelfTransferNotAllowedError,
)
from bank_ledger.models.enums import AccountStatus, Currency
from bank_ledger.services import validation


def fake_account(account_id=1, balance="0.00", currency=Currency.RUB,
                 status=AccountStatus.OPEN):
    return SimpleNamespace(
        id=account_id,
        balance=Decimal(balance),
        currency=currency,
        status=status,
        is_open=status == AccountStatus.OPEN,
    )


class TestAccountNumber:

    def test_twenty_digits_accepted(self):
        assert validation.validate_account_number("00000000000000000001") == (
            "00000000000000000001"
        )

    @pytest.mark.parametrize("value", [
        None,
        "",
        "0000000000000000001",     # 19 digits
        "000000000000000000011",   # 21 digits
        "0000000000000000000a",
        " 0000000000000000001",
        "00000000000000000001\n",
        12345678901234567890,
    ])
    def test_malformed_rejected(self, value):
        with pytest.raises(InvalidFormatError) as exc_info:
            validation.validate_account_number(value)
        assert exc_info.value.kind == ErrorKind.INVALID_FORMAT
        assert exc_info.value.context["field"] == "account number"


class TestBankCode:

    def test_reserved_prefix_accepted(self):
        assert validation.validate_bank_code("040000001") == "040000001"

    @pytest.mark.parametrize("value", [
        None, "", "140000001", "04000001", "0400000012", "04000000x", 40000001,
    ])
    def test_malformed_rejected(self, value):
        with pytest.raises(InvalidFormatError, match="bank code"):
            validation.validate_bank_code(value)


class TestCurrency:

    def test_enum_passes_through(self):
        assert validation.validate_currency(Currency.USD) is Currency.USD

    def test_code_parsed(self):
        assert validation.validate_currency("RUB") is Currency.RUB

    @pytest.mark.parametrize("value", [None, "", "rub", "XXX"])
    def test_unknown_code_rejected(self, value):
        with pytest.raises(InvalidFormatError, match="currency"):
            validation.validate_currency(value)


class TestAmount:

    @pytest.mark.parametrize("value, expected", [
        (Decimal("100.00"), Decimal("100.00")),
        (Decimal("0.01"), Decimal("0.01")),
        ("40", Decimal("40.00")),
        (5, Decimal("5.00")),
        (Decimal("1.500"), Decimal("1.50")),
    ])
    def test_valid_amounts_normalized(self, value, expected):
        result = validation.validate_amount(value)
        assert result == expected
        assert result.as_tuple().exponent == -2

    @pytest.mark.parametrize("value", [
        None,
        0,
        Decimal("0.00"),
        Decimal("-1.00"),
        "-0.01",
        "abc",
        Decimal("NaN"),
        Decimal("Infinity"),
        True,
    ])
    def test_invalid_amounts_rejected(self, value):
        with pytest.raises(InvalidAmountError) as exc_info:
            validation.validate_amount(value)
        assert exc_info.value.kind == ErrorKind.INVALID_AMOUNT

    def test_sub_cent_amount_not_rounded(self):
        with pytest.raises(InvalidAmountError, match="two fractional digits"):
            validation.validate_amount(Decimal("10.005"))

    def test_amount_above_column_capacity_rejected(self):
        with pytest.raises(InvalidAmountError, match="exceeds"):
            validation.validate_amount(Decimal("10000000000000.00"))


class TestAccountRules:

    def test_open_account_passes(self):
        validation.check_account_open(fake_account())

    def test_closed_account_rejected(self):
        with pytest.raises(AccountClosedError) as exc_info:
            validation.check_account_open(
                fake_account(account_id=7, status=AccountStatus.CLOSED)
            )
        assert exc_info.value.context == {"account_id": 7}

    def test_self_transfer_rejected(self):
        with pytest.raises(SelfTransferNotAllowedError):
            validation.check_not_self_transfer(3, 3)

    def test_distinct_accounts_pass(self):
        validation.check_not_self_transfer(3, 4)

    def test_currency_mismatch_rejected(self):
        with pytest.raises(CurrencyMismatchError) as exc_info:
            validation.check_currency_match(
                fake_account(1, currency=Currency.RUB),
                fake_account(2, currency=Currency.USD),
            )
        assert exc_info.value.context["source_currency"] == "RUB"
        assert exc_info.value.context["destination_currency"] == "USD"

    def test_exact_balance_is_sufficient(self):
        validation.check_sufficient_funds(
            fake_account(balance="50.00"), Decimal("50.00")
        )

    def test_insufficient_funds_rejected(self):
        with pytest.raises(InsufficientFundsError) as exc_info:
            validation.check_sufficient_funds(
                fake_account(balance="49.99"), Decimal("50.00")
            )
        assert exc_info.value.context["available"] == Decimal("49.99")

    def test_credit_up_to_capacity_allowed(self):
        validation.check_balance_capacity(
            fake_account(balance="9999999999999.98"), Decimal("0.01")
        )

    def test_credit_past_capacity_rejected(self):
        with pytest.raises(InvalidAmountError, match="would exceed") as exc_info:
            validation.check_balance_capacity(
                fake_account(balance="9999999999999.99"), Decimal("0.01")
            )
        assert exc_info.value.kind == ErrorKind.INVALID_AMOUNT


class TestPage:

    def test_negative_offset_rejected(self):
        with pytest.raises(ValueError):
            validation.validate_page(-1, 10)

    def test_zero_limit_rejected(self):
        with pytest.raises(ValueError):
            validation.validate_page(0, 0)
