"""
Tests for the unit of work and storage-fault handling.
"""

import logging
from decimal import Decimal

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError

from bank_ledger.exceptions import (
    BankingOperationError,
    ErrorKind,
    InsufficientFundsError,
    StorageError,
)
from bank_ledger.models import Base, Client
from bank_ledger.models.base import READ_ONLY_OPTION
from bank_ledger.unit_of_work import unit_of_work


def add_client(session, n=1):
    session.add(Client(
        full_name="Test Client",
        phone_number=f"+7999000{n:04d}",
        tax_id=f"{n:012d}",
        address="Kazan",
    ))
    session.flush()


def client_count(session_factory):
    with unit_of_work(session_factory, "count") as session:
        return session.execute(select(func.count(Client.id))).scalar_one()


class TestUnitOfWork:

    def test_commits_on_success(self, session_factory):
        with unit_of_work(session_factory, "test") as session:
            add_client(session)

        assert client_count(session_factory) == 1

    def test_rolls_back_business_error(self, session_factory):
        with pytest.raises(InsufficientFundsError):
            with unit_of_work(session_factory, "test") as session:
                add_client(session)
                raise InsufficientFundsError(1, Decimal("0"), Decimal("1"))

        assert client_count(session_factory) == 0

    def test_rolls_back_unexpected_error(self, session_factory):
        with pytest.raises(KeyError):
            with unit_of_work(session_factory, "test") as session:
                add_client(session)
                raise KeyError("boom")

        assert client_count(session_factory) == 0

    def test_read_only_marks_connection(self, session_factory):
        with unit_of_work(session_factory, "read", read_only=True) as session:
            options = session.connection().get_execution_options()
            assert options.get(READ_ONLY_OPTION) is True

        with unit_of_work(session_factory, "write") as session:
            options = session.connection().get_execution_options()
            assert not options.get(READ_ONLY_OPTION)

    def test_database_error_becomes_storage_error(self, session_factory):
        with pytest.raises(StorageError) as exc_info:
            with unit_of_work(session_factory, "test") as session:
                add_client(session, n=1)
                add_client(session, n=1)  # violates unique phone/tax id

        error = exc_info.value
        assert error.kind == ErrorKind.STORAGE
        assert error.context == {"operation": "test"}
        assert not isinstance(error, BankingOperationError)
        assert error.__cause__ is not None
        assert client_count(session_factory) == 0

    def test_business_rejection_logged_as_warning(self, session_factory, caplog):
        with caplog.at_level(logging.WARNING, logger="bank_ledger"):
            with pytest.raises(InsufficientFundsError):
                with unit_of_work(session_factory, "withdraw"):
                    raise InsufficientFundsError(1, Decimal("0"), Decimal("1"))

        assert any(
            r.levelno == logging.WARNING and "withdraw rejected" in r.getMessage()
            for r in caplog.records
        )

    def test_storage_failure_logged_as_error(self, session_factory, caplog):
        with caplog.at_level(logging.ERROR, logger="bank_ledger"):
            with pytest.raises(StorageError):
                with unit_of_work(session_factory, "insert"):
                    raise OperationalError(
                        "SELECT 1", {}, Exception("connection lost")
                    )

        assert any(
            r.levelno == logging.ERROR and r.exc_info for r in caplog.records
        )


class TestStorageFaultsInLedger:

    def test_missing_table_surfaces_as_storage_error(
        self, engine, ledger, lifecycle, make_account
    ):
        account_id = make_account("10.00")
        Base.metadata.tables["transaction_records"].drop(bind=engine)

        with pytest.raises(StorageError):
            ledger.deposit(account_id, Decimal("5.00"))

        assert lifecycle.get_account(account_id).balance == Decimal("10.00")
