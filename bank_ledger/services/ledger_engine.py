"""
Ledger engine — deposits, withdrawals, and transfers.

This is the only code that changes an account balance.
Each operation:
1. Validates its arguments (before touching the database)
2. Opens a unit of work
3. Locks the affected accounts (ascending id order)
4. Validates business rules against the locked rows
5. Mutates the balances
6. Appends exactly one COMPLETED transaction record
7. Commits

If anything fails, the unit of work rolls back and the same
error reaches the caller. No record is written for a failed
operation and no balance change survives it.
"""

from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from bank_ledger.logging_config import get_logger
from bank_ledger.models.base import get_session_factory
from bank_ledger.models.enums import TransactionStatus, TransactionType
from bank_ledger.models.transaction_record import TransactionRecord
from bank_ledger.schemas.transaction import (
    TransactionPage,
    TransactionRecordResponse,
)
from bank_ledger.services import validation
from bank_ledger.stores.account_store import AccountStore
from bank_ledger.stores.transaction_store import TransactionStore
from bank_ledger.unit_of_work import unit_of_work

logger = get_logger(__name__)


class LedgerEngine:
    """
    All balance-changing operations pass through this engine.

    The engine owns the transaction boundary: every public
    method runs in its own unit of work. Callers pass plain
    values and get back a result schema or a typed error.
    """

    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory or get_session_factory()

    def deposit(self, account_id: int, amount) -> TransactionRecordResponse:
        """
        Add money to an account.

        Raises InvalidAmountError, NotFoundError, AccountClosedError.
        InvalidAmountError is also raised when the new balance would
        not fit the balance column.
        """
        amount = validation.validate_amount(amount)

        with unit_of_work(self.session_factory, "deposit") as session:
            account = AccountStore(session).get_for_update(account_id)
            validation.check_account_open(account)
            validation.check_balance_capacity(account, amount)

            account.balance += amount

            record = self._append(
                session,
                TransactionType.DEPOSIT,
                amount,
                destination_account_id=account.id,
            )
            result = TransactionRecordResponse.model_validate(record)

        logger.info("Deposit to account %s: +%s", account_id, amount)
        return result

    def withdraw(self, account_id: int, amount) -> TransactionRecordResponse:
        """
        Take money out of an account.

        Raises InvalidAmountError, NotFoundError, AccountClosedError,
        InsufficientFundsError.
        """
        amount = validation.validate_amount(amount)

        with unit_of_work(self.session_factory, "withdraw") as session:
            account = AccountStore(session).get_for_update(account_id)
            validation.check_account_open(account)
            validation.check_sufficient_funds(account, amount)

            account.balance -= amount

            record = self._append(
                session,
                TransactionType.WITHDRAWAL,
                amount,
                source_account_id=account.id,
            )
            result = TransactionRecordResponse.model_validate(record)

        logger.info("Withdrawal from account %s: -%s", account_id, amount)
        return result

    def transfer(
        self, from_account_id: int, to_account_id: int, amount
    ) -> TransactionRecordResponse:
        """
        Move money between two accounts of the same currency.

        Both rows are locked in ascending id order regardless of
        the transfer direction, so A->B and B->A running at the
        same time queue behind each other instead of deadlocking.

        Raises InvalidAmountError, SelfTransferNotAllowedError,
        NotFoundError, AccountClosedError, CurrencyMismatchError,
        InsufficientFundsError.
        """
        amount = validation.validate_amount(amount)
        validation.check_not_self_transfer(from_account_id, to_account_id)

        with unit_of_work(self.session_factory, "transfer") as session:
            locked = AccountStore(session).get_many_for_update(
                [from_account_id, to_account_id]
            )
            source = locked[from_account_id]
            destination = locked[to_account_id]

            validation.check_account_open(source)
            validation.check_account_open(destination)
            validation.check_currency_match(source, destination)
            validation.check_sufficient_funds(source, amount)
            validation.check_balance_capacity(destination, amount)

            source.balance -= amount
            destination.balance += amount
            logger.debug(
                "Balances updated: account %s -> %s, account %s -> %s",
                source.id, source.balance, destination.id, destination.balance,
            )

            record = self._append(
                session,
                TransactionType.TRANSFER,
                amount,
                source_account_id=source.id,
                destination_account_id=destination.id,
            )
            result = TransactionRecordResponse.model_validate(record)

        logger.info(
            "Transfer %s from account %s to account %s",
            amount, from_account_id, to_account_id,
        )
        return result

    def list_transactions(self, offset: int, limit: int) -> TransactionPage:
        """
        Return one page of transaction records and the total count.

        Unlocked read: it may observe a concurrently committing
        operation and is not used to make ledger decisions.
        """
        validation.validate_page(offset, limit)
        with unit_of_work(
            self.session_factory, "list transactions", read_only=True
        ) as session:
            store = TransactionStore(session)
            return TransactionPage(
                items=[
                    TransactionRecordResponse.model_validate(r)
                    for r in store.page(offset, limit)
                ],
                total=store.count_all(),
            )

    def account_statement(self, account_id: int) -> list[TransactionRecordResponse]:
        """Return every record touching an account, newest first."""
        with unit_of_work(
            self.session_factory, "account statement", read_only=True
        ) as session:
            AccountStore(session).get(account_id)
            return [
                TransactionRecordResponse.model_validate(r)
                for r in TransactionStore(session).for_account(account_id)
            ]

    def _append(
        self,
        session,
        transaction_type: TransactionType,
        amount: Decimal,
        source_account_id: int | None = None,
        destination_account_id: int | None = None,
    ) -> TransactionRecord:
        """Append the COMPLETED record for a successful operation."""
        record = TransactionStore(session).append(TransactionRecord(
            amount=amount,
            transaction_type=transaction_type,
            status=TransactionStatus.COMPLETED,
            source_account_id=source_account_id,
            destination_account_id=destination_account_id,
        ))
        logger.debug(
            "Record %s appended: %s %s (source=%s, destination=%s)",
            record.id, transaction_type.value, amount,
            source_account_id, destination_account_id,
        )
        return record

