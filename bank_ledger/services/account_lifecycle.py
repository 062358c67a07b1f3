"""
Account lifecycle manager — open, re-identify, and close accounts.

Handles every non-monetary change to an account. Balances are
never touched here; that is the LedgerEngine's job. Changes to
an existing account run under the same row lock the engine
uses, so a close cannot interleave with a deposit.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from bank_ledger.exceptions import (
    AccountClosedError,
    CurrencyChangeOnNonZeroBalanceError,
    DuplicateAccountNumberError,
    NonZeroBalanceOnCloseError,
)
from bank_ledger.logging_config import get_logger
from bank_ledger.models.account import Account
from bank_ledger.models.base import get_session_factory
from bank_ledger.models.enums import AccountStatus, Currency
from bank_ledger.schemas.account import AccountPage, AccountResponse
from bank_ledger.services import validation
from bank_ledger.stores.account_store import AccountStore
from bank_ledger.stores.client_store import ClientStore
from bank_ledger.unit_of_work import unit_of_work

logger = get_logger(__name__)


class AccountLifecycleManager:

    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory or get_session_factory()

    def open_account(
        self,
        account_number: str,
        bank_code: str,
        currency: Currency | str,
        client_id: int,
    ) -> AccountResponse:
        """
        Open a new account with a zero balance in OPEN status.

        Raises InvalidFormatError, NotFoundError (client),
        DuplicateAccountNumberError.
        """
        validation.validate_account_number(account_number)
        validation.validate_bank_code(bank_code)
        currency = validation.validate_currency(currency)

        with unit_of_work(self.session_factory, "open account") as session:
            ClientStore(session).get(client_id)
            accounts = AccountStore(session)

            if accounts.number_exists(account_number):
                raise DuplicateAccountNumberError(account_number)

            account = Account(
                account_number=account_number,
                bank_code=bank_code,
                currency=currency,
                client_id=client_id,
                balance=Decimal("0.00"),
                status=AccountStatus.OPEN,
            )
            try:
                accounts.save(account)
            except IntegrityError:
                # Another caller inserted the same number after our check
                raise DuplicateAccountNumberError(account_number)
            result = AccountResponse.model_validate(account)

        logger.info(
            "Account opened: id=%s, number=%s, client=%s",
            result.id, account_number, client_id,
        )
        return result

    def update_account_identity(
        self,
        account_id: int,
        account_number: str,
        bank_code: str,
        currency: Currency | str,
        client_id: int,
    ) -> AccountResponse:
        """
        Replace the number, bank code, currency, and owner of an account.

        The currency may only change while the balance is zero.
        A closed account cannot be changed at all.

        Raises NotFoundError, AccountClosedError,
        CurrencyChangeOnNonZeroBalanceError, InvalidFormatError,
        DuplicateAccountNumberError.
        """
        validation.validate_account_number(account_number)
        validation.validate_bank_code(bank_code)
        currency = validation.validate_currency(currency)

        with unit_of_work(self.session_factory, "update account") as session:
            accounts = AccountStore(session)
            account = accounts.get_for_update(account_id)
            validation.check_account_open(account)

            if account.balance != 0 and account.currency != currency:
                raise CurrencyChangeOnNonZeroBalanceError(
                    account.id, account.currency.value, currency.value
                )

            if account.account_number != account_number:
                if accounts.number_exists(account_number, exclude_id=account.id):
                    raise DuplicateAccountNumberError(account_number)
                account.account_number = account_number

            if account.client_id != client_id:
                ClientStore(session).get(client_id)
                account.client_id = client_id

            account.bank_code = bank_code
            account.currency = currency

            try:
                accounts.save(account)
            except IntegrityError:
                raise DuplicateAccountNumberError(account_number)
            result = AccountResponse.model_validate(account)

        logger.info(
            "Account updated: id=%s, number=%s", account_id, account_number
        )
        return result

    def close_account(self, account_id: int) -> AccountResponse:
        """
        Close an account. Only an OPEN account with a zero balance
        can be closed, and closing is permanent.

        Raises NotFoundError, AccountClosedError,
        NonZeroBalanceOnCloseError.
        """
        with unit_of_work(self.session_factory, "close account") as session:
            accounts = AccountStore(session)
            account = accounts.get_for_update(account_id)
            if not account.can_transition_to(AccountStatus.CLOSED):
                raise AccountClosedError(account.id)

            if account.balance != 0:
                raise NonZeroBalanceOnCloseError(account.id, account.balance)

            account.status = AccountStatus.CLOSED
            account.closed_at = datetime.utcnow()
            accounts.save(account)
            result = AccountResponse.model_validate(account)

        logger.info("Account %s closed", result.account_number)
        return result

    def get_account(self, account_id: int) -> AccountResponse:
        with unit_of_work(
            self.session_factory, "get account", read_only=True
        ) as session:
            return AccountResponse.model_validate(
                AccountStore(session).get(account_id)
            )

    def find_account_by_number(self, account_number: str) -> AccountResponse:
        """Raises NotFoundError if no account has this number."""
        with unit_of_work(
            self.session_factory, "find account", read_only=True
        ) as session:
            return AccountResponse.model_validate(
                AccountStore(session).get_by_number(account_number)
            )

    def list_accounts(self, offset: int, limit: int) -> AccountPage:
        """Return one page of accounts (ordered by id) and the total count."""
        validation.validate_page(offset, limit)
        with unit_of_work(
            self.session_factory, "list accounts", read_only=True
        ) as session:
            accounts = AccountStore(session)
            return AccountPage(
                items=[
                    AccountResponse.model_validate(a)
                    for a in accounts.page(offset, limit)
                ],
                total=accounts.count_all(),
            )
