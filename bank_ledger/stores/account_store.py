"""
Account store — keyed access to accounts with row locking.

The store takes a session as a constructor argument. The
caller's unit of work owns the transaction boundary, so a
lock taken here is held until that unit of work commits or
rolls back.
"""

from collections.abc import Iterable

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from bank_ledger.exceptions import NotFoundError
from bank_ledger.models.account import Account


class AccountStore:

    def __init__(self, db: Session):
        self.db = db

    def get(self, account_id: int) -> Account:
        """Load an account without locking it."""
        account = self.db.get(Account, account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def get_for_update(self, account_id: int) -> Account:
        """
        Load an account and take an exclusive lock on its row.

        populate_existing makes sure the values come from the
        locked read, not from an earlier unlocked load cached
        in the session's identity map.
        """
        account = self.db.execute(
            select(Account)
            .where(Account.id == account_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def get_many_for_update(self, account_ids: Iterable[int]) -> dict[int, Account]:
        """
        Lock several accounts in ascending id order.

        Every caller that locks more than one account goes
        through here, so two concurrent operations on the same
        pair of accounts always request the locks in the same
        order and cannot wait on each other in a cycle.
        """
        return {
            account_id: self.get_for_update(account_id)
            for account_id in sorted(set(account_ids))
        }

    def get_by_number(self, account_number: str) -> Account:
        account = self.db.execute(
            select(Account).where(Account.account_number == account_number)
        ).scalar_one_or_none()

        if not account:
            raise NotFoundError("Account", account_number)
        return account

    def number_exists(
        self, account_number: str, exclude_id: int | None = None
    ) -> bool:
        """Check whether an account number is taken, optionally ignoring one account."""
        query = select(func.count(Account.id)).where(
            Account.account_number == account_number
        )
        if exclude_id is not None:
            query = query.where(Account.id != exclude_id)
        return self.db.execute(query).scalar_one() > 0

    def save(self, account: Account) -> Account:
        self.db.add(account)
        self.db.flush()
        return account

    def count_all(self) -> int:
        return self.db.execute(select(func.count(Account.id))).scalar_one()

    def page(self, offset: int, limit: int) -> list[Account]:
        """Return one page of accounts ordered by id."""
        accounts = self.db.execute(
            select(Account)
            .order_by(Account.id)
            .offset(offset)
            .limit(limit)
        ).scalars().all()
        return list(accounts)
