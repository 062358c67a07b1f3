"""
Customer account model.

The account stores its balance directly. The balance is only
ever changed by the LedgerEngine, inside a unit of work that
holds the row lock and appends a TransactionRecord.

The account has a two-state lifecycle: OPEN -> CLOSED.
CLOSED is terminal.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Numeric, ForeignKey, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bank_ledger.models.base import Base
from bank_ledger.models.enums import AccountStatus, Currency


# Valid state transitions — the source of truth for the state machine
VALID_TRANSITIONS: dict[AccountStatus, set[AccountStatus]] = {
    AccountStatus.OPEN: {AccountStatus.CLOSED},
    AccountStatus.CLOSED: set(),  # Terminal state — no transitions out
}


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    account_number: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False, index=True
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False, default=Decimal("0.00")
    )
    status: Mapped[AccountStatus] = mapped_column(
        SAEnum(
            AccountStatus,
            name="account_status_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=AccountStatus.OPEN,
    )
    bank_code: Mapped[str] = mapped_column(String(9), nullable=False)
    currency: Mapped[Currency] = mapped_column(
        SAEnum(Currency, name="currency_enum", create_constraint=True),
        nullable=False,
    )
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )
    closed_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )

    client: Mapped["Client"] = relationship(back_populates="accounts")

    @property
    def is_open(self) -> bool:
        return self.status == AccountStatus.OPEN

    def can_transition_to(self, new_status: AccountStatus) -> bool:
        """Check if a state transition is valid."""
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    def __repr__(self) -> str:
        return (
            f"<Account {self.account_number} "
            f"{self.balance} {self.currency.value} ({self.status.value})>"
        )
