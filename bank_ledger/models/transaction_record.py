"""
Transaction record model.

One row per successful deposit, withdrawal, or transfer.
Records are append-only: once inserted they are never
modified or deleted. The only column the database may
touch afterwards is updated_at.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    DateTime, Numeric, ForeignKey, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bank_ledger.models.base import Base
from bank_ledger.models.enums import TransactionType, TransactionStatus


class TransactionRecord(Base):
    """
    Immutable ledger entry for one money movement.

    DEPOSIT has no source account, WITHDRAWAL has no
    destination account, TRANSFER has both.
    """

    __tablename__ = "transaction_records"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_records_amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    transaction_type: Mapped[TransactionType] = mapped_column(
        SAEnum(
            TransactionType,
            name="transaction_type_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    status: Mapped[TransactionStatus] = mapped_column(
        SAEnum(
            TransactionStatus,
            name="transaction_status_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=TransactionStatus.PENDING,
    )
    source_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True, index=True
    )
    destination_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    source_account: Mapped["Account | None"] = relationship(
        foreign_keys=[source_account_id]
    )
    destination_account: Mapped["Account | None"] = relationship(
        foreign_keys=[destination_account_id]
    )

    def __repr__(self) -> str:
        return (
            f"<TransactionRecord {self.transaction_type.value} "
            f"{self.amount} ({self.status.value})>"
        )
