"""
Transaction ledger store.

Insert-only. A record, once appended, is part of the
audit trail and is never updated or deleted.
"""

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from bank_ledger.models.transaction_record import TransactionRecord


class TransactionStore:

    def __init__(self, db: Session):
        self.db = db

    def append(self, record: TransactionRecord) -> TransactionRecord:
        """Insert a record. Flushing assigns its id and timestamps."""
        self.db.add(record)
        self.db.flush()
        return record

    def count_all(self) -> int:
        return self.db.execute(
            select(func.count(TransactionRecord.id))
        ).scalar_one()

    def page(self, offset: int, limit: int) -> list[TransactionRecord]:
        """Return one page of records in insertion order."""
        records = self.db.execute(
            select(TransactionRecord)
            .order_by(TransactionRecord.id)
            .offset(offset)
            .limit(limit)
        ).scalars().all()
        return list(records)

    def for_account(self, account_id: int) -> list[TransactionRecord]:
        """Return every record touching an account, newest first."""
        records = self.db.execute(
            select(TransactionRecord)
            .where(or_(
                TransactionRecord.source_account_id == account_id,
                TransactionRecord.destination_account_id == account_id,
            ))
            .order_by(TransactionRecord.id.desc())
        ).scalars().all()
        return list(records)
