"""
Pydantic schemas for transaction record results.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from bank_ledger.models.enums import TransactionType, TransactionStatus


class TransactionRecordResponse(BaseModel):
    id: int
    amount: Decimal
    transaction_type: TransactionType
    status: TransactionStatus
    source_account_id: int | None
    destination_account_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransactionPage(BaseModel):
    items: list[TransactionRecordResponse]
    total: int
