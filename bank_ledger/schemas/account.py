"""
Pydantic schemas for account results.

Services build these from ORM objects inside the unit of
work, so callers get plain values that stay valid after
the session is closed.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from bank_ledger.models.enums import AccountStatus, Currency


class AccountResponse(BaseModel):
    id: int
    account_number: str
    balance: Decimal
    status: AccountStatus
    bank_code: str
    currency: Currency
    client_id: int
    created_at: datetime
    updated_at: datetime
    closed_at: datetime | None

    model_config = {"from_attributes": True}


class AccountPage(BaseModel):
    """One page of accounts plus the total count across all pages."""
    items: list[AccountResponse]
    total: int
