"""
Client model.

Represents an account holder. A client can own multiple
accounts. The ledger core only reads clients to verify
account ownership; client data is managed elsewhere.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bank_ledger.models.base import Base


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False
    )
    tax_id: Mapped[str] = mapped_column(
        String(12), unique=True, nullable=False
    )
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    document_scan: Mapped[bytes | None] = mapped_column(
        LargeBinary, nullable=True, default=None
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    accounts: Mapped[list["Account"]] = relationship(back_populates="client")

    def __repr__(self) -> str:
        return f"<Client {self.id} {self.full_name}>"
