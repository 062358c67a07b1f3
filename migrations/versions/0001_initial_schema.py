"""Initial schema: clients, accounts, transaction_records

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


ACCOUNT_STATUS = sa.Enum(
    "OPEN", "CLOSED", name="account_status_enum", create_constraint=True
)
CURRENCY = sa.Enum(
    "RUB", "USD", "EUR", "CNY", name="currency_enum", create_constraint=True
)
TRANSACTION_TYPE = sa.Enum(
    "DEPOSIT", "WITHDRAWAL", "TRANSFER",
    name="transaction_type_enum", create_constraint=True,
)
TRANSACTION_STATUS = sa.Enum(
    "PENDING", "COMPLETED", "FAILED",
    name="transaction_status_enum", create_constraint=True,
)


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("phone_number", sa.String(20), nullable=False, unique=True),
        sa.Column("tax_id", sa.String(12), nullable=False, unique=True),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("document_scan", sa.LargeBinary(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("account_number", sa.String(20), nullable=False),
        sa.Column("balance", sa.Numeric(15, 2), nullable=False),
        sa.Column("status", ACCOUNT_STATUS, nullable=False),
        sa.Column("bank_code", sa.String(9), nullable=False),
        sa.Column("currency", CURRENCY, nullable=False),
        sa.Column(
            "client_id", sa.Integer(),
            sa.ForeignKey("clients.id"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("closed_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "balance >= 0", name="ck_accounts_balance_non_negative"
        ),
    )
    op.create_index(
        "ix_accounts_account_number", "accounts", ["account_number"], unique=True
    )
    op.create_index("ix_accounts_client_id", "accounts", ["client_id"])

    op.create_table(
        "transaction_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("amount", sa.Numeric(15, 2), nullable=False),
        sa.Column("transaction_type", TRANSACTION_TYPE, nullable=False),
        sa.Column("status", TRANSACTION_STATUS, nullable=False),
        sa.Column(
            "source_account_id", sa.Integer(),
            sa.ForeignKey("accounts.id"), nullable=True,
        ),
        sa.Column(
            "destination_account_id", sa.Integer(),
            sa.ForeignKey("accounts.id"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "amount > 0", name="ck_transaction_records_amount_positive"
        ),
    )
    op.create_index(
        "ix_transaction_records_source_account_id",
        "transaction_records", ["source_account_id"],
    )
    op.create_index(
        "ix_transaction_records_destination_account_id",
        "transaction_records", ["destination_account_id"],
    )


def downgrade() -> None:
    op.drop_table("transaction_records")
    op.drop_table("accounts")
    op.drop_table("clients")
    bind = op.get_bind()
    for enum_type in (
        TRANSACTION_STATUS, TRANSACTION_TYPE, CURRENCY, ACCOUNT_STATUS,
    ):
        enum_type.drop(bind, checkfirst=True)
