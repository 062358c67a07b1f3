"""
Alembic environment configuration.

Runs whenever Alembic performs a migration. Connects using the
application's DATABASE_URL and sees every table through
Base.metadata, so `alembic revision --autogenerate` diffs the
models against the live schema.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from bank_ledger.config import get_settings
from bank_ledger.models import Base

# Alembic Config object, gives access to alembic.ini values
config = context.config

# Set up logging from alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Every model registers its table on Base.metadata when
# bank_ledger.models is imported. Autogenerate compares this
# metadata against the database to write new revisions.
target_metadata = Base.metadata

# Take the database URL from the application settings
# instead of reading it from alembic.ini
settings = get_settings()
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Emits the migration as a SQL script without connecting.
    Useful for handing the DDL to a DBA for review.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        # SQLite cannot ALTER most constraints in place
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode.

    Connects to the database and applies the revisions directly.
    This is the normal way to upgrade a ledger database.
    """
    # NullPool: a migration run opens one connection and exits
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # Batch mode rebuilds tables on SQLite; PostgreSQL alters in place
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
