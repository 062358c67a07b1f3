"""
Database engine, session factory, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every unit of work gets its
session from the factory returned by get_session_factory().
"""

from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from bank_ledger.config import get_settings

# Execution option marking a connection whose transaction only reads
READ_ONLY_OPTION = "bank_ledger_read_only"


# --- Base Model Class ---
# Every database model (Client, Account, TransactionRecord)
# inherits from this class. SQLAlchemy uses it to track all
# models and generate the correct SQL for table creation.
class Base(DeclarativeBase):
    pass


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given database URL.

    pool_pre_ping=True tests connections before using them,
    which handles cases where the database restarted or a
    connection went stale.

    SQLite has no row locks and ignores FOR UPDATE. There,
    every transaction starts with BEGIN IMMEDIATE, which takes
    the database write lock up front. Writers are serialized
    at database granularity instead of row granularity, which
    gives the same exclusion guarantee. Connections carrying
    READ_ONLY_OPTION start a deferred BEGIN instead, so reads
    never queue behind a writer.
    """
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            # Stop pysqlite from emitting its own deferred BEGIN
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin(conn):
            if conn.get_execution_options().get(READ_ONLY_OPTION):
                conn.exec_driver_sql("BEGIN")
            else:
                conn.exec_driver_sql("BEGIN IMMEDIATE")

        return engine

    return create_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    """
    Create a session factory bound to an engine.

    autoflush=False means SQLAlchemy won't send SQL until we
    explicitly flush or commit. expire_on_commit=False keeps
    loaded attributes readable after the unit of work ends,
    so results can be built from committed objects.
    """
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


@lru_cache()
def get_engine() -> Engine:
    """Return the engine for the configured DATABASE_URL."""
    settings = get_settings()
    return build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)


@lru_cache()
def get_session_factory() -> sessionmaker:
    """Return the session factory for the configured database."""
    return build_session_factory(get_engine())


def init_db(engine: Engine) -> None:
    """Create all tables. Production schemas are managed by Alembic."""
    # Import models so they register on Base.metadata
    import bank_ledger.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
