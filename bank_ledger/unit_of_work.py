"""
Unit of work — the transaction boundary for every operation.

A unit of work opens a session, hands it to the block, and then
either commits everything the block did or rolls all of it back.
There is no other exit path: a block that raises never leaves a
partial write behind, and the row locks it acquired are released
either way.

Errors are sorted on the way out:
- BankingOperationError is re-raised unchanged after the rollback.
- Any SQLAlchemyError becomes a StorageError chained to the cause.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from bank_ledger.config import get_settings
from bank_ledger.exceptions import BankingOperationError, StorageError
from bank_ledger.logging_config import get_logger
from bank_ledger.models.base import READ_ONLY_OPTION

logger = get_logger(__name__)


def _apply_lock_timeout(session: Session) -> None:
    """Bound how long this transaction may wait for a row lock."""
    timeout_ms = get_settings().LOCK_TIMEOUT_MS
    if timeout_ms <= 0:
        return
    if session.get_bind().dialect.name == "postgresql":
        # SET does not accept bind parameters
        session.execute(text(f"SET LOCAL lock_timeout = {int(timeout_ms)}"))


def _rollback_safely(session: Session, operation: str) -> None:
    try:
        session.rollback()
    except SQLAlchemyError:
        # The original failure is still propagating; this one is secondary
        logger.exception("Rollback failed during %s", operation)


@contextmanager
def unit_of_work(
    session_factory: sessionmaker, operation: str, read_only: bool = False
) -> Iterator[Session]:
    """
    Run a block inside one database transaction.

    Usage:
        with unit_of_work(factory, "deposit") as session:
            ...

    The block must not call commit() or rollback() itself.

    read_only=True is for blocks that only query. They take no
    write lock on SQLite and no lock timeout on PostgreSQL.
    """
    session = session_factory()
    try:
        if read_only:
            session.connection(execution_options={READ_ONLY_OPTION: True})
        else:
            _apply_lock_timeout(session)
        yield session
        session.commit()
    except BankingOperationError as e:
        _rollback_safely(session, operation)
        logger.warning(
            "%s rejected: %s", operation, e.message,
            extra={"context": e.context},
        )
        raise
    except SQLAlchemyError as e:
        _rollback_safely(session, operation)
        logger.error("Storage failure during %s", operation, exc_info=True)
        raise StorageError(operation) from e
    except BaseException:
        _rollback_safely(session, operation)
        raise
    finally:
        session.close()
