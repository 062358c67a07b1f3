"""
Shared test fixtures.

Every test gets its own SQLite file database in a temporary
directory, so tests never touch a real database and never see
each other's data. A file (not :memory:) is used so that
several threads can share it in the concurrency tests.
"""

from decimal import Decimal

import pytest

from bank_ledger.models import Base, Client
from bank_ledger.models.base import build_engine, build_session_factory, init_db
from bank_ledger.services import AccountLifecycleManager, LedgerEngine
from bank_ledger.unit_of_work import unit_of_work


@pytest.fixture
def engine(tmp_path):
    """Create all tables before each test, drop them after."""
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    """Provide a raw session for direct store testing."""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def lifecycle(session_factory):
    return AccountLifecycleManager(session_factory)


@pytest.fixture
def ledger(session_factory):
    return LedgerEngine(session_factory)


@pytest.fixture
def make_client(session_factory):
    """Factory: insert a client and return its id."""
    counter = {"n": 0}

    def _make_client(full_name="Ivan Petrov"):
        counter["n"] += 1
        n = counter["n"]
        with unit_of_work(session_factory, "create client") as session:
            client = Client(
                full_name=full_name,
                phone_number=f"+7900000{n:04d}",
                tax_id=f"{n:012d}",
                address="Moscow, Tverskaya 1",
            )
            session.add(client)
            session.flush()
            return client.id

    return _make_client


@pytest.fixture
def make_account(lifecycle, ledger, make_client):
    """
    Factory: open an account, optionally fund it, return its id.

    Account numbers are generated from a counter so every call
    gets a unique, well-formed number.
    """
    counter = {"n": 0}

    def _make_account(balance="0.00", currency="RUB", client_id=None):
        counter["n"] += 1
        if client_id is None:
            client_id = make_client()
        account = lifecycle.open_account(
            account_number=f"{counter['n']:020d}",
            bank_code="040000001",
            currency=currency,
            client_id=client_id,
        )
        if Decimal(balance) > 0:
            ledger.deposit(account.id, balance)
        return account.id

    return _make_account
