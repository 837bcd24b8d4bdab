"""Pytest configuration: per-test SQLite databases and record helpers."""

import os

# Set test database URL BEFORE any imports from partnerdesk
# so the module-level engines never point at a developer database
os.environ["DATABASE_URL"] = "sqlite:///./test_partnerdesk.db"
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine, select  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from partnerdesk.models import (  # noqa: E402
    Base,
    Payable,
    PayableStatus,
    Receivable,
    ReceivableStatus,
)


@pytest.fixture
def db_path(tmp_path):
    """Path of a fresh SQLite database file with all tables created."""
    path = tmp_path / "partnerdesk_test.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def sync_session(db_path):
    """Synchronous session on the test database (for arranging and inspecting rows)."""
    engine = create_engine(f"sqlite:///{db_path}")
    session = Session(engine, expire_on_commit=False)
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def session_factory(db_path):
    """Async session factory on the test database.

    NullPool keeps connections from outliving the event loop that opened them.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def make_receivable(sync_session):
    """Insert a receivable row and return it."""

    def _make(
        id: str = "r1",
        partner_id: str = "P100",
        pending_amount: str | Decimal = "500",
        status: ReceivableStatus = ReceivableStatus.PENDING,
        partner_name: str = "Asha Partner",
        **kwargs,
    ) -> Receivable:
        receivable = Receivable(
            id=id,
            partner_id=partner_id,
            partner_name=partner_name,
            pending_amount=Decimal(str(pending_amount)),
            status=status,
            **kwargs,
        )
        sync_session.add(receivable)
        sync_session.commit()
        return receivable

    return _make


@pytest.fixture
def make_payable(sync_session):
    """Insert a payable row and return it."""

    def _make(
        id: str = "p1",
        recipient_id: str = "P100",
        payable_amount: str | Decimal = "50",
        status: PayableStatus = PayableStatus.PENDING,
        recipient_name: str = "Asha Partner",
    ) -> Payable:
        payable = Payable(
            id=id,
            recipient_id=recipient_id,
            recipient_name=recipient_name,
            payable_amount=Decimal(str(payable_amount)),
            status=status,
        )
        sync_session.add(payable)
        sync_session.commit()
        return payable

    return _make


@pytest.fixture
def fetch_receivable(db_path):
    """Read the committed state of a receivable with a fresh connection."""

    def _fetch(receivable_id: str) -> Receivable | None:
        engine = create_engine(f"sqlite:///{db_path}")
        try:
            with Session(engine, expire_on_commit=False) as session:
                return session.execute(
                    select(Receivable).where(Receivable.id == receivable_id)
                ).scalar_one_or_none()
        finally:
            engine.dispose()

    return _fetch
