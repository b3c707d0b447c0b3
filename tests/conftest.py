"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from runway_ledger.api.main import create_app
from runway_ledger.infrastructure.database.models import Base
from runway_ledger.infrastructure.database.session import get_db
from runway_ledger.domain.models import Transaction


# Test database: one shared in-memory connection for the whole session
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DAY1 = date(2025, 1, 10)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Build transactions by day offset from DAY1 (day=1 is DAY1)"""
    counter = {"n": 0}

    def _make(kind: str, amount, day: int, channel: str = "declared", partner_id: str | None = None) -> Transaction:
        counter["n"] += 1
        return Transaction(
            transaction_id=f"tx_{counter['n']}",
            kind=kind,
            amount=Decimal(str(amount)),
            date=DAY1 + timedelta(days=day - 1),
            channel=channel,
            partner_id=partner_id,
        )

    return _make


@pytest.fixture
def exhausting_ledger(make_txn) -> list[Transaction]:
    """credit 100 on day 1, debit 30 on day 2, debit 90 on day 3 -> 100, 70, -20"""
    return [
        make_txn("credit", 100, 1),
        make_txn("debit", 30, 2),
        make_txn("debit", 90, 3),
    ]
