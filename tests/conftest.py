"""Pytest fixtures for testing"""

import uuid
import pytest
from datetime import datetime
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finance_tracker.api.main import create_app
from finance_tracker.infrastructure.database.models import Base, Category, Transaction, User
from finance_tracker.infrastructure.database.session import get_db, get_session_factory
from finance_tracker.infrastructure.security.tokens import issue_token


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
    return TestClient(app)


def _create_user(db: Session, email: str) -> User:
    user = User(auth_provider="google", auth_id=uuid.uuid4().hex, email=email, name=email.split("@")[0])
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def user(db: Session) -> User:
    """Report test user, as created by the OAuth login flow"""
    return _create_user(db, "reportTestUser@none.com")


@pytest.fixture
def other_user(db: Session) -> User:
    return _create_user(db, "someoneElse@none.com")


@pytest.fixture
def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {issue_token(user.id)}"}


@pytest.fixture
def make_category(db: Session) -> Callable[..., Category]:
    """Factory inserting a category row"""

    def _make(user_id: uuid.UUID, name: str, type: str = "expense", color: str | None = None) -> Category:
        category = Category(user_id=user_id, name=name, type=type, color=color)
        db.add(category)
        db.commit()
        return category

    return _make


@pytest.fixture
def make_transaction(db: Session) -> Callable[..., Transaction]:
    """Factory inserting a transaction row"""

    def _make(
        user_id: uuid.UUID,
        category_id: uuid.UUID,
        amount_cents: int,
        type: str,
        occurred_at: datetime,
        note: str | None = None,
    ) -> Transaction:
        transaction = Transaction(
            user_id=user_id,
            category_id=category_id,
            amount_cents=amount_cents,
            type=type,
            occurred_at=occurred_at,
            note=note,
        )
        db.add(transaction)
        db.commit()
        return transaction

    return _make
