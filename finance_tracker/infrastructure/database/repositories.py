"""Data access layer for finance entities, always scoped to the owning user"""

import asyncio
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from finance_tracker.infrastructure.database.models import Budget, Category, Transaction, User
from finance_tracker.domain import models as domain
from finance_tracker.domain.exceptions import StorageFailure
from finance_tracker.utils.date_utils import as_utc


def _apply_changes(record: Any, changes: Dict[str, Any]) -> None:
    for field_name, value in changes.items():
        setattr(record, field_name, value)


class UserRepository:
    """Repository for accounts created by sign-in"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_auth(self, auth_provider: str, auth_id: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.auth_provider == auth_provider, User.auth_id == auth_id)
            .first()
        )

    def create(self, **fields: Any) -> User:
        user = User(**fields)
        self.db.add(user)
        self.db.flush()
        return user

    def update(self, user: User, **changes: Any) -> User:
        _apply_changes(user, changes)
        self.db.flush()
        return user


class CategoryRepository:
    """Repository for categories"""

    def __init__(self, db: Session):
        self.db = db

    def list_by_user(self, user_id: uuid.UUID) -> List[Category]:
        return (
            self.db.query(Category)
            .filter(Category.user_id == user_id)
            .order_by(Category.name, Category.id)
            .all()
        )

    def get_for_user(self, category_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Category]:
        return (
            self.db.query(Category)
            .filter(Category.id == category_id, Category.user_id == user_id)
            .first()
        )

    def create(self, user_id: uuid.UUID, **fields: Any) -> Category:
        category = Category(user_id=user_id, **fields)
        self.db.add(category)
        self.db.flush()  # Get ID without committing
        return category

    def update(self, category: Category, **changes: Any) -> Category:
        _apply_changes(category, changes)
        self.db.flush()
        return category

    def delete(self, category: Category) -> None:
        """Remove a category; its transactions keep the dangling reference"""
        self.db.delete(category)
        self.db.flush()


class TransactionRepository:
    """Repository for ledger transactions"""

    def __init__(self, db: Session):
        self.db = db

    def list_by_user(
        self,
        user_id: uuid.UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> List[Transaction]:
        """Fetch a user's transactions, optionally within [start, end)"""
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)
        if start is not None:
            query = query.filter(Transaction.occurred_at >= start)
        if end is not None:
            query = query.filter(Transaction.occurred_at < end)
        return query.order_by(Transaction.occurred_at, Transaction.id).all()

    def get_for_user(self, transaction_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Transaction]:
        return (
            self.db.query(Transaction)
            .filter(Transaction.id == transaction_id, Transaction.user_id == user_id)
            .first()
        )

    def create(self, user_id: uuid.UUID, **fields: Any) -> Transaction:
        transaction = Transaction(user_id=user_id, **fields)
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def update(self, transaction: Transaction, **changes: Any) -> Transaction:
        _apply_changes(transaction, changes)
        self.db.flush()
        return transaction

    def delete(self, transaction: Transaction) -> None:
        self.db.delete(transaction)
        self.db.flush()


class BudgetRepository:
    """Repository for monthly category budgets"""

    def __init__(self, db: Session):
        self.db = db

    def list_by_user(self, user_id: uuid.UUID) -> List[Budget]:
        return (
            self.db.query(Budget)
            .filter(Budget.user_id == user_id)
            .order_by(Budget.month.desc(), Budget.id)
            .all()
        )

    def get_for_user(self, budget_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Budget]:
        return (
            self.db.query(Budget)
            .filter(Budget.id == budget_id, Budget.user_id == user_id)
            .first()
        )

    def create(self, user_id: uuid.UUID, **fields: Any) -> Budget:
        budget = Budget(user_id=user_id, **fields)
        self.db.add(budget)
        self.db.flush()
        return budget

    def update(self, budget: Budget, **changes: Any) -> Budget:
        _apply_changes(budget, changes)
        self.db.flush()
        return budget

    def delete(self, budget: Budget) -> None:
        self.db.delete(budget)
        self.db.flush()


def to_domain_transaction(record: Transaction) -> domain.Transaction:
    return domain.Transaction(
        transaction_id=str(record.id),
        user_id=str(record.user_id),
        category_id=str(record.category_id),
        amount_cents=record.amount_cents,
        kind=record.type,
        occurred_at=as_utc(record.occurred_at),
        note=record.note,
    )


def to_domain_category(record: Category) -> domain.Category:
    return domain.Category(
        category_id=str(record.id),
        user_id=str(record.user_id),
        name=record.name,
        kind=record.type,
        color=record.color,
        icon=record.icon,
    )


class SqlReportStore:
    """
    Report reads over SQLAlchemy.

    Each read opens its own session and runs in a worker thread, so the
    transaction fetch and the category lookup can run concurrently.

    Raises:
        StorageFailure: On any SQLAlchemy error
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def fetch_in_range(self, user_id: str, start: datetime, end: datetime) -> List[domain.Transaction]:
        return await asyncio.to_thread(self._fetch_in_range, user_id, start, end)

    async def resolve_categories(self, user_id: str) -> Dict[str, domain.Category]:
        return await asyncio.to_thread(self._resolve_categories, user_id)

    def _fetch_in_range(self, user_id: str, start: datetime, end: datetime) -> List[domain.Transaction]:
        try:
            with self.session_factory() as db:
                records = TransactionRepository(db).list_by_user(uuid.UUID(user_id), start, end)
                return [to_domain_transaction(r) for r in records]
        except SQLAlchemyError as e:
            raise StorageFailure(f"Transaction fetch failed: {e}") from e

    def _resolve_categories(self, user_id: str) -> Dict[str, domain.Category]:
        try:
            with self.session_factory() as db:
                records = CategoryRepository(db).list_by_user(uuid.UUID(user_id))
                return {str(r.id): to_domain_category(r) for r in records}
        except SQLAlchemyError as e:
            raise StorageFailure(f"Category lookup failed: {e}") from e
