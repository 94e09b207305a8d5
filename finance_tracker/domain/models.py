"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

INCOME = "income"
EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """Ledger entry as seen by reporting (read-only)"""

    transaction_id: str
    user_id: str
    category_id: str
    amount_cents: int  # never negative; direction comes from kind
    kind: str  # "income" or "expense"
    occurred_at: datetime
    note: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """User-owned category metadata"""

    category_id: str
    user_id: str
    name: str
    kind: str
    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class MonthRange:
    """Half-open [start, end) UTC range for one calendar month"""

    start: datetime
    end: datetime
    label: str  # "YYYY-MM"


@dataclass
class CategoryBucket:
    """Running subtotal for one category within a month"""

    total_cents: int = 0
    count: int = 0


@dataclass
class Aggregation:
    """Output of the aggregator, before metadata is joined in"""

    total_income_cents: int = 0
    total_expense_cents: int = 0
    total_unclassified_cents: int = 0
    buckets: Dict[str, CategoryBucket] = field(default_factory=dict)
    transaction_count: int = 0
    integrity_errors: List[Exception] = field(default_factory=list)


@dataclass(frozen=True)
class CategorySummary:
    """One row of the report's category breakdown"""

    category_id: str
    name: str
    kind: Optional[str]
    color: Optional[str]
    total_cents: int
    count: int


@dataclass(frozen=True)
class MonthlyReport:
    """Financial summary for one user and one month"""

    month: str
    total_income_cents: int
    total_expense_cents: int
    total_unclassified_cents: int
    categories: List[CategorySummary]
    transaction_count: int = 0
    integrity_error_count: int = 0
