"""Monthly report generation - fetch, aggregate and assemble"""

import asyncio
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from finance_tracker.domain.aggregation import aggregate, UNCATEGORIZED_ID, UNCLASSIFIED_ID
from finance_tracker.domain.exceptions import StorageFailure
from finance_tracker.domain.models import Aggregation, Category, CategorySummary, MonthRange, MonthlyReport, Transaction
from finance_tracker.domain.months import parse_month_token

UNCATEGORIZED_NAME = "Uncategorized"
UNCLASSIFIED_NAME = "Unclassified"


class ReportStore(Protocol):
    """Read capability the report engine needs from storage"""

    async def fetch_in_range(self, user_id: str, start: datetime, end: datetime) -> Sequence[Transaction]:
        """Transactions owned by user_id with start <= occurred_at < end"""
        ...

    async def resolve_categories(self, user_id: str) -> Dict[str, Category]:
        """All categories owned by user_id, keyed by category id"""
        ...


def _summary_sort_key(summary: CategorySummary):
    return (-summary.total_cents, summary.name.casefold(), summary.category_id)


def assemble_report(
    month: MonthRange,
    aggregation: Aggregation,
    categories: Mapping[str, Category],
    include_empty: bool = False,
) -> MonthlyReport:
    """
    Join aggregated buckets with category metadata.

    Rows are ordered by descending total, then case-insensitive name.
    Categories without activity are only listed when include_empty is set.
    """
    summaries: List[CategorySummary] = []

    for bucket_id, bucket in aggregation.buckets.items():
        if bucket_id == UNCATEGORIZED_ID:
            name, kind, color = UNCATEGORIZED_NAME, None, None
        elif bucket_id == UNCLASSIFIED_ID:
            name, kind, color = UNCLASSIFIED_NAME, None, None
        else:
            category = categories[bucket_id]
            name, kind, color = category.name, category.kind, category.color

        summaries.append(
            CategorySummary(
                category_id=bucket_id,
                name=name,
                kind=kind,
                color=color,
                total_cents=bucket.total_cents,
                count=bucket.count,
            )
        )

    if include_empty:
        for category_id, category in categories.items():
            if category_id not in aggregation.buckets:
                summaries.append(
                    CategorySummary(
                        category_id=category_id,
                        name=category.name,
                        kind=category.kind,
                        color=category.color,
                        total_cents=0,
                        count=0,
                    )
                )

    summaries.sort(key=_summary_sort_key)

    return MonthlyReport(
        month=month.label,
        total_income_cents=aggregation.total_income_cents,
        total_expense_cents=aggregation.total_expense_cents,
        total_unclassified_cents=aggregation.total_unclassified_cents,
        categories=summaries,
        transaction_count=aggregation.transaction_count,
        integrity_error_count=len(aggregation.integrity_errors),
    )


async def generate_monthly_report(
    store: ReportStore,
    user_id: str,
    month_token: Optional[str],
    now: Optional[datetime] = None,
    timeout: Optional[float] = None,
    include_empty: bool = False,
) -> MonthlyReport:
    """
    Main entry point: build the monthly report for one user.

    Flow:
    1. Validate the month token (no storage access on failure)
    2. Fetch transactions and resolve categories concurrently
    3. Aggregate and assemble

    Raises:
        ValidationError: Month token is malformed or out of range
        StorageFailure: Either read failed or did not finish within timeout
    """
    month = parse_month_token(month_token, now)

    fetch = asyncio.ensure_future(store.fetch_in_range(user_id, month.start, month.end))
    resolve = asyncio.ensure_future(store.resolve_categories(user_id))
    try:
        transactions, categories = await asyncio.wait_for(asyncio.gather(fetch, resolve), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise StorageFailure(f"Storage reads did not complete within {timeout}s") from e
    finally:
        # Sibling read must not outlive a failed or cancelled request
        for task in (fetch, resolve):
            if not task.done():
                task.cancel()

    aggregation = aggregate(transactions, categories)
    return assemble_report(month, aggregation, categories, include_empty=include_empty)
