"""Monthly aggregation - grouping and summing transactions by category"""

import logging
from typing import Iterable, Mapping

from finance_tracker.domain.exceptions import DataIntegrityError
from finance_tracker.domain.models import Aggregation, Category, CategoryBucket, Transaction, INCOME, EXPENSE

# Synthetic bucket ids; real category ids are UUID strings so these cannot collide
UNCATEGORIZED_ID = "uncategorized"
UNCLASSIFIED_ID = "unclassified"


def aggregate(transactions: Iterable[Transaction], categories: Mapping[str, Category]) -> Aggregation:
    """
    Group transactions by category and compute income/expense totals.

    Rules:
    - A transaction's own kind decides which grand total it feeds, even when
      its category is of the other kind
    - Category totals add amounts regardless of kind
    - A category id missing from `categories` lands in the uncategorized bucket
    - An unknown kind is reported as a DataIntegrityError and counted in the
      unclassified bucket, never in income or expense

    All sums are integer cents, so
    income + expense + unclassified == sum of bucket totals exactly.
    """
    result = Aggregation()

    for txn in transactions:
        result.transaction_count += 1

        if txn.kind == INCOME:
            result.total_income_cents += txn.amount_cents
            bucket_id = txn.category_id if txn.category_id in categories else UNCATEGORIZED_ID
        elif txn.kind == EXPENSE:
            result.total_expense_cents += txn.amount_cents
            bucket_id = txn.category_id if txn.category_id in categories else UNCATEGORIZED_ID
        else:
            error = DataIntegrityError(
                f"Transaction {txn.transaction_id} has unknown kind {txn.kind!r}",
                transaction_id=txn.transaction_id,
                kind=txn.kind,
            )
            result.integrity_errors.append(error)
            logging.warning(
                str(error),
                extra={"step": "aggregate", "transaction_id": txn.transaction_id, "kind": txn.kind},
            )
            result.total_unclassified_cents += txn.amount_cents
            bucket_id = UNCLASSIFIED_ID

        bucket = result.buckets.setdefault(bucket_id, CategoryBucket())
        bucket.total_cents += txn.amount_cents
        bucket.count += 1

    return result
