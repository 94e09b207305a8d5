"""GET /v1/reports/monthly - Monthly income/expense summary"""

import time
import uuid
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from finance_tracker.api.v1.schemas import CategorySummarySchema, MonthlyReportResponse
from finance_tracker.api.dependencies import get_current_user_id, get_report_store, get_request_id
from finance_tracker.config import settings
from finance_tracker.domain.exceptions import StorageFailure, ValidationError
from finance_tracker.domain.models import MonthlyReport
from finance_tracker.domain.reports import ReportStore, generate_monthly_report
from finance_tracker.infrastructure.observability.logging import log_report
from finance_tracker.infrastructure.observability.metrics import record_report, storage_failures_counter
from finance_tracker.utils.money import from_cents

router = APIRouter()


def to_report_response(report: MonthlyReport) -> MonthlyReportResponse:
    return MonthlyReportResponse(
        month=report.month,
        total_income=from_cents(report.total_income_cents),
        total_expenses=from_cents(report.total_expense_cents),
        total_unclassified=from_cents(report.total_unclassified_cents),
        categories=[
            CategorySummarySchema(
                category_id=row.category_id,
                name=row.name,
                type=row.kind,
                color=row.color,
                total=from_cents(row.total_cents),
                count=row.count,
            )
            for row in report.categories
        ],
    )


@router.get("/reports/monthly", response_model=MonthlyReportResponse)
async def get_monthly_report(
    request: Request,
    month: Optional[str] = Query(None, description="Month as YYYY-MM; defaults to the current UTC month"),
    include_empty: bool = Query(False, description="Also list categories with no activity"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: ReportStore = Depends(get_report_store),
):
    """
    Summarise one month of the caller's transactions.

    Flow:
    1. Validate month token (400 before any storage access)
    2. Fetch transactions and categories concurrently
    3. Aggregate per category and assemble the report
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        report = await generate_monthly_report(
            store,
            str(user_id),
            month,
            timeout=settings.storage_timeout_seconds,
            include_empty=include_empty,
        )

    except ValidationError as e:
        record_report("invalid_month")
        logging.info(f"Rejected month token: {month!r}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except StorageFailure as e:
        storage_failures_counter.inc()
        record_report("storage_failure")
        logging.error(f"Storage failure: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to load report data")

    except Exception as e:
        record_report("error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration = time.time() - start_time
    record_report("ok", duration, report.integrity_error_count)
    log_report(request_id, str(user_id), report.month, report.transaction_count, duration * 1000)

    return to_report_response(report)
