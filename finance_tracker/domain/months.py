"""Month token parsing into half-open UTC date ranges"""

import re
from datetime import datetime
from typing import Optional

from finance_tracker.domain.exceptions import ValidationError
from finance_tracker.domain.models import MonthRange
from finance_tracker.utils.date_utils import as_utc, month_start, next_month_start, utc_now

MONTH_TOKEN_PATTERN = re.compile(r"(\d{4})-(\d{2})", re.ASCII)

INVALID_MONTH_MESSAGE = "Invalid month format. Use YYYY-MM with a month between 01 and 12"


def month_range(year: int, month: int) -> MonthRange:
    """Build the [start, end) range and canonical label for a year/month"""
    return MonthRange(
        start=month_start(year, month),
        end=next_month_start(year, month),
        label=f"{year:04d}-{month:02d}",
    )


def parse_month_token(token: Optional[str], now: Optional[datetime] = None) -> MonthRange:
    """
    Parse a "YYYY-MM" token into a MonthRange.

    An absent token (None) selects the month containing `now` (UTC).
    A present token must be exactly four digits, a dash and a two digit
    month 01-12; an empty string is not treated as absent.

    Raises:
        ValidationError: With a message suitable for returning to the client
    """
    if token is None:
        reference = as_utc(now) if now is not None else utc_now()
        return month_range(reference.year, reference.month)

    match = MONTH_TOKEN_PATTERN.fullmatch(token)
    if not match:
        raise ValidationError(INVALID_MONTH_MESSAGE)

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(INVALID_MONTH_MESSAGE)

    # Year 0 does not exist and 9999-12 has no representable following month
    if year < 1 or (year == 9999 and month == 12):
        raise ValidationError("Month is outside the supported range")

    return month_range(year, month)
