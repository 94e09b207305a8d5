"""Unit tests for month token parsing"""

import pytest
from datetime import datetime, timedelta, timezone
from finance_tracker.domain.exceptions import ValidationError
from finance_tracker.domain.months import parse_month_token


@pytest.mark.parametrize(
    "token,days",
    [
        ("2024-02", 29),  # leap year
        ("2023-02", 28),
        ("2025-04", 30),
        ("2025-01", 31),
        ("2025-12", 31),
    ],
)
def test_range_covers_whole_month(token: str, days: int):
    """Range length follows the calendar, not a fixed offset"""
    month = parse_month_token(token)

    assert month.start.day == 1
    assert month.end.day == 1
    assert month.end - month.start == timedelta(days=days)
    assert month.start < month.end


def test_range_is_utc_midnight():
    month = parse_month_token("2025-03")

    assert month.start == datetime(2025, 3, 1, tzinfo=timezone.utc)
    assert month.end == datetime(2025, 4, 1, tzinfo=timezone.utc)


def test_december_rolls_into_next_year():
    month = parse_month_token("2024-12")

    assert month.start == datetime(2024, 12, 1, tzinfo=timezone.utc)
    assert month.end == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_label_is_canonical_token():
    assert parse_month_token("2025-07").label == "2025-07"


def test_missing_token_uses_reference_month():
    now = datetime(2025, 3, 31, 23, 30, tzinfo=timezone.utc)
    month = parse_month_token(None, now)

    assert month.label == "2025-03"
    assert month.start == datetime(2025, 3, 1, tzinfo=timezone.utc)


def test_missing_token_converts_reference_to_utc():
    """01:00 on April 1st at UTC+2 is still March in UTC"""
    now = datetime(2025, 4, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))

    assert parse_month_token(None, now).label == "2025-03"


def test_missing_token_defaults_to_current_month():
    today = datetime.now(timezone.utc)
    month = parse_month_token(None)

    assert month.label == f"{today.year:04d}-{today.month:02d}"


@pytest.mark.parametrize(
    "token",
    [
        "invalid-date",
        "2025-13",
        "2025-00",
        "2025/01",
        "",
        "2025-1",
        "25-01",
        "2025-01-01",
        " 2025-01",
        "2025-01 ",
        "２０２５-01",  # non-ASCII digits
    ],
)
def test_invalid_tokens_rejected(token: str):
    with pytest.raises(ValidationError) as exc_info:
        parse_month_token(token)

    assert "YYYY-MM" in str(exc_info.value)


@pytest.mark.parametrize("token", ["0000-05", "9999-12"])
def test_unrepresentable_months_rejected(token: str):
    with pytest.raises(ValidationError):
        parse_month_token(token)


def test_last_supported_month():
    month = parse_month_token("9999-11")

    assert month.end == datetime(9999, 12, 1, tzinfo=timezone.utc)
