"""Conversions between API amounts and stored integer cents"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> int:
    return int((Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP) * 100).to_integral_value())


def from_cents(cents: int) -> float:
    """Two-decimal display value for JSON output"""
    return float(Decimal(cents) / 100)
