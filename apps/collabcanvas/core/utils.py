from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

TWO_PLACES = Decimal("0.01")


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""

    return datetime.now(timezone.utc)


def utcnow_naive() -> datetime:
    """Return the current time as a naive UTC datetime.

    Table timestamps are stored naive (UTC), so comparisons against them must
    use this rather than `utcnow()`.
    """

    return utcnow().replace(tzinfo=None)


def seconds_ago_naive(seconds: float) -> datetime:
    """Naive UTC cutoff `seconds` in the past."""

    return utcnow_naive() - timedelta(seconds=seconds)


def to_fixed2(value: float | int | Decimal) -> Decimal:
    """Quantize a coordinate to the NUMERIC(10, 2) storage precision."""

    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


__all__ = ["TWO_PLACES", "seconds_ago_naive", "to_fixed2", "utcnow", "utcnow_naive"]
