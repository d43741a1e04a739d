"""Mini README: Month keys and calendar navigation.

A month key is the ``YYYY-MM`` string used to address a month record. The
helpers here are pure and independent of any store.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional, Tuple

_MONTH_KEY = re.compile(r"(\d{4})-(\d{2})", re.ASCII)


def month_key(day: Optional[date] = None) -> str:
    """Return the key of the month containing ``day`` (today by default)."""

    day = day or date.today()
    return f"{day.year:04d}-{day.month:02d}"


def parse_month_key(key: str) -> Tuple[int, int]:
    """Split a ``YYYY-MM`` key into ``(year, month)``."""

    match = _MONTH_KEY.fullmatch(key or "")
    if not match:
        raise ValueError(f"Month keys must look like YYYY-MM, got {key!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 01 and 12, got {key!r}")
    return year, month


def shift_month(key: str, delta: int) -> str:
    """Move ``delta`` whole months from ``key``, crossing year boundaries."""

    year, month = parse_month_key(key)
    shifted_year, month_index = divmod(year * 12 + (month - 1) + delta, 12)
    return f"{shifted_year:04d}-{month_index + 1:02d}"
