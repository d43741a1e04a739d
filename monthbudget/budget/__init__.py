"""Mini README: Month budget domain package.

This package holds everything that does not touch storage or a user
interface: the month record model, money parsing, month navigation, the
totals calculator and the mutation commands. Interfaces load a record through
``monthbudget.storage`` and drive it through ``monthbudget.session``.
"""

from .money import InvalidAmountError, format_cents, parse_cents
from .months import month_key, parse_month_key, shift_month
from .records import Cumulative, Entry, Envelope, FixedCharge, MonthRecord, normalize_record
from .totals import Totals, compute_totals

__all__ = [
    "Cumulative",
    "Entry",
    "Envelope",
    "FixedCharge",
    "InvalidAmountError",
    "MonthRecord",
    "Totals",
    "compute_totals",
    "format_cents",
    "month_key",
    "normalize_record",
    "parse_cents",
    "parse_month_key",
    "shift_month",
]
