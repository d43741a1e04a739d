"""Mini README: Core package initializer for the month budget tracker.

The tracker records, per ``YYYY-MM`` month, an income, fixed charges,
capped envelopes and cumulative spending trackers, and derives what is left
over. ``monthbudget.budget`` holds the domain model, ``monthbudget.storage``
persistence and ``monthbudget.session`` the context object interfaces drive.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
