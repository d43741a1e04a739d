"""Mini README: Small helpers shared across the month budget packages.

Currently exports the identifier factories used when records, charges and
entries are created.
"""

from .ids import IdFactory, SequentialIds, uuid_ids

__all__ = ["IdFactory", "SequentialIds", "uuid_ids"]
