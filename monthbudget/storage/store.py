"""Mini README: Month store loading and saving month records.

Structure:
    * MonthStore - ``load`` / ``save`` / ``reset`` over a MappingStorage.
    * store_from_settings - build the JSON-backed store described by settings.

``load`` never fails: absent months start from the default record and
malformed data is normalised field by field. ``save`` rewrites the whole
mapping synchronously.
"""

from __future__ import annotations

from typing import List, Optional

from ..budget.commands import reset_month
from ..budget.months import parse_month_key
from ..budget.records import MonthRecord, normalize_record
from ..configuration import MonthBudgetSettings, get_settings
from ..logging_utils import get_logger
from ..utils.ids import IdFactory, uuid_ids
from .backends import JsonFileStorage, MappingStorage

LOGGER = get_logger(__name__)


class MonthStore:
    """Persist one MonthRecord per ``YYYY-MM`` key."""

    def __init__(self, storage: MappingStorage, *, id_factory: IdFactory = uuid_ids) -> None:
        self.storage = storage
        self.id_factory = id_factory

    def load(self, month: str) -> MonthRecord:
        """Return the normalised record for ``month`` (a default one if absent)."""

        raw = self.storage.read_all().get(month)
        if raw is None:
            LOGGER.debug("No record stored for %s, starting from defaults", month)

        minted: List[str] = []

        def tracked_ids() -> str:
            identifier = self.id_factory()
            minted.append(identifier)
            return identifier

        record = normalize_record(raw, tracked_ids)
        if minted:
            # Ids handed out for missing or duplicate ones must survive the next load.
            LOGGER.info("Assigned %s missing ids in %s, writing them back", len(minted), month)
            self._write(month, record)
        return record

    def save(self, month: str, record: MonthRecord) -> None:
        """Replace the stored record for ``month`` and flush the mapping."""

        parse_month_key(month)
        self._write(month, record)

    def _write(self, month: str, record: MonthRecord) -> None:
        mapping = self.storage.read_all()
        mapping[month] = record.as_dict()
        self.storage.write_all(mapping)
        LOGGER.debug("Saved %s (%s months stored)", month, len(mapping))

    def reset(self, record: MonthRecord) -> MonthRecord:
        """Clear entries and paid flags of ``record`` in place."""

        return reset_month(record)

    def months(self) -> List[str]:
        """Stored month keys in chronological order."""

        return sorted(self.storage.read_all().keys())


def store_from_settings(settings: Optional[MonthBudgetSettings] = None) -> MonthStore:
    settings = settings or get_settings()
    return MonthStore(JsonFileStorage(settings.storage_path, settings.storage_namespace))
