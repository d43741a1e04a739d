"""Mini README: Month record data model and normalisation.

Structure:
    * Entry - a single spend recorded against an envelope or cumulative.
    * FixedCharge - recurring obligation with a paid flag.
    * SpendingTracker - shared behaviour keeping ``spent_cents`` equal to the
      sum of its entries.
    * Envelope / Cumulative - capped and uncapped spending trackers.
    * MonthRecord - everything recorded for one ``YYYY-MM`` month.
    * normalize_record - coerce persisted JSON into a well-formed MonthRecord.

Serialised records use camelCase field names (``incomeCents``,
``fixedCharges``, ``amountCents`` ...). Normalisation never raises: each
malformed field falls back to its default independently of the others.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from ..logging_utils import get_logger
from ..utils.ids import IdFactory, uuid_ids

LOGGER = get_logger(__name__)

FIXED_CHARGE_FALLBACK_NAME = "Charge"
ENVELOPE_FALLBACK_NAME = "Budget"
CUMULATIVE_FALLBACK_NAME = "Module"


@dataclass(slots=True)
class Entry:
    """Spend event; ``ts`` is milliseconds since the epoch."""

    id: str
    ts: int
    amount_cents: int

    def as_dict(self) -> Dict[str, object]:
        return {"id": self.id, "ts": self.ts, "amountCents": self.amount_cents}


@dataclass(slots=True)
class FixedCharge:
    """Recurring charge such as rent, optionally grouped under a label."""

    id: str
    name: str
    amount_cents: int
    group: str = ""
    paid: bool = False

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "group": self.group,
            "name": self.name,
            "amountCents": self.amount_cents,
            "paid": self.paid,
        }


@dataclass(slots=True)
class SpendingTracker:
    """Named list of entries whose cached total is kept in ``spent_cents``."""

    id: str
    name: str
    spent_cents: int = 0
    entries: List[Entry] = field(default_factory=list)

    def recompute_spent(self) -> int:
        """Refresh ``spent_cents`` from the entries and return it."""

        self.spent_cents = sum(entry.amount_cents for entry in self.entries)
        return self.spent_cents

    def find_entry(self, entry_id: str) -> Optional[Entry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def add_entry(self, entry: Entry) -> Entry:
        """Append an entry and refresh the cached total."""

        if self.find_entry(entry.id) is not None:
            raise ValueError(f"Entry {entry.id} already exists in {self.id}")
        self.entries.append(entry)
        self.recompute_spent()
        return entry

    def remove_entry(self, entry_id: str) -> Optional[Entry]:
        """Drop the entry with ``entry_id``; unknown ids leave the tracker untouched."""

        entry = self.find_entry(entry_id)
        if entry is None:
            return None
        self.entries = [item for item in self.entries if item.id != entry_id]
        self.recompute_spent()
        return entry

    def clear_entries(self) -> None:
        self.entries = []
        self.spent_cents = 0


@dataclass(slots=True)
class Envelope(SpendingTracker):
    """Capped monthly budget (groceries, outings ...)."""

    limit_cents: int = 0

    @property
    def remaining_cents(self) -> int:
        return self.limit_cents - self.spent_cents

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "limitCents": self.limit_cents,
            "spentCents": self.spent_cents,
            "entries": [entry.as_dict() for entry in self.entries],
        }


@dataclass(slots=True)
class Cumulative(SpendingTracker):
    """Uncapped running total (fuel, parking ...)."""

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "spentCents": self.spent_cents,
            "entries": [entry.as_dict() for entry in self.entries],
        }


@dataclass(slots=True)
class MonthRecord:
    """Income, charges and trackers recorded for a single month."""

    income_cents: int = 0
    fixed_charges: List[FixedCharge] = field(default_factory=list)
    envelopes: List[Envelope] = field(default_factory=list)
    cumulatives: List[Cumulative] = field(default_factory=list)

    def find_fixed_charge(self, charge_id: str) -> Optional[FixedCharge]:
        return next((charge for charge in self.fixed_charges if charge.id == charge_id), None)

    def find_envelope(self, envelope_id: str) -> Optional[Envelope]:
        return next((envelope for envelope in self.envelopes if envelope.id == envelope_id), None)

    def find_cumulative(self, cumulative_id: str) -> Optional[Cumulative]:
        return next(
            (cumulative for cumulative in self.cumulatives if cumulative.id == cumulative_id),
            None,
        )

    def as_dict(self) -> Dict[str, object]:
        """Export the record with the persisted camelCase layout."""

        return {
            "incomeCents": self.income_cents,
            "fixedCharges": [charge.as_dict() for charge in self.fixed_charges],
            "envelopes": [envelope.as_dict() for envelope in self.envelopes],
            "cumulatives": [cumulative.as_dict() for cumulative in self.cumulatives],
        }


def _integer(value: Any) -> int:
    """Coerce a JSON number into an int; anything else becomes zero."""

    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(round(value))
    return 0


def _text(value: Any, fallback: str) -> str:
    return value if isinstance(value, str) else fallback


def _identifier(value: Any, seen: Set[str], id_factory: IdFactory) -> str:
    """Keep ``value`` when it is a fresh non-empty string, otherwise mint a new id."""

    identifier = value if isinstance(value, str) and value else None
    while identifier is None or identifier in seen:
        identifier = id_factory()
    seen.add(identifier)
    return identifier


def unused_id(taken: Iterable[str], id_factory: IdFactory) -> str:
    """Draw ids from ``id_factory`` until one is not in ``taken``."""

    return _identifier(None, set(taken), id_factory)


def _mappings(value: Any) -> List[Dict[str, Any]]:
    """Return the dictionaries of a JSON array, dropping anything else."""

    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _normalize_entries(raw: Any, id_factory: IdFactory) -> List[Entry]:
    seen: Set[str] = set()
    return [
        Entry(
            id=_identifier(item.get("id"), seen, id_factory),
            ts=_integer(item.get("ts")),
            amount_cents=_integer(item.get("amountCents")),
        )
        for item in _mappings(raw)
    ]


def normalize_record(raw: Any, id_factory: IdFactory = uuid_ids) -> MonthRecord:
    """Build a well-formed MonthRecord from persisted data of any shape.

    Non-mapping input yields the default record. Lists default to empty, cents
    to zero, names to a fallback label and missing or duplicate ids to freshly
    generated ones. ``spentCents`` is always recomputed from the entries so a
    stale cached total cannot survive a reload. The legacy ``fixed`` key is
    read when ``fixedCharges`` is absent.
    """

    if not isinstance(raw, dict):
        if raw is not None:
            LOGGER.debug("Discarding malformed month record of type %s", type(raw).__name__)
        return MonthRecord()

    raw_charges = raw["fixedCharges"] if "fixedCharges" in raw else raw.get("fixed")

    charge_ids: Set[str] = set()
    fixed_charges = [
        FixedCharge(
            id=_identifier(item.get("id"), charge_ids, id_factory),
            group=_text(item.get("group"), ""),
            name=_text(item.get("name"), FIXED_CHARGE_FALLBACK_NAME),
            amount_cents=_integer(item.get("amountCents")),
            paid=bool(item.get("paid")),
        )
        for item in _mappings(raw_charges)
    ]

    envelope_ids: Set[str] = set()
    envelopes = []
    for item in _mappings(raw.get("envelopes")):
        envelope = Envelope(
            id=_identifier(item.get("id"), envelope_ids, id_factory),
            name=_text(item.get("name"), ENVELOPE_FALLBACK_NAME),
            limit_cents=_integer(item.get("limitCents")),
            entries=_normalize_entries(item.get("entries"), id_factory),
        )
        envelope.recompute_spent()
        envelopes.append(envelope)

    cumulative_ids: Set[str] = set()
    cumulatives = []
    for item in _mappings(raw.get("cumulatives")):
        cumulative = Cumulative(
            id=_identifier(item.get("id"), cumulative_ids, id_factory),
            name=_text(item.get("name"), CUMULATIVE_FALLBACK_NAME),
            entries=_normalize_entries(item.get("entries"), id_factory),
        )
        cumulative.recompute_spent()
        cumulatives.append(cumulative)

    return MonthRecord(
        income_cents=_integer(raw.get("incomeCents")),
        fixed_charges=fixed_charges,
        envelopes=envelopes,
        cumulatives=cumulatives,
    )
