"""Mini README: Mutation commands applied to a month record.

Structure:
    * set_income - update the month's income.
    * fixed charge commands - add, toggle paid, delete.
    * envelope / cumulative commands - add, rename, set limit, delete.
    * entry commands - record or remove a spend and refresh the cached total.
    * reset_month - start the month over while keeping its definitions.

Every command mutates the record in place and returns the affected item, or
``None`` when nothing changed (blank name, unknown id). Amounts are validated
before any lookup so an :class:`InvalidAmountError` always leaves the record
untouched. Persistence is the caller's job, see ``monthbudget.session``.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Union

from ..logging_utils import get_logger
from ..utils.ids import IdFactory, uuid_ids
from .money import parse_cents, parse_non_negative_cents, parse_positive_cents
from .records import (
    Cumulative,
    Entry,
    Envelope,
    FixedCharge,
    MonthRecord,
    SpendingTracker,
    unused_id,
)

LOGGER = get_logger(__name__)

Clock = Callable[[], int]


def epoch_millis() -> int:
    """Current time in milliseconds since the epoch."""

    return int(time.time() * 1000)


def set_income(record: MonthRecord, amount_text: Optional[str]) -> int:
    """Set the income; blank or unreadable input counts as zero.

    Income is not range checked, a negative figure is stored as typed.
    """

    cents = parse_cents(amount_text)
    record.income_cents = cents
    return cents


def add_fixed_charge(
    record: MonthRecord,
    name: Optional[str],
    amount_text: Optional[str],
    group: Optional[str] = "",
    *,
    id_factory: IdFactory = uuid_ids,
) -> Optional[FixedCharge]:
    """Append an unpaid fixed charge with a strictly positive amount."""

    cleaned = (name or "").strip()
    if not cleaned:
        return None
    amount_cents = parse_positive_cents(amount_text, "650,00")
    charge = FixedCharge(
        id=unused_id((item.id for item in record.fixed_charges), id_factory),
        group=(group or "").strip(),
        name=cleaned,
        amount_cents=amount_cents,
    )
    record.fixed_charges.append(charge)
    LOGGER.info("Added fixed charge %s (%s cents)", charge.id, amount_cents)
    return charge


def toggle_fixed_charge(record: MonthRecord, charge_id: str) -> Optional[FixedCharge]:
    charge = record.find_fixed_charge(charge_id)
    if charge is None:
        LOGGER.debug("Ignoring toggle of unknown fixed charge %s", charge_id)
        return None
    charge.paid = not charge.paid
    return charge


def delete_fixed_charge(record: MonthRecord, charge_id: str) -> Optional[FixedCharge]:
    charge = record.find_fixed_charge(charge_id)
    if charge is None:
        LOGGER.debug("Ignoring deletion of unknown fixed charge %s", charge_id)
        return None
    record.fixed_charges = [item for item in record.fixed_charges if item.id != charge_id]
    LOGGER.info("Deleted fixed charge %s", charge_id)
    return charge


def add_envelope(
    record: MonthRecord,
    name: Optional[str],
    limit_text: Optional[str],
    *,
    id_factory: IdFactory = uuid_ids,
) -> Optional[Envelope]:
    """Append an empty envelope; a zero limit is allowed."""

    cleaned = (name or "").strip()
    if not cleaned:
        return None
    limit_cents = parse_non_negative_cents(limit_text, "200,00")
    envelope = Envelope(
        id=unused_id((item.id for item in record.envelopes), id_factory),
        name=cleaned,
        limit_cents=limit_cents,
    )
    record.envelopes.append(envelope)
    LOGGER.info("Added envelope %s with limit %s cents", envelope.id, limit_cents)
    return envelope


def set_envelope_limit(
    record: MonthRecord, envelope_id: str, limit_text: Optional[str]
) -> Optional[Envelope]:
    limit_cents = parse_non_negative_cents(limit_text, "200,00")
    envelope = record.find_envelope(envelope_id)
    if envelope is None:
        LOGGER.debug("Ignoring limit change of unknown envelope %s", envelope_id)
        return None
    envelope.limit_cents = limit_cents
    return envelope


def add_cumulative(
    record: MonthRecord, name: Optional[str], *, id_factory: IdFactory = uuid_ids
) -> Optional[Cumulative]:
    cleaned = (name or "").strip()
    if not cleaned:
        return None
    cumulative = Cumulative(
        id=unused_id((item.id for item in record.cumulatives), id_factory), name=cleaned
    )
    record.cumulatives.append(cumulative)
    LOGGER.info("Added cumulative %s", cumulative.id)
    return cumulative


def _rename(tracker: Optional[SpendingTracker], name: Optional[str]) -> Optional[SpendingTracker]:
    cleaned = (name or "").strip()
    if tracker is None or not cleaned:
        return None
    tracker.name = cleaned
    return tracker


def rename_envelope(record: MonthRecord, envelope_id: str, name: Optional[str]) -> Optional[Envelope]:
    """Rename an envelope; a blank name keeps the current one."""

    return _rename(record.find_envelope(envelope_id), name)


def rename_cumulative(
    record: MonthRecord, cumulative_id: str, name: Optional[str]
) -> Optional[Cumulative]:
    """Rename a cumulative; a blank name keeps the current one."""

    return _rename(record.find_cumulative(cumulative_id), name)


def delete_envelope(record: MonthRecord, envelope_id: str) -> Optional[Envelope]:
    envelope = record.find_envelope(envelope_id)
    if envelope is None:
        return None
    record.envelopes = [item for item in record.envelopes if item.id != envelope_id]
    LOGGER.info("Deleted envelope %s", envelope_id)
    return envelope


def delete_cumulative(record: MonthRecord, cumulative_id: str) -> Optional[Cumulative]:
    cumulative = record.find_cumulative(cumulative_id)
    if cumulative is None:
        return None
    record.cumulatives = [item for item in record.cumulatives if item.id != cumulative_id]
    LOGGER.info("Deleted cumulative %s", cumulative_id)
    return cumulative


def _record_spend(
    tracker: Optional[Union[Envelope, Cumulative]],
    amount_cents: int,
    id_factory: IdFactory,
    clock: Clock,
) -> Optional[Entry]:
    if tracker is None:
        return None
    entry_id = unused_id((entry.id for entry in tracker.entries), id_factory)
    entry = tracker.add_entry(Entry(id=entry_id, ts=clock(), amount_cents=amount_cents))
    LOGGER.debug(
        "Recorded %s cents on %s, spent now %s", amount_cents, tracker.id, tracker.spent_cents
    )
    return entry


def add_envelope_entry(
    record: MonthRecord,
    envelope_id: str,
    amount_text: Optional[str],
    *,
    id_factory: IdFactory = uuid_ids,
    clock: Clock = epoch_millis,
) -> Optional[Entry]:
    """Record a positive spend against an envelope."""

    amount_cents = parse_positive_cents(amount_text, "4,50")
    return _record_spend(record.find_envelope(envelope_id), amount_cents, id_factory, clock)


def add_cumulative_entry(
    record: MonthRecord,
    cumulative_id: str,
    amount_text: Optional[str],
    *,
    id_factory: IdFactory = uuid_ids,
    clock: Clock = epoch_millis,
) -> Optional[Entry]:
    """Record a positive spend against a cumulative."""

    amount_cents = parse_positive_cents(amount_text, "10,00")
    return _record_spend(record.find_cumulative(cumulative_id), amount_cents, id_factory, clock)


def delete_envelope_entry(record: MonthRecord, envelope_id: str, entry_id: str) -> Optional[Entry]:
    envelope = record.find_envelope(envelope_id)
    return envelope.remove_entry(entry_id) if envelope else None


def delete_cumulative_entry(
    record: MonthRecord, cumulative_id: str, entry_id: str
) -> Optional[Entry]:
    cumulative = record.find_cumulative(cumulative_id)
    return cumulative.remove_entry(entry_id) if cumulative else None


def reset_month(record: MonthRecord) -> MonthRecord:
    """Un-mark every fixed charge and empty every envelope and cumulative.

    Ids, names, limits and the charges and trackers themselves are kept.
    """

    for charge in record.fixed_charges:
        charge.paid = False
    for tracker in [*record.envelopes, *record.cumulatives]:
        tracker.clear_entries()
    LOGGER.info(
        "Reset month: %s charges, %s envelopes, %s cumulatives",
        len(record.fixed_charges),
        len(record.envelopes),
        len(record.cumulatives),
    )
    return record
