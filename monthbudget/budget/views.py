"""Mini README: Read-only projections used by the interfaces.

Structure:
    * group_fixed_charges - charges bucketed by group label, labels sorted.
    * recent_entries - newest entries first, capped for compact listings.
    * month_summary - JSON-ready snapshot of a record with totals and navigation.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .money import format_cents
from .months import shift_month
from .records import Entry, FixedCharge, MonthRecord
from .totals import compute_totals

DEFAULT_GROUP_LABEL = "Other"


def group_fixed_charges(
    charges: Sequence[FixedCharge], default_label: str = DEFAULT_GROUP_LABEL
) -> List[Tuple[str, List[FixedCharge]]]:
    """Bucket charges by group; blank groups fall under ``default_label``."""

    groups: Dict[str, List[FixedCharge]] = {}
    for charge in charges:
        label = charge.group.strip() or default_label
        groups.setdefault(label, []).append(charge)
    return sorted(groups.items(), key=lambda item: item[0].casefold())


def recent_entries(entries: Sequence[Entry], limit: int = 8) -> List[Entry]:
    """Return the last ``limit`` entries, most recent first."""

    if limit <= 0:
        return []
    return list(reversed(entries[-limit:]))


def month_summary(month: str, record: MonthRecord) -> Dict[str, object]:
    """Snapshot combining the record, its totals and neighbouring month keys."""

    totals = compute_totals(record)
    amounts = {
        key: format_cents(value)
        for key, value in totals.as_dict().items()
        if key not in {"paidCount", "chargeCount"}
    }
    return {
        "month": month,
        "previous": shift_month(month, -1),
        "next": shift_month(month, 1),
        "record": record.as_dict(),
        "totals": totals.as_dict(),
        "display": {
            "income": format_cents(record.income_cents),
            "totals": amounts,
            "fixedChargeGroups": [
                {"group": label, "charges": [charge.id for charge in charges]}
                for label, charges in group_fixed_charges(record.fixed_charges)
            ],
        },
    }
