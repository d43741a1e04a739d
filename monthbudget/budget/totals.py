"""Mini README: Aggregate figures derived from a month record.

Envelopes count twice over: their limit is a committed obligation (it feeds
the fixed-charge totals and ``net_left``) while only their actual spend feeds
``current_left``. ``compute_totals`` is a pure function of the record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .records import MonthRecord


@dataclass(frozen=True, slots=True)
class Totals:
    """Summary figures for a month, all in cents."""

    fixed_charges_total: int
    fixed_charges_paid: int
    fixed_charges_remaining: int
    net_left: int
    current_left: int
    paid_count: int = 0
    charge_count: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "fixedChargesTotal": self.fixed_charges_total,
            "fixedChargesPaid": self.fixed_charges_paid,
            "fixedChargesRemaining": self.fixed_charges_remaining,
            "netLeft": self.net_left,
            "currentLeft": self.current_left,
            "paidCount": self.paid_count,
            "chargeCount": self.charge_count,
        }


def compute_totals(record: MonthRecord) -> Totals:
    """Derive totals, paid/unpaid splits and leftovers for ``record``."""

    charges_total = sum(charge.amount_cents for charge in record.fixed_charges)
    charges_paid = sum(charge.amount_cents for charge in record.fixed_charges if charge.paid)

    envelopes_limit = sum(envelope.limit_cents for envelope in record.envelopes)
    envelopes_spent = sum(envelope.spent_cents for envelope in record.envelopes)
    envelopes_remaining = sum(envelope.remaining_cents for envelope in record.envelopes)

    cumulatives_spent = sum(cumulative.spent_cents for cumulative in record.cumulatives)

    fixed_total = charges_total + envelopes_limit
    return Totals(
        fixed_charges_total=fixed_total,
        fixed_charges_paid=charges_paid + envelopes_spent,
        fixed_charges_remaining=(charges_total - charges_paid) + envelopes_remaining,
        net_left=record.income_cents - fixed_total - cumulatives_spent,
        current_left=record.income_cents - charges_paid - envelopes_spent - cumulatives_spent,
        paid_count=sum(1 for charge in record.fixed_charges if charge.paid),
        charge_count=len(record.fixed_charges),
    )
