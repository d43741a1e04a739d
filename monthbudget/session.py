"""Mini README: Budget session tying a month record to its store.

Structure:
    * ConfirmHook - callable asked before destructive actions.
    * BudgetSession - current month, its record and the collaborators used to
      mutate and persist it.

Interfaces build one session per interaction. Each mutating method runs the
matching command from ``monthbudget.budget.commands`` and saves the record
only when something actually changed. Deleting a charge, an envelope or a
cumulative, and resetting the month, go through the ``confirm`` hook first;
a declined confirmation returns ``False`` and leaves everything untouched.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .budget import commands
from .budget.commands import Clock, epoch_millis
from .budget.months import month_key, parse_month_key, shift_month
from .budget.records import Cumulative, Entry, Envelope, FixedCharge, MonthRecord
from .budget.totals import Totals, compute_totals
from .budget.views import group_fixed_charges, recent_entries
from .logging_utils import get_logger
from .storage.store import MonthStore
from .utils.ids import IdFactory

LOGGER = get_logger(__name__)

ConfirmHook = Callable[[str], bool]


def decline(prompt: str) -> bool:
    """Confirmation hook refusing every destructive action."""

    LOGGER.debug("Declined without asking: %s", prompt)
    return False


class BudgetSession:
    """Explicit context for working on one month at a time."""

    def __init__(
        self,
        store: MonthStore,
        month: Optional[str] = None,
        *,
        id_factory: Optional[IdFactory] = None,
        clock: Clock = epoch_millis,
        confirm: ConfirmHook = decline,
    ) -> None:
        self.store = store
        self.id_factory = id_factory or store.id_factory
        self.clock = clock
        self.confirm = confirm
        self.month = ""
        self.record = MonthRecord()
        self.go_to(month or month_key())

    # Navigation -----------------------------------------------------------

    def go_to(self, month: str) -> MonthRecord:
        """Switch to ``month`` and load its record."""

        parse_month_key(month)
        self.month = month
        self.record = self.store.load(month)
        LOGGER.debug("Session now on %s", month)
        return self.record

    def go_month(self, delta: int) -> MonthRecord:
        return self.go_to(shift_month(self.month, delta))

    # Read helpers ---------------------------------------------------------

    def totals(self) -> Totals:
        return compute_totals(self.record)

    def grouped_fixed_charges(self) -> List[Tuple[str, List[FixedCharge]]]:
        return group_fixed_charges(self.record.fixed_charges)

    @staticmethod
    def recent_entries(entries: List[Entry], limit: int = 8) -> List[Entry]:
        return recent_entries(entries, limit)

    # Mutations ------------------------------------------------------------

    def _persist(self, changed: object) -> object:
        if changed is not None and changed is not False:
            self.store.save(self.month, self.record)
        return changed

    def _confirmed(self, prompt: str) -> bool:
        if self.confirm(prompt):
            return True
        LOGGER.info("Cancelled: %s", prompt)
        return False

    def set_income(self, amount_text: Optional[str]) -> int:
        return self._persist(commands.set_income(self.record, amount_text))

    def add_fixed_charge(
        self, name: Optional[str], amount_text: Optional[str], group: Optional[str] = ""
    ) -> Optional[FixedCharge]:
        return self._persist(
            commands.add_fixed_charge(
                self.record, name, amount_text, group, id_factory=self.id_factory
            )
        )

    def toggle_fixed_charge(self, charge_id: str) -> Optional[FixedCharge]:
        return self._persist(commands.toggle_fixed_charge(self.record, charge_id))

    def delete_fixed_charge(self, charge_id: str) -> bool:
        charge = self.record.find_fixed_charge(charge_id)
        if charge is None or not self._confirmed(f"Delete the fixed charge “{charge.name}”?"):
            return False
        return self._persist(commands.delete_fixed_charge(self.record, charge_id)) is not None

    def add_envelope(self, name: Optional[str], limit_text: Optional[str]) -> Optional[Envelope]:
        return self._persist(
            commands.add_envelope(self.record, name, limit_text, id_factory=self.id_factory)
        )

    def rename_envelope(self, envelope_id: str, name: Optional[str]) -> Optional[Envelope]:
        return self._persist(commands.rename_envelope(self.record, envelope_id, name))

    def set_envelope_limit(self, envelope_id: str, limit_text: Optional[str]) -> Optional[Envelope]:
        return self._persist(commands.set_envelope_limit(self.record, envelope_id, limit_text))

    def delete_envelope(self, envelope_id: str) -> bool:
        envelope = self.record.find_envelope(envelope_id)
        if envelope is None or not self._confirmed(f"Delete the envelope “{envelope.name}”?"):
            return False
        return self._persist(commands.delete_envelope(self.record, envelope_id)) is not None

    def add_cumulative(self, name: Optional[str]) -> Optional[Cumulative]:
        return self._persist(commands.add_cumulative(self.record, name, id_factory=self.id_factory))

    def rename_cumulative(self, cumulative_id: str, name: Optional[str]) -> Optional[Cumulative]:
        return self._persist(commands.rename_cumulative(self.record, cumulative_id, name))

    def delete_cumulative(self, cumulative_id: str) -> bool:
        cumulative = self.record.find_cumulative(cumulative_id)
        if cumulative is None or not self._confirmed(f"Delete “{cumulative.name}”?"):
            return False
        return self._persist(commands.delete_cumulative(self.record, cumulative_id)) is not None

    def add_envelope_entry(self, envelope_id: str, amount_text: Optional[str]) -> Optional[Entry]:
        return self._persist(
            commands.add_envelope_entry(
                self.record,
                envelope_id,
                amount_text,
                id_factory=self.id_factory,
                clock=self.clock,
            )
        )

    def add_cumulative_entry(self, cumulative_id: str, amount_text: Optional[str]) -> Optional[Entry]:
        return self._persist(
            commands.add_cumulative_entry(
                self.record,
                cumulative_id,
                amount_text,
                id_factory=self.id_factory,
                clock=self.clock,
            )
        )

    def delete_envelope_entry(self, envelope_id: str, entry_id: str) -> Optional[Entry]:
        return self._persist(commands.delete_envelope_entry(self.record, envelope_id, entry_id))

    def delete_cumulative_entry(self, cumulative_id: str, entry_id: str) -> Optional[Entry]:
        return self._persist(
            commands.delete_cumulative_entry(self.record, cumulative_id, entry_id)
        )

    def reset_month(self) -> bool:
        prompt = (
            f"Reset {self.month}: un-mark fixed charges and empty envelopes and "
            "cumulatives (definitions are kept)?"
        )
        if not self._confirmed(prompt):
            return False
        self.store.reset(self.record)
        self.store.save(self.month, self.record)
        return True
