"""Mini README: Tests for the budget session context object.

Sessions persist after effective mutations only, ask before destructive
actions and navigate between months independently of each other.
"""

from __future__ import annotations

import pytest

from monthbudget.budget.money import InvalidAmountError
from monthbudget.budget.months import month_key
from monthbudget.session import BudgetSession
from monthbudget.storage import InMemoryStorage, MonthStore
from monthbudget.utils import SequentialIds


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def store(storage: InMemoryStorage) -> MonthStore:
    return MonthStore(storage, id_factory=SequentialIds("id"))


def _session(store: MonthStore, answer: bool = True, month: str = "2024-12") -> BudgetSession:
    return BudgetSession(store, month, clock=lambda: 1_000, confirm=lambda _prompt: answer)


def test_session_defaults_to_current_month(store: MonthStore) -> None:
    assert BudgetSession(store).month == month_key()


def test_session_rejects_malformed_month(store: MonthStore) -> None:
    with pytest.raises(ValueError):
        BudgetSession(store, "2024-13")


def test_mutations_persist_and_no_ops_do_not(store: MonthStore, storage: InMemoryStorage) -> None:
    session = _session(store)

    envelope = session.add_envelope("Groceries", "200")
    assert storage.writes == 1
    assert session.add_envelope_entry("missing", "5") is None
    assert session.toggle_fixed_charge("missing") is None
    assert session.add_cumulative("   ") is None
    assert storage.writes == 1

    entry = session.add_envelope_entry(envelope.id, "12,30")
    assert entry.ts == 1_000
    assert storage.writes == 2
    assert store.load("2024-12").envelopes[0].spent_cents == 1230


def test_rejected_amount_does_not_persist(store: MonthStore, storage: InMemoryStorage) -> None:
    session = _session(store)
    with pytest.raises(InvalidAmountError):
        session.add_fixed_charge("Rent", "0")
    assert storage.writes == 0
    assert session.record.fixed_charges == []


def test_set_income_to_zero_still_persists(store: MonthStore, storage: InMemoryStorage) -> None:
    session = _session(store)
    session.set_income("")
    assert storage.writes == 1


def test_declined_confirmation_leaves_state(store: MonthStore, storage: InMemoryStorage) -> None:
    session = _session(store, answer=False)
    charge = session.add_fixed_charge("Rent", "650")
    envelope = session.add_envelope("Groceries", "200")
    cumulative = session.add_cumulative("Fuel")
    session.toggle_fixed_charge(charge.id)
    writes = storage.writes

    assert session.delete_fixed_charge(charge.id) is False
    assert session.delete_envelope(envelope.id) is False
    assert session.delete_cumulative(cumulative.id) is False
    assert session.reset_month() is False

    assert storage.writes == writes
    reloaded = store.load("2024-12")
    assert reloaded == session.record
    assert reloaded.fixed_charges[0].paid is True


def test_confirmed_deletions_apply(store: MonthStore) -> None:
    prompts = []
    session = BudgetSession(store, "2024-12", confirm=lambda prompt: prompts.append(prompt) or True)
    charge = session.add_fixed_charge("Rent", "650")
    envelope = session.add_envelope("Groceries", "200")

    assert session.delete_fixed_charge(charge.id) is True
    assert session.delete_envelope(envelope.id) is True
    assert session.delete_cumulative("missing") is False

    assert any("Rent" in prompt for prompt in prompts)
    assert store.load("2024-12").fixed_charges == []
    assert store.load("2024-12").envelopes == []


def test_reset_month_persists(store: MonthStore) -> None:
    session = _session(store)
    cumulative = session.add_cumulative("Fuel")
    session.add_cumulative_entry(cumulative.id, "40")

    assert session.reset_month() is True

    reloaded = store.load("2024-12")
    assert reloaded.cumulatives[0].name == "Fuel"
    assert reloaded.cumulatives[0].entries == []


def test_month_navigation_loads_independent_records(store: MonthStore) -> None:
    session = _session(store)
    session.set_income("1000")

    session.go_month(1)
    assert session.month == "2025-01"
    assert session.record.income_cents == 0
    session.set_income("2000")

    session.go_month(-1)
    assert session.month == "2024-12"
    assert session.record.income_cents == 100000
    assert store.months() == ["2024-12", "2025-01"]


def test_two_sessions_are_isolated(store: MonthStore) -> None:
    december = _session(store, month="2024-12")
    january = _session(store, month="2025-01")
    december.add_envelope("Gifts", "150")
    assert january.record.envelopes == []


def test_read_helpers(store: MonthStore) -> None:
    session = _session(store)
    session.add_fixed_charge("Rent", "650", "Housing")
    session.add_fixed_charge("Phone", "20")
    envelope = session.add_envelope("Groceries", "200")
    for amount in ["1", "2", "3"]:
        session.add_envelope_entry(envelope.id, amount)

    assert [group for group, _ in session.grouped_fixed_charges()] == ["Housing", "Other"]
    recent = session.recent_entries(session.record.envelopes[0].entries, limit=2)
    assert [entry.amount_cents for entry in recent] == [300, 200]
    assert session.totals().fixed_charges_total == 65000 + 2000 + 20000


def test_item_stored_without_id_can_be_toggled_later() -> None:
    storage = InMemoryStorage(
        {"2024-12": {"fixedCharges": [{"name": "Rent", "amountCents": 65000}]}}
    )
    store = MonthStore(storage, id_factory=SequentialIds("id"))

    charge_id = _session(store).record.fixed_charges[0].id
    later = _session(store)

    assert later.toggle_fixed_charge(charge_id) is not None
    assert store.load("2024-12").fixed_charges[0].paid is True
