"""Mini README: Tests for the month store and its storage backends.

Structure:
    * round trip - saving then loading returns an equal record.
    * corrupt storage - unreadable documents degrade to empty mappings.
    * namespaces - other entries of the JSON document are preserved.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from monthbudget.budget import commands
from monthbudget.storage import InMemoryStorage, JsonFileStorage, MonthStore
from monthbudget.utils import SequentialIds


def _json_store(tmp_path: Path) -> MonthStore:
    return MonthStore(JsonFileStorage(tmp_path / "budget.json"), id_factory=SequentialIds("id"))


def test_load_absent_month_returns_default_record(tmp_path: Path) -> None:
    record = _json_store(tmp_path).load("2024-05")
    assert record.income_cents == 0
    assert record.fixed_charges == record.envelopes == record.cumulatives == []


def test_save_then_load_round_trips(tmp_path: Path) -> None:
    """A saved normalised record reloads deeply equal."""

    store = _json_store(tmp_path)
    record = store.load("2024-05")
    commands.set_income(record, "3000")
    commands.add_fixed_charge(record, "Rent", "650", "Housing", id_factory=store.id_factory)
    envelope = commands.add_envelope(record, "Groceries", "200", id_factory=store.id_factory)
    commands.add_envelope_entry(
        record, envelope.id, "4,50", id_factory=store.id_factory, clock=lambda: 1_000
    )
    commands.add_cumulative(record, "Fuel", id_factory=store.id_factory)

    store.save("2024-05", record)

    assert store.load("2024-05") == record
    assert _json_store(tmp_path).load("2024-05") == record


def test_save_replaces_only_its_month() -> None:
    storage = InMemoryStorage()
    store = MonthStore(storage)
    may = store.load("2024-05")
    commands.set_income(may, "1000")
    store.save("2024-05", may)
    june = store.load("2024-06")
    commands.set_income(june, "2000")
    store.save("2024-06", june)
    commands.set_income(may, "1500")
    store.save("2024-05", may)

    assert store.load("2024-05").income_cents == 150000
    assert store.load("2024-06").income_cents == 200000
    assert store.months() == ["2024-05", "2024-06"]
    assert storage.writes == 3


def test_save_rejects_malformed_month_key() -> None:
    store = MonthStore(InMemoryStorage())
    with pytest.raises(ValueError):
        store.save("May 2024", store.load("May 2024"))


@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2, 3]", '{"monthbudget:v1": "oops"}', '{"monthbudget:v1": []}'],
)
def test_corrupt_documents_read_as_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "budget.json"
    path.write_text(content, encoding="utf-8")

    storage = JsonFileStorage(path)

    assert storage.read_all() == {}
    assert MonthStore(storage).load("2024-05").income_cents == 0


def test_malformed_month_entry_degrades_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "budget.json"
    path.write_text(
        json.dumps({"monthbudget:v1": {"2024-05": {"incomeCents": 5000, "envelopes": 3}}}),
        encoding="utf-8",
    )

    record = MonthStore(JsonFileStorage(path)).load("2024-05")

    assert record.income_cents == 5000
    assert record.envelopes == []


def test_write_keeps_other_namespaces(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "budget.json"
    JsonFileStorage(path, namespace="other-app").write_all({"keep": True})

    store = MonthStore(JsonFileStorage(path))
    store.save("2024-05", store.load("2024-05"))

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["other-app"] == {"keep": True}
    assert document["monthbudget:v1"]["2024-05"] == {
        "incomeCents": 0,
        "fixedCharges": [],
        "envelopes": [],
        "cumulatives": [],
    }


def test_reset_clears_spends_in_place() -> None:
    store = MonthStore(InMemoryStorage(), id_factory=SequentialIds("id"))
    record = store.load("2024-05")
    charge = commands.add_fixed_charge(record, "Rent", "650", id_factory=store.id_factory)
    commands.toggle_fixed_charge(record, charge.id)
    cumulative = commands.add_cumulative(record, "Fuel", id_factory=store.id_factory)
    commands.add_cumulative_entry(record, cumulative.id, "40", id_factory=store.id_factory)

    assert store.reset(record) is record
    assert record.fixed_charges[0].paid is False
    assert record.cumulatives[0].entries == []
    assert record.cumulatives[0].spent_cents == 0


def test_in_memory_storage_copies_on_access() -> None:
    storage = InMemoryStorage({"2024-05": {"incomeCents": 1}})
    snapshot = storage.read_all()
    snapshot["2024-05"]["incomeCents"] = 999
    assert storage.read_all()["2024-05"]["incomeCents"] == 1


def test_ids_assigned_on_load_are_stable() -> None:
    storage = InMemoryStorage(
        {
            "2024-05": {
                "fixedCharges": [
                    {"name": "Rent", "amountCents": 65000},
                    {"id": "dup", "name": "Phone", "amountCents": 2000},
                    {"id": "dup", "name": "Internet", "amountCents": 3000},
                ],
                "cumulatives": [{"id": "fuel", "name": "Fuel", "entries": [{"amountCents": 4000}]}],
            }
        }
    )
    store = MonthStore(storage, id_factory=SequentialIds("id"))

    first = store.load("2024-05")
    second = store.load("2024-05")

    assert [charge.id for charge in first.fixed_charges] == ["id_0001", "dup", "id_0002"]
    assert first == second
    assert storage.writes == 1
    stored = storage.read_all()["2024-05"]
    assert [charge["id"] for charge in stored["fixedCharges"]] == ["id_0001", "dup", "id_0002"]
    assert stored["cumulatives"][0]["entries"][0]["id"] == "id_0003"


def test_well_formed_load_does_not_write() -> None:
    storage = InMemoryStorage({"2024-05": {"incomeCents": 1000}})
    store = MonthStore(storage)

    store.load("2024-05")
    store.load("2024-06")

    assert storage.writes == 0
    assert store.months() == ["2024-05"]
