from __future__ import annotations

import random
from datetime import date, timedelta

import pytest

from colorplan.schemas.appointment import AppointmentCreate, AppointmentUpdate
from colorplan.services.store import AppointmentStore, sample_day

DAY = date(2026, 10, 19)


def _fields(title: str = "Dentist", time: str = "09:00", **extra) -> AppointmentCreate:
    return AppointmentCreate(title=title, date=DAY, time=time, **extra)


@pytest.fixture
def store() -> AppointmentStore:
    return AppointmentStore()


def test_seeded_store_holds_sample_day() -> None:
    store = AppointmentStore(sample_day(DAY))

    records = store.list()
    assert len(records) == 15
    assert records[0].id == "APT-00001"
    assert records[0].title == "Breakfast"
    assert all(record.date == DAY for record in records)
    assert all(record.recurrence == "none" for record in records)
    assert len({record.id for record in records}) == 15


def test_create_appends_and_returns_stored_record(store: AppointmentStore) -> None:
    first = store.create(_fields("Standup", "10:00"))
    second = store.create(_fields("Gym", "07:00"))

    assert first.id.startswith("APT-")
    assert first.id != second.id
    assert [record.id for record in store.list()] == [first.id, second.id]
    assert store.get(second.id) == second
    assert second.completed is False
    assert second.reminder is False


def test_ids_are_not_reused_after_delete(store: AppointmentStore) -> None:
    first = store.create(_fields())
    store.delete(first.id)
    second = store.create(_fields())

    assert second.id != first.id


def test_update_merges_only_given_fields(store: AppointmentStore) -> None:
    record = store.create(_fields(description="Check-up", priority="high"))

    updated = store.update(record.id, AppointmentUpdate(title="Dentist (moved)", time="11:15"))

    assert updated is not None
    assert updated.id == record.id
    assert updated.title == "Dentist (moved)"
    assert updated.time == "11:15"
    assert updated.description == "Check-up"
    assert updated.priority == "high"
    assert store.get(record.id) == updated


def test_update_can_clear_optional_fields(store: AppointmentStore) -> None:
    record = store.create(_fields(description="Bring card", end_time="10:00"))

    updated = store.update(record.id, AppointmentUpdate(description=None, end_time=None))

    assert updated is not None
    assert updated.description is None
    assert updated.end_time is None


def test_empty_update_leaves_record_identical(store: AppointmentStore) -> None:
    record = store.create(_fields(end_time="09:45", reminder=True))

    store.update(record.id, AppointmentUpdate())

    assert store.get(record.id) == record


def test_mutations_on_unknown_id_are_noops(store: AppointmentStore) -> None:
    store.create(_fields())
    before = store.list()

    assert store.update("APT-99999", AppointmentUpdate(title="Nope")) is None
    assert store.toggle_complete("APT-99999") is None
    assert store.delete("APT-99999") is False
    assert store.list() == before


def test_delete_is_idempotent(store: AppointmentStore) -> None:
    record = store.create(_fields())
    keep = store.create(_fields("Keep me"))

    assert store.delete(record.id) is True
    assert store.delete(record.id) is False
    assert store.toggle_complete(record.id) is None
    assert store.update(record.id, AppointmentUpdate(title="Back")) is None
    assert store.list() == [keep]


def test_toggle_twice_restores_completion(store: AppointmentStore) -> None:
    record = store.create(_fields())

    toggled = store.toggle_complete(record.id)
    assert toggled is not None and toggled.completed is True

    restored = store.toggle_complete(record.id)
    assert restored is not None and restored.completed is False
    assert restored == record


def test_end_time_before_start_is_accepted(store: AppointmentStore) -> None:
    record = store.create(_fields(time="18:00", end_time="08:00"))

    assert record.end_time == "08:00"


def test_ids_stay_unique_under_random_operations(store: AppointmentStore) -> None:
    rng = random.Random(20261019)
    issued = set()
    for step in range(300):
        ids = [record.id for record in store.list()]
        assert len(ids) == len(set(ids))
        action = rng.choice(["create", "create", "update", "delete", "toggle"])
        if action == "create" or not ids:
            record = store.create(_fields(f"Item {step}", f"{rng.randrange(24):02d}:00"))
            assert record.id not in issued
            issued.add(record.id)
            continue
        target = rng.choice(ids + ["APT-00000"])
        if action == "update":
            store.update(target, AppointmentUpdate(title=f"Renamed {step}"))
        elif action == "delete":
            store.delete(target)
        else:
            store.toggle_complete(target)


def test_reset_reloads_seed_set() -> None:
    store = AppointmentStore(sample_day(DAY))
    store.create(_fields("Extra"))
    store.delete("APT-00001")

    store.reset()

    titles = [record.title for record in store.list()]
    assert len(store) == 15
    assert titles[0] == "Breakfast"
    assert "Extra" not in titles
    assert "APT-00001" not in {record.id for record in store.list()}


def test_reset_with_new_seeds_replaces_seed_set() -> None:
    store = AppointmentStore(sample_day(DAY))
    next_day = DAY + timedelta(days=1)

    store.reset(sample_day(next_day))
    assert {record.date for record in store.list()} == {next_day}

    store.reset()
    assert {record.date for record in store.list()} == {next_day}
    assert len(store) == 15
