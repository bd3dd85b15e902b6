"""Tests for HistoryEntry and HistoryStore."""

import json
from datetime import datetime

import pytest

from pomotimer.database.store import MemoryKeyValueStore, SqlKeyValueStore
from pomotimer.history.store import HistoryEntry, HistoryStore, HISTORY_KEY
from pomotimer.timer.engine import Phase

from helpers import FailingStore


def make_entry(phase=Phase.WORK, completed=True, minute=0, duration=1500):
    return HistoryEntry.create(
        started_at=datetime(2026, 10, 17, 9, minute),
        phase=phase,
        duration_seconds=duration,
        completed=completed,
    )


# ═══════════════════════════════════════════════════════════════════════
#  HISTORY ENTRY
# ═══════════════════════════════════════════════════════════════════════


class TestHistoryEntry:

    def test_create_assigns_unique_ids(self):
        a, b = make_entry(), make_entry()
        assert a.id != b.id
        assert len(a.id) == 32

    def test_is_immutable(self):
        entry = make_entry()
        with pytest.raises(AttributeError):
            entry.completed = False

    def test_display_helpers(self):
        entry = make_entry(phase=Phase.SHORT_BREAK, minute=5, duration=300)
        assert entry.label == "Short Break"
        assert entry.duration_minutes == 5
        assert entry.formatted_time == "9:05 AM"

    def test_serialized_keys(self):
        entry = make_entry(phase=Phase.LONG_BREAK, completed=False, duration=900)
        data = entry.to_dict()
        assert data == {
            "id": entry.id,
            "date": "2026-10-17T09:00:00",
            "type": "long_break",
            "duration": 900,
            "completed": False,
        }

    def test_from_dict(self):
        entry = HistoryEntry.from_dict({
            "id": "abc",
            "date": "2026-10-17T14:15:16",
            "type": "work",
            "duration": 1500,
            "completed": True,
        })
        assert entry == HistoryEntry(
            id="abc",
            started_at=datetime(2026, 10, 17, 14, 15, 16),
            phase=Phase.WORK,
            duration_seconds=1500,
            completed=True,
        )

    @pytest.mark.parametrize("patch", [
        {"type": "lunch"},
        {"date": "yesterday"},
        {"duration": "1500"},
        {"completed": "yes"},
    ])
    def test_from_dict_rejects_bad_fields(self, patch):
        data = make_entry().to_dict()
        data.update(patch)
        with pytest.raises((KeyError, TypeError, ValueError)):
            HistoryEntry.from_dict(data)

    def test_from_dict_rejects_missing_field(self):
        data = make_entry().to_dict()
        del data["completed"]
        with pytest.raises(KeyError):
            HistoryEntry.from_dict(data)


# ═══════════════════════════════════════════════════════════════════════
#  HISTORY STORE
# ═══════════════════════════════════════════════════════════════════════


class TestHistoryStore:

    def test_empty_when_no_data(self, kv_store):
        store = HistoryStore(kv_store)
        assert store.load_all() == ()
        assert len(store) == 0

    def test_append_prepends(self, kv_store):
        store = HistoryStore(kv_store)
        first, second = make_entry(minute=0), make_entry(minute=30)
        store.append(first)
        store.append(second)
        assert store.entries == (second, first)
        assert list(store) == [second, first]

    def test_append_persists_full_list(self, kv_store):
        store = HistoryStore(kv_store)
        store.append(make_entry(minute=0))
        store.append(make_entry(minute=30))
        data = json.loads(kv_store.get(HISTORY_KEY))
        assert len(data) == 2
        assert data[0]["date"] == "2026-10-17T09:30:00"

    def test_round_trip(self, kv_store):
        store = HistoryStore(kv_store)
        entries = [
            make_entry(Phase.WORK, True, 0),
            make_entry(Phase.SHORT_BREAK, False, 25, 300),
            make_entry(Phase.LONG_BREAK, True, 40, 900),
        ]
        for e in entries:
            store.append(e)

        reloaded = HistoryStore(kv_store)
        assert reloaded.load_all() == store.load_all()
        assert reloaded.load_all() == tuple(reversed(entries))

    def test_round_trip_through_sqlite(self):
        sql = SqlKeyValueStore()
        store = HistoryStore(sql)
        store.append(make_entry(minute=1))
        store.append(make_entry(Phase.SHORT_BREAK, False, 2, 300))

        assert HistoryStore(sql).load_all() == store.load_all()

    def test_loads_once_at_construction(self, kv_store):
        store = HistoryStore(kv_store)
        kv_store.set(HISTORY_KEY, json.dumps([make_entry().to_dict()]))
        assert store.load_all() == ()

    def test_custom_key(self, kv_store):
        store = HistoryStore(kv_store, key="other")
        store.append(make_entry())
        assert kv_store.get("other") is not None
        assert kv_store.get(HISTORY_KEY) is None

    def test_clear(self, kv_store):
        store = HistoryStore(kv_store)
        store.append(make_entry())
        store.clear()
        assert store.load_all() == ()
        assert HistoryStore(kv_store).load_all() == ()

    def test_entries_snapshot_is_not_live(self, kv_store):
        store = HistoryStore(kv_store)
        snapshot = store.entries
        store.append(make_entry())
        assert snapshot == ()


class TestHistoryStoreFailures:

    @pytest.mark.parametrize("raw", [
        "NOT VALID JSON",
        json.dumps({"id": "x"}),
        json.dumps(["just a string"]),
        json.dumps([{"id": "x", "date": "2026-10-17T09:00:00"}]),
    ])
    def test_corrupt_data_loads_empty(self, raw):
        kv = MemoryKeyValueStore({HISTORY_KEY: raw})
        assert HistoryStore(kv).load_all() == ()

    def test_one_bad_entry_discards_all(self):
        good = make_entry().to_dict()
        kv = MemoryKeyValueStore({HISTORY_KEY: json.dumps([good, {"bogus": 1}])})
        assert HistoryStore(kv).load_all() == ()

    def test_read_failure_loads_empty(self):
        store = HistoryStore(FailingStore(fail_get=True, fail_set=False))
        assert store.load_all() == ()

    def test_write_failure_is_silent(self):
        failing = FailingStore(fail_get=False, fail_set=True)
        store = HistoryStore(failing)
        entry = make_entry()
        store.append(entry)  # must not raise
        assert store.load_all() == (entry,)
        assert failing.data == {}

    def test_failures_are_logged(self, caplog):
        with caplog.at_level("WARNING", logger="pomotimer.history.store"):
            store = HistoryStore(FailingStore())
            store.append(make_entry())
        messages = [r.getMessage() for r in caplog.records]
        assert any("load" in m for m in messages)
        assert any("save" in m for m in messages)
