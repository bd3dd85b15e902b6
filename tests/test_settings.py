"""Tests for Settings defaults, validation and persistence."""

import json

from pomotimer.database.store import MemoryKeyValueStore, SqlKeyValueStore
from pomotimer.settings import Settings, load_settings, save_settings, MAX_DURATION, MIN_DURATION
from pomotimer.timer.engine import TimerConfig

from helpers import FailingStore


class TestSettingsDefaults:

    def test_durations(self):
        s = Settings()
        assert s.work_duration == 25 * 60
        assert s.short_break_duration == 5 * 60
        assert s.long_break_duration == 15 * 60

    def test_sound_enabled(self):
        assert Settings().sound_enabled is True

    def test_timer_config(self):
        s = Settings(work_duration=1800, short_break_duration=600, long_break_duration=1200)
        assert s.timer_config() == TimerConfig(1800, 600, 1200)


class TestSettingsPersistence:

    def test_round_trip(self, kv_store):
        original = Settings(work_duration=30 * 60, sound_enabled=False)
        save_settings(kv_store, original)
        assert load_settings(kv_store) == original

    def test_round_trip_through_sqlite(self):
        store = SqlKeyValueStore()
        save_settings(store, Settings(long_break_duration=20 * 60))
        assert load_settings(store).long_break_duration == 20 * 60

    def test_stable_keys(self, kv_store):
        save_settings(kv_store, Settings())
        assert kv_store.get("work_duration") == "1500"
        assert kv_store.get("short_break_duration") == "300"
        assert kv_store.get("long_break_duration") == "900"
        assert kv_store.get("sound_enabled") == "true"

    def test_missing_keys_use_defaults(self, kv_store):
        assert load_settings(kv_store) == Settings()

    def test_partial_data(self):
        store = MemoryKeyValueStore({"short_break_duration": "420"})
        s = load_settings(store)
        assert s.short_break_duration == 420
        assert s.work_duration == 25 * 60

    def test_invalid_json_falls_back(self):
        store = MemoryKeyValueStore({"work_duration": "NOT JSON"})
        assert load_settings(store).work_duration == 25 * 60

    def test_wrong_types_fall_back(self):
        store = MemoryKeyValueStore({
            "work_duration": json.dumps("1800"),
            "long_break_duration": json.dumps(True),
            "sound_enabled": json.dumps(1),
        })
        s = load_settings(store)
        assert s.work_duration == 25 * 60
        assert s.long_break_duration == 15 * 60
        assert s.sound_enabled is True

    def test_short_durations_clamped(self):
        store = MemoryKeyValueStore({"work_duration": "5", "short_break_duration": "-30"})
        s = load_settings(store)
        assert s.work_duration == MIN_DURATION
        assert s.short_break_duration == MIN_DURATION

    def test_long_durations_clamped(self):
        store = MemoryKeyValueStore({"work_duration": "10800", "long_break_duration": "99999"})
        s = load_settings(store)
        assert s.work_duration == 10800
        assert s.long_break_duration == MAX_DURATION

    def test_read_failure_gives_defaults(self):
        assert load_settings(FailingStore()) == Settings()

    def test_write_failure_is_silent(self):
        save_settings(FailingStore(), Settings())
