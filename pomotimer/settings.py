"""Application settings persisted through the key/value store.

Each field is stored under its own name as a JSON value::

    work_duration         1500
    short_break_duration  300
    long_break_duration   900
    sound_enabled         true

Usage::

    store = SqlKeyValueStore()
    settings = load_settings(store)
    settings.work_duration = 30 * 60
    save_settings(store, settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields

from .database.store import KeyValueStore
from .timer.engine import TimerConfig


logger = logging.getLogger(__name__)

MIN_DURATION = 60  # seconds
MAX_DURATION = 4 * 60 * 60


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: int = 25 * 60           # seconds
    short_break_duration: int = 5 * 60
    long_break_duration: int = 15 * 60

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True

    def timer_config(self) -> TimerConfig:
        return TimerConfig(
            work_time=self.work_duration,
            short_break_time=self.short_break_duration,
            long_break_time=self.long_break_duration,
        )


def _coerce(default: int | bool, value: object) -> int | bool | None:
    """Validate a stored value against the field's default type."""
    if isinstance(default, bool):
        return value if isinstance(value, bool) else None
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return min(MAX_DURATION, max(MIN_DURATION, value))


def load_settings(store: KeyValueStore) -> Settings:
    """Load settings, falling back to defaults key by key."""
    values: dict[str, int | bool] = {}
    for f in fields(Settings):
        try:
            raw = store.get(f.name)
        except Exception:
            logger.warning("Could not read setting %r", f.name, exc_info=True)
            continue
        if raw is None:
            continue
        try:
            value = _coerce(f.default, json.loads(raw))
        except ValueError:
            value = None
        if value is None:
            logger.warning("Ignoring invalid value for %r: %r", f.name, raw)
            continue
        values[f.name] = value
    return Settings(**values)


def save_settings(store: KeyValueStore, settings: Settings) -> None:
    """Write every field.  Failures are logged and dropped."""
    for name, value in asdict(settings).items():
        try:
            store.set(name, json.dumps(value))
        except Exception:
            logger.warning("Could not save setting %r", name, exc_info=True)
