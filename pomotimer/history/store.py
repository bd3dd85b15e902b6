"""Session history: immutable log entries and their persistence.

The whole log is stored as one JSON list under a single key of the
injected :class:`~pomotimer.database.store.KeyValueStore`, newest entry
first::

    [{"id": "3f2a...", "date": "2026-10-17T09:30:00", "type": "work",
      "duration": 1500, "completed": true}, ...]

Storage problems never reach the caller: an unreadable log loads as
empty and a failed write is dropped (both are logged).
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator

from ..database.store import KeyValueStore
from ..timer.engine import Phase


logger = logging.getLogger(__name__)

HISTORY_KEY = "session_history"


@dataclass(frozen=True)
class HistoryEntry:
    """One concluded interval."""

    id: str
    started_at: datetime
    phase: Phase
    duration_seconds: int
    completed: bool

    @classmethod
    def create(
        cls,
        *,
        started_at: datetime,
        phase: Phase,
        duration_seconds: int,
        completed: bool,
    ) -> HistoryEntry:
        return cls(
            id=uuid.uuid4().hex,
            started_at=started_at,
            phase=phase,
            duration_seconds=duration_seconds,
            completed=completed,
        )

    # ── display helpers ───────────────────────────────────────────────

    @property
    def label(self) -> str:
        return self.phase.label

    @property
    def duration_minutes(self) -> int:
        return self.duration_seconds // 60

    @property
    def formatted_time(self) -> str:
        """Short clock time, e.g. ``"9:30 AM"``."""
        return self.started_at.strftime("%-I:%M %p")

    # ── serialization ─────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.started_at.isoformat(),
            "type": self.phase.value,
            "duration": self.duration_seconds,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> HistoryEntry:
        """Build an entry from its stored form.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` on malformed
        data.
        """
        duration = data["duration"]
        completed = data["completed"]
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise TypeError(f"duration must be an integer, got {duration!r}")
        if not isinstance(completed, bool):
            raise TypeError(f"completed must be a boolean, got {completed!r}")
        return cls(
            id=str(data["id"]),
            started_at=datetime.fromisoformat(data["date"]),
            phase=Phase(data["type"]),
            duration_seconds=duration,
            completed=completed,
        )


class HistoryStore:
    """Ordered, persisted list of :class:`HistoryEntry`, newest first.

    The list is read from storage once, at construction.
    """

    def __init__(self, storage: KeyValueStore, key: str = HISTORY_KEY) -> None:
        self._storage = storage
        self._key = key
        self._entries: list[HistoryEntry] = self._load()

    # ── public API ────────────────────────────────────────────────────

    def load_all(self) -> tuple[HistoryEntry, ...]:
        """Entries as loaded at startup plus anything appended since."""
        return tuple(self._entries)

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def append(self, entry: HistoryEntry) -> None:
        self._entries.insert(0, entry)
        self._save()

    def clear(self) -> None:
        self._entries.clear()
        self._save()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))

    # ── internal ──────────────────────────────────────────────────────

    def _load(self) -> list[HistoryEntry]:
        try:
            raw = self._storage.get(self._key)
            if raw is None:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [HistoryEntry.from_dict(item) for item in data]
        except Exception:
            logger.warning(
                "Could not load session history; starting empty",
                exc_info=True,
            )
            return []

    def _save(self) -> None:
        payload = json.dumps([e.to_dict() for e in self._entries])
        try:
            self._storage.set(self._key, payload)
        except Exception:
            logger.warning("Could not save session history", exc_info=True)
