"""Key/value storage used by settings and session history.

Values are plain strings; callers serialize their own data (JSON).
"""

from __future__ import annotations

from typing import Protocol

from .db import get_session
from .models import Preference


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class SqlKeyValueStore:
    """Stores each key as a row of the ``preferences`` table.

    Call :func:`~pomotimer.database.db.init_db` before first use.
    """

    def get(self, key: str) -> str | None:
        with get_session() as db:
            row = db.get(Preference, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with get_session() as db:
            row = db.get(Preference, key)
            if row is None:
                db.add(Preference(key=key, value=value))
            else:
                row.value = value


class MemoryKeyValueStore:
    """Dict-backed store for tests and throwaway engines."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._data
