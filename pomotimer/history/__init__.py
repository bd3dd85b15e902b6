"""Session history package."""

from .store import HistoryEntry, HistoryStore, HISTORY_KEY

__all__ = ["HistoryEntry", "HistoryStore", "HISTORY_KEY"]
