"""Shared test helpers for PomoTimer."""

from datetime import datetime, timedelta

from pomotimer.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingSoundPlayer:
    """Stands in for SoundManager; remembers every requested cue."""

    def __init__(self):
        self.played: list = []

    def play_sound(self, kind):
        self.played.append(kind)


class FakeClock:
    """Deterministic clock: each call returns a time one second later."""

    def __init__(self, start: datetime = datetime(2026, 10, 17, 9, 30)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


class FailingStore:
    """KeyValueStore whose reads and/or writes always raise."""

    def __init__(self, *, fail_get: bool = True, fail_set: bool = True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.data: dict[str, str] = {}

    def get(self, key):
        if self.fail_get:
            raise OSError("disk unavailable")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail_set:
            raise OSError("disk full")
        self.data[key] = value


def complete_interval(engine: TimerEngine) -> None:
    """Fast-complete the current interval by jumping to the last tick."""
    engine._remaining = 1
    engine.tick()
