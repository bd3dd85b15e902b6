"""Timer state machine for PomoTimer.

Phases
------
IDLE          No session started yet.  Never advances on its own.
WORK          Work interval counting down.
SHORT_BREAK   Short break counting down.
LONG_BREAK    Long break counting down (every 4th completed work interval).

Transitions
-----------
IDLE → WORK                                  (start)
WORK → SHORT_BREAK | LONG_BREAK              (countdown reaches 0)
SHORT_BREAK | LONG_BREAK → WORK              (countdown reaches 0)
Any → IDLE                                   (reset)

Pausing only stops the clock; the phase is kept and ``start()`` resumes
from the same ``remaining_seconds``.  Every concluded interval, whether it
ran out or was cut short by pause/reset, becomes exactly one history entry
carrying the interval's nominal length.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

if TYPE_CHECKING:
    from ..history.store import HistoryEntry, HistoryStore


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    IDLE = "idle"
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        return PHASE_LABELS[self]


class SoundKind(Enum):
    WORK_START = "work_start"
    BREAK_START = "break_start"
    TIMER_COMPLETE = "timer_complete"


# ── constants ─────────────────────────────────────────────────────────────

PHASE_LABELS: dict[Phase, str] = {
    Phase.IDLE: "Idle",
    Phase.WORK: "Work",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK: "Long Break",
}

DEFAULT_WORK_TIME = 25 * 60
DEFAULT_SHORT_BREAK_TIME = 5 * 60
DEFAULT_LONG_BREAK_TIME = 15 * 60

LONG_BREAK_EVERY = 4  # every 4th completed work interval earns a long break
TICK_INTERVAL_MS = 1000


# ── collaborators ─────────────────────────────────────────────────────────


class SoundPlayer(Protocol):
    """Anything that can play a cue.  Must return immediately."""

    def play_sound(self, kind: SoundKind) -> None: ...


@dataclass(frozen=True)
class TimerConfig:
    """Interval lengths in seconds."""

    work_time: int = DEFAULT_WORK_TIME
    short_break_time: int = DEFAULT_SHORT_BREAK_TIME
    long_break_time: int = DEFAULT_LONG_BREAK_TIME

    def __post_init__(self) -> None:
        for name in ("work_time", "short_break_time", "long_break_time"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    def duration_for(self, phase: Phase) -> int:
        if phase == Phase.SHORT_BREAK:
            return self.short_break_time
        if phase == Phase.LONG_BREAK:
            return self.long_break_time
        # IDLE shows the upcoming work interval
        return self.work_time


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based Pomodoro timer: phase cycling, countdown, history logging.

    Signals
    -------
    state_changed()
        Emitted after every mutating operation.  Observers re-read the
        public properties.
    phase_changed(phase: Phase)
        Emitted whenever the phase changes.
    remaining_changed(remaining_seconds: int)
        Emitted whenever the countdown value changes.
    running_changed(is_running: bool)
        Emitted when the clock starts or stops.
    entry_logged(entry: HistoryEntry)
        Emitted after an interval has been appended to history.
    history_cleared()
        Emitted after ``clear_history()``.
    """

    state_changed = pyqtSignal()
    phase_changed = pyqtSignal(object)
    remaining_changed = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    entry_logged = pyqtSignal(object)
    history_cleared = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        history: HistoryStore | None = None,
        sound_player: SoundPlayer | None = None,
        config: TimerConfig | None = None,
        sound_enabled: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(parent)

        if history is None:
            from ..database.store import MemoryKeyValueStore
            from ..history.store import HistoryStore

            history = HistoryStore(MemoryKeyValueStore())

        # ── collaborators ─────────────────────────────────────────────
        self._history = history
        self._sound_player = sound_player
        self._sound_enabled = sound_enabled
        self._clock = clock

        # ── configuration ─────────────────────────────────────────────
        self._config: TimerConfig = config or TimerConfig()

        # ── cycle / session state ─────────────────────────────────────
        self._phase: Phase = Phase.IDLE
        self._running: bool = False
        self._completed_work_count: int = 0
        self._session_started_at: datetime | None = None

        # ── countdown state ───────────────────────────────────────────
        self._interval_seconds: int = self._config.work_time
        self._remaining: int = self._interval_seconds

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def interval_seconds(self) -> int:
        """Length the current interval was armed with."""
        return self._interval_seconds

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def completed_work_count(self) -> int:
        return self._completed_work_count

    @property
    def session_started_at(self) -> datetime | None:
        """Start of the open session, or ``None`` when none is open."""
        return self._session_started_at

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current interval."""
        if self._interval_seconds <= 0:
            return 0.0
        elapsed = self._interval_seconds - self._remaining
        return max(0.0, min(1.0, elapsed / self._interval_seconds))

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        """Logged intervals, newest first."""
        return self._history.entries

    @property
    def sound_enabled(self) -> bool:
        return self._sound_enabled

    @sound_enabled.setter
    def sound_enabled(self, value: bool) -> None:
        self._sound_enabled = bool(value)
        self.state_changed.emit()

    # ── configuration ─────────────────────────────────────────────────
    #
    # Changing a duration never touches a started countdown; the new
    # value is picked up the next time an interval is armed.  While IDLE
    # the upcoming work interval is re-armed straight away.

    @property
    def config(self) -> TimerConfig:
        return self._config

    @config.setter
    def config(self, value: TimerConfig) -> None:
        if not isinstance(value, TimerConfig):
            raise TypeError(
                f"config must be a TimerConfig, got {type(value).__name__}"
            )
        self._config = value
        if self._phase == Phase.IDLE:
            self._arm(value.work_time)
        self.state_changed.emit()

    @property
    def work_time(self) -> int:
        return self._config.work_time

    @work_time.setter
    def work_time(self, seconds: int) -> None:
        self.config = replace(self._config, work_time=seconds)

    @property
    def short_break_time(self) -> int:
        return self._config.short_break_time

    @short_break_time.setter
    def short_break_time(self, seconds: int) -> None:
        self.config = replace(self._config, short_break_time=seconds)

    @property
    def long_break_time(self) -> int:
        return self._config.long_break_time

    @long_break_time.setter
    def long_break_time(self, seconds: int) -> None:
        self.config = replace(self._config, long_break_time=seconds)

    def duration_for(self, phase: Phase) -> int:
        return self._config.duration_for(phase)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start (or resume) the countdown.  Harmless while running."""
        if self._phase == Phase.IDLE:
            self._arm(self._config.work_time)
            self._set_phase(Phase.WORK)
            self._play(SoundKind.WORK_START)

        if self._session_started_at is None:
            self._session_started_at = self._clock()

        self._set_running(True)
        if not self._qt_timer.isActive():
            self._qt_timer.start()
        self.state_changed.emit()

    def pause(self) -> None:
        """Stop the clock.  An open session is logged as not completed."""
        self._halt()
        if self._session_started_at is not None:
            self._log_interval(completed=False)
        self.state_changed.emit()

    def reset(self) -> None:
        """Abandon everything and return to IDLE with a fresh cycle."""
        if self._session_started_at is not None:
            self._log_interval(completed=False)
        self._halt()

        self._set_phase(Phase.IDLE)
        self._arm(self._config.work_time)
        self._completed_work_count = 0
        self._session_started_at = None
        self.state_changed.emit()

    def tick(self) -> None:
        """Advance the countdown by one second.  Ignored unless running."""
        if not self._running:
            return
        if self._remaining > 0:
            self._set_remaining(self._remaining - 1)
        if self._remaining == 0:
            self._complete()
        self.state_changed.emit()

    def clear_history(self) -> None:
        self._history.clear()
        self.history_cleared.emit()
        self.state_changed.emit()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _complete(self) -> None:
        self._play(SoundKind.TIMER_COMPLETE)
        if self._session_started_at is not None:
            self._log_interval(completed=True)
        self._halt()

        finished = self._phase
        if finished == Phase.WORK:
            self._completed_work_count += 1
            if self._completed_work_count % LONG_BREAK_EVERY == 0:
                next_phase = Phase.LONG_BREAK
            else:
                next_phase = Phase.SHORT_BREAK
        elif finished in (Phase.SHORT_BREAK, Phase.LONG_BREAK):
            next_phase = Phase.WORK
        else:
            return

        logger.debug(
            "%s complete (%d work intervals done), moving to %s",
            finished.label, self._completed_work_count, next_phase.label,
        )
        self._set_phase(next_phase)
        self._arm(self._config.duration_for(next_phase))
        self._play(
            SoundKind.WORK_START if next_phase == Phase.WORK
            else SoundKind.BREAK_START
        )
        self._session_started_at = self._clock()
        self.start()

    def _arm(self, seconds: int) -> None:
        self._interval_seconds = seconds
        self._set_remaining(seconds)

    def _halt(self) -> None:
        self._qt_timer.stop()
        self._set_running(False)

    def _log_interval(self, *, completed: bool) -> None:
        from ..history.store import HistoryEntry

        duration = 0 if self._phase == Phase.IDLE else self._interval_seconds
        entry = HistoryEntry.create(
            started_at=self._session_started_at,
            phase=self._phase,
            duration_seconds=duration,
            completed=completed,
        )
        self._session_started_at = None
        self._history.append(entry)
        self.entry_logged.emit(entry)

    def _play(self, kind: SoundKind) -> None:
        if self._sound_enabled and self._sound_player is not None:
            self._sound_player.play_sound(kind)

    # ── setters that notify ───────────────────────────────────────────

    def _set_phase(self, phase: Phase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        self.phase_changed.emit(phase)

    def _set_remaining(self, seconds: int) -> None:
        if seconds == self._remaining:
            return
        self._remaining = seconds
        self.remaining_changed.emit(seconds)

    def _set_running(self, running: bool) -> None:
        if running == self._running:
            return
        self._running = running
        self.running_changed.emit(running)
