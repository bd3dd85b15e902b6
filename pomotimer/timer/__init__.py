"""Timer package."""

from .engine import (
    TimerEngine,
    TimerConfig,
    Phase,
    SoundKind,
    SoundPlayer,
    PHASE_LABELS,
    LONG_BREAK_EVERY,
)

__all__ = [
    "TimerEngine",
    "TimerConfig",
    "Phase",
    "SoundKind",
    "SoundPlayer",
    "PHASE_LABELS",
    "LONG_BREAK_EVERY",
]
