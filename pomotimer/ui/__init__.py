"""UI package."""

from .timer_widget import TimerWidget
from .session_history import SessionHistoryWidget
from .settings_dialog import SettingsDialog

__all__ = [
    "TimerWidget",
    "SessionHistoryWidget",
    "SettingsDialog",
]
