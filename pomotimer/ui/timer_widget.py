"""Main timer display widget.

Layout (top → bottom):
    - Phase title ("Work Time", "Short Break", ...)
    - Remaining time as MM:SS
    - Start/Pause + Reset buttons
    - Completed pomodoro counter
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)

from ..timer.engine import TimerEngine, Phase
from .styles import PHASE_COLORS


PHASE_TITLES: dict[Phase, str] = {
    Phase.IDLE:        "PomoTimer",
    Phase.WORK:        "Work Time",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK:  "Long Break",
}


def format_remaining(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class TimerWidget(QWidget):
    """The timer card: title, countdown and controls."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(20)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._title_label = QLabel(card)
        self._title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._title_label)

        self._time_label = QLabel(card)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet(
            "font-size: 60px; font-weight: 700; font-family: Menlo, monospace;"
        )
        layout.addWidget(self._time_label)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(20)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._start_pause_btn.setMinimumWidth(100)

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")
        self._reset_btn.setMinimumWidth(100)

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        self._count_label = QLabel(card)
        self._count_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._count_label)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.toggle_start_pause)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._engine.state_changed.connect(self.refresh)

    # ── slots ─────────────────────────────────────────────────────────────

    def toggle_start_pause(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def refresh(self) -> None:
        engine = self._engine
        phase = engine.phase

        self._title_label.setText(PHASE_TITLES[phase])
        self._title_label.setStyleSheet(
            f"font-size: 24px; font-weight: 700; color: {PHASE_COLORS[phase]};"
        )
        self._time_label.setText(format_remaining(engine.remaining_seconds))
        self._start_pause_btn.setText("Pause" if engine.is_running else "Start")
        self._count_label.setText(
            f"Pomodoros completed: {engine.completed_work_count}"
        )

    # ── accessors used by tests and the main window ───────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def title_text(self) -> str:
        return self._title_label.text()

    @property
    def button_text(self) -> str:
        return self._start_pause_btn.text()
