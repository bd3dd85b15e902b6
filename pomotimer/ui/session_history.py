"""Session history panel: every logged interval, newest first."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QListWidget,
    QListWidgetItem, QPushButton,
)

from ..history.store import HistoryEntry
from ..timer.engine import TimerEngine
from .styles import PALETTE


def describe_entry(entry: HistoryEntry) -> str:
    """One-line summary shown in the list."""
    mark = "✓" if entry.completed else "✗"
    return (
        f"{entry.label}  ·  {entry.formatted_time}  ·  "
        f"{entry.duration_minutes} minutes  {mark}"
    )


class SessionHistoryWidget(QWidget):
    """Lists the engine's history and refreshes when it changes."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._engine.entry_logged.connect(self._on_entry_logged)
        self._engine.history_cleared.connect(self.refresh)
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        header_row = QHBoxLayout()
        header = QLabel("History")
        header.setStyleSheet("font-size: 17px; font-weight: 700;")
        header_row.addWidget(header)
        header_row.addStretch()

        self._clear_btn = QPushButton("Clear")
        self._clear_btn.setObjectName("secondaryButton")
        self._clear_btn.clicked.connect(self._engine.clear_history)
        header_row.addWidget(self._clear_btn)
        layout.addLayout(header_row)

        self._list = QListWidget(self)
        self._list.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        layout.addWidget(self._list)

        self._empty_label = QLabel("No sessions yet")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet(f"color: {PALETTE['text_muted']};")
        layout.addWidget(self._empty_label)

    # ── refresh ───────────────────────────────────────────────────────

    def refresh(self) -> None:
        self._list.clear()
        for entry in self._engine.history:
            self._list.addItem(self._make_item(entry))
        self._update_empty_state()

    def _on_entry_logged(self, entry: HistoryEntry) -> None:
        self._list.insertItem(0, self._make_item(entry))
        self._update_empty_state()

    def _update_empty_state(self) -> None:
        empty = self._list.count() == 0
        self._empty_label.setVisible(empty)
        self._clear_btn.setEnabled(not empty)

    @staticmethod
    def _make_item(entry: HistoryEntry) -> QListWidgetItem:
        item = QListWidgetItem(describe_entry(entry))
        color = PALETTE["success"] if entry.completed else PALETTE["danger"]
        item.setForeground(QColor(color))
        item.setData(Qt.ItemDataRole.UserRole, entry.id)
        return item

    # ── accessors ─────────────────────────────────────────────────────

    def row_count(self) -> int:
        return self._list.count()

    def row_text(self, row: int) -> str:
        return self._list.item(row).text()
