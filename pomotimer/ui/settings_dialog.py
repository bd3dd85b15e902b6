"""Settings dialog for PomoTimer.

A modal dialog for the three interval lengths and the sound toggle.
Changes are saved immediately through the key/value store; the caller
pushes them into the engine once the dialog closes.
"""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QCheckBox, QPushButton, QWidget,
)

from ..database.store import KeyValueStore
from ..settings import MAX_DURATION, MIN_DURATION, Settings, save_settings


class SettingsDialog(QDialog):
    """Modal dialog for all user preferences."""

    def __init__(
        self,
        settings: Settings,
        store: KeyValueStore,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(360)
        self.setModal(True)

        self._settings = settings
        self._store = store

        self._build_ui()
        self._populate()
        self._connect_signals()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        title = QLabel("Timer")
        title.setStyleSheet("font-size: 15px; font-weight: 700;")
        root.addWidget(title)

        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._work_spin = self._minutes_spin()
        form.addRow("Work duration:", self._work_spin)

        self._short_spin = self._minutes_spin()
        form.addRow("Short break:", self._short_spin)

        self._long_spin = self._minutes_spin()
        form.addRow("Long break:", self._long_spin)

        self._sound_cb = QCheckBox("Sound effects")
        form.addRow("", self._sound_cb)

        root.addLayout(form)

        note = QLabel("New durations apply from the next interval.")
        note.setStyleSheet("font-size: 12px; color: #7A7A9A;")
        root.addWidget(note)

        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.setObjectName("secondaryButton")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    @staticmethod
    def _minutes_spin() -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(MIN_DURATION // 60, MAX_DURATION // 60)
        spin.setSuffix(" min")
        return spin

    def _populate(self) -> None:
        s = self._settings
        self._work_spin.setValue(s.work_duration // 60)
        self._short_spin.setValue(s.short_break_duration // 60)
        self._long_spin.setValue(s.long_break_duration // 60)
        self._sound_cb.setChecked(s.sound_enabled)

    def _connect_signals(self) -> None:
        # Connected after _populate so loading values doesn't trigger a save
        self._work_spin.valueChanged.connect(
            lambda v: self._on_duration_changed("work_duration", v))
        self._short_spin.valueChanged.connect(
            lambda v: self._on_duration_changed("short_break_duration", v))
        self._long_spin.valueChanged.connect(
            lambda v: self._on_duration_changed("long_break_duration", v))
        self._sound_cb.toggled.connect(self._on_sound_toggled)

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS — save immediately
    # ══════════════════════════════════════════════════════════════════

    # Only the edited field is written back.  Stored durations that are not
    # whole minutes stay exact until their own spin box is touched.

    def _on_duration_changed(self, field: str, minutes: int) -> None:
        setattr(self._settings, field, minutes * 60)
        save_settings(self._store, self._settings)

    def _on_sound_toggled(self, checked: bool) -> None:
        self._settings.sound_enabled = checked
        save_settings(self._store, self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings
