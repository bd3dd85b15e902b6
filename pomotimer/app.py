"""Main application window for PomoTimer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QWidget, QHBoxLayout

from .audio.sounds import SoundManager
from .database.store import KeyValueStore, SqlKeyValueStore
from .history.store import HistoryStore
from .settings import load_settings
from .timer.engine import TimerEngine, SoundPlayer
from .ui.session_history import SessionHistoryWidget
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget


logger = logging.getLogger(__name__)


class PomoTimerApp(QMainWindow):
    """History on the left, timer on the right."""

    def __init__(
        self,
        *,
        store: KeyValueStore | None = None,
        sound_player: SoundPlayer | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("PomoTimer")
        self.setMinimumSize(640, 400)
        self.resize(760, 460)

        # ── storage + settings ────────────────────────────────────────
        self._store: KeyValueStore = store if store is not None else SqlKeyValueStore()
        self._settings = load_settings(self._store)

        # ── engine ────────────────────────────────────────────────────
        if sound_player is None:
            sound_player = SoundManager(parent=self)
        self._timer_engine = TimerEngine(
            self,
            history=HistoryStore(self._store),
            sound_player=sound_player,
            config=self._settings.timer_config(),
            sound_enabled=self._settings.sound_enabled,
        )

        self.setStyleSheet(build_stylesheet())

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(16)

        self._history_widget = SessionHistoryWidget(self._timer_engine, central)
        self._history_widget.setMinimumWidth(250)
        layout.addWidget(self._history_widget, 1)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        layout.addWidget(self._timer_widget, 2)

        self._build_menu_bar()
        logger.info(
            "Loaded %d history entries", len(self._timer_engine.history),
        )

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()
        app_menu = menu_bar.addMenu("PomoTimer")

        prefs_action = QAction("Preferences…", self)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        prefs_action.triggered.connect(self._open_settings)
        app_menu.addAction(prefs_action)

        quit_action = QAction("Quit PomoTimer", self)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.triggered.connect(self.close)
        app_menu.addAction(quit_action)

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _open_settings(self) -> None:
        """Open the settings dialog and apply any changes."""
        from .ui.settings_dialog import SettingsDialog

        dlg = SettingsDialog(self._settings, self._store, parent=self)
        dlg.exec()
        self._apply_settings()

    def _apply_settings(self) -> None:
        """Push current Settings into the engine.

        The engine only reads durations when it arms the next interval,
        so a running countdown is never disturbed.
        """
        s = self._settings
        self._timer_engine.config = s.timer_config()
        self._timer_engine.sound_enabled = s.sound_enabled

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Log an open session before quitting."""
        if self._timer_engine.session_started_at is not None:
            self._timer_engine.pause()
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (reset) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._timer_widget.toggle_start_pause()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._timer_engine.reset()
            event.accept()
            return
        super().keyPressEvent(event)
