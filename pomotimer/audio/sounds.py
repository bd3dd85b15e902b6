"""Sound synthesis and playback using numpy + QSoundEffect.

All cues are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
app launches are instant.

Cues
----
- ``work_start``      short ascending chime (3 notes)
- ``break_start``     soft meditation bell
- ``timer_complete``  satisfying achievement arpeggio
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..database.db import APP_SUPPORT_DIR
from ..timer.engine import SoundKind


logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100
DEFAULT_VOLUME = 0.7


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit mono PCM WAV bytes."""
    int_samples = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_chime() -> bytes:
    """Work start: C5→E5→G5, short and uplifting."""
    parts: list[np.ndarray] = []
    for freq in (523.25, 659.25, 783.99):
        tone = _sine(freq, 0.12) * 0.6
        env = _make_envelope(len(tone), attack=100, decay=200, sustain_level=0.4, release=300)
        parts.append(tone * env)
        parts.append(np.zeros(int(SAMPLE_RATE * 0.03)))
    parts.append(np.zeros(int(SAMPLE_RATE * 0.05)))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_bell() -> bytes:
    """Break start: soft A4 bell with an octave overtone and long decay."""
    duration = 1.0
    combined = _sine(440.0, duration) * 0.35 + _sine(880.0, duration) * 0.08
    env = _make_envelope(
        len(combined),
        attack=int(SAMPLE_RATE * 0.08),
        decay=int(SAMPLE_RATE * 0.3),
        sustain_level=0.25,
        release=int(SAMPLE_RATE * 0.55),
    )
    return _to_wav_bytes(combined * env)


def _generate_achievement() -> bytes:
    """Timer complete: C5→E5→G5→C6 arpeggio, last note held."""
    notes = [523.25, 659.25, 783.99, 1046.50]
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        if i == len(notes) - 1:
            tone = _sine(freq, 0.35) * 0.5
            env = _make_envelope(len(tone), attack=80, decay=300, sustain_level=0.5, release=600)
        else:
            tone = _sine(freq, 0.10) * 0.5
            env = _make_envelope(len(tone), attack=60, decay=150, sustain_level=0.3, release=200)
        parts.append(tone * env)
        if i < len(notes) - 1:
            parts.append(np.zeros(int(SAMPLE_RATE * 0.02)))
    return _to_wav_bytes(np.concatenate(parts))


GENERATORS: dict[SoundKind, Callable[[], bytes]] = {
    SoundKind.WORK_START: _generate_chime,
    SoundKind.BREAK_START: _generate_bell,
    SoundKind.TIMER_COMPLETE: _generate_achievement,
}


def sound_path(sounds_dir: Path, kind: SoundKind) -> Path:
    return sounds_dir / f"{kind.value}.wav"


def ensure_sound_files(sounds_dir: Path) -> list[Path]:
    """Write any missing cue WAVs; return the paths that exist afterwards.

    A cue that cannot be written is left out, so playback for it is skipped.
    """
    try:
        sounds_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.warning("Cannot create sounds directory %s", sounds_dir, exc_info=True)
        return []

    available: list[Path] = []
    for kind, gen_fn in GENERATORS.items():
        path = sound_path(sounds_dir, kind)
        if not path.exists():
            try:
                path.write_bytes(gen_fn())
            except OSError:
                logger.warning("Cannot write %s", path, exc_info=True)
                continue
        available.append(path)
    return available


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Plays timer cues.  Implements the engine's ``SoundPlayer``.

    Usage::

        mgr = SoundManager(parent=self)
        engine = TimerEngine(sound_player=mgr)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        volume: float = DEFAULT_VOLUME,
    ) -> None:
        super().__init__(parent)
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._volume = max(0.0, min(volume, 1.0))
        self._effects: dict[SoundKind, QSoundEffect] = {}

        ensure_sound_files(self._sounds_dir)
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def play_sound(self, kind: SoundKind) -> None:
        """Start playback and return immediately.  Missing cues are skipped."""
        effect = self._effects.get(kind)
        if effect is None:
            logger.debug("No sound loaded for %s; skipping", kind.value)
            return
        effect.play()

    def has_sound(self, kind: SoundKind) -> bool:
        return kind in self._effects

    # ── internal ──────────────────────────────────────────────────────

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for kind in SoundKind:
            path = sound_path(self._sounds_dir, kind)
            if not path.exists():
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[kind] = effect
