"""Audio package."""

from .sounds import SoundManager, ensure_sound_files

__all__ = ["SoundManager", "ensure_sound_files"]
