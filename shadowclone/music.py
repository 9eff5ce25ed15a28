from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional

import pygame

logger = logging.getLogger(__name__)


def _mixer_ready() -> bool:
    try:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        return bool(pygame.mixer.get_init())
    except Exception as exc:
        logger.warning("audio disabled: %s", exc)
        return False


class MusicController:
    def __init__(self, *, volume: float = 0.55, enabled: bool = True) -> None:
        self.current_path: Optional[str] = None
        self.volume = max(0.0, min(1.0, float(volume)))
        self.enabled = bool(enabled)
        self.ok = _mixer_ready()

    def set_volume(self, value: float) -> None:
        self.volume = max(0.0, min(1.0, float(value)))
        if self.ok:
            pygame.mixer.music.set_volume(self.volume)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)
        if not self.enabled:
            self.stop()

    def fade_to(self, path: Optional[str], *, ms: int = 600, loop: int = -1) -> None:
        if not self.ok or not self.enabled or not path or not os.path.exists(path):
            return
        try:
            pygame.mixer.music.fadeout(max(0, int(ms)))
            pygame.mixer.music.load(path)
            pygame.mixer.music.set_volume(self.volume)
            pygame.mixer.music.play(loop, fade_ms=max(0, int(ms)))
            self.current_path = path
        except Exception as exc:
            logger.warning("could not play %s: %s", path, exc)

    def stop(self, *, ms: int = 300) -> None:
        if self.ok:
            pygame.mixer.music.fadeout(max(0, int(ms)))


class SfxBank:
    """One-shot sounds keyed by game event name; missing files are skipped."""

    FILES = {
        "clone_spawned":    "spawn.wav",
        "pickup_collected": "pickup.wav",
        "caught":           "death.wav",
        "escaped":          "escape.wav",
        "new_record":       "new_record.wav",
    }

    def __init__(self, sfx_dir: Path, *, volume: float = 0.8, enabled: bool = True) -> None:
        self.enabled = bool(enabled)
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        if not _mixer_ready():
            return
        for key, fname in self.FILES.items():
            path = sfx_dir / fname
            if not path.exists():
                continue
            try:
                self.sounds[key] = pygame.mixer.Sound(str(path))
            except Exception as exc:
                logger.warning("could not load %s: %s", path, exc)
        self.set_volume(volume)

    def set_volume(self, value: float) -> None:
        vol = max(0.0, min(1.0, float(value)))
        for s in self.sounds.values():
            s.set_volume(vol)

    def play(self, event: str) -> None:
        snd = self.sounds.get(event)
        if self.enabled and snd is not None:
            snd.play()


__all__ = ["MusicController", "SfxBank"]
