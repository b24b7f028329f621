"""Images and sounds used by the game window."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pygame

from minesweep.game import SoundEffect

IMAGE_FILES = {
    "flag": "flag.png",
    "mine": "blast.png",
    "clock": "clock.png",
    "mute": "mute.png",
    "synchronize": "synchronize.png",
    "volume": "volume.png",
}


def _sound_file(effect: SoundEffect) -> str:
    return f"{effect.value}.wav"


def _require(path: Path) -> Path:
    if not path.is_file():
        raise FileNotFoundError(f"missing asset: {path}")
    return path


def _load_image(path: Path) -> pygame.Surface:
    image = pygame.image.load(str(_require(path)))
    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


@dataclass
class Assets:
    """The icons of the top bar and board, and the sound effects."""

    flag: pygame.Surface
    mine: pygame.Surface
    clock: pygame.Surface
    mute: pygame.Surface
    synchronize: pygame.Surface
    volume: pygame.Surface
    sounds: dict[SoundEffect, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, directory: str | Path = "assets") -> Assets:
        """Load every asset from a directory.

        All files must exist. Sounds are only decoded when the mixer is
        initialised; without it the game stays silent.
        """
        base = Path(directory)
        images = {name: _load_image(base / filename) for name, filename in IMAGE_FILES.items()}
        sound_paths = {effect: _require(base / _sound_file(effect)) for effect in SoundEffect}
        sounds: dict[SoundEffect, Any] = {}
        if pygame.mixer.get_init():
            sounds = {effect: pygame.mixer.Sound(str(path)) for effect, path in sound_paths.items()}
        return cls(sounds=sounds, **images)

    def play(self, effect: SoundEffect, volume: float) -> bool:
        """Play a sound effect at a volume in 0..1; return whether one was played."""
        sound = self.sounds.get(effect)
        if sound is None:
            return False
        sound.set_volume(volume)
        sound.play()
        return True