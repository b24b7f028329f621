import wave

import pygame
import pytest

from minesweep.assets import IMAGE_FILES, Assets
from minesweep.game import SoundEffect


def _write_assets(directory, skip=None):
    for filename in IMAGE_FILES.values():
        if filename != skip:
            pygame.image.save(pygame.Surface((4, 5)), str(directory / filename))
    for effect in SoundEffect:
        filename = f"{effect.value}.wav"
        if filename == skip:
            continue
        with wave.open(str(directory / filename), "wb") as out:
            out.setnchannels(1)
            out.setsampwidth(2)
            out.setframerate(8000)
            out.writeframes(b"\0\0" * 10)


class _FakeSound:
    def __init__(self):
        self.volume = None
        self.plays = 0

    def set_volume(self, volume):
        self.volume = volume

    def play(self):
        self.plays += 1


def _blank_assets(sounds=None):
    surface = pygame.Surface((4, 4))
    return Assets(surface, surface, surface, surface, surface, surface, sounds or {})


def test_load_reads_all_images(tmp_path):
    _write_assets(tmp_path)
    assets = Assets.load(tmp_path)
    for image in (assets.flag, assets.mine, assets.clock, assets.mute, assets.synchronize, assets.volume):
        assert image.get_size() == (4, 5)


def test_load_missing_image_raises(tmp_path):
    _write_assets(tmp_path, skip="blast.png")
    with pytest.raises(FileNotFoundError):
        Assets.load(tmp_path)


def test_load_missing_sound_raises(tmp_path):
    _write_assets(tmp_path, skip="win.wav")
    with pytest.raises(FileNotFoundError):
        Assets.load(tmp_path)


def test_play_sets_volume_and_plays():
    sound = _FakeSound()
    assets = _blank_assets({SoundEffect.FLAG: sound})
    assert assets.play(SoundEffect.FLAG, 0.6) is True
    assert sound.volume == 0.6
    assert sound.plays == 1


def test_play_unknown_effect_is_silent():
    sound = _FakeSound()
    assets = _blank_assets({SoundEffect.FLAG: sound})
    assert assets.play(SoundEffect.WIN, 0.8) is False
    assert sound.plays == 0