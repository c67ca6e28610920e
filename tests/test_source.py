"""Tests for the audio sources."""

import numpy as np
import pygame
import pytest

from beadwheels.audio.analyzer import VolumeEnvelope
from beadwheels.audio.source import EnvelopeAudioSource, MixerAudioSource


@pytest.fixture
def envelope():
    levels = np.linspace(0.0, 0.9, 10).astype(np.float32)
    return VolumeEnvelope(levels=levels, fps=10, duration=1.0)


class TestEnvelopeAudioSource:
    def test_silent_until_started(self, envelope):
        source = EnvelopeAudioSource(envelope)
        assert not source.is_playing()
        assert source.current_volume_level() == 0.0

    def test_advance_reads_next_level(self, envelope):
        source = EnvelopeAudioSource(envelope)
        source.start(loop=False)
        assert source.current_volume_level() == pytest.approx(0.0)
        source.advance(3)
        assert source.current_volume_level() == pytest.approx(0.3)

    def test_stops_at_end_without_loop(self, envelope):
        source = EnvelopeAudioSource(envelope)
        source.start(loop=False)
        source.advance(10)
        assert not source.is_playing()

    def test_loops(self, envelope):
        source = EnvelopeAudioSource(envelope)
        source.start(loop=True)
        source.advance(12)
        assert source.is_playing()
        assert source.current_volume_level() == pytest.approx(0.2)

    def test_restart_rewinds(self, envelope):
        source = EnvelopeAudioSource(envelope)
        source.start()
        source.advance(4)
        source.stop()
        source.start()
        assert source.frame == 0


class TestMixerAudioSource:
    """pygame.mixer calls are patched out; no audio device is needed."""

    @pytest.fixture
    def mixer(self, monkeypatch):
        calls = {"play": [], "stop": 0}
        monkeypatch.setattr(pygame.mixer, "get_init", lambda: (22050, -16, 2))
        monkeypatch.setattr(pygame.mixer.music, "load", lambda path: None)
        monkeypatch.setattr(pygame.mixer.music, "play", lambda loops=0: calls["play"].append(loops))
        monkeypatch.setattr(pygame.mixer.music, "get_busy", lambda: True)
        monkeypatch.setattr(pygame.mixer.music, "get_pos", lambda: 1500)

        def stop():
            calls["stop"] += 1

        monkeypatch.setattr(pygame.mixer.music, "stop", stop)
        return calls

    def test_start_loops_forever(self, tmp_path, envelope, mixer):
        source = MixerAudioSource(tmp_path / "song.wav", envelope=envelope)
        source.start(loop=True)
        assert source.is_playing()
        assert mixer["play"] == [-1]

    def test_volume_follows_position(self, tmp_path, envelope, mixer):
        source = MixerAudioSource(tmp_path / "song.wav", fps=10, envelope=envelope)
        source.start()
        # 1.5 s into a 1 s loop at 10 fps is frame 5
        assert source.current_volume_level() == pytest.approx(0.5)

    def test_stop(self, tmp_path, envelope, mixer):
        source = MixerAudioSource(tmp_path / "song.wav", envelope=envelope)
        source.start()
        source.stop()
        assert not source.is_playing()
        assert source.current_volume_level() == 0.0
        assert mixer["stop"] == 1

    def test_playback_failure_stays_idle(self, tmp_path, envelope, monkeypatch):
        def broken_load(path):
            raise pygame.error("no audio device")

        monkeypatch.setattr(pygame.mixer, "get_init", lambda: (22050, -16, 2))
        monkeypatch.setattr(pygame.mixer.music, "load", broken_load)

        source = MixerAudioSource(tmp_path / "song.wav", envelope=envelope)
        source.start()
        assert not source.is_playing()
        assert source.current_volume_level() == 0.0
