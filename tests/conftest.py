"""Pytest configuration and shared fixtures."""

import os

# Headless pygame for all tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from beadwheels.audio.source import AudioSource
from beadwheels.core.state import CompositionState
from beadwheels.render.renderer import Renderer, to_rgb

# Default sample rate for test audio
TEST_SR = 22050


@pytest.fixture
def sample_rate() -> int:
    """Default sample rate for tests."""
    return TEST_SR


@pytest.fixture
def pure_sine(sample_rate: int) -> tuple[np.ndarray, int]:
    """
    Generate a 2 second 440Hz sine wave at amplitude 0.5.

    Returns:
        Tuple of (audio_signal, sample_rate).
    """
    duration = 2.0
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    y = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    return y.astype(np.float32), sample_rate


@pytest.fixture
def temp_audio_file(tmp_path, pure_sine):
    """Write the sine fixture to a temporary WAV file."""
    import soundfile as sf

    y, sr = pure_sine
    audio_path = tmp_path / "test_audio.wav"
    sf.write(audio_path, y, sr)
    return audio_path


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture(scope="session")
def composition_900() -> CompositionState:
    """The 900x900, seed 42 composition."""
    return CompositionState.generate(42, 900, 900)


class RecordingRenderer(Renderer):
    """Renderer fake that records every call."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.fill = None
        self.depth = 0

    def background(self, color):
        self.calls.append(("background", to_rgb(color)))

    def fill_flat(self, color):
        self.fill = color
        self.calls.append(("fill", color))

    def draw_disc(self, center, diameter):
        self.calls.append(("disc", tuple(center), diameter, self.fill))

    def draw_wedge(self, vertices, color):
        self.calls.append(("wedge", [tuple(v) for v in vertices], color))

    def draw_arc_band(self, center, outer_diameter, start_angle, end_angle, color):
        self.calls.append(("arc_band", tuple(center), outer_diameter, start_angle, end_angle, color))

    def push_transform(self):
        self.depth += 1
        self.calls.append(("push",))

    def translate(self, dx, dy):
        self.calls.append(("translate", dx, dy))

    def rotate(self, angle):
        self.calls.append(("rotate", angle))

    def pop_transform(self):
        self.depth -= 1
        self.calls.append(("pop",))

    def of_kind(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


class FakeAudioSource(AudioSource):
    """Audio source returning a scripted sequence of volume samples."""

    def __init__(self, samples=None, start_ok=True):
        self.samples = list(samples or [])
        self.start_ok = start_ok
        self.playing = False
        self.start_calls = []
        self.stop_calls = 0

    def is_playing(self) -> bool:
        return self.playing

    def current_volume_level(self) -> float:
        if not self.samples:
            return 0.0
        return self.samples.pop(0)

    def start(self, loop: bool = True):
        self.start_calls.append(loop)
        self.playing = self.start_ok

    def stop(self):
        self.stop_calls += 1
        self.playing = False


@pytest.fixture
def fake_audio() -> FakeAudioSource:
    return FakeAudioSource()


@pytest.fixture
def make_audio():
    """Factory for FakeAudioSource with scripted samples."""
    return FakeAudioSource
