"""Tests for the interactive host, driven without a window."""

import pygame
import pytest

from beadwheels.app import WheelsApp
from beadwheels.config import WheelsConfig
from beadwheels.controller import PlayState


@pytest.fixture
def app(tmp_path, fake_audio):
    config = WheelsConfig(width=160, height=120, seed=9, export_dir=tmp_path)
    app = WheelsApp(config, audio=fake_audio)
    app.attach_canvas(config.width, config.height)
    app.running = True
    return app


def key(k, mod=0):
    return pygame.event.Event(pygame.KEYDOWN, key=k, mod=mod)


class TestStep:
    def test_idle_draws_once(self, app):
        assert app.step([])
        assert not app.step([])

    def test_space_starts_looping(self, app, fake_audio):
        app.step([])
        assert app.step([key(pygame.K_SPACE)])
        assert app.controller.state is PlayState.PLAYING
        assert fake_audio.start_calls == [True]
        assert app.step([])
        assert app.controller.params.rotation_angle > 0

    def test_pause_resets_and_redraws(self, app, fake_audio):
        app.step([key(pygame.K_SPACE)])
        app.step([])
        assert app.step([key(pygame.K_SPACE)])
        assert fake_audio.stop_calls == 1
        assert app.controller.params.is_at_rest()
        assert not app.step([])

    def test_button_click_toggles(self, app):
        click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=app.button.center)
        app.step([click])
        assert app.controller.is_playing

    def test_click_outside_button(self, app):
        click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0))
        app.step([click])
        assert not app.controller.is_playing

    def test_quit(self, app):
        assert not app.step([pygame.event.Event(pygame.QUIT)])
        assert not app.running

    def test_escape(self, app):
        app.step([key(pygame.K_ESCAPE)])
        assert not app.running


class TestActions:
    def test_shift_r_keeps_layout(self, app):
        before = app.store.current
        app.step([])
        assert app.step([key(pygame.K_r, pygame.KMOD_LSHIFT)])
        assert app.store.current == before
        assert app.store.current is not before

    def test_r_draws_new_seed(self, app, monkeypatch):
        monkeypatch.setattr("beadwheels.core.state.new_seed", lambda: 1001)
        app.step([key(pygame.K_r)])
        assert app.store.seed == 1001

    def test_save_frame(self, app, tmp_path):
        app.step([])
        app.step([key(pygame.K_s)])
        assert (tmp_path / "wheels_of_fortune_audio_9_0.png").exists()

    def test_resize(self, app):
        event = pygame.event.Event(pygame.VIDEORESIZE, w=200, h=150, size=(200, 150))
        app.step([])
        assert app.step([event])
        assert app.canvas.get_size() == (200, 150)
        assert (app.store.current.width, app.store.current.height) == (200, 150)
        assert app.store.seed == 9
        assert app.button.midbottom == (100, 146)

    def test_export_without_canvas(self, fake_audio):
        app = WheelsApp(WheelsConfig(width=50, height=50, seed=1), audio=fake_audio)
        assert app.export_frame() is None


def test_no_audio_disables_play(tmp_path):
    app = WheelsApp(WheelsConfig(width=80, height=60, seed=2, export_dir=tmp_path))
    app.attach_canvas(80, 60)
    app.running = True
    app.step([key(pygame.K_SPACE)])
    assert app.controller.state is PlayState.IDLE
    assert not app.controller.looping
