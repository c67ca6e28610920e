"""
Interactive pygame host.

Controls:
- Play/Pause button or SPACE: start/stop music and animation
- R: regenerate with a new seed
- Shift+R: regenerate with the same seed
- S: save the current frame as PNG
- ESC or closing the window: quit

While idle the loop blocks on input and only redraws on request.
"""

import logging

import pygame

from beadwheels.audio.source import AudioSource, MixerAudioSource
from beadwheels.config import WheelsConfig
from beadwheels.controller import AnimationController
from beadwheels.core.state import CompositionStore
from beadwheels.io.exporter import FrameExporter
from beadwheels.render.painter import CompositionPainter
from beadwheels.render.renderer import PygameRenderer

logger = logging.getLogger(__name__)

BUTTON_LABEL = "Play/Pause"
BUTTON_SIZE = (110, 30)
BUTTON_MARGIN = 4


class WheelsApp:
    """
    Wires the composition, the animation controller and the window.

    Args:
        config: Runtime configuration.
        audio: Audio source; built from ``config.audio_path`` when omitted.
    """

    def __init__(self, config: WheelsConfig | None = None, audio: AudioSource | None = None):
        self.config = config or WheelsConfig()
        cfg = self.config

        if audio is None and cfg.audio_path is not None:
            audio = MixerAudioSource(cfg.audio_path, fps=cfg.fps)
        if audio is None:
            logger.warning("No audio track given; Play/Pause is disabled")

        self.store = CompositionStore(
            cfg.width, cfg.height, seed=cfg.seed,
            neighbors_per_wheel=cfg.neighbors_per_wheel,
        )
        self.controller = AnimationController(audio, mapper=cfg.mapper())
        self.painter = CompositionPainter(background_color=cfg.background_color)
        self.exporter = FrameExporter(cfg.export_dir)

        self.screen: pygame.Surface | None = None
        self.canvas: pygame.Surface | None = None
        self.renderer: PygameRenderer | None = None
        self.button = pygame.Rect((0, 0), BUTTON_SIZE)
        self.font: pygame.font.Font | None = None
        self.clock: pygame.time.Clock | None = None
        self.running = False

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def open_window(self):
        pygame.init()
        pygame.display.set_caption("Wheels of Fortune")
        self.screen = pygame.display.set_mode(
            (self.config.width, self.config.height), pygame.RESIZABLE
        )
        self.font = pygame.font.Font(None, 22)
        self.clock = pygame.time.Clock()
        self.attach_canvas(self.config.width, self.config.height)

    def attach_canvas(self, width: int, height: int):
        self.canvas = pygame.Surface((width, height))
        self.renderer = PygameRenderer(self.canvas)
        self.button.size = BUTTON_SIZE
        self.button.midbottom = (width // 2, height - BUTTON_MARGIN)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def toggle_play(self):
        self.controller.toggle()

    def regenerate(self, keep_seed: bool = False):
        self.store.regenerate(keep_seed=keep_seed)
        self.controller.request_redraw()

    def resize(self, width: int, height: int):
        width, height = max(1, width), max(1, height)
        self.config.width, self.config.height = width, height
        if self.screen is not None:
            self.screen = pygame.display.get_surface()
        self.attach_canvas(width, height)
        self.store.resize(width, height)
        self.controller.request_redraw()

    def export_frame(self):
        if self.canvas is None:
            return None
        return self.exporter.export(self.canvas, seed=self.store.seed)

    # ------------------------------------------------------------------
    # Events & drawing
    # ------------------------------------------------------------------

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.button.collidepoint(event.pos):
                self.toggle_play()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_SPACE:
                self.toggle_play()
            elif event.key == pygame.K_r:
                self.regenerate(keep_seed=bool(event.mod & pygame.KMOD_SHIFT))
            elif event.key == pygame.K_s:
                self.export_frame()

    def draw_frame(self):
        self.painter.paint(self.renderer, self.store.current, self.controller.params)
        if self.screen is None:
            return
        self.screen.blit(self.canvas, (0, 0))
        self._draw_button()
        pygame.display.flip()

    def _draw_button(self):
        pygame.draw.rect(self.screen, (235, 235, 235), self.button, border_radius=4)
        pygame.draw.rect(self.screen, (60, 60, 60), self.button, width=1, border_radius=4)
        if self.font is not None:
            label = self.font.render(BUTTON_LABEL, True, (20, 20, 20))
            self.screen.blit(label, label.get_rect(center=self.button.center))

    def step(self, events: list[pygame.event.Event]) -> bool:
        """Process one iteration of the main loop. Returns True if a frame was drawn."""
        for event in events:
            self.handle_event(event)
        if not self.running:
            return False

        if self.controller.looping:
            self.controller.tick()
            self.draw_frame()
            return True
        if self.controller.consume_redraw():
            self.draw_frame()
            return True
        return False

    def run(self):
        """Run until the window is closed."""
        self.open_window()
        self.running = True
        try:
            while self.running:
                if self.controller.looping or self.controller.redraw_pending:
                    events = pygame.event.get()
                else:
                    # Idle: no ticks until the next input event
                    events = [pygame.event.wait()]
                self.step(events)
                if self.controller.looping:
                    self.clock.tick(self.config.fps)
        finally:
            if self.controller.is_playing and self.controller.audio is not None:
                self.controller.audio.stop()
            pygame.quit()
