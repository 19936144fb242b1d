"""Top-level application: initializes pygame, manages screens, and runs the game loop."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from lanebeat.config import FPS, SOUNDS_DIR, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from lanebeat.keyboard_input import KeyboardInput
from lanebeat.views.base import ViewContext, ViewManager
from lanebeat.views.play_view import PlayView
from lanebeat.views.results_view import ResultsView

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        context_overrides: dict | None = None,
        sounds_dir: str | Path = SOUNDS_DIR,
        soundfont: str | None = None,
        window_size: tuple[int, int] = (WINDOW_WIDTH, WINDOW_HEIGHT),
        mute: bool = False,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        # Optional subsystems gracefully degrade
        self._audio = None if mute else self._try_audio(sounds_dir, soundfont)
        self._keyboard_input = KeyboardInput()

        context = ViewContext(
            screen_size=window_size,
            audio=self._audio,
            keyboard_input=self._keyboard_input,
            **(context_overrides or {}),
        )

        self.views = ViewManager(context)
        self.views.register(PlayView)
        self.views.register(ResultsView)
        self.views.push("play")

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._keyboard_input.feed_event(event)
                    if not self.views.handle_event(event):
                        running = False
            if running:
                if not self.views.update(dt):
                    running = False
            self.views.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _cleanup(self) -> None:
        while self.views.active_view:
            self.views.pop()
        self._keyboard_input.close()
        if self._audio is not None:
            self._audio.shutdown()

    @staticmethod
    def _try_audio(sounds_dir: str | Path, soundfont: str | None):
        try:
            from lanebeat.audio import AudioLayer
            return AudioLayer(sounds_dir=sounds_dir, soundfont_path=soundfont)
        except Exception as exc:
            logger.warning("Audio unavailable, playing silently: %s", exc)
            return None
