"""End-of-run results screen."""

from __future__ import annotations

import pygame

from lanebeat.models import RunState
from lanebeat.renderer import colors as colors_mod
from lanebeat.renderer.overlay import render_results
from lanebeat.views.base import ViewAction, ViewContext


class ResultsView:
    name = "results"

    def __init__(self) -> None:
        self._summary = RunState()
        self._font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._font = pygame.font.SysFont("monospace", 24)
        if context.summary is not None:
            self._summary = context.summary

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None
        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="quit")
        if event.key == pygame.K_r:
            return ViewAction(kind="switch", target="play")
        return None

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if self._font is None:
            return
        surface.fill(colors_mod.BG)
        render_results(surface, self._summary, self._font)
