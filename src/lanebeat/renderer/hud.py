"""Heads-up display: score and streak."""

from __future__ import annotations

import pygame

from lanebeat.models import RunState
from lanebeat.renderer.colors import HUD_TEXT


def hud_lines(state: RunState) -> list[str]:
    return [
        f"Score: {state.score}",
        f"Streak: {state.streak}x",
    ]


def render_hud(surface: pygame.Surface, state: RunState, font: pygame.font.Font) -> None:
    y = 10
    for line in hud_lines(state):
        text = font.render(line, True, HUD_TEXT)
        surface.blit(text, (10, y))
        y += 28
