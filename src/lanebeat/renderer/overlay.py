"""Pause overlay and the end-of-run results panel."""

from __future__ import annotations

import pygame

from lanebeat.models import RunState
from lanebeat.renderer.colors import OVERLAY_BG, OVERLAY_TEXT


def results_lines(state: RunState) -> list[str]:
    """Text of the game-over panel."""
    return [
        "Game Over",
        f"Score: {state.score}",
        f"Max Streak: {state.max_streak}",
        f"Notes Hit: {state.total_hit} / {state.total_spawned}",
        f"Accuracy: {state.accuracy_pct:.2f}%",
    ]


def _render_panel(surface: pygame.Surface, lines: list[str], font: pygame.font.Font, padding: int = 20) -> None:
    rendered = [font.render(line, True, OVERLAY_TEXT) for line in lines]
    line_h = font.get_linesize()
    panel_w = max(r.get_width() for r in rendered) + padding * 2
    panel_h = line_h * len(rendered) + padding * 2

    panel = pygame.Surface((panel_w, panel_h), pygame.SRCALPHA)
    pygame.draw.rect(panel, OVERLAY_BG, panel.get_rect(), border_radius=10)
    for i, text in enumerate(rendered):
        panel.blit(text, (panel_w // 2 - text.get_width() // 2, padding + i * line_h))

    w, h = surface.get_size()
    surface.blit(panel, (w // 2 - panel_w // 2, h // 2 - panel_h // 2))


def render_pause_overlay(surface: pygame.Surface, font: pygame.font.Font, pause_key: str) -> None:
    _render_panel(surface, ["Paused", f"Press {pause_key.upper()} to resume"], font)


def render_results(surface: pygame.Surface, state: RunState, font: pygame.font.Font) -> None:
    lines = results_lines(state)
    lines.append("")
    lines.append("R: play again | Esc: quit")
    _render_panel(surface, lines, font)


def render_start_prompt(surface: pygame.Surface, font: pygame.font.Font) -> None:
    _render_panel(surface, ["Click or press any key to start"], font)
