"""Lanes, hit zones, falling notes and hit pops."""

from __future__ import annotations

import pygame

from lanebeat.config import POP_RADIUS
from lanebeat.engine import RhythmEngine
from lanebeat.layout import hit_zone_top, lane_center, lane_width
from lanebeat.models import Circle, Note, Pop, Rect
from lanebeat.renderer.colors import LANE_DIVIDER, ZONE_IDLE


def render_lanes(surface: pygame.Surface, engine: RhythmEngine) -> None:
    """Lane dividers plus one hit zone per column, lit while its key is held."""
    w, h = surface.get_size()
    lw = lane_width(w, engine.column_count)
    for column in range(1, engine.column_count):
        x = int(lw * column)
        pygame.draw.line(surface, LANE_DIVIDER, (x, 0), (x, h))

    zone_top = hit_zone_top(h, engine.hit_zone_height)
    for binding in engine.bindings:
        color = pygame.Color(binding.zone_color) if engine.is_held(binding.column) else ZONE_IDLE
        center_x = lane_center(binding.column, w, engine.column_count)
        if isinstance(engine.shape, Circle):
            radius = engine.hit_zone_height
            # Keep the circle inside the window.
            pygame.draw.circle(surface, color, (int(center_x), int(h - radius + 5)), int(radius))
        else:
            zone_w = engine.shape.width
            rect = pygame.Rect(int(center_x - zone_w / 2), int(zone_top), int(zone_w), int(engine.hit_zone_height))
            pygame.draw.rect(surface, color, rect, border_radius=4)


def render_notes(surface: pygame.Surface, notes: list[Note]) -> None:
    for note in notes:
        _draw_note(surface, note)


def _draw_note(surface: pygame.Surface, note: Note) -> None:
    color = pygame.Color(note.color)
    shape = note.shape
    if isinstance(shape, Circle):
        pygame.draw.circle(surface, color, (int(note.center_x), int(note.position)), int(shape.radius))
    elif isinstance(shape, Rect):
        # ``position`` tracks the leading (bottom) edge.
        rect = pygame.Rect(int(note.x), int(note.position - shape.height), int(shape.width), int(shape.height))
        pygame.draw.rect(surface, color, rect, border_radius=3)


def render_pops(surface: pygame.Surface, pops: list[Pop]) -> None:
    for pop in pops:
        pygame.draw.circle(surface, pygame.Color(pop.color), (int(pop.x), int(pop.y)), POP_RADIUS)
