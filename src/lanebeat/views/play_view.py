"""Gameplay view: one session of falling notes."""

from __future__ import annotations

import logging

import pygame

from lanebeat.config import NOTE_RADIUS, RECT_NOTE_HEIGHT, RECT_NOTE_WIDTH
from lanebeat.engine import RhythmEngine
from lanebeat.models import BindingTable, Circle, Rect, SessionPhase, Shape
from lanebeat.renderer import colors as colors_mod
from lanebeat.renderer.hud import render_hud
from lanebeat.renderer.lanes import render_lanes, render_notes, render_pops
from lanebeat.renderer.overlay import render_pause_overlay, render_start_prompt
from lanebeat.session import GameSession
from lanebeat.views.base import ViewAction, ViewContext

logger = logging.getLogger(__name__)

# F1..F4 arm a rebind for columns 0..3; the next key pressed takes the column.
_REBIND_KEYS = {f"f{i + 1}": i for i in range(4)}


def make_shape(name: str) -> Shape:
    if name == "rect":
        return Rect(RECT_NOTE_WIDTH, RECT_NOTE_HEIGHT)
    return Circle(NOTE_RADIUS)


class PlayView:
    name = "play"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._session: GameSession | None = None
        self._rebind_column: int | None = None
        self._font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 20)
        self._rebind_column = None
        if context.keyboard_input is not None:
            context.keyboard_input.clear()

        # The window may have been resized since the context was built.
        display = pygame.display.get_surface()
        viewport = display.get_size() if display is not None else context.screen_size
        engine = RhythmEngine(
            difficulty=context.difficulty,
            viewport=viewport,
            bindings=BindingTable(context.keys),
            shape=make_shape(context.shape),
            miss_margin=context.miss_margin,
            hold_hits=context.hold_hits,
        )
        self._session = GameSession(
            engine,
            audio=context.audio,
            length_ms=context.length_ms,
            wait_for_input=context.wait_for_input,
        )

        if context.audio is not None and context.track_path is not None:
            if context.audio.load_track(context.track_path):
                self._session.on_track_ready()
        else:
            logger.info("No track loaded; waiting for the first key press")

    def on_exit(self) -> None:
        if self._session is not None:
            self._session.end()

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        session = self._session
        if session is None:
            return None

        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return ViewAction(kind="quit")
        if event.type == pygame.MOUSEBUTTONDOWN:
            session.handle_click()
        elif event.type == pygame.VIDEORESIZE:
            session.engine.resize(event.w, event.h)
        return None

    def update(self, dt: float) -> ViewAction | None:
        session = self._session
        if session is None:
            return None

        source = self._context.keyboard_input if self._context else None
        if source is not None:
            while (evt := source.poll()) is not None:
                if evt.pressed:
                    self._key_down(evt.key)
                else:
                    session.handle_key_up(evt.key)

        session.frame(dt * 1000.0)

        if session.phase == SessionPhase.ENDED:
            return ViewAction(kind="switch", target="results", context_patch={"summary": session.summary()})
        return None

    def _key_down(self, key: str) -> None:
        session = self._session
        if self._rebind_column is not None:
            column, self._rebind_column = self._rebind_column, None
            try:
                session.rebind(column, key)
            except ValueError as exc:
                logger.warning("Rebind rejected: %s", exc)
            return
        if key in _REBIND_KEYS and _REBIND_KEYS[key] < session.engine.column_count:
            self._rebind_column = _REBIND_KEYS[key]
            return
        if key == "escape":
            return
        session.handle_key_down(key)

    def draw(self, surface: pygame.Surface) -> None:
        session = self._session
        if session is None or self._font is None:
            return
        engine = session.engine

        surface.fill(colors_mod.BG)
        render_lanes(surface, engine)
        render_notes(surface, engine.notes)
        render_pops(surface, engine.take_pops())
        render_hud(surface, engine.state, self._font)

        if self._rebind_column is not None:
            prompt = self._font.render(
                f"Press a key for column {self._rebind_column + 1}", True, colors_mod.ACCENT
            )
            surface.blit(prompt, (surface.get_width() - prompt.get_width() - 10, 10))

        if session.phase == SessionPhase.PAUSED:
            render_pause_overlay(surface, self._font, session.pause_key)
        elif session.phase == SessionPhase.NOT_STARTED:
            render_start_prompt(surface, self._font)
