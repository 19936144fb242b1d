"""Keyboard input capture: pygame key events as key-identifier strings."""

from __future__ import annotations

import time
from dataclasses import dataclass

import pygame


@dataclass
class KeyEvent:
    key: str  # pygame key name, e.g. "a", "space", "left shift"
    pressed: bool
    timestamp: float


class KeyboardInput:
    """Queues key-down/key-up events; auto-repeat key-downs are dropped."""

    def __init__(self) -> None:
        self._events: list[KeyEvent] = []
        self._held: set[str] = set()

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type == pygame.KEYDOWN:
            key = pygame.key.name(event.key)
            if key and key not in self._held:
                self._held.add(key)
                self._events.append(KeyEvent(key=key, pressed=True, timestamp=time.time()))
        elif event.type == pygame.KEYUP:
            key = pygame.key.name(event.key)
            if key:
                self._held.discard(key)
                self._events.append(KeyEvent(key=key, pressed=False, timestamp=time.time()))

    def poll(self) -> KeyEvent | None:
        if self._events:
            return self._events.pop(0)
        return None

    def clear(self) -> None:
        """Drop queued events and forget held keys."""
        self._events.clear()
        self._held.clear()

    def close(self) -> None:
        self.clear()
