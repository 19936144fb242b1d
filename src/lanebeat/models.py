"""Core data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from lanebeat.config import COLUMN_COLORS, DEFAULT_KEYS, DIFFICULTY_SPEEDS, HIT_AWARD


class SessionPhase(Enum):
    NOT_STARTED = auto()
    RUNNING = auto()
    PAUSED = auto()
    ENDED = auto()


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    ULTRAHARD = "ultrahard"

    @property
    def speed(self) -> int:
        """Fall speed in pixels per tick."""
        return DIFFICULTY_SPEEDS[self.value]


class JudgementKind(Enum):
    HIT = auto()
    MISS = auto()


@dataclass(frozen=True)
class Circle:
    radius: float

    @property
    def width(self) -> float:
        return self.radius * 2

    def in_hit_zone(self, x_offset: float, position: float, zone_top: float) -> bool:
        return position > zone_top and abs(x_offset) < self.radius


@dataclass(frozen=True)
class Rect:
    width: float
    height: float

    def in_hit_zone(self, x_offset: float, position: float, zone_top: float) -> bool:
        # Column equality already settles the horizontal test for lane-wide notes.
        return position > zone_top


Shape = Circle | Rect


@dataclass
class Note:
    """A single falling note."""

    column: int
    x: float  # left edge at spawn time
    shape: Shape
    color: str
    spawn_time: int = 0  # engine tick at creation
    position: float = 0.0  # distance fallen since spawn
    hit: bool = False

    @property
    def center_x(self) -> float:
        return self.x + self.shape.width / 2


@dataclass
class ColumnBinding:
    column: int
    key: str
    body_color: str
    zone_color: str


class BindingTable:
    """Key-to-column map. Colors stay with the column when keys move."""

    def __init__(self, keys: tuple[str, ...] | list[str] = DEFAULT_KEYS) -> None:
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate keys in binding: {keys!r}")
        self._bindings = [
            ColumnBinding(
                column=i,
                key=key,
                body_color=COLUMN_COLORS[i % len(COLUMN_COLORS)][0],
                zone_color=COLUMN_COLORS[i % len(COLUMN_COLORS)][1],
            )
            for i, key in enumerate(keys)
        ]

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self):
        return iter(self._bindings)

    def __getitem__(self, column: int) -> ColumnBinding:
        return self._bindings[column]

    def columns(self) -> list[int]:
        return [b.column for b in self._bindings]

    def column_for(self, key: str) -> int | None:
        for binding in self._bindings:
            if binding.key == key:
                return binding.column
        return None

    def key_for(self, column: int) -> str:
        return self._bindings[column].key

    def rebind(self, column: int, key: str) -> None:
        """Bind ``key`` to ``column``. A key already used elsewhere swaps columns."""
        if not 0 <= column < len(self._bindings):
            raise ValueError(f"Column {column} out of range 0..{len(self._bindings) - 1}")
        if not key:
            raise ValueError("Key identifier must be non-empty")
        other = self.column_for(key)
        if other is not None and other != column:
            self._bindings[other].key = self._bindings[column].key
        self._bindings[column].key = key


@dataclass
class RunState:
    score: int = 0
    streak: int = 0
    max_streak: int = 0
    total_spawned: int = 0
    total_hit: int = 0
    total_missed: int = 0

    @property
    def accuracy(self) -> float:
        if self.total_spawned == 0:
            return 0.0
        return self.total_hit / self.total_spawned

    @property
    def accuracy_pct(self) -> float:
        return round(self.accuracy * 100.0, 2)

    def record_spawn(self) -> None:
        self.total_spawned += 1

    def record_hit(self) -> None:
        self.score += HIT_AWARD
        self.total_hit += 1
        self.streak += 1
        self.max_streak = max(self.max_streak, self.streak)

    def record_miss(self) -> None:
        self.total_missed += 1
        self.streak = 0

    def copy(self) -> RunState:
        return replace(self)


@dataclass
class Judgement:
    kind: JudgementKind
    note: Note


@dataclass
class Pop:
    """Transient hit flash for the renderer."""

    x: float
    y: float
    color: str

