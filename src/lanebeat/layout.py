"""Lane geometry: where columns sit across the viewport and where the hit zone starts."""

from __future__ import annotations


def lane_width(viewport_width: float, column_count: int) -> float:
    return viewport_width / column_count


def lane_center(column: int, viewport_width: float, column_count: int) -> float:
    width = lane_width(viewport_width, column_count)
    return width * column + width / 2


def note_x(column: int, viewport_width: float, note_width: float, column_count: int) -> float:
    """Left edge of a note centered in its lane."""
    return lane_center(column, viewport_width, column_count) - note_width / 2


def hit_zone_top(viewport_height: float, hit_zone_height: float) -> float:
    return viewport_height - hit_zone_height


def miss_line(viewport_height: float, miss_margin: float = 0.0) -> float:
    """Positions beyond this line count as missed."""
    return viewport_height + miss_margin
