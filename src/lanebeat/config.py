"""Global constants and default settings."""

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
WINDOW_TITLE = "Lanebeat"

# Lanes
COLUMN_COUNT = 4
DEFAULT_KEYS = ("a", "s", "d", "f")
PAUSE_KEY = "p"

# Per-column (body, hit zone) colors, column order
COLUMN_COLORS = (
    ("#ffb3b3", "#ff9999"),  # light red
    ("#b3ffb3", "#99ff99"),  # light green
    ("#b3b3ff", "#9999ff"),  # light blue
    ("#f3b3ff", "#d9aaff"),  # light purple
)

# Note fall speed in pixels per tick
DIFFICULTY_SPEEDS = {
    "easy": 2,
    "medium": 4,
    "hard": 6,
    "ultrahard": 12,
}
DEFAULT_DIFFICULTY = "medium"

# Note geometry (pixels)
NOTE_RADIUS = 40
RECT_NOTE_WIDTH = 80
RECT_NOTE_HEIGHT = 30
HIT_ZONE_HEIGHT = 40
POP_RADIUS = 25
DEFAULT_MISS_MARGIN = 0.0

# Scoring
HIT_AWARD = 10

# Timers (milliseconds)
SPAWN_INTERVAL_MS = 1000
END_CHECK_INTERVAL_MS = 100

# Audio
SOUNDS_DIR = "sounds"
TRACK_VOLUME = 0.3
CUE_VOLUME = 1.0
