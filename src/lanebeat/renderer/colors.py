"""Color palette."""

# RGB tuples
BG = (18, 18, 24)
LANE_DIVIDER = (40, 40, 52)
ZONE_IDLE = (60, 60, 60)
HUD_TEXT = (220, 220, 220)
OVERLAY_BG = (0, 0, 0, 204)
OVERLAY_TEXT = (255, 255, 255)
ACCENT = (80, 220, 100)
