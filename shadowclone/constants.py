from __future__ import annotations

from pathlib import Path

from .config import CFG

PKG_DIR = Path(__file__).resolve().parent


# --- Palette ----------------------------------------------------------------
BG = (8, 10, 12)                 # window clear colour
INK = (235, 235, 235)            # primary text colour
ACCENT = (255, 210, 90)          # accent colour for highlights
WALL_COLOR = (47, 47, 47)
FLOOR_COLOR = (15, 15, 15)
GOAL_COLOR = (255, 200, 40)
PLAYER_COLOR = (60, 255, 90)
TRAIL_COLOR = (51, 255, 119)
CLONE_COLORS = {
    "basic":  (220, 20, 60),
    "wraith": (255, 0, 255),
}
FROZEN_TINT = (150, 220, 255)
POWERUP_COLORS = {
    "speed":  (119, 170, 255),
    "cloak":  (153, 187, 238),
    "freeze": (187, 255, 238),
}

# --- Display ----------------------------------------------------------------
FPS = int(CFG.get("display", {}).get("fps", 60))
TILE_SIZE = int(CFG.get("display", {}).get("tile_size", 30))
HUD_HEIGHT = 48
TRAIL_LENGTH = 30
TEXT_SHADOW_OFFSET = (2, 2)
WINDOWED_DEFAULT_SIZE = tuple(CFG.get("display", {}).get("windowed_size", [900, 660]))

# --- Maze -------------------------------------------------------------------
MIN_MAZE_DIMENSION = 5
START = (1, 1)

# --- Clones -----------------------------------------------------------------
SNAPSHOT_MAX = 800               # replay length cap
MIN_HISTORY_TO_SPAWN = 4
WRAITH_BASE_CHANCE = 0.12
WRAITH_CHANCE_CAP = 0.20
WRAITH_CHANCE_TICKS = 5000
WRAITH_SKIP_BASE = 0.006
WRAITH_SKIP_CAP = 0.05
WRAITH_SKIP_TICKS = 40000
WRAITH_SKIP_MAX = 40

# --- Spawn schedule ---------------------------------------------------------
SPAWN_INTERVAL_BASE = 280
SPAWN_INTERVAL_DIFFICULTY_STEP = 80
SPAWN_INTERVAL_BASE_MIN = 80
SPAWN_INTERVAL_FLOOR = 20        # effective interval never drops below
SPAWN_INTERVAL_MIN = 60          # ratchet stops here
SPAWN_MIN_HISTORY = 8            # attempts need more moves than this
BONUS_CLONE_BASE = 0.02
BONUS_CLONE_PER_DIFFICULTY = 0.03
DIFFICULTY_INTERVAL_FACTOR = 0.6

# --- Power-ups --------------------------------------------------------------
POWERUP_SPAWN_EVERY = 600        # ticks
POWERUP_SPAWN_CHANCE = 0.9
POWERUP_PLACE_ATTEMPTS = 200
EFFECT_DURATION_MS = {
    "speed":  6000,
    "cloak":  6000,
    "freeze": 4000,
}

# --- Input pacing -----------------------------------------------------------
MOVE_REPEAT_MS = 140
MOVE_REPEAT_SPEED_MS = 90

# --- Events -----------------------------------------------------------------
EV_CLONE_SPAWNED = "clone_spawned"
EV_PICKUP = "pickup_collected"
EV_CAUGHT = "caught"
EV_ESCAPED = "escaped"
EV_RUN_ENDED = "run_ended"
EV_NEW_RECORD = "new_record"

LEADERBOARD_SIZE = 10
