"""
Constants for the game.
"""

from __future__ import annotations

from pathlib import Path

FPS = 60
WINDOW_SIZE = (800, 600)
WINDOW_TITLE = "Space Invaders"

HIGH_SCORE_PATH = Path.home() / ".space_invaders_sim" / "highscore.json"

# Projectiles
BULLET_SIZE = (4, 10)
PLAYER_BULLET_SPEED = 8.0
ENEMY_BULLET_BASE_SPEED = 3.0
ENEMY_BULLET_SPEED_PER_LEVEL = 0.5

# Player
PLAYER_SIZE = (50, 30)
PLAYER_SPEED = 5.0
PLAYER_LIVES = 3
PLAYER_BOTTOM_OFFSET = 50
PLAYER_BASE_COOLDOWN = 15
MULTI_SHOT_OFFSET = 15
POWER_UP_DURATION = 600  # frames, 10 seconds at 60 FPS

# Formation
FORMATION_ROWS = 5
FORMATION_COLS = 11
FORMATION_SPACING = (60, 50)
FORMATION_START_Y = 100
EDGE_MARGIN = 20
DROP_DISTANCE = 20
BASELINE_MARGIN = 100
ENEMY_BASE_COOLDOWN = 120
ENEMY_MIN_COOLDOWN = 60
ENEMY_COOLDOWN_STEP = 10
FORMATION_SPEED_STEP = 0.2

# Power-ups
POWER_UP_SIZE = (30, 30)
POWER_UP_SPEED = 2.0
POWER_UP_DROP_CHANCE = 0.1
POWER_UP_DROP_STEP = 0.02
POWER_UP_DROP_CAP = 0.2

# Colors
PLAYER_COLOR = (0, 255, 0)
PLAYER_BULLET_COLOR = (0, 255, 0)
ENEMY_BULLET_COLOR = (255, 0, 0)
BACKGROUND_COLOR = (0, 0, 0)
TEXT_COLOR = (255, 255, 255)
