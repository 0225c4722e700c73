"""Centralized configuration and palette definitions for Snake Bullet Hell."""

from __future__ import annotations

import os

import pygame


def _env_seed() -> int | None:
    """Return the RNG seed from the environment, or None for an unseeded run."""

    raw = os.getenv("SNAKE_BULLET_HELL_SEED")
    if raw is None or not raw.strip():
        return None
    return int(raw)


SEED: int | None = _env_seed()
LOG_LEVEL: str = os.getenv("SNAKE_BULLET_HELL_LOG_LEVEL", "INFO").upper()

GRID_SIZE: int = 20
CELL_SIZE: int = 20  # pixels per grid cell
HUD_HEIGHT: int = 40
WINDOW_WIDTH: int = GRID_SIZE * CELL_SIZE
WINDOW_HEIGHT: int = GRID_SIZE * CELL_SIZE + HUD_HEIGHT
FONT_NAME: str = "consolas"
FONT_SIZE: int = 22
FPS: int = 60

# Tick periods, in milliseconds
GAME_SPEED: int = 150
BULLET_TICK: int = 100
COLLISION_TICK: int = 50
ENEMY_SHOOT_INTERVAL: int = 1000  # divided by the current level

BULLET_SPEED: float = 3.0  # grid units per bullet tick
HIT_DISTANCE: float = 1.0  # per-axis proximity for a bullet hit

FOOD_POINTS: int = 10
LEVEL_STEP: int = 50

INITIAL_SNAKE: tuple[tuple[int, int], ...] = ((10, 10),)
INITIAL_DIRECTION: str = "UP"
INITIAL_LEVEL: int = 1

DIRECTIONS: dict[str, tuple[int, int]] = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}
KEY_TO_DIRECTION = {
    pygame.K_UP: "UP",
    pygame.K_w: "UP",
    pygame.K_DOWN: "DOWN",
    pygame.K_s: "DOWN",
    pygame.K_LEFT: "LEFT",
    pygame.K_a: "LEFT",
    pygame.K_RIGHT: "RIGHT",
    pygame.K_d: "RIGHT",
}

PALETTE = {
    "bg": pygame.Color(17, 24, 39),
    "cell": pygame.Color(31, 41, 55),
    "grid": pygame.Color(55, 65, 81),
    "head": pygame.Color(34, 197, 94),
    "body": pygame.Color(74, 222, 128),
    "food": pygame.Color(239, 68, 68),
    "bullet": pygame.Color(250, 204, 21),
    "enemy": pygame.Color(220, 38, 38),
    "enemy_rim": pygame.Color(248, 113, 113),
    "text": pygame.Color(229, 231, 235),
    "score": pygame.Color(250, 204, 21),
    "level": pygame.Color(96, 165, 250),
    "danger": pygame.Color(239, 68, 68),
    "overlay": pygame.Color(5, 5, 15, 170),
}
