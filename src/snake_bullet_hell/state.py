"""Immutable snapshot of a run, replaced wholesale on every tick."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple

from .bullets import Bullet
from .config import DIRECTIONS, INITIAL_DIRECTION, INITIAL_LEVEL, INITIAL_SNAKE
from .enemies import Enemy
from .grid import Position


class DeathReason(enum.Enum):
    """Why a run ended; kept for the end-of-run screen only."""

    WALL = "wall"
    SELF = "self"
    BULLET = "bullet"


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Everything the renderer needs, consistent as of one commit.

    Attributes:
        snake: body cells, head first
        direction: committed heading as (dx, dy)
        food: the single food cell
        bullets: live projectiles, all in bounds
        enemies: static shooters, in spawn order
        score: multiple of 10
        level: starts at 1, +1 per 50 points
        game_over: once True nothing changes until a restart
        started: False until the first start command
        death_reason: set together with game_over
    """

    snake: Tuple[Position, ...] = INITIAL_SNAKE
    direction: Tuple[int, int] = DIRECTIONS[INITIAL_DIRECTION]
    food: Position = (5, 5)
    bullets: Tuple[Bullet, ...] = ()
    enemies: Tuple[Enemy, ...] = ()
    score: int = 0
    level: int = INITIAL_LEVEL
    game_over: bool = False
    started: bool = False
    death_reason: DeathReason | None = None

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def active(self) -> bool:
        return self.started and not self.game_over
