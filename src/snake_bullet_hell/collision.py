"""Bullet proximity hits plus the score and level rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .bullets import Bullet
from .config import FOOD_POINTS, HIT_DISTANCE, LEVEL_STEP
from .grid import Position


@dataclass(frozen=True, slots=True)
class ScoreUpdate:
    score: int
    level_up: bool


def check_bullet_hit(bullets: Iterable[Bullet], head: Position) -> bool:
    """True if any bullet is closer than HIT_DISTANCE to the head on both axes.

    Bullets travel in fractional steps, so exact cell equality would miss.
    """

    head_x, head_y = head
    return any(
        abs(bullet.x - head_x) < HIT_DISTANCE and abs(bullet.y - head_y) < HIT_DISTANCE
        for bullet in bullets
    )


def on_food_eaten(score: int) -> ScoreUpdate:
    new_score = score + FOOD_POINTS
    return ScoreUpdate(score=new_score, level_up=new_score % LEVEL_STEP == 0)
