"""Static enemy turrets: spawning and aimed shots at the snake head."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .bullets import Bullet
from .grid import Position, random_position


@dataclass(frozen=True, slots=True)
class Enemy:
    id: int
    x: int
    y: int

    @property
    def position(self) -> Position:
        return self.x, self.y


def spawn_enemy(rng: random.Random, ids: Iterator[int]) -> Enemy:
    x, y = random_position(rng)
    return Enemy(id=next(ids), x=x, y=y)


def spawn_initial_enemies(
    level: int, rng: random.Random, ids: Iterator[int]
) -> Tuple[Enemy, ...]:
    """One enemy per level, each on an independently random cell."""

    return tuple(spawn_enemy(rng, ids) for _ in range(level))


def fire(
    enemies: Iterable[Enemy], target: Position, ids: Iterator[int]
) -> Tuple[Bullet, ...]:
    """Emit one bullet per enemy, aimed at where the head is right now.

    Headings are unit vectors and never change after the shot. An enemy
    sitting on the target cell has nothing to aim along and stays quiet.
    """

    target_x, target_y = target
    volley: List[Bullet] = []
    for enemy in enemies:
        dx = target_x - enemy.x
        dy = target_y - enemy.y
        distance = math.hypot(dx, dy)
        if distance <= 0:
            continue
        volley.append(
            Bullet(
                id=next(ids),
                x=float(enemy.x),
                y=float(enemy.y),
                dx=dx / distance,
                dy=dy / distance,
            )
        )
    return tuple(volley)
