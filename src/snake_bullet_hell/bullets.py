"""Straight-line projectile movement and off-grid culling."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from .config import BULLET_SPEED
from .grid import in_bounds


@dataclass(frozen=True, slots=True)
class Bullet:
    id: int
    x: float
    y: float
    dx: float
    dy: float

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


def advance_bullets(
    bullets: Iterable[Bullet], speed: float = BULLET_SPEED
) -> Tuple[Bullet, ...]:
    """Step every bullet along its heading and drop the ones that left the grid.

    A zero heading leaves the bullet where it is.
    """

    moved = (
        replace(bullet, x=bullet.x + bullet.dx * speed, y=bullet.y + bullet.dy * speed)
        for bullet in bullets
    )
    return tuple(bullet for bullet in moved if in_bounds(bullet.position))
