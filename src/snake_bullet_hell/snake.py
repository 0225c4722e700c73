"""Snake movement, growth and wall/self collision."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .grid import Position, in_bounds
from .state import DeathReason


@dataclass(frozen=True, slots=True)
class MoveResult:
    snake: Tuple[Position, ...]
    ate_food: bool = False
    death: DeathReason | None = None

    @property
    def collided(self) -> bool:
        return self.death is not None


def advance(
    snake: Sequence[Position], direction: Tuple[int, int], food: Position
) -> MoveResult:
    """Move the snake one cell along ``direction``.

    On a wall or self hit the body is returned unchanged. The self check runs
    against the whole pre-move body, so stepping onto the cell the tail is
    about to leave still counts as a collision.
    """

    body = tuple(snake)
    head_x, head_y = body[0]
    new_head = (head_x + direction[0], head_y + direction[1])

    if not in_bounds(new_head):
        return MoveResult(body, death=DeathReason.WALL)
    if new_head in body:
        return MoveResult(body, death=DeathReason.SELF)

    if new_head == food:
        return MoveResult((new_head,) + body, ate_food=True)
    return MoveResult((new_head,) + body[:-1])


def accepts_turn(current: Tuple[int, int], requested: Tuple[int, int]) -> bool:
    """Vertical input only while moving horizontally, and vice versa."""

    if requested[1] != 0:
        return current[1] == 0
    return current[0] == 0
