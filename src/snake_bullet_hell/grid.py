"""Bounds checks and random cell sampling over the square play grid."""

from __future__ import annotations

import random
from typing import Tuple

from .config import GRID_SIZE

Position = Tuple[int, int]


def random_position(rng: random.Random) -> Position:
    """Pick a cell uniformly; nothing already on the board is avoided."""

    return rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE)


def in_bounds(pos: Tuple[float, float]) -> bool:
    x, y = pos
    return 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE
