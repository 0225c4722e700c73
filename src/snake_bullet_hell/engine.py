"""Simulation engine: owns the committed snapshot and the four periodic ticks."""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import replace

from .bullets import advance_bullets
from .collision import check_bullet_hit, on_food_eaten
from .config import (
    BULLET_TICK,
    COLLISION_TICK,
    DIRECTIONS,
    ENEMY_SHOOT_INTERVAL,
    GAME_SPEED,
    INITIAL_LEVEL,
)
from .enemies import fire, spawn_enemy, spawn_initial_enemies
from .grid import random_position
from .scheduler import TickScheduler
from .snake import accepts_turn, advance
from .state import DeathReason, GameSnapshot

logger = logging.getLogger(__name__)

MOVE_TASK = "move"
BULLET_TASK = "bullets"
COLLISION_TASK = "collision"
FIRE_TASK = "fire"


class SimulationEngine:
    """Single owner of the game state.

    Every tick reads ``self._state``, builds a new :class:`GameSnapshot` and
    commits it with one assignment, so :attr:`snapshot` is never half updated.
    All ticks are no-ops before the first :meth:`start` and after game over.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self._ids = itertools.count(1)
        self._state = GameSnapshot()
        self.scheduler = TickScheduler()
        self.scheduler.add(MOVE_TASK, GAME_SPEED, self.move_snake)
        self.scheduler.add(BULLET_TASK, BULLET_TICK, self.move_bullets)
        self.scheduler.add(COLLISION_TASK, COLLISION_TICK, self.check_bullet_collision)
        self.scheduler.add(FIRE_TASK, ENEMY_SHOOT_INTERVAL, self.enemy_shoot)

    # --- State in / out -----------------------------------------------

    @property
    def snapshot(self) -> GameSnapshot:
        return self._state

    @property
    def fire_interval(self) -> float:
        return ENEMY_SHOOT_INTERVAL / self._state.level

    def _commit(self, state: GameSnapshot) -> None:
        self._state = state

    def start(self, initial: GameSnapshot | None = None) -> GameSnapshot:
        """Reset every entity and (re)start all periodic ticks.

        ``initial`` replaces the random opening layout, which lets a caller
        replay a known scenario.
        """
        if initial is None:
            initial = GameSnapshot(
                food=random_position(self.rng),
                enemies=spawn_initial_enemies(INITIAL_LEVEL, self.rng, self._ids),
                started=True,
            )
        else:
            initial = replace(initial, started=True, game_over=False, death_reason=None)
            self._skip_ids(initial)
        self._commit(initial)
        self.scheduler.start()
        self.scheduler.reschedule(FIRE_TASK, self.fire_interval)
        logger.info(
            "Run started: level %d, %d enemies, food at %s",
            initial.level,
            len(initial.enemies),
            initial.food,
        )
        return initial

    def _skip_ids(self, state: GameSnapshot) -> None:
        used = [bullet.id for bullet in state.bullets]
        used.extend(enemy.id for enemy in state.enemies)
        if used:
            self._ids = itertools.count(max(used) + 1)

    def steer(self, name: str) -> bool:
        """Apply a directional command; returns whether it was accepted."""
        state = self._state
        requested = DIRECTIONS.get(name)
        if requested is None or not state.active:
            return False
        if not accepts_turn(state.direction, requested):
            return False
        self._commit(replace(state, direction=requested))
        return True

    def advance(self, elapsed_ms: float) -> int:
        return self.scheduler.advance(elapsed_ms)

    # --- Ticks --------------------------------------------------------

    def move_snake(self) -> None:
        state = self._state
        if not state.active:
            return

        result = advance(state.snake, state.direction, state.food)
        if result.collided:
            self._end_run(state, result.death)
            return
        if not result.ate_food:
            self._commit(replace(state, snake=result.snake))
            return

        update = on_food_eaten(state.score)
        level = state.level
        enemies = state.enemies
        if update.level_up:
            level += 1
            enemies = enemies + (spawn_enemy(self.rng, self._ids),)
        self._commit(
            replace(
                state,
                snake=result.snake,
                food=random_position(self.rng),
                score=update.score,
                level=level,
                enemies=enemies,
            )
        )
        logger.debug("Food eaten at %s, score %d", result.snake[0], update.score)
        if update.level_up:
            self.scheduler.reschedule(FIRE_TASK, self.fire_interval)
            logger.info(
                "Level %d reached: %d enemies, firing every %.0f ms",
                level,
                len(enemies),
                self.fire_interval,
            )

    def move_bullets(self) -> None:
        state = self._state
        if not state.active or not state.bullets:
            return
        self._commit(replace(state, bullets=advance_bullets(state.bullets)))

    def check_bullet_collision(self) -> None:
        state = self._state
        if not state.active:
            return
        if check_bullet_hit(state.bullets, state.head):
            self._end_run(state, DeathReason.BULLET)

    def enemy_shoot(self) -> None:
        state = self._state
        if not state.active:
            return
        volley = fire(state.enemies, state.head, self._ids)
        if not volley:
            return
        self._commit(replace(state, bullets=state.bullets + volley))
        logger.debug("%d enemies fired at %s", len(volley), state.head)

    def _end_run(self, state: GameSnapshot, reason: DeathReason) -> None:
        self._commit(replace(state, game_over=True, death_reason=reason))
        self.scheduler.stop()
        logger.info(
            "Game over (%s): score %d, level %d", reason.value, state.score, state.level
        )
