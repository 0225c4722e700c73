"""
Tests for the simulation engine: ticks, scenarios and run-wide invariants.
"""

import random

import pytest

from snake_bullet_hell.bullets import Bullet
from snake_bullet_hell.config import DIRECTIONS, INITIAL_SNAKE
from snake_bullet_hell.engine import FIRE_TASK, SimulationEngine
from snake_bullet_hell.enemies import Enemy
from snake_bullet_hell.grid import in_bounds
from snake_bullet_hell.state import DeathReason, GameSnapshot


@pytest.fixture
def engine():
    return SimulationEngine(rng=random.Random(7))


class TestLifecycle:
    def test_ticks_are_no_ops_before_start(self, engine):
        before = engine.snapshot
        engine.move_snake()
        engine.move_bullets()
        engine.check_bullet_collision()
        engine.enemy_shoot()
        assert engine.snapshot is before
        assert engine.advance(5000) == 0
        assert engine.steer("LEFT") is False

    def test_start_resets_to_initial_values(self, engine):
        state = engine.start()
        assert state is engine.snapshot
        assert state.started is True
        assert state.game_over is False
        assert state.snake == INITIAL_SNAKE
        assert state.direction == DIRECTIONS["UP"]
        assert state.bullets == ()
        assert state.score == 0
        assert state.level == 1
        assert len(state.enemies) == 1
        assert in_bounds(state.food)
        assert engine.scheduler.running is True
        assert engine.fire_interval == 1000

    def test_restart_after_game_over(self, engine):
        engine.start(GameSnapshot(snake=((0, 0),), direction=DIRECTIONS["LEFT"], score=30))
        engine.move_snake()
        assert engine.snapshot.game_over is True

        state = engine.start()
        assert state.game_over is False
        assert state.death_reason is None
        assert state.score == 0
        assert state.snake == INITIAL_SNAKE
        assert engine.scheduler.running is True


class TestSteering:
    def test_reversal_and_redundant_input_ignored(self, engine):
        engine.start()
        assert engine.steer("UP") is False
        assert engine.steer("DOWN") is False
        assert engine.snapshot.direction == (0, -1)

    def test_perpendicular_input_accepted(self, engine):
        engine.start()
        assert engine.steer("LEFT") is True
        assert engine.snapshot.direction == (-1, 0)
        assert engine.steer("RIGHT") is False
        assert engine.steer("DOWN") is True
        assert engine.snapshot.direction == (0, 1)

    def test_unknown_command_ignored(self, engine):
        engine.start()
        assert engine.steer("JUMP") is False


class TestMovementTick:
    def test_eating_food_scores_and_grows(self, engine):
        engine.start(GameSnapshot(snake=((10, 10),), food=(10, 9)))
        engine.move_snake()

        state = engine.snapshot
        assert state.snake == ((10, 9), (10, 10))
        assert state.score == 10
        assert state.level == 1
        assert in_bounds(state.food)

    def test_scheduler_moves_snake_every_150_ms(self, engine):
        engine.start(GameSnapshot(snake=((10, 10),), food=(19, 19)))
        engine.advance(149)
        assert engine.snapshot.head == (10, 10)
        engine.advance(1)
        assert engine.snapshot.head == (10, 9)
        engine.advance(300)
        assert engine.snapshot.head == (10, 7)

    def test_wall_ends_the_run(self, engine):
        engine.start(
            GameSnapshot(snake=((0, 0),), direction=DIRECTIONS["LEFT"], food=(5, 5))
        )
        engine.move_snake()

        state = engine.snapshot
        assert state.game_over is True
        assert state.death_reason is DeathReason.WALL
        assert state.snake == ((0, 0),)
        assert engine.scheduler.running is False

    def test_self_collision_ends_the_run(self, engine):
        body = ((5, 5), (6, 5), (6, 6), (5, 6))
        engine.start(GameSnapshot(snake=body, direction=DIRECTIONS["DOWN"], food=(0, 0)))
        engine.move_snake()
        assert engine.snapshot.death_reason is DeathReason.SELF
        assert engine.snapshot.snake == body

    def test_nothing_changes_after_game_over(self, engine):
        engine.start(
            GameSnapshot(
                snake=((0, 0),),
                direction=DIRECTIONS["LEFT"],
                enemies=(Enemy(1, 10, 10),),
                bullets=(Bullet(2, 5.0, 5.0, 1.0, 0.0),),
            )
        )
        engine.move_snake()
        frozen = engine.snapshot

        engine.move_snake()
        engine.move_bullets()
        engine.check_bullet_collision()
        engine.enemy_shoot()
        assert engine.steer("DOWN") is False
        assert engine.advance(10_000) == 0
        assert engine.snapshot is frozen


class TestLevelProgression:
    def test_level_up_adds_enemy_and_halves_fire_interval(self, engine):
        engine.start(
            GameSnapshot(
                snake=((10, 10),),
                food=(10, 9),
                score=40,
                enemies=(Enemy(1, 0, 0),),
            )
        )
        assert engine.fire_interval == 1000

        engine.move_snake()

        state = engine.snapshot
        assert state.score == 50
        assert state.level == 2
        assert len(state.enemies) == 2
        assert len({enemy.id for enemy in state.enemies}) == 2
        assert engine.fire_interval == 500
        assert engine.scheduler.period(FIRE_TASK) == 500

    def test_no_level_up_between_multiples(self, engine):
        engine.start(
            GameSnapshot(snake=((10, 10),), food=(10, 9), score=50, level=2,
                         enemies=(Enemy(1, 0, 0), Enemy(2, 1, 1)))
        )
        engine.move_snake()
        assert engine.snapshot.score == 60
        assert engine.snapshot.level == 2
        assert len(engine.snapshot.enemies) == 2

    def test_start_at_level_uses_its_cadence(self, engine):
        engine.start(GameSnapshot(level=4, enemies=(Enemy(1, 0, 0),)))
        assert engine.scheduler.period(FIRE_TASK) == 250


class TestBulletsAndFire:
    def test_enemy_shot_aims_at_head(self, engine):
        engine.start(
            GameSnapshot(snake=((3, 4),), enemies=(Enemy(1, 0, 0),), food=(19, 19))
        )
        engine.enemy_shoot()

        (bullet,) = engine.snapshot.bullets
        assert bullet.position == (0.0, 0.0)
        assert bullet.dx == pytest.approx(0.6)
        assert bullet.dy == pytest.approx(0.8)
        assert bullet.id != 1

    def test_first_volley_after_one_second(self, engine):
        engine.start(
            GameSnapshot(snake=((10, 10),), enemies=(Enemy(1, 0, 0),), food=(19, 19))
        )
        engine.advance(999)
        assert engine.snapshot.bullets == ()
        engine.advance(1)

        state = engine.snapshot
        assert state.head == (10, 4)
        assert [bullet.position for bullet in state.bullets] == [(0.0, 0.0)]

    def test_bullet_advance_culls_leavers(self, engine):
        engine.start(
            GameSnapshot(
                snake=((10, 10),),
                bullets=(Bullet(1, 18.0, 0.0, 1.0, 0.0), Bullet(2, 2.0, 2.0, 0.0, 1.0)),
            )
        )
        engine.move_bullets()
        assert [bullet.id for bullet in engine.snapshot.bullets] == [2]
        assert engine.snapshot.bullets[0].position == (2.0, 5.0)

    def test_bullet_near_head_ends_the_run(self, engine):
        engine.start(
            GameSnapshot(
                snake=((10, 10),),
                food=(0, 0),
                bullets=(Bullet(1, 10.4, 10.4, 0.0, 0.0),),
            )
        )
        engine.check_bullet_collision()
        assert engine.snapshot.game_over is True
        assert engine.snapshot.death_reason is DeathReason.BULLET
        assert engine.scheduler.running is False

    def test_collision_check_runs_every_50_ms(self, engine):
        engine.start(
            GameSnapshot(
                snake=((10, 10),),
                food=(19, 19),
                bullets=(Bullet(1, 10.0, 10.0, 0.0, 0.0),),
            )
        )
        engine.advance(49)
        assert engine.snapshot.game_over is False
        engine.advance(1)
        assert engine.snapshot.death_reason is DeathReason.BULLET
        # The snake never got to move
        assert engine.snapshot.head == (10, 10)


class TestInvariants:
    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_random_play_respects_invariants(self, seed):
        rng = random.Random(seed)
        engine = SimulationEngine(rng=random.Random(seed * 100))
        engine.start()
        commands = list(DIRECTIONS)

        for _ in range(3000):
            before = engine.snapshot
            if before.game_over:
                engine.start()
                continue
            if rng.random() < 0.2:
                engine.steer(rng.choice(commands))
                before = engine.snapshot
            # Under one movement period, so at most one move per step
            engine.advance(rng.randint(10, 60))
            after = engine.snapshot

            assert after.level >= 1
            assert after.score % 10 == 0
            assert len(after.enemies) >= len(before.enemies)
            assert len(after.enemies) == after.level
            if after.game_over:
                assert after.death_reason is not None
                continue

            assert all(in_bounds(cell) for cell in after.snake)
            assert len(set(after.snake)) == len(after.snake)
            assert all(in_bounds(bullet.position) for bullet in after.bullets)

            gained = after.score - before.score
            assert gained in (0, 10)
            assert len(after.snake) - len(before.snake) == gained // 10
            assert after.level - before.level == (
                1 if gained and after.score % 50 == 0 else 0
            )
