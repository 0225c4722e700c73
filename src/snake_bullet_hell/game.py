"""Pygame front end: keyboard in, snapshot drawn out, real time fed to the engine."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Sequence

import pygame

from .config import (
    CELL_SIZE,
    FONT_NAME,
    FONT_SIZE,
    FPS,
    GRID_SIZE,
    HUD_HEIGHT,
    KEY_TO_DIRECTION,
    LOG_LEVEL,
    PALETTE,
    SEED,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from .engine import SimulationEngine
from .state import DeathReason, GameSnapshot

logger = logging.getLogger(__name__)

DEATH_MESSAGES = {
    DeathReason.WALL: "You hit the wall",
    DeathReason.SELF: "You bit yourself",
    DeathReason.BULLET: "You were shot",
}
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)
QUIT_KEYS = (pygame.K_q, pygame.K_ESCAPE)


class SnakeBulletHell:
    """Window, input mapping and drawing around a :class:`SimulationEngine`."""

    def __init__(self, seed: int | None = None) -> None:
        pygame.init()
        self.window = pygame.display.set_mode(
            (WINDOW_WIDTH, WINDOW_HEIGHT), pygame.DOUBLEBUF | pygame.SCALED
        )
        pygame.display.set_caption("Snake Bullet Hell")
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.board = self._build_board()
        self.engine = SimulationEngine(rng=random.Random(seed))

    def _build_board(self) -> pygame.Surface:
        """Pre-render the empty grid once to keep draw() light."""
        surface = pygame.Surface((WINDOW_WIDTH, GRID_SIZE * CELL_SIZE))
        surface.fill(PALETTE["cell"])
        for i in range(0, GRID_SIZE * CELL_SIZE + 1, CELL_SIZE):
            pygame.draw.line(surface, PALETTE["grid"], (i, 0), (i, WINDOW_WIDTH), 1)
            pygame.draw.line(surface, PALETTE["grid"], (0, i), (WINDOW_WIDTH, i), 1)
        return surface

    # --- Input ---------------------------------------------------------

    def handle_events(self) -> bool:
        """Translate window/keyboard events into engine commands."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue
            if event.key in QUIT_KEYS:
                return False

            state = self.engine.snapshot
            if not state.active:
                if event.key in START_KEYS or (
                    state.game_over and event.key == pygame.K_r
                ):
                    self.engine.start()
                continue

            direction = KEY_TO_DIRECTION.get(event.key)
            if direction:
                self.engine.steer(direction)
        return True

    # --- Draw ----------------------------------------------------------

    @staticmethod
    def _cell_rect(x: float, y: float, size: int = CELL_SIZE) -> pygame.Rect:
        rect = pygame.Rect(0, 0, size, size)
        rect.topleft = (int(x * CELL_SIZE), int(y * CELL_SIZE) + HUD_HEIGHT)
        return rect

    def _draw_overlay(self, lines: list[str]) -> None:
        overlay = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.SRCALPHA)
        overlay.fill(PALETTE["overlay"])
        top = WINDOW_HEIGHT // 2 - len(lines) * (FONT_SIZE + 8) // 2
        for idx, text in enumerate(lines):
            title = idx == 0 and text == "Game Over!"
            surf = self.font.render(
                text, True, PALETTE["danger"] if title else PALETTE["text"]
            )
            rect = surf.get_rect()
            rect.center = (WINDOW_WIDTH // 2, top + idx * (FONT_SIZE + 8))
            overlay.blit(surf, rect)
        self.window.blit(overlay, (0, 0))

    def show_score(self, state: GameSnapshot) -> None:
        """Render score and level in the HUD strip."""
        score = self.font.render(f"SCORE {state.score:04}", True, PALETTE["score"])
        level = self.font.render(f"LEVEL {state.level}", True, PALETTE["level"])
        self.window.blit(score, (10, (HUD_HEIGHT - score.get_height()) // 2))
        self.window.blit(
            level,
            (
                WINDOW_WIDTH - level.get_width() - 10,
                (HUD_HEIGHT - level.get_height()) // 2,
            ),
        )

    def draw(self) -> None:
        """Render one frame from the latest committed snapshot."""
        state = self.engine.snapshot
        self.window.fill(PALETTE["bg"])
        self.window.blit(self.board, (0, HUD_HEIGHT))
        self.show_score(state)

        if not state.started:
            self._draw_overlay(
                [
                    "Snake Bullet Hell",
                    "Arrows/WASD to move",
                    "Dodge the bullets, eat the food",
                    "Every 50 points is a new level",
                    "ENTER to start",
                ]
            )
            return

        pygame.draw.rect(self.window, PALETTE["food"], self._cell_rect(*state.food))
        for idx, (x, y) in enumerate(state.snake):
            color = PALETTE["head"] if idx == 0 else PALETTE["body"]
            pygame.draw.rect(self.window, color, self._cell_rect(x, y))

        # Bullets and enemies sit on grid corners, not cell centers
        for bullet in state.bullets:
            center = (
                int(bullet.x * CELL_SIZE),
                int(bullet.y * CELL_SIZE) + HUD_HEIGHT,
            )
            pygame.draw.circle(self.window, PALETTE["bullet"], center, CELL_SIZE // 4)
        for enemy in state.enemies:
            center = (enemy.x * CELL_SIZE, enemy.y * CELL_SIZE + HUD_HEIGHT)
            pygame.draw.circle(self.window, PALETTE["enemy"], center, CELL_SIZE // 2)
            pygame.draw.circle(
                self.window, PALETTE["enemy_rim"], center, CELL_SIZE // 2, width=2
            )

        if state.game_over:
            self._draw_overlay(
                [
                    "Game Over!",
                    DEATH_MESSAGES.get(state.death_reason, ""),
                    f"Final Score: {state.score}",
                    f"Level Reached: {state.level}",
                    "ENTER to play again / Q to quit",
                ]
            )

    # --- Main loop -----------------------------------------------------

    def start(self) -> None:
        """Run the main loop: handle events, feed elapsed time, then render."""
        clock = pygame.time.Clock()
        running = True
        try:
            while running:
                elapsed_ms = clock.tick(FPS)
                running = self.handle_events()
                self.engine.advance(elapsed_ms)
                self.draw()
                pygame.display.update()
        finally:
            pygame.quit()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Snake Bullet Hell.")
    parser.add_argument(
        "--seed",
        type=int,
        default=SEED,
        help="Seed for food and enemy placement (default: SNAKE_BULLET_HELL_SEED or random)",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Launching Snake Bullet Hell (seed=%s)", args.seed)
    game = SnakeBulletHell(seed=args.seed)
    game.start()


if __name__ == "__main__":
    main()
