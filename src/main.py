"""Entry point for the Snake Bullet Hell game."""

from __future__ import annotations

from snake_bullet_hell.game import main

if __name__ == "__main__":
    main()
