"""Translation of raw keyboard codes into game commands."""

from __future__ import annotations

import enum

from grid_snake.snake import Direction


class Command(enum.Enum):
    """Non-movement commands a key can trigger."""

    TOGGLE_PAUSE = "toggle_pause"


PAUSE_KEY = 32  # space

# Arrow keys and WASD.
KEY_BINDINGS: dict[int, Direction] = {
    38: Direction.UP,
    87: Direction.UP,
    40: Direction.DOWN,
    83: Direction.DOWN,
    37: Direction.LEFT,
    65: Direction.LEFT,
    39: Direction.RIGHT,
    68: Direction.RIGHT,
}


def translate_key(code: int) -> Direction | Command | None:
    """Map a key code to a direction or command; unknown keys give ``None``."""
    if code == PAUSE_KEY:
        return Command.TOGGLE_PAUSE
    return KEY_BINDINGS.get(code)
