"""Snake representation, direction rules, and movement logic."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from grid_snake.board import Board, Coordinate


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, so UP decreases it.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: str) -> Direction | None:
        """Look up a direction by name, case-insensitively."""
        return cls.__members__.get(value.strip().upper())


OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def is_allowed(requested: Direction, current: Direction) -> bool:
    """Return False only when *requested* would reverse *current*.

    A reversal would drive the head straight into the segment behind it.
    """
    return OPPOSITES[requested] is not current


def step(coord: Coordinate, direction: Direction) -> Coordinate:
    """Return the neighbour of *coord* in *direction*."""
    dx, dy = direction.value
    return Coordinate(coord.x + dx, coord.y + dy)


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single :meth:`Snake.advance` call."""

    collided: bool
    grew: bool
    head: Coordinate


class Snake:
    """A snake held as an immutable tuple of segments.

    The head is ``body[0]``; the tail is ``body[-1]``. Each move rebuilds
    the tuple so no coordinate value is shared between ticks.
    """

    def __init__(self, body: tuple[Coordinate, ...] | list[Coordinate]) -> None:
        body = tuple(Coordinate(*seg) for seg in body)
        if len(body) < 3:
            raise ValueError("Snake length must be at least 3.")
        if len(set(body)) != len(body):
            raise ValueError("Snake segments must not overlap.")
        self.body: tuple[Coordinate, ...] = body
        self.pending_growth = 0

    @classmethod
    def centered(cls, board: Board) -> Snake:
        """Build the three-segment starting snake, head up, at the centre."""
        c = board.dimension // 2
        return cls([Coordinate(c, c - 1), Coordinate(c, c), Coordinate(c, c + 1)])

    @property
    def head(self) -> Coordinate:
        """Return the head coordinate."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def occupies(self, coord: Coordinate) -> bool:
        """Check whether the snake occupies a given cell."""
        return coord in self.body

    def grow(self, segments: int = 1) -> None:
        """Owe *segments* tail appends, paid one per following tick."""
        self.pending_growth += segments

    def advance(self, direction: Direction, board: Board) -> MoveResult:
        """Move the snake one cell in *direction*.

        A move that leaves the board or lands on a body segment is not
        applied: the body stays where it was and the result reports the
        collision.
        """
        new_head = step(self.head, direction)
        if not board.contains(new_head) or new_head in self.body[1:]:
            return MoveResult(collided=True, grew=False, head=self.head)

        moved = (new_head, *self.body[:-1])
        grew = self.pending_growth > 0
        if grew:
            self.pending_growth -= 1
            moved = (*moved, self.body[-1])
        self.body = moved
        return MoveResult(collided=False, grew=grew, head=new_head)
