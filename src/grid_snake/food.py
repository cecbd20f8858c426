"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection

import numpy as np

from grid_snake.board import Board, Coordinate

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food on cells not covered by the snake.

    Placement draws uniformly random cells from a seeded NumPy generator
    and rejects occupied ones, for at most ``max_attempts`` draws. After
    that it picks uniformly among the free cells directly, and reports a
    full board by returning ``None``.
    """

    def __init__(
        self,
        board: Board,
        rng: np.random.Generator | None = None,
        max_attempts: int | None = None,
    ) -> None:
        if max_attempts is not None and max_attempts < 0:
            raise ValueError("max_attempts must be >= 0.")
        self.board = board
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = (
            max_attempts if max_attempts is not None else 4 * board.size
        )

    def place(self, occupied: Collection[Coordinate]) -> Coordinate | None:
        """Return a free cell, or ``None`` when *occupied* fills the board."""
        taken = set(occupied)
        dim = self.board.dimension
        for _ in range(self.max_attempts):
            x, y = self.rng.integers(0, dim, size=2)
            candidate = Coordinate(int(x), int(y))
            if candidate not in taken:
                return candidate

        free_ys, free_xs = np.nonzero(~self.board.occupancy(taken))
        if free_xs.size == 0:
            logger.warning("No free cells left for food on %dx%d board.", dim, dim)
            return None

        logger.debug(
            "Rejection sampling exhausted after %d draws; choosing among %d free cells.",
            self.max_attempts,
            free_xs.size,
        )
        idx = int(self.rng.integers(free_xs.size))
        return Coordinate(int(free_xs[idx]), int(free_ys[idx]))
