"""Board geometry for the snake game."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

MIN_DIMENSION = 3


class Coordinate(NamedTuple):
    """A cell on the board. ``x`` is the column, ``y`` the row."""

    x: int
    y: int


@dataclass(frozen=True)
class Board:
    """Square board of ``dimension`` x ``dimension`` cells.

    The board holds no cell state; occupancy is derived from the snake
    whenever it is needed.
    """

    dimension: int

    def __post_init__(self) -> None:
        if self.dimension < MIN_DIMENSION:
            raise ValueError(
                f"Board dimension must be at least {MIN_DIMENSION}.",
            )

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.dimension * self.dimension

    def contains(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies within the board."""
        return 0 <= coord.x < self.dimension and 0 <= coord.y < self.dimension

    def cells(self) -> Iterator[Coordinate]:
        """Iterate over every coordinate, row by row."""
        for y in range(self.dimension):
            for x in range(self.dimension):
                yield Coordinate(x, y)

    def occupancy(self, coords: Iterable[Coordinate]) -> np.ndarray:
        """Return a boolean mask indexed ``[y, x]`` marking *coords*.

        Coordinates outside the board are ignored.
        """
        mask = np.zeros((self.dimension, self.dimension), dtype=bool)
        for coord in coords:
            if self.contains(coord):
                mask[coord.y, coord.x] = True
        return mask
