"""Tests for the Board module."""

import numpy as np
import pytest

from grid_snake.board import Board, Coordinate


class TestBoardInit:
    def test_dimension(self):
        board = Board(10)
        assert board.dimension == 10
        assert board.size == 100

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 3"):
            Board(2)

    def test_is_immutable(self):
        board = Board(5)
        with pytest.raises(AttributeError):
            board.dimension = 6


class TestBoardContains:
    def test_corners(self):
        board = Board(5)
        assert board.contains(Coordinate(0, 0))
        assert board.contains(Coordinate(4, 4))

    def test_outside(self):
        board = Board(5)
        assert not board.contains(Coordinate(-1, 0))
        assert not board.contains(Coordinate(0, -1))
        assert not board.contains(Coordinate(5, 0))
        assert not board.contains(Coordinate(0, 5))


class TestBoardCells:
    def test_cells_cover_board(self):
        board = Board(4)
        cells = list(board.cells())
        assert len(cells) == 16
        assert len(set(cells)) == 16
        assert all(board.contains(c) for c in cells)

    def test_occupancy_mask(self):
        board = Board(4)
        mask = board.occupancy([Coordinate(1, 2), Coordinate(3, 0), Coordinate(9, 9)])
        assert mask.shape == (4, 4)
        assert mask[2, 1]
        assert mask[0, 3]
        assert np.count_nonzero(mask) == 2
