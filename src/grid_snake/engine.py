"""Step-based game engine composing board, snake, food, and speed logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from grid_snake.board import Board, Coordinate
from grid_snake.config import GameConfig
from grid_snake.food import FoodSpawner
from grid_snake.snake import Direction, Snake, is_allowed
from grid_snake.speed import ScoreTracker, SpeedController
from grid_snake.state import GameStateMachine, Outcome, RunState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the engine handed to renderers."""

    dimension: int
    snake: tuple[Coordinate, ...]
    food: Coordinate | None
    direction: Direction
    score: int
    food_eaten: int
    speed_ms: float
    speed_level: int
    run_state: RunState
    outcome: Outcome | None
    tick: int

    @property
    def head(self) -> Coordinate:
        return self.snake[0]

    def to_dict(self) -> dict:
        """Return a JSON-serializable dictionary."""
        return {
            "dimension": self.dimension,
            "snake": [[seg.x, seg.y] for seg in self.snake],
            "food": None if self.food is None else [self.food.x, self.food.y],
            "direction": self.direction.label,
            "score": self.score,
            "food_eaten": self.food_eaten,
            "speed_ms": self.speed_ms,
            "speed_level": self.speed_level,
            "run_state": self.run_state.value,
            "outcome": None if self.outcome is None else self.outcome.value,
            "tick": self.tick,
        }


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns all mutable session state. Each call to :meth:`step`
    advances the game by one tick when it is running and returns the
    resulting snapshot. Scheduling lives in :class:`grid_snake.loop.GameLoop`.
    """

    def __init__(self, config: GameConfig, seed: int | None = None) -> None:
        self.rng = np.random.default_rng(seed)
        self.machine = GameStateMachine()
        self.reset(config)

    def reset(self, config: GameConfig | None = None) -> EngineSnapshot:
        """Discard the current session and seed a fresh one in Idle."""
        if config is not None:
            self.config = config
        self.board = Board(self.config.dimension)
        self.snake = Snake.centered(self.board)
        self.direction = Direction.UP
        self.food_spawner = FoodSpawner(self.board, rng=self.rng)
        self.food = self.food_spawner.place(self.snake.body)
        self.speed = SpeedController(self.config)
        self.scorer = ScoreTracker(self.config.score_per_food)
        self.tick = 0
        self.machine.reset()
        logger.info("New %dx%d game.", self.board.dimension, self.board.dimension)
        return self.snapshot()

    @property
    def run_state(self) -> RunState:
        return self.machine.state

    def request_direction(self, direction: Direction) -> bool:
        """Adopt *direction* if it is legal and differs from the current one.

        Returns True when the heading actually changed.
        """
        if not is_allowed(direction, self.direction) or direction is self.direction:
            return False
        self.direction = direction
        return True

    def step(self) -> EngineSnapshot:
        """Advance the game by one tick."""
        if not self.machine.running:
            return self.snapshot()

        result = self.snake.advance(self.direction, self.board)
        self.tick += 1
        if result.collided:
            self.machine.finish(Outcome.COLLISION)
            logger.info(
                "Snake crashed at tick %d with score %d.", self.tick, self.scorer.score,
            )
            return self.snapshot()

        if result.head == self.food:
            self._eat()
        return self.snapshot()

    def _eat(self) -> None:
        self.snake.grow(self.config.cell_growth_per_food)
        self.scorer.on_food_eaten()
        self.speed.on_food_eaten()
        self.food = self.food_spawner.place(self.snake.body)
        if self.food is None:
            self.machine.finish(Outcome.BOARD_FULL)
            logger.info(
                "Board full at tick %d with score %d.", self.tick, self.scorer.score,
            )

    def snapshot(self) -> EngineSnapshot:
        """Return the current state as an immutable value."""
        return EngineSnapshot(
            dimension=self.board.dimension,
            snake=self.snake.body,
            food=self.food,
            direction=self.direction,
            score=self.scorer.score,
            food_eaten=self.scorer.food_eaten,
            speed_ms=self.speed.speed_ms,
            speed_level=self.speed.speed_level,
            run_state=self.machine.state,
            outcome=self.machine.outcome,
            tick=self.tick,
        )
