"""Grid Snake: core game engine."""

__version__ = "0.1.0"

from grid_snake.board import Board, Coordinate
from grid_snake.config import GameConfig, configure
from grid_snake.engine import EngineSnapshot, GameEngine
from grid_snake.food import FoodSpawner
from grid_snake.keys import Command, translate_key
from grid_snake.loop import GameLoop
from grid_snake.scheduler import AsyncioScheduler, ManualScheduler
from grid_snake.snake import Direction, Snake, is_allowed
from grid_snake.speed import ScoreTracker, SpeedController
from grid_snake.state import GameStateMachine, Outcome, RunState

__all__ = [
    "AsyncioScheduler",
    "Board",
    "Command",
    "Coordinate",
    "Direction",
    "EngineSnapshot",
    "FoodSpawner",
    "GameConfig",
    "GameEngine",
    "GameLoop",
    "GameStateMachine",
    "ManualScheduler",
    "Outcome",
    "RunState",
    "ScoreTracker",
    "Snake",
    "SpeedController",
    "configure",
    "is_allowed",
    "translate_key",
]
