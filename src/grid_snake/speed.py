"""Score and tick-interval progression."""

from __future__ import annotations

import logging

from grid_snake.config import GameConfig

logger = logging.getLogger(__name__)


class SpeedController:
    """Shortens the tick interval every ``food_count_per_speed_step`` foods.

    Each step removes ``speed_decay_percent / 20`` of the current interval,
    never going below ``min_speed_ms``.
    """

    def __init__(self, config: GameConfig) -> None:
        self.config = config
        self.speed_ms: float = float(config.initial_speed_ms)
        self.food_eaten = 0

    @property
    def speed_level(self) -> int:
        """One-based speed step reached so far."""
        return self.food_eaten // self.config.food_count_per_speed_step + 1

    def on_food_eaten(self) -> float:
        """Record one food and return the (possibly reduced) interval."""
        self.food_eaten += 1
        if self.food_eaten % self.config.food_count_per_speed_step == 0:
            decay = self.config.speed_decay_percent / 20 * self.speed_ms
            self.speed_ms = max(self.speed_ms - decay, float(self.config.min_speed_ms))
            logger.debug(
                "Speed step %d reached; interval now %.1f ms.",
                self.speed_level, self.speed_ms,
            )
        return self.speed_ms


class ScoreTracker:
    """Score is the food count times ``score_per_food``."""

    def __init__(self, score_per_food: int) -> None:
        self.score_per_food = score_per_food
        self.food_eaten = 0

    @property
    def score(self) -> int:
        return self.food_eaten * self.score_per_food

    def on_food_eaten(self) -> int:
        self.food_eaten += 1
        return self.score
