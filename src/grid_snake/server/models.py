"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class CreateGameRequest(BaseModel):
    """Request body for POST /games.

    Options are loosely typed on purpose: out-of-range values are clamped
    by :func:`grid_snake.config.configure`, not rejected here.
    """

    model_config = ConfigDict(extra="ignore")

    dimension: int
    cell_growth_per_food: Any = None
    score_per_food: Any = None
    initial_speed_ms: Any = None
    min_speed_ms: Any = None
    speed_decay_percent: Any = None
    food_count_per_speed_step: Any = None
    save_game_key: Any = None
    seed: int | None = None

    def raw_config(self) -> dict[str, Any]:
        """Options to hand to ``configure``, without unset fields."""
        return self.model_dump(exclude={"seed"}, exclude_none=True)


class GameSummary(BaseModel):
    """Compact session info for list endpoints."""

    game_id: str
    run_state: str
    score: int
    dimension: int
    config: dict[str, Any]
