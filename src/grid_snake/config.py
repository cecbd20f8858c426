"""Game configuration and its validation."""

from __future__ import annotations

import logging
import numbers
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass
from typing import Any

from grid_snake.board import MIN_DIMENSION

logger = logging.getLogger(__name__)

MAX_DIMENSION = 200


@dataclass(frozen=True)
class GameConfig:
    """Validated, immutable settings for one game session.

    ``save_game_key`` is accepted for compatibility but nothing reads it.
    """

    dimension: int
    cell_growth_per_food: int = 1
    score_per_food: int = 1
    initial_speed_ms: float = 250
    min_speed_ms: float = 50
    speed_decay_percent: float = 1
    food_count_per_speed_step: int = 10
    save_game_key: str | None = None

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Integral):
        return True
    return isinstance(value, float) and value.is_integer()


def _pick(
    raw: Mapping[str, Any],
    key: str,
    default: Any,
    valid: Callable[[Any], bool],
) -> Any:
    value = raw.get(key)
    if value is None:
        return default
    if valid(value):
        return value
    logger.debug("Config %s=%r out of range; using %r.", key, value, default)
    return default


def configure(raw: Mapping[str, Any]) -> GameConfig:
    """Build a :class:`GameConfig` from loosely typed options.

    Optional values that are missing, mistyped, or out of range fall back
    to their defaults. ``dimension`` has no default; it is clamped into
    ``[MIN_DIMENSION, MAX_DIMENSION]`` and must be present.
    """
    dimension = raw.get("dimension")
    if not _is_int(dimension):
        raise ValueError("dimension is required and must be an integer.")
    dimension = min(max(int(dimension), MIN_DIMENSION), MAX_DIMENSION)

    initial_speed = _pick(
        raw, "initial_speed_ms", 250, lambda v: _is_number(v) and 100 < v < 1000,
    )
    min_speed = _pick(
        raw, "min_speed_ms", 50, lambda v: _is_number(v) and 0 < v < initial_speed,
    )
    save_key = raw.get("save_game_key")

    return GameConfig(
        dimension=dimension,
        cell_growth_per_food=int(
            _pick(raw, "cell_growth_per_food", 1, lambda v: _is_int(v) and v >= 1),
        ),
        score_per_food=int(
            _pick(raw, "score_per_food", 1, lambda v: _is_int(v) and v >= 1),
        ),
        initial_speed_ms=initial_speed,
        min_speed_ms=min_speed,
        speed_decay_percent=_pick(
            raw, "speed_decay_percent", 1, lambda v: _is_number(v) and 0 <= v <= 10,
        ),
        food_count_per_speed_step=int(
            _pick(raw, "food_count_per_speed_step", 10, lambda v: _is_int(v) and v >= 1),
        ),
        save_game_key=save_key if isinstance(save_key, str) else None,
    )
