"""Run-state machine for a game session."""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)


class RunState(str, enum.Enum):
    """Lifecycle states for a game session."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class Outcome(str, enum.Enum):
    """Why a game reached :attr:`RunState.OVER`."""

    COLLISION = "collision"
    BOARD_FULL = "board_full"


_TRANSITIONS: dict[str, tuple[set[RunState], RunState]] = {
    "start": ({RunState.IDLE, RunState.PAUSED}, RunState.RUNNING),
    "pause": ({RunState.RUNNING}, RunState.PAUSED),
    "resume": ({RunState.PAUSED}, RunState.RUNNING),
    "finish": ({RunState.RUNNING}, RunState.OVER),
}


class GameStateMachine:
    """Tracks Idle/Running/Paused/Over.

    Transitions that do not apply to the current state are ignored and
    reported by returning ``False``.
    """

    def __init__(self) -> None:
        self.state = RunState.IDLE
        self.outcome: Outcome | None = None

    @property
    def running(self) -> bool:
        return self.state is RunState.RUNNING

    def _apply(self, name: str) -> bool:
        sources, target = _TRANSITIONS[name]
        if self.state not in sources:
            logger.debug("Ignoring %s while %s.", name, self.state.value)
            return False
        self.state = target
        return True

    def start(self) -> bool:
        return self._apply("start")

    def pause(self) -> bool:
        return self._apply("pause")

    def resume(self) -> bool:
        return self._apply("resume")

    def finish(self, outcome: Outcome) -> bool:
        """Move a running game to Over, recording *outcome*."""
        if not self._apply("finish"):
            return False
        self.outcome = outcome
        return True

    def toggle(self) -> bool:
        """Flip Running and Paused; start from Idle; no-op once Over."""
        if self.state is RunState.RUNNING:
            return self.pause()
        return self.start()

    def reset(self) -> None:
        """Return to Idle from any state."""
        self.state = RunState.IDLE
        self.outcome = None
