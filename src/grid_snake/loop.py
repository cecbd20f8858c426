"""Self-rescheduling tick loop and the host-facing command API."""

from __future__ import annotations

import logging
from collections.abc import Callable

from grid_snake.config import GameConfig
from grid_snake.engine import EngineSnapshot, GameEngine
from grid_snake.scheduler import Scheduler
from grid_snake.snake import Direction
from grid_snake.state import RunState

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[EngineSnapshot], None]


class GameLoop:
    """Drives a :class:`GameEngine` through a :class:`Scheduler`.

    Every command runs synchronously on the caller's thread of control,
    and so does every timer callback; the two never interleave. A timer
    callback carries the generation it was armed with, and a callback
    whose generation is no longer current does nothing.
    """

    def __init__(
        self,
        config: GameConfig,
        scheduler: Scheduler,
        seed: int | None = None,
    ) -> None:
        self.engine = GameEngine(config, seed=seed)
        self.scheduler = scheduler
        self.armed = False
        self._generation = 0
        self._listeners: list[SnapshotListener] = []

    @property
    def config(self) -> GameConfig:
        return self.engine.config

    @property
    def snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    def on_snapshot(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- commands ---

    def new_game(self, config: GameConfig | None = None) -> EngineSnapshot:
        """Stop any running game and seed a fresh one in Idle."""
        self._disarm()
        snapshot = self.engine.reset(config)
        self._emit(snapshot)
        return snapshot

    def start(self) -> EngineSnapshot:
        """Start from Idle or resume from Paused, advancing immediately."""
        if not self.engine.machine.start():
            return self.snapshot
        return self.tick()

    def resume(self) -> EngineSnapshot:
        """Continue a paused game; any other state is left alone."""
        if not self.engine.machine.resume():
            return self.snapshot
        return self.tick()

    def pause(self) -> EngineSnapshot:
        """Pause a running game; any other state is left alone."""
        if self.engine.machine.pause():
            self._disarm()
            return self._emit(self.snapshot)
        return self.snapshot

    def toggle_pause(self) -> EngineSnapshot:
        """Flip between Running and Paused. Does nothing once the game is over."""
        state = self.engine.run_state
        if state is RunState.RUNNING:
            return self.pause()
        if state is RunState.PAUSED:
            return self.resume()
        return self.start()

    def stop(self) -> None:
        """Cancel the pending tick without changing the run state."""
        self._disarm()

    def set_direction(self, direction: Direction) -> EngineSnapshot | None:
        """Turn the snake and advance at once.

        Returns ``None`` when the request is ignored: the game is not
        running, the turn is a reversal, or the heading is unchanged.
        """
        if self.engine.run_state is not RunState.RUNNING:
            return None
        if not self.engine.request_direction(direction):
            return None
        self._disarm()
        return self.tick()

    # --- ticking ---

    def tick(self) -> EngineSnapshot:
        """Advance one step, notify listeners, and arm the next tick."""
        if self.engine.run_state is not RunState.RUNNING:
            return self.snapshot
        snapshot = self.engine.step()
        if snapshot.run_state is RunState.RUNNING:
            self._arm(snapshot.speed_ms)
        else:
            self._disarm()
        self._emit(snapshot)
        return snapshot

    def _arm(self, delay_ms: float) -> None:
        self._disarm()
        generation = self._generation

        def fire() -> None:
            if generation != self._generation or not self.armed:
                logger.debug("Dropping stale tick from generation %d.", generation)
                return
            self.armed = False
            self.tick()

        self.armed = True
        self.scheduler.arm(delay_ms, fire)

    def _disarm(self) -> None:
        self._generation += 1
        self.armed = False
        self.scheduler.cancel()

    def _emit(self, snapshot: EngineSnapshot) -> EngineSnapshot:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener failed.")
        return snapshot
