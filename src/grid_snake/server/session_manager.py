"""In-memory session registry and snapshot broadcasting."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import configure
from grid_snake.engine import EngineSnapshot
from grid_snake.loop import GameLoop
from grid_snake.scheduler import AsyncioScheduler
from grid_snake.server.models import GameSummary
from grid_snake.state import RunState

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 100


def encode_snapshot(snapshot: EngineSnapshot) -> str:
    """Compact JSON form sent over the wire."""
    return json.dumps(snapshot.to_dict(), separators=(",", ":"))


@dataclass
class GameSession:
    """A game loop plus the sockets watching it."""

    game_id: str
    loop: GameLoop
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    outbox: asyncio.Queue = field(default_factory=asyncio.Queue)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def finished(self) -> bool:
        return self.loop.engine.run_state is RunState.OVER

    def summary(self) -> GameSummary:
        snapshot = self.loop.snapshot
        return GameSummary(
            game_id=self.game_id,
            run_state=snapshot.run_state.value,
            score=snapshot.score,
            dimension=snapshot.dimension,
            config=self.loop.config.to_dict(),
        )


class SessionManager:
    """Central registry managing all game sessions.

    Must be used from inside a running event loop: each session's timer
    and broadcaster live on it.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1.")
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    @property
    def max_sessions(self) -> int:
        return self._max_sessions

    async def create_session(
        self, raw_config: dict[str, Any], seed: int | None = None,
    ) -> GameSession:
        """Validate *raw_config* and register a new idle session.

        Raises ``RuntimeError`` when every slot holds an unfinished game.
        """
        config = configure(raw_config)
        await self._prune_finished_sessions()

        game_loop = GameLoop(config, AsyncioScheduler(), seed=seed)
        game_id = uuid.uuid4().hex[:12]
        session = GameSession(game_id=game_id, loop=game_loop)
        game_loop.on_snapshot(session.outbox.put_nowait)
        session._task = asyncio.create_task(self._pump(session))
        self._sessions[game_id] = session
        logger.info("Session %s created (%dx%d).", game_id, config.dimension, config.dimension)
        return session

    def get_session(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def require_session(self, game_id: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_sessions(self) -> list[GameSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def _pump(self, session: GameSession) -> None:
        """Forward emitted snapshots to sockets in the order they were produced."""
        try:
            while True:
                snapshot = await session.outbox.get()
                await self._broadcast(session, encode_snapshot(snapshot))
        except asyncio.CancelledError:
            logger.info("Broadcaster cancelled for session %s.", session.game_id)
            raise

    async def _broadcast(self, session: GameSession, payload: str) -> None:
        dead: list[WebSocket] = []
        # Iterate over a copy so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def _prune_finished_sessions(self) -> None:
        """Evict the oldest finished sessions so a new one fits under the cap.

        Live sessions are never evicted; when they fill every slot the new
        session is refused.
        """
        overflow = len(self._sessions) + 1 - self._max_sessions
        if overflow <= 0:
            return
        finished = sorted(
            (s for s in self._sessions.values() if s.finished),
            key=lambda s: s.created_at,
        )
        if len(finished) < overflow:
            raise RuntimeError(
                f"Session limit of {self._max_sessions} live games reached.",
            )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.game_id, None)
            await self._close(stale)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow, self._max_sessions,
        )

    async def _close(self, session: GameSession) -> None:
        """Stop the timer, close every socket, then stop the broadcaster."""
        session.loop.stop()
        sockets = list(session.sockets)
        session.sockets.clear()
        for ws in sockets:
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game closed.")
            except Exception:
                logger.warning("Failed closing socket in game %s.", session.game_id)
        if session._task and not session._task.done():
            session._task.cancel()

    async def cleanup(self) -> None:
        """Stop all timers, sockets, and broadcasters."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await self._close(session)
        tasks = [s._task for s in sessions if s._task and not s._task.done()]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
