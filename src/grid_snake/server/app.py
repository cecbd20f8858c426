"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from grid_snake import __version__
from grid_snake.server.routes import router
from grid_snake.server.session_manager import DEFAULT_MAX_SESSIONS, SessionManager
from grid_snake.server.websocket import ws_router


def create_app(max_sessions: int = DEFAULT_MAX_SESSIONS) -> FastAPI:
    """Build the API; each app instance owns one session registry.

    The registry exists only while the app is being served: it is created
    on startup and every game, timer and socket it holds is closed on
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        manager = SessionManager(max_sessions=max_sessions)
        app.state.session_manager = manager
        try:
            yield
        finally:
            await manager.cleanup()

    app = FastAPI(title="Grid Snake API", version=__version__, lifespan=lifespan)
    app.include_router(router)
    app.include_router(ws_router)
    return app
