"""REST API route handlers for game session management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.server.models import CreateGameRequest, GameSummary
from grid_snake.server.session_manager import GameSession, SessionManager

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_session(request: Request, game_id: str) -> GameSession:
    try:
        return _get_manager(request).require_session(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found.") from exc


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a new idle game session."""
    try:
        session = await _get_manager(request).create_session(
            body.raw_config(), seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except RuntimeError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List all sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get session metadata and the current snapshot."""
    session = _get_session(request, game_id)
    result = session.summary().model_dump()
    result["state"] = session.loop.snapshot.to_dict()
    return result


@router.post("/{game_id}/new")
async def new_game(game_id: str, request: Request) -> dict:
    """Throw away the current game and start over with the same config."""
    session = _get_session(request, game_id)
    return session.loop.new_game().to_dict()
