"""WebSocket handler carrying commands in and snapshots out."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.keys import Command, translate_key
from grid_snake.loop import GameLoop
from grid_snake.server.session_manager import SessionManager, encode_snapshot
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def apply_message(game_loop: GameLoop, msg: Any) -> None:
    """Dispatch one decoded client message; anything unrecognised is ignored."""
    if not isinstance(msg, dict):
        return

    action: Direction | Command | None = None
    key = msg.get("key")
    direction_str = msg.get("direction")
    command = msg.get("command")

    if isinstance(key, int) and not isinstance(key, bool):
        action = translate_key(key)
    elif isinstance(direction_str, str):
        action = Direction.parse(direction_str)
    elif command == "start":
        game_loop.start()
    elif command == "pause":
        game_loop.pause()
    elif command == "resume":
        game_loop.resume()
    elif command == "new_game":
        game_loop.new_game()

    if isinstance(action, Direction):
        game_loop.set_direction(action)
    elif action is Command.TOGGLE_PAUSE:
        game_loop.toggle_pause()


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Send commands, receive a snapshot after every tick or command."""
    session = _get_manager(websocket).get_session(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    # Initial snapshot so the client can draw before anything happens.
    await websocket.send_text(encode_snapshot(session.loop.snapshot))
    session.sockets.append(websocket)
    logger.info("Client connected to game %s.", game_id)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            apply_message(session.loop, msg)
    except WebSocketDisconnect:
        logger.info("Client disconnected from game %s.", game_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
