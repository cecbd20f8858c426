"""Command line tools for Grid Snake."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys

from grid_snake.config import GameConfig, configure
from grid_snake.engine import EngineSnapshot
from grid_snake.loop import GameLoop
from grid_snake.scheduler import ManualScheduler
from grid_snake.snake import Direction
from grid_snake.state import RunState

logger = logging.getLogger(__name__)

MOVE_CODES: dict[str, Direction | None] = {
    "U": Direction.UP,
    "D": Direction.DOWN,
    "L": Direction.LEFT,
    "R": Direction.RIGHT,
    ".": None,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake engine tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    replay_p = sub.add_parser(
        "replay", help="Replay a recorded move sequence headlessly.",
    )
    replay_p.add_argument("--dimension", type=int, required=True)
    replay_p.add_argument("--seed", type=int, default=0)
    replay_p.add_argument(
        "--moves", type=str, default="",
        help="Move letters U/D/L/R; '.' waits one tick.",
    )
    replay_p.add_argument("--cell-growth-per-food", type=int, default=None)
    replay_p.add_argument("--score-per-food", type=int, default=None)
    replay_p.add_argument("--initial-speed-ms", type=float, default=None)
    replay_p.add_argument("--min-speed-ms", type=float, default=None)
    replay_p.add_argument("--speed-decay-percent", type=float, default=None)
    replay_p.add_argument("--food-count-per-speed-step", type=int, default=None)

    return parser


def parse_moves(moves: str) -> list[Direction | None]:
    """Decode a move string, ignoring whitespace and unknown letters."""
    decoded: list[Direction | None] = []
    for ch in moves.upper():
        if ch in MOVE_CODES:
            decoded.append(MOVE_CODES[ch])
        elif not ch.isspace():
            logger.warning("Skipping unknown move %r.", ch)
    return decoded


def replay(
    raw_config: dict, moves: list[Direction | None], seed: int = 0,
) -> EngineSnapshot:
    """Play *moves* against a fresh game and return the final snapshot.

    A direction that the loop ignores (reversal or unchanged heading)
    falls back to waiting one tick, so every move costs exactly one step.
    """
    game_loop = GameLoop(configure(raw_config), ManualScheduler(), seed=seed)
    scheduler: ManualScheduler = game_loop.scheduler
    game_loop.start()
    for move in moves:
        if game_loop.engine.run_state is not RunState.RUNNING:
            break
        if move is None or game_loop.set_direction(move) is None:
            scheduler.run_next()
    return game_loop.snapshot


def config_from_args(args: argparse.Namespace) -> dict:
    """Collect the config options given on the command line.

    Flags share their names with :class:`GameConfig` fields; unset flags
    are left out so ``configure`` applies its defaults.
    """
    raw: dict = {}
    for f in dataclasses.fields(GameConfig):
        val = getattr(args, f.name, None)
        if val is not None:
            raw[f.name] = val
    return raw


def _run_replay(args: argparse.Namespace) -> int:
    snapshot = replay(config_from_args(args), parse_moves(args.moves), seed=args.seed)
    print(json.dumps(snapshot.to_dict()))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "replay": _run_replay,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
