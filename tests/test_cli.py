"""Tests for the command line tools."""

import json

from grid_snake.cli import _build_parser, config_from_args, main, parse_moves, replay
from grid_snake.config import configure
from grid_snake.snake import Direction
from grid_snake.state import RunState


class TestParser:
    def test_replay_args(self):
        args = _build_parser().parse_args(
            ["replay", "--dimension", "12", "--seed", "3", "--moves", "LLU"],
        )
        assert args.command == "replay"
        assert args.dimension == 12
        assert args.seed == 3
        assert args.moves == "LLU"

    def test_no_command(self):
        assert main([]) == 1


class TestParseMoves:
    def test_letters_and_waits(self):
        assert parse_moves("lR. u") == [
            Direction.LEFT, Direction.RIGHT, None, Direction.UP,
        ]

    def test_unknown_skipped(self):
        assert parse_moves("UXD") == [Direction.UP, Direction.DOWN]


class TestConfigFromArgs:
    def test_only_given_flags_collected(self):
        args = _build_parser().parse_args(
            ["replay", "--dimension", "9", "--score-per-food", "5",
             "--min-speed-ms", "80"],
        )
        assert config_from_args(args) == {
            "dimension": 9,
            "score_per_food": 5,
            "min_speed_ms": 80.0,
        }

    def test_every_option_reaches_the_game(self):
        args = _build_parser().parse_args(
            ["replay", "--dimension", "10", "--cell-growth-per-food", "3",
             "--initial-speed-ms", "400", "--speed-decay-percent", "0.5",
             "--food-count-per-speed-step", "2"],
        )
        config = configure(config_from_args(args))
        assert config.cell_growth_per_food == 3
        assert config.initial_speed_ms == 400
        assert config.speed_decay_percent == 0.5
        assert config.food_count_per_speed_step == 2


class TestReplay:
    def test_deterministic(self):
        moves = parse_moves("LLUURRRDDLU....RRUULL")
        a = replay({"dimension": 8}, moves, seed=11)
        b = replay({"dimension": 8}, moves, seed=11)
        assert a == b
        assert a.score == b.score
        assert len(a.snake) == len(b.snake)

    def test_runs_into_wall(self):
        snap = replay({"dimension": 10}, parse_moves("." * 20), seed=0)
        assert snap.run_state is RunState.OVER
        assert snap.head.y == 0

    def test_main_prints_snapshot(self, capsys):
        assert main(["replay", "--dimension", "10", "--moves", "L.."]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["dimension"] == 10
        assert data["direction"] == "left"
        assert data["tick"] == 4
