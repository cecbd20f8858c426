"""Tests for the GameLoop tick driver."""

import pytest

from grid_snake.board import Coordinate
from grid_snake.config import configure
from grid_snake.loop import GameLoop
from grid_snake.scheduler import ManualScheduler
from grid_snake.snake import Direction, Snake
from grid_snake.state import RunState


class RecordingScheduler:
    """Keeps every armed callback so stale ones can be fired by hand."""

    def __init__(self):
        self.callbacks = []
        self.cancels = 0

    def arm(self, delay_ms, callback):
        self.callbacks.append((delay_ms, callback))

    def cancel(self):
        self.cancels += 1


@pytest.fixture()
def game():
    loop = GameLoop(configure({"dimension": 10}), ManualScheduler(), seed=0)
    loop.engine.food = Coordinate(0, 0)
    return loop


class TestStart:
    def test_start_advances_and_arms(self, game):
        snap = game.start()
        assert snap.run_state is RunState.RUNNING
        assert snap.tick == 1
        assert game.armed
        assert game.scheduler.next_due_ms == 250

    def test_ticks_follow_schedule(self, game):
        game.start()
        assert game.scheduler.advance(249) == 0
        assert game.scheduler.advance(1) == 1
        assert game.snapshot.tick == 2
        assert game.scheduler.advance(500) == 2
        assert game.snapshot.tick == 4

    def test_tick_noop_when_idle(self, game):
        snap = game.tick()
        assert snap.tick == 0
        assert not game.scheduler.pending


class TestDirection:
    def test_turn_advances_immediately(self, game):
        game.start()
        game.scheduler.advance(100)
        snap = game.set_direction(Direction.LEFT)
        assert snap is not None
        assert snap.tick == 2
        assert snap.head == (4, 3)
        # The old timer at 250 ms is gone; the next tick is a full interval away.
        assert game.scheduler.next_due_ms == 350
        assert game.scheduler.advance(249) == 0

    def test_reversal_ignored(self, game):
        game.start()
        assert game.set_direction(Direction.DOWN) is None
        assert game.snapshot.tick == 1

    def test_same_direction_ignored(self, game):
        game.start()
        assert game.set_direction(Direction.UP) is None

    def test_ignored_unless_running(self, game):
        assert game.set_direction(Direction.LEFT) is None
        game.start()
        game.pause()
        assert game.set_direction(Direction.LEFT) is None
        assert game.engine.direction is Direction.UP


class TestPause:
    def test_pause_cancels_timer(self, game):
        game.start()
        snap = game.toggle_pause()
        assert snap.run_state is RunState.PAUSED
        assert not game.armed
        assert game.scheduler.advance(10_000) == 0
        assert game.snapshot.tick == 1

    def test_resume_advances(self, game):
        game.start()
        game.toggle_pause()
        snap = game.toggle_pause()
        assert snap.run_state is RunState.RUNNING
        assert snap.tick == 2
        assert game.armed

    def test_toggle_starts_from_idle(self, game):
        assert game.toggle_pause().run_state is RunState.RUNNING

    def test_pause_only_pauses_running(self, game):
        assert game.pause().run_state is RunState.IDLE
        assert not game.scheduler.pending
        game.start()
        game.pause()
        snap = game.pause()
        assert snap.run_state is RunState.PAUSED
        assert snap.tick == 1
        assert not game.armed

    def test_resume_only_from_paused(self, game):
        snap = game.resume()
        assert snap.run_state is RunState.IDLE
        assert snap.tick == 0
        game.start()
        assert game.resume().tick == 1
        game.pause()
        snap = game.resume()
        assert snap.run_state is RunState.RUNNING
        assert snap.tick == 2
        assert game.armed


class TestGameOver:
    def test_collision_stops_loop(self, game):
        game.engine.snake = Snake([Coordinate(5, 1), Coordinate(5, 2), Coordinate(5, 3)])
        game.start()
        assert game.snapshot.tick == 1
        assert game.scheduler.run_next()
        snap = game.snapshot
        assert snap.run_state is RunState.OVER
        assert snap.head == (5, 0)
        assert not game.armed
        assert not game.scheduler.pending

    def test_toggle_noop_when_over(self, game):
        game.engine.snake = Snake([Coordinate(5, 0), Coordinate(5, 1), Coordinate(5, 2)])
        game.start()
        assert game.snapshot.run_state is RunState.OVER
        assert game.toggle_pause().run_state is RunState.OVER
        assert not game.scheduler.pending

    def test_new_game_resets(self, game):
        game.engine.snake = Snake([Coordinate(5, 0), Coordinate(5, 1), Coordinate(5, 2)])
        game.start()
        snap = game.new_game()
        assert snap.run_state is RunState.IDLE
        assert snap.tick == 0
        assert snap.snake == ((5, 4), (5, 5), (5, 6))
        assert game.start().run_state is RunState.RUNNING


class TestStaleTicks:
    def test_stale_callback_is_noop(self):
        scheduler = RecordingScheduler()
        game = GameLoop(configure({"dimension": 10}), scheduler, seed=0)
        game.engine.food = Coordinate(0, 0)
        game.start()
        _, stale = scheduler.callbacks[-1]
        game.set_direction(Direction.LEFT)
        tick = game.snapshot.tick
        stale()
        assert game.snapshot.tick == tick
        _, current = scheduler.callbacks[-1]
        current()
        assert game.snapshot.tick == tick + 1

    def test_fired_after_pause_is_noop(self):
        scheduler = RecordingScheduler()
        game = GameLoop(configure({"dimension": 10}), scheduler, seed=0)
        game.engine.food = Coordinate(0, 0)
        game.start()
        _, pending = scheduler.callbacks[-1]
        game.pause()
        pending()
        assert game.snapshot.tick == 1


class TestSpeedReschedule:
    def test_interval_shrinks_after_milestone(self):
        game = GameLoop(
            configure({
                "dimension": 10, "food_count_per_speed_step": 1,
                "speed_decay_percent": 10,
            }),
            ManualScheduler(),
            seed=0,
        )
        game.engine.food = Coordinate(5, 3)
        snap = game.start()
        assert snap.score == 1
        assert snap.speed_ms == 125
        assert game.scheduler.next_due_ms == 125


class TestListeners:
    def test_listener_sees_every_emit(self, game):
        seen = []
        game.on_snapshot(seen.append)
        game.start()
        game.scheduler.run_next()
        game.set_direction(Direction.RIGHT)
        game.pause()
        assert [s.tick for s in seen] == [1, 2, 3, 3]
        assert seen[-1].run_state is RunState.PAUSED

    def test_unsubscribe(self, game):
        seen = []
        unsubscribe = game.on_snapshot(seen.append)
        unsubscribe()
        game.start()
        assert seen == []

    def test_failing_listener_does_not_break_loop(self, game):
        def boom(_):
            raise RuntimeError("render failed")

        seen = []
        game.on_snapshot(boom)
        game.on_snapshot(seen.append)
        game.start()
        assert game.armed
        assert len(seen) == 1
