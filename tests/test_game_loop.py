"""
Tests for game_loop.py - timer and key subscription lifecycle.
"""

import random
from types import SimpleNamespace

import pytest

from game_logic import SnakeGame
from game_loop import GameLoop


class FakeRoot:
    """Records after/bind calls the way a Tk root would receive them."""

    def __init__(self):
        self.timers = {}
        self.bindings = {}
        self.cancelled = []
        self._next = 0

    def after(self, ms, func):
        self._next += 1
        after_id = f"after#{self._next}"
        self.timers[after_id] = (ms, func)
        return after_id

    def after_cancel(self, after_id):
        self.cancelled.append(after_id)
        self.timers.pop(after_id, None)

    def bind(self, sequence, func):
        self._next += 1
        bind_id = f"bind#{self._next}"
        self.bindings[sequence] = (bind_id, func)
        return bind_id

    def unbind(self, sequence, funcid=None):
        self.bindings.pop(sequence, None)

    def fire_timer(self):
        after_id, (_, func) = next(iter(self.timers.items()))
        del self.timers[after_id]
        func()

    def press(self, keysym):
        _, func = self.bindings[GameLoop.KEY_SEQUENCE]
        func(SimpleNamespace(keysym=keysym))


@pytest.fixture
def game():
    return SnakeGame(rng=random.Random(0))


def test_start_schedules_tick_and_binds_keys(game):
    root = FakeRoot()
    loop = GameLoop(root, game)
    loop.start()

    assert loop.running is True
    assert len(root.timers) == 1
    ms, _ = next(iter(root.timers.values()))
    assert ms == 150
    assert GameLoop.KEY_SEQUENCE in root.bindings


def test_tick_advances_game_and_reschedules(game):
    root = FakeRoot()
    updates = []
    with GameLoop(root, game, on_update=lambda: updates.append(game.snake[0])):
        root.fire_timer()
        root.fire_timer()

    assert game.snake[0] == (12, 10)
    assert updates == [(11, 10), (12, 10)]


def test_exit_cancels_timer_and_unbinds(game):
    root = FakeRoot()
    with GameLoop(root, game) as loop:
        pending = loop.after_id

    assert root.cancelled == [pending]
    assert root.timers == {}
    assert root.bindings == {}
    assert loop.running is False


def test_exit_cleans_up_when_body_raises(game):
    root = FakeRoot()
    with pytest.raises(RuntimeError):
        with GameLoop(root, game):
            raise RuntimeError("boom")

    assert root.timers == {}
    assert root.bindings == {}


@pytest.mark.parametrize("interval", [0, -150])
def test_rejects_non_positive_interval(game, interval):
    with pytest.raises(ValueError):
        GameLoop(FakeRoot(), game, interval_ms=interval)


def test_stop_is_idempotent(game):
    root = FakeRoot()
    loop = GameLoop(root, game)
    loop.start()
    loop.stop()
    loop.stop()
    assert len(root.cancelled) == 1


def test_stop_during_update_prevents_reschedule(game):
    root = FakeRoot()
    loop = GameLoop(root, game)
    loop.on_update = loop.stop
    loop.start()
    root.fire_timer()
    assert root.timers == {}
    assert loop.running is False


def test_key_press_reaches_game(game):
    root = FakeRoot()
    updates = []
    with GameLoop(root, game, on_update=lambda: updates.append(game.direction)):
        root.press("Up")
        root.press("x")
        root.press("p")

    assert game.direction == "up"
    assert game.paused is True
    assert updates == ["up", "up"]


def test_paused_game_does_not_move_but_timer_keeps_running(game):
    root = FakeRoot()
    with GameLoop(root, game):
        root.press("p")
        root.fire_timer()
        assert game.snake[0] == (10, 10)
        assert len(root.timers) == 1
