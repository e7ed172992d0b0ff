# Fixed-interval tick source and key subscription for a SnakeGame.
from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

try:
    from .game_logic import SnakeGame
except ImportError:
    from game_logic import SnakeGame

logger = logging.getLogger(__name__)


class EventLoop(Protocol):
    """The subset of tkinter.Misc the loop needs."""

    def after(self, ms: int, func: Callable[[], None]) -> str: ...

    def after_cancel(self, id: str) -> None: ...

    def bind(self, sequence: str, func: Callable[[Any], Any]) -> str: ...

    def unbind(self, sequence: str, funcid: str | None = None) -> None: ...


class GameLoop:
    """
    Drives a SnakeGame from a host event loop.

    start() schedules the periodic tick and subscribes to key presses;
    stop() cancels the pending tick and drops the key binding. Use it as a
    context manager so stop() runs on every exit path:

        with GameLoop(root, game, on_update=view.draw):
            root.mainloop()
    """
    KEY_SEQUENCE = "<KeyPress>"

    def __init__(
        self,
        root: EventLoop,
        game: SnakeGame,
        on_update: Callable[[], None] | None = None,
        interval_ms: int | None = None,
    ) -> None:
        self.root = root
        self.game = game
        self.on_update = on_update
        self.interval_ms = interval_ms if interval_ms is not None else game.config.tick_ms
        if self.interval_ms <= 0:
            raise ValueError("Tick interval must be positive.")
        self.after_id: str | None = None  # pending timer id
        self.bind_id: str | None = None
        self.active = False

    @property
    def running(self) -> bool:
        return self.active

    def start(self) -> None:
        if self.running:
            return
        self.active = True
        self.bind_id = self.root.bind(self.KEY_SEQUENCE, self._on_key)
        self._schedule()
        logger.debug("Game loop started (%d ms)", self.interval_ms)

    def stop(self) -> None:
        """Cancel the pending tick and unbind keys. Safe to call repeatedly."""
        self.active = False
        if self.after_id is not None:
            self.root.after_cancel(self.after_id)
            self.after_id = None
        if self.bind_id is not None:
            self.root.unbind(self.KEY_SEQUENCE, self.bind_id)
            self.bind_id = None
            logger.debug("Game loop stopped")

    def __enter__(self) -> GameLoop:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _schedule(self) -> None:
        self.after_id = self.root.after(self.interval_ms, self._on_tick)

    def _on_tick(self) -> None:
        """One timer firing; reschedules itself until stopped."""
        self.after_id = None
        self.game.tick()
        self._notify()
        if self.active:
            self._schedule()

    def _on_key(self, event: Any) -> None:
        if self.game.handle_key(event.keysym):
            self._notify()

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update()
