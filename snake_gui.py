# Tkinter Snake window: draws the engine snapshot and forwards key presses.
from __future__ import annotations

import argparse
import logging
import random
import tkinter as tk

# Support both package imports and running this file directly.
try:
    from .game_logic import DEFAULT_CONFIG, LOG_LEVELS, GameConfig, SnakeGame
    from .game_loop import GameLoop
except ImportError:
    from game_logic import DEFAULT_CONFIG, LOG_LEVELS, GameConfig, SnakeGame
    from game_loop import GameLoop

logger = logging.getLogger(__name__)

# Bounds used when validating the --cell-size flag.
MIN_CELL_SIZE = 12
MAX_CELL_SIZE = 48
DEFAULT_CELL_SIZE = 24


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""
    BG = "#101418"
    BOARD_BG = "#1c2229"
    SIDEBAR_BG = "#0f1720"
    GRID_COLOR = "#293340"
    SNAKE_HEAD = "#45d483"
    SNAKE_BODY = "#1fb86b"
    FOOD_COLOR = "#ff5c74"
    TEXT_PRIMARY = "#e6eef7"
    TEXT_MUTED = "#95a4b8"
    BORDER_COLOR = "#7f8b99"

    def __init__(self, root: tk.Tk, game: SnakeGame, cell_size: int = DEFAULT_CELL_SIZE) -> None:
        self.root = root
        self.game = game
        self.cell_size = cell_size
        self.root.title("Snake")
        self.root.configure(bg=self.BG)
        self.root.resizable(False, False)

        self._build_layout()
        self.draw()

    def _build_layout(self) -> None:
        """Board canvas on the left, score/status sidebar on the right."""
        container = tk.Frame(self.root, bg=self.BG)
        container.pack(padx=16, pady=16)

        side = self.game.config.grid_size * self.cell_size
        self.canvas = tk.Canvas(
            container,
            width=side,
            height=side,
            bg=self.BOARD_BG,
            highlightthickness=0,
            bd=0,
        )
        self.canvas.grid(row=0, column=0, padx=(0, 16))

        sidebar = tk.Frame(container, bg=self.SIDEBAR_BG)
        sidebar.grid(row=0, column=1, sticky="ns")

        self.score_var = tk.StringVar()
        self.state_var = tk.StringVar()
        tk.Label(
            sidebar,
            textvariable=self.score_var,
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            font=("Helvetica", 16, "bold"),
            anchor="w",
        ).pack(fill="x", padx=16, pady=(16, 4))
        tk.Label(
            sidebar,
            textvariable=self.state_var,
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            font=("Helvetica", 11),
            anchor="w",
        ).pack(fill="x", padx=16, pady=4)
        tk.Label(
            sidebar,
            text="Move: Arrow keys / WASD\nP: pause\nR: restart after game over",
            fg=self.TEXT_MUTED,
            bg=self.SIDEBAR_BG,
            justify="left",
            font=("Helvetica", 10),
        ).pack(anchor="w", padx=16, pady=(12, 16))

    def _cell_rect(self, x: int, y: int, inset: int) -> tuple[int, int, int, int]:
        cell = self.cell_size
        return x * cell + inset, y * cell + inset, (x + 1) * cell - inset, (y + 1) * cell - inset

    def draw(self) -> None:
        """Render board, food, snake, status labels, and game-over overlay."""
        state = self.game.state
        self.canvas.delete("all")
        size = state.grid_size
        cell = self.cell_size
        side = size * cell

        for i in range(size + 1):
            pos = i * cell
            self.canvas.create_line(0, pos, side, pos, fill=self.GRID_COLOR)
            self.canvas.create_line(pos, 0, pos, side, fill=self.GRID_COLOR)
        self.canvas.create_rectangle(1, 1, side - 1, side - 1, outline=self.BORDER_COLOR, width=2)

        if state.food is not None:
            self.canvas.create_oval(*self._cell_rect(*state.food, inset=4), fill=self.FOOD_COLOR, outline="")

        for idx, (x, y) in enumerate(state.snake):
            color = self.SNAKE_HEAD if idx == 0 else self.SNAKE_BODY
            self.canvas.create_rectangle(*self._cell_rect(x, y, inset=2), fill=color, outline="")

        self.score_var.set(f"Score: {state.score}")
        if state.game_over:
            self.state_var.set("State: Game Over")
        elif state.paused:
            self.state_var.set("State: Paused")
        else:
            self.state_var.set("State: Running")

        if state.game_over:
            self.canvas.create_rectangle(0, 0, side, side, fill="#000000", stipple="gray50", outline="")
            self.canvas.create_text(
                side // 2,
                side // 2 - 12,
                text="Game Over",
                fill=self.TEXT_PRIMARY,
                font=("Helvetica", 22, "bold"),
            )
            self.canvas.create_text(
                side // 2,
                side // 2 + 20,
                text="Press R to restart",
                fill=self.TEXT_MUTED,
                font=("Helvetica", 12),
            )


def run_player_gui(
    config: GameConfig = DEFAULT_CONFIG,
    cell_size: int = DEFAULT_CELL_SIZE,
    seed: int | None = None,
) -> None:
    """Launch the Snake window and block until it is closed."""
    root = tk.Tk()
    game = SnakeGame(config, rng=random.Random(seed))
    app = SnakeApp(root, game, cell_size=cell_size)
    loop = GameLoop(root, game, on_update=app.draw)

    def close() -> None:
        # Timer and key binding must go before the widgets do.
        loop.stop()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", close)
    with loop:
        root.mainloop()


def _cell_size_arg(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError("cell size must be an integer.")
    if not (MIN_CELL_SIZE <= value <= MAX_CELL_SIZE):
        raise argparse.ArgumentTypeError(f"cell size must be between {MIN_CELL_SIZE} and {MAX_CELL_SIZE}.")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Snake in a Tk window.")
    parser.add_argument("--cell-size", type=_cell_size_arg, default=DEFAULT_CELL_SIZE, help="Pixels per grid cell.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for food placement.")
    parser.add_argument("--log-level", type=str.upper, default="WARNING", choices=LOG_LEVELS)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting Snake (seed=%s)", args.seed)
    run_player_gui(cell_size=args.cell_size, seed=args.seed)


if __name__ == "__main__":
    main()
