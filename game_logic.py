# Core Snake game state and rules, independent from GUI/scheduling code.
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import random
from typing import Any

logger = logging.getLogger(__name__)

Cell = tuple[int, int]

GRID_SIZE = 20
TICK_MS = 150
INITIAL_SNAKE: tuple[Cell, ...] = ((10, 10), (9, 10), (8, 10))
INITIAL_FOOD: Cell = (15, 10)
INITIAL_DIRECTION = "right"

# Rejection draws before food placement falls back to the list of free cells.
MAX_FOOD_ATTEMPTS = 64

DIRECTIONS = ("up", "down", "left", "right")
OPPOSITES = {
    "up": "down",
    "down": "up",
    "left": "right",
    "right": "left",
}
PAUSE = "pause"
RESTART = "restart"

# Accepted values for the --log-level flag of the entry points.
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Arrow keys (Tk keysyms and browser names) plus WASD, compared lowercased.
KEY_COMMANDS = {
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "p": PAUSE,
    "r": RESTART,
}


def in_bounds(cell: Cell, grid_size: int = GRID_SIZE) -> bool:
    x, y = cell
    return 0 <= x < grid_size and 0 <= y < grid_size


def next_cell(cell: Cell, direction: str) -> Cell:
    """Translate a cell by one tile in the given direction."""
    x, y = cell
    if direction == "up":
        return x, y - 1
    if direction == "down":
        return x, y + 1
    if direction == "left":
        return x - 1, y
    return x + 1, y


@dataclass(frozen=True)
class GameConfig:
    """Fixed game settings; defaults are the standard board."""
    grid_size: int = GRID_SIZE
    tick_ms: int = TICK_MS
    initial_snake: tuple[Cell, ...] = INITIAL_SNAKE
    initial_food: Cell = INITIAL_FOOD
    initial_direction: str = INITIAL_DIRECTION

    def __post_init__(self) -> None:
        if self.grid_size < 3:
            raise ValueError("Grid size must be at least 3.")
        if self.tick_ms <= 0:
            raise ValueError("Tick interval must be positive.")
        if len(self.initial_snake) < 1:
            raise ValueError("Initial snake needs at least one cell.")
        if len(set(self.initial_snake)) != len(self.initial_snake):
            raise ValueError("Initial snake cells must be distinct.")
        for cell in (*self.initial_snake, self.initial_food):
            if not in_bounds(cell, self.grid_size):
                raise ValueError(f"Cell {cell} is outside the {self.grid_size}x{self.grid_size} grid.")
        if self.initial_food in self.initial_snake:
            raise ValueError("Initial food cannot overlap the snake.")
        if self.initial_direction not in OPPOSITES:
            raise ValueError(f"Unknown direction: {self.initial_direction!r}")


DEFAULT_CONFIG = GameConfig()


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one game; snake is head-first."""
    snake: tuple[Cell, ...]
    food: Cell | None
    direction: str
    score: int = 0
    game_over: bool = False
    paused: bool = False
    grid_size: int = GRID_SIZE

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "snake": [list(cell) for cell in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction,
            "score": self.score,
            "game_over": self.game_over,
            "paused": self.paused,
            "grid_size": self.grid_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        try:
            snake = tuple((int(x), int(y)) for x, y in data["snake"])
            food_raw = data.get("food")
            food = (int(food_raw[0]), int(food_raw[1])) if food_raw is not None else None
            direction = str(data["direction"])
            game_over = data.get("game_over", False)
            paused = data.get("paused", False)
            state = cls(
                snake=snake,
                food=food,
                direction=direction,
                score=int(data.get("score", 0)),
                game_over=game_over,
                paused=paused,
                grid_size=int(data.get("grid_size", GRID_SIZE)),
            )
        except (KeyError, TypeError, ValueError, IndexError) as exc:
            raise ValueError(f"Malformed game state: {exc}") from exc
        if not isinstance(game_over, bool) or not isinstance(paused, bool):
            raise ValueError("Malformed game state: game_over and paused must be booleans")
        if state.grid_size < 3:
            raise ValueError(f"Malformed game state: grid size {state.grid_size} is below 3")
        if state.score < 0:
            raise ValueError(f"Malformed game state: negative score {state.score}")
        if not state.snake:
            raise ValueError("Malformed game state: snake is empty")
        if len(set(state.snake)) != len(state.snake):
            raise ValueError("Malformed game state: snake cells overlap")
        cells = state.snake if state.food is None else (*state.snake, state.food)
        for cell in cells:
            if not in_bounds(cell, state.grid_size):
                raise ValueError(f"Malformed game state: cell {cell} is outside the grid")
        if state.food in state.snake:
            raise ValueError("Malformed game state: food overlaps the snake")
        if state.direction not in OPPOSITES:
            raise ValueError(f"Malformed game state: unknown direction {state.direction!r}")
        return state


def initial_state(config: GameConfig = DEFAULT_CONFIG) -> GameState:
    return GameState(
        snake=tuple(config.initial_snake),
        food=config.initial_food,
        direction=config.initial_direction,
        grid_size=config.grid_size,
    )


def reset_state(config: GameConfig = DEFAULT_CONFIG) -> GameState:
    """Fresh game. Food goes back to its fixed starting cell."""
    logger.info("Game reset")
    return initial_state(config)


def spawn_food(occupied: set[Cell], grid_size: int, rng: random.Random) -> Cell | None:
    """
    Pick a food cell uniformly from [1, grid_size - 1] on both axes,
    avoiding occupied cells. Column and row 0 never hold food.

    Draws are retried up to MAX_FOOD_ATTEMPTS times, then the choice is
    made from the remaining free cells directly. Returns None when no
    candidate cell is free.
    """
    high = grid_size - 1
    for _ in range(MAX_FOOD_ATTEMPTS):
        cell = (rng.randint(1, high), rng.randint(1, high))
        if cell not in occupied:
            return cell

    free = [
        (x, y)
        for y in range(1, high + 1)
        for x in range(1, high + 1)
        if (x, y) not in occupied
    ]
    if not free:
        logger.warning("No free cell left for food")
        return None
    return rng.choice(free)


def request_direction(state: GameState, direction: str) -> GameState:
    """Change heading unless paused, over, unknown, or a 180-degree turn."""
    if state.paused or state.game_over:
        return state
    if direction not in OPPOSITES:
        return state
    # Compared with the heading as last set, not the one the snake last moved in.
    if OPPOSITES[direction] == state.direction or direction == state.direction:
        return state
    return replace(state, direction=direction)


def toggle_pause(state: GameState) -> GameState:
    if state.game_over:
        return state
    return replace(state, paused=not state.paused)


def tick(state: GameState, rng: random.Random) -> GameState:
    """Advance one step. Paused or finished games are returned unchanged."""
    if state.game_over or state.paused:
        return state

    new_head = next_cell(state.head, state.direction)

    if not in_bounds(new_head, state.grid_size):
        logger.debug("Wall collision at %s", new_head)
        return replace(state, game_over=True)

    # Checked against the pre-move body, tail included.
    if new_head in state.snake:
        logger.debug("Self collision at %s", new_head)
        return replace(state, game_over=True)

    ate_food = new_head == state.food
    food = state.food
    score = state.score
    if ate_food:
        score += 1
        food = spawn_food(set(state.snake) | {new_head}, state.grid_size, rng)
        logger.debug("Food eaten at %s, score %d, next food %s", new_head, score, food)

    body = state.snake if ate_food else state.snake[:-1]
    return replace(state, snake=(new_head,) + body, food=food, score=score)


def command_for_key(key: str) -> str | None:
    """Translate a key name (Tk keysym or browser key) into a game command."""
    return KEY_COMMANDS.get(key.lower())


def apply_command(state: GameState, command: str, config: GameConfig = DEFAULT_CONFIG) -> GameState:
    """Dispatch a player command. Restart only takes effect after game over."""
    if command == PAUSE:
        return toggle_pause(state)
    if command == RESTART:
        if not state.game_over:
            return state
        return reset_state(config)
    return request_direction(state, command)


class SnakeGame:
    """Holds the live game state; every change goes through the pure functions above."""
    def __init__(self, config: GameConfig = DEFAULT_CONFIG, rng: random.Random | None = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.state = initial_state(config)

    @property
    def snake(self) -> tuple[Cell, ...]:
        return self.state.snake

    @property
    def food(self) -> Cell | None:
        return self.state.food

    @property
    def direction(self) -> str:
        return self.state.direction

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def paused(self) -> bool:
        return self.state.paused

    def reset(self) -> None:
        self.state = reset_state(self.config)

    def tick(self) -> GameState:
        was_over = self.state.game_over
        self.state = tick(self.state, self.rng)
        if self.state.game_over and not was_over:
            logger.info("Game over: score %d, length %d", self.state.score, len(self.state.snake))
        return self.state

    def request_direction(self, direction: str) -> None:
        self.state = request_direction(self.state, direction)

    def toggle_pause(self) -> None:
        self.state = toggle_pause(self.state)

    def apply_command(self, command: str) -> None:
        self.state = apply_command(self.state, command, self.config)

    def handle_key(self, key: str) -> bool:
        """Apply the command bound to key. Returns False for unbound keys."""
        command = command_for_key(key)
        if command is None:
            return False
        self.apply_command(command)
        return True
