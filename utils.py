# Board helpers: numpy encoding, text rendering, and a greedy autopilot.
from __future__ import annotations

import numpy as np

try:
    from .game_logic import DIRECTIONS, OPPOSITES, Cell, GameState, in_bounds, next_cell
except ImportError:
    from game_logic import DIRECTIONS, OPPOSITES, Cell, GameState, in_bounds, next_cell


EMPTY = 0.0
FOOD = 0.5
BODY = -0.5
HEAD = 1.0

GLYPHS = {EMPTY: ".", FOOD: "*", BODY: "o", HEAD: "@"}


def encode_board(state: GameState) -> np.ndarray:
    """
    Board as a (grid_size, grid_size) float32 array indexed [y, x]:
    - 0.0: empty
    - 0.5: food
    - -0.5: snake body
    - 1.0: snake head
    """
    board = np.full((state.grid_size, state.grid_size), EMPTY, dtype=np.float32)

    if state.food is not None:
        fx, fy = state.food
        board[fy, fx] = FOOD

    for idx, (x, y) in enumerate(state.snake):
        board[y, x] = HEAD if idx == 0 else BODY

    return board


def render_text(state: GameState) -> str:
    board = encode_board(state)
    rows = ["".join(GLYPHS[float(value)] for value in row) for row in board]
    status = f"Score: {state.score}  Length: {len(state.snake)}"
    if state.game_over:
        status += "  GAME OVER"
    elif state.paused:
        status += "  PAUSED"
    return "\n".join(rows + [status])


def _is_collision(state: GameState, cell: Cell) -> bool:
    # The tail still counts: collisions are checked against the pre-move body.
    return not in_bounds(cell, state.grid_size) or cell in state.snake


def free_space(state: GameState, start: Cell) -> int:
    """Count cells reachable from start without crossing walls or the body."""
    if _is_collision(state, start):
        return 0
    blocked = np.zeros((state.grid_size, state.grid_size), dtype=bool)
    for x, y in state.snake:
        blocked[y, x] = True

    stack = [start]
    blocked[start[1], start[0]] = True
    count = 0
    while stack:
        cell = stack.pop()
        count += 1
        for direction in DIRECTIONS:
            nx, ny = next_cell(cell, direction)
            if in_bounds((nx, ny), state.grid_size) and not blocked[ny, nx]:
                blocked[ny, nx] = True
                stack.append((nx, ny))
    return count


def greedy_direction(state: GameState) -> str:
    """
    Pick a heading toward the food that does not collide next tick.
    Ties on distance prefer the move with more reachable space; when every
    move collides the current heading is kept.
    """
    hx, hy = state.head
    target = state.food if state.food is not None else state.head
    best: str | None = None
    best_key: tuple[int, int, int] | None = None

    for direction in DIRECTIONS:
        if direction == OPPOSITES[state.direction]:
            continue
        cell = next_cell((hx, hy), direction)
        if _is_collision(state, cell):
            continue
        distance = abs(target[0] - cell[0]) + abs(target[1] - cell[1])
        space = free_space(state, cell)
        # Never walk into a pocket smaller than the snake when a roomier move exists.
        cramped = int(space < len(state.snake))
        key = (cramped, distance, -space)
        if best_key is None or key < best_key:
            best = direction
            best_key = key

    return best if best is not None else state.direction
