# Headless Snake runner: the greedy autopilot plays in the terminal, no Tk needed.
from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from dataclasses import dataclass

try:
    from .game_logic import DEFAULT_CONFIG, LOG_LEVELS, GameConfig, SnakeGame
    from .utils import greedy_direction, render_text
except ImportError:
    from game_logic import DEFAULT_CONFIG, LOG_LEVELS, GameConfig, SnakeGame
    from utils import greedy_direction, render_text

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    score: int
    length: int
    ticks: int
    game_over: bool


def play_headless(
    config: GameConfig = DEFAULT_CONFIG,
    seed: int | None = None,
    max_ticks: int = 2000,
    delay: float = 0.0,
    show: bool = True,
) -> RunResult:
    """Let the autopilot play one game until it dies or max_ticks pass."""
    if max_ticks <= 0:
        raise ValueError("max_ticks must be > 0")

    game = SnakeGame(config, rng=random.Random(seed))
    ticks = 0
    while ticks < max_ticks and not game.game_over:
        game.request_direction(greedy_direction(game.state))
        game.tick()
        ticks += 1

        if show:
            # Clear screen and home the cursor before each frame.
            print("\x1b[2J\x1b[H" + render_text(game.state), flush=True)
        if delay > 0:
            time.sleep(delay)

    logger.info("Run finished after %d ticks: score %d", ticks, game.score)
    return RunResult(score=game.score, length=len(game.snake), ticks=ticks, game_over=game.game_over)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Watch the Snake autopilot play in the terminal")
    parser.add_argument("--seed", type=int, default=None, help="Seed for food placement")
    parser.add_argument("--max-ticks", type=int, default=2000)
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_CONFIG.tick_ms / 1000.0,
        help="Seconds between frames (0 runs as fast as possible)",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print the final summary")
    parser.add_argument("--log-level", type=str.upper, default="WARNING", choices=LOG_LEVELS)
    args = parser.parse_args(argv)
    if args.max_ticks <= 0:
        parser.error("--max-ticks must be > 0")
    if args.delay < 0:
        parser.error("--delay must be >= 0")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        result = play_headless(
            seed=args.seed,
            max_ticks=args.max_ticks,
            delay=args.delay,
            show=not args.quiet,
        )
    except KeyboardInterrupt:
        print("\nStopped.")
        return 130

    outcome = "game over" if result.game_over else "tick limit reached"
    print(f"Score: {result.score}  Length: {result.length}  Ticks: {result.ticks}  ({outcome})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
