#!/usr/bin/env python3
"""
Minesweeper reveal engine - Main entry point.

Usage:
    python main.py play [--size N] [--mines M] [--seed S]
    python main.py simulate [--games N] [--size N] [--mines M] [--seed S]
"""
import argparse
import logging
from typing import Dict, Optional

import numpy as np

from src.sweeper.engine import RevealEngine
from src.sweeper.environment import RevealEnv, render_observation
from src.sweeper.exceptions import OutOfBoundsError
from src.sweeper.minefield import BoardConfig, MineField
from src.sweeper.tile import RevealKind


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    config = BoardConfig(dimension=args.size, num_mines=args.mines)
    rng = np.random.default_rng(args.seed)
    engine: Optional[RevealEngine] = None

    print(f"Board: {config.dimension}x{config.dimension} with "
          f"{config.num_mines} mines")
    print("Enter 'row col' to reveal a tile, 'q' to quit.\n")

    while True:
        if engine is None:
            print(render_observation(
                np.full((config.dimension,) * 2, -1, dtype=np.int8)
            ))
        else:
            print(render_observation(engine.get_observation()))

        line = input("> ").strip()
        if line.lower() in ("q", "quit"):
            return

        try:
            row, col = (int(part) for part in line.split())
        except ValueError:
            print("Expected two integers: row col")
            continue

        if engine is None:
            # First reveal is always safe
            try:
                field = MineField.random(config, rng, exclude=(row, col))
            except OutOfBoundsError as exc:
                print(exc)
                continue
            engine = RevealEngine(field)

        try:
            outcome = engine.reveal((row, col))
        except OutOfBoundsError as exc:
            print(exc)
            continue

        if outcome.kind == RevealKind.ALREADY_UNCOVERED:
            print("Tile is already uncovered")
        elif outcome.kind == RevealKind.HIT_MINE:
            _finish(engine, args.reveal_on_end)
            print("\n*** LOST (hit mine) ***")
            return
        elif engine.evaluate():
            _finish(engine, args.reveal_on_end)
            print("\n*** WIN! ***")
            return
        else:
            print(f"Uncovered {outcome.uncovered} tile(s)")


def _finish(engine: RevealEngine, reveal_on_end: bool) -> None:
    """Show the final board."""
    if reveal_on_end:
        engine.uncover_remaining()
    print(render_observation(engine.get_observation()))


def simulate_games(
    config: BoardConfig,
    num_games: int = 100,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Play games by revealing random covered tiles.

    Args:
        config: Board configuration.
        num_games: Number of games to play.
        seed: Random seed for boards and moves.

    Returns:
        Dictionary with win rate, average steps and average uncovered.
    """
    env = RevealEnv(config=config)
    rng = np.random.default_rng(seed)

    wins = 0
    total_steps = 0
    total_revealed = 0

    for game in range(num_games):
        env.reset(seed=None if seed is None else seed + game)
        done = False
        info: Dict[str, object] = {}

        while not done:
            valid_indices = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_indices))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_state") == "WON":
            wins += 1
        total_steps += int(info.get("steps", 0))
        total_revealed += int(info.get("revealed", 0))

    return {
        "win_rate": wins / num_games,
        "avg_steps": total_steps / num_games,
        "avg_revealed": total_revealed / num_games,
    }


def simulate(args: argparse.Namespace) -> None:
    """Simulate random play and print results."""
    config = BoardConfig(dimension=args.size, num_mines=args.mines)

    print(f"Simulating {args.games} random games on "
          f"{config.dimension}x{config.dimension} with "
          f"{config.num_mines} mines...")
    results = simulate_games(config, args.games, args.seed)

    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} tiles")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper reveal engine - play or simulate games"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--size", type=int, default=9, help="Board size (NxN)"
    )
    play_parser.add_argument(
        "--mines", type=int, default=10, help="Number of mines"
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )
    play_parser.add_argument(
        "--no-reveal-on-end",
        dest="reveal_on_end",
        action="store_false",
        help="Keep remaining tiles covered when the game ends",
    )

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random reveals and report statistics"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--size", type=int, default=9, help="Board size (NxN)"
    )
    simulate_parser.add_argument(
        "--mines", type=int, default=10, help="Number of mines"
    )
    simulate_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
