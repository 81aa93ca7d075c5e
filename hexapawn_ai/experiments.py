#!/usr/bin/env python
"""
Round-robin experiments between hexapawn bots.

Every ordered pairing of the selected bots plays a match on every selected
board size. Results are appended to a log as each match finishes, so an
interrupted run keeps what it has played.

Example usage:
    # Full roster on every size with default settings
    hexapawn-experiments

    # Quick run on small boards
    hexapawn-experiments --sizes 3 4 --games 10 --iterations 500 --depth 4

    # Only the MCTS variants, with a fixed seed
    hexapawn-experiments --bots mcts mcts-solver --seed 42 --output results.txt
"""
import argparse
import logging
import os
import random
import sys
import time
from typing import List, Optional

from hexapawn_ai.arena.config import BotType, ExperimentConfig, bot_factory
from hexapawn_ai.arena.match import run_match
from hexapawn_ai.arena.results import format_result, write_results, write_size_header
from hexapawn_ai.core.board import Board
from hexapawn_ai.core.constants import SIZES

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments for the experiment."""
    parser = argparse.ArgumentParser(description="Play hexapawn bots against each other")

    parser.add_argument("--config", type=str, default=None,
                        help="JSON file with experiment settings (flags override it)")

    # Experiment shape
    parser.add_argument("--sizes", type=int, nargs="+", default=None, choices=list(SIZES),
                        help="Board sizes to play on")
    parser.add_argument("--bots", type=str, nargs="+", default=None,
                        choices=[t.value for t in BotType],
                        help="Bots taking part")
    parser.add_argument("--games", type=int, default=None,
                        help="Games per pairing and seat")
    parser.add_argument("--one-side", action="store_true",
                        help="Only play with the left bot moving first")

    # Bot settings
    parser.add_argument("--depth", type=int, default=None,
                        help="Minimax search depth")
    parser.add_argument("--iterations", type=int, default=None,
                        help="MCTS iterations per move")
    parser.add_argument("--exploration", type=float, default=None,
                        help="MCTS exploration weight")

    # Output
    parser.add_argument("--output", type=str, default=None,
                        help="Path of the results log")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar per match")
    parser.add_argument("--verbose", action="store_true",
                        help="Print detailed logs")

    return parser.parse_args(argv)


def build_config(args) -> ExperimentConfig:
    """Merge a JSON config file with command-line overrides."""
    settings = {}
    if args.config is not None:
        settings = ExperimentConfig.from_json(args.config).to_dict()

    overrides = {
        "sizes": args.sizes,
        "bots": args.bots,
        "games_per_side": args.games,
        "minimax_depth": args.depth,
        "mcts_iterations": args.iterations,
        "mcts_exploration": args.exploration,
        "output_path": args.output,
        "seed": args.seed,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})
    if args.one_side:
        settings["both_sides"] = False

    return ExperimentConfig.from_dict(settings)


def run_experiments(config: ExperimentConfig, progress: bool = False) -> None:
    """
    Play every ordered pairing on every size and write the results log.

    Args:
        config: Experiment settings
        progress: Show a progress bar per match
    """
    master_rng = random.Random(config.seed) if config.seed is not None else None

    directory = os.path.dirname(config.output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    bot_types = config.bot_types
    logger.info("Writing results to %s", config.output_path)

    with open(config.output_path, 'w') as out:
        for size in config.sizes:
            write_size_header(out, size)
            print(f"size: {size}")

            for left in bot_types:
                for right in bot_types:
                    start_time = time.time()
                    result = run_match(
                        lambda: Board.new(size),
                        bot_factory(left, config, master_rng),
                        bot_factory(right, config, master_rng),
                        config.games_per_side,
                        both_sides=config.both_sides,
                        progress=progress
                    )
                    write_results(out, result)
                    print(format_result(result))
                    logger.info("size %d: %s vs %s took %.1fs",
                                size, left.value, right.value, time.time() - start_time)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.verbose:
        print("Experiment configuration:")
        for key, value in config.to_dict().items():
            print(f"  {key}: {value}")

    run_experiments(config, progress=args.progress)
    return 0


if __name__ == "__main__":
    sys.exit(main())
