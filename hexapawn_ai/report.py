#!/usr/bin/env python
"""
Summarise a hexapawn results log.

Prints the cumulative score of every bot type on every board size, where
a win counts 1 and a draw counts 0.5, summed over all pairings the bot
took part in.

Example usage:
    hexapawn-report results.txt
    hexapawn-report results.txt --plot scores.png
"""
import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from hexapawn_ai.arena.results import Results, ResultsParseError, load_results


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments for the report."""
    parser = argparse.ArgumentParser(description="Summarise a hexapawn results log")
    parser.add_argument("path", type=str,
                        help="Path of the results log")
    parser.add_argument("--plot", type=str, default=None,
                        help="Save a chart of the scores to this path")
    parser.add_argument("--wdl", action="store_true",
                        help="Show the win/draw/loss counts next to the scores")
    return parser.parse_args(argv)


def build_table(results: Results, show_wdl: bool = False) -> Table:
    """
    Build a table of cumulative scores.

    Args:
        results: Parsed results log
        show_wdl: Add the raw counts to every cell

    Returns:
        rich Table with one row per bot type and one column per size
    """
    sizes = results.sizes()
    table = Table(title="Cumulative scores (win + 0.5 * draw)")
    table.add_column("Bot", style="bold")
    for size in sizes:
        table.add_column(f"{size}x{size}", justify="right")

    for bot_type in results.bot_types():
        row = [bot_type.value]
        for size in sizes:
            wdl = results.get_cumulative(size, bot_type)
            cell = f"{wdl.combined():g}"
            if show_wdl:
                cell += f" ({wdl})"
            row.append(cell)
        table.add_row(*row)

    return table


def plot_scores(results: Results, path: str) -> None:
    """
    Plot the cumulative score of every bot type against board size.

    Args:
        results: Parsed results log
        path: Where to save the figure
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    sizes = results.sizes()
    fig, ax = plt.subplots(figsize=(10, 6))
    for bot_type in results.bot_types():
        scores = [results.get_cumulative(size, bot_type).combined() for size in sizes]
        ax.plot(sizes, scores, marker="o", label=bot_type.value)

    ax.set_xlabel("Board size")
    ax.set_ylabel("Cumulative score")
    ax.set_xticks(sizes)
    ax.grid(True)
    ax.legend()
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    console = Console()

    try:
        results = load_results(args.path)
    except (OSError, ResultsParseError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if not results.sizes():
        console.print("No results found")
        return 0

    console.print(build_table(results, show_wdl=args.wdl))

    if args.plot is not None:
        plot_scores(results, args.plot)
        console.print(f"Saved plot to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
