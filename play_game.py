#!/usr/bin/env python
"""
Interactive hexapawn game interface for playing against AI bots.

This script provides a command-line interface for playing hexapawn against
the bots of the experiment roster, including random, minimax and MCTS bots.

Example usage:
    # Play against a random bot on the 3x3 board
    python play_game.py --opponent random

    # Play against the solver MCTS bot on a 5x5 board
    python play_game.py --size 5 --opponent mcts-solver --iterations 5000

    # Let the bot move first and show its search statistics
    python play_game.py --opponent mcts --second --debug
"""
import argparse
import random
import sys
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hexapawn_ai.arena.config import BotType, ExperimentConfig, create_bot
from hexapawn_ai.core.board import Board, Move
from hexapawn_ai.core.constants import SIZES
from hexapawn_ai.core.outcome import OutcomeWDL, Player
from hexapawn_ai.mcts.agent import MCTSAgent

console = Console()


def parse_args():
    """Parse command-line arguments for game configuration."""
    parser = argparse.ArgumentParser(description="Play hexapawn against AI bots")

    # Opponent configuration
    parser.add_argument("--opponent", type=str, default=BotType.MCTS_SOLVER.value,
                        choices=[t.value for t in BotType],
                        help="Type of AI opponent")
    parser.add_argument("--iterations", type=int, default=2000,
                        help="MCTS iterations per move (for MCTS opponents)")
    parser.add_argument("--depth", type=int, default=6,
                        help="Search depth (for minimax opponents)")

    # Game configuration
    parser.add_argument("--size", type=int, default=3, choices=list(SIZES),
                        help="Board size")
    parser.add_argument("--second", action="store_true",
                        help="Human player moves second (plays Black)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the opponent")
    parser.add_argument("--debug", action="store_true",
                        help="Show the opponent's search statistics")

    return parser.parse_args()


def create_opponent(args) -> Any:
    """Create an AI opponent based on command-line arguments."""
    config = ExperimentConfig(
        sizes=[args.size],
        minimax_depth=args.depth,
        mcts_iterations=args.iterations
    )
    return create_bot(BotType(args.opponent), config, random.Random(args.seed))


def display_board(board: Board) -> None:
    """Display the board and whose turn it is."""
    side = "White" if board.next_player() is Player.A else "Black"
    console.print(Panel(str(board), title=f"{board.size}x{board.size}", expand=False))
    if not board.is_done():
        console.print(f"[bold]{side}[/bold] to move")


def display_search_stats(bot: MCTSAgent) -> None:
    """Display the statistics of the opponent's last search."""
    stats = bot.get_last_statistics()
    table = Table(title="Search statistics")
    table.add_column("Move")
    table.add_column("Visits", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Solved")
    for move, info in bot.get_action_statistics().items():
        value = "-" if info["value"] is None else f"{info['value']:.3f}"
        table.add_row(move, str(info["visits"]), value, info["solved"] or "")
    console.print(table)
    console.print(f"{stats['iterations']} iterations, {stats['node_count']} nodes, "
                  f"root {stats['root_solution'] or 'unsolved'}")


def get_human_move(board: Board) -> Move:
    """Ask the human player for a legal move."""
    moves = board.available_moves()
    console.print("Legal moves: " + " ".join(str(mv) for mv in moves))

    while True:
        text = console.input("Your move: ")
        try:
            mv = Move.from_uci(text)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            continue
        if board.is_available_move(mv):
            return mv
        console.print(f"[red]Illegal move: {mv}[/red]")


def play_game(args) -> Optional[OutcomeWDL]:
    """
    Play one game between the human and the opponent.

    Returns:
        Result from the human's point of view
    """
    opponent = create_opponent(args)
    human = Player.B if args.second else Player.A
    board = Board.new(args.size)

    console.print(f"Playing against [bold]{opponent!r}[/bold]")

    while not board.is_done():
        display_board(board)
        if board.next_player() is human:
            mv = get_human_move(board)
        else:
            mv = opponent.select_move(board)
            console.print(f"Opponent plays [bold]{mv}[/bold]")
            if args.debug and isinstance(opponent, MCTSAgent):
                display_search_stats(opponent)

        board = board.play(mv)

    display_board(board)
    outcome = board.outcome()
    result = outcome.pov(human) if outcome is not None else None
    if result is OutcomeWDL.WIN:
        console.print("[green]You win![/green]")
    elif result is OutcomeWDL.LOSS:
        console.print("[red]You lose.[/red]")
    else:
        console.print("Draw: the side to move is stuck.")
    return result


def main():
    """Main function."""
    args = parse_args()

    console.print(Panel("Welcome to Hexapawn!", expand=False))

    while True:
        play_game(args)
        play_again = console.input("\nPlay again? (y/n): ").lower()
        if play_again != 'y':
            break

    console.print("Thanks for playing!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
