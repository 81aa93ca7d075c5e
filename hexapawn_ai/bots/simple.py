"""
Baseline bots for hexapawn.

These bots serve as baselines for comparison with the search-based bots:
- RandomBot: picks a uniformly random move
- AlwaysPushBot: pushes a pawn whenever it can
- AlwaysCaptureBot: captures a pawn whenever it can
"""
from typing import Optional
import random

from hexapawn_ai.core.board import Board, Move, MoveMask


def _check_playable(board: Board) -> None:
    if board.is_done():
        raise ValueError("Cannot select a move on a finished board")


class RandomBot:
    """Bot that selects moves uniformly at random."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def select_move(self, board: Board) -> Move:
        _check_playable(board)
        return board.random_available_move(self.rng)

    def __repr__(self) -> str:
        return "RandomBot"


class _MaskedBot:
    """Picks a random move matching a mask, or any random move if none does."""

    mask: MoveMask = MoveMask.ALL

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def select_move(self, board: Board) -> Move:
        """
        Select a move of the preferred kind.

        Args:
            board: Current position

        Returns:
            A random preferred move, or a random move if there is none
        """
        _check_playable(board)
        preferred = board.available_moves(self.mask)
        if preferred:
            return self.rng.choice(preferred)
        return board.random_available_move(self.rng)


class AlwaysPushBot(_MaskedBot):
    """Bot that always pushes a pawn, or plays a random move."""

    mask = MoveMask.PUSH

    def __repr__(self) -> str:
        return "AlwaysPushBot"


class AlwaysCaptureBot(_MaskedBot):
    """Bot that always captures a pawn, or plays a random move."""

    mask = MoveMask.CAPTURE

    def __repr__(self) -> str:
        return "AlwaysCaptureBot"
