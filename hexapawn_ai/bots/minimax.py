"""
Depth-limited minimax bot.

Negamax with alpha-beta pruning over any position type; leaves are scored
by a heuristic from the point of view of the player to move there. Among
equally good root moves the bot picks one at random.
"""
from typing import Any, List, Optional
import math
import random

from hexapawn_ai.core.protocol import Heuristic, Position

# Margin below the best root score that still counts as a tie
_TIE_MARGIN = 1e-9


def negamax(
    position: Position,
    depth: int,
    alpha: float,
    beta: float,
    heuristic: Heuristic,
    ply: int = 0
) -> float:
    """
    Fail-soft negamax search with alpha-beta pruning.

    Args:
        position: Position to evaluate
        depth: Remaining depth
        alpha: Lower bound of the search window
        beta: Upper bound of the search window
        heuristic: Leaf evaluation
        ply: Distance from the root, passed on to the heuristic

    Returns:
        Value for the player to move
    """
    if depth == 0 or position.is_done():
        return float(heuristic.value(position, ply))

    best = -math.inf
    for mv in position.available_moves():
        value = -negamax(position.play(mv), depth - 1, -beta, -alpha, heuristic, ply + 1)
        if value > best:
            best = value
        if best > alpha:
            alpha = best
        if alpha >= beta:
            break
    return best


class MiniMaxBot:
    """Bot that searches a fixed number of plies ahead."""

    def __init__(self, depth: int, heuristic: Heuristic, rng: Optional[random.Random] = None):
        """
        Initialize the minimax bot.

        Args:
            depth: Search depth in plies, at least 1
            heuristic: Leaf evaluation
            rng: Random source for tie-breaking
        """
        if depth <= 0:
            raise ValueError("depth must be positive")
        self.depth = depth
        self.heuristic = heuristic
        self.rng = rng if rng is not None else random.Random()

    def best_moves(self, position: Position) -> List[Any]:
        """
        Get every root move that reaches the best minimax value.

        Args:
            position: Current position

        Returns:
            List of equally best moves, in move order
        """
        best_value = -math.inf
        best: List[Any] = []
        for mv in position.available_moves():
            alpha = best_value - _TIE_MARGIN
            value = -negamax(position.play(mv), self.depth - 1, -math.inf, -alpha, self.heuristic, 1)
            if value > best_value + _TIE_MARGIN:
                best_value = value
                best = [mv]
            elif value > best_value - _TIE_MARGIN:
                best.append(mv)
        return best

    def select_move(self, position: Position) -> Any:
        """
        Select one of the best moves at random.

        Raises:
            ValueError: If the game is already over
        """
        if position.is_done():
            raise ValueError("Cannot select a move on a finished board")
        return self.rng.choice(self.best_moves(position))

    def __repr__(self) -> str:
        return f"MiniMaxBot(depth={self.depth}, heuristic={self.heuristic!r})"
