"""
Bots and heuristics for hexapawn.

This package provides the non-MCTS bots used as opponents in experiments
(random, always-push, always-capture, minimax) and the static evaluations
shared by the minimax and MCTS bots.
"""

from hexapawn_ai.bots.heuristics import (
    ZeroHeuristic, SolverHeuristic, MaterialHeuristic, AdvancementHeuristic,
    north_fill, south_fill, advancement_eval, material_eval,
    HEURISTICS, create_heuristic
)
from hexapawn_ai.bots.simple import RandomBot, AlwaysPushBot, AlwaysCaptureBot
from hexapawn_ai.bots.minimax import MiniMaxBot, negamax

__all__ = [
    'ZeroHeuristic', 'SolverHeuristic', 'MaterialHeuristic', 'AdvancementHeuristic',
    'north_fill', 'south_fill', 'advancement_eval', 'material_eval',
    'HEURISTICS', 'create_heuristic',
    'RandomBot', 'AlwaysPushBot', 'AlwaysCaptureBot',
    'MiniMaxBot', 'negamax'
]
