"""
Hexapawn AI - A proven-outcome MCTS engine and bot arena for hexapawn.

This package provides hexapawn on boards from 3x3 to 8x8, a Monte Carlo
Tree Search that proves game outcomes while it searches, baseline and
minimax bots, and tools to play them against each other.
"""

__version__ = "0.1.0"
__author__ = "Hexapawn AI Team"

# Make key components available at package level
from hexapawn_ai.core.board import Board, Move
from hexapawn_ai.core.outcome import Outcome, OutcomeWDL, Player, WDL
from hexapawn_ai.mcts.agent import MCTSAgent
from hexapawn_ai.mcts.config import MCTSConfig

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
