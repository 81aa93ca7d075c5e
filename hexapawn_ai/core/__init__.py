"""
Hexapawn AI Core Package

This package contains the game side of hexapawn, including:
- Outcomes and win/draw/loss bookkeeping
- Board representation and move generation
- Capability protocols used by the search engine and the bots
- Constants

All core components can be imported directly from this package.
"""

# Outcomes
from hexapawn_ai.core.outcome import Player, Outcome, OutcomeWDL, WDL

# Board
from hexapawn_ai.core.board import (
    Board, Move, MoveMask, IllegalMoveError,
    iter_squares, square_name, parse_square, perft
)

# Protocols
from hexapawn_ai.core.protocol import Position, Heuristic, Bot

# Constants
from hexapawn_ai.core.constants import SIZES, MIN_SIZE, MAX_SIZE

__all__ = [
    # Outcomes
    'Player', 'Outcome', 'OutcomeWDL', 'WDL',

    # Board
    'Board', 'Move', 'MoveMask', 'IllegalMoveError',
    'iter_squares', 'square_name', 'parse_square', 'perft',

    # Protocols
    'Position', 'Heuristic', 'Bot',

    # Constants
    'SIZES', 'MIN_SIZE', 'MAX_SIZE'
]
