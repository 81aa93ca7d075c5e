"""
Constants for the hexapawn game.

This module defines the bitboard constants used throughout the hexapawn
implementation, including file and rank masks, the playing area for each
board size and the starting positions of both sides.

Squares are numbered 0..63 on an 8x8 grid (a1 = 0, b1 = 1, ..., h8 = 63).
Smaller boards occupy the lower-left corner of the grid.
"""
from typing import Dict, Final, List, Tuple


# All supported board sizes
MIN_SIZE: Final[int] = 3
MAX_SIZE: Final[int] = 8
SIZES: Final[Tuple[int, ...]] = tuple(range(MIN_SIZE, MAX_SIZE + 1))

# An empty and a full bitboard
EMPTY: Final[int] = 0
UNIVERSAL: Final[int] = 0xFFFFFFFFFFFFFFFF

# The files of a bitboard, from file A [0] to file H [7]
FILES: Final[List[int]] = [0x0101010101010101 << i for i in range(8)]

# The ranks of a bitboard, from rank 1 [0] to rank 8 [7]
RANKS: Final[List[int]] = [0xFF << (8 * i) for i in range(8)]

NOT_FILE_A: Final[int] = UNIVERSAL ^ FILES[0]
NOT_FILE_H: Final[int] = UNIVERSAL ^ FILES[7]


def _board_mask(size: int) -> int:
    row = (1 << size) - 1
    mask = 0
    for rank in range(size):
        mask |= row << (8 * rank)
    return mask


# The playing area for each board size
BOARD_MASKS: Final[Dict[int, int]] = {size: _board_mask(size) for size in SIZES}

# White starts on rank 1, Black on the last rank of the board
START_POS_WHITE: Final[Dict[int, int]] = {size: (1 << size) - 1 for size in SIZES}
START_POS_BLACK: Final[Dict[int, int]] = {
    size: ((1 << size) - 1) << (8 * (size - 1)) for size in SIZES
}

FILE_NAMES: Final[str] = "abcdefgh"
RANK_NAMES: Final[str] = "12345678"

# Unicode symbols for terminal display
WHITE_PAWN: Final[str] = "♙"
BLACK_PAWN: Final[str] = "♟"
EMPTY_SQUARE: Final[str] = "·"

# AI and experiment settings
DEFAULT_MCTS_ITERATIONS: Final[int] = 10_000
DEFAULT_MCTS_EXPLORATION: Final[float] = 2.0
DEFAULT_MINIMAX_DEPTH: Final[int] = 10
DEFAULT_TRIALS_PER_PAIRING: Final[int] = 1000

# Heuristic value of a proven win (a loss is its negation)
SOLVER_WIN_VALUE: Final[int] = 2**31 - 1
