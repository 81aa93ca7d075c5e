"""
Board representation and move generation for hexapawn.

This module defines:
- Move: a single pawn move from one square to another
- MoveMask: filters for move generation (all moves, captures or pushes)
- Board: an immutable hexapawn position on a board of size 3 to 8

Each side's pawns are stored as a bitboard (a Python int over an 8x8
grid). Pawns push one square forward onto an empty square or capture one
square diagonally forward. A side wins by reaching the far rank; a side
to move without any legal move draws.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple
import random

from hexapawn_ai.core.constants import (
    BOARD_MASKS, EMPTY, FILE_NAMES, MAX_SIZE, MIN_SIZE, RANK_NAMES,
    RANKS, START_POS_BLACK, START_POS_WHITE, WHITE_PAWN, BLACK_PAWN,
    EMPTY_SQUARE
)
from hexapawn_ai.core.outcome import Outcome, Player


class IllegalMoveError(ValueError):
    """Raised when a move that is not legal in a position is played."""


def iter_squares(bb: int) -> Iterator[int]:
    """Yield the squares set in a bitboard, least significant first."""
    while bb:
        lsb = bb & -bb
        yield lsb.bit_length() - 1
        bb ^= lsb


def square_name(square: int) -> str:
    """Get the algebraic name of a square, e.g. 0 -> 'a1'."""
    return FILE_NAMES[square % 8] + RANK_NAMES[square // 8]


def parse_square(name: str) -> int:
    """Get the square index of an algebraic name, e.g. 'a1' -> 0."""
    if len(name) != 2 or name[0] not in FILE_NAMES or name[1] not in RANK_NAMES:
        raise ValueError(f"Invalid square name: {name!r}")
    return FILE_NAMES.index(name[0]) + 8 * RANK_NAMES.index(name[1])


@dataclass(frozen=True, order=True)
class Move:
    """A pawn move, ordered by source square and then destination square."""
    src: int
    dest: int

    @classmethod
    def from_uci(cls, text: str) -> 'Move':
        """
        Parse a move written as two square names, e.g. 'a1a2'.

        Args:
            text: Move in coordinate notation

        Returns:
            Move object
        """
        text = text.strip().lower()
        if len(text) != 4:
            raise ValueError(f"Invalid move: {text!r}")
        return cls(parse_square(text[:2]), parse_square(text[2:]))

    def __str__(self) -> str:
        return square_name(self.src) + square_name(self.dest)


class MoveMask(Enum):
    """Filters applied during move generation."""
    ALL = auto()
    CAPTURE = auto()
    PUSH = auto()


@dataclass(frozen=True)
class Board:
    """
    An immutable hexapawn position.

    Player A plays White and moves up the board, Player B plays Black and
    moves down. Use Board.new(size) for the starting position.
    """
    white: int
    black: int
    side_to_move: Player
    size: int
    _cache: dict = field(default_factory=dict, init=False, repr=False, compare=False, hash=False)

    @classmethod
    def new(cls, size: int) -> 'Board':
        """
        Create the starting position for a board size.

        Args:
            size: Board size, from 3 to 8

        Returns:
            Board with White to move
        """
        if not MIN_SIZE <= size <= MAX_SIZE:
            raise ValueError(f"Invalid size {size}, must be {MIN_SIZE} to {MAX_SIZE}")
        return cls(START_POS_WHITE[size], START_POS_BLACK[size], Player.A, size)

    def pieces(self, player: Player) -> int:
        """Get the bitboard of a player's pawns."""
        return self.white if player is Player.A else self.black

    def pieces_to_move(self) -> int:
        """Get the bitboard of the pawns of the side to move."""
        return self.pieces(self.side_to_move)

    def pieces_not_to_move(self) -> int:
        """Get the bitboard of the pawns of the side not to move."""
        return self.pieces(self.side_to_move.other())

    def occupied(self) -> int:
        return self.white | self.black

    def empty(self) -> int:
        return BOARD_MASKS[self.size] & ~self.occupied()

    def next_player(self) -> Player:
        """Get the player to act."""
        return self.side_to_move

    def _targets(self, src: int, mask: MoveMask) -> List[int]:
        forward = 8 if self.side_to_move is Player.A else -8
        file = src % 8
        targets = []

        if mask is not MoveMask.CAPTURE:
            dest = src + forward
            if 0 <= dest < 64 and (self.empty() >> dest) & 1:
                targets.append(dest)

        if mask is not MoveMask.PUSH:
            enemies = self.pieces_not_to_move()
            for side_step, blocked_file in ((-1, 0), (1, 7)):
                if file == blocked_file:
                    continue
                dest = src + forward + side_step
                if 0 <= dest < 64 and (enemies >> dest) & 1:
                    targets.append(dest)

        return sorted(targets)

    def available_moves(self, mask: MoveMask = MoveMask.ALL) -> Tuple[Move, ...]:
        """
        Get the legal moves of the side to move.

        Moves are ordered by source square, then by destination square,
        so repeated calls on the same position return the same sequence.
        Finished positions still report the moves their pawns could make;
        check is_done() first.

        Args:
            mask: Restrict generation to captures or pushes

        Returns:
            Tuple of moves
        """
        cached = self._cache.get(mask)
        if cached is not None:
            return cached

        moves = tuple(
            Move(src, dest)
            for src in iter_squares(self.pieces_to_move())
            for dest in self._targets(src, mask)
        )
        self._cache[mask] = moves
        return moves

    def random_available_move(self, rng: random.Random) -> Move:
        """Pick a uniformly random legal move."""
        moves = self.available_moves()
        if not moves:
            raise ValueError("No moves available")
        return rng.choice(moves)

    def is_available_move(self, mv: Move) -> bool:
        """
        Check a move against the pawn rules without generating the move list.

        Agrees with membership in available_moves().
        """
        if not (0 <= mv.src < 64 and 0 <= mv.dest < 64):
            return False
        if not (self.pieces_to_move() >> mv.src) & 1:
            return False

        forward = 8 if self.side_to_move is Player.A else -8
        step = mv.dest - mv.src
        if step == forward:
            return bool((self.empty() >> mv.dest) & 1)
        if step in (forward - 1, forward + 1) and abs(mv.dest % 8 - mv.src % 8) == 1:
            return bool((self.pieces_not_to_move() >> mv.dest) & 1)
        return False

    def _winner(self) -> Optional[Player]:
        if self.white & RANKS[self.size - 1] != EMPTY:
            return Player.A
        if self.black & RANKS[0] != EMPTY:
            return Player.B
        return None

    def play(self, mv: Move) -> 'Board':
        """
        Play a move, returning the resulting position.

        Args:
            mv: A legal move for the side to move

        Returns:
            New Board; this board is left untouched

        Raises:
            IllegalMoveError: If the game is over or the move is not legal
        """
        # A side without moves has no legal move to pass this check either
        if self._winner() is not None:
            raise IllegalMoveError(f"Cannot play {mv} on a finished board")
        if not self.is_available_move(mv):
            raise IllegalMoveError(f"Move {mv} is not legal in this position")

        src_bb = 1 << mv.src
        dest_bb = 1 << mv.dest
        if self.side_to_move is Player.A:
            white = self.white ^ (src_bb | dest_bb)
            black = self.black & ~dest_bb
        else:
            black = self.black ^ (src_bb | dest_bb)
            white = self.white & ~dest_bb
        return Board(white, black, self.side_to_move.other(), self.size)

    def outcome(self) -> Optional[Outcome]:
        """
        Get the result of the game, if it is over.

        Returns:
            Outcome, or None if the game is still ongoing
        """
        if "outcome" in self._cache:
            return self._cache["outcome"]

        winner = self._winner()
        if winner is not None:
            outcome = Outcome.won_by(winner)
        elif not self.available_moves():
            outcome = Outcome.DRAW
        else:
            outcome = None

        self._cache["outcome"] = outcome
        return outcome

    def is_done(self) -> bool:
        """Check whether the game is over."""
        return self.outcome() is not None

    def __str__(self) -> str:
        lines = []
        for rank in reversed(range(self.size)):
            row = []
            for file in range(self.size):
                square = 8 * rank + file
                if (self.white >> square) & 1:
                    row.append(WHITE_PAWN)
                elif (self.black >> square) & 1:
                    row.append(BLACK_PAWN)
                else:
                    row.append(EMPTY_SQUARE)
            lines.append(f"{''.join(row)}|{RANK_NAMES[rank]}")
        lines.append("-" * self.size + "*")
        lines.append(FILE_NAMES[:self.size])
        return "\n".join(lines)


def perft(board: Board, depth: int) -> int:
    """
    Count the move paths of a given length from a position.

    Paths that end the game early are not counted.

    Args:
        board: Starting position
        depth: Number of plies

    Returns:
        Number of move sequences of exactly that length
    """
    if depth == 0:
        return 1
    if board.is_done():
        return 0
    if depth == 1:
        return len(board.available_moves())
    return sum(perft(board.play(mv), depth - 1) for mv in board.available_moves())
