"""
Game outcomes and win/draw/loss bookkeeping.

This module defines:
- Player: the two sides of a two-player game
- Outcome: the final result of a game, independent of any point of view
- OutcomeWDL: an outcome seen from one player's point of view
- WDL: an accumulator of win/draw/loss counts

Every value that crosses a ply in the search must be flipped exactly once,
so both OutcomeWDL and WDL support a cheap, self-inverse flip.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class Player(Enum):
    """Enum representing the two players. Player A always moves first."""
    A = 0
    B = 1

    def other(self) -> 'Player':
        """Get the opponent of this player."""
        return Player.B if self is Player.A else Player.A


class OutcomeWDL(Enum):
    """An outcome from the point of view of a specific player."""
    LOSS = -1
    DRAW = 0
    WIN = 1

    def flip(self) -> 'OutcomeWDL':
        """View the outcome from the opponent's side (WIN <-> LOSS)."""
        return OutcomeWDL(-self.value)

    def sign(self) -> int:
        """Numeric score of the outcome: +1, 0 or -1."""
        return self.value

    def to_wdl(self) -> 'WDL':
        """Convert to a single-visit WDL count."""
        if self is OutcomeWDL.WIN:
            return WDL(1, 0, 0)
        if self is OutcomeWDL.DRAW:
            return WDL(0, 1, 0)
        return WDL(0, 0, 1)

    def __lt__(self, other: 'OutcomeWDL') -> bool:
        if not isinstance(other, OutcomeWDL):
            return NotImplemented
        return self.value < other.value

    @staticmethod
    def best(outcomes: Iterable['OutcomeWDL']) -> 'OutcomeWDL':
        """
        Get the best outcome among fully known alternatives.

        Args:
            outcomes: Outcomes available to the acting player

        Returns:
            The best of them

        Raises:
            ValueError: If no outcomes are given
        """
        best = None
        for outcome in outcomes:
            if outcome is OutcomeWDL.WIN:
                return outcome
            if best is None or best < outcome:
                best = outcome
        if best is None:
            raise ValueError("Cannot take the best of an empty sequence of outcomes")
        return best

    @staticmethod
    def best_maybe(outcomes: Iterable[Optional['OutcomeWDL']]) -> Optional['OutcomeWDL']:
        """
        Get the best guaranteed outcome among partially known alternatives.

        A single WIN decides the result regardless of unknown alternatives.
        Without a WIN, the result is only known once every alternative is.

        Args:
            outcomes: Outcomes available to the acting player, None if unknown

        Returns:
            The best guaranteed outcome, or None if it is undetermined

        Raises:
            ValueError: If no outcomes are given
        """
        best = None
        any_unknown = False
        empty = True
        for outcome in outcomes:
            empty = False
            if outcome is None:
                any_unknown = True
                continue
            if outcome is OutcomeWDL.WIN:
                return outcome
            if best is None or best < outcome:
                best = outcome
        if empty:
            raise ValueError("Cannot take the best of an empty sequence of outcomes")
        if any_unknown:
            return None
        return best


class Outcome(Enum):
    """Enum representing the possible final results of a game."""
    WON_BY_FIRST = "won_by_first"
    WON_BY_SECOND = "won_by_second"
    DRAW = "draw"

    @classmethod
    def won_by(cls, player: Player) -> 'Outcome':
        """Get the outcome in which the given player won."""
        return cls.WON_BY_FIRST if player is Player.A else cls.WON_BY_SECOND

    @property
    def winner(self) -> Optional[Player]:
        """The winning player, or None for a draw."""
        if self is Outcome.WON_BY_FIRST:
            return Player.A
        if self is Outcome.WON_BY_SECOND:
            return Player.B
        return None

    def pov(self, player: Player) -> OutcomeWDL:
        """
        View this outcome from the given player's side.

        Args:
            player: The player whose point of view to take

        Returns:
            WIN, DRAW or LOSS for that player
        """
        winner = self.winner
        if winner is None:
            return OutcomeWDL.DRAW
        return OutcomeWDL.WIN if winner is player else OutcomeWDL.LOSS


@dataclass(frozen=True)
class WDL:
    """
    Win/draw/loss counts from one player's point of view.

    Negation swaps wins and losses, reinterpreting the counts from the
    opponent's side.
    """
    win: int = 0
    draw: int = 0
    loss: int = 0

    def __add__(self, other: 'WDL') -> 'WDL':
        if not isinstance(other, WDL):
            return NotImplemented
        return WDL(self.win + other.win, self.draw + other.draw, self.loss + other.loss)

    def __neg__(self) -> 'WDL':
        return WDL(self.loss, self.draw, self.win)

    def flip(self) -> 'WDL':
        """Same as negation."""
        return -self

    def total(self) -> int:
        """Total number of counted results."""
        return self.win + self.draw + self.loss

    def value(self) -> float:
        """Signed score, wins minus losses."""
        return float(self.win - self.loss)

    def combined(self) -> float:
        """Score counting a draw as half a win."""
        return self.win + 0.5 * self.draw

    def __str__(self) -> str:
        return f"W:{self.win},D:{self.draw},L:{self.loss}"
