"""
Capability protocols shared by the search engine and the bots.

Any position type offering these operations can be searched, and any
object with a matching value() method can serve as a heuristic. Nothing
here needs to be subclassed; conformance is structural.
"""
from __future__ import annotations
from typing import Any, Optional, Protocol, Sequence, runtime_checkable
import random

from hexapawn_ai.core.outcome import Outcome, Player


@runtime_checkable
class Position(Protocol):
    """
    An immutable game position.

    play() must return a new position and leave the receiver untouched.
    available_moves() must return the same sequence for the same position.
    """

    def available_moves(self) -> Sequence[Any]:
        ...

    def play(self, mv: Any) -> 'Position':
        ...

    def outcome(self) -> Optional[Outcome]:
        ...

    def next_player(self) -> Player:
        ...

    def is_done(self) -> bool:
        ...

    def random_available_move(self, rng: random.Random) -> Any:
        ...


@runtime_checkable
class Heuristic(Protocol):
    """A static evaluation, from the point of view of the player to move."""

    def value(self, position: Any, depth: int = 0) -> float:
        ...


@runtime_checkable
class Bot(Protocol):
    """Anything that can pick a move in a position."""

    def select_move(self, position: Any) -> Any:
        ...
