"""
Bot-vs-bot matches.

This module plays series of games between two bots and collects the
results from the point of view of the "left" bot, together with the
average thinking time per move of each side.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import time

import numpy as np
from tqdm import tqdm

from hexapawn_ai.core.outcome import Outcome, OutcomeWDL, Player, WDL
from hexapawn_ai.core.protocol import Bot, Position

logger = logging.getLogger(__name__)


@dataclass
class BotGameResult:
    """Results of a match, from the left bot's point of view."""
    wdl_l: WDL
    debug_l: str
    debug_r: str
    time_l: float
    """Mean seconds per move of the left bot"""
    time_r: float
    """Mean seconds per move of the right bot"""

    @property
    def games(self) -> int:
        return self.wdl_l.total()


def play_game(
    start: Position,
    bot_a: Bot,
    bot_b: Bot,
    max_moves: Optional[int] = None
) -> Tuple[Outcome, List[float], List[float]]:
    """
    Play a single game to the end.

    Args:
        start: Starting position
        bot_a: Bot playing the first player
        bot_b: Bot playing the second player
        max_moves: Safety limit on the game length (None = no limit)

    Returns:
        Tuple of (outcome, seconds per move of bot_a, seconds per move of bot_b)

    Raises:
        RuntimeError: If the game exceeds max_moves
    """
    position = start
    times: Dict[Player, List[float]] = {Player.A: [], Player.B: []}
    bots = {Player.A: bot_a, Player.B: bot_b}

    moves = 0
    while not position.is_done():
        if max_moves is not None and moves >= max_moves:
            raise RuntimeError(f"Game did not finish within {max_moves} moves")

        player = position.next_player()
        start_time = time.perf_counter()
        mv = bots[player].select_move(position)
        times[player].append(time.perf_counter() - start_time)

        position = position.play(mv)
        moves += 1

    return position.outcome(), times[Player.A], times[Player.B]


def run_match(
    start: Callable[[], Position],
    bot_l: Callable[[], Any],
    bot_r: Callable[[], Any],
    games_per_side: int,
    both_sides: bool = True,
    progress: bool = False
) -> BotGameResult:
    """
    Play a series of games between two bots.

    The left bot plays first in games_per_side games and, if both_sides is
    set, second in as many more. Fresh bots are created for every game.

    Args:
        start: Factory for the starting position
        bot_l: Factory for the left bot
        bot_r: Factory for the right bot
        games_per_side: Number of games per seat
        both_sides: Whether the bots also swap seats
        progress: Show a progress bar

    Returns:
        BotGameResult
    """
    if games_per_side <= 0:
        raise ValueError("games_per_side must be positive")

    debug_l = repr(bot_l())
    debug_r = repr(bot_r())

    wdl = WDL()
    times_l: List[float] = []
    times_r: List[float] = []

    seats = [Player.A, Player.B] if both_sides else [Player.A]
    total_games = games_per_side * len(seats)

    with tqdm(total=total_games, desc=f"{debug_l} vs {debug_r}", disable=not progress) as pbar:
        for seat in seats:
            for _ in range(games_per_side):
                left, right = bot_l(), bot_r()
                if seat is Player.A:
                    outcome, left_times, right_times = play_game(start(), left, right)
                else:
                    outcome, right_times, left_times = play_game(start(), right, left)

                seat_result: OutcomeWDL = outcome.pov(seat)
                wdl = wdl + seat_result.to_wdl()
                times_l.extend(left_times)
                times_r.extend(right_times)
                pbar.update(1)

    result = BotGameResult(
        wdl_l=wdl,
        debug_l=debug_l,
        debug_r=debug_r,
        time_l=float(np.mean(times_l)) if times_l else 0.0,
        time_r=float(np.mean(times_r)) if times_r else 0.0,
    )
    logger.info("%s vs %s: %s", debug_l, debug_r, wdl)
    return result
