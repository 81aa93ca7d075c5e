#!/usr/bin/env python
"""
Tests for outcomes and win/draw/loss bookkeeping.

Covers perspective flips, the best-outcome rules used for solving, and
WDL arithmetic.
"""
import unittest

from hexapawn_ai.core.outcome import Outcome, OutcomeWDL, Player, WDL


class TestOutcomeWDL(unittest.TestCase):
    """Test case for OutcomeWDL."""

    def test_flip(self):
        """Flipping swaps win and loss and keeps draws."""
        self.assertIs(OutcomeWDL.WIN.flip(), OutcomeWDL.LOSS)
        self.assertIs(OutcomeWDL.LOSS.flip(), OutcomeWDL.WIN)
        self.assertIs(OutcomeWDL.DRAW.flip(), OutcomeWDL.DRAW)

    def test_flip_twice_is_identity(self):
        for outcome in OutcomeWDL:
            self.assertIs(outcome.flip().flip(), outcome)

    def test_ordering(self):
        self.assertLess(OutcomeWDL.LOSS, OutcomeWDL.DRAW)
        self.assertLess(OutcomeWDL.DRAW, OutcomeWDL.WIN)
        self.assertEqual(OutcomeWDL.WIN.sign(), 1)
        self.assertEqual(OutcomeWDL.LOSS.sign(), -1)

    def test_best(self):
        self.assertIs(OutcomeWDL.best([OutcomeWDL.LOSS, OutcomeWDL.DRAW]), OutcomeWDL.DRAW)
        self.assertIs(OutcomeWDL.best([OutcomeWDL.LOSS, OutcomeWDL.WIN]), OutcomeWDL.WIN)
        with self.assertRaises(ValueError):
            OutcomeWDL.best([])

    def test_best_maybe(self):
        """A win decides, otherwise every alternative must be known."""
        cases = [
            ([OutcomeWDL.WIN, OutcomeWDL.LOSS], OutcomeWDL.WIN),
            ([OutcomeWDL.LOSS, OutcomeWDL.LOSS], OutcomeWDL.LOSS),
            ([OutcomeWDL.DRAW, OutcomeWDL.LOSS], OutcomeWDL.DRAW),
            ([None, OutcomeWDL.WIN], OutcomeWDL.WIN),
            ([OutcomeWDL.LOSS, None], None),
            ([OutcomeWDL.DRAW, None], None),
            ([None], None),
        ]
        for outcomes, expected in cases:
            with self.subTest(outcomes=outcomes):
                self.assertIs(OutcomeWDL.best_maybe(outcomes), expected)

    def test_best_maybe_empty(self):
        with self.assertRaises(ValueError):
            OutcomeWDL.best_maybe([])

    def test_best_maybe_short_circuits_on_win(self):
        """Alternatives after a win are not consumed."""
        consumed = []

        def outcomes():
            for outcome in [OutcomeWDL.LOSS, OutcomeWDL.WIN, None]:
                consumed.append(outcome)
                yield outcome

        self.assertIs(OutcomeWDL.best_maybe(outcomes()), OutcomeWDL.WIN)
        self.assertEqual(consumed, [OutcomeWDL.LOSS, OutcomeWDL.WIN])

    def test_to_wdl(self):
        self.assertEqual(OutcomeWDL.WIN.to_wdl(), WDL(1, 0, 0))
        self.assertEqual(OutcomeWDL.DRAW.to_wdl(), WDL(0, 1, 0))
        self.assertEqual(OutcomeWDL.LOSS.to_wdl(), WDL(0, 0, 1))


class TestOutcome(unittest.TestCase):
    """Test case for Outcome."""

    def test_pov(self):
        self.assertIs(Outcome.WON_BY_FIRST.pov(Player.A), OutcomeWDL.WIN)
        self.assertIs(Outcome.WON_BY_FIRST.pov(Player.B), OutcomeWDL.LOSS)
        self.assertIs(Outcome.WON_BY_SECOND.pov(Player.A), OutcomeWDL.LOSS)
        self.assertIs(Outcome.WON_BY_SECOND.pov(Player.B), OutcomeWDL.WIN)
        self.assertIs(Outcome.DRAW.pov(Player.A), OutcomeWDL.DRAW)

    def test_pov_of_opponent_is_flipped(self):
        for outcome in Outcome:
            self.assertIs(outcome.pov(Player.A), outcome.pov(Player.B).flip())

    def test_winner(self):
        self.assertIs(Outcome.won_by(Player.A).winner, Player.A)
        self.assertIs(Outcome.won_by(Player.B).winner, Player.B)
        self.assertIsNone(Outcome.DRAW.winner)
        self.assertIs(Player.A.other(), Player.B)


class TestWDL(unittest.TestCase):
    """Test case for WDL counts."""

    def test_add(self):
        self.assertEqual(WDL(1, 2, 3) + WDL(4, 5, 6), WDL(5, 7, 9))

    def test_neg_swaps_win_and_loss(self):
        self.assertEqual(-WDL(3, 2, 1), WDL(1, 2, 3))
        self.assertEqual(WDL(3, 2, 1).flip(), WDL(1, 2, 3))

    def test_flip_twice_is_identity(self):
        wdl = WDL(7, 1, 4)
        self.assertEqual(wdl.flip().flip(), wdl)

    def test_scores(self):
        wdl = WDL(6, 2, 2)
        self.assertEqual(wdl.total(), 10)
        self.assertEqual(wdl.value(), 4.0)
        self.assertEqual(wdl.combined(), 7.0)
        self.assertEqual(str(wdl), "W:6,D:2,L:2")


if __name__ == "__main__":
    unittest.main()
