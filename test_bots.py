#!/usr/bin/env python
"""
Tests for the heuristics and the non-MCTS bots.
"""
import random
import unittest

from hexapawn_ai.bots.heuristics import (
    AdvancementHeuristic, MaterialHeuristic, SolverHeuristic, ZeroHeuristic,
    advancement_eval, create_heuristic, material_eval, north_fill, south_fill
)
from hexapawn_ai.bots.minimax import MiniMaxBot
from hexapawn_ai.bots.simple import AlwaysCaptureBot, AlwaysPushBot, RandomBot
from hexapawn_ai.core.board import Board, Move, parse_square
from hexapawn_ai.core.constants import BOARD_MASKS, FILES, SOLVER_WIN_VALUE
from hexapawn_ai.core.outcome import Player


def play_line(size, moves):
    """Play a sequence of moves given in coordinate notation."""
    board = Board.new(size)
    for text in moves:
        board = board.play(Move.from_uci(text))
    return board


class TestBitboardHelpers(unittest.TestCase):
    """Test case for the pawn fill helpers."""

    def test_fills(self):
        self.assertEqual(north_fill(1), FILES[0])
        self.assertEqual(south_fill(1 << parse_square("a8")), FILES[0])
        self.assertEqual(north_fill(1 << parse_square("c5")) & (1 << parse_square("c4")), 0)

    def test_advancement_eval(self):
        a3 = 1 << parse_square("a3")
        self.assertEqual(advancement_eval(a3, Player.A), 3)

        a2 = 1 << parse_square("a2")
        self.assertEqual(advancement_eval(a2, Player.B), 7)
        self.assertEqual(advancement_eval(a2, Player.B, BOARD_MASKS[3]), 2)

    def test_material_eval(self):
        self.assertEqual(material_eval(0b1011), 3)
        self.assertEqual(material_eval(0), 0)


class TestHeuristics(unittest.TestCase):
    """Test case for the static evaluations."""

    def test_zero(self):
        self.assertEqual(ZeroHeuristic().value(Board.new(5)), 0)

    def test_solver_scores_finished_boards(self):
        won_by_white = play_line(3, ["a1a2", "c3c2", "a2b3"])
        # Black is to move and has lost
        self.assertEqual(SolverHeuristic().value(won_by_white, 3), -(SOLVER_WIN_VALUE - 3))
        self.assertEqual(SolverHeuristic().value(Board.new(3)), 0)

        drawn = play_line(3, ["a1a2", "b3b2", "c1c2"])
        self.assertEqual(SolverHeuristic().value(drawn), 0)

    def test_quicker_wins_score_higher(self):
        won_by_black = play_line(3, ["a1a2", "b3a2", "c1c2", "a2b1"])
        # White is to move and has lost
        self.assertLess(SolverHeuristic().value(won_by_black, 2),
                        SolverHeuristic().value(won_by_black, 6))

    def test_material(self):
        self.assertEqual(MaterialHeuristic().value(Board.new(4)), 0)
        board = play_line(3, ["a1a2", "b3a2"])
        self.assertEqual(MaterialHeuristic().value(board), -1)

    def test_advancement(self):
        self.assertEqual(AdvancementHeuristic().value(Board.new(3)), 3)
        board = play_line(3, ["a1a2", "c3c2"])
        # White: a-file filled to a2, b1 and c1 on their own
        self.assertEqual(AdvancementHeuristic().value(board), 4)

    def test_finished_boards_defer_to_solver(self):
        board = play_line(3, ["a1a2", "c3c2", "a2b3"])
        expected = SolverHeuristic().value(board, 1)
        self.assertEqual(MaterialHeuristic().value(board, 1), expected)
        self.assertEqual(AdvancementHeuristic().value(board, 1), expected)

    def test_create_heuristic(self):
        self.assertIsInstance(create_heuristic("material"), MaterialHeuristic)
        with self.assertRaises(ValueError):
            create_heuristic("mobility")


class TestSimpleBots(unittest.TestCase):
    """Test case for the baseline bots."""

    def setUp(self):
        self.rng = random.Random(42)
        self.board = play_line(3, ["a1a2", "c3c2"])

    def test_random_bot_plays_legal_moves(self):
        bot = RandomBot(self.rng)
        for _ in range(20):
            self.assertTrue(self.board.is_available_move(bot.select_move(self.board)))

    def test_push_bot(self):
        self.assertEqual(str(AlwaysPushBot(self.rng).select_move(self.board)), "b1b2")

    def test_capture_bot(self):
        bot = AlwaysCaptureBot(self.rng)
        for _ in range(10):
            self.assertIn(str(bot.select_move(self.board)), ["b1c2", "a2b3"])

    def test_capture_bot_falls_back_to_any_move(self):
        board = Board.new(4)
        self.assertTrue(board.is_available_move(AlwaysCaptureBot(self.rng).select_move(board)))

    def test_finished_board(self):
        board = play_line(3, ["a1a2", "c3c2", "a2b3"])
        for bot in (RandomBot(self.rng), AlwaysPushBot(self.rng), AlwaysCaptureBot(self.rng)):
            with self.subTest(bot=bot):
                with self.assertRaises(ValueError):
                    bot.select_move(board)

    def test_repr(self):
        self.assertEqual(repr(RandomBot()), "RandomBot")
        self.assertEqual(repr(AlwaysPushBot()), "AlwaysPushBot")
        self.assertEqual(repr(AlwaysCaptureBot()), "AlwaysCaptureBot")


class TestMiniMaxBot(unittest.TestCase):
    """Test case for the minimax bot."""

    def test_finds_winning_capture(self):
        board = play_line(3, ["a1a2", "c3c2"])
        bot = MiniMaxBot(3, SolverHeuristic(), random.Random(0))
        self.assertEqual([str(mv) for mv in bot.best_moves(board)], ["a2b3"])
        self.assertEqual(str(bot.select_move(board)), "a2b3")

    def test_ties_are_all_reported(self):
        # Nothing is decided within one ply of the start, so every move ties
        board = Board.new(4)
        bot = MiniMaxBot(1, SolverHeuristic())
        self.assertEqual(bot.best_moves(board), list(board.available_moves()))

    def test_invalid_depth(self):
        with self.assertRaises(ValueError):
            MiniMaxBot(0, SolverHeuristic())

    def test_finished_board(self):
        board = play_line(3, ["a1a2", "b3b2", "c1c2"])
        with self.assertRaises(ValueError):
            MiniMaxBot(2, MaterialHeuristic()).select_move(board)

    def test_repr(self):
        self.assertEqual(repr(MiniMaxBot(10, AdvancementHeuristic())),
                         "MiniMaxBot(depth=10, heuristic=AdvancementHeuristic)")


if __name__ == "__main__":
    unittest.main()
