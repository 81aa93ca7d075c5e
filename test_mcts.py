#!/usr/bin/env python
"""
Tests for the solver MCTS.

Checks that the search proves outcomes correctly, never revises a proof,
keeps its visit counts consistent, and rejects misuse.
"""
import math
import random
import unittest

from hexapawn_ai.bots.heuristics import MaterialHeuristic, SolverHeuristic, ZeroHeuristic
from hexapawn_ai.bots.minimax import negamax
from hexapawn_ai.core.board import Board, Move
from hexapawn_ai.core.constants import DEFAULT_MCTS_EXPLORATION, DEFAULT_MCTS_ITERATIONS
from hexapawn_ai.core.outcome import OutcomeWDL, WDL
from hexapawn_ai.mcts import DEFAULT_CONFIG
from hexapawn_ai.mcts.agent import MCTSAgent, MCTSAgentFactory
from hexapawn_ai.mcts.config import MCTSConfig
from hexapawn_ai.mcts.node import Estimate, IdxRange, Node, Solved, Tree
from hexapawn_ai.mcts.search import (
    mcts_build_tree, mcts_solver_step, random_playout, solve_from_children, uct_heuristic
)


def play_line(size, moves):
    """Play a sequence of moves given in coordinate notation."""
    board = Board.new(size)
    for text in moves:
        board = board.play(Move.from_uci(text))
    return board


def expanded_nodes(tree):
    return [node for node in tree.nodes if node.children is not None]


class TestNode(unittest.TestCase):
    """Test case for tree nodes."""

    def test_new_node(self):
        node = Node.new(None, None)
        self.assertIsInstance(node.status, Estimate)
        self.assertTrue(node.is_unvisited())
        self.assertIsNone(node.solution())
        self.assertIs(Node.new(None, OutcomeWDL.DRAW).solution(), OutcomeWDL.DRAW)

    def test_increment(self):
        node = Node.new(None, None)
        node.increment(OutcomeWDL.WIN)
        node.increment(OutcomeWDL.LOSS)
        self.assertEqual(node.visits, 2)
        self.assertEqual(node.wdl(), WDL(1, 0, 1))

    def test_solved_node_keeps_counting_visits(self):
        node = Node.new(None, OutcomeWDL.WIN)
        node.increment(OutcomeWDL.LOSS)
        self.assertEqual(node.visits, 1)
        self.assertEqual(node.wdl(), WDL(1, 0, 0))

    def test_mark_solved_conflict(self):
        node = Node.new(None, None)
        node.mark_solved(OutcomeWDL.DRAW)
        node.mark_solved(OutcomeWDL.DRAW)
        with self.assertRaises(ValueError):
            node.mark_solved(OutcomeWDL.WIN)

    def test_idx_range(self):
        children = IdxRange(3, 2)
        self.assertEqual(list(children), [3, 4])
        self.assertEqual(len(children), 2)
        self.assertIn(4, children)
        self.assertNotIn(5, children)


class TestSelection(unittest.TestCase):
    """Test case for the UCT score and proof rules."""

    def test_uct_value(self):
        # Child view: 1 win, 3 losses, so the chooser scores 0.75 on average
        child = Node(last_move=None, visits=4, status=Estimate(WDL(1, 0, 3)))
        self.assertAlmostEqual(uct_heuristic(child, 10, 0.0, 0.0), 0.75)
        self.assertAlmostEqual(uct_heuristic(child, 10, 0.0, 1.0), 0.75 + 1.0 / 5)
        self.assertAlmostEqual(uct_heuristic(child, 10, 2.0, 0.0),
                               0.75 + 2.0 * math.sqrt(math.log(10) / 4))

    def test_uct_solved_child(self):
        lost_for_child = Node(last_move=None, status=Solved(OutcomeWDL.LOSS))
        won_for_child = Node(last_move=None, status=Solved(OutcomeWDL.WIN))
        drawn = Node(last_move=None, status=Solved(OutcomeWDL.DRAW))
        self.assertEqual(uct_heuristic(lost_for_child, 10, 2.0, 5.0), 1.0)
        self.assertEqual(uct_heuristic(won_for_child, 10, 2.0, 5.0), 0.0)
        self.assertEqual(uct_heuristic(drawn, 10, 2.0, 0.0), 0.5)
        self.assertEqual(uct_heuristic(drawn, 10, 2.0, 1.0, blend_solved=True), 1.5)

    def test_solve_from_children(self):
        tree = Tree(Board.new(3))
        tree.append(Node.new(None, None))
        tree.append(Node.new(None, OutcomeWDL.WIN))
        tree.append(Node.new(None, None))
        tree.append(Node.new(None, OutcomeWDL.LOSS))
        children = IdxRange(1, 3)

        # One child lost for the opponent proves a win regardless of the rest
        self.assertIs(solve_from_children(tree, children), OutcomeWDL.WIN)
        self.assertIsNone(solve_from_children(tree, IdxRange(1, 2)))

        tree[2].mark_solved(OutcomeWDL.DRAW)
        self.assertIs(solve_from_children(tree, IdxRange(1, 2)), OutcomeWDL.DRAW)

    def test_best_move_prefers_proven_win(self):
        tree = Tree(Board.new(3))
        tree.append(Node.new(None, None))
        tree.append(Node(last_move="busy", visits=10, status=Estimate(WDL(2, 0, 8))))
        tree.append(Node.new("proven", OutcomeWDL.LOSS))
        tree.root.children = IdxRange(1, 2)
        self.assertEqual(tree.best_move(), "proven")

    def test_best_move_avoids_proven_loss(self):
        tree = Tree(Board.new(3))
        tree.append(Node.new(None, None))
        tree.append(Node(last_move="lost", visits=10, status=Solved(OutcomeWDL.WIN)))
        tree.append(Node(last_move="open", visits=1, status=Estimate(WDL(1, 0, 0))))
        tree.root.children = IdxRange(1, 2)
        self.assertEqual(tree.best_move(), "open")

    def test_best_move_unexpanded_root(self):
        tree = Tree(Board.new(3))
        tree.append(Node.new(None, None))
        with self.assertRaises(ValueError):
            tree.best_move()


class TestSearch(unittest.TestCase):
    """Test case for building search trees."""

    def test_terminal_root_needs_no_steps(self):
        board = play_line(3, ["a1a2", "c3c2", "a2b3"])
        tree = mcts_build_tree(board, 10, 1.4, ZeroHeuristic(), random.Random(0))
        self.assertEqual(tree.steps, 0)
        self.assertEqual(len(tree), 1)
        # Black is to move in a position White has already won
        self.assertEqual(tree.root.status, Solved(OutcomeWDL.LOSS))

    def test_immediate_win_is_found(self):
        board = play_line(3, ["a1a2", "c3c2"])
        tree = mcts_build_tree(board, 50, 1.4, ZeroHeuristic(), random.Random(0))
        self.assertEqual(str(tree.best_move()), "a2b3")
        self.assertEqual(tree.root.status, Solved(OutcomeWDL.WIN))
        self.assertEqual(tree.steps, 1)

    def test_agent_plays_immediate_win(self):
        board = play_line(3, ["a1a2", "c3c2"])
        agent = MCTSAgent(MCTSConfig(iterations=50, exploration_weight=1.4, seed=3))
        self.assertEqual(str(agent.select_move(board)), "a2b3")
        self.assertEqual(agent.get_last_statistics()["root_solution"], "WIN")

    def test_root_solution_matches_minimax(self):
        board = Board.new(3)
        tree = mcts_build_tree(board, 5000, 1.4, ZeroHeuristic(), random.Random(1))
        self.assertTrue(tree.root.is_solved())
        self.assertLess(tree.steps, 5000)

        exact = negamax(board, 20, -math.inf, math.inf, SolverHeuristic())
        expected = (exact > 0) - (exact < 0)
        self.assertEqual(tree.root.solution().sign(), expected)

    def test_proofs_are_never_revised(self):
        board = Board.new(3)
        rng = random.Random(2)
        tree = Tree(board)
        tree.append(Node.new(None, None))

        for _ in range(2000):
            if tree.root.is_solved():
                break
            solved = {i: node.solution() for i, node in enumerate(tree.nodes) if node.is_solved()}
            children = {i: node.children for i, node in enumerate(tree.nodes)
                        if node.children is not None}

            mcts_solver_step(tree, 0, board, 1.4, ZeroHeuristic(), rng)

            for i, solution in solved.items():
                self.assertIs(tree[i].solution(), solution)
            for i, idx_range in children.items():
                self.assertEqual(tree[i].children, idx_range)

        self.assertTrue(tree.root.is_solved())

    def test_solved_root_answers_without_searching(self):
        board = Board.new(3)
        rng = random.Random(8)
        tree = mcts_build_tree(board, 5000, 1.4, ZeroHeuristic(), rng)
        self.assertTrue(tree.root.is_solved())

        node_count = len(tree)
        visits = tree.root.visits
        for _ in range(3):
            result = mcts_solver_step(tree, 0, board, 1.4, ZeroHeuristic(), rng)
            self.assertEqual(result, (tree.root.solution(), True))
        self.assertEqual(len(tree), node_count)
        self.assertEqual(tree.root.visits, visits)

    def test_visit_accounting(self):
        tree = mcts_build_tree(Board.new(5), 30, 2.0, ZeroHeuristic(), random.Random(4))
        self.assertEqual(tree.steps, 30)
        self.assertEqual(tree.root.visits, 30)

        for node in expanded_nodes(tree):
            self.assertLessEqual(sum(tree[c].visits for c in node.children), node.visits)
            if not node.is_solved():
                self.assertEqual(node.wdl().total(), node.visits)

    def test_children_cover_legal_moves(self):
        board = Board.new(4)
        tree = mcts_build_tree(board, 20, 2.0, ZeroHeuristic(), random.Random(5))
        moves = [tree[c].last_move for c in tree.root.children]
        self.assertEqual(moves, list(board.available_moves()))

    def test_seeded_search_is_deterministic(self):
        board = Board.new(4)
        first = MCTSAgent(MCTSConfig(iterations=300, seed=11))
        second = MCTSAgent(MCTSConfig(iterations=300, seed=11))
        self.assertEqual(first.select_move(board), second.select_move(board))
        self.assertEqual(first.get_action_statistics(), second.get_action_statistics())

    def test_heuristic_variants_return_legal_moves(self):
        board = Board.new(4)
        configs = [
            MCTSConfig(iterations=200, seed=1),
            MCTSConfig(iterations=200, seed=1, heuristic_source="child"),
            MCTSConfig(iterations=200, seed=1, blend_solved_heuristic=True),
        ]
        for config in configs:
            for heuristic in (SolverHeuristic(), MaterialHeuristic()):
                with self.subTest(config=str(config), heuristic=heuristic):
                    agent = MCTSAgent(config, heuristic=heuristic)
                    self.assertTrue(board.is_available_move(agent.select_move(board)))


class RecordingHeuristic:
    """Zero heuristic that remembers every position it evaluates."""

    def __init__(self):
        self.positions = []

    def value(self, position, depth=0):
        self.positions.append(position)
        return 0


class TestHeuristicSource(unittest.TestCase):
    """Test case for the position the heuristic is evaluated on."""

    def test_parent_is_the_default(self):
        self.assertEqual(MCTSConfig().heuristic_source, "parent")
        self.assertEqual(DEFAULT_CONFIG, MCTSConfig.default())
        self.assertEqual(DEFAULT_CONFIG.iterations, DEFAULT_MCTS_ITERATIONS)
        self.assertEqual(DEFAULT_CONFIG.exploration_weight, DEFAULT_MCTS_EXPLORATION)

    def test_parent_source_evaluates_selecting_position(self):
        board = Board.new(4)
        heuristic = RecordingHeuristic()
        mcts_build_tree(board, 50, 1.4, heuristic, random.Random(0))
        self.assertGreater(sum(1 for p in heuristic.positions if p == board), 0)

    def test_child_source_evaluates_children(self):
        board = Board.new(4)
        heuristic = RecordingHeuristic()
        mcts_build_tree(board, 50, 1.4, heuristic, random.Random(0), heuristic_source="child")
        self.assertGreater(len(heuristic.positions), 0)
        self.assertEqual(sum(1 for p in heuristic.positions if p == board), 0)

        children = {board.play(mv) for mv in board.available_moves()}
        self.assertTrue(children & set(heuristic.positions))


class TestPreconditions(unittest.TestCase):
    """Test case for misuse of the search."""

    def test_zero_iterations(self):
        with self.assertRaises(ValueError):
            mcts_build_tree(Board.new(3), 0, 1.4, ZeroHeuristic(), random.Random())
        with self.assertRaises(ValueError):
            MCTSConfig(iterations=0)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            MCTSConfig(exploration_weight=-1.0)
        with self.assertRaises(ValueError):
            MCTSConfig(heuristic_source="sibling")

    def test_playout_on_finished_position(self):
        board = play_line(3, ["a1a2", "b3b2", "c1c2"])
        with self.assertRaises(ValueError):
            random_playout(board, random.Random())

    def test_move_on_finished_position(self):
        board = play_line(3, ["a1a2", "c3c2", "a2b3"])
        with self.assertRaises(ValueError):
            MCTSAgent(MCTSConfig(iterations=10)).select_move(board)


class TestAgent(unittest.TestCase):
    """Test case for the MCTS agent and its factory."""

    def test_repr(self):
        config = MCTSConfig(iterations=100, exploration_weight=2.0)
        self.assertEqual(repr(MCTSAgent(config)),
                         "MCTSBot(iterations=100, exploration_weight=2.0)")
        self.assertEqual(repr(MCTSAgent(config, heuristic=MaterialHeuristic())),
                         "MCTSHeuristicBot(iterations=100, exploration_weight=2.0, "
                         "heuristic=MaterialHeuristic)")

    def test_statistics(self):
        agent = MCTSAgentFactory.create_custom(iterations=100, heuristic="advancement", seed=0)
        agent.select_move(Board.new(5))
        stats = agent.get_last_statistics()
        self.assertEqual(stats["iterations"], 100)
        self.assertEqual(stats["root_visits"], 100)
        self.assertGreater(stats["node_count"], 1)
        self.assertTrue(agent.get_principal_variation())

    def test_config_round_trip(self):
        config = MCTSConfig(iterations=123, seed=9, heuristic_source="parent")
        data = dict(config.to_dict(), unknown_key=1)
        self.assertEqual(MCTSConfig.from_dict(data), config)


if __name__ == "__main__":
    unittest.main()
