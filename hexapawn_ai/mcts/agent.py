"""
Monte Carlo Tree Search Agent for hexapawn.

This module provides the MCTSAgent class, a ready-to-use bot that builds a
fresh solver MCTS tree for every move request and plays the best child of
the root. The agent can be configured with different parameters and a
heuristic, and keeps statistics about its last search.
"""
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
import random
import time

from hexapawn_ai.core.protocol import Heuristic, Position
from hexapawn_ai.bots.heuristics import (
    AdvancementHeuristic, MaterialHeuristic, SolverHeuristic, ZeroHeuristic
)
from hexapawn_ai.mcts.config import MCTSConfig
from hexapawn_ai.mcts.node import Tree
from hexapawn_ai.mcts.search import count_solved, get_action_statistics, mcts_build_tree

logger = logging.getLogger(__name__)


class MCTSAgent:
    """
    Solver Monte Carlo Tree Search bot.

    Without a heuristic this is plain solver MCTS; with one, the heuristic
    is blended into child selection with a weight that decays as the child
    collects visits.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        heuristic: Optional[Heuristic] = None,
        rng: Optional[random.Random] = None,
        name: Optional[str] = None
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: MCTS configuration parameters
            heuristic: Static evaluation blended into selection (None = no heuristic)
            rng: Random source; a new one seeded from config.seed if omitted
            name: Name of the agent (defaults to its repr)
        """
        self.config = config or MCTSConfig()
        self.heuristic = heuristic
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.name = name or repr(self)

        # Statistics and tree of the most recent search
        self.last_stats: Dict[str, Any] = {}
        self.last_tree: Optional[Tree] = None

    def build_tree(self, position: Position) -> Tree:
        """
        Build a search tree for a position with this agent's settings.

        Args:
            position: Position to search

        Returns:
            Finished search tree
        """
        return mcts_build_tree(
            position,
            self.config.iterations,
            self.config.exploration_weight,
            self.heuristic if self.heuristic is not None else ZeroHeuristic(),
            self.rng,
            heuristic_source=self.config.heuristic_source,
            blend_solved=self.config.blend_solved_heuristic,
        )

    def select_move(self, position: Position) -> Any:
        """
        Select a move using solver MCTS.

        Args:
            position: Current position

        Returns:
            The move leading to the best child of the root

        Raises:
            ValueError: If the game is already over
        """
        if position.is_done():
            raise ValueError("Cannot select a move on a finished position")

        start_time = time.time()
        tree = self.build_tree(position)
        move = tree.best_move()
        elapsed = time.time() - start_time

        solution = tree.root.solution()
        self.last_tree = tree
        self.last_stats = {
            "iterations": tree.steps,
            "node_count": len(tree),
            "solved_nodes": count_solved(tree),
            "root_visits": tree.root.visits,
            "root_solution": None if solution is None else solution.name,
            "time_elapsed": elapsed,
            "iterations_per_second": tree.steps / max(0.001, elapsed),
        }

        logger.debug(
            "%s selected %s after %d iterations (%d nodes, root %s)",
            self.name, move, tree.steps, len(tree),
            self.last_stats["root_solution"] or "unsolved"
        )
        return move

    def get_last_statistics(self) -> Dict[str, Any]:
        """
        Get statistics from the most recent search.

        Returns:
            Dictionary of search statistics
        """
        return self.last_stats

    def get_principal_variation(self) -> List[Tuple[Any, int, Optional[float]]]:
        """
        Get the principal variation from the last search.

        Returns:
            List of (move, visits, value) triples
        """
        if self.last_tree is None:
            return []
        return self.last_tree.principal_variation()

    def get_action_statistics(self) -> Dict[str, Dict[str, Any]]:
        """
        Get statistics for all root moves from the last search.

        Returns:
            Dictionary mapping move strings to statistics
        """
        if self.last_tree is None:
            return {}
        return get_action_statistics(self.last_tree)

    def save_statistics(self, filename: str) -> None:
        """
        Save the last search's statistics to a JSON file.

        Args:
            filename: Name of the file to save to
        """
        data = {
            "agent_name": self.name,
            "config": self.config.to_dict(),
            "stats": self.last_stats,
            "moves": self.get_action_statistics(),
        }
        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __repr__(self) -> str:
        if self.heuristic is None:
            return (f"MCTSBot(iterations={self.config.iterations}, "
                    f"exploration_weight={self.config.exploration_weight})")
        return (f"MCTSHeuristicBot(iterations={self.config.iterations}, "
                f"exploration_weight={self.config.exploration_weight}, "
                f"heuristic={type(self.heuristic).__name__})")

    def __str__(self) -> str:
        return self.name


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents with different configurations.
    """

    @staticmethod
    def create_fast(rng: Optional[random.Random] = None) -> MCTSAgent:
        """
        Create a fast MCTS agent with fewer iterations.

        Returns:
            MCTSAgent
        """
        return MCTSAgent(config=MCTSConfig.fast(), rng=rng, name="Fast MCTS")

    @staticmethod
    def create_standard(rng: Optional[random.Random] = None) -> MCTSAgent:
        """
        Create a standard MCTS agent with balanced parameters.

        Returns:
            MCTSAgent
        """
        return MCTSAgent(config=MCTSConfig.default(), rng=rng, name="Standard MCTS")

    @staticmethod
    def create_strong(rng: Optional[random.Random] = None) -> MCTSAgent:
        """
        Create a strong MCTS agent with more iterations and the advancement heuristic.

        Returns:
            MCTSAgent
        """
        return MCTSAgent(
            config=MCTSConfig.deep(),
            heuristic=AdvancementHeuristic(),
            rng=rng,
            name="Strong MCTS"
        )

    @staticmethod
    def create_custom(
        iterations: int = 10_000,
        exploration_weight: float = 2.0,
        heuristic: Optional[str] = None,
        seed: Optional[int] = None,
        name: Optional[str] = None
    ) -> MCTSAgent:
        """
        Create a custom MCTS agent.

        Args:
            iterations: Number of MCTS iterations
            exploration_weight: UCT exploration parameter
            heuristic: 'solver', 'material', 'advancement' or None
            seed: Seed for the agent's random source
            name: Name of the agent

        Returns:
            MCTSAgent
        """
        heuristics = {
            "solver": SolverHeuristic,
            "material": MaterialHeuristic,
            "advancement": AdvancementHeuristic,
        }
        if heuristic is not None and heuristic not in heuristics:
            raise ValueError(f"Unknown heuristic: {heuristic!r}")

        config = MCTSConfig(
            iterations=iterations,
            exploration_weight=exploration_weight,
            seed=seed
        )
        return MCTSAgent(
            config=config,
            heuristic=heuristics[heuristic]() if heuristic is not None else None,
            name=name
        )
