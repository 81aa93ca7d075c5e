"""
Solver Monte Carlo Tree Search (MCTS) for hexapawn.

This package provides an MCTS bot that interleaves random playouts with
exact solving. Each iteration:

1. Selection: Starting from the root, descend into the child with the best
   UCT score plus a decaying heuristic bonus, while all children are visited.
2. Expansion: Expand a leaf by creating all of its children at once;
   children whose position is finished start out solved.
3. Simulation: Play a random game from one unvisited child.
4. Backpropagation: Update the nodes on the path, flipping the result at
   every ply, and prove nodes whose children decide their outcome.

The search works on any position offering the operations of
hexapawn_ai.core.protocol.Position.
"""

from hexapawn_ai.mcts.node import Estimate, Solved, IdxRange, Node, Tree
from hexapawn_ai.mcts.agent import MCTSAgent, MCTSAgentFactory
from hexapawn_ai.mcts.search import (
    random_playout,
    uct_heuristic,
    solve_from_children,
    expand_node,
    select_child,
    mcts_solver_step,
    mcts_build_tree
)
from hexapawn_ai.mcts.config import MCTSConfig

# Default configuration
DEFAULT_CONFIG = MCTSConfig.default()

__all__ = [
    'MCTSAgent',
    'MCTSAgentFactory',
    'MCTSConfig',
    'Estimate',
    'Solved',
    'IdxRange',
    'Node',
    'Tree',
    'random_playout',
    'uct_heuristic',
    'solve_from_children',
    'expand_node',
    'select_child',
    'mcts_solver_step',
    'mcts_build_tree',
    'DEFAULT_CONFIG'
]
