"""
Solver Monte Carlo Tree Search (MCTS).

This module implements MCTS with exact solving. Each step:
1. Selection: descend through fully visited nodes by UCT plus a decaying
   heuristic bonus
2. Expansion: create every child of a leaf at once, pre-solving terminal ones
3. Simulation: random playout from one unvisited child
4. Backpropagation: flip the result once per ply on the way back up

Whenever a child becomes proven, the parent tries to prove itself from its
children (a proven win among them, or every child proven). Proven nodes
answer immediately without further sampling.
"""
from __future__ import annotations
from typing import Literal, Optional, Tuple
import logging
import math
import random

from hexapawn_ai.core.outcome import Outcome, OutcomeWDL
from hexapawn_ai.core.protocol import Heuristic, Position
from hexapawn_ai.mcts.node import IdxRange, Node, Solved, Tree

logger = logging.getLogger(__name__)

HeuristicSource = Literal["child", "parent"]


def random_playout(position: Position, rng: random.Random) -> Outcome:
    """
    Play uniformly random moves until the game ends.

    Args:
        position: A position that is not finished
        rng: Random source

    Returns:
        The final outcome

    Raises:
        ValueError: If the position is already finished
    """
    if position.is_done():
        raise ValueError("Cannot start a random playout on a finished position")

    while True:
        position = position.play(position.random_available_move(rng))
        outcome = position.outcome()
        if outcome is not None:
            return outcome


def uct_heuristic(
    node: Node,
    parent_visits: int,
    exploration_weight: float,
    heuristic_value: float,
    blend_solved: bool = False
) -> float:
    """
    Selection score of a child for the player choosing it.

    score = value_unit + exploration_weight * sqrt(ln(N) / n) + h / (n + 1)

    where value_unit is the child's average result in [0, 1] for the
    chooser, N the parent's visits and n the child's. A solved child
    scores 1, 0.5 or 0 for a proven win, draw or loss.

    Args:
        node: Child node; must be visited unless solved
        parent_visits: Visit count of the parent
        exploration_weight: Weight of the exploration term
        heuristic_value: Heuristic estimate for the chooser
        blend_solved: Also add the heuristic term to solved children

    Returns:
        UCT score
    """
    if isinstance(node.status, Solved):
        score = (node.status.outcome.flip().sign() + 1) / 2
        if blend_solved:
            score += heuristic_value / (node.visits + 1)
        return score

    # Child statistics are kept for the player to act there, the opponent
    wdl = -node.status.wdl
    visits = wdl.total()
    value = wdl.value() / visits
    value_unit = (value + 1) / 2

    explore = math.sqrt(math.log(parent_visits) / visits)

    return value_unit + exploration_weight * explore + heuristic_value / (visits + 1)


def solve_from_children(tree: Tree, children: IdxRange) -> Optional[OutcomeWDL]:
    """
    Try to prove a node from its children's proven outcomes.

    Args:
        tree: Search tree
        children: Children of the node

    Returns:
        Proven outcome for the player to act at the node, or None
    """
    return OutcomeWDL.best_maybe(
        None if solution is None else solution.flip()
        for solution in (tree[c].solution() for c in children)
    )


def expand_node(tree: Tree, index: int, position: Position) -> IdxRange:
    """
    Append one child per legal move and record them on the node.

    Children whose position is finished start out solved.

    Args:
        tree: Search tree
        index: Node to expand
        position: Position of that node

    Returns:
        The node's children
    """
    start = len(tree)
    for mv in position.available_moves():
        next_position = position.play(mv)
        outcome = next_position.outcome()
        solution = None if outcome is None else outcome.pov(next_position.next_player())
        tree.append(Node.new(mv, solution))

    children = IdxRange(start, len(tree) - start)
    tree[index].children = children
    return children


def select_child(
    tree: Tree,
    index: int,
    position: Position,
    exploration_weight: float,
    heuristic: Heuristic,
    heuristic_source: HeuristicSource = "parent",
    blend_solved: bool = False
) -> int:
    """
    Pick the child with the highest UCT score, the first one on ties.

    Args:
        tree: Search tree
        index: Node whose children are all visited or solved
        position: Position of that node
        exploration_weight: Weight of the exploration term
        heuristic: Static evaluation blended into the score
        heuristic_source: Evaluate the heuristic on the parent or on each child
        blend_solved: Also add the heuristic term to solved children

    Returns:
        Index of the selected child
    """
    node = tree[index]
    parent_value = heuristic.value(position, 0) if heuristic_source == "parent" else None

    best_index = -1
    best_score = -math.inf
    for c in node.children:
        child = tree[c]
        if child.is_solved() and not blend_solved:
            h = 0.0
        elif parent_value is not None:
            h = float(parent_value)
        else:
            # Heuristic is for the player to act in the child, the opponent
            h = -float(heuristic.value(position.play(child.last_move), 0))

        score = uct_heuristic(child, node.visits, exploration_weight, h, blend_solved)
        if score > best_score:
            best_index = c
            best_score = score
    return best_index


def mcts_solver_step(
    tree: Tree,
    index: int,
    position: Position,
    exploration_weight: float,
    heuristic: Heuristic,
    rng: random.Random,
    heuristic_source: HeuristicSource = "parent",
    blend_solved: bool = False
) -> Tuple[OutcomeWDL, bool]:
    """
    Run a single MCTS step from a node.

    The node's visit count has already been updated when this returns,
    unless the node got proven.

    Args:
        tree: Search tree
        index: Current node
        position: Position of the current node
        exploration_weight: Weight of the exploration term
        heuristic: Static evaluation blended into selection
        rng: Random source shared by the whole search
        heuristic_source: Evaluate the heuristic on the parent or on each child
        blend_solved: Also add the heuristic term to solved children

    Returns:
        (result, proven), result being from the point of view of the player
        to act at the current node
    """
    solution = tree[index].solution()
    if solution is not None:
        return solution, True

    children = tree[index].children
    if children is None:
        children = expand_node(tree, index, position)

        outcome = solve_from_children(tree, children)
        if outcome is not None:
            tree[index].mark_solved(outcome)
            return outcome, True

    unvisited = [c for c in children if tree[c].is_unvisited() and not tree[c].is_solved()]

    if unvisited:
        picked = rng.choice(unvisited)
        next_position = position.play(tree[picked].last_move)

        child_result = random_playout(next_position, rng).pov(next_position.next_player())
        tree[picked].increment(child_result)
        proven = False
    else:
        picked = select_child(
            tree, index, position, exploration_weight, heuristic,
            heuristic_source, blend_solved
        )
        next_position = position.play(tree[picked].last_move)

        child_result, proven = mcts_solver_step(
            tree, picked, next_position, exploration_weight, heuristic, rng,
            heuristic_source, blend_solved
        )

    result = child_result.flip()

    if proven:
        # A newly proven child may prove this node as well
        outcome = solve_from_children(tree, children)
        if outcome is not None:
            tree[index].mark_solved(outcome)
            return outcome, True

    tree[index].increment(result)
    return result, False


def mcts_build_tree(
    root_position: Position,
    iterations: int,
    exploration_weight: float,
    heuristic: Heuristic,
    rng: random.Random,
    heuristic_source: HeuristicSource = "parent",
    blend_solved: bool = False
) -> Tree:
    """
    Build a search tree for a position.

    Stops after the given number of steps, or as soon as the root is proven.

    Args:
        root_position: Position to search
        iterations: Maximum number of steps, at least 1
        exploration_weight: Weight of the exploration term
        heuristic: Static evaluation blended into selection
        rng: Random source shared by the whole search
        heuristic_source: Evaluate the heuristic on the parent or on each child
        blend_solved: Also add the heuristic term to solved children

    Returns:
        The finished tree; tree.steps holds the number of steps run

    Raises:
        ValueError: If iterations is not positive
    """
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    tree = Tree(root_position)
    root_outcome = root_position.outcome()
    tree.append(Node.new(
        None,
        None if root_outcome is None else root_outcome.pov(root_position.next_player())
    ))

    for _ in range(iterations):
        # We've solved the root node, so we're done
        if tree.root.is_solved():
            break

        mcts_solver_step(
            tree, 0, root_position, exploration_weight, heuristic, rng,
            heuristic_source, blend_solved
        )
        tree.steps += 1

    logger.debug(
        "Built tree: %d steps, %d nodes, root %s",
        tree.steps, len(tree), tree.root
    )
    return tree


def count_solved(tree: Tree) -> int:
    """Count the proven nodes of a tree."""
    return sum(1 for node in tree.nodes if node.is_solved())


def get_action_statistics(tree: Tree) -> dict:
    """
    Get statistics for every move from the root.

    Args:
        tree: Finished search tree

    Returns:
        Dictionary mapping move strings to statistics
    """
    return tree.root_summary()["moves"]
