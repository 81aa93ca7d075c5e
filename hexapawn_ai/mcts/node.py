"""
Search tree for the solver MCTS.

This module defines the Tree class, an arena of Node records addressed by
integer index, with the root at index 0. A node's children are a
contiguous IdxRange into the same arena, assigned once when the node is
expanded. Nodes never point back to their parent.

Every node's statistics are kept from the point of view of the player to
act in the position the node represents.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from hexapawn_ai.core.outcome import OutcomeWDL, WDL

P = TypeVar("P")


@dataclass(frozen=True)
class Estimate:
    """The node's true outcome is unknown; wdl holds the sampled results."""
    wdl: WDL = WDL()


@dataclass(frozen=True)
class Solved:
    """The node's outcome has been proven exactly."""
    outcome: OutcomeWDL


NodeStatus = Union[Estimate, Solved]


@dataclass(frozen=True)
class IdxRange:
    """A contiguous range of node indices."""
    start: int
    length: int

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.start + self.length))

    def __len__(self) -> int:
        return self.length

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.start + self.length


@dataclass
class Node:
    """
    A vertex of the search tree.

    last_move is the move that led here from the parent (None for the
    root). children stays None until the node is expanded, after which it
    never changes. status only ever moves from Estimate to Solved.
    """
    last_move: Optional[Any]
    visits: int = 0
    children: Optional[IdxRange] = None
    status: NodeStatus = field(default_factory=Estimate)

    @classmethod
    def new(cls, last_move: Optional[Any], outcome: Optional[OutcomeWDL]) -> 'Node':
        """
        Create an unvisited node, pre-solved if its outcome is already known.

        Args:
            last_move: Move leading to this node
            outcome: Known outcome for the player to act, or None

        Returns:
            New Node
        """
        status: NodeStatus = Estimate() if outcome is None else Solved(outcome)
        return cls(last_move=last_move, status=status)

    def solution(self) -> Optional[OutcomeWDL]:
        """Get the proven outcome, or None while it is still estimated."""
        if isinstance(self.status, Solved):
            return self.status.outcome
        return None

    def is_solved(self) -> bool:
        return isinstance(self.status, Solved)

    def is_unvisited(self) -> bool:
        return self.visits == 0

    def wdl(self) -> WDL:
        """
        Get the results counted at this node.

        A solved node counts every visit as its proven outcome.
        """
        if isinstance(self.status, Estimate):
            return self.status.wdl
        single = self.status.outcome.to_wdl()
        return WDL(single.win * self.visits, single.draw * self.visits, single.loss * self.visits)

    def mean_value(self) -> Optional[float]:
        """Average score in [0, 1], a draw counting half; None if unvisited."""
        if isinstance(self.status, Solved):
            return (self.status.outcome.sign() + 1) / 2
        if self.visits == 0:
            return None
        return self.status.wdl.combined() / self.status.wdl.total()

    def increment(self, outcome: OutcomeWDL) -> None:
        """
        Record one more result at this node.

        Args:
            outcome: Result from the point of view of the player to act here
        """
        self.visits += 1
        if isinstance(self.status, Estimate):
            self.status = Estimate(self.status.wdl + outcome.to_wdl())

    def mark_solved(self, outcome: OutcomeWDL) -> None:
        """
        Mark this node as proven.

        Raises:
            ValueError: If the node was already proven with another outcome
        """
        current = self.solution()
        if current is not None and current is not outcome:
            raise ValueError(f"Node already solved as {current.name}, cannot re-solve as {outcome.name}")
        self.status = Solved(outcome)

    def __str__(self) -> str:
        if isinstance(self.status, Solved):
            status = f"solved={self.status.outcome.name}"
        else:
            status = f"wdl={self.status.wdl}"
        children = len(self.children) if self.children is not None else "unexpanded"
        return f"Node(move={self.last_move}, visits={self.visits}, {status}, children={children})"


def _proof_rank(child: Node) -> int:
    """Rank a child for the player choosing it: proven win 2, proven loss 0."""
    solution = child.solution()
    if solution is None:
        return 1
    # The child's outcome is stored from the opponent's side
    return solution.flip().sign() + 1


class Tree(Generic[P]):
    """
    Arena of search nodes plus the root position.

    Grows only by appending nodes during expansion, and is discarded
    once a move has been read off it.
    """

    def __init__(self, root_position: P):
        self.root_position = root_position
        self.nodes: List[Node] = []
        self.steps = 0

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def append(self, node: Node) -> int:
        """Add a node to the arena and return its index."""
        self.nodes.append(node)
        return len(self.nodes) - 1

    def best_child(self, node: int = 0) -> Optional[int]:
        """
        Get the child a player should pick at a node.

        A child proven winning for the player is preferred, a child proven
        losing is avoided; otherwise the most visited child wins. Ties go
        to the first child in move order.

        Args:
            node: Index of the node

        Returns:
            Index of the chosen child, or None if the node is unexpanded
        """
        children = self[node].children
        if children is None or len(children) == 0:
            return None
        return max(children, key=lambda c: (_proof_rank(self[c]), self[c].visits))

    def best_move(self) -> Any:
        """
        Get the move to play from the root.

        Raises:
            ValueError: If the root has not been expanded
        """
        best = self.best_child(0)
        if best is None:
            raise ValueError("Root node has no children to pick a move from")
        return self[best].last_move

    def principal_variation(self, max_depth: int = 10) -> List[Tuple[Any, int, Optional[float]]]:
        """
        Follow the best child from the root.

        Args:
            max_depth: Maximum number of plies to follow

        Returns:
            List of (move, visits, value) triples; values are from the side
            of the player who made the move
        """
        result = []
        current = 0
        while len(result) < max_depth:
            best = self.best_child(current)
            if best is None:
                break
            child = self[best]
            value = child.mean_value()
            result.append((child.last_move, child.visits, None if value is None else 1.0 - value))
            current = best
        return result

    def root_summary(self) -> Dict[str, Any]:
        """
        Summarise the root for reports and debugging.

        Returns:
            Dictionary with the root's visits, status and per-move statistics
        """
        root = self.root
        solution = root.solution()
        moves = {}
        if root.children is not None:
            for c in root.children:
                child = self[c]
                child_solution = child.solution()
                value = child.mean_value()
                moves[str(child.last_move)] = {
                    "visits": child.visits,
                    "value": None if value is None else 1.0 - value,
                    "solved": None if child_solution is None else child_solution.flip().name,
                }
        return {
            "visits": root.visits,
            "solved": None if solution is None else solution.name,
            "wdl": str(root.wdl()),
            "node_count": len(self.nodes),
            "moves": moves,
        }
