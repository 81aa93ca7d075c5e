"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the solver MCTS,
including the iteration budget, the exploration constant and the policy
points that control how the heuristic is blended into selection.
"""
from dataclasses import dataclass
from typing import Literal, Optional

from hexapawn_ai.core.constants import DEFAULT_MCTS_ITERATIONS, DEFAULT_MCTS_EXPLORATION


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the MCTS algorithm,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: int = DEFAULT_MCTS_ITERATIONS
    """Maximum number of MCTS iterations per move decision"""

    exploration_weight: float = DEFAULT_MCTS_EXPLORATION
    """UCT exploration parameter"""

    seed: Optional[int] = None
    """Seed for the agent's random source (None = seed from the OS)"""

    # Heuristic blending
    heuristic_source: Literal["parent", "child"] = "parent"
    """Position the heuristic is evaluated on during selection.
    'parent' evaluates the parent position once for every child,
    'child' negates each child's value to the parent mover's side."""

    blend_solved_heuristic: bool = False
    """Whether solved children also receive the decaying heuristic term"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.exploration_weight < 0:
            raise ValueError("exploration_weight must be non-negative")

        if self.heuristic_source not in ["child", "parent"]:
            raise ValueError("heuristic_source must be 'child' or 'parent'")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=500)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(
            iterations=50_000,
            exploration_weight=1.4  # Slightly less exploration
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {name: getattr(self, name) for name in self.__dataclass_fields__}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
