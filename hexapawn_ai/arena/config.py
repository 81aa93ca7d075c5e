"""
Configuration for bot-vs-bot experiments.

This module defines the bot roster and the ExperimentConfig dataclass that
controls which board sizes are played, how many games each pairing gets,
and the search settings of the minimax and MCTS bots.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Optional
import json
import random

from hexapawn_ai.core.constants import (
    DEFAULT_MCTS_EXPLORATION, DEFAULT_MCTS_ITERATIONS, DEFAULT_MINIMAX_DEPTH,
    DEFAULT_TRIALS_PER_PAIRING, SIZES
)
from hexapawn_ai.bots.heuristics import AdvancementHeuristic, MaterialHeuristic, SolverHeuristic
from hexapawn_ai.bots.minimax import MiniMaxBot
from hexapawn_ai.bots.simple import AlwaysCaptureBot, AlwaysPushBot, RandomBot
from hexapawn_ai.mcts.agent import MCTSAgent
from hexapawn_ai.mcts.config import MCTSConfig


class BotType(Enum):
    """Enum representing the kinds of bots that take part in experiments."""
    RANDOM = "random"
    ALWAYS_PUSH = "push"
    ALWAYS_CAPTURE = "capture"
    MINIMAX = "minimax"
    MINIMAX_MATERIAL = "minimax-material"
    MINIMAX_ADVANCE = "minimax-advancement"
    MCTS = "mcts"
    MCTS_SOLVER = "mcts-solver"
    MCTS_MATERIAL = "mcts-material"
    MCTS_ADVANCE = "mcts-advancement"


ALL_BOT_TYPES: List[BotType] = list(BotType)


def default_output_path() -> str:
    return str(Path.home() / "hexapawn_output")


@dataclass
class ExperimentConfig:
    """
    Configuration parameters for an experiment run.

    Every ordered pairing of the selected bots plays games_per_side games
    per seat on each board size.
    """
    sizes: List[int] = field(default_factory=lambda: list(SIZES))
    """Board sizes to play on"""

    bots: List[str] = field(default_factory=lambda: [t.value for t in BotType])
    """Roster names of the bots taking part"""

    games_per_side: int = DEFAULT_TRIALS_PER_PAIRING // 4
    """Games per pairing with the left bot moving first"""

    both_sides: bool = True
    """Whether the bots also play with swapped seats"""

    minimax_depth: int = DEFAULT_MINIMAX_DEPTH
    """Search depth of the minimax bots"""

    mcts_iterations: int = DEFAULT_MCTS_ITERATIONS
    """Iteration budget of the MCTS bots"""

    mcts_exploration: float = DEFAULT_MCTS_EXPLORATION
    """UCT exploration weight of the MCTS bots"""

    seed: Optional[int] = None
    """Master seed for every bot's random source (None = unseeded)"""

    output_path: str = field(default_factory=default_output_path)
    """Where the results log is written"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if not self.sizes:
            raise ValueError("sizes must not be empty")

        for size in self.sizes:
            if size not in SIZES:
                raise ValueError(f"size {size} is not supported, must be one of {list(SIZES)}")

        if not self.bots:
            raise ValueError("bots must not be empty")

        for name in self.bots:
            BotType(name)

        if self.games_per_side <= 0:
            raise ValueError("games_per_side must be positive")

        if self.minimax_depth <= 0:
            raise ValueError("minimax_depth must be positive")

        if self.mcts_iterations <= 0:
            raise ValueError("mcts_iterations must be positive")

        if self.mcts_exploration < 0:
            raise ValueError("mcts_exploration must be non-negative")

    @property
    def bot_types(self) -> List[BotType]:
        return [BotType(name) for name in self.bots]

    @classmethod
    def quick(cls) -> 'ExperimentConfig':
        """
        Get a configuration for a short smoke run.

        Returns:
            Quick ExperimentConfig object
        """
        return cls(
            sizes=[3, 4],
            games_per_side=5,
            minimax_depth=4,
            mcts_iterations=200
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'ExperimentConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            ExperimentConfig object
        """
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    @classmethod
    def from_json(cls, path: str) -> 'ExperimentConfig':
        """
        Load a configuration from a JSON file.

        Args:
            path: Path to the JSON file

        Returns:
            ExperimentConfig object
        """
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


def create_bot(bot_type: BotType, config: ExperimentConfig, rng: random.Random) -> Any:
    """
    Create a bot of the given type.

    Args:
        bot_type: Kind of bot
        config: Experiment settings (search depth, iterations, exploration)
        rng: Random source handed to the bot

    Returns:
        Bot instance
    """
    mcts_config = MCTSConfig(
        iterations=config.mcts_iterations,
        exploration_weight=config.mcts_exploration
    )

    if bot_type is BotType.RANDOM:
        return RandomBot(rng)
    if bot_type is BotType.ALWAYS_PUSH:
        return AlwaysPushBot(rng)
    if bot_type is BotType.ALWAYS_CAPTURE:
        return AlwaysCaptureBot(rng)
    if bot_type is BotType.MINIMAX:
        return MiniMaxBot(config.minimax_depth, SolverHeuristic(), rng)
    if bot_type is BotType.MINIMAX_MATERIAL:
        return MiniMaxBot(config.minimax_depth, MaterialHeuristic(), rng)
    if bot_type is BotType.MINIMAX_ADVANCE:
        return MiniMaxBot(config.minimax_depth, AdvancementHeuristic(), rng)
    if bot_type is BotType.MCTS:
        return MCTSAgent(mcts_config, rng=rng)
    if bot_type is BotType.MCTS_SOLVER:
        return MCTSAgent(mcts_config, heuristic=SolverHeuristic(), rng=rng)
    if bot_type is BotType.MCTS_MATERIAL:
        return MCTSAgent(mcts_config, heuristic=MaterialHeuristic(), rng=rng)
    if bot_type is BotType.MCTS_ADVANCE:
        return MCTSAgent(mcts_config, heuristic=AdvancementHeuristic(), rng=rng)
    raise ValueError(f"Unknown bot type: {bot_type}")


def bot_factory(
    bot_type: BotType,
    config: ExperimentConfig,
    master_rng: Optional[random.Random] = None
) -> Callable[[], Any]:
    """
    Get a factory that creates fresh bots of a type.

    With a master random source, every bot gets its own source seeded from
    it, so a seeded experiment is reproducible.

    Args:
        bot_type: Kind of bot
        config: Experiment settings
        master_rng: Source of seeds for the bots (None = unseeded bots)

    Returns:
        Zero-argument callable returning a new bot
    """
    def factory() -> Any:
        if master_rng is None:
            rng = random.Random()
        else:
            rng = random.Random(master_rng.getrandbits(64))
        return create_bot(bot_type, config, rng)

    return factory
