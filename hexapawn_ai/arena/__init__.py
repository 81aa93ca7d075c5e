"""
Bot-vs-bot experiments for hexapawn.

This package contains the match runner, the bot roster with its experiment
configuration, and the reader and writer of result logs.
"""
from hexapawn_ai.arena.config import (
    ALL_BOT_TYPES, BotType, ExperimentConfig, bot_factory, create_bot
)
from hexapawn_ai.arena.match import BotGameResult, play_game, run_match
from hexapawn_ai.arena.results import (
    ResultEntry, ResultKey, Results, ResultsParseError,
    classify, format_result, load_results, parse_line, parse_results,
    parse_wdl, write_results, write_size_header
)

__all__ = [
    'ALL_BOT_TYPES', 'BotType', 'ExperimentConfig', 'bot_factory', 'create_bot',
    'BotGameResult', 'play_game', 'run_match',
    'ResultEntry', 'ResultKey', 'Results', 'ResultsParseError',
    'classify', 'format_result', 'load_results', 'parse_line', 'parse_results',
    'parse_wdl', 'write_results', 'write_size_header',
]
