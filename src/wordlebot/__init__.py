"""Solver package."""

from .batch import BatchStats, run_batch, summarize_codes
from .constraints import MaxCount, MinCount, PositionExact, PositionExclude, derive_facts, narrow
from .frequency import letter_weights, positional_weights
from .mask import Pattern, evaluate, parse_pattern
from .rules import MAX_STEPS, WORD_SIZE
from .session import GameResult, Outcome, SolveSession, solve_interactive, solve_unattended
from .strategies import BLACKLIST, STRATEGY_IDS, GuessSelector
from .words import Dictionary, RankTable, load_dictionary, load_rank_table, load_words_from_file

__all__ = [
    "BLACKLIST",
    "BatchStats",
    "Dictionary",
    "GameResult",
    "GuessSelector",
    "MAX_STEPS",
    "MaxCount",
    "MinCount",
    "Outcome",
    "Pattern",
    "PositionExact",
    "PositionExclude",
    "RankTable",
    "STRATEGY_IDS",
    "SolveSession",
    "WORD_SIZE",
    "derive_facts",
    "evaluate",
    "letter_weights",
    "load_dictionary",
    "load_rank_table",
    "load_words_from_file",
    "narrow",
    "parse_pattern",
    "positional_weights",
    "run_batch",
    "solve_interactive",
    "solve_unattended",
    "summarize_codes",
]
