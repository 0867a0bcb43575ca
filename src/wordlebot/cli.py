#!/usr/bin/env python3
"""
cli.py

A Wordle helper that guesses for you. You play Wordle elsewhere; after each
guess you type the feedback mask here.

Mask format:
- 5 digits of: 0 (grey), 1 (yellow), 2 (green)
  Example: "02120"  (the letters g/y/b are accepted too: "bygyb")
- press Enter on the guess prompt to play the suggested word
- press Enter on the mask prompt to skip a word the game did not accept

Usage:
  wordlebot --words official_allowed_guesses.txt --answers shuffled_real_wordles.txt
  wordlebot --words words.txt --ranks enwiki-words-frequency.txt --strategy 7
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from typing import List, Optional

from .session import SolveSession, solve_interactive
from .strategies import STRATEGIES, STRATEGY_IDS, GuessSelector
from .words import RankTable, load_dictionary, load_rank_table


def strategy_help() -> str:
    return "; ".join(f"{s.id}={s.description}" for s in STRATEGIES.values())


def build_loggers(verbose: bool, debug: bool):
    start_t = time.time()

    def log(msg: str) -> None:
        if not verbose:
            return
        dt = time.time() - start_t
        print(f"[{dt:7.2f}s] {msg}")

    def log_debug(msg: str) -> None:
        if not debug:
            return
        dt = time.time() - start_t
        print(f"[{dt:7.2f}s] DEBUG {msg}")

    return log, log_debug


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Wordle solver (interactive CLI).")
    ap.add_argument("--words", type=str, default=None,
                    help="Path to allowed guess words (5-letter). One per line.")
    ap.add_argument("--answers", type=str, default=None,
                    help="Path to possible answer words (5-letter). One per line. If omitted, uses --words list.")
    ap.add_argument("--ranks", type=str, default=None,
                    help="Word frequency corpus ('word count' per line, most frequent first). Used by strategies 5-7.")
    ap.add_argument("--strategy", type=int, choices=STRATEGY_IDS, default=1, help=strategy_help())
    ap.add_argument("--seed", type=int, default=None, help="Seed for random tie-breaks.")
    ap.add_argument("--show", type=int, default=20, help="List the candidates when at most this many remain.")
    ap.add_argument("--debug", action="store_true", help="Very verbose logs (unranked words, ...).")
    args = ap.parse_args(argv)

    if args.words is None:
        print("No default word list found. Provide one with --words.", file=sys.stderr)
        return 1

    try:
        dictionary = load_dictionary(args.words, args.answers)
    except OSError as e:
        print(f"Failed to read word list: {e}", file=sys.stderr)
        return 2
    if not dictionary.values:
        print(f"Loaded 0 usable words from {args.words}. Check the file.", file=sys.stderr)
        return 2

    log, log_debug = build_loggers(verbose=True, debug=args.debug)

    ranks: Optional[RankTable] = None
    if args.ranks:
        try:
            ranks = load_rank_table(args.ranks, log_debug=log_debug)
        except OSError as e:
            print(f"Failed to read rank corpus: {e}", file=sys.stderr)
            return 2

    selector = GuessSelector(ranks, rng=random.Random(args.seed))
    session = SolveSession(dictionary, selector, strategy_id=args.strategy)

    print("\n=== Wordle Solver ===")
    print(f"Dictionary size: {len(dictionary.values)} (solutions = {len(dictionary.solutions)})")
    if ranks is not None:
        print(f"Ranked words: {len(ranks)}")
    print(f"Strategy: {args.strategy} ({STRATEGIES[args.strategy].description})")
    print("Mask input: 5 digits [0,1,2] or letters [b,y,g]. Example: 02120 or bygyb")
    print("Type 'quit' to exit.\n")

    def ask_guess(suggestion: str) -> str:
        n = len(session.candidates)
        if n <= args.show:
            print("Candidates:", " ".join(session.candidates))
        print(f"Suggested guess: {suggestion}")
        return input("Enter the word you played (press Enter to use suggested): ")

    def ask_mask(guess: str) -> str:
        return input(f"Enter the mask for '{guess}' (0=grey, 1=yellow, 2=green, Enter to skip word): ")

    def warn(msg: str) -> None:
        print(f"{msg}\n", file=sys.stderr)

    try:
        result = solve_interactive(session, ask_guess, ask_mask, log=log, warn=warn)
    except (EOFError, KeyboardInterrupt):
        print("")
        return 0

    print(f"\nResult: {result.outcome.value} after {result.steps} steps.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
