#!/usr/bin/env python3
"""tester.py

Runs automated games with one guess strategy and prints summary statistics.
Optionally writes a matplotlib graph and/or a JSON summary to disk.

Examples:
  wordlebot-tester --words official_allowed_guesses.txt --answers shuffled_real_wordles.txt --sessions 200
  wordlebot-tester --words words.txt --strategy 7 --ranks enwiki-words-frequency.txt --plot results.png
  wordlebot-tester --words words.txt --target crane --sessions 20 --verbose

Notes:
- --sessions 0 (the default) plays every possible answer exactly once.
- Negative outcome codes mean a solver bug, not a lost game; they are
  counted separately under "Errors".
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from collections import Counter
from pathlib import Path
from typing import List, Optional

from .batch import BatchStats, format_summary, run_batch, summarize_codes
from .cli import build_loggers, strategy_help
from .rules import MAX_STEPS
from .session import GameResult
from .strategies import STRATEGY_IDS, GuessSelector
from .words import RankTable, load_dictionary, load_rank_table


def _expand_path(p: str) -> Path:
    return Path(p).expanduser().resolve()


def write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    tmp.replace(path)


def plot_results(*, results: List[GameResult], stats: BatchStats, max_steps: int, out_path: str) -> None:
    # Import matplotlib only if plotting is requested.
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt  # noqa: E402

    solved_counts = Counter(r.steps for r in results if r.solved)

    xs = list(range(1, max_steps + 1))
    ys = [solved_counts.get(t, 0) for t in xs]

    fail_x = max_steps + 1
    err_x = max_steps + 2

    fig, ax = plt.subplots(figsize=(10, 4.5))
    ax.bar(xs, ys, label="Solved", color="C0")
    ax.bar([fail_x], [stats.unsolved], label="Unsolved", color="C3")
    ax.bar([err_x], [stats.errored], label="Errors", color="C1")

    ax.set_title("Wordle solver results")
    ax.set_xlabel("Steps to solve")
    ax.set_ylabel("# games")
    ax.set_xticks(xs + [fail_x, err_x])
    ax.set_xticklabels([str(t) for t in xs] + ["fail", "error"])

    ax.text(
        0.99,
        0.95,
        f"Solved: {stats.solved}/{stats.total} ({stats.success_rate:.1f}%)",
        transform=ax.transAxes,
        ha="right",
        va="top",
    )

    ax.legend(loc="upper left")
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Run Wordle solver simulations and print statistics.")
    ap.add_argument("--words", type=str, default=None, help="Allowed guess list (5-letter words).")
    ap.add_argument("--answers", type=str, default=None, help="Possible answers list (5-letter words).")
    ap.add_argument("--ranks", type=str, default=None, help="Word frequency corpus, used by strategies 5-7.")
    ap.add_argument("--strategy", type=int, choices=STRATEGY_IDS, default=1, help=strategy_help())
    ap.add_argument("--sessions", type=int, default=0,
                    help="Number of games with random answers (0 = every possible answer once).")
    ap.add_argument("--target", type=str, default=None, help="Always use this answer.")
    ap.add_argument("--seed", type=int, default=None, help="Seed for answer picks and tie-breaks.")
    ap.add_argument("--no-progress", action="store_true", help="Disable progress bars.")
    ap.add_argument("--verbose", action="store_true", help="Print every attempt of every game.")
    ap.add_argument("--debug", action="store_true", help="Very verbose logs (unranked words, ...).")
    ap.add_argument("--plot", type=str, default=None, help="Write a matplotlib graph to this path (e.g. results.png).")
    ap.add_argument("--result-path", type=str, default=None, help="Write the summary to this JSON file.")
    args = ap.parse_args(argv)

    if args.words is None:
        print("No word list given. Provide one with --words.", file=sys.stderr)
        return 1
    if args.sessions < 0:
        print("--sessions must be >= 0.", file=sys.stderr)
        return 1

    try:
        dictionary = load_dictionary(args.words, args.answers)
    except OSError as e:
        print(f"Failed to read word list: {e}", file=sys.stderr)
        return 2
    if not dictionary.values:
        print("Loaded 0 allowed guesses.", file=sys.stderr)
        return 2

    target = args.target.strip().lower() if args.target else None
    if target is not None and target not in dictionary:
        print(f"Target '{target}' is not in the dictionary; every game will fail.", file=sys.stderr)

    log, log_debug = build_loggers(verbose=bool(args.verbose or args.debug), debug=args.debug)

    ranks: Optional[RankTable] = None
    if args.ranks:
        try:
            ranks = load_rank_table(args.ranks, log_debug=log_debug)
        except OSError as e:
            print(f"Failed to read rank corpus: {e}", file=sys.stderr)
            return 2

    selector = GuessSelector(ranks, rng=random.Random(args.seed))
    results = run_batch(
        dictionary,
        args.strategy,
        sessions=args.sessions or None,
        target=target,
        selector=selector,
        seed=args.seed,
        progress=not args.no_progress,
        log=log,
    )

    stats = summarize_codes(r.code for r in results)
    print(format_summary(stats, results))

    if args.result_path:
        path = _expand_path(args.result_path)
        payload = {"strategy": args.strategy, "seed": args.seed, **stats.as_dict()}
        try:
            write_json(path, payload)
            print(f"Wrote summary: {path}")
        except OSError as e:
            print(f"Failed to write summary: {e}", file=sys.stderr)
            return 2

    if args.plot:
        plot_results(results=results, stats=stats, max_steps=MAX_STEPS, out_path=args.plot)
        print(f"Wrote plot: {args.plot}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
