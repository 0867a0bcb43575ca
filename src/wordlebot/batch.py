"""
batch.py

Unattended evaluation: play many independent games and aggregate the
outcome codes into success rate and mean steps-to-solve.
"""

from __future__ import annotations

import random
import statistics
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import tqdm

from .rules import MAX_STEPS, LogFn
from .session import GameResult, solve_unattended
from .strategies import GuessSelector
from .words import Dictionary


@dataclass(frozen=True)
class BatchStats:
    total: int
    solved: int
    unsolved: int
    errored: int
    success_rate: float
    mean_steps: Optional[float]
    distribution: Dict[int, int] = field(default_factory=dict)

    @property
    def unsolved_rate(self) -> float:
        return self.unsolved / self.total * 100.0 if self.total else 0.0

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "solved": self.solved,
            "unsolved": self.unsolved,
            "errored": self.errored,
            "success_rate": self.success_rate,
            "mean_steps": self.mean_steps,
            "distribution": {str(k): v for k, v in sorted(self.distribution.items())},
        }


# summarize_codes aggregates outcome codes (see session.outcome_code)
def summarize_codes(codes: Iterable[int], max_steps: int = MAX_STEPS) -> BatchStats:
    codes = list(codes)
    solved = [c for c in codes if 0 < c <= max_steps]
    unsolved = [c for c in codes if c > max_steps]
    errored = [c for c in codes if c <= 0]

    total = len(codes)
    return BatchStats(
        total=total,
        solved=len(solved),
        unsolved=len(unsolved),
        errored=len(errored),
        success_rate=(len(solved) / total * 100.0) if total else 0.0,
        mean_steps=statistics.mean(solved) if solved else None,
        distribution=dict(Counter(solved)),
    )


def format_summary(stats: BatchStats, results: Optional[List[GameResult]] = None) -> str:
    if not stats.total:
        return "No results."

    lines: List[str] = []
    lines.append(f"Games: {stats.total}")
    lines.append(f"Solved: {stats.solved} ({stats.success_rate:.2f}%)")
    lines.append(f"Unsolved: {stats.unsolved} ({stats.unsolved_rate:.2f}%)")
    lines.append(f"Errors: {stats.errored}")

    if stats.mean_steps is not None:
        dist = stats.distribution
        lines.append(f"Avg steps (solved): {stats.mean_steps:.2f}")
        lines.append("Step distribution (solved): " + ", ".join(f"{t}:{dist[t]}" for t in sorted(dist)))

    if results:
        first_guess_counts = Counter(r.first_guess for r in results if r.first_guess)
        if first_guess_counts:
            (top_guess, top_count) = first_guess_counts.most_common(1)[0]
            lines.append(f"Most common first guess: {top_guess} ({top_count} / {len(results)})")
        failed = [r for r in results if not r.solved]
        if failed:
            examples = ", ".join(f"{r.answer} ({r.outcome.value})" for r in failed[:10])
            lines.append(f"Failed examples (up to 10): {examples}")

    return "\n".join(lines)


# pick_answers chooses the hidden answers for a batch:
# every solution once, or `sessions` picks (random, or always `target`)
def pick_answers(
    dictionary: Dictionary,
    sessions: Optional[int] = None,
    *,
    target: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> List[str]:
    if sessions is None:
        return [target] if target else list(dictionary.solutions)
    if target:
        return [target] * sessions
    if not dictionary.solutions:
        return []
    rng = rng if rng is not None else random.Random()
    return [rng.choice(dictionary.solutions) for _ in range(sessions)]


def run_batch(
    dictionary: Dictionary,
    strategy_id: int,
    *,
    sessions: Optional[int] = None,
    target: Optional[str] = None,
    selector: Optional[GuessSelector] = None,
    seed: Optional[int] = None,
    progress: bool = False,
    log: Optional[LogFn] = None,
) -> List[GameResult]:
    rng = random.Random(seed)
    if selector is None:
        selector = GuessSelector(rng=rng)

    answers = pick_answers(dictionary, sessions, target=target, rng=rng)
    iterator = tqdm.tqdm(answers, desc="Simulating", unit="game") if progress else answers

    results: List[GameResult] = []
    for answer in iterator:
        results.append(solve_unattended(answer, dictionary, strategy_id, selector, log=log))
    return results
