"""
strategies.py

Guess selection. Every strategy maps the current candidate list (plus the
attempt counter and the previous mask) to one word to play next.

Strategies are numbered and each one refines a lower one:

  0  random pick
  1  most distinct letters
  2  highest sum of global letter weights
  3  like 2, each distinct letter counted once
  4  like 3, with per-position letter weights
  5  best of 4, most popular word first (needs a rank table)
  6  like 5, but in the last two attempts play the most popular candidate
  7  like 6, playing blacklisted words only when nothing else is left

Strategies 0-4 break ties uniformly at random, so pass a seeded
random.Random to GuessSelector for reproducible games.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

from .errors import EmptyCandidatesError, UnknownStrategyError
from .frequency import letter_weights, positional_weights
from .mask import PRESENT_HERE
from .rules import MAX_STEPS
from .words import RankTable

# Words that score well under the frequency heuristics but are poor picks
# in practice (obscure, rarely the answer).
BLACKLIST: FrozenSet[str] = frozenset({
    "aeros",
    "aloes",
    "arles",
    "aurei",
    "lares",
    "nares",
    "rales",
    "reais",
    "serai",
    "soare",
    "tares",
    "teras",
})

# at or below this many remaining attempts, strategies 6+ stop exploring
ENDGAME_ATTEMPTS = 2

RankFn = Callable[[str], Optional[int]]


@dataclass(frozen=True)
class Turn:
    candidates: Sequence[str]
    steps_done: int
    last_mask: Optional[Sequence[int]]

    @property
    def confirmed(self) -> FrozenSet[int]:
        """Positions the previous guess got exactly right."""
        if self.last_mask is None:
            return frozenset()
        return frozenset(i for i, m in enumerate(self.last_mask) if m == PRESENT_HERE)

    @property
    def remaining_attempts(self) -> int:
        return MAX_STEPS - self.steps_done


# best_scoring returns every candidate sharing the maximal score, in input order
def best_scoring(candidates: Sequence[str], score: Callable[[str], float]) -> List[str]:
    best: Optional[float] = None
    out: List[str] = []
    for word in candidates:
        # weights carry 2 decimals; rounding keeps float sums comparable
        value = round(score(word), 6)
        if best is None or value > best:
            best = value
            out = [word]
        elif value == best:
            out.append(word)
    return out


# rank_order sorts by rank ascending, unranked words last, stable otherwise
def rank_order(candidates: Sequence[str], rank: RankFn) -> List[str]:
    def key(word: str):
        r = rank(word)
        return (r is None, r if r is not None else 0)

    return sorted(candidates, key=key)


class GuessSelector:
    """Picks the next guess. Owns the random source, the ranks and the word memo."""

    def __init__(
        self,
        ranks: Optional[RankTable] = None,
        *,
        blacklist: FrozenSet[str] = BLACKLIST,
        rng: Optional[random.Random] = None,
    ):
        self.ranks = ranks
        self.blacklist = frozenset(blacklist)
        self.rng = rng if rng is not None else random.Random()
        # distinct letters per full word; independent of game state, so it
        # can outlive a single session
        self._distinct_cache: Dict[str, int] = {}

    def select(
        self,
        candidates: Sequence[str],
        strategy_id: int,
        steps_done: int = 0,
        last_mask: Optional[Sequence[int]] = None,
    ) -> str:
        if not candidates:
            raise EmptyCandidatesError("no candidates left to guess from")
        strategy = get_strategy(strategy_id)
        return strategy.pick(self, Turn(candidates, steps_done, last_mask))

    # --- ranking ---

    def rank(self, word: str) -> Optional[int]:
        if self.ranks is None:
            return None
        return self.ranks.rank(word)

    # --- scores ---

    def distinct_letters(self, word: str, confirmed: FrozenSet[int]) -> int:
        if not confirmed:
            n = self._distinct_cache.get(word)
            if n is None:
                n = len(set(word))
                self._distinct_cache[word] = n
            return n
        return len({c for i, c in enumerate(word) if i not in confirmed})

    # --- shortlists (maximal scorers) ---

    def most_distinct(self, turn: Turn) -> List[str]:
        confirmed = turn.confirmed
        return best_scoring(turn.candidates, lambda w: self.distinct_letters(w, confirmed))

    def heaviest_letters(self, turn: Turn) -> List[str]:
        weights = letter_weights(turn.candidates)
        confirmed = turn.confirmed

        def score(word: str) -> float:
            return sum(weights[c] for i, c in enumerate(word) if i not in confirmed)

        return best_scoring(turn.candidates, score)

    def heaviest_distinct_letters(self, turn: Turn) -> List[str]:
        weights = letter_weights(turn.candidates)
        confirmed = turn.confirmed

        def score(word: str) -> float:
            letters = {c for i, c in enumerate(word) if i not in confirmed}
            return sum(weights[c] for c in letters)

        return best_scoring(turn.candidates, score)

    def heaviest_positional_letters(self, turn: Turn) -> List[str]:
        weights = positional_weights(turn.candidates)
        confirmed = turn.confirmed

        def score(word: str) -> float:
            seen = set()
            value = 0.0
            for i, c in enumerate(word):
                if i in confirmed or c in seen:
                    continue
                seen.add(c)
                value += weights[i][c]
            return value

        return best_scoring(turn.candidates, score)


@dataclass(frozen=True)
class Strategy:
    id: int
    name: str
    description: str
    pick: Callable[[GuessSelector, Turn], str]


def _random_pick(sel: GuessSelector, turn: Turn) -> str:
    return sel.rng.choice(list(turn.candidates))


def _random_among(shortlist: Callable[[GuessSelector, Turn], List[str]]):
    def pick(sel: GuessSelector, turn: Turn) -> str:
        return sel.rng.choice(shortlist(sel, turn))

    return pick


def _ranked_positional(sel: GuessSelector, turn: Turn, rank: RankFn) -> str:
    return rank_order(sel.heaviest_positional_letters(turn), rank)[0]


def _in_endgame(turn: Turn) -> bool:
    remaining = turn.remaining_attempts
    return remaining <= ENDGAME_ATTEMPTS and len(turn.candidates) > remaining


def _endgame_or_ranked(sel: GuessSelector, turn: Turn, rank: RankFn) -> str:
    if _in_endgame(turn):
        return rank_order(turn.candidates, rank)[0]
    return _ranked_positional(sel, turn, rank)


# blacklisted words only stay in play when nothing else is left
def _blacklist_refined(sel: GuessSelector, turn: Turn) -> str:
    pool = [w for w in turn.candidates if w not in sel.blacklist]
    if not pool:
        return _endgame_or_ranked(sel, turn, sel.rank)
    if _in_endgame(turn):
        return rank_order(pool, sel.rank)[0]
    return _ranked_positional(sel, Turn(pool, turn.steps_done, turn.last_mask), sel.rank)


_STRATEGIES: List[Strategy] = [
    Strategy(0, "random", "uniform random candidate", _random_pick),
    Strategy(1, "distinct", "most distinct letters", _random_among(GuessSelector.most_distinct)),
    Strategy(2, "global-freq", "highest global letter weight", _random_among(GuessSelector.heaviest_letters)),
    Strategy(
        3,
        "distinct-global-freq",
        "highest global weight of distinct letters",
        _random_among(GuessSelector.heaviest_distinct_letters),
    ),
    Strategy(
        4,
        "positional-freq",
        "highest positional weight of distinct letters",
        _random_among(GuessSelector.heaviest_positional_letters),
    ),
    Strategy(
        5,
        "ranked-positional",
        "strategy 4 shortlist, most popular word first",
        lambda sel, turn: _ranked_positional(sel, turn, sel.rank),
    ),
    Strategy(
        6,
        "endgame-rank",
        "strategy 5, most popular candidate in the last attempts",
        lambda sel, turn: _endgame_or_ranked(sel, turn, sel.rank),
    ),
    Strategy(
        7,
        "blacklist",
        "strategy 6, blacklisted words only when nothing else is left",
        _blacklist_refined,
    ),
]

STRATEGIES: Dict[int, Strategy] = {s.id: s for s in _STRATEGIES}
STRATEGY_IDS = tuple(sorted(STRATEGIES))


def get_strategy(strategy_id: int) -> Strategy:
    try:
        return STRATEGIES[strategy_id]
    except KeyError:
        raise UnknownStrategyError(
            f"unknown strategy {strategy_id!r}; expected one of {list(STRATEGY_IDS)}"
        ) from None
