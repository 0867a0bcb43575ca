"""
constraints.py

Turns one (guess, mask) pair into facts about the hidden answer and uses
them to narrow a candidate list.

Facts are plain values, one per thing we learned:
- PositionExact(pos, letter): the answer has `letter` at `pos`
- PositionExclude(pos, letter): the answer does not have `letter` at `pos`
- MinCount(letter, n): the answer contains `letter` at least n times
- MaxCount(letter, n): the answer contains `letter` at most n times
  (n == 0 means the letter is not in the answer at all)

The maximum is only known when the same guess marks a letter both absent
and present: the answer then holds exactly as many copies as were credited.
Facts from earlier guesses are not combined here, every call only looks at
the pair it is given.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Union

from .mask import ABSENT, PRESENT_ELSEWHERE, PRESENT_HERE


@dataclass(frozen=True)
class PositionExact:
    pos: int
    letter: str


@dataclass(frozen=True)
class PositionExclude:
    pos: int
    letter: str


@dataclass(frozen=True)
class MinCount:
    letter: str
    n: int


@dataclass(frozen=True)
class MaxCount:
    letter: str
    n: int


Fact = Union[PositionExact, PositionExclude, MinCount, MaxCount]


def derive_facts(guess: str, mask: Sequence[int]) -> List[Fact]:
    facts: List[Fact] = []
    # letter -> number of copies credited yellow/green in this guess
    required: Dict[str, int] = {}
    absent_seen = set()

    for i, (c, m) in enumerate(zip(guess, mask)):
        required.setdefault(c, 0)
        if m == ABSENT:
            facts.append(PositionExclude(i, c))
            absent_seen.add(c)
        elif m == PRESENT_ELSEWHERE:
            facts.append(PositionExclude(i, c))
            required[c] += 1
        elif m == PRESENT_HERE:
            facts.append(PositionExact(i, c))
            required[c] += 1

    for c, n in required.items():
        if n == 0:
            facts.append(MaxCount(c, 0))
            continue
        facts.append(MinCount(c, n))
        if c in absent_seen:
            facts.append(MaxCount(c, n))

    return facts


# satisfies evaluates a single fact against a candidate word
def satisfies(word: str, fact: Fact, counts: Counter | None = None) -> bool:
    if isinstance(fact, PositionExact):
        return word[fact.pos] == fact.letter
    if isinstance(fact, PositionExclude):
        return word[fact.pos] != fact.letter

    if counts is None:
        counts = Counter(word)
    if isinstance(fact, MinCount):
        return counts[fact.letter] >= fact.n
    if isinstance(fact, MaxCount):
        return counts[fact.letter] <= fact.n
    raise TypeError(f"unknown fact: {fact!r}")


def satisfies_all(word: str, facts: Iterable[Fact]) -> bool:
    counts = Counter(word)
    return all(satisfies(word, f, counts) for f in facts)


def filter_by_facts(facts: Sequence[Fact], candidates: Iterable[str]) -> List[str]:
    return [w for w in candidates if satisfies_all(w, facts)]


# narrow keeps the candidates consistent with the feedback for one guess
def narrow(guess: str, mask: Sequence[int], candidates: Iterable[str]) -> List[str]:
    return filter_by_facts(derive_facts(guess, mask), candidates)
