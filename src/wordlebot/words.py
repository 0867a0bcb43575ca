"""
words.py

Dictionary and rank providers.

The solver only ever reads these: a Dictionary holds every legal guess
(`values`) plus the subset that may be the hidden answer (`solutions`), and a
RankTable maps a word to its popularity ordinal in some frequency corpus
(lower = more common).

Frequency corpus format:
- one entry per line, most frequent first: "<word> <count>"
  Example: "which 1234567"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .rules import WORD_SIZE, LogFn


def _is_word(w: str) -> bool:
    return len(w) == WORD_SIZE and w.isascii() and w.isalpha()


# dedupe keeps the first occurrence of every word, preserving order
def _dedupe(words: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for w in words:
        if w not in seen:
            seen.add(w)
            out.append(w)
    return out


# clean lowercases, drops anything that is not a 5-letter word, dedupes
def _clean(words: Iterable[str]) -> List[str]:
    return _dedupe(w for w in (v.lower() for v in words) if _is_word(w))


# load_words_from_file loads a list of 5-letter words from a file, one per line
def load_words_from_file(path: str) -> List[str]:
    words: List[str] = []
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        for line in f:
            w = line.strip().lower()
            if _is_word(w):
                words.append(w)
    return _dedupe(words)


@dataclass(frozen=True)
class Dictionary:
    values: List[str]
    solutions: List[str]
    _lookup: frozenset = field(init=False, repr=False, compare=False)

    @classmethod
    def from_lists(cls, values: Iterable[str], solutions: Optional[Iterable[str]] = None) -> "Dictionary":
        """Build a dictionary of 5-letter words, making sure every solution is also a legal guess."""
        vals = _clean(values)
        sols = _clean(solutions) if solutions is not None else vals[:]
        known = set(vals)
        vals.extend(w for w in sols if w not in known)
        return cls(values=vals, solutions=sols)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lookup", frozenset(self.values))

    def __contains__(self, word: str) -> bool:
        return word in self._lookup


def load_dictionary(words_path: str, answers_path: Optional[str] = None) -> Dictionary:
    values = load_words_from_file(words_path)
    solutions = load_words_from_file(answers_path) if answers_path else None
    return Dictionary.from_lists(values, solutions)


class RankTable:
    """Popularity ranks for words; a word not in the table is unranked (None)."""

    def __init__(self, ranked_words: Iterable[str], *, log_debug: Optional[LogFn] = None):
        self._ranks: Dict[str, int] = {}
        for w in ranked_words:
            w = w.lower()
            if w not in self._ranks:
                self._ranks[w] = len(self._ranks)
        self._log_debug = log_debug
        # only warn once per unranked word
        self._warned: set = set()

    def __len__(self) -> int:
        return len(self._ranks)

    def rank(self, word: str) -> Optional[int]:
        r = self._ranks.get(word)
        if r is None and self._log_debug is not None and word not in self._warned:
            self._warned.add(word)
            self._log_debug(f"rank: word '{word}' not ranked")
        return r


# load_rank_table reads a "<word> <count>" corpus, most frequent first,
# keeping only 5-letter alphabetic words in corpus order
def load_rank_table(path: str, *, limit: int = 0, log_debug: Optional[LogFn] = None) -> RankTable:
    ranked: List[str] = []
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        for line in f:
            if limit and len(ranked) == limit:
                break
            parts = line.split()
            if not parts:
                continue
            w = parts[0].lower()
            if _is_word(w):
                ranked.append(w)
    return RankTable(ranked, log_debug=log_debug)
