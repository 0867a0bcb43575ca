"""Letter weight tables derived from the current candidate list."""

from __future__ import annotations

import math
from collections import Counter
from typing import Dict, Iterable, List

from .rules import WORD_SIZE


# round2 rounds to 2 decimals with halves going up (0.125 -> 0.13)
def _round2(x: float) -> float:
    return math.floor(x * 100 + 0.5) / 100


def _normalize(hits: Counter) -> Dict[str, float]:
    if not hits:
        return {}
    max_hits = max(hits.values())
    return {c: _round2(h / max_hits) for c, h in hits.items()}


# letter_weights: every occurrence of a letter counts, weights are relative
# to the most frequent letter
def letter_weights(candidates: Iterable[str]) -> Dict[str, float]:
    hits: Counter = Counter()
    for word in candidates:
        hits.update(word)
    return _normalize(hits)


# positional_weights: same as letter_weights, one table per letter position
def positional_weights(candidates: Iterable[str]) -> List[Dict[str, float]]:
    hits = [Counter() for _ in range(WORD_SIZE)]
    for word in candidates:
        for i, c in enumerate(word):
            hits[i][c] += 1
    return [_normalize(h) for h in hits]
