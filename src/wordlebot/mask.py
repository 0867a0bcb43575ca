"""
mask.py

Feedback masks: computing them, parsing them and validating them.

A mask has one symbol per letter:
- 0 = absent (grey)
- 1 = present elsewhere (yellow)
- 2 = present here (green)
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Container, Sequence, Tuple

from .errors import InvalidGuessError, InvalidMaskError
from .rules import WORD_SIZE

ABSENT = 0
PRESENT_ELSEWHERE = 1
PRESENT_HERE = 2

Pattern = Tuple[int, ...]  # WORD_SIZE ints, each in {0,1,2}

SOLVED: Pattern = (PRESENT_HERE,) * WORD_SIZE

_LETTER_SYMBOLS = {"b": ABSENT, "y": PRESENT_ELSEWHERE, "g": PRESENT_HERE}


# evaluate computes the feedback mask for guess against the hidden answer
def evaluate(guess: str, answer: str) -> Pattern:
    """
    Position matches are credited before elsewhere matches, and a letter is
    never credited more times than it occurs in the answer.
    """
    res = [ABSENT] * len(answer)
    remaining = Counter(answer)

    # first pass: greens
    for i, (g_ch, a_ch) in enumerate(zip(guess, answer)):
        if g_ch == a_ch:
            res[i] = PRESENT_HERE
            remaining[g_ch] -= 1

    # second pass: yellows, left to right over non-greens
    for i, g_ch in enumerate(guess):
        if res[i] != PRESENT_HERE and remaining[g_ch] > 0:
            res[i] = PRESENT_ELSEWHERE
            remaining[g_ch] -= 1

    return tuple(res)


def is_solved(mask: Sequence[int]) -> bool:
    return tuple(mask) == SOLVED


# parse_pattern converts a string like '02120' or 'bygyb' into a Pattern tuple
def parse_pattern(s: str) -> Pattern:
    s = s.strip().lower()
    if re.fullmatch(rf"[012]{{{WORD_SIZE}}}", s):
        return tuple(int(ch) for ch in s)
    if re.fullmatch(rf"[gyb]{{{WORD_SIZE}}}", s):
        return tuple(_LETTER_SYMBOLS[ch] for ch in s)
    raise InvalidMaskError(
        f"Mask must be {WORD_SIZE} chars of [0,1,2] (or [b,y,g]). Example: '02120' or 'bygyb'."
    )


def format_pattern(mask: Sequence[int]) -> str:
    return "".join(str(m) for m in mask)


def check_mask(mask: Sequence[int]) -> Pattern:
    if len(mask) != WORD_SIZE:
        raise InvalidMaskError(f"invalid mask length: expected {WORD_SIZE}, got {len(mask)}")
    if any(m not in (ABSENT, PRESENT_ELSEWHERE, PRESENT_HERE) for m in mask):
        raise InvalidMaskError(f"invalid mask format: {list(mask)!r}")
    return tuple(mask)


def check_word(word: str, legal: Container[str]) -> str:
    if len(word) != WORD_SIZE:
        raise InvalidGuessError(f"invalid word length: '{word}' is not {WORD_SIZE} letters")
    if word not in legal:
        raise InvalidGuessError(f"'{word}' is not included in the dictionary")
    return word
