"""
session.py

The solve loop. A SolveSession keeps the live candidate list and attempt
counters for one game; solve_unattended() plays it against a known answer,
solve_interactive() plays it with feedback supplied by a human.

Every finished game ends in one Outcome. For batch statistics an outcome
is turned into an integer code (see outcome_code):
- 1..MAX_STEPS        solved in that many attempts
- MAX_STEPS + 1       ran out of attempts
- -2 / -3 / -4        answer lost / invalid guess / invalid mask (solver bugs)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .constraints import narrow
from .errors import InvalidGuessError, InvalidMaskError, WordleError
from .mask import Pattern, check_mask, check_word, evaluate, format_pattern, is_solved, parse_pattern
from .rules import MAX_STEPS, LogFn
from .strategies import GuessSelector
from .words import Dictionary

QUIT = "quit"


class Outcome(enum.Enum):
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE_NOT_IN_DICTIONARY = "not-in-dictionary"
    FAILURE_EXHAUSTED = "exhausted"
    FAILURE_INVALID_GUESS = "invalid-guess"
    FAILURE_INVALID_MASK = "invalid-mask"

    @property
    def terminal(self) -> bool:
        return self is not Outcome.RUNNING


_FAILURE_CODES = {
    Outcome.FAILURE_NOT_IN_DICTIONARY: -2,
    Outcome.FAILURE_INVALID_GUESS: -3,
    Outcome.FAILURE_INVALID_MASK: -4,
}


@dataclass(frozen=True)
class Attempt:
    number: int
    guess: str
    mask: Pattern
    candidates_before: int
    candidates_after: int

    def describe(self) -> str:
        return (
            f"[{self.candidates_before}] attempt {self.number}: "
            f"'{self.guess}' -> {format_pattern(self.mask)} ({self.candidates_after} left)"
        )


AttemptFn = Callable[[Attempt], None]


@dataclass
class SolveSession:
    """State of one game. Candidates only ever shrink."""

    dictionary: Dictionary
    selector: GuessSelector
    strategy_id: int = 1
    max_steps: int = MAX_STEPS
    candidates: Optional[List[str]] = None
    steps_done: int = 0
    last_mask: Optional[Pattern] = None
    state: Outcome = Outcome.RUNNING
    history: List[Attempt] = field(default_factory=list)
    on_attempt: Optional[AttemptFn] = None

    def __post_init__(self) -> None:
        if self.candidates is None:
            self.candidates = list(self.dictionary.values)

    @property
    def remaining_attempts(self) -> int:
        return self.max_steps - self.steps_done

    def suggest(self) -> str:
        return self.selector.select(self.candidates, self.strategy_id, self.steps_done, self.last_mask)

    def apply(self, guess: str, mask: Pattern) -> Attempt:
        """Validate guess and mask, then narrow the candidates and consume an attempt."""
        check_word(guess, self.dictionary)
        mask = check_mask(mask)

        before = len(self.candidates)
        self.candidates = narrow(guess, mask, self.candidates)
        self.steps_done += 1
        self.last_mask = mask

        attempt = Attempt(
            number=self.steps_done,
            guess=guess,
            mask=mask,
            candidates_before=before,
            candidates_after=len(self.candidates),
        )
        self.history.append(attempt)
        if self.on_attempt is not None:
            self.on_attempt(attempt)
        return attempt

    def skip(self, guess: str) -> None:
        """Drop one word from the candidates without consuming an attempt."""
        self.candidates = [w for w in self.candidates if w != guess]

    def finish(self, state: Outcome) -> Outcome:
        self.state = state
        return state


@dataclass(frozen=True)
class GameResult:
    answer: Optional[str]
    outcome: Outcome
    steps: int
    final_candidates: int
    first_guess: str

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def code(self) -> int:
        return outcome_code(self.outcome, self.steps)


def outcome_code(outcome: Outcome, steps: int, max_steps: int = MAX_STEPS) -> int:
    if outcome is Outcome.SUCCESS:
        return steps
    if outcome is Outcome.FAILURE_EXHAUSTED:
        return max_steps + 1
    if outcome in _FAILURE_CODES:
        return _FAILURE_CODES[outcome]
    raise ValueError(f"game is not finished: {outcome}")


def _result(session: SolveSession, answer: Optional[str]) -> GameResult:
    return GameResult(
        answer=answer,
        outcome=session.state,
        steps=session.steps_done,
        final_candidates=len(session.candidates),
        first_guess=session.history[0].guess if session.history else "",
    )


# solve_unattended plays one full game against a known answer
def solve_unattended(
    answer: str,
    dictionary: Dictionary,
    strategy_id: int,
    selector: GuessSelector,
    *,
    log: Optional[LogFn] = None,
    on_attempt: Optional[AttemptFn] = None,
) -> GameResult:
    session = SolveSession(dictionary, selector, strategy_id=strategy_id, on_attempt=on_attempt)
    if log is not None:
        log(f"unattended: searching for '{answer}' using strategy {strategy_id}")

    while not session.state.terminal:
        # a sound filter never drops the real answer
        if answer not in session.candidates:
            session.finish(Outcome.FAILURE_NOT_IN_DICTIONARY)
            break

        guess = session.suggest()
        try:
            check_word(guess, dictionary)
        except InvalidGuessError as e:
            if log is not None:
                log(f"failure: {e}")
            session.finish(Outcome.FAILURE_INVALID_GUESS)
            break

        mask = evaluate(guess, answer)
        try:
            attempt = session.apply(guess, mask)
        except InvalidMaskError as e:
            if log is not None:
                log(f"failure: {e}")
            session.finish(Outcome.FAILURE_INVALID_MASK)
            break

        if log is not None:
            log(attempt.describe())

        if guess == answer:
            session.finish(Outcome.SUCCESS)
        elif session.steps_done == session.max_steps:
            session.finish(Outcome.FAILURE_EXHAUSTED)

    if log is not None:
        log(_describe_end(session, answer))
    return _result(session, answer)


def _describe_end(session: SolveSession, answer: Optional[str]) -> str:
    state = session.state
    if state is Outcome.SUCCESS:
        return f"success: the solution is '{session.history[-1].guess}' ({session.steps_done})"
    if state is Outcome.FAILURE_EXHAUSTED:
        return f"failure: could not find solution in {session.max_steps} steps"
    if state is Outcome.FAILURE_NOT_IN_DICTIONARY:
        if answer is None:
            return "failure: the solution is not present in the dictionary"
        return f"failure: '{answer}' is not among the remaining candidates"
    if state is Outcome.FAILURE_INVALID_GUESS:
        return "failure: guessed word is not in the dictionary"
    if state is Outcome.FAILURE_INVALID_MASK:
        return "failure: evaluated mask is wrong"
    return f"stopped after {session.steps_done} steps"


# ask_guess receives the engine suggestion and returns the raw user reply
AskGuessFn = Callable[[str], str]
# ask_mask receives the word being played and returns the raw user reply
AskMaskFn = Callable[[str], str]


def solve_interactive(
    session: SolveSession,
    ask_guess: AskGuessFn,
    ask_mask: AskMaskFn,
    *,
    log: Optional[LogFn] = None,
    warn: Optional[LogFn] = None,
) -> GameResult:
    """
    Play a game where a human reports the feedback.

    Empty guess input plays the engine suggestion, empty mask input drops the
    word from the candidates without using an attempt. Invalid input is
    reported through `warn` and asked again. Typing 'quit' at either prompt
    stops the game with the session left RUNNING.
    """

    def _log(msg: str) -> None:
        if log is not None:
            log(msg)

    def _warn(msg: str) -> None:
        if warn is not None:
            warn(msg)

    while not session.state.terminal:
        if not session.candidates:
            session.finish(Outcome.FAILURE_NOT_IN_DICTIONARY)
            break
        if session.steps_done == session.max_steps:
            session.finish(Outcome.FAILURE_EXHAUSTED)
            break

        _log(f"steps done = {session.steps_done}")
        _log(f"remaining words = {len(session.candidates)}")

        suggestion = session.suggest()
        if len(session.candidates) == 1:
            _log(f"only one word left, the answer should be '{suggestion}'")

        reply = ask_guess(suggestion).strip().lower()
        if reply == QUIT:
            break
        guess = reply or suggestion
        if not reply:
            _log(f"picked '{guess}'")
        try:
            check_word(guess, session.dictionary)
        except InvalidGuessError as e:
            _warn(str(e))
            continue

        mask_reply = ask_mask(guess).strip().lower()
        if mask_reply == QUIT:
            break
        if not mask_reply:
            _log(f"skipping '{guess}'")
            session.skip(guess)
            continue
        try:
            mask = parse_pattern(mask_reply)
            attempt = session.apply(guess, mask)
        except WordleError as e:
            _warn(str(e))
            continue
        _log(attempt.describe())

        if is_solved(mask):
            session.finish(Outcome.SUCCESS)

    _log(_describe_end(session, None))
    return _result(session, None)
