import random

import pytest

from wordlebot.mask import evaluate
from wordlebot.rules import MAX_STEPS
from wordlebot.session import (
    Attempt,
    Outcome,
    SolveSession,
    outcome_code,
    solve_interactive,
    solve_unattended,
)
from wordlebot.strategies import STRATEGY_IDS, GuessSelector
from wordlebot.words import Dictionary, RankTable

WORDS = [
    "crane", "stoke", "blimp", "speed", "abide", "eerie", "level", "belle",
    "allot", "total", "scoop", "cools", "geese", "fuzzy", "mamma", "trace",
]

# only the first letter differs, so every wrong guess removes one word
ILLS = ["bills", "fills", "gills", "hills", "kills", "mills", "pills", "tills", "wills"]


def scripted(*replies):
    it = iter(replies)

    def ask(_prompt_arg):
        return next(it)

    return ask


def test_crane_with_most_distinct_letters():
    dictionary = Dictionary.from_lists(["crane", "stoke", "blimp"])
    attempts = []
    for seed in range(10):
        attempts.clear()
        result = solve_unattended(
            "crane", dictionary, 1, GuessSelector(rng=random.Random(seed)), on_attempt=attempts.append
        )
        assert len(set(attempts[0].guess)) == 5
        assert result.outcome is Outcome.SUCCESS
        assert result.steps <= MAX_STEPS
        assert result.code == result.steps
        assert attempts[-1].guess == "crane"


@pytest.mark.parametrize("strategy_id", STRATEGY_IDS)
def test_every_strategy_keeps_the_answer(strategy_id):
    dictionary = Dictionary.from_lists(WORDS)
    ranks = RankTable(list(reversed(WORDS)))
    for answer in WORDS:
        selector = GuessSelector(ranks, rng=random.Random(answer))
        result = solve_unattended(answer, dictionary, strategy_id, selector)
        assert result.outcome in (Outcome.SUCCESS, Outcome.FAILURE_EXHAUSTED), (answer, result)


def test_answer_missing_from_dictionary():
    dictionary = Dictionary.from_lists(["crane", "stoke"])
    result = solve_unattended("blimp", dictionary, 1, GuessSelector(rng=random.Random(0)))
    assert result.outcome is Outcome.FAILURE_NOT_IN_DICTIONARY
    assert result.steps == 0
    assert result.code == -2


def test_exhausted_after_max_steps():
    dictionary = Dictionary.from_lists(ILLS)
    # no ranks and equal scores: strategy 5 always plays the first candidate
    result = solve_unattended("wills", dictionary, 5, GuessSelector())
    assert result.outcome is Outcome.FAILURE_EXHAUSTED
    assert result.steps == MAX_STEPS
    assert result.code == MAX_STEPS + 1
    assert result.first_guess == "bills"
    assert result.final_candidates == len(ILLS) - MAX_STEPS


class OffListSelector(GuessSelector):
    """Always suggests a word the dictionary does not know."""

    def select(self, candidates, strategy_id, steps_done=0, last_mask=None):
        return "zzzzz"


def test_guess_outside_dictionary_ends_the_game():
    lines = []
    dictionary = Dictionary.from_lists(["crane", "stoke"])
    result = solve_unattended("crane", dictionary, 1, OffListSelector(), log=lines.append)
    assert result.outcome is Outcome.FAILURE_INVALID_GUESS
    assert result.code == -3
    assert result.steps == 0
    assert result.final_candidates == 2
    assert lines[-1] == "failure: guessed word is not in the dictionary"


def test_unattended_logs_each_attempt():
    lines = []
    dictionary = Dictionary.from_lists(ILLS)
    solve_unattended("gills", dictionary, 5, GuessSelector(), log=lines.append)
    assert lines[0] == "unattended: searching for 'gills' using strategy 5"
    assert lines[1] == "[9] attempt 1: 'bills' -> 02222 (8 left)"
    assert lines[-1] == "success: the solution is 'gills' (3)"


def test_outcome_codes():
    assert outcome_code(Outcome.SUCCESS, 3) == 3
    assert outcome_code(Outcome.FAILURE_EXHAUSTED, 6) == 7
    assert outcome_code(Outcome.FAILURE_NOT_IN_DICTIONARY, 2) == -2
    assert outcome_code(Outcome.FAILURE_INVALID_GUESS, 0) == -3
    assert outcome_code(Outcome.FAILURE_INVALID_MASK, 0) == -4
    with pytest.raises(ValueError):
        outcome_code(Outcome.RUNNING, 0)


def test_session_apply_and_skip():
    session = SolveSession(Dictionary.from_lists(WORDS), GuessSelector())
    assert session.candidates == WORDS
    session.skip("blimp")
    assert "blimp" not in session.candidates
    assert session.steps_done == 0

    attempt = session.apply("stoke", evaluate("stoke", "crane"))
    assert attempt == Attempt(1, "stoke", (0, 0, 0, 0, 2), len(WORDS) - 1, len(session.candidates))
    assert session.last_mask == (0, 0, 0, 0, 2)
    assert session.remaining_attempts == MAX_STEPS - 1
    assert "crane" in session.candidates


def _interactive_session(words):
    return SolveSession(Dictionary.from_lists(words), GuessSelector(rng=random.Random(0)), strategy_id=1)


def test_interactive_success():
    session = _interactive_session(["crane", "stoke", "blimp"])
    result = solve_interactive(session, scripted("stoke", ""), scripted("00002", "22222"))
    assert result.outcome is Outcome.SUCCESS
    assert result.steps == 2
    assert [a.guess for a in session.history] == ["stoke", "crane"]


def test_interactive_single_wrong_candidate_is_a_dictionary_mismatch():
    session = _interactive_session(["crane", "stoke", "blimp"])
    result = solve_interactive(session, scripted("stoke", ""), scripted("00002", "00000"))
    assert result.outcome is Outcome.FAILURE_NOT_IN_DICTIONARY
    assert result.final_candidates == 0


def test_interactive_skip_does_not_use_an_attempt():
    session = _interactive_session(["crane", "stoke", "blimp"])
    result = solve_interactive(session, scripted("blimp", "crane"), scripted("", "22222"))
    assert result.outcome is Outcome.SUCCESS
    assert result.steps == 1
    assert "blimp" not in session.candidates


def test_interactive_skip_to_empty():
    session = _interactive_session(["crane"])
    result = solve_interactive(session, scripted(""), scripted(""))
    assert result.outcome is Outcome.FAILURE_NOT_IN_DICTIONARY
    assert result.steps == 0


def test_interactive_reprompts_on_invalid_input():
    warnings = []
    session = _interactive_session(["crane", "stoke", "blimp"])
    result = solve_interactive(
        session,
        scripted("abc", "xyzzy", "crane", "crane"),
        scripted("0201", "22222"),
        warn=warnings.append,
    )
    assert result.outcome is Outcome.SUCCESS
    assert result.steps == 1
    assert len(warnings) == 3


def test_interactive_quit_leaves_session_running():
    session = _interactive_session(["crane", "stoke", "blimp"])
    result = solve_interactive(session, scripted("quit"), scripted())
    assert result.outcome is Outcome.RUNNING
    assert session.steps_done == 0


def test_interactive_exhausted():
    session = _interactive_session(ILLS)
    guesses = ILLS[:MAX_STEPS]
    masks = ["02222"] * MAX_STEPS
    result = solve_interactive(session, scripted(*guesses), scripted(*masks))
    assert result.outcome is Outcome.FAILURE_EXHAUSTED
    assert result.steps == MAX_STEPS
