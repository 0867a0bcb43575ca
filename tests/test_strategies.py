import random

import pytest

from wordlebot.errors import EmptyCandidatesError, UnknownStrategyError
from wordlebot.strategies import BLACKLIST, STRATEGY_IDS, GuessSelector, rank_order
from wordlebot.words import RankTable


def selector(ranked=None, seed=0, **kw):
    ranks = RankTable(ranked) if ranked is not None else None
    return GuessSelector(ranks, rng=random.Random(seed), **kw)


def test_strategy_ids():
    assert STRATEGY_IDS == (0, 1, 2, 3, 4, 5, 6, 7)


def test_random_strategy_is_reproducible_with_a_seed():
    words = ["crane", "stoke", "blimp", "geese", "fuzzy"]
    picks_a = [selector(seed=7).select(words, 0) for _ in range(3)]
    picks_b = [selector(seed=7).select(words, 0) for _ in range(3)]
    assert picks_a == picks_b
    assert all(p in words for p in picks_a)


def test_most_distinct_letters():
    assert selector().select(["geese", "crane", "eerie"], 1) == "crane"


def test_distinct_letters_skip_confirmed_positions():
    sel = selector()
    assert sel.distinct_letters("geese", frozenset()) == 3
    assert sel.distinct_letters("geese", frozenset({0})) == 2
    # only full-word counts are memoized
    assert sel._distinct_cache == {"geese": 3}


def test_most_distinct_with_last_mask_ties_break_randomly():
    words = ["ebony", "erode"]
    assert {selector(seed=s).select(words, 1) for s in range(10)} == {"ebony"}
    picks = {selector(seed=s).select(words, 1, 1, (2, 0, 0, 0, 0)) for s in range(50)}
    assert picks == {"ebony", "erode"}


def test_global_frequency_counts_duplicates():
    # e=1.0 r=0.5 i=c=a=n=0.25: eerie scores 3.75, crane 2.25
    assert selector().select(["eerie", "crane"], 2) == "eerie"


def test_distinct_global_frequency_counts_each_letter_once():
    # eerie scores 1.75, crane 2.25
    assert selector().select(["eerie", "crane"], 3) == "crane"


def test_positional_frequency_shortlist():
    words = ["crane", "crate", "trace"]
    sel = selector()
    picks = {sel.select(words, 4) for _ in range(30)}
    assert picks <= {"crane", "crate"}


def test_ranked_positional_prefers_popular_word():
    words = ["crane", "crate", "trace"]
    assert selector(["crate", "crane", "trace"]).select(words, 5) == "crate"
    # trace is the most popular, but not in the positional shortlist
    assert selector(["trace", "crane"]).select(words, 5) == "crane"


def test_ranked_positional_without_ranks_is_stable():
    assert selector().select(["crane", "crate", "trace"], 5) == "crane"


def test_endgame_plays_most_popular_candidate():
    words = ["crane", "crate", "trace"]
    sel = selector(["trace", "crane", "crate"])
    # two attempts left, three candidates: skip the heuristic
    assert sel.select(words, 6, steps_done=4) == "trace"
    # three attempts left: same as strategy 5
    assert sel.select(words, 6, steps_done=3) == "crane"
    # two attempts left, two candidates: same as strategy 5
    sel = selector(["geese", "crane"])
    assert sel.select(["geese", "crane"], 6, steps_done=4) == "crane"
    assert sel.select(["geese", "crane", "crate"], 6, steps_done=4) == "geese"


def test_blacklist_ranks_words_last():
    words = ["crane", "crate", "trace"]
    assert selector(["crate", "crane"]).select(words, 5) == "crate"
    assert selector(["crate", "crane"], blacklist={"crate"}).select(words, 7) == "crane"


def test_default_blacklist_in_endgame():
    assert "tares" in BLACKLIST
    words = ["tares", "tales"]
    sel = selector(["tares", "tales"])
    assert sel.select(words, 6, steps_done=5) == "tares"
    assert sel.select(words, 7, steps_done=5) == "tales"


def test_blacklisted_word_alone_in_shortlist_is_passed_over():
    words = ["tares", "bares", "tires"]
    sel = selector(["bares", "tares", "tires"])
    # tares has the best positional score on its own
    assert sel.select(words, 6) == "tares"
    assert sel.select(words, 7) == "bares"


def test_blacklist_only_candidates_still_get_a_pick():
    assert selector().select(["tares", "lares"], 7) == "tares"
    assert selector().select(["tares", "lares"], 7, steps_done=5) == "tares"


@pytest.mark.parametrize("words", [
    ["tares", "bares", "tires"],
    ["soare", "tares", "crane", "slate", "trace", "crate", "zzzzz"],
    ["soare", "serai", "roate"],
    ["lares", "rales", "cares"],
])
def test_blacklisted_word_never_beats_a_clean_candidate(words):
    ranked = ["soare", "tares", "lares", "bares", "crane", "slate", "trace", "crate", "cares"]
    for steps_done in range(6):
        for seed in range(5):
            pick = selector(ranked, seed=seed).select(words, 7, steps_done=steps_done)
            if pick in BLACKLIST:
                pytest.fail(f"picked blacklisted {pick!r} at step {steps_done}")


def test_rank_order_puts_unranked_last_and_is_stable():
    ranks = RankTable(["b", "a"])
    assert rank_order(["x", "a", "y", "b"], ranks.rank) == ["b", "a", "x", "y"]


def test_empty_candidates():
    with pytest.raises(EmptyCandidatesError):
        selector().select([], 1)


def test_unknown_strategy():
    with pytest.raises(UnknownStrategyError):
        selector().select(["crane"], 9)
