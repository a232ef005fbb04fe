import random

import pytest
from packages.engine import DifficultyProfile, build_fragment_index, eligible_fragments, select_challenge


def _profile(min_words):
    return DifficultyProfile("t", "T", min_words=min_words, turn_seconds=5)


def test_cat_scenario_eligible(cat_index):
    assert eligible_fragments(cat_index, 3) == ["AT", "CA", "CAT"]


def test_selected_fragment_meets_threshold(cat_index, three_of_a_kind):
    rng = random.Random(0)
    for _ in range(50):
        ch = select_challenge(cat_index, three_of_a_kind, rng)
        assert ch.fragment in {"AT", "CA", "CAT"}
        assert ch.entry_count >= 3
        assert ch.accepted_words == frozenset({"CAT", "CATALOG", "SCATTER"})


def test_no_eligible_fragment_returns_none(cat_index):
    assert select_challenge(cat_index, _profile(4), random.Random(0)) is None


@pytest.mark.parametrize("low,high", [(1, 2), (2, 3), (1, 4), (3, 100)])
def test_eligibility_is_monotonic(cat_index, low, high):
    assert set(eligible_fragments(cat_index, high)) <= set(eligible_fragments(cat_index, low))


def test_expert_threshold_covers_every_key(cat_index):
    assert eligible_fragments(cat_index, 1) == sorted(cat_index)


def test_seeded_selection_is_reproducible(cat_index):
    a = [select_challenge(cat_index, _profile(1), random.Random(7)).fragment for _ in range(3)]
    b = [select_challenge(cat_index, _profile(1), random.Random(7)).fragment for _ in range(3)]
    assert a == b


def test_accepted_set_dedupes_repeats():
    index = build_fragment_index({"BANANA", "ANANAS"})
    ch = select_challenge(index, _profile(4), random.Random(0))
    # AN, NA and ANA each reach 4 entries across both words
    assert ch.fragment in {"AN", "ANA", "NA"}
    assert ch.accepted_words == frozenset({"BANANA", "ANANAS"})
