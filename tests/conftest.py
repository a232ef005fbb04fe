import pytest

from packages.engine import DifficultyProfile, build_fragment_index

CAT_WORDS = {"CAT", "CATALOG", "SCATTER"}


@pytest.fixture
def cat_index():
    return build_fragment_index(CAT_WORDS)


@pytest.fixture
def three_of_a_kind():
    # Only AT, CA and CAT reach 3 entries in CAT_WORDS
    return DifficultyProfile("trio", "Trio", min_words=3, turn_seconds=5)
