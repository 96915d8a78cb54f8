"""Shared fixtures for the letter-hive tests."""

import pytest

from letterhive.database import WordDictionary
from letterhive.models import GenerationConstraints


SAMPLE_WORDS = [
    # pangram basis abenrst
    "banters",
    "abet", "absent", "bane", "bears", "beast", "beats", "bent", "best",
    "bets", "brats", "breast", "saber", "stab", "tabs",
    # shared by both bases
    "earn", "rate", "rent", "nest", "stare", "tears", "tent",
    # pangram basis aegnrst, twice
    "strange", "garnets",
    "range", "anger", "grant", "great", "grate", "rags", "stag",
    # letters outside every basis
    "zebra", "quick",
    # dropped at load time
    "cat",
]


@pytest.fixture
def sample_words():
    """Raw word list used to build the sample dictionary."""
    return list(SAMPLE_WORDS)


@pytest.fixture
def sample_dictionary(sample_words):
    """Dictionary with two pangram bases."""
    return WordDictionary(sample_words)


@pytest.fixture
def open_constraints():
    """Constraints wide enough for every sample candidate."""
    return GenerationConstraints(
        target_puzzle_count=100,
        min_words=1,
        max_words=100,
        min_pangrams_per_puzzle=1,
        target_average_score=50
    )
