"""
Shared pytest fixtures for FFA bracket tests.

Running tests:
    pytest tests/                  - full suite, including the configuration sweep
    pytest tests/ -m "not slow"   - fast subset (for small changes)
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from ffa.models import BracketConfig
from ffa.tournament import FFA


def slot_order_scores(match):
    """Scores where every slot beats the slots after it: [n, n-1, ..., 1]."""
    return [len(match.players) - i for i in range(len(match.players))]


@pytest.fixture
def slot_scores():
    """Return the slot order scoring function."""
    return slot_order_scores


@pytest.fixture
def score_round():
    """Return a helper scoring every match of a round by slot order."""
    def _score_round(ffa, round_number):
        for match in ffa.find_matches(round_number):
            assert ffa.score(match.id, slot_order_scores(match))
    return _score_round


@pytest.fixture
def ffa_32():
    """32 players, 4 groups of 8, top 2 of each group into a final of 8."""
    return FFA(32, [8, 8], [2])


@pytest.fixture
def ffa_limited():
    """32 players, top 4 of each group into two final groups of 8, 4 survive."""
    return FFA(32, [8, 8], [4], limit=4)


@pytest.fixture
def sample_config():
    """The awkward 28 player layout with automatic group reduction."""
    return BracketConfig(num_players=28, group_sizes=[7, 6, 6], advancers=[3, 3])
