"""
Unit tests for gridpath/core/heuristic.py
"""

import pytest

from gridpath.core.heuristic import (
    HEURISTICS, estimate, get_heuristic, manhattan, skewed_manhattan,
)
from gridpath.core.types import SearchNode


def test_skewed_manhattan_adds_y_coordinates():
    assert skewed_manhattan((1, 1), (3, 1)) == 2 + 2
    assert skewed_manhattan((3, 2), (3, 1)) == 0 + 3
    assert skewed_manhattan((5, -4), (1, 1)) == 4 + 3


def test_manhattan_is_the_usual_distance():
    assert manhattan((1, 1), (3, 1)) == 2
    assert manhattan((3, 2), (1, 5)) == 5
    assert manhattan((2, 2), (2, 2)) == 0


def test_estimate_adds_cost_so_far():
    node = SearchNode((2, 1), 1)
    assert estimate(node, (3, 1)) == 1 + 1 + 2, "default is the legacy distance"
    assert estimate(node, (3, 1), manhattan) == 2


def test_get_heuristic():
    assert get_heuristic("legacy") is skewed_manhattan
    assert get_heuristic("manhattan") is manhattan
    assert set(HEURISTICS) == {"legacy", "manhattan"}
    with pytest.raises(ValueError):
        get_heuristic("euclidean")
