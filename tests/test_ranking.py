import numpy as np
import pytest

from tanabe_zhang.ranking import rank, dedupe_pairs


def test_rank_descending():
    ranked, order = rank([3.0, 1.0, 2.0])
    assert list(ranked) == [3.0, 2.0, 1.0]
    assert list(order) == [0, 2, 1]


def test_rank_ties_keep_original_order():
    ranked, order = rank([1.0, 2.0, 2.0, 0.0, 2.0])
    assert list(order) == [1, 2, 4, 0, 3]
    assert list(ranked) == [2.0, 2.0, 2.0, 1.0, 0.0]


def test_rank_is_permutation():
    values = np.random.default_rng(1).normal(size=16)
    ranked, order = rank(values)
    assert sorted(order) == list(range(16))
    assert np.all(np.diff(ranked) <= 0)
    assert np.array_equal(ranked, values[order])


def test_dedupe_pairs_keeps_extreme_vote():
    values = np.arange(16.0)
    reduced = dedupe_pairs(values, keep="max")
    assert reduced.shape == (14,)
    assert reduced[8] == 9.0  # hands
    assert reduced[13] == 15.0  # feet

    reduced = dedupe_pairs(values, keep="min")
    assert reduced[8] == 8.0
    assert reduced[13] == 14.0


def test_dedupe_pairs_checks_input():
    with pytest.raises(ValueError):
        dedupe_pairs(np.zeros(14))
    with pytest.raises(ValueError):
        dedupe_pairs(np.zeros(16), keep="mean")
