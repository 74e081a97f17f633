import itertools
import random

import numpy as np
import pytest

from tsoax.lapjv import assignment_cost, lapjv


def _brute_force_best(cost):
    n = len(cost)
    return min(
        sum(cost[i][p[i]] for i in range(n))
        for p in itertools.permutations(range(n))
    )


def _random_cost(n, seed, integers=False):
    rng = random.Random(seed)
    if integers:
        return [[rng.randint(0, 20) for _ in range(n)] for _ in range(n)]
    return [[rng.uniform(0.0, 100.0) for _ in range(n)] for _ in range(n)]


def _check_consistent(x, y, n):
    assert sorted(x) == list(range(n))
    assert sorted(y) == list(range(n))
    for i, j in enumerate(x):
        assert y[j] == i


def test_empty_matrix():
    assert lapjv([]) == ([], [])


def test_single_element():
    x, y = lapjv([[5.0]])
    assert x == [0]
    assert y == [0]


def test_anti_diagonal_preference():
    x, y = lapjv([[10, 1], [1, 10]])
    assert x == [1, 0]
    assert y == [1, 0]


def test_identity_preference():
    cost = [[0 if i == j else 9 for j in range(4)] for i in range(4)]
    x, _ = lapjv(cost)
    assert x == list(range(4))


@pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
@pytest.mark.parametrize("seed", range(5))
def test_random_float_matches_brute_force(n, seed):
    cost = _random_cost(n, seed)
    x, y = lapjv(cost)
    _check_consistent(x, y, n)
    assert assignment_cost(cost, x) == pytest.approx(_brute_force_best(cost))


@pytest.mark.parametrize("n", [3, 5, 6])
@pytest.mark.parametrize("seed", range(5))
def test_random_integer_with_ties_matches_brute_force(n, seed):
    cost = _random_cost(n, seed + 100, integers=True)
    x, y = lapjv(cost)
    _check_consistent(x, y, n)
    assert assignment_cost(cost, x) == pytest.approx(_brute_force_best(cost))


def test_constant_matrix_gives_valid_permutation():
    cost = [[3.0] * 5 for _ in range(5)]
    x, y = lapjv(cost)
    _check_consistent(x, y, 5)
    assert assignment_cost(cost, x) == pytest.approx(15.0)


def test_accepts_numpy_array():
    cost = np.array(_random_cost(4, 7))
    x, y = lapjv(cost)
    _check_consistent(x, y, 4)
    assert assignment_cost(cost, x) == pytest.approx(_brute_force_best(cost.tolist()))


def test_non_square_raises():
    with pytest.raises(ValueError):
        lapjv([[1, 2, 3], [4, 5, 6]])


def test_assignment_cost_length_mismatch():
    with pytest.raises(ValueError):
        assignment_cost([[1, 2], [3, 4]], [0])


def test_assignment_cost_sums_selected_entries():
    cost = [[1, 2], [3, 4]]
    assert assignment_cost(cost, [1, 0]) == cost[0][1] + cost[1][0]