"""Jonker-Volgenant solver for the dense linear assignment problem."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

LARGE = 1000000.0


def _column_reduction(
    n: int, cost: List[List[float]], free_rows: List[int],
    x: List[int], y: List[int], v: List[float],
) -> int:
    """Column reduction and reduction transfer; returns the free row count."""
    for i in range(n):
        x[i] = -1
        v[i] = LARGE
        y[i] = 0
    for i, row in enumerate(cost):
        for j, c in enumerate(row):
            if c < v[j]:
                v[j] = c
                y[j] = i

    unique = [True] * n
    for j in range(n - 1, -1, -1):
        i = y[j]
        if x[i] < 0:
            x[i] = j
        else:
            unique[i] = False
            y[j] = -1

    n_free = 0
    for i in range(n):
        if x[i] < 0:
            free_rows[n_free] = i
            n_free += 1
        elif unique[i]:
            j = x[i]
            smallest = LARGE
            for j2 in range(n):
                if j2 == j:
                    continue
                c = cost[i][j2] - v[j2]
                if c < smallest:
                    smallest = c
            v[j] -= smallest
    return n_free


def _augmenting_row_reduction(
    n: int, cost: List[List[float]], n_free: int, free_rows: List[int],
    x: List[int], y: List[int], v: List[float],
) -> int:
    """Augmenting row reduction; returns the new free row count."""
    current = 0
    new_free = 0
    rr_cnt = 0
    while current < n_free:
        rr_cnt += 1
        free_i = free_rows[current]
        current += 1
        row = cost[free_i]
        j1 = 0
        v1 = row[0] - v[0]
        j2 = -1
        v2 = LARGE
        for j in range(1, n):
            c = row[j] - v[j]
            if c < v2:
                if c >= v1:
                    v2 = c
                    j2 = j
                else:
                    v2 = v1
                    v1 = c
                    j2 = j1
                    j1 = j
        i0 = y[j1]
        v1_new = v[j1] - (v2 - v1)
        v1_lowers = v1_new < v[j1]
        if rr_cnt < current * n:
            if v1_lowers:
                v[j1] = v1_new
            elif i0 >= 0 and j2 >= 0:
                j1 = j2
                i0 = y[j2]
            if i0 >= 0:
                if v1_lowers:
                    current -= 1
                    free_rows[current] = i0
                else:
                    free_rows[new_free] = i0
                    new_free += 1
        elif i0 >= 0:
            free_rows[new_free] = i0
            new_free += 1
        x[free_i] = j1
        y[j1] = free_i
    return new_free


def _find(n: int, lo: int, d: List[float], cols: List[int]) -> int:
    """Move the columns with minimal ``d`` to the scan list; return its end."""
    hi = lo + 1
    mind = d[cols[lo]]
    for k in range(hi, n):
        j = cols[k]
        if d[j] <= mind:
            if d[j] < mind:
                hi = lo
                mind = d[j]
            cols[k] = cols[hi]
            cols[hi] = j
            hi += 1
    return hi


def _scan(
    n: int, cost: List[List[float]], lo: int, hi: int, d: List[float],
    cols: List[int], pred: List[int], y: List[int], v: List[float],
) -> Tuple[int, int, int]:
    """Relax the to-do columns from the scan list.

    Returns (free column or -1, lo, hi). When a free column is found the
    bounds passed in are returned unchanged.
    """
    start_lo, start_hi = lo, hi
    while lo != hi:
        j = cols[lo]
        lo += 1
        i = y[j]
        mind = d[j]
        h = cost[i][j] - v[j] - mind
        for k in range(hi, n):
            j = cols[k]
            cred = cost[i][j] - v[j] - h
            if cred < d[j]:
                d[j] = cred
                pred[j] = i
                if cred == mind:
                    if y[j] < 0:
                        return j, start_lo, start_hi
                    cols[k] = cols[hi]
                    cols[hi] = j
                    hi += 1
    return -1, lo, hi


def _find_path(
    n: int, cost: List[List[float]], start_i: int,
    y: List[int], v: List[float], pred: List[int],
) -> int:
    """One shortest-path search; returns the closest free column."""
    lo = hi = 0
    final_j = -1
    n_ready = 0
    cols = list(range(n))
    d = [cost[start_i][j] - v[j] for j in range(n)]
    for j in range(n):
        pred[j] = start_i
    while final_j == -1:
        if lo == hi:
            n_ready = lo
            hi = _find(n, lo, d, cols)
            for j in cols[lo:hi]:
                if y[j] < 0:
                    final_j = j
        if final_j == -1:
            final_j, lo, hi = _scan(n, cost, lo, hi, d, cols, pred, y, v)
    mind = d[cols[lo]]
    for j in cols[:n_ready]:
        v[j] += d[j] - mind
    return final_j


def _augment(
    n: int, cost: List[List[float]], n_free: int, free_rows: List[int],
    x: List[int], y: List[int], v: List[float],
) -> None:
    """Augment along shortest paths from every remaining free row."""
    pred = [0] * n
    for free_i in free_rows[:n_free]:
        i = -1
        j = _find_path(n, cost, free_i, y, v, pred)
        while i != free_i:
            i = pred[j]
            y[j] = i
            j, x[i] = x[i], j


def lapjv(cost: Sequence[Sequence[float]]) -> Tuple[List[int], List[int]]:
    """Solve the square assignment problem for ``cost`` by minimising total cost.

    Returns ``(row_to_column, column_to_row)``.
    """
    matrix = np.asarray(cost, dtype=float)
    if matrix.size == 0:
        return [], []
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"cost matrix must be square, got shape {matrix.shape}")
    n = matrix.shape[0]
    rows: List[List[float]] = matrix.tolist()
    x = [0] * n
    y = [0] * n
    v = [0.0] * n
    free_rows = [0] * n
    n_free = _column_reduction(n, rows, free_rows, x, y, v)
    passes = 0
    while n_free > 0 and passes < 2:
        n_free = _augmenting_row_reduction(n, rows, n_free, free_rows, x, y, v)
        passes += 1
    if n_free > 0:
        _augment(n, rows, n_free, free_rows, x, y, v)
    return x, y


def assignment_cost(
    cost: Sequence[Sequence[float]], row_to_column: Sequence[int]
) -> float:
    """Return the total cost of assigning row ``i`` to ``row_to_column[i]``."""
    matrix = np.asarray(cost, dtype=float)
    if matrix.size == 0 and len(row_to_column) == 0:
        return 0.0
    if matrix.ndim != 2 or matrix.shape[0] != len(row_to_column):
        raise ValueError("assignment length does not match the cost matrix")
    return float(sum(matrix[i, j] for i, j in enumerate(row_to_column)))