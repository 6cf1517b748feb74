"""Optimal one-dimensional k-means clustering (Ckmeans.1d.dp).

Splits a set of scalar values into ``k`` groups of consecutive sorted
values so that the total within-group sum of squared deviations is
minimal. Solved exactly by dynamic programming over the sorted values,
with the inner minimization vectorized through numpy. O(k * n^2) time,
O(k * n) memory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class ClusterResult:
    """Groups ordered ascending by mean, plus the effective cluster count."""

    groups: list[list[float]] = field(default_factory=list)
    k: int = 0
    cost: float = 0.0

    def __iter__(self):
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def means(self) -> list[float]:
        return [float(np.mean(g)) for g in self.groups]


def _segment_cost(prefix: np.ndarray, prefix_sq: np.ndarray, start, end):
    """Sum of squared deviations of sorted values[start..end] (inclusive).

    Accepts scalars or index arrays for ``start``/``end``.
    """
    count = end - start + 1
    total = prefix[end + 1] - prefix[start]
    total_sq = prefix_sq[end + 1] - prefix_sq[start]
    # Cancellation can leave tiny negative values
    return np.maximum(total_sq - total * total / count, 0.0)


def ckmeans(values: Iterable[float], k: int) -> ClusterResult:
    """Partition ``values`` into ``k`` optimal groups.

    If there are fewer values than ``k``, ``k`` is reduced to the number of
    values; the effective count is returned in ``ClusterResult.k``. Equal
    values keep their input order, and among equally good partitions the
    one with the larger last group wins, so the result is deterministic.

    Raises:
        ValueError: If ``k`` < 1.
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")

    data = np.asarray(list(values), dtype=float)
    n = int(data.size)
    if n == 0:
        return ClusterResult(groups=[], k=0)
    if n < k:
        logger.debug("Reducing cluster count from %d to %d", k, n)
        k = n

    x = data[np.argsort(data, kind="stable")]
    prefix = np.concatenate(([0.0], np.cumsum(x)))
    prefix_sq = np.concatenate(([0.0], np.cumsum(x * x)))

    # cost[c, j]: best cost of splitting x[0..j] into c + 1 groups
    # start[c, j]: index where the last of those groups begins
    cost = np.full((k, n), np.inf)
    start = np.zeros((k, n), dtype=np.intp)
    ends = np.arange(n)
    cost[0] = _segment_cost(prefix, prefix_sq, np.zeros(n, dtype=np.intp), ends)

    for c in range(1, k):
        for j in range(c, n):
            starts = np.arange(c, j + 1)
            candidates = cost[c - 1, starts - 1] + _segment_cost(prefix, prefix_sq, starts, j)
            best = int(np.argmin(candidates))
            cost[c, j] = candidates[best]
            start[c, j] = starts[best]

    groups: list[list[float]] = []
    end = n - 1
    for c in range(k - 1, -1, -1):
        first = int(start[c, end]) if c > 0 else 0
        groups.append(x[first : end + 1].tolist())
        end = first - 1
    groups.reverse()

    return ClusterResult(groups=groups, k=k, cost=float(cost[k - 1, n - 1]))


def cluster(values: Iterable[float], k: int) -> list[list[float]]:
    """Shorthand for ``ckmeans(values, k).groups``."""
    return ckmeans(values, k).groups
