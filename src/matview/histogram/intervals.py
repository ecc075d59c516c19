"""Mass of every interval of a histogram.

Intervals are stored in an ``L x L`` array: ``m[i, j]`` is the mass of the
bins ``i..j``. Linear histograms only use ``i <= j``. Circular histograms also
use ``i > j`` for the intervals wrapping past the last bin, so ``m[i, i - 1]``
covers the whole circle starting at bin ``i``.
"""
from __future__ import annotations

import numpy as np


def integrate(v) -> np.ndarray:
    """Cumulative sum, as a new float array."""
    return np.cumsum(np.asarray(v, dtype=float))


def normalize(v, cst: float) -> np.ndarray:
    return np.asarray(v, dtype=float) / cst


def uniform_pdf(L: int) -> np.ndarray:
    return np.full(L, 1.0 / L)


def interval_mask(L: int, circular: bool) -> np.ndarray:
    """Cells of the interval matrix that hold an interval."""
    if circular:
        return np.ones((L, L), dtype=bool)
    return np.triu(np.ones((L, L), dtype=bool))


def vector_to_intervals(cum, circular: bool, total_mass: float) -> np.ndarray:
    """Interval masses from a cumulative histogram ``cum``.

    ``total_mass`` is the mass of the whole histogram, added to the
    wrapping intervals of circular histograms.
    """
    v = np.asarray(cum, dtype=float)
    prev = np.concatenate(([0.0], v[:-1]))
    # m[i, j] = cum[j] - cum[i - 1]
    m = v[None, :] - prev[:, None]
    if circular:
        wrap = np.tril(np.ones_like(m, dtype=bool), -1)
        m[wrap] += total_mass
    else:
        m = np.triu(m)
    return m


__all__ = ["integrate", "normalize", "uniform_pdf", "interval_mask", "vector_to_intervals"]
