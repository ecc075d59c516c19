"""Maximal meaningful intervals.

Every interval of an ``L``-bin histogram is an arc ``(start, length)`` stored
at cell ``[start, (start + length - 1) % L]`` of an ``L x L`` matrix. The arc
``[i, j]`` of length ``k > 1`` directly contains the two arcs ``[i + 1, j]``
and ``[i, j - 1]`` of length ``k - 1`` (indices modulo ``L`` for circular
histograms), and any nested arc is reached through a chain of such steps. The
sweeps below process all arcs of one length at once, from the shortest to the
longest (contained intervals) or the other way round (containing intervals).
Linear histograms only have the arcs that do not wrap past the last bin.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .intervals import interval_mask
from .mode import Mode


def arcs(L: int, k: int, circular: bool) -> Tuple[np.ndarray, np.ndarray]:
    """Rows and columns of all arcs of length ``k``."""
    n = L if circular else L - k + 1
    i = np.arange(n)
    return i, (i + k - 1) % L


def _sweep_inward(c: np.ndarray, circular: bool, combine: Callable) -> np.ndarray:
    """``c[i, j] = combine(c[i, j], c[i + 1, j], c[i, j - 1])`` from short to long arcs."""
    L = c.shape[0]
    for k in range(2, L + 1):
        i, j = arcs(L, k, circular)
        c[i, j] = combine(c[i, j], combine(c[(i + 1) % L, j], c[i, (j - 1) % L]))
    return c


def if_gap_or_mode(H1: np.ndarray, H2: np.ndarray, L: int, thresh: float, circular: bool) -> np.ndarray:
    """Copy of ``H1`` zeroed on every interval containing a meaningful ``H2`` interval.

    An interval contains itself, so ``H1`` is also zeroed where ``H2`` is
    meaningful.
    """
    mask = interval_mask(L, circular)
    hit = (np.asarray(H2) >= thresh) & mask
    hit = _sweep_inward(hit, circular, np.logical_or)
    return np.where(hit | ~mask, 0.0, H1)


def max_inf(H: np.ndarray, L: int, circular: bool) -> np.ndarray:
    """Maximum of ``H`` over the intervals contained in each interval."""
    mask = interval_mask(L, circular)
    c = np.where(mask, H, 0.0)
    return _sweep_inward(c, circular, np.maximum)


def max_sup(H: np.ndarray, L: int, circular: bool) -> np.ndarray:
    """Maximum of ``H`` over the intervals containing each interval."""
    mask = interval_mask(L, circular)
    c = np.where(mask, H, 0.0)
    for k in range(L - 1, 0, -1):
        i, j = arcs(L, k, circular)
        h = c[i, j]
        left = c[(i - 1) % L, j]
        right = c[i, (j + 1) % L]
        if not circular:
            left = np.where(i >= 1, left, h)
            right = np.where(j + 1 <= L - 1, right, h)
        c[i, j] = np.maximum(h, np.maximum(left, right))
    return c


def select_intervals(hist: Optional[Sequence[float]], circular: bool, H: np.ndarray, Hsup: np.ndarray, Hinf: np.ndarray, thresh: float) -> list[Mode]:
    """Meaningful intervals dominated by no nested or nesting interval.

    Ties are kept: an interval and one it contains may both be returned when
    their entropies are equal. Results are sorted by decreasing measure.
    Zero-entropy intervals are never returned, even when ``thresh <= 0``
    (single bin, negative ``eps``).
    """
    L = H.shape[0]
    keep = (H >= thresh) & (H > 0) & (Hsup <= H) & (Hinf <= H) & interval_mask(L, circular)
    out = [Mode(i, j, H[i, j], hist) for i, j in zip(*np.nonzero(keep))]
    out.sort(key=lambda m: m.measure, reverse=True)
    return out


__all__ = ["arcs", "if_gap_or_mode", "max_inf", "max_sup", "select_intervals"]
