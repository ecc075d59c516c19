"""Histograms of sample values, and mode detection straight from samples."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from matview.errors import InvalidHistogram
from .detect import get_modes
from .mode import Mode


@dataclass
class HistogramResult:
    """Counts and, for weighted samples, masses per bin.

    ``mu``/``sigma2`` are the mean and unbiased variance of the weights of the
    counted samples (``None`` without weights), ``M`` the number of counted
    samples.
    """

    hist: np.ndarray
    histw: Optional[np.ndarray]
    mu: Optional[float]
    sigma2: Optional[float]
    M: int


def build_histograms(
    values: Sequence[float],
    bins: int,
    lo: float,
    hi: float,
    circular: bool = False,
    weights: Optional[Sequence[float]] = None,
) -> HistogramResult:
    """Bin ``values`` into ``bins`` equal bins over ``[lo, hi]``.

    Circular histograms wrap values outside the range (angles, hues...).
    Linear ones drop them; a value equal to ``hi`` falls in the last bin.
    """
    op = "build_histograms"
    if not (isinstance(bins, (int, np.integer)) and bins >= 1):
        raise InvalidHistogram(f"{op}: bins must be a positive integer, got {bins!r}")
    if not hi > lo:
        raise InvalidHistogram(f"{op}: empty range [{lo}, {hi}]")
    x = np.asarray(values, dtype=float).ravel()
    w = None
    if weights is not None:
        w = np.asarray(weights, dtype=float).ravel()
        if w.shape != x.shape:
            raise InvalidHistogram(f"{op}: {w.size} weights for {x.size} values")

    ind = np.floor((x - lo) / (hi - lo) * bins).astype(np.int64)
    if circular:
        keep = np.ones(x.shape, dtype=bool)
        ind %= bins
    else:
        keep = (x >= lo) & (x <= hi)
        ind = np.minimum(ind, bins - 1)
    ind = ind[keep]

    hist = np.bincount(ind, minlength=bins).astype(float)
    histw = mu = sigma2 = None
    if w is not None:
        wk = w[keep]
        histw = np.bincount(ind, weights=wk, minlength=bins)
        if wk.size:
            mu = float(wk.mean())
            sigma2 = float(wk.var(ddof=1)) if wk.size > 1 else 0.0
    return HistogramResult(hist=hist, histw=histw, mu=mu, sigma2=sigma2, M=int(ind.size))


def modes_from_samples(
    values: Sequence[float],
    bins: int,
    lo: float,
    hi: float,
    circular: bool = False,
    eps: float = 0.0,
    weights: Optional[Sequence[float]] = None,
) -> List[Mode]:
    """Meaningful modes of the histogram of ``values``.

    With ``weights`` the weighted histogram is analysed under the Gaussian
    mass model.
    """
    h = build_histograms(values, bins, lo, hi, circular, weights)
    if h.histw is None:
        return get_modes(h.hist, circular, eps)
    return get_modes(h.histw, circular, eps, M=h.M, mu=h.mu, sigma2=h.sigma2)


__all__ = ["HistogramResult", "build_histograms", "modes_from_samples"]
