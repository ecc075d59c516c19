"""Significance of interval masses against a null distribution.

The entropy of an interval with relative mass ``r`` and null probability
``p`` measures how unlikely it is to observe at least that much mass. Values
are expressed in ``log10`` units per point so that they can be compared with
:func:`get_threshold`.
"""
from __future__ import annotations

import functools
import math
from typing import Callable, Optional, Tuple

import numpy as np
from scipy.special import log_ndtr

from .intervals import interval_mask

ILOG10 = 1.0 / math.log(10.0)
P_MIN = np.finfo(float).tiny

EntropyFct = Callable[[object, object], object]


def _scalar_out(fn):
    @functools.wraps(fn)
    def wrapped(r, p):
        out = fn(np.asarray(r, dtype=float), np.asarray(p, dtype=float))
        return float(out) if np.ndim(out) == 0 else out

    return wrapped


def get_entropy_fct(M: float, mu: Optional[float] = None, sigma2: Optional[float] = None) -> EntropyFct:
    """Return ``entropy(r, p)`` for a histogram of ``M`` points.

    Points have unit mass unless ``mu`` and ``sigma2`` (mean and variance of
    the point masses) are both positive, in which case the interval mass is
    approximated by a Gaussian.
    """
    if mu is not None and sigma2 is not None and mu > 0 and sigma2 > 0:
        c1 = -ILOG10 / M
        c2 = M * mu
        c3 = sigma2 / mu

        @_scalar_out
        def entropy(r, p):
            m = p * c2
            s = m * (mu * (1.0 - p) + c3)
            ok = (p > P_MIN) & (s > 0)
            with np.errstate(divide="ignore", invalid="ignore"):
                z = (M * r - m) / np.sqrt(2.0 * s)
                # log(0.5 * erfc(z))
                h = log_ndtr(-math.sqrt(2.0) * z) * c1
            return np.where(ok, h, 0.0)

        return entropy

    @_scalar_out
    def entropy(r, p):
        with np.errstate(divide="ignore", invalid="ignore"):
            kl = r * np.log(r / p) + (1.0 - r) * np.log((1.0 - r) / (1.0 - p))
            full = -np.log(p)
        h = np.where(r >= 1.0, full, kl)
        return np.where((r <= p) | (p <= P_MIN), 0.0, h) * ILOG10

    return entropy


def compute_entropy(r: np.ndarray, p: np.ndarray, fct: EntropyFct, cst: float, circular: bool) -> Tuple[np.ndarray, np.ndarray]:
    """Mode and gap entropies of every interval.

    ``cst`` is the relative mass of the whole histogram, so that ``cst - r``
    is the mass outside an interval.
    """
    L = r.shape[0]
    mask = interval_mask(L, circular)
    hmod = np.zeros((L, L))
    hgap = np.zeros((L, L))
    hmod[mask] = fct(r[mask], p[mask])
    hgap[mask] = fct(cst - r[mask], 1.0 - p[mask])
    return hmod, hgap


def get_threshold(L: int, M: float, eps: float, circular: bool) -> float:
    """Entropy above which an interval is meaningful.

    ``eps`` is ``-log10`` of the expected number of false detections among
    the ``L(L-1)`` (circular) or ``L(L-1)/2`` (linear) tested intervals.
    """
    n = L * (L - 1) if circular else L * (L - 1) / 2
    return (math.log10(max(n, 1)) + eps) / M


__all__ = ["get_entropy_fct", "compute_entropy", "get_threshold", "ILOG10"]
