"""Detection of meaningful modes and gaps in a histogram.

A *mode* is an interval holding significantly more mass than expected under a
null distribution (uniform by default, ``ground_pdf`` otherwise), a *gap* one
holding significantly less. Only maximal intervals are returned: meaningful,
free of meaningful intervals of the opposite kind, and neither contained in
nor containing a more significant interval.

Points contribute a unit mass unless ``mu``/``sigma2`` describe the mean and
variance of their masses, in which case a Gaussian approximation is used.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from matview.errors import InvalidHistogram
from .entropy import compute_entropy, get_entropy_fct, get_threshold
from .intervals import integrate, normalize, uniform_pdf, vector_to_intervals
from .mode import Mode
from .selector import if_gap_or_mode, max_inf, max_sup, select_intervals

logger = logging.getLogger("matview.histogram.detect")


@dataclass
class Entropies:
    hmod: np.ndarray
    hgap: np.ndarray
    thresh: float


def _as_distribution(op: str, values, name: str, allow_empty_mass: bool = False) -> np.ndarray:
    v = np.array(values, dtype=float).ravel()
    if v.size == 0:
        raise InvalidHistogram(f"{op}: {name} is empty")
    if not np.all(np.isfinite(v)) or np.any(v < 0):
        raise InvalidHistogram(f"{op}: {name} must be finite and non-negative")
    if not allow_empty_mass and v.sum() <= 0:
        raise InvalidHistogram(f"{op}: {name} has no mass")
    return v


def _gaussian(mu, sigma2) -> bool:
    return mu is not None and sigma2 is not None and mu > 0 and sigma2 > 0


def initialize(
    histogram: Sequence[float],
    circular: bool = False,
    eps: float = 0.0,
    M: Optional[float] = None,
    mu: Optional[float] = None,
    sigma2: Optional[float] = None,
    ground_pdf: Optional[Sequence[float]] = None,
) -> Entropies:
    """Validate the inputs and compute the mode/gap entropies of every interval.

    An empty histogram (zero mass) yields no meaningful interval unless ``M``
    says how many points were expected, in which case every interval is a
    candidate gap.
    """
    op = "initialize"
    hist = _as_distribution(op, histogram, "histogram", allow_empty_mass=True)
    L = hist.shape[0]
    if ground_pdf is None:
        pdf = uniform_pdf(L)
    else:
        pdf = _as_distribution(op, ground_pdf, "ground_pdf")
        if pdf.shape[0] != L:
            raise InvalidHistogram(f"{op}: ground_pdf has {pdf.shape[0]} bins, histogram has {L}")

    cum_pdf = integrate(pdf)
    cum_hist = integrate(hist)
    mass = float(cum_hist[-1])
    if M is None:
        if mass <= 0:
            logger.debug("L=%d empty histogram, nothing to detect", L)
            return Entropies(np.zeros((L, L)), np.zeros((L, L)), math.inf)
        M = mass
    elif not M > 0:
        raise InvalidHistogram(f"{op}: M must be positive, got {M!r}")

    cum_pdf = normalize(cum_pdf, cum_pdf[-1])
    cum_hist = normalize(cum_hist, M)

    total = mass / M
    # unit masses: the complement of an interval counts all M points
    cst = total if _gaussian(mu, sigma2) else 1.0
    p = vector_to_intervals(cum_pdf, circular, 1.0)
    r = vector_to_intervals(cum_hist, circular, total)
    fct = get_entropy_fct(M, mu, sigma2)
    hmod, hgap = compute_entropy(r, p, fct, cst, circular)
    thresh = get_threshold(L, M, eps, circular)
    logger.debug("L=%d mass=%g M=%g circular=%s threshold=%g", L, mass, M, circular, thresh)
    return Entropies(hmod, hgap, thresh)


def _maximal(hist: np.ndarray, H: np.ndarray, other: np.ndarray, thresh: float, circular: bool) -> List[Mode]:
    L = hist.shape[0]
    h = if_gap_or_mode(H, other, L, thresh, circular)
    return select_intervals(hist, circular, h, max_sup(h, L, circular), max_inf(h, L, circular), thresh)


def extract_modes_and_gaps(histogram, circular=False, eps=0.0, M=None, mu=None, sigma2=None, ground_pdf=None) -> Dict[str, List[Mode]]:
    ent = initialize(histogram, circular, eps, M, mu, sigma2, ground_pdf)
    hist = np.array(histogram, dtype=float).ravel()
    gaps = _maximal(hist, ent.hgap, ent.hmod, ent.thresh, circular)
    modes = _maximal(hist, ent.hmod, ent.hgap, ent.thresh, circular)
    logger.info("detected %d modes and %d gaps over %d bins", len(modes), len(gaps), hist.shape[0])
    return {"modes": modes, "gaps": gaps}


def extract_modes(histogram, circular=False, eps=0.0, M=None, mu=None, sigma2=None, ground_pdf=None) -> List[Mode]:
    ent = initialize(histogram, circular, eps, M, mu, sigma2, ground_pdf)
    hist = np.array(histogram, dtype=float).ravel()
    modes = _maximal(hist, ent.hmod, ent.hgap, ent.thresh, circular)
    logger.info("detected %d modes over %d bins", len(modes), hist.shape[0])
    return modes


def extract_gaps(histogram, circular=False, eps=0.0, M=None, mu=None, sigma2=None, ground_pdf=None) -> List[Mode]:
    ent = initialize(histogram, circular, eps, M, mu, sigma2, ground_pdf)
    hist = np.array(histogram, dtype=float).ravel()
    gaps = _maximal(hist, ent.hgap, ent.hmod, ent.thresh, circular)
    logger.info("detected %d gaps over %d bins", len(gaps), hist.shape[0])
    return gaps


def get_modes_and_gaps(
    histogram: Sequence[float],
    circular: bool = False,
    eps: float = 0.0,
    M: Optional[float] = None,
    mu: Optional[float] = None,
    sigma2: Optional[float] = None,
    ground_pdf: Optional[Sequence[float]] = None,
) -> Dict[str, List[Mode]]:
    """Maximal meaningful modes and gaps of ``histogram``.

    Parameters
    ----------
    histogram:
        Non-negative bin masses, at least one bin.
    circular:
        Whether intervals may wrap past the last bin.
    eps:
        ``-log10`` of the expected number of false detections.
    M:
        Number of points behind the histogram, defaults to its total mass.
    mu, sigma2:
        Mean and variance of the point masses; both positive switch on the
        Gaussian model.
    ground_pdf:
        Null distribution over the bins (normalised here), uniform if omitted.

    Returns ``{"modes": [...], "gaps": [...]}``, each list sorted by
    decreasing measure. Inputs are not modified.
    """
    return extract_modes_and_gaps(histogram, circular, eps, M, mu, sigma2, ground_pdf)


def get_modes(histogram, circular=False, eps=0.0, M=None, mu=None, sigma2=None, ground_pdf=None) -> List[Mode]:
    """Maximal meaningful modes, see :func:`get_modes_and_gaps`."""
    return extract_modes(histogram, circular, eps, M, mu, sigma2, ground_pdf)


def get_gaps(histogram, circular=False, eps=0.0, M=None, mu=None, sigma2=None, ground_pdf=None) -> List[Mode]:
    """Maximal meaningful gaps, see :func:`get_modes_and_gaps`."""
    return extract_gaps(histogram, circular, eps, M, mu, sigma2, ground_pdf)


__all__ = [
    "Entropies",
    "initialize",
    "extract_modes_and_gaps",
    "extract_modes",
    "extract_gaps",
    "get_modes_and_gaps",
    "get_modes",
    "get_gaps",
]
