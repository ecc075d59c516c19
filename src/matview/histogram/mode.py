"""Detected meaningful interval of a histogram."""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

import numpy as np


class Mode:
    """Interval ``[a, b]`` of bins with its significance.

    ``a > b`` denotes a circular interval wrapping past the last bin. When a
    histogram is given, the mass inside the interval (``norm``) and its
    barycenter normalised by the number of bins (``phase``) are computed.
    """

    __slots__ = ("bins", "measure", "norm", "phase")

    def __init__(self, a: int, b: int, measure: float, hist: Optional[Sequence[float]] = None):
        self.bins: Tuple[int, int] = (int(a), int(b))
        self.measure = float(measure)
        self.norm: Optional[float] = None
        self.phase: Optional[float] = None
        if hist is not None:
            self.bary_center(hist)

    def length(self, L: int) -> int:
        """Number of bins covered in a histogram of ``L`` bins."""
        a, b = self.bins
        return b - a + 1 if b >= a else b - a + 1 + L

    def bary_center(self, hist: Sequence[float], norm_factor: Optional[float] = None) -> "Mode":
        h = np.asarray(hist, dtype=float)
        L = h.shape[0]
        norm_factor = norm_factor or L
        a, b = self.bins
        if b >= a:
            pos = np.arange(a, b + 1, dtype=float)
            w = h[a:b + 1]
        else:
            # unroll the wrapping interval past the last bin
            pos = np.arange(a, b + 1 + L, dtype=float)
            w = np.concatenate((h[a:], h[:b + 1]))
        weight = float(w.sum())
        bc = float((w * pos).sum() / weight) if weight > 0 else float(pos.mean())
        if bc >= L:
            bc -= L
        self.norm = weight
        self.phase = bc / norm_factor
        return self

    def copy(self) -> "Mode":
        m = Mode(self.bins[0], self.bins[1], self.measure)
        m.norm = self.norm
        m.phase = self.phase
        return m

    def to_dict(self) -> dict[str, Any]:
        return {
            "bins": list(self.bins),
            "measure": self.measure,
            "norm": self.norm,
            "phase": self.phase,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mode):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"[{self.bins[0]},{self.bins[1]}]"

    def __repr__(self) -> str:
        return f"Mode(bins={self.bins}, measure={self.measure:.6g}, phase={self.phase})"


__all__ = ["Mode"]
