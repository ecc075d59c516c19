"""Configuration-driven entry points for histogram analysis."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .config.schema import MatviewConfig
from .histogram.build import modes_from_samples
from .histogram.detect import get_gaps, get_modes, get_modes_and_gaps
from .histogram.mode import Mode
from .utils.config import get

_KINDS = ("modes", "gaps", "both")


def _validated(cfg: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return MatviewConfig.model_validate(dict(cfg or {})).model_dump()


def analyze_histogram(
    histogram: Sequence[float],
    cfg: Optional[Mapping[str, Any]] = None,
    kind: str = "modes",
) -> Union[List[Mode], Dict[str, List[Mode]]]:
    """Detect modes, gaps or both with the parameters of ``cfg["modes"]``.

    ``cfg`` is a configuration mapping as returned by
    :func:`matview.config.load_config`; missing keys take their defaults.
    """
    if kind not in _KINDS:
        raise ValueError(f"analyze_histogram: kind must be one of {_KINDS}, got {kind!r}")
    params = get(_validated(cfg), "modes")
    if kind == "modes":
        return get_modes(histogram, **params)
    if kind == "gaps":
        return get_gaps(histogram, **params)
    return get_modes_and_gaps(histogram, **params)


def analyze_samples(
    values: Sequence[float],
    cfg: Optional[Mapping[str, Any]] = None,
    weights: Optional[Sequence[float]] = None,
) -> List[Mode]:
    """Modes of the histogram of ``values``.

    Bins, range and circularity come from ``cfg["histogram"]``, the
    detection strictness from ``cfg["modes"]["eps"]``.
    """
    c = _validated(cfg)
    return modes_from_samples(
        values,
        get(c, "histogram.bins"),
        get(c, "histogram.lo"),
        get(c, "histogram.hi"),
        circular=get(c, "histogram.circular"),
        eps=get(c, "modes.eps"),
        weights=weights,
    )


__all__ = ["analyze_histogram", "analyze_samples"]
