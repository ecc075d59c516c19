"""Meaningful modes and gaps of histograms."""
from .build import HistogramResult, build_histograms, modes_from_samples
from .detect import (
    extract_gaps,
    extract_modes,
    extract_modes_and_gaps,
    get_gaps,
    get_modes,
    get_modes_and_gaps,
    initialize,
)
from .entropy import compute_entropy, get_entropy_fct, get_threshold
from .intervals import integrate, normalize, uniform_pdf, vector_to_intervals
from .mode import Mode
from .selector import if_gap_or_mode, max_inf, max_sup, select_intervals

__all__ = [
    "Mode",
    "HistogramResult",
    "build_histograms",
    "modes_from_samples",
    "initialize",
    "extract_modes_and_gaps",
    "extract_modes",
    "extract_gaps",
    "get_modes_and_gaps",
    "get_modes",
    "get_gaps",
    "integrate",
    "normalize",
    "uniform_pdf",
    "vector_to_intervals",
    "get_entropy_fct",
    "compute_entropy",
    "get_threshold",
    "if_gap_or_mode",
    "max_inf",
    "max_sup",
    "select_intervals",
]
