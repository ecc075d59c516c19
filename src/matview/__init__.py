"""matview top-level API.

Strided / indexed N-dimensional views over flat buffers, and meaningful
mode/gap detection in histograms::

    from matview import View, get_modes
"""

from .api import analyze_histogram, analyze_samples
from .errors import MatviewError
from .histogram import (
    Mode,
    build_histograms,
    get_gaps,
    get_modes,
    get_modes_and_gaps,
    modes_from_samples,
)
from .utils.logging import configure_logging
from .view import IndexIterator, StridedIterator, View, ViewIterator

__all__ = [
    "View",
    "StridedIterator",
    "IndexIterator",
    "ViewIterator",
    "Mode",
    "get_modes_and_gaps",
    "get_modes",
    "get_gaps",
    "build_histograms",
    "modes_from_samples",
    "analyze_histogram",
    "analyze_samples",
    "MatviewError",
    "configure_logging",
]
