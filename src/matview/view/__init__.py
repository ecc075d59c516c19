"""Strided / indexed views over flat buffers."""
from .core import View
from .dims import AffineDim, IndexedDim
from .extract import addressed_offsets
from .iterators import IndexIterator, StridedIterator, ViewIterator

__all__ = [
    "View",
    "AffineDim",
    "IndexedDim",
    "StridedIterator",
    "IndexIterator",
    "ViewIterator",
    "addressed_offsets",
]
