"""Error kinds raised by matview.

Every error derives from :class:`MatviewError` (itself a ``ValueError``) so
callers can catch the whole family at once. Messages start with the name of
the failing operation, e.g. ``"View.select_dimension: invalid dimension 3"``.
"""
from __future__ import annotations


class MatviewError(ValueError): ...
class InvalidDimension(MatviewError): ...
class InvalidIndex(MatviewError): ...
class DimensionMismatch(MatviewError): ...
class InvalidShift(MatviewError): ...
class InvalidPermutation(MatviewError): ...
class InvalidLength(MatviewError): ...
class SameBufferError(MatviewError): ...
class InvalidHistogram(MatviewError): ...


class UnsupportedOperation(InvalidDimension):
    """Operation undefined for the representation of the targeted dimension.

    ``get_first``/``get_step`` on an indexed dimension, ``get_indices`` on an
    affine one.
    """


__all__ = [
    "MatviewError",
    "InvalidDimension",
    "InvalidIndex",
    "DimensionMismatch",
    "InvalidShift",
    "InvalidPermutation",
    "InvalidLength",
    "SameBufferError",
    "InvalidHistogram",
    "UnsupportedOperation",
]
