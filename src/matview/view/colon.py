"""Argument checks shared by the view operations."""
from __future__ import annotations

import numbers
from typing import Any, Sequence, Tuple

import numpy as np

from matview.errors import InvalidDimension, InvalidIndex


def is_integer(v: Any, lo: int | None = None, hi: int | None = None) -> bool:
    """True if *v* is an integer (bools excluded) within ``[lo, hi]``."""
    if isinstance(v, (bool, np.bool_)) or not isinstance(v, numbers.Integral):
        return False
    if lo is not None and v < lo:
        return False
    if hi is not None and v > hi:
        return False
    return True


def is_sequence(v: Any) -> bool:
    return isinstance(v, (list, tuple, range, np.ndarray))


def is_boolean_sequence(v: Any) -> bool:
    if isinstance(v, np.ndarray):
        return v.dtype == np.bool_ and v.size > 0
    return is_sequence(v) and len(v) > 0 and all(isinstance(b, (bool, np.bool_)) for b in v)


def check_dim(op: str, d: Any) -> int:
    if not is_integer(d, 0):
        raise InvalidDimension(f"{op}: dimension must be a non-negative integer, got {d!r}")
    return int(d)


def check_size(op: str, shape: Any) -> list[int]:
    """Normalise a shape argument to a list of positive ints.

    A scalar ``n`` is a column vector ``[n, 1]``.
    """
    if is_integer(shape):
        shape = [shape]
    if not is_sequence(shape) or len(shape) < 1:
        raise InvalidDimension(f"{op}: invalid shape {shape!r}")
    out = []
    for s in shape:
        if not is_integer(s, 1):
            raise InvalidDimension(f"{op}: shape entries must be positive integers, got {shape!r}")
        out.append(int(s))
    if len(out) == 1:
        out.append(1)
    return out


def check_colon(op: str, sel: Any, length: int) -> Tuple[int, int, int]:
    """Normalise a colon selector to ``(start, step, end)`` with inclusive end.

    Accepted forms: ``[]`` (everything), ``v`` or ``[v]``, ``[a, b]`` and
    ``[a, s, b]``. Negative values count from the end of the dimension.
    """
    if is_integer(sel):
        sel = [sel]
    if not is_sequence(sel):
        raise InvalidIndex(f"{op}: invalid selection {sel!r}")
    sel = list(sel)
    if len(sel) == 0:
        return 0, 1, length - 1
    if not all(is_integer(x) for x in sel):
        raise InvalidIndex(f"{op}: selection must be made of integers, got {sel!r}")
    s = None
    if len(sel) == 1:
        a = b = int(sel[0])
    elif len(sel) == 2:
        a, b = int(sel[0]), int(sel[1])
    elif len(sel) == 3:
        a, s, b = int(sel[0]), int(sel[1]), int(sel[2])
    else:
        raise InvalidIndex(f"{op}: selection expects 1, 2 or 3 values, got {sel!r}")

    a = a if a >= 0 else a + length
    b = b if b >= 0 else b + length
    if not (0 <= a < length and 0 <= b < length):
        raise InvalidIndex(f"{op}: selection {sel!r} out of bounds for size {length}")

    if s is None:
        s = 1 if a <= b else -1
    elif s == 0 or (b - a) * s < 0:
        raise InvalidIndex(f"{op}: invalid step {s} for selection {sel!r}")
    return a, s, b


def check_indices(op: str, ind: Sequence[Any], size: int) -> list[int]:
    if isinstance(ind, np.ndarray):
        if ind.dtype == np.bool_ or not np.issubdtype(ind.dtype, np.integer):
            raise InvalidIndex(f"{op}: indices must be integers")
        ind = ind.tolist()
    if not is_sequence(ind):
        raise InvalidIndex(f"{op}: indices must be a sequence, got {ind!r}")
    if len(ind) == 0:
        raise InvalidIndex(f"{op}: empty selection")
    out = []
    for i in ind:
        if not is_integer(i, 0, size - 1):
            raise InvalidIndex(f"{op}: index {i!r} out of [0, {size - 1}]")
        out.append(int(i))
    return out


__all__ = [
    "is_integer",
    "is_sequence",
    "is_boolean_sequence",
    "check_dim",
    "check_size",
    "check_colon",
    "check_indices",
]
