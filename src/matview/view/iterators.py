"""Iterators over the linear offsets addressed by a view.

All iterators share the same small protocol:

``begin(offset=0)``
    reset to the first element, ``offset`` being the base offset contributed
    by enclosing dimensions; return the first linear offset.
``iterator()``
    advance one element and return the new offset (or the end value).
``is_end()``
    whether the last returned offset is the end value.
``end()``
    the end value itself, for callers comparing against it directly.
``get_position()``
    the current coordinate(s) along the governed dimension(s).

:class:`StridedIterator` and :class:`IndexIterator` each govern a single
dimension. :class:`ViewIterator` chains one of them per dimension and carries
from the innermost to the outermost like an odometer.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence, Union

from .dims import AffineDim, IndexedDim

if TYPE_CHECKING:  # pragma: no cover
    from .core import View


class StridedIterator:
    """Walk ``first, first + step, ...`` for ``size`` elements."""

    __slots__ = ("_first", "_step", "_span", "_start", "_stop", "_index")

    def __init__(self, first: int, step: int, size: int):
        self._first = first
        self._step = step
        self._span = step * size
        self._start = self._stop = self._index = 0

    def begin(self, offset: int = 0) -> int:
        self._start = offset + self._first
        self._stop = self._start + self._span
        self._index = self._start
        return self._index

    def iterator(self) -> int:
        self._index += self._step
        return self._index

    def is_end(self) -> bool:
        return self._index == self._stop

    def end(self) -> int:
        return self._stop

    def get_position(self) -> int:
        return (self._index - self._start) // self._step

    def get_index(self) -> int:
        return self._index


class IndexIterator:
    """Walk an explicit list of offsets through precomputed deltas.

    The last delta sends the running offset to ``offset - 1``, which is never
    a valid offset, so the end test stays a single comparison.
    """

    __slots__ = ("_first", "_steps", "_pos", "_stop", "_index")

    def __init__(self, indices: Sequence[int]):
        dim = IndexedDim(tuple(indices))
        self._first = dim.first
        self._steps = dim.steps()
        self._pos = 0
        self._stop = self._index = -1

    def begin(self, offset: int = 0) -> int:
        self._pos = 0
        self._stop = offset - 1
        self._index = offset + self._first
        return self._index

    def iterator(self) -> int:
        self._pos += 1
        self._index += self._steps[self._pos]
        return self._index

    def is_end(self) -> bool:
        return self._index == self._stop

    def end(self) -> int:
        return self._stop

    def get_position(self) -> int:
        return self._pos

    def get_index(self) -> int:
        return self._index


SubIterator = Union[StridedIterator, IndexIterator]


def sub_iterator(dim: Union[AffineDim, IndexedDim]) -> SubIterator:
    if isinstance(dim, IndexedDim):
        return IndexIterator(dim.indices)
    return StridedIterator(dim.first, dim.step, dim.size)


class ViewIterator:
    """Iterate dimensions ``dim`` and above of a view, innermost first.

    The descriptors are read at :meth:`begin`, so the view may be modified
    between two walks but not during one.
    """

    END = -1

    def __init__(self, view: "View", dim: int = 0):
        self._view = view
        self._dim = dim
        self._subs: List[SubIterator] = []
        self._index = self.END

    def begin(self, offset: int = 0) -> int:
        view = self._view
        self._subs = [view.get_sub_iterator(d) for d in range(self._dim, view.get_dim_length())]
        base = offset
        for sub in reversed(self._subs):
            base = sub.begin(base)
        self._index = base
        return base

    def iterator(self) -> int:
        subs = self._subs
        d, n = 0, len(subs)
        while d < n:
            idx = subs[d].iterator()
            if not subs[d].is_end():
                break
            d += 1
        else:
            self._index = self.END
            return self._index
        # carry: restart every inner cursor from the new base
        for k in range(d - 1, -1, -1):
            idx = subs[k].begin(idx)
        self._index = idx
        return idx

    def is_end(self) -> bool:
        return self._index == self.END

    def end(self) -> int:
        return self.END

    def get_position(self) -> list[int]:
        return [sub.get_position() for sub in self._subs]

    def get_index(self) -> int:
        return self._index


__all__ = ["StridedIterator", "IndexIterator", "ViewIterator", "sub_iterator"]
