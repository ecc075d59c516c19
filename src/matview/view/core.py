"""N-dimensional view over a flat buffer.

A :class:`View` maps N-dimensional coordinates onto offsets of a flat buffer
without owning the buffer. Dimension 0 varies fastest (MATLAB order), so a
fresh ``View([3, 3])`` over ``[0, 1, ..., 8]`` reads columns ``[0, 1, 2]``,
``[3, 4, 5]`` and ``[6, 7, 8]``.

Each dimension is described either by ``(first, step, size)`` or by an
explicit list of offsets (see :mod:`matview.view.dims`). Selection,
permutation and flip operations rewrite these descriptors in place and return
the view so that calls can be chained::

    v = View([5, 4])
    v.select([1, 2, 5 - 1], []).flipud()
    out = v.extract_from(data)

:meth:`View.save` and :meth:`View.restore` push and pop descriptor snapshots.
"""
from __future__ import annotations

from typing import Any, List, Sequence, Tuple, Union

import numpy as np

from matview.errors import (
    DimensionMismatch,
    InvalidIndex,
    InvalidShift,
    InvalidDimension,
    UnsupportedOperation,
)
from .colon import (
    check_colon,
    check_dim,
    check_indices,
    check_size,
    is_integer,
    is_sequence,
)
from .dims import SINGLETON, AffineDim, Dim, IndexedDim
from .extract import ExtractionMixin
from .iterators import SubIterator, ViewIterator, sub_iterator
from .manipulation import ManipulationMixin


class View(ManipulationMixin, ExtractionMixin):
    """Strided / indexed view over a buffer of ``prod(shape)`` elements."""

    def __init__(self, arg: Union[Sequence[int], int, "View"]):
        if isinstance(arg, View):
            self._dims: List[Dim] = list(arg._dims)
            self._origin: Tuple[int, ...] = arg._origin
        else:
            shape = check_size("View", arg)
            dims: List[Dim] = []
            step = 1
            for s in shape:
                dims.append(AffineDim(0, step, s))
                step *= s
            self._dims = dims
            self._origin = tuple(shape)
        self._initial: Tuple[Dim, ...] = tuple(self._dims)
        self._stack: List[Tuple[Dim, ...]] = []

    # ------------------------------------------------------------------
    # stack of views
    # ------------------------------------------------------------------
    def save(self) -> "View":
        """Push the current descriptors on the stack."""
        self._stack.append(tuple(self._dims))
        return self

    def restore(self) -> "View":
        """Pop the last saved descriptors, or go back to the initial ones."""
        if self._stack:
            self._dims = list(self._stack.pop())
        else:
            self._dims = list(self._initial)
        return self

    def copy(self) -> "View":
        return View(self)

    # ------------------------------------------------------------------
    # getters
    # ------------------------------------------------------------------
    def _dim(self, d: int) -> Dim:
        return self._dims[d] if d < len(self._dims) else SINGLETON

    def get_dim_length(self) -> int:
        return len(self._dims)

    def get_length(self) -> int:
        n = 1
        for dim in self._dims:
            n *= dim.size
        return n

    def get_initial_length(self) -> int:
        """Number of elements of the buffer the view was created for."""
        n = 1
        for s in self._origin:
            n *= s
        return n

    def get_initial_size(self) -> list[int]:
        return list(self._origin)

    def get_size(self, dim: int | None = None) -> Union[list[int], int]:
        if dim is None:
            return [d.size for d in self._dims]
        return self._dim(check_dim("View.get_size", dim)).size

    def is_indices_indexed(self, dim: int) -> bool:
        return isinstance(self._dim(check_dim("View.is_indices_indexed", dim)), IndexedDim)

    def _affine(self, op: str, dim: int) -> AffineDim:
        d = self._dim(check_dim(op, dim))
        if isinstance(d, IndexedDim):
            raise UnsupportedOperation(f"{op}: dimension {dim} is indexed by indices")
        return d

    def _indexed(self, op: str, dim: int) -> IndexedDim:
        d = self._dim(check_dim(op, dim))
        if not isinstance(d, IndexedDim):
            raise UnsupportedOperation(f"{op}: dimension {dim} is not indexed by indices")
        return d

    def get_first(self, dim: int) -> int:
        """Offset of the first element along an affine dimension."""
        return self._affine("View.get_first", dim).first

    def get_step(self, dim: int) -> int:
        """Offset increment between two elements along an affine dimension."""
        return self._affine("View.get_step", dim).step

    def get_end(self, dim: int) -> int:
        """Offset one step past the last element, ``-1`` if indexed."""
        d = self._dim(check_dim("View.get_end", dim))
        if isinstance(d, IndexedDim):
            return -1
        return d.end

    def get_indices(self, dim: int) -> list[int]:
        return list(self._indexed("View.get_indices", dim).indices)

    def get_steps(self, dim: int) -> list[int]:
        """Deltas between selected offsets, terminated by ``-(last + 1)``."""
        return self._indexed("View.get_steps", dim).steps()

    def get_index(self, coordinates: Sequence[int]) -> int:
        """Linear offset of an N-dimensional coordinate."""
        op = "View.get_index"
        if not is_sequence(coordinates) or len(coordinates) != len(self._dims):
            raise DimensionMismatch(
                f"{op}: expected {len(self._dims)} coordinates, got {coordinates!r}"
            )
        index = 0
        for d, (dim, c) in enumerate(zip(self._dims, coordinates)):
            if not is_integer(c, 0, dim.size - 1):
                raise InvalidIndex(f"{op}: coordinate {c!r} out of [0, {dim.size - 1}] on dimension {d}")
            index += dim.offset(int(c))
        return index

    def describe(self) -> list[tuple]:
        """One tuple per dimension: ``("affine", first, step, size)`` or ``("indices", [...])``."""
        out = []
        for d in self._dims:
            if isinstance(d, IndexedDim):
                out.append(("indices", list(d.indices)))
            else:
                out.append(("affine", d.first, d.step, d.size))
        return out

    def same_layout(self, other: "View") -> bool:
        return isinstance(other, View) and self.describe() == other.describe()

    def __len__(self) -> int:
        return self.get_length()

    def __repr__(self) -> str:
        return f"View(size={self.get_size()}, initial={list(self._origin)})"

    # ------------------------------------------------------------------
    # iteration
    # ------------------------------------------------------------------
    def get_sub_iterator(self, dim: int) -> SubIterator:
        return sub_iterator(self._dim(check_dim("View.get_sub_iterator", dim)))

    def get_iterator(self, dim: int = 0) -> ViewIterator:
        return ViewIterator(self, check_dim("View.get_iterator", dim))

    def __iter__(self):
        it = self.get_iterator(0)
        i = it.begin()
        while not it.is_end():
            yield i
            i = it.iterator()

    def linear_indices(self) -> np.ndarray:
        """All addressed offsets in iteration order."""
        return np.fromiter(iter(self), dtype=np.intp, count=self.get_length())

    # ------------------------------------------------------------------
    # basic manipulations
    # ------------------------------------------------------------------
    def _push_singletons(self, n: int) -> None:
        self._dims.extend([SINGLETON] * n)

    def _check_in_rank(self, op: str, dim: Any) -> int:
        d = check_dim(op, dim)
        if d >= len(self._dims):
            raise InvalidDimension(f"{op}: dimension {d} exceeds the view rank {len(self._dims)}")
        return d

    def select_dimension(self, dim: int, selection: Any) -> "View":
        """Keep slices ``start:step:end`` along ``dim``.

        ``selection`` is ``[]``, ``v``, ``[start, end]`` or
        ``[start, step, end]``; negative values count from the end.
        On an indexed dimension the triple addresses positions in the
        current index list.
        """
        op = "View.select_dimension"
        d = self._check_in_rank(op, dim)
        cur = self._dims[d]
        a, s, b = check_colon(op, selection, cur.size)
        if isinstance(cur, IndexedDim):
            positions = range(a, b + (1 if s > 0 else -1), s)
            self._dims[d] = IndexedDim(tuple(cur.indices[p] for p in positions))
        else:
            size = abs(b - a) // abs(s) + 1
            self._dims[d] = AffineDim(cur.first + a * cur.step, cur.step * s, size)
        return self

    def select_indices_dimension(self, dim: int, indices: Sequence[int]) -> "View":
        """Keep the slices at ``indices`` (any order, repeats allowed) along ``dim``."""
        op = "View.select_indices_dimension"
        d = self._check_in_rank(op, dim)
        cur = self._dims[d]
        ind = check_indices(op, indices, cur.size)
        self._dims[d] = IndexedDim(tuple(cur.offset(i) for i in ind))
        return self

    def select_boolean_dimension(self, dim: int, mask: Sequence[bool]) -> "View":
        """Keep the slices where ``mask`` is true along ``dim``."""
        op = "View.select_boolean_dimension"
        d = self._check_in_rank(op, dim)
        size = self._dims[d].size
        if len(mask) != size:
            raise DimensionMismatch(f"{op}: mask length {len(mask)} != size {size} of dimension {d}")
        ind = [i for i, keep in enumerate(mask) if keep]
        return self.select_indices_dimension(d, ind)

    def swap_dimensions(self, dim_a: int, dim_b: int) -> "View":
        """Transpose two dimensions, padding singleton dimensions if needed."""
        op = "View.swap_dimensions"
        a = check_dim(op, dim_a)
        b = check_dim(op, dim_b)
        n = max(a, b) + 1 - len(self._dims)
        if n > 0:
            self._push_singletons(n)
        dims = self._dims
        dims[a], dims[b] = dims[b], dims[a]
        return self

    def shift_dimension(self, n: int | None = None) -> "View":
        """Rotate dimensions circularly, or drop leading singletons.

        Without argument, leading singleton dimensions are removed (their
        offset moves into the next dimension) and the view keeps at least two
        dimensions. With ``n > 0`` the first ``n`` dimensions move to the end,
        with ``n < 0`` the last ``-n`` dimensions move to the front.
        """
        op = "View.shift_dimension"
        dims = self._dims
        if n is None:
            offset = 0
            while len(dims) > 1 and dims[0].size == 1:
                offset += dims.pop(0).first
            if offset:
                dims[0] = dims[0].shifted(offset)
            if len(dims) < 2:
                self._push_singletons(2 - len(dims))
            return self
        rank = len(dims)
        if not is_integer(n, 1 - rank, rank - 1):
            raise InvalidShift(f"{op}: shift {n!r} out of [{1 - rank}, {rank - 1}]")
        self._dims = dims[n:] + dims[:n]
        return self

    # ------------------------------------------------------------------
    # information (MATLAB names)
    # ------------------------------------------------------------------
    def ndims(self) -> int:
        return self.get_dim_length()

    def ismatrix(self) -> bool:
        return len(self._dims) == 2

    def isrow(self) -> bool:
        size = self.get_size()
        return len(size) == 2 and size[0] == 1

    def iscolumn(self) -> bool:
        size = self.get_size()
        return len(size) == 2 and size[1] == 1

    def isvector(self) -> bool:
        return self.isrow() or self.iscolumn()


__all__ = ["View"]
