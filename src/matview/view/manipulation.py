"""MATLAB-style manipulations built on the basic view operations."""
from __future__ import annotations

from typing import Any, Sequence

from matview.errors import InvalidIndex, InvalidPermutation, InvalidShift, MatviewError
from .colon import check_dim, is_boolean_sequence, is_integer, is_sequence


class ManipulationMixin:
    """Composite operations of :class:`~matview.view.core.View`.

    Everything here is expressed with ``select_dimension``,
    ``select_indices_dimension``, ``select_boolean_dimension`` and
    ``swap_dimensions``.
    """

    def select(self, *args: Any):
        """Apply one selection per dimension.

        Each argument is either a colon selector (``[]``, ``v``, ``[a, b]``,
        ``[a, s, b]``), an index list wrapped in a list (``[[2, 0, 1]]``) or a
        boolean mask. ``[]`` leaves the dimension untouched::

            View([3, 3]).select([], [0]).get_size()   # [3, 1]
        """
        saved = list(self._dims)
        try:
            for d, arg in enumerate(args):
                if is_sequence(arg):
                    if len(arg) == 0:
                        continue
                    if is_sequence(arg[0]):
                        self.select_indices_dimension(d, arg[0])
                    elif is_boolean_sequence(arg):
                        self.select_boolean_dimension(d, arg)
                    else:
                        self.select_dimension(d, arg)
                elif is_integer(arg):
                    self.select_dimension(d, arg)
                else:
                    raise InvalidIndex(f"View.select: invalid selection {arg!r} for dimension {d}")
        except MatviewError:
            self._dims = saved
            raise
        return self

    def _check_order(self, op: str, order: Any) -> list[int]:
        if not is_sequence(order):
            raise InvalidPermutation(f"{op}: order must be a sequence, got {order!r}")
        order = list(order)
        n = len(order)
        if n < self.get_dim_length():
            raise InvalidPermutation(f"{op}: order {order} shorter than rank {self.get_dim_length()}")
        if not all(is_integer(o) for o in order) or sorted(order) != list(range(n)):
            raise InvalidPermutation(f"{op}: {order} is not a permutation of 0..{n - 1}")
        return [int(o) for o in order]

    def permute(self, order: Sequence[int]):
        """Reorder dimensions: new dimension ``k`` is old dimension ``order[k]``.

        ``order`` may be longer than the rank, extra dimensions being
        singletons.
        """
        order = self._check_order("View.permute", order)
        n = len(order)
        if n > self.get_dim_length():
            self._push_singletons(n - self.get_dim_length())
        # follow each cycle, swapping along it
        for i in range(n):
            j = i
            while True:
                k = order[j]
                order[j] = j
                if k == i:
                    break
                self.swap_dimensions(j, k)
                j = k
        return self

    def ipermute(self, order: Sequence[int]):
        """Undo ``permute(order)``."""
        order = self._check_order("View.ipermute", order)
        return self.permute(sorted(range(len(order)), key=lambda k: order[k]))

    def rot90(self, k: int = 1):
        """Rotate the first two dimensions counter-clockwise by ``k * 90`` degrees."""
        if not is_integer(k):
            raise InvalidIndex(f"View.rot90: rotation count must be an integer, got {k!r}")
        k %= 4
        if k == 1:
            return self.swap_dimensions(0, 1).flipud()
        if k == 2:
            return self.flipud().fliplr()
        if k == 3:
            return self.swap_dimensions(0, 1).fliplr()
        return self

    def flipdim(self, dim: int):
        return self.select_dimension(dim, [-1, 0])

    def fliplr(self):
        return self.select([0, -1], [-1, 0])

    def flipud(self):
        return self.select([-1, 0], [0, -1])

    def circshift(self, shifts: Any, dim: int | None = None):
        """Shift elements circularly along one or several dimensions.

        ``circshift([2, -2])`` moves rows down by 2 and columns left by 2;
        ``circshift(1, dim=1)`` shifts along dimension 1 only.
        """
        op = "View.circshift"
        if is_sequence(shifts) and dim is None:
            shifts = list(shifts)
            if len(shifts) > self.get_dim_length():
                raise InvalidShift(f"{op}: {len(shifts)} shifts for a view of rank {self.get_dim_length()}")
            targets = list(enumerate(shifts))
        elif is_integer(shifts) and dim is not None:
            targets = [(check_dim(op, dim), shifts)]
        else:
            raise InvalidShift(f"{op}: invalid arguments shifts={shifts!r}, dim={dim!r}")

        selections = []
        for d, k in targets:
            if not is_integer(k):
                raise InvalidShift(f"{op}: shift {k!r} on dimension {d} is not an integer")
            size = self.get_size(d)
            selections.append((d, [(j - k) % size for j in range(size)]))
        saved = list(self._dims)
        try:
            for d, sel in selections:
                self.select_indices_dimension(d, sel)
        except MatviewError:
            self._dims = saved
            raise
        return self


__all__ = ["ManipulationMixin"]
