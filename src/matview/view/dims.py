"""Per-dimension descriptors of a :class:`~matview.view.core.View`.

A dimension is addressed either affinely (``first + k * step``) or through an
explicit list of absolute offsets. Both descriptors are immutable, so a list
of them can be snapshotted with a plain shallow copy.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class AffineDim:
    first: int
    step: int
    size: int

    def offset(self, k: int) -> int:
        return self.first + k * self.step

    @property
    def end(self) -> int:
        """Offset one step past the last addressed element."""
        return self.first + self.size * self.step

    def shifted(self, delta: int) -> "AffineDim":
        return AffineDim(self.first + delta, self.step, self.size)


@dataclass(frozen=True)
class IndexedDim:
    indices: Tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.indices)

    @property
    def first(self) -> int:
        return self.indices[0]

    def offset(self, k: int) -> int:
        return self.indices[k]

    def steps(self) -> list[int]:
        """Deltas between consecutive offsets, ending with ``-(last + 1)``.

        The first delta is 0. Adding every delta to ``first`` walks the index
        list and the terminal value brings the running offset to ``-1``.
        """
        ind = self.indices
        out = [0]
        out.extend(ind[k] - ind[k - 1] for k in range(1, len(ind)))
        out.append(-(ind[-1] + 1))
        return out

    def shifted(self, delta: int) -> "IndexedDim":
        return IndexedDim(tuple(i + delta for i in self.indices))


Dim = Union[AffineDim, IndexedDim]

SINGLETON = AffineDim(0, 1, 1)


__all__ = ["AffineDim", "IndexedDim", "Dim", "SINGLETON"]
