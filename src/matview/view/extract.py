"""Copy data between flat buffers through views.

Buffers are 1-D ``numpy.ndarray`` objects or mutable sequences (``list``,
``array.array``...). Offsets are computed once per call: dimension 0 is laid
out either as an ``arange`` of its step or by accumulating its index deltas,
and the outer dimensions contribute the base offsets produced by
``view.get_iterator(1)``. When every addressed offset lies on one arithmetic
progression a ``slice`` is used instead of an index array.
"""
from __future__ import annotations

import logging
import numbers
from typing import TYPE_CHECKING, Any, Optional, Union

import numpy as np

from matview.errors import DimensionMismatch, InvalidLength, SameBufferError

if TYPE_CHECKING:  # pragma: no cover
    from .core import View

logger = logging.getLogger("matview.view.extract")

Selector = Union[slice, np.ndarray]


def _inner_offsets(view: "View") -> np.ndarray:
    if view.is_indices_indexed(0):
        steps = np.asarray(view.get_steps(0)[:-1], dtype=np.intp)
        return view.get_indices(0)[0] + np.cumsum(steps)
    first, step = view.get_first(0), view.get_step(0)
    return first + step * np.arange(view.get_size(0), dtype=np.intp)


def _outer_offsets(view: "View") -> np.ndarray:
    it = view.get_iterator(1)
    bases = []
    i = it.begin()
    while not it.is_end():
        bases.append(i)
        i = it.iterator()
    return np.asarray(bases, dtype=np.intp)


def _as_slice(view: "View") -> Optional[slice]:
    """Slice addressing the same offsets as ``view``, if there is one."""
    dims = [d for d in range(view.get_dim_length()) if view.get_size(d) > 1]
    start = 0
    for d in range(view.get_dim_length()):
        if view.is_indices_indexed(d):
            if view.get_size(d) > 1:
                return None
            start += view.get_indices(d)[0]
        else:
            start += view.get_first(d)
    if not dims:
        return slice(start, start + 1, 1)
    step = view.get_step(dims[0])
    expected = step
    for d in dims:
        if view.get_step(d) != expected:
            return None
        expected *= view.get_size(d)
    stop = start + step * view.get_length()
    return slice(start, stop if stop >= 0 else None, step)


def addressed_offsets(view: "View") -> Selector:
    """Offsets read by ``view`` in iteration order, as a slice or an array."""
    sl = _as_slice(view)
    if sl is not None:
        logger.debug("view %s addressed through %s", view.get_size(), sl)
        return sl
    offsets = (_outer_offsets(view)[:, None] + _inner_offsets(view)[None, :]).ravel()
    logger.debug("view %s addressed through %d offsets", view.get_size(), offsets.size)
    return offsets


def _is_scalar(v: Any) -> bool:
    return isinstance(v, numbers.Number) or (isinstance(v, np.ndarray) and v.ndim == 0)


def _length(op: str, buf: Any, what: str) -> int:
    if isinstance(buf, np.ndarray):
        if buf.ndim != 1:
            raise InvalidLength(f"{op}: {what} buffer must be 1-D, got shape {buf.shape}")
        return buf.shape[0]
    try:
        return len(buf)
    except TypeError:
        raise InvalidLength(f"{op}: {what} buffer has no length ({type(buf).__name__})") from None


def _check_distinct(op: str, source: Any, dest: Any) -> None:
    if dest is source:
        raise SameBufferError(f"{op}: cannot extract in place")
    if isinstance(source, np.ndarray) and isinstance(dest, np.ndarray) and np.shares_memory(source, dest):
        raise SameBufferError(f"{op}: source and destination share memory")


def _read(buf: Any, sel: Selector) -> Any:
    if isinstance(buf, np.ndarray):
        return buf[sel]
    if isinstance(sel, slice):
        return list(buf[sel])
    return [buf[k] for k in sel.tolist()]


def _write(buf: Any, sel: Selector, values: Any) -> None:
    if isinstance(buf, np.ndarray):
        buf[sel] = values
        return
    keys = range(*sel.indices(len(buf))) if isinstance(sel, slice) else sel.tolist()
    if _is_scalar(values):
        for k in keys:
            buf[k] = values
    else:
        for k, v in zip(keys, values):
            buf[k] = v


class ExtractionMixin:
    """Extraction methods of :class:`~matview.view.core.View`."""

    def extract_to(self, source: Any, dest: Any) -> Any:
        """Scatter ``source`` into ``dest`` at the positions addressed by the view.

        ``source`` holds ``get_length()`` values, or a single value that is
        broadcast. ``dest`` has the initial length of the view and is
        modified in place and returned.
        """
        op = "View.extract_to"
        n_dest = _length(op, dest, "destination")
        if n_dest != self.get_initial_length():
            raise InvalidLength(
                f"{op}: destination length {n_dest} != initial length {self.get_initial_length()}"
            )
        if _is_scalar(source):
            values = source
        else:
            n_src = _length(op, source, "source")
            if n_src == 1:
                values = source[0]
            elif n_src == self.get_length():
                _check_distinct(op, source, dest)
                values = source
            else:
                raise InvalidLength(f"{op}: source length {n_src} != view length {self.get_length()}")
        _write(dest, addressed_offsets(self), values)
        return dest

    def extract_from(self, source: Any, dest: Any = None) -> Any:
        """Gather the values addressed by the view into a compact buffer."""
        op = "View.extract_from"
        n_src = _length(op, source, "source")
        if n_src != self.get_initial_length():
            raise InvalidLength(f"{op}: source length {n_src} != initial length {self.get_initial_length()}")
        n = self.get_length()
        if dest is None:
            dest = np.empty(n, dtype=source.dtype) if isinstance(source, np.ndarray) else [None] * n
        else:
            n_dest = _length(op, dest, "destination")
            if n_dest != n:
                raise InvalidLength(f"{op}: destination length {n_dest} != view length {n}")
            _check_distinct(op, source, dest)
        _write(dest, slice(0, n, 1), _read(source, addressed_offsets(self)))
        return dest

    def extract(self, source: Any, dest_view: Any = None, dest: Any = None) -> Any:
        """Copy from ``source`` (seen through this view) to ``dest`` (seen through ``dest_view``).

        Without a destination view this is :meth:`extract_from`; a buffer
        passed in place of the view is taken as its destination.
        """
        from .core import View

        if not isinstance(dest_view, View):
            if dest_view is not None and dest is None:
                dest = dest_view
            return self.extract_from(source, dest)

        op = "View.extract"
        n_src = _length(op, source, "source")
        if n_src != self.get_initial_length():
            raise InvalidLength(f"{op}: source length {n_src} != initial length {self.get_initial_length()}")
        if dest is None:
            raise InvalidLength(f"{op}: a destination buffer is required with a destination view")
        n_dest = _length(op, dest, "destination")
        if n_dest != dest_view.get_initial_length():
            raise InvalidLength(
                f"{op}: destination length {n_dest} != initial length {dest_view.get_initial_length()}"
            )
        if self.get_length() != dest_view.get_length():
            raise DimensionMismatch(
                f"{op}: views address {self.get_length()} and {dest_view.get_length()} elements"
            )
        _check_distinct(op, source, dest)
        _write(dest, addressed_offsets(dest_view), _read(source, addressed_offsets(self)))
        return dest


__all__ = ["ExtractionMixin", "addressed_offsets"]
