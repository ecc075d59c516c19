from array import array

import numpy as np
import pytest

from matview import View
from matview.errors import DimensionMismatch, InvalidLength, SameBufferError
from matview.view import addressed_offsets


def test_extract_from_array_keeps_dtype():
    d = np.arange(9, dtype=np.float32)
    out = View([3, 3]).select_dimension(1, [2]).extract_from(d)
    assert isinstance(out, np.ndarray) and out.dtype == np.float32
    assert out.tolist() == [6, 7, 8]


def test_extract_from_list_returns_list():
    out = View([3, 3]).select(0).extract_from(list("abcdefghi"))
    assert out == ["a", "d", "g"]


def test_extract_from_into_given_buffers():
    v = View([3, 3]).select([[2, 0]], [1, 2])
    d = np.arange(9)
    out = np.zeros(4, dtype=int)
    assert v.extract_from(d, out) is out
    assert out.tolist() == [5, 3, 8, 6]
    buf = array("d", [0.0] * 4)
    v.extract_from(d.astype(float), buf)
    assert list(buf) == [5.0, 3.0, 8.0, 6.0]


def test_extract_from_length_checks():
    v = View([3, 3]).select(0)
    with pytest.raises(InvalidLength):
        v.extract_from(np.arange(8))
    with pytest.raises(InvalidLength):
        v.extract_from(np.arange(9), np.zeros(4))
    with pytest.raises(InvalidLength):
        v.extract_from(np.arange(9).reshape(3, 3))


def test_in_place_extraction_is_rejected():
    v = View([2, 2])
    d = np.arange(4.0)
    with pytest.raises(SameBufferError):
        v.extract_from(d, d)
    with pytest.raises(SameBufferError):
        v.extract_from(d, d[:])
    lst = [0, 1, 2, 3]
    with pytest.raises(SameBufferError):
        v.extract_to(lst, lst)


def test_extract_to_scatters_at_selected_positions():
    out = np.zeros(9)
    v = View([3, 3]).select([], [1])
    v.extract_to([10, 11, 12], out)
    assert out.tolist() == [0, 0, 0, 10, 11, 12, 0, 0, 0]


def test_extract_to_broadcasts_scalars():
    v = View([3, 3]).select([[0, 2]], [[2, 0]])
    out = v.extract_to(7, [0] * 9)
    assert out == [7, 0, 7, 0, 0, 0, 7, 0, 7]
    out = v.extract_to(np.array([5.0]), np.zeros(9))
    assert out[[0, 2, 6, 8]].tolist() == [5.0] * 4


def test_extract_to_length_checks():
    v = View([3, 3]).select(0)
    with pytest.raises(InvalidLength):
        v.extract_to([1, 2], np.zeros(9))
    with pytest.raises(InvalidLength):
        v.extract_to([1, 2, 3], np.zeros(3))


def test_extract_round_trip_restores_selected_region():
    buf = np.arange(60) * 10
    v = View([3, 4, 5]).select([2, 0], [[3, 1]], [0, 2, 4])
    sub = v.extract_from(buf)
    result = np.full(60, -1)
    v.extract_to(sub, result)
    idx = v.linear_indices()
    assert np.array_equal(result[idx], buf[idx])
    untouched = np.setdiff1d(np.arange(60), idx)
    assert np.all(result[untouched] == -1)


def test_extract_between_views():
    d_in = [0, 1, 2, 3, 4, 5, 6, 7, 8]
    v_in = View([3, 3]).select_dimension(1, [2])
    v_out = View([3, 3]).select_dimension(0, [0])
    d_out = [0, 1, 2, 3, 4, 5, 6, 7, 8]
    assert v_in.extract(d_in, v_out, d_out) == [6, 1, 2, 7, 4, 5, 8, 7, 8]


def test_extract_between_views_checks():
    v_in = View([3, 3]).select_dimension(1, [2])
    with pytest.raises(DimensionMismatch):
        v_in.extract(np.arange(9), View([2, 2]), np.zeros(4))
    with pytest.raises(InvalidLength):
        v_in.extract(np.arange(9), View([3, 1]), np.zeros(4))
    with pytest.raises(InvalidLength):
        v_in.extract(np.arange(9), View([3, 1]))
    d = np.arange(9)
    with pytest.raises(SameBufferError):
        v_in.extract(d, View([3, 3]).select(0), d)


def test_addressed_offsets_prefers_slices():
    assert isinstance(addressed_offsets(View([3, 3])), slice)
    assert isinstance(addressed_offsets(View([3, 3]).select([], [1])), slice)
    flipped = View([3, 3]).select([-1, 0], [0])
    sl = addressed_offsets(flipped)
    assert isinstance(sl, slice)
    assert np.arange(9)[sl].tolist() == [2, 1, 0]
    assert not isinstance(addressed_offsets(View([3, 3]).select([0, 1], [])), slice)


@pytest.mark.parametrize(
    "ops",
    [
        lambda v: v,
        lambda v: v.flipud(),
        lambda v: v.rot90(3),
        lambda v: v.select([[3, 0, 2]], [1, 2, 4]),
        lambda v: v.circshift([1, 2]),
        lambda v: v.select([0, 1], [-1]),
    ],
)
def test_offsets_agree_with_iteration(ops):
    v = ops(View([4, 5]))
    d = np.arange(20)
    assert d[addressed_offsets(v)].tolist() == v.linear_indices().tolist()
