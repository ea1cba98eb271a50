import itertools

import numpy as np
import pytest

from soundalgebra.config import override_settings
from soundalgebra.frames import Frames


def _block(start: float, length: int, channels: int = 1) -> np.ndarray:
    values = np.arange(start, start + length * channels, dtype=np.float64)
    return values.reshape(length, channels)


def test_zeros_has_requested_shape() -> None:
    frames = Frames.zeros(5, 3)
    assert frames.length == 5
    assert frames.channels == 3
    assert not frames.to_array().any()


def test_from_iterable_stops_after_length() -> None:
    frames = Frames.from_iterable(4, 2, itertools.repeat([1.0, -1.0]))
    assert frames.to_array().tolist() == [[1.0, -1.0]] * 4


def test_from_iterable_splits_into_chunks() -> None:
    with override_settings(chunk_frames=3):
        frames = Frames.from_iterable(7, 1, ([float(i)] for i in range(100)))
    assert frames.block_count == 3
    assert frames.to_array()[:, 0].tolist() == [float(i) for i in range(7)]


def test_from_iterable_short_source_keeps_what_it_read() -> None:
    frames = Frames.from_iterable(10, 1, [[0.5], [0.25]])
    assert frames.length == 2


def test_from_array_copies_and_freezes() -> None:
    source = _block(0.0, 3)
    frames = Frames.from_array(source)
    source[0, 0] = 99.0
    assert frames.frame(0)[0] == 0.0
    with pytest.raises(ValueError):
        frames.to_array()[0, 0] = 1.0


def test_from_array_rejects_flat_input() -> None:
    with pytest.raises(ValueError, match="2-D"):
        Frames.from_array([1.0, 2.0])


class TestConcat:
    def test_left_fold_reuses_block_list(self) -> None:
        a = Frames.from_array(_block(0.0, 2))
        ab = a.concat(Frames.from_array(_block(2.0, 2)))
        abc = ab.concat(Frames.from_array(_block(4.0, 2)))

        assert abc.block_count == 3
        assert abc.to_array()[:, 0].tolist() == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
        # Earlier views are unaffected by later appends.
        assert a.to_array()[:, 0].tolist() == [0.0, 1.0]
        assert ab.to_array()[:, 0].tolist() == [0.0, 1.0, 2.0, 3.0]

    def test_branching_from_an_old_prefix_copies(self) -> None:
        ab = Frames.from_array(_block(0.0, 2)).concat(Frames.from_array(_block(2.0, 2)))
        abc = ab.concat(Frames.from_array(_block(10.0, 1)))
        abd = ab.concat(Frames.from_array(_block(20.0, 1)))

        assert abc.to_array()[:, 0].tolist() == [0.0, 1.0, 2.0, 3.0, 10.0]
        assert abd.to_array()[:, 0].tolist() == [0.0, 1.0, 2.0, 3.0, 20.0]

    def test_empty_operands_are_identity(self) -> None:
        a = Frames.from_array(_block(0.0, 2))
        empty = Frames.zeros(0, 1)
        assert a.concat(empty) is a
        assert empty.concat(a) is a

    def test_channel_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            Frames.zeros(2, 1).concat(Frames.zeros(2, 2))

    def test_associativity(self) -> None:
        a, b, c = (Frames.from_array(_block(float(10 * i), 3, 2)) for i in range(3))
        left = a.concat(b).concat(c)
        right = a.concat(b.concat(c))
        assert np.array_equal(left.to_array(), right.to_array())


def test_zip_with_combines_positionally() -> None:
    a = Frames.from_array(_block(0.0, 3))
    b = Frames.from_array(_block(10.0, 3))
    summed = a.zip_with(b, np.add)
    assert summed.to_array()[:, 0].tolist() == [10.0, 12.0, 14.0]


def test_zip_with_requires_equal_lengths() -> None:
    with pytest.raises(ValueError, match="equal lengths"):
        Frames.zeros(2, 1).zip_with(Frames.zeros(3, 1), np.add)


def test_pad_to_and_tile() -> None:
    a = Frames.from_array(_block(1.0, 2))
    assert a.pad_to(1) is a
    assert a.pad_to(4).to_array()[:, 0].tolist() == [1.0, 2.0, 0.0, 0.0]
    assert a.tile(3).to_array()[:, 0].tolist() == [1.0, 2.0] * 3


def test_iter_frames_walks_every_block() -> None:
    frames = Frames.from_array(_block(0.0, 2)).concat(Frames.from_array(_block(2.0, 1)))
    assert [row[0] for row in frames.iter_frames()] == [0.0, 1.0, 2.0]
