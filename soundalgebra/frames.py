"""Frame storage backing every Signal.

A ``Frames`` value is an immutable view over a list of 2-D float64 blocks
(rows are frames, columns are channels). Several views may share one block
list: a view covers the first ``count`` blocks of it, so appending to the list
never changes what an older, shorter view sees.

Concatenation cost is asymmetric on purpose::

    (a.concat(b)).concat(c)   # appends b, then c, to a's list in place
    a.concat(b.concat(c))     # the second call copies a's block references

Folding from the left touches only the right operand's blocks at each step,
so building a long sequence left to right is linear in the number of pieces.
Folding from the right re-copies the growing prefix every time.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TypeAlias

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .config import get_settings

FloatArray: TypeAlias = NDArray[np.float64]
BlockOp: TypeAlias = Callable[[FloatArray, FloatArray], FloatArray]


def _freeze(block: FloatArray) -> FloatArray:
    block.flags.writeable = False
    return block


class _BlockLog:
    __slots__ = ("blocks", "lock")

    def __init__(self, blocks: list[FloatArray]) -> None:
        self.blocks = blocks
        self.lock = threading.Lock()


class Frames:
    __slots__ = ("_log", "_count", "_length", "_channels", "_array")

    def __init__(self, log: _BlockLog, count: int, length: int, channels: int) -> None:
        self._log = log
        self._count = count
        self._length = length
        self._channels = channels
        self._array: FloatArray | None = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zeros(cls, length: int, channels: int) -> Frames:
        length = max(0, length)
        return cls._single(np.zeros((length, channels), dtype=np.float64))

    @classmethod
    def from_array(cls, array: ArrayLike, *, copy: bool = True) -> Frames:
        """Wrap a ``(length, channels)`` array. The array is copied unless told otherwise."""

        if copy:
            block = np.array(array, dtype=np.float64)
        else:
            block = np.asarray(array, dtype=np.float64)
        if block.ndim != 2:
            raise ValueError(f"frame block must be 2-D (length, channels), got shape {block.shape}")
        return cls._single(block)

    @classmethod
    def from_iterable(
        cls, length: int, channels: int, frames: Iterable[Sequence[float]]
    ) -> Frames:
        """Read at most ``length`` frames; the source may be infinite."""

        chunk = get_settings().chunk_frames
        source = iter(frames)
        blocks: list[FloatArray] = []
        remaining = max(0, length)
        total = 0
        while remaining > 0:
            batch = list(itertools.islice(source, min(chunk, remaining)))
            if not batch:
                break
            block = np.asarray(batch, dtype=np.float64).reshape(len(batch), channels)
            blocks.append(_freeze(block))
            total += len(batch)
            remaining -= len(batch)
        if not blocks:
            return cls.zeros(0, channels)
        return cls(_BlockLog(blocks), len(blocks), total, channels)

    @classmethod
    def _single(cls, block: FloatArray) -> Frames:
        _freeze(block)
        frames = cls(_BlockLog([block]), 1, block.shape[0], block.shape[1])
        frames._array = block
        return frames

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def length(self) -> int:
        return self._length

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def block_count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"Frames(length={self._length}, channels={self._channels}, blocks={self._count})"

    def _blocks(self) -> list[FloatArray]:
        return self._log.blocks[: self._count]

    def to_array(self) -> FloatArray:
        """Contiguous, read-only ``(length, channels)`` view of every frame."""

        if self._array is None:
            blocks = self._blocks()
            if len(blocks) == 1:
                self._array = blocks[0]
            else:
                self._array = _freeze(np.concatenate(blocks, axis=0))
        return self._array

    def frame(self, index: int) -> FloatArray:
        return self.to_array()[index]

    def iter_frames(self) -> Iterator[FloatArray]:
        for block in self._blocks():
            yield from block

    # ------------------------------------------------------------------
    # Combination
    # ------------------------------------------------------------------

    def concat(self, other: Frames) -> Frames:
        """Frames of ``self`` followed by frames of ``other`` (equal channel counts)."""

        if other._channels != self._channels:
            raise ValueError(
                f"can't concatenate {self._channels}-channel and {other._channels}-channel frames"
            )
        if other._length == 0:
            return self
        if self._length == 0:
            return other
        tail = other._blocks()
        log = self._log
        with log.lock:
            if self._count == len(log.blocks):
                log.blocks.extend(tail)
                return Frames(log, len(log.blocks), self._length + other._length, self._channels)
        blocks = self._blocks() + tail
        return Frames(_BlockLog(blocks), len(blocks), self._length + other._length, self._channels)

    def zip_with(self, other: Frames, op: BlockOp) -> Frames:
        """Combine two equal-length frame sequences position by position.

        ``op`` receives both ``(length, channels)`` blocks and returns the
        combined block; it must not modify its inputs.
        """

        if other._length != self._length:
            raise ValueError(
                f"zip_with needs equal lengths, got {self._length} and {other._length}"
            )
        combined = op(self.to_array(), other.to_array())
        return Frames.from_array(combined, copy=False)

    def pad_to(self, length: int) -> Frames:
        if length <= self._length:
            return self
        return self.concat(Frames.zeros(length - self._length, self._channels))

    def tile(self, count: int) -> Frames:
        return Frames.from_array(np.tile(self.to_array(), (count, 1)), copy=False)

    def map_array(self, fn: Callable[[FloatArray], ArrayLike]) -> Frames:
        return Frames.from_array(fn(self.to_array()), copy=False)
