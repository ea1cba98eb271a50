from __future__ import annotations

import operator
from collections.abc import Callable, Iterator
from typing import Any, TypeAlias

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import SampleIndexError, SignalInfo
from .frames import FloatArray, Frames
from .timing import Time, TimeArray

BlockFn: TypeAlias = Callable[[TimeArray], FloatArray]


class FunctionSource:
    """How a Signal was sampled, kept so later operators can fuse with it.

    ``block`` maps an array of times to the ``(len(times), channels)`` array
    of frames at those times. It is only evaluated on request, never to
    recompute frames a Signal already holds.
    """

    __slots__ = ("period", "block")

    def __init__(self, period: Time | None, block: BlockFn) -> None:
        self.period = period
        self.block = block

    def __repr__(self) -> str:
        return f"FunctionSource(period={self.period!r})"


class Signal(BaseModel):
    """A finite, multi-channel, discrete-time signal.

    Operators: ``a + b`` adds, ``a | b`` stacks channels, ``a >> b`` plays
    ``a`` then ``b``. ``>>`` groups to the left, which is also the cheap way
    to grow a long sequence. Iterating a Signal yields its frames in order.
    """

    rate: int = Field(gt=0)
    length: int = Field(ge=0)
    channels: int = Field(ge=1)
    frames: Frames
    source: FunctionSource | None = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    @model_validator(mode="after")
    def _check_frames(self) -> "Signal":
        if self.frames.length != self.length:
            raise ValueError(f"frames hold {self.frames.length} frames, expected {self.length}")
        if self.frames.channels != self.channels:
            raise ValueError(
                f"frames hold {self.frames.channels} channels, expected {self.channels}"
            )
        return self

    @classmethod
    def from_frames(
        cls, rate: int, frames: Frames, source: FunctionSource | None = None
    ) -> Signal:
        return cls(
            rate=rate,
            length=frames.length,
            channels=frames.channels,
            frames=frames,
            source=source,
        )

    @property
    def duration(self) -> Time:
        return self.length / self.rate

    @property
    def n_samples(self) -> int:
        return self.length

    def sample(self, index: int) -> FloatArray:
        """Frame at ``index``. Negative indices are out of range."""

        i = operator.index(index)
        if not 0 <= i < self.length:
            raise SampleIndexError(i, self.length)
        return self.frames.frame(i)

    def to_numpy(self) -> FloatArray:
        return self.frames.to_array()

    def iter_frames(self) -> Iterator[FloatArray]:
        return self.frames.iter_frames()

    @property
    def info(self) -> SignalInfo:
        return SignalInfo(self.rate, self.length, self.channels)

    def summary(self) -> str:
        return str(self.info)

    def __len__(self) -> int:
        return self.length

    # Frames, not model fields.
    def __iter__(self) -> Iterator[FloatArray]:  # type: ignore[override]
        return self.frames.iter_frames()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signal):
            return NotImplemented
        return (
            self.rate == other.rate
            and self.length == other.length
            and self.channels == other.channels
            and bool(np.array_equal(self.to_numpy(), other.to_numpy()))
        )

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Any) -> Signal:
        from .combinators import add

        if not isinstance(other, Signal):
            return NotImplemented
        return add(self, other)

    def __or__(self, other: Any) -> Signal:
        from .combinators import par

        if not isinstance(other, Signal):
            return NotImplemented
        return par(self, other)

    def __rshift__(self, other: Any) -> Signal:
        from .combinators import seq

        if not isinstance(other, Signal):
            return NotImplemented
        return seq(self, other)


# Plain accessor functions, for callers that prefer them to attributes.


def duration(s: Signal) -> Time:
    return s.duration


def rate(s: Signal) -> int:
    return s.rate


def channels(s: Signal) -> int:
    return s.channels


def n_samples(s: Signal) -> int:
    return s.length


def sample(s: Signal, index: int) -> FloatArray:
    return s.sample(index)
