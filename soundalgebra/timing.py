"""Time <-> sample conversion and the periodic helpers the waveforms use.

Scalars stay scalars and numpy arrays stay arrays, so the same helpers serve
both the per-sample ``from_function`` path and the vectorised waveforms.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import TypeAlias, TypeVar

import numpy as np
from numpy.typing import NDArray

Time: TypeAlias = float
TimeArray: TypeAlias = NDArray[np.float64]

T = TypeVar("T", float, TimeArray)


def sample_count(rate: int, duration: Time) -> int:
    """Number of frames spanning ``duration`` seconds at ``rate`` Hz."""
    # Don't use int()/truncate here.
    return math.floor(rate * duration)


def sample_time(rate: int, index: T) -> T:
    return index / rate


def sample_times(rate: int, count: int) -> TimeArray:
    return np.arange(count, dtype=np.float64) / rate


def decimals(t: T) -> T:
    """Fractional part of ``t``, carrying the sign of ``t``."""
    if isinstance(t, np.ndarray):
        return np.modf(t)[0]
    return math.modf(t)[0]


def time_floor(t: T) -> T:
    if isinstance(t, np.ndarray):
        return np.floor(t)
    return float(math.floor(t))


def sample_envelope(fn: Callable[[Time], float], times: TimeArray) -> TimeArray:
    """Evaluate a scalar time function at every entry of ``times``."""
    return np.fromiter((fn(t) for t in times.tolist()), dtype=np.float64, count=len(times))
