"""
Operators that build signals out of other signals.

Only two things are ever checked here: that operands combined by position
share a sample rate, and (for ``add`` and ``seq``) a channel count.

About grouping long sequences: ``seq`` appends the right operand's frame
blocks to the left operand's block list, so the cost of one step is the size
of its *right* operand. Folding from the left::

    ((a >> b) >> c) >> d          # or sequence_all([a, b, c, d])

keeps every step small. Folding from the right makes each step copy the
whole accumulated prefix, which adds up quadratically over many pieces.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable

import numpy as np

from .errors import ChannelMismatchError, LoopCountError, RateMismatchError
from .frames import Frames
from .modifiers import scale
from .rewrite import fuse_multiply
from .signal import Signal
from .timing import Time, sample_count

_LOGGER = logging.getLogger("soundalgebra.combinators")


def _check_rates(op: str, s1: Signal, s2: Signal) -> None:
    if s1.rate != s2.rate:
        _LOGGER.debug("%s rejected operands (%s) and (%s)", op, s1.summary(), s2.summary())
        raise RateMismatchError(
            op,
            s1.info,
            s2.info,
            "Consider resampling one of them.",
        )


def _check_channels(op: str, s1: Signal, s2: Signal) -> None:
    if s1.channels != s2.channels:
        _LOGGER.debug("%s rejected operands (%s) and (%s)", op, s1.summary(), s2.summary())
        raise ChannelMismatchError(
            op,
            s1.info,
            s2.info,
            "Consider multiplying or dividing one of them to match.",
        )


# =============================================================================
# BASIC OPERATORS
# =============================================================================


def add(s1: Signal, s2: Signal) -> Signal:
    """
    Addition of signals (``s1 + s2``).

    The result is as long as the longer operand; past the end of the shorter
    one the longer one passes through unchanged. Both operands must share
    the sample rate and the number of channels.
    """
    _check_rates("+", s1, s2)
    _check_channels("+", s1, s2)
    length = max(s1.length, s2.length)
    frames = s1.frames.pad_to(length).zip_with(s2.frames.pad_to(length), np.add)
    return Signal.from_frames(s1.rate, frames)


def par(s1: Signal, s2: Signal) -> Signal:
    """
    Parallelization of signals (``s1 | s2``).

    Both play at the same time in separate channels: ``s1`` takes the first
    channels, ``s2`` the rest. The shorter one is padded with silence at the
    end. Only the sample rates must match.
    """
    _check_rates("|", s1, s2)
    length = max(s1.length, s2.length)
    frames = s1.frames.pad_to(length).zip_with(
        s2.frames.pad_to(length), lambda a, b: np.concatenate((a, b), axis=1)
    )
    return Signal.from_frames(s1.rate, frames)


def seq(s1: Signal, s2: Signal) -> Signal:
    """
    Sequencing of signals (``s1 >> s2``): ``s1`` then ``s2``.

    Both operands must share the sample rate and the number of channels.
    Group long chains to the left (see the module docstring).
    """
    _check_rates(">>", s1, s2)
    _check_channels(">>", s1, s2)
    return Signal.from_frames(s1.rate, s1.frames.concat(s2.frames))


def sequence_all(signals: Iterable[Signal]) -> Signal:
    """Left fold of ``seq``; the efficient way to chain many signals."""
    items = iter(signals)
    first = next(items, None)
    if first is None:
        raise ValueError("sequence_all needs at least one signal")
    return functools.reduce(seq, items, first)


def mix_all(signals: Iterable[Signal]) -> Signal:
    """Left fold of ``add``."""
    items = iter(signals)
    first = next(items, None)
    if first is None:
        raise ValueError("mix_all needs at least one signal")
    return functools.reduce(add, items, first)


# =============================================================================
# CHANNELS
# =============================================================================


def multiply(n: int, s: Signal) -> Signal:
    """
    Repeat ``s`` over ``n`` times as many channels, at the same amplitude.

        multiply(n, from_function(r, d, p, f)) == from_function(r, d, p, lambda t: list(f(t)) * n)
    """
    frames = s.frames.map_array(lambda block: np.tile(block, (1, n)))
    return Signal.from_frames(s.rate, frames, fuse_multiply(n, s))


def divide(n: int, s: Signal) -> Signal:
    """Like ``multiply``, but also divides the amplitude by ``n``."""
    return scale(1 / n, multiply(n, s))


# =============================================================================
# SILENCE AND TIME OFFSETS
# =============================================================================


def silence(rate: int, duration: Time, channels: int = 1) -> Signal:
    return Signal.from_frames(rate, Frames.zeros(sample_count(rate, duration), channels))


def add_silence_beg(duration: Time, s: Signal) -> Signal:
    """Add a silence at the beginning of a signal."""
    return seq(silence(s.rate, duration, s.channels), s)


def add_silence_end(duration: Time, s: Signal) -> Signal:
    """Add a silence at the end of a signal."""
    return seq(s, silence(s.rate, duration, s.channels))


def add_at(t: Time, s1: Signal, s2: Signal) -> Signal:
    """Like ``add``, but ``s1`` starts ``t`` seconds into ``s2``."""
    return add(add_silence_beg(t, s1), s2)


def loop(n: int, s: Signal) -> Signal:
    """
    Repeat a signal ``n`` times in sequence. ``n`` must be at least 1.

        loop(n, loop(m, s)) == loop(n * m, s)
        map_sound(f, loop(n, s)) == loop(n, map_sound(f, s))
    """
    if n < 1:
        raise LoopCountError(n)
    if n == 1:
        return s
    return Signal.from_frames(s.rate, s.frames.tile(n))
