"""Equivalences the evaluator may use to skip intermediate signals.

These identities hold for every Signal, whether or not they are applied::

    multiply(n, from_function(r, d, p, f)) == from_function(r, d, p, lambda t: list(f(t)) * n)
    velocity(f, velocity(g, s))            == velocity(lambda t: f(t) * g(t), s)
    loop(n, loop(m, s))                    == loop(n * m, s)
    map_sound(f, loop(n, s))               == loop(n, map_sound(f, s))

The first two are applied to the ``FunctionSource`` tag whenever the operand
carries one and ``apply_rewrites`` is on. The frames of the result are always
computed from the frames the operand already holds; only the tag is fused,
so a chain of envelopes and channel copies stays one function that
``render_source`` can sample again at any length. Fusing never calls a
source. The loop identities need no help: ``loop`` tiles frames and
``map_sound`` works frame by frame.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from .config import get_settings
from .frames import FloatArray, Frames
from .signal import FunctionSource, Signal
from .timing import Time, TimeArray, sample_envelope, sample_times

_LOGGER = logging.getLogger("soundalgebra.rewrite")


def fusable_source(s: Signal) -> FunctionSource | None:
    """The source ``s`` was sampled from, if operators are allowed to fuse with it."""

    if s.source is None or not get_settings().apply_rewrites:
        return None
    return s.source


def render_source(rate: int, length: int, source: FunctionSource) -> Signal:
    """Sample ``source`` at the first ``length`` sample times."""

    block = source.block(sample_times(rate, length))
    return Signal.from_frames(rate, Frames.from_array(block, copy=False), source)


def replicated(n: int, source: FunctionSource) -> FunctionSource:
    def block(times: TimeArray) -> FloatArray:
        return np.tile(source.block(times), (1, n))

    return FunctionSource(source.period, block)


def enveloped(envelope: Callable[[Time], float], source: FunctionSource) -> FunctionSource:
    def block(times: TimeArray) -> FloatArray:
        return sample_envelope(envelope, times)[:, np.newaxis] * source.block(times)

    return FunctionSource(source.period, block)


def fuse_multiply(n: int, s: Signal) -> FunctionSource | None:
    """Tag for ``multiply(n, s)``, or None when ``s`` has nothing to fuse with."""

    source = fusable_source(s)
    if source is None:
        return None
    _LOGGER.debug("Fusing multiply(%d) into sampled source (%s)", n, s.summary())
    return replicated(n, source)


def fuse_velocity(envelope: Callable[[Time], float], s: Signal) -> FunctionSource | None:
    """Tag for ``velocity(envelope, s)``, or None when ``s`` has nothing to fuse with."""

    source = fusable_source(s)
    if source is None:
        return None
    _LOGGER.debug("Fusing velocity into sampled source (%s)", s.summary())
    return enveloped(envelope, source)
