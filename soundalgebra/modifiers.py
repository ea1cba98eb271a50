from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from .frames import FloatArray, Frames
from .rewrite import fuse_velocity
from .signal import Signal
from .timing import Time, sample_envelope, sample_times


def velocity(envelope: Callable[[Time], float], s: Signal) -> Signal:
    """
    Time-dependent amplitude modifier.

    Every frame at index ``i`` is multiplied by ``envelope(i / rate)``. The
    envelope should stay within ``[0, 1]``; this is not checked. Nested
    envelopes compose multiplicatively::

        velocity(f, velocity(g, s)) == velocity(lambda t: f(t) * g(t), s)
    """
    gains = sample_envelope(envelope, sample_times(s.rate, s.length))
    frames = s.frames.map_array(lambda block: gains[:, np.newaxis] * block)
    return Signal.from_frames(s.rate, frames, fuse_velocity(envelope, s))


def scale(factor: float, s: Signal) -> Signal:
    """Scale a signal by a constant factor (``velocity`` with a constant envelope)."""
    return velocity(lambda _t: factor, s)


def map_sound(fn: Callable[[FloatArray], Sequence[float]], s: Signal) -> Signal:
    """
    Apply ``fn`` to every frame.

    ``fn`` gets a read-only frame array and returns the new frame; it may
    change the channel count, as long as it does so for every frame alike.
    """
    return map_sound_at(lambda _i, frame: fn(frame), s)


def map_sound_at(fn: Callable[[int, FloatArray], Sequence[float]], s: Signal) -> Signal:
    """Like ``map_sound``, but ``fn`` also receives the frame index."""
    if s.length == 0:
        return s
    rows = [fn(i, frame) for i, frame in enumerate(s.iter_frames())]
    block = np.asarray(rows, dtype=np.float64).reshape(s.length, -1)
    return Signal.from_frames(s.rate, Frames.from_array(block, copy=False))


def mute(s: Signal) -> Signal:
    """Same rate, length and channels as ``s``, every amplitude zero."""
    return Signal.from_frames(s.rate, Frames.zeros(s.length, s.channels))
