from __future__ import annotations

import logging
from collections.abc import Callable

from .combinators import add_silence_beg, mix_all, par, silence
from .modifiers import mute, scale, velocity
from .signal import Signal
from .timing import Time

_LOGGER = logging.getLogger("soundalgebra.effects")


# =============================================================================
# PANNING
# =============================================================================


def par_with_pan(position: Callable[[Time], float], s1: Signal, s2: Signal) -> Signal:
    """
    Like ``par``, but with a time-dependent pan position in ``[-1, 1]``.

    At -1 this is ``s1 | s2``, at 1 it is ``s2 | s1``, and at 0 both
    channels carry ``scale(0.5, s1 + s2)``.
    """

    def toward_first(t: Time) -> float:
        return (1 - position(t)) / 2

    def toward_second(t: Time) -> float:
        return (1 + position(t)) / 2

    left_side = velocity(toward_first, s1) + velocity(toward_second, s2)
    right_side = velocity(toward_second, s1) + velocity(toward_first, s2)
    return par(left_side, right_side)


def pan(position: Callable[[Time], float], s: Signal) -> Signal:
    """
    Pan a mono signal from left (-1) to right (1) with a time-dependent position.

    ``s`` is paired with mono silence, so a multi-channel ``s`` raises
    ``ChannelMismatchError``.
    """
    return par_with_pan(position, s, silence(s.rate, s.duration))


def left(s: Signal) -> Signal:
    """Move a signal completely to the left."""
    return par(s, mute(s))


def right(s: Signal) -> Signal:
    """Move a signal completely to the right."""
    return par(mute(s), s)


# =============================================================================
# ECHO
# =============================================================================


def echo(repetitions: int, decay: float, delay: Time, s: Signal) -> Signal:
    """
    Echo effect: ``repetitions`` delayed copies of ``s``, without ``s`` itself.

    Copy ``i`` (from 1) starts ``i * delay`` seconds in and is scaled by
    ``decay ** i``; ``decay`` should be in ``(0, 1)`` and ``delay`` positive.
    Zero repetitions give back ``s`` unchanged, not silence.
    """
    if repetitions == 0:
        return s
    _LOGGER.debug("echo x%d (decay=%s, delay=%ss) over %s", repetitions, decay, delay, s.summary())
    return mix_all(
        scale(decay**i, add_silence_beg(i * delay, s)) for i in range(1, repetitions + 1)
    )
