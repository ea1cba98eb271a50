"""
Signal generators.

Every generator comes in two forms: ``xxx_r(rate, ...)`` takes the sample
rate explicitly, ``xxx(...)`` uses the configured ``default_rate``
(44.1 kHz unless changed). Amplitudes
are expected in ``[0, 1]`` and frequencies to be positive; neither is checked
here (see ``soundalgebra.checked``).

The periodic waveforms are written in a reduced form of their textbook
definitions, with ``s = frequency * t + phase`` the position in cycles.
"""

from __future__ import annotations

import itertools
import math
from collections.abc import Callable, Sequence

import numpy as np

from .config import get_settings
from .frames import FloatArray, Frames
from .modifiers import velocity
from .rewrite import render_source
from .signal import FunctionSource, Signal
from .timing import Time, TimeArray, decimals, sample_count, sample_time, time_floor

PI2 = 2 * math.pi


def _period(frequency: Time) -> Time:
    # A zero frequency never repeats.
    return math.inf if frequency == 0 else 1 / frequency


def _periodic(
    rate: int,
    duration: Time,
    period: Time | None,
    block: Callable[[TimeArray], FloatArray],
) -> Signal:
    def frames_block(times: TimeArray) -> FloatArray:
        return block(times)[:, np.newaxis]

    source = FunctionSource(period, frames_block)
    return render_source(rate, sample_count(rate, duration), source)


# =============================================================================
# SILENCE AND SAMPLED FUNCTIONS
# =============================================================================


def zero_sound_r(rate: int, duration: Time) -> Signal:
    """Like ``zero_sound``, but with an explicit sample rate."""
    return Signal.from_frames(rate, Frames.zeros(sample_count(rate, duration), 1))


def zero_sound(duration: Time) -> Signal:
    """Mono silence of the given duration."""
    return zero_sound_r(get_settings().default_rate, duration)


def from_function(
    rate: int,
    duration: Time,
    period: Time | None,
    fn: Callable[[Time], Sequence[float]],
) -> Signal:
    """
    Sample ``fn`` at every sample time in ``[0, duration)``.

    ``fn`` returns one amplitude per channel; it must return the same number
    of channels at every time. It is called exactly once per frame (once at
    time 0 for an empty duration, to learn the channel count). ``period`` is
    the fundamental period of ``fn`` if it has one. It never changes the
    sampled values and is only kept for the rewrite rules.
    """
    length = sample_count(rate, duration)
    values = (fn(sample_time(rate, i)) for i in range(length))
    first = next(values, None)
    if first is None:
        frames = Frames.zeros(0, len(fn(sample_time(rate, 0))))
    else:
        frames = Frames.from_iterable(length, len(first), itertools.chain([first], values))
    channels = frames.channels

    def frames_block(times: TimeArray) -> FloatArray:
        rows = [fn(t) for t in times.tolist()]
        return np.asarray(rows, dtype=np.float64).reshape(len(times), channels)

    return Signal.from_frames(rate, frames, FunctionSource(period, frames_block))


# =============================================================================
# BASIC WAVES
# =============================================================================


def sine_r(rate: int, duration: Time, amplitude: float, frequency: Time, phase: Time) -> Signal:
    """Like ``sine``, but with an explicit sample rate."""
    pi2f = PI2 * frequency

    def block(times: TimeArray) -> FloatArray:
        return amplitude * np.sin(pi2f * times + phase)

    return _periodic(rate, duration, _period(frequency), block)


def sine(duration: Time, amplitude: float, frequency: Time, phase: Time) -> Signal:
    """Mono sine wave: ``amplitude * sin(2*pi*frequency*t + phase)``."""
    return sine_r(get_settings().default_rate, duration, amplitude, frequency, phase)


def sine_v_r(
    rate: int,
    duration: Time,
    amplitude: float,
    frequency: Callable[[Time], Time],
    phase: Time,
) -> Signal:
    """Like ``sine_v``, but with an explicit sample rate."""

    def block(times: TimeArray) -> FloatArray:
        freqs = np.fromiter(
            (frequency(t) for t in times.tolist()), dtype=np.float64, count=len(times)
        )
        return amplitude * np.sin(PI2 * freqs * times + phase)

    return _periodic(rate, duration, None, block)


def sine_v(
    duration: Time, amplitude: float, frequency: Callable[[Time], Time], phase: Time
) -> Signal:
    """
    Sine wave whose frequency is a function of time.

    The wave is ``sin(2*pi*frequency(t)*t + phase)``: the frequency is
    plugged in at each instant rather than integrated into a phase, so the
    pitch heard only follows ``frequency`` closely while it changes slowly.
    Use ``sine`` for a constant frequency.
    """
    return sine_v_r(get_settings().default_rate, duration, amplitude, frequency, phase)


def sawtooth_r(
    rate: int, duration: Time, amplitude: float, frequency: Time, phase: Time
) -> Signal:
    """Like ``sawtooth``, but with an explicit sample rate."""

    def block(times: TimeArray) -> FloatArray:
        return amplitude * (2 * decimals(frequency * times + phase) - 1)

    return _periodic(rate, duration, _period(frequency), block)


def sawtooth(duration: Time, amplitude: float, frequency: Time, phase: Time) -> Signal:
    """Mono sawtooth wave rising from ``-amplitude`` to ``amplitude`` each cycle."""
    return sawtooth_r(get_settings().default_rate, duration, amplitude, frequency, phase)


def square_r(rate: int, duration: Time, amplitude: float, frequency: Time, phase: Time) -> Signal:
    """Like ``square``, but with an explicit sample rate."""

    def block(times: TimeArray) -> FloatArray:
        return amplitude * np.sign(0.5 - decimals(frequency * times + phase))

    return _periodic(rate, duration, _period(frequency), block)


def square(duration: Time, amplitude: float, frequency: Time, phase: Time) -> Signal:
    """
    Mono square wave.

    The first half of each cycle is ``amplitude``, the second half
    ``-amplitude``; a sample landing exactly on the half-cycle edge is 0.
    """
    return square_r(get_settings().default_rate, duration, amplitude, frequency, phase)


def triangle_r(
    rate: int, duration: Time, amplitude: float, frequency: Time, phase: Time
) -> Signal:
    """Like ``triangle``, but with an explicit sample rate."""

    def block(times: TimeArray) -> FloatArray:
        s = frequency * times + phase
        return amplitude * (1 - 4 * np.abs(time_floor(s + 0.25) - s + 0.25))

    return _periodic(rate, duration, _period(frequency), block)


def triangle(duration: Time, amplitude: float, frequency: Time, phase: Time) -> Signal:
    """Mono triangle wave."""
    return triangle_r(get_settings().default_rate, duration, amplitude, frequency, phase)


# =============================================================================
# NOISE AND PLUCKED STRINGS
# =============================================================================


def noise_block(
    rate: int, amplitude: float, frequency: Time, seed: int, limit: int | None = None
) -> FloatArray:
    """
    One period of seeded noise, as a ``(n, 1)`` array.

    ``n`` is the number of samples in ``1 / frequency`` seconds, cut down to
    ``limit`` when one is given. A zero frequency never repeats, so its block
    is exactly ``limit`` samples long and ``limit`` is required.

    Draws are uniform in ``[-1, 1)`` from a PCG64 generator seeded with
    ``seed``, so equal arguments give bit-identical blocks on every run, and
    a cut block is a prefix of the full one.
    """
    period = _period(frequency)
    if math.isinf(period):
        if limit is None:
            raise ValueError("noise with a zero frequency needs a block limit")
        n = limit
    else:
        n = sample_count(rate, period)
        if limit is not None:
            n = min(n, limit)
    rng = np.random.Generator(np.random.PCG64(seed))
    draws = rng.uniform(-1.0, 1.0, n)
    return (amplitude * draws)[:, np.newaxis]


def noise_r(
    rate: int, duration: Time, amplitude: float, frequency: Time, seed: int
) -> Signal:
    """Like ``noise``, but with an explicit sample rate."""
    total = sample_count(rate, duration)
    if total == 0:
        return Signal.from_frames(rate, Frames.zeros(0, 1))
    block = noise_block(rate, amplitude, frequency, seed, limit=total)
    if len(block) == 0:
        raise ValueError(
            f"noise period at {frequency}Hz is shorter than one sample at {rate}Hz"
        )
    reps = -(-total // len(block))
    tiled = np.tile(block, (reps, 1))[:total]
    return Signal.from_frames(rate, Frames.from_array(tiled, copy=False))


def noise(duration: Time, amplitude: float, frequency: Time, seed: int) -> Signal:
    """
    Seeded mono noise, periodic at ``frequency``.

    A single period is drawn at random and then repeated for the whole
    duration, which gives the result a pitch. Different seeds give different
    sounds. This is the raw material of ``karplus``.
    """
    return noise_r(get_settings().default_rate, duration, amplitude, frequency, seed)


def karplus_r(
    rate: int,
    duration: Time,
    amplitude: float,
    frequency: Time,
    decay: float,
    seed: int,
) -> Signal:
    """Like ``karplus``, but with an explicit sample rate."""
    return velocity(lambda t: decay**t, noise_r(rate, duration, amplitude, frequency, seed))


def karplus(
    duration: Time, amplitude: float, frequency: Time, decay: float, seed: int
) -> Signal:
    """
    Plucked-string-like sound: periodic noise under an exponential decay.

    Each frame at time ``t`` is scaled by ``decay ** t``; ``decay`` should be
    in ``(0, 1)``. This is a decaying noise burst, not a feedback comb filter.
    """
    return karplus_r(get_settings().default_rate, duration, amplitude, frequency, decay, seed)
