"""
Validating versions of the generators, channel operators and effects.

The core functions never check their numeric preconditions (amplitude range,
positive frequency, decay below one, ...). The wrappers here do, through
pydantic, and raise ``PreconditionError`` before any sample is computed.
They return exactly what the unchecked function returns.

    from soundalgebra import checked

    checked.sine_r(8000, 1.0, 0.5, 440.0, 0.0)      # fine
    checked.sine_r(8000, 1.0, 2.0, 440.0, 0.0)      # PreconditionError
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Annotated, ParamSpec, TypeVar

from pydantic import ConfigDict, Field, ValidationError, validate_call

from . import combinators, effects, generators
from .errors import PreconditionError
from .signal import Signal

_LOGGER = logging.getLogger("soundalgebra.checked")

P = ParamSpec("P")
R = TypeVar("R")

Rate = Annotated[int, Field(gt=0)]
Duration = Annotated[float, Field(ge=0)]
Amplitude = Annotated[float, Field(ge=0, le=1)]
Frequency = Annotated[float, Field(gt=0)]
Decay = Annotated[float, Field(gt=0, lt=1)]
Delay = Annotated[float, Field(gt=0)]
Count = Annotated[int, Field(ge=1)]
Repetitions = Annotated[int, Field(ge=0)]

_CONFIG = ConfigDict(arbitrary_types_allowed=True)


def _checked(func: Callable[P, R]) -> Callable[P, R]:
    validated = validate_call(config=_CONFIG)(func)

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return validated(*args, **kwargs)
        except ValidationError as exc:
            _LOGGER.debug("%s precondition failed: %s", func.__name__, exc)
            raise PreconditionError(f"{func.__name__}: {exc}") from exc

    return wrapper


# -----------------------------------------------------------------------------
# Generators
# -----------------------------------------------------------------------------


@_checked
def zero_sound_r(rate: Rate, duration: Duration) -> Signal:
    return generators.zero_sound_r(rate, duration)


@_checked
def sine_r(
    rate: Rate, duration: Duration, amplitude: Amplitude, frequency: Frequency, phase: float
) -> Signal:
    return generators.sine_r(rate, duration, amplitude, frequency, phase)


@_checked
def sine_v_r(
    rate: Rate,
    duration: Duration,
    amplitude: Amplitude,
    frequency: Callable[[float], float],
    phase: float,
) -> Signal:
    return generators.sine_v_r(rate, duration, amplitude, frequency, phase)


@_checked
def sawtooth_r(
    rate: Rate, duration: Duration, amplitude: Amplitude, frequency: Frequency, phase: float
) -> Signal:
    return generators.sawtooth_r(rate, duration, amplitude, frequency, phase)


@_checked
def square_r(
    rate: Rate, duration: Duration, amplitude: Amplitude, frequency: Frequency, phase: float
) -> Signal:
    return generators.square_r(rate, duration, amplitude, frequency, phase)


@_checked
def triangle_r(
    rate: Rate, duration: Duration, amplitude: Amplitude, frequency: Frequency, phase: float
) -> Signal:
    return generators.triangle_r(rate, duration, amplitude, frequency, phase)


@_checked
def noise_r(
    rate: Rate, duration: Duration, amplitude: Amplitude, frequency: Frequency, seed: int
) -> Signal:
    if frequency > rate:
        raise PreconditionError(f"noise_r: frequency {frequency} exceeds the rate {rate}")
    return generators.noise_r(rate, duration, amplitude, frequency, seed)


@_checked
def karplus_r(
    rate: Rate,
    duration: Duration,
    amplitude: Amplitude,
    frequency: Frequency,
    decay: Decay,
    seed: int,
) -> Signal:
    if frequency > rate:
        raise PreconditionError(f"karplus_r: frequency {frequency} exceeds the rate {rate}")
    return generators.karplus_r(rate, duration, amplitude, frequency, decay, seed)


# -----------------------------------------------------------------------------
# Channels, loops, effects
# -----------------------------------------------------------------------------


@_checked
def multiply(n: Count, s: Signal) -> Signal:
    return combinators.multiply(n, s)


@_checked
def divide(n: Count, s: Signal) -> Signal:
    return combinators.divide(n, s)


@_checked
def loop(n: Count, s: Signal) -> Signal:
    return combinators.loop(n, s)


@_checked
def add_silence_beg(duration: Duration, s: Signal) -> Signal:
    return combinators.add_silence_beg(duration, s)


@_checked
def add_silence_end(duration: Duration, s: Signal) -> Signal:
    return combinators.add_silence_end(duration, s)


@_checked
def echo(repetitions: Repetitions, decay: Decay, delay: Delay, s: Signal) -> Signal:
    return effects.echo(repetitions, decay, delay, s)
