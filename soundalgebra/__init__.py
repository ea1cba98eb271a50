from __future__ import annotations

from .combinators import (
    add,
    add_at,
    add_silence_beg,
    add_silence_end,
    divide,
    loop,
    mix_all,
    multiply,
    par,
    seq,
    sequence_all,
    silence,
)
from .config import DEFAULT_RATE, AlgebraSettings, configure, get_settings, override_settings
from .config import load_settings_from_env as _load_settings_from_env
from .effects import echo, left, pan, par_with_pan, right
from .errors import (
    ChannelMismatchError,
    InvalidSettingsError,
    LoopCountError,
    PreconditionError,
    RateMismatchError,
    SampleIndexError,
    SignalInfo,
    SignalMismatchError,
    SoundAlgebraError,
)
from .frames import Frames
from .generators import (
    from_function,
    karplus,
    karplus_r,
    noise,
    noise_r,
    sawtooth,
    sawtooth_r,
    sine,
    sine_r,
    sine_v,
    sine_v_r,
    square,
    square_r,
    triangle,
    triangle_r,
    zero_sound,
    zero_sound_r,
)
from .logging_utils import configure_logging as _configure_logging
from .modifiers import map_sound, map_sound_at, mute, scale, velocity
from .signal import FunctionSource, Signal, channels, duration, n_samples, rate, sample
from .timing import Time, decimals, sample_count, sample_time, time_floor

__all__ = [
    "DEFAULT_RATE",
    "AlgebraSettings",
    "ChannelMismatchError",
    "Frames",
    "FunctionSource",
    "InvalidSettingsError",
    "LoopCountError",
    "PreconditionError",
    "RateMismatchError",
    "SampleIndexError",
    "Signal",
    "SignalInfo",
    "SignalMismatchError",
    "SoundAlgebraError",
    "Time",
    "add",
    "add_at",
    "add_silence_beg",
    "add_silence_end",
    "channels",
    "configure",
    "decimals",
    "divide",
    "duration",
    "echo",
    "from_function",
    "get_settings",
    "karplus",
    "karplus_r",
    "left",
    "loop",
    "map_sound",
    "map_sound_at",
    "mix_all",
    "multiply",
    "mute",
    "n_samples",
    "noise",
    "noise_r",
    "override_settings",
    "pan",
    "par",
    "par_with_pan",
    "rate",
    "right",
    "sample",
    "sample_count",
    "sample_time",
    "sawtooth",
    "sawtooth_r",
    "scale",
    "seq",
    "sequence_all",
    "silence",
    "sine",
    "sine_r",
    "sine_v",
    "sine_v_r",
    "square",
    "square_r",
    "time_floor",
    "triangle",
    "triangle_r",
    "velocity",
    "zero_sound",
    "zero_sound_r",
]

__version__ = "0.1.0"

_configure_logging()
_load_settings_from_env()
del _configure_logging, _load_settings_from_env
