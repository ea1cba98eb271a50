from __future__ import annotations

from typing import NamedTuple


class SignalInfo(NamedTuple):
    """Rate, length and channel count of one operand."""

    rate: int
    length: int
    channels: int

    def __str__(self) -> str:
        return f"rate={self.rate}Hz, length={self.length}, channels={self.channels}"


class SoundAlgebraError(Exception):
    """Base error for the soundalgebra library."""


class SignalMismatchError(SoundAlgebraError):
    """Raised when two operands of a binary operator are incompatible."""

    kind = "signals"

    def __init__(self, op: str, left: SignalInfo, right: SignalInfo, hint: str = "") -> None:
        self.op = op
        self.left = left
        self.right = right
        message = f"{op}: can't combine {self.kind} ({left}) and ({right})."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class RateMismatchError(SignalMismatchError):
    """Raised when operands disagree on sample rate."""

    kind = "signals with different sample rates"


class ChannelMismatchError(SignalMismatchError):
    """Raised when operands disagree on number of channels."""

    kind = "signals with different number of channels"


class SampleIndexError(SoundAlgebraError, IndexError):
    """Raised when a frame index falls outside ``[0, length)``."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"sample index {index} out of range for signal of length {length}")


class LoopCountError(SoundAlgebraError, ValueError):
    """Raised when a loop is asked for fewer than one repetition."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"loop needs at least one repetition, got {count}")


class PreconditionError(SoundAlgebraError, ValueError):
    """Raised by the checked layer when a documented precondition is violated."""


class InvalidSettingsError(SoundAlgebraError):
    """Raised when settings cannot be parsed or validated."""
