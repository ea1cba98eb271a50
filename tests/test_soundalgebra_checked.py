import pytest

from soundalgebra import PreconditionError, checked, generators
from soundalgebra.generators import sine_r


def test_valid_calls_match_unchecked_functions() -> None:
    assert checked.sine_r(8, 1.0, 0.5, 1.0, 0.0) == sine_r(8, 1.0, 0.5, 1.0, 0.0)
    assert checked.noise_r(1000, 0.02, 1.0, 100.0, 42) == generators.noise_r(
        1000, 0.02, 1.0, 100.0, 42
    )
    assert checked.loop(2, checked.zero_sound_r(8, 0.5)).n_samples == 8


@pytest.mark.parametrize(
    "call",
    [
        lambda: checked.sine_r(8, 1.0, 1.5, 1.0, 0.0),
        lambda: checked.sine_r(8, 1.0, -0.1, 1.0, 0.0),
        lambda: checked.square_r(8, 1.0, 0.5, 0.0, 0.0),
        lambda: checked.triangle_r(0, 1.0, 0.5, 1.0, 0.0),
        lambda: checked.sawtooth_r(8, -1.0, 0.5, 1.0, 0.0),
        lambda: checked.karplus_r(8, 1.0, 0.5, 1.0, 1.0, 0),
        lambda: checked.karplus_r(8, 1.0, 0.5, 1.0, 0.0, 0),
        lambda: checked.noise_r(8, 1.0, 0.5, 100.0, 0),
        lambda: checked.zero_sound_r(8, -0.5),
    ],
)
def test_generator_preconditions(call) -> None:
    with pytest.raises(PreconditionError):
        call()


def test_combinator_and_effect_preconditions() -> None:
    s = checked.zero_sound_r(8, 1.0)
    with pytest.raises(PreconditionError):
        checked.loop(0, s)
    with pytest.raises(PreconditionError):
        checked.multiply(0, s)
    with pytest.raises(PreconditionError):
        checked.divide(-1, s)
    with pytest.raises(PreconditionError):
        checked.echo(-1, 0.5, 0.1, s)
    with pytest.raises(PreconditionError):
        checked.echo(2, 0.5, 0.0, s)
    with pytest.raises(PreconditionError):
        checked.add_silence_end(-1.0, s)


def test_echo_zero_passes_through_checked_layer() -> None:
    s = checked.zero_sound_r(8, 1.0)
    assert checked.echo(0, 0.5, 0.1, s) == s


def test_precondition_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="sine_r"):
        checked.sine_r(8, 1.0, 2.0, 1.0, 0.0)


def test_sine_v_requires_a_callable() -> None:
    with pytest.raises(PreconditionError):
        checked.sine_v_r(8, 1.0, 0.5, 440.0, 0.0)  # type: ignore[arg-type]
    assert checked.sine_v_r(8, 1.0, 0.5, lambda _t: 1.0, 0.0).n_samples == 8
