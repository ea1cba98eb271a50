import numpy as np
import pytest

from soundalgebra.config import (
    AlgebraSettings,
    configure,
    get_settings,
    load_settings_from_env,
    override_settings,
    parse_settings,
)
from soundalgebra.errors import InvalidSettingsError
from soundalgebra.generators import from_function


def test_defaults() -> None:
    settings = AlgebraSettings()
    assert settings.default_rate == 44_100
    assert settings.chunk_frames == 4096
    assert settings.apply_rewrites is True


def test_override_restores_previous_settings() -> None:
    before = get_settings()
    with override_settings(chunk_frames=16) as active:
        assert active.chunk_frames == 16
        assert get_settings() is active
    assert get_settings() is before


def test_override_restores_after_error() -> None:
    before = get_settings()
    with pytest.raises(RuntimeError):
        with override_settings(apply_rewrites=False):
            raise RuntimeError("boom")
    assert get_settings() is before


def test_configure_rejects_bad_values() -> None:
    before = get_settings()
    with pytest.raises(InvalidSettingsError):
        configure(chunk_frames=0)
    with pytest.raises(InvalidSettingsError):
        configure(unknown_knob=1)
    assert get_settings() is before


def test_configure_replaces_settings() -> None:
    before = get_settings()
    try:
        updated = configure(default_rate=22_050)
        assert updated.default_rate == 22_050
        assert get_settings().chunk_frames == before.chunk_frames
    finally:
        configure(**before.model_dump())


def test_parse_settings_accepts_strings() -> None:
    settings = parse_settings({"chunk_frames": "128", "apply_rewrites": "false"})
    assert settings.chunk_frames == 128
    assert settings.apply_rewrites is False


def test_load_settings_from_env() -> None:
    before = get_settings()
    try:
        settings = load_settings_from_env(
            {"SOUNDALGEBRA_CHUNK_FRAMES": "64", "SOUNDALGEBRA_APPLY_REWRITES": "0"}
        )
        assert settings.chunk_frames == 64
        assert settings.apply_rewrites is False
        assert get_settings() is settings
    finally:
        configure(**before.model_dump())


def test_load_settings_from_env_without_overrides() -> None:
    before = get_settings()
    assert load_settings_from_env({"UNRELATED": "1"}) is before


def test_chunk_size_does_not_change_values() -> None:
    def fn(t: float) -> list[float]:
        return [t, 1 - t]

    with override_settings(chunk_frames=7):
        small = from_function(100, 1.0, None, fn)
    large = from_function(100, 1.0, None, fn)
    assert small.frames.block_count == 15
    assert large.frames.block_count == 1
    assert np.array_equal(small.to_numpy(), large.to_numpy())
