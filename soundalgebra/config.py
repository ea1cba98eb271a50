from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidSettingsError

_LOGGER = logging.getLogger("soundalgebra.config")

DEFAULT_RATE = 44_100

_ENV_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        "SOUNDALGEBRA_DEFAULT_RATE": "default_rate",
        "SOUNDALGEBRA_CHUNK_FRAMES": "chunk_frames",
        "SOUNDALGEBRA_APPLY_REWRITES": "apply_rewrites",
    }
)


class AlgebraSettings(BaseModel):
    """Process-wide knobs for the evaluator and the frame storage.

    None of these change the values a Signal holds; they only change how
    (and how fast) those values are produced.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_rate: int = Field(default=DEFAULT_RATE, gt=0)
    chunk_frames: int = Field(default=4096, gt=0)
    apply_rewrites: bool = True


_lock = threading.Lock()
_settings = AlgebraSettings()


def get_settings() -> AlgebraSettings:
    return _settings


def parse_settings(payload: Mapping[str, Any]) -> AlgebraSettings:
    """Parse a settings payload, raising InvalidSettingsError on failure."""

    try:
        return AlgebraSettings.model_validate(dict(payload))
    except ValidationError as exc:
        _LOGGER.warning("Failed to parse settings payload: %s", exc, exc_info=True)
        raise InvalidSettingsError(str(exc)) from exc


def configure(**changes: Any) -> AlgebraSettings:
    """Replace the active settings with ``changes`` applied on top of them."""

    global _settings
    with _lock:
        updated = parse_settings({**_settings.model_dump(), **changes})
        _settings = updated
    _LOGGER.debug("Settings updated: %s", updated)
    return updated


@contextmanager
def override_settings(**changes: Any) -> Iterator[AlgebraSettings]:
    """Temporarily apply ``changes``; the previous settings come back on exit."""

    global _settings
    previous = _settings
    updated = configure(**changes)
    try:
        yield updated
    finally:
        with _lock:
            _settings = previous


def load_settings_from_env(environ: Mapping[str, str] | None = None) -> AlgebraSettings:
    """Apply any ``SOUNDALGEBRA_*`` overrides found in the environment."""

    env = os.environ if environ is None else environ
    changes = {field: env[name] for name, field in _ENV_FIELDS.items() if env.get(name)}
    if not changes:
        return _settings
    return configure(**changes)
