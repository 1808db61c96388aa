"""Settings read from ``JALALITOOLS_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from jalalitools.errors import ConfigurationError

ENV_PREFIX = "JALALITOOLS_"
ISO_SHIFT_ENV = f"{ENV_PREFIX}ISO_SHIFT_MINUTES"
TIME_AGO_SUFFIX_ENV = f"{ENV_PREFIX}TIME_AGO_SUFFIX"

DEFAULT_ISO_SHIFT_MINUTES = 60
DEFAULT_TIME_AGO_SUFFIX = "پیش"


@dataclass(frozen=True)
class Settings:
    """Values the formatting helpers fall back to when no argument is given."""

    iso_shift_minutes: int = DEFAULT_ISO_SHIFT_MINUTES
    time_ago_suffix: str = DEFAULT_TIME_AGO_SUFFIX


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}.") from exc


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from the environment, keeping defaults for unset variables."""
    env = os.environ if environ is None else environ
    return Settings(
        iso_shift_minutes=_read_int(env, ISO_SHIFT_ENV, DEFAULT_ISO_SHIFT_MINUTES),
        time_ago_suffix=env.get(TIME_AGO_SUFFIX_ENV, "").strip() or DEFAULT_TIME_AGO_SUFFIX,
    )
