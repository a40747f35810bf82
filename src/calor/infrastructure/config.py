"""Runtime settings, read from the environment.

| Variable                              | Default       |
|---------------------------------------|---------------|
| ``CALOR_DATA_DIR``                    | ``<repo>/data`` |
| ``CALOR_FREE_SHIPPING_THRESHOLD_CENTS`` | ``7500``    |
| ``CALOR_FLAT_SHIPPING_CENTS``         | ``1200``      |
| ``CALOR_LOG_LEVEL``                   | ``WARNING``   |
| ``CALOR_LOG_JSON``                    | ``false``     |
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from calor.domain.service.shipping_policy import (
    DEFAULT_FLAT_SHIPPING_CENTS,
    DEFAULT_FREE_SHIPPING_THRESHOLD_CENTS,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


class ConfigurationError(Exception):
    """An environment variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    free_shipping_threshold_cents: int = DEFAULT_FREE_SHIPPING_THRESHOLD_CENTS
    flat_shipping_cents: int = DEFAULT_FLAT_SHIPPING_CENTS
    log_level: str = "WARNING"
    log_json: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        data_dir = env.get("CALOR_DATA_DIR")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
            free_shipping_threshold_cents=_cents(
                env, "CALOR_FREE_SHIPPING_THRESHOLD_CENTS",
                DEFAULT_FREE_SHIPPING_THRESHOLD_CENTS,
            ),
            flat_shipping_cents=_cents(
                env, "CALOR_FLAT_SHIPPING_CENTS", DEFAULT_FLAT_SHIPPING_CENTS
            ),
            log_level=_log_level(env),
            log_json=_flag(env, "CALOR_LOG_JSON"),
        )


def _cents(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative, got {value}")
    return value


def _log_level(env: Mapping[str, str]) -> str:
    level = env.get("CALOR_LOG_LEVEL", "WARNING").strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"CALOR_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {level!r}"
        )
    return level


def _flag(env: Mapping[str, str], name: str) -> bool:
    raw = env.get(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")
