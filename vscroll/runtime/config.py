"""Scroller configuration loading and validation."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping

from vscroll.api.errors import InvalidConfiguration
from vscroll.api.logging import ScrollLoggingConfig

LEDGER_BACKENDS: tuple[str, ...] = ("fenwick", "flat")
DEFAULT_OVERSCAN = 3
DEFAULT_ROW_HEIGHT = 32.0


@dataclass(frozen=True, slots=True)
class ScrollerConfig:
    """Windowing options for one virtualized list."""

    row_height: float
    overscan: int = DEFAULT_OVERSCAN
    variable_height: bool = False
    height_epsilon: float = 0.0
    ledger_backend: str = "fenwick"
    anchor_measurements: bool = True
    metrics_enabled: bool = False


def validate_scroller_config(config: ScrollerConfig) -> ScrollerConfig:
    """Reject configurations the engine cannot run with."""
    row_height = config.row_height
    if not isinstance(row_height, (int, float)) or not math.isfinite(row_height) or row_height <= 0:
        raise InvalidConfiguration("row_height", row_height, "must be a finite number > 0")
    if isinstance(config.overscan, bool) or not isinstance(config.overscan, int):
        raise InvalidConfiguration("overscan", config.overscan, "must be an integer")
    if config.overscan < 0:
        raise InvalidConfiguration("overscan", config.overscan, "must be >= 0")
    epsilon = config.height_epsilon
    if not isinstance(epsilon, (int, float)) or math.isnan(epsilon) or epsilon < 0:
        raise InvalidConfiguration("height_epsilon", epsilon, "must be >= 0")
    if config.ledger_backend not in LEDGER_BACKENDS:
        raise InvalidConfiguration(
            "ledger_backend",
            config.ledger_backend,
            f"expected one of {', '.join(LEDGER_BACKENDS)}",
        )
    return config


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(name: str, default: int, *, env: Mapping[str, str] | None = None) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        return int(default)
    try:
        return int(raw.strip())
    except ValueError:
        return int(default)


def _float(name: str, default: float, *, env: Mapping[str, str] | None = None) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        return float(default)
    try:
        return float(raw.strip())
    except ValueError:
        return float(default)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def load_scroller_config(
    *,
    env: Mapping[str, str] | None = None,
    row_height: float = DEFAULT_ROW_HEIGHT,
    overscan: int = DEFAULT_OVERSCAN,
    variable_height: bool = False,
) -> ScrollerConfig:
    """Build a validated config from `VSCROLL_*` variables over the given defaults.

    Unparseable values fall back to the defaults; parsed values that are out of
    range raise `InvalidConfiguration`.
    """
    config = ScrollerConfig(
        row_height=_float("VSCROLL_ROW_HEIGHT", row_height, env=env),
        overscan=_int("VSCROLL_OVERSCAN", overscan, env=env),
        variable_height=_flag("VSCROLL_VARIABLE_HEIGHT", variable_height, env=env),
        height_epsilon=_float("VSCROLL_HEIGHT_EPSILON", 0.0, env=env),
        ledger_backend=_text("VSCROLL_LEDGER_BACKEND", "fenwick", env=env).lower(),
        anchor_measurements=_flag("VSCROLL_ANCHOR_MEASUREMENTS", True, env=env),
        metrics_enabled=_flag("VSCROLL_METRICS_ENABLED", False, env=env),
    )
    return validate_scroller_config(config)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("VSCROLL_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_scroll_logging_config(*, env: Mapping[str, str] | None = None) -> ScrollLoggingConfig:
    """Build the package logging config from `VSCROLL_LOG_*` variables."""
    return ScrollLoggingConfig(
        level_name=resolve_log_level_name(env=env),
        console_format=_text("VSCROLL_LOG_FORMAT", "text", env=env).lower(),
        file_path=_text("VSCROLL_LOG_FILE", "", env=env) or None,
        file_format=_text("VSCROLL_LOG_FILE_FORMAT", "json", env=env).lower(),
    )


__all__ = [
    "DEFAULT_OVERSCAN",
    "DEFAULT_ROW_HEIGHT",
    "LEDGER_BACKENDS",
    "ScrollerConfig",
    "load_scroll_logging_config",
    "load_scroller_config",
    "resolve_log_level_name",
    "validate_scroller_config",
]
