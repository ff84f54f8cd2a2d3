"""
Inactivity monitor configuration and its validation rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

DEFAULT_CHECK_INTERVAL_MS = 60_000
DEFAULT_THROTTLE_MS = 1_000


class MonitorConfigError(ValueError):
    """Raised when a monitor configuration violates its contract."""


@dataclass(frozen=True)
class MonitorConfig:
    """
    Options recognized by the inactivity monitor.

    `timeout_ms` is the idle duration after which `on_timeout` fires. The
    check interval bounds how late the notification can be observed.
    """

    enabled: bool
    timeout_ms: int
    on_timeout: Optional[Callable[[], None]] = None
    check_interval_ms: int = DEFAULT_CHECK_INTERVAL_MS
    throttle_ms: int = DEFAULT_THROTTLE_MS


def validate_config(config: MonitorConfig) -> MonitorConfig:
    """
    Validate a configuration eagerly, returning it unchanged when valid.

    Numeric fields are checked even for disabled configs so a bad value is
    reported when it is supplied rather than when monitoring is turned on.
    """
    if not isinstance(config.enabled, bool):
        raise MonitorConfigError(f"'enabled' must be a bool, got {config.enabled!r}.")

    _require_int(config.timeout_ms, field="timeout_ms", minimum=1)
    _require_int(config.check_interval_ms, field="check_interval_ms", minimum=1)
    _require_int(config.throttle_ms, field="throttle_ms", minimum=0)

    if config.enabled:
        if config.on_timeout is None:
            raise MonitorConfigError("'on_timeout' is required when monitoring is enabled.")
        if not callable(config.on_timeout):
            raise MonitorConfigError(f"'on_timeout' must be callable, got {type(config.on_timeout).__name__}.")

    return config


def _require_int(value: Any, *, field: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MonitorConfigError(f"'{field}' must be an integer, got {value!r}.")
    if value < minimum:
        raise MonitorConfigError(f"'{field}' must be >= {minimum}, got {value}.")
    return value
