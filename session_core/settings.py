"""
QSettings-backed configuration for the session timeout runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from PySide6.QtCore import QSettings

from session_shared.monitor_config import MonitorConfig
from session_timeout_app.session_timeout_app import logger as app_logger

_LOGGER = app_logger.get_logger()

ORGANIZATION_NAME = "SessionTimeout"
APPLICATION_NAME = "Session Timeout"

_GROUP = "Session"
DEFAULT_TIMEOUT_MINUTES = 30
DEFAULT_CHECK_INTERVAL_SECONDS = 60
_MIN_TIMEOUT_MINUTES = 1
_MAX_TIMEOUT_MINUTES = 24 * 60
_MIN_CHECK_INTERVAL = 1
_MAX_CHECK_INTERVAL = 3600

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass(eq=True)
class SessionTimeoutSettings:
    enabled: bool = True
    timeout_minutes: int = DEFAULT_TIMEOUT_MINUTES
    check_interval_seconds: int = DEFAULT_CHECK_INTERVAL_SECONDS


class SessionTimeoutSettingsManager:
    """Loads persisted settings and clamps invalid data."""

    def __init__(self, qsettings: Optional[QSettings] = None) -> None:
        self._qsettings = qsettings or QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

    def read_settings(self) -> SessionTimeoutSettings:
        self._qsettings.sync()
        self._qsettings.beginGroup(_GROUP)
        try:
            return SessionTimeoutSettings(
                enabled=self._read_bool("Enabled", True),
                timeout_minutes=self._read_clamped_int(
                    "TimeoutMinutes",
                    DEFAULT_TIMEOUT_MINUTES,
                    _MIN_TIMEOUT_MINUTES,
                    _MAX_TIMEOUT_MINUTES,
                ),
                check_interval_seconds=self._read_clamped_int(
                    "CheckIntervalSeconds",
                    DEFAULT_CHECK_INTERVAL_SECONDS,
                    _MIN_CHECK_INTERVAL,
                    _MAX_CHECK_INTERVAL,
                ),
            )
        finally:
            self._qsettings.endGroup()

    def write_settings(self, settings: SessionTimeoutSettings) -> None:
        self._qsettings.beginGroup(_GROUP)
        try:
            self._qsettings.setValue("Enabled", bool(settings.enabled))
            self._qsettings.setValue("TimeoutMinutes", int(settings.timeout_minutes))
            self._qsettings.setValue("CheckIntervalSeconds", int(settings.check_interval_seconds))
        finally:
            self._qsettings.endGroup()
        self._qsettings.sync()

    def _read_bool(self, name: str, default: bool) -> bool:
        raw = self._read_value(name)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, int):
            return bool(raw)
        text = str(raw).strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        _LOGGER.warning("Setting {} has unexpected value {!r}; using default {}.", name, raw, default)
        return default

    def _read_clamped_int(self, name: str, default: int, minimum: int, maximum: int) -> int:
        raw = self._read_value(name)
        if raw is None:
            return default
        try:
            value = int(str(raw).strip())
        except ValueError:
            _LOGGER.warning("Setting {} has unexpected value {!r}; using default {}.", name, raw, default)
            return default
        if value < minimum or value > maximum:
            _LOGGER.warning(
                "Invalid {} value {} found in settings. Clamping to safe bounds.",
                name,
                value,
            )
        return max(minimum, min(maximum, value))

    def _read_value(self, name: str) -> Any:
        if not self._qsettings.contains(name):
            return None
        return self._qsettings.value(name)


def to_monitor_config(
    settings: SessionTimeoutSettings,
    on_timeout: Callable[[], None],
    *,
    timeout_minutes: Optional[int] = None,
) -> MonitorConfig:
    """Translate persisted settings into a monitor configuration."""
    minutes = settings.timeout_minutes if timeout_minutes is None else timeout_minutes
    return MonitorConfig(
        enabled=settings.enabled,
        timeout_ms=minutes * 60_000,
        on_timeout=on_timeout,
        check_interval_ms=settings.check_interval_seconds * 1000,
    )
