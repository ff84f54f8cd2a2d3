"""
Session coordinator signing the user out after a period of inactivity.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from session_core.activity_sources import QtActivitySource
from session_core.inactivity_monitor import InactivityMonitor
from session_core.settings import (
    SessionTimeoutSettings,
    SessionTimeoutSettingsManager,
    to_monitor_config,
)
from session_shared.activity import ActivitySource
from session_shared.monitor_config import MonitorConfig
from session_timeout_app.session_timeout_app import logger as app_logger

SETTINGS_REFRESH_INTERVAL_MS = 15000
INACTIVITY_REASON = "inactivity"


class AuthSession(QObject):
    """In-memory signed-in state owned by the host application."""

    changed = Signal(bool)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._signed_in = False
        self._sign_out_reason: Optional[str] = None

    @property
    def signed_in(self) -> bool:
        return self._signed_in

    @property
    def sign_out_reason(self) -> Optional[str]:
        return self._sign_out_reason

    def sign_in(self) -> None:
        if self._signed_in:
            return
        self._signed_in = True
        self._sign_out_reason = None
        self.changed.emit(True)

    def sign_out(self, reason: str) -> None:
        if not self._signed_in:
            return
        self._signed_in = False
        self._sign_out_reason = reason
        self.changed.emit(False)


class SessionGuard(QObject):
    signedOut = Signal(str)

    def __init__(
        self,
        *,
        settings_manager: Optional[SessionTimeoutSettingsManager] = None,
        source: Optional[ActivitySource] = None,
        session: Optional[AuthSession] = None,
        timeout_minutes_override: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = app_logger.get_logger()
        self.settings_manager = settings_manager or SessionTimeoutSettingsManager()
        self.session = session or AuthSession(self)
        self._source = source if source is not None else QtActivitySource(parent=self)
        self._timeout_override = timeout_minutes_override

        self._settings = SessionTimeoutSettings()
        self.monitor = InactivityMonitor(
            MonitorConfig(enabled=False, timeout_ms=self._settings.timeout_minutes * 60_000),
            self._source,
            clock=clock,
            parent=self,
        )

        self._settings_timer = QTimer(self)
        self._settings_timer.setInterval(SETTINGS_REFRESH_INTERVAL_MS)
        self._settings_timer.timeout.connect(self._reload_settings)

    @property
    def settings(self) -> SessionTimeoutSettings:
        return self._settings

    def start(self) -> None:
        self._logger.info("Starting session guard.")
        self.session.sign_in()
        self._apply_settings(self.settings_manager.read_settings(), initial=True)
        self._settings_timer.start()

    def sign_in(self) -> None:
        """Sign the session in again and begin a fresh monitoring lifetime."""
        self.session.sign_in()
        self._logger.info("Session signed in; idle clock reset.")
        self.monitor.stop()
        self._apply_settings(self._settings)
        self.monitor.start()

    def shutdown(self) -> None:
        self._logger.info("Shutting down session guard.")
        self._settings_timer.stop()
        self.monitor.stop()

    def _reload_settings(self) -> None:
        new_settings = self.settings_manager.read_settings()
        if new_settings != self._settings:
            self._logger.info("Detected session settings change. Applying updates.")
            self._apply_settings(new_settings)

    def _apply_settings(self, settings: SessionTimeoutSettings, *, initial: bool = False) -> None:
        previous = self._settings
        self._settings = settings

        if not settings.enabled:
            if self.monitor.is_active or initial:
                self._logger.info("Session timeout disabled via settings; pausing monitoring.")
        elif not initial and previous.timeout_minutes != settings.timeout_minutes:
            self._logger.info("Session timeout updated to {} minutes.", settings.timeout_minutes)

        config = to_monitor_config(
            settings,
            self._on_session_timeout,
            timeout_minutes=self._timeout_override,
        )
        if not self.session.signed_in:
            config = replace(config, enabled=False)
        self.monitor.configure(config)

    def _on_session_timeout(self) -> None:
        self._logger.info("Signing out after inactivity timeout.")
        self.session.sign_out(INACTIVITY_REASON)
        self.signedOut.emit(INACTIVITY_REASON)
