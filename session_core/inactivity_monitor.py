"""
Inactivity monitoring driven by activity signals and a periodic idle check.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from session_shared.activity import ALL_SIGNALS, THROTTLED_SIGNALS, ActivitySignal, ActivitySource
from session_shared.monitor_config import MonitorConfig, validate_config
from session_timeout_app.session_timeout_app import logger as app_logger

_LOGGER = app_logger.get_logger()


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class InactivityMonitor(QObject):
    """
    Tracks time since the last qualifying activity signal and fires a
    one-shot timeout once the configured idle duration is exceeded.

    Monitoring halts after the timeout fires until the monitor is started
    again. Stopping is idempotent and releases both the check timer and every
    activity subscription.
    """

    timedOut = Signal()
    activeChanged = Signal(bool)

    def __init__(
        self,
        config: MonitorConfig,
        source: ActivitySource,
        *,
        clock: Optional[Callable[[], float]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._config = validate_config(config)
        self._source = source
        self._clock = clock or _monotonic_ms
        self._lock = threading.RLock()

        self._timer = QTimer(self)
        self._timer.setInterval(self._config.check_interval_ms)
        self._timer.timeout.connect(self._check_idle)  # type: ignore[arg-type]

        self._active = False
        self._fired = False
        self._last_activity_at = 0.0
        self._throttle_window_start: Optional[float] = None

    @property
    def config(self) -> MonitorConfig:
        return self._config

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def has_fired(self) -> bool:
        return self._fired

    @property
    def last_activity_at(self) -> float:
        return self._last_activity_at

    def idle_ms(self) -> float:
        """Milliseconds since the last accepted activity; 0 while inactive."""
        with self._lock:
            if not self._active:
                return 0.0
            return max(0.0, self._clock() - self._last_activity_at)

    def remaining_ms(self) -> float:
        """Milliseconds left before the timeout; 0 while inactive."""
        with self._lock:
            if not self._active:
                return 0.0
            return max(0.0, self._config.timeout_ms - self.idle_ms())

    def start(self) -> None:
        """Begin monitoring if enabled; no-op when already running."""
        with self._lock:
            if self._active:
                return
            if not self._config.enabled:
                _LOGGER.debug("Inactivity monitor disabled; not subscribing to activity.")
                return

            self._last_activity_at = self._clock()
            self._throttle_window_start = None
            self._fired = False
            self._active = True
            self._source.subscribe(ALL_SIGNALS, self._on_activity)
            self._timer.setInterval(self._config.check_interval_ms)
            self._timer.start()

        _LOGGER.debug(
            "Inactivity monitor started (timeout={}ms, check every {}ms).",
            self._config.timeout_ms,
            self._config.check_interval_ms,
        )
        self.activeChanged.emit(True)

    def stop(self) -> None:
        """Stop monitoring; safe to call repeatedly."""
        with self._lock:
            stopped = self._deactivate()
        if stopped:
            _LOGGER.debug("Inactivity monitor stopped.")
            self.activeChanged.emit(False)

    def configure(self, config: MonitorConfig) -> None:
        """
        Apply a new configuration.

        A changed configuration stops the monitor and starts it again with
        the new values, which resets the idle clock. An identical one is
        ignored. Invalid configurations are rejected before anything changes.
        """
        validate_config(config)
        with self._lock:
            if config == self._config:
                return
            self.stop()
            self._config = config
        self.start()

    def __enter__(self) -> "InactivityMonitor":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _deactivate(self) -> bool:
        if not self._active:
            return False
        self._active = False
        self._timer.stop()
        self._source.unsubscribe(ALL_SIGNALS, self._on_activity)
        return True

    def _on_activity(self, signal: ActivitySignal) -> None:
        with self._lock:
            if not self._active:
                return
            now = self._clock()
            if signal in THROTTLED_SIGNALS:
                window_start = self._throttle_window_start
                if window_start is not None and now - window_start < self._config.throttle_ms:
                    return
                self._throttle_window_start = now
            if now > self._last_activity_at:
                self._last_activity_at = now

    def _check_idle(self) -> None:
        with self._lock:
            if not self._active or self._fired:
                return
            idle = self._clock() - self._last_activity_at
            if idle < self._config.timeout_ms:
                return
            self._fired = True
            self._deactivate()
            callback = self._config.on_timeout

            # Held until the callback returns: a stop() from another thread
            # cannot complete while the timeout is firing.
            _LOGGER.info("No activity for {:.0f}ms; session timeout reached.", idle)
            self.activeChanged.emit(False)
            self.timedOut.emit()
            if callback is not None:
                callback()
