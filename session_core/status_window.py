"""
Small status window showing the guarded session and its idle countdown.
"""

from __future__ import annotations

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from session_core.session_guard import SessionGuard

COUNTDOWN_REFRESH_MS = 1000


def format_remaining(milliseconds: float) -> str:
    """Render a millisecond duration as M:SS, or H:MM:SS past one hour."""
    total_seconds = max(0, int(milliseconds // 1000))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


class SessionStatusWindow(QWidget):
    def __init__(self, guard: SessionGuard, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._guard = guard
        self.setWindowTitle("Session Timeout")
        self.setObjectName("SessionStatusWindow")

        self._state_label = QLabel()
        self._state_label.setObjectName("SessionState")
        self._state_label.setStyleSheet("font-weight: bold; font-size: 14px;")

        self._timeout_label = QLabel()
        self._timeout_label.setObjectName("SessionTimeout")

        self._remaining_label = QLabel()
        self._remaining_label.setObjectName("SessionRemaining")

        self._sign_in_button = QPushButton("Sign in again")
        self._sign_in_button.clicked.connect(self._guard.sign_in)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(8)
        layout.addWidget(self._state_label)
        layout.addWidget(self._timeout_label)
        layout.addWidget(self._remaining_label)
        layout.addWidget(self._sign_in_button)

        self._guard.session.changed.connect(self.refresh)
        self._guard.monitor.activeChanged.connect(self.refresh)

        self._countdown_timer = QTimer(self)
        self._countdown_timer.setInterval(COUNTDOWN_REFRESH_MS)
        self._countdown_timer.timeout.connect(self.refresh)
        self._countdown_timer.start()

        self.refresh()

    def refresh(self, *_args) -> None:
        signed_in = self._guard.session.signed_in
        monitor = self._guard.monitor
        timeout_ms = monitor.config.timeout_ms

        if signed_in:
            self._state_label.setText("Signed in")
        elif self._guard.session.sign_out_reason:
            self._state_label.setText(f"Signed out ({self._guard.session.sign_out_reason})")
        else:
            self._state_label.setText("Signed out")

        self._timeout_label.setText(f"Idle timeout: {format_remaining(timeout_ms)}")
        if monitor.is_active:
            self._remaining_label.setText(f"Signing out in {format_remaining(monitor.remaining_ms())}")
        else:
            self._remaining_label.setText("Inactivity monitoring paused")
        self._sign_in_button.setEnabled(not signed_in)

    def state_text(self) -> str:
        return self._state_label.text()

    def remaining_text(self) -> str:
        return self._remaining_label.text()
