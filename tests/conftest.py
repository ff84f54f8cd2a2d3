"""Shared pytest fixtures for the test suite.

Fixture overview
----------------
qapp         the process-wide QApplication, created offscreen
clock        manually advanced millisecond clock for the monitor
source       ManualActivitySource fed by explicit emit() calls
qsettings    INI-backed QSettings in a temporary directory
"""

from __future__ import annotations

import os
import tempfile

# Must be set before the logger module is imported by anything below.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("SESSION_TIMEOUT_LOG_DIR", tempfile.mkdtemp(prefix="session_timeout_logs_"))

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from session_shared.activity import ManualActivitySource


class FakeClock:
    """Monotonic millisecond clock advanced by hand."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, milliseconds: float) -> None:
        self.now += milliseconds


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=1_000_000.0)


@pytest.fixture
def source() -> ManualActivitySource:
    return ManualActivitySource()


@pytest.fixture
def qsettings(tmp_path) -> QSettings:
    return QSettings(str(tmp_path / "session.ini"), QSettings.Format.IniFormat)
