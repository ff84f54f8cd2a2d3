"""
Entry point for the session timeout application.
"""

from __future__ import annotations

import os
import sys
from typing import Iterable, Optional

from PySide6.QtWidgets import QApplication

from session_core.session_guard import SessionGuard
from session_core.settings import APPLICATION_NAME, ORGANIZATION_NAME
from session_core.status_window import SessionStatusWindow
from session_timeout_app.session_timeout_app import logger as app_logger

_LOGGER = app_logger.get_logger()
TIMEOUT_OVERRIDE_ENV = "SESSION_TIMEOUT_MINUTES"


def read_timeout_override(environ=os.environ) -> Optional[int]:
    """Return the per-run timeout override in minutes, if one is set."""
    raw = environ.get(TIMEOUT_OVERRIDE_ENV)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{TIMEOUT_OVERRIDE_ENV} must be an integer number of minutes, got {raw!r}.") from exc


def run(argv: Iterable[str]) -> int:
    """Start the Qt application and block until it quits."""
    app = QApplication(list(argv))
    app.setOrganizationName(ORGANIZATION_NAME)
    app.setApplicationName(APPLICATION_NAME)

    guard = SessionGuard(timeout_minutes_override=read_timeout_override())
    window = SessionStatusWindow(guard)
    app.aboutToQuit.connect(guard.shutdown)

    guard.start()
    window.show()
    return app.exec()


def main() -> int:
    try:
        return run(sys.argv)
    except ValueError as exc:
        _LOGGER.error("Invalid configuration: {}", exc)
        return 2
    except Exception:  # pragma: no cover - crash guard
        _LOGGER.exception("Session timeout app crashed.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
