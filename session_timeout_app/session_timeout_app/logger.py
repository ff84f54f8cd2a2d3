"""
Logging setup for the session timeout runtime.

Log files live under ``SESSION_TIMEOUT_LOG_DIR`` when it is set, otherwise
under ``~/.session_timeout/logs``. The directory is resolved when logging is
first configured, not at import.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger as _logger

LOG_DIR_ENV = "SESSION_TIMEOUT_LOG_DIR"
LOG_FILE_NAME = "session_timeout.log"

_LOG_INITIALISED = False


def default_log_path(environ: Mapping[str, str] = os.environ) -> Path:
    """Resolve the log file location from the environment."""
    override = environ.get(LOG_DIR_ENV, "").strip()
    log_dir = Path(override) if override else Path.home() / ".session_timeout" / "logs"
    return log_dir / LOG_FILE_NAME


def configure(log_path: Optional[Path] = None) -> None:
    """Install the stderr and rotating file sinks once per process."""
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or default_log_path()
    target.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level="INFO", enqueue=True)
    _logger.add(
        target,
        level="DEBUG",
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    _LOG_INITIALISED = True
    _logger.debug("Logging to {}", target)


def get_logger():
    """Return the shared logger, configuring it on first use."""
    configure()
    return _logger
