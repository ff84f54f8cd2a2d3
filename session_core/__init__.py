"""
Qt runtime pieces for session inactivity monitoring.
"""

from .inactivity_monitor import InactivityMonitor  # noqa: F401
from .settings import SessionTimeoutSettings, SessionTimeoutSettingsManager  # noqa: F401
