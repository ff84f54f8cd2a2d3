"""
Value types shared by the session timeout runtime and its hosts.
"""

from .activity import ALL_SIGNALS, ActivitySignal, ActivitySource, ManualActivitySource  # noqa: F401
from .monitor_config import MonitorConfig, MonitorConfigError, validate_config  # noqa: F401
