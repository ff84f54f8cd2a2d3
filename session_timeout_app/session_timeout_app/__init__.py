"""
Session timeout host application package.

Exposes logging helpers shared by the runtime packages.
"""

from . import logger

__all__ = ["logger"]
