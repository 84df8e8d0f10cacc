"""
Utility functions for gsheet-gamedata
"""

from .app_logger import configure_logging

__all__ = ["configure_logging"]
