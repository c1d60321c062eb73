"""mdpreview utility modules.

- logging: Standardized logging with human/verbose/JSON modes
- launcher: Platform opener strategy table for browser preview
"""

from mdpreview.utils.launcher import LAUNCHERS, Launcher, LauncherCommand, resolve_launcher
from mdpreview.utils.logging import get_logger, setup_logging

__all__ = [
    "LAUNCHERS",
    "Launcher",
    "LauncherCommand",
    "get_logger",
    "resolve_launcher",
    "setup_logging",
]
