"""Simple logging abstraction for reciper."""

import sys
from typing import Optional

from loguru import logger as _logger

from .profile import Profile

_logger_configured: bool = False


def get_logger(component: Optional[str] = None):
    """Get a logger instance bound to a component name.

    Sinks are installed on first use, so library callers get the same
    stderr and file handlers as the CLI.
    """
    if not _logger_configured:
        configure_logging()

    return _logger.bind(component=component or "reciper")


def configure_logging(profile: Optional[Profile] = None, level: Optional[str] = None) -> None:
    """Install the stderr and file sinks once per process."""
    global _logger_configured

    if _logger_configured:
        return

    profile = profile or Profile.current()
    _logger.remove()

    # Stderr handler - only ERROR and above
    _logger.add(
        sys.stderr,
        level="ERROR",
        format="<red>{time:HH:mm:ss}</red> | <level>{level: <8}</level> | <cyan>{extra[component]}</cyan> | <level>{message}</level>",
        colorize=True,
    )

    _logger.add(
        profile.log_file,
        level=level or profile.log_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]} | {message}",
        rotation="10 MB",
        retention="30 days",
    )

    _logger.configure(patcher=_add_context)
    _logger_configured = True


def _add_context(record):
    """Default the component for records logged without one."""
    record["extra"].setdefault("component", "reciper")


logger = get_logger()

__all__ = [
    "logger",
    "get_logger",
    "configure_logging",
]
