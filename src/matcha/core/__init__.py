"""Core module for the matcha API."""

from .config import settings, get_settings
from .logging import configure_logging, get_logger

__all__ = [
    "settings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
