"""
PaletteKit Structured Logging
Centralized logging configuration using loguru.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from palettekit.config import config


def configure_logging(level: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with the PaletteKit format.

    Args:
        level: Minimum level to emit; defaults to config.LOG_LEVEL
    """
    logger.remove()
    logger.add(
        sys.stdout,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message} | {extra}",
        level=level or config.LOG_LEVEL,
        serialize=False  # Set to True for JSON output
    )


class StructuredLogger:
    """Structured logger for palette operations."""

    def __init__(self, component: str = "palettekit"):
        self.component = component

    def _bound(self, extra: Optional[Dict[str, Any]]):
        return logger.bind(component=self.component, **(extra or {}))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with optional extra data."""
        self._bound(extra).info(message)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with optional extra data."""
        self._bound(extra).warning(message)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log error message with optional extra data."""
        self._bound(extra).error(message)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with optional extra data."""
        self._bound(extra).debug(message)


# Logger instances by component
_loggers: Dict[str, StructuredLogger] = {}


def get_logger(component: str = "palettekit") -> StructuredLogger:
    """Get or create the structured logger for a component."""
    if component not in _loggers:
        _loggers[component] = StructuredLogger(component)
    return _loggers[component]
