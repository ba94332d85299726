"""
palettelab Structured Logging
Centralized loguru configuration for the API layer.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from palettelab.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message} | {extra}"


class StructuredLogger:
    """Thin wrapper that binds extra fields onto loguru records."""

    def __init__(self, sink=sys.stdout, level: Optional[str] = None):
        self._configure_logger(sink, level or config.LOG_LEVEL)

    def _configure_logger(self, sink, level: str):
        """Replace loguru's default handler with the palettelab sink."""
        logger.remove()
        logger.add(
            sink,
            format=LOG_FORMAT,
            level=level,
            serialize=config.LOG_JSON
        )

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        # depth=2 reports the caller of info()/warning()/..., not this wrapper
        bound = logger.bind(**extra) if extra else logger
        bound.opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
