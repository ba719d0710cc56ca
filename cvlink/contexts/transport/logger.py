"""
Transport context logger.

Provides logging interface for transport context with automatic [transport] prefix.
All transport modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[transport]"


def _log_info(message: str) -> None:
    """Log info message with [transport] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [transport] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [transport] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [transport] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_fetch_start(url: str) -> None:
    """Log outgoing request."""
    _log_debug(f"GET {url}")


def log_fetch_result(url: str, status_code: int, elapsed_time: float) -> None:
    """Log response status and timing."""
    _log_debug(f"GET {url} -> {status_code} ({elapsed_time:.2f}s)")
