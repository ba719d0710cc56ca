"""
Authoring context logger.

Provides logging interface for authoring context with automatic [author] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[author]"


def _log_info(message: str) -> None:
    """Log info message with [author] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [author] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [author] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_link_built(mode: str, length: int, estimated_length: int = None) -> None:
    """Log a generated link with its size."""
    if estimated_length is None:
        _log_info(f"Generated {mode} link ({length} chars)")
    else:
        _log_info(f"Generated {mode} link ({length} chars, estimated {estimated_length})")
