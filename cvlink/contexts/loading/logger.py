"""
Loading context logger.

Provides logging interface for loading context with automatic [load] prefix.
All loading modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[load]"


def _log_info(message: str) -> None:
    """Log info message with [load] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [load] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [load] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [load] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [load] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level loading-specific logging helpers


def log_load_failure(target: str, failure) -> None:
    """
    Log a failed load attempt with enough context to diagnose it.

    Args:
        target: What was being loaded ("document" or "tech-registry")
        failure: LoadFailure describing source, stage, kind and message
    """
    _log_error(
        f"{failure.source.value}: {failure.kind.value} at {failure.stage} while loading {target}: "
        f"{failure.message}"
    )
    _log_info(f"Falling back to bundled default {target}")


def log_legacy_format(target: str, source: str, encoding: str) -> None:
    """Log that a link still uses a legacy token format."""
    _log_warning(f"{source}: {target} decoded with legacy format '{encoding}'")


def log_load_result(target: str, result) -> None:
    """
    Log the outcome of a document load.

    Args:
        target: What was loaded
        result: LoadResult from DocumentLoader.load()
    """
    if result.failure is None:
        _log_success(
            f"{target} ready (mode: {result.mode.value}, outcome: {result.outcome.value})"
        )
    else:
        _log_warning(
            f"{target} replaced by bundled default (mode: {result.mode.value}, "
            f"outcome: {result.outcome.value})"
        )
