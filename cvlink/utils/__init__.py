"""
Shared utilities for cvlink.

Common functionality used across contexts:
- Logger setup with provenance tracking
"""

from cvlink.utils.logger import log_provenance, setup_logger

__all__ = ["log_provenance", "setup_logger"]
