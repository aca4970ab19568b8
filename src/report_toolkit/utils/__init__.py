"""Shared utilities (logging setup)."""

from .logging_utils import configure_logging, LOG_FORMAT

__all__ = ["configure_logging", "LOG_FORMAT"]
