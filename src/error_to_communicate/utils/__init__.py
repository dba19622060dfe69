"""Utility functions and helpers.

This module provides various utilities for error-to-communicate:
- errors: Exception hierarchy
- logging: Structured logging configuration
- text: Line splitting and escape-sequence helpers
"""

from error_to_communicate.utils.errors import (
    ConfigurationError,
    ErrorToCommunicateError,
    NotAcceptedError,
    UnknownTagError,
    UnparseableExceptionError,
)
from error_to_communicate.utils.logging import (
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)

__all__ = [
    # Errors
    "ConfigurationError",
    "ErrorToCommunicateError",
    "NotAcceptedError",
    "UnknownTagError",
    "UnparseableExceptionError",
    # Logging
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
