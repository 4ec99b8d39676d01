"""
Logging system for fetch-builder.

Example:
    >>> from fetch_builder.core.logging import configure_logging, LoggingConfig
    >>>
    >>> configure_logging(LoggingConfig(level="DEBUG", format="json"))
"""

from .logger import LoggingConfig, configure_logging, close_logging
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    RequestIdFilter,
    ExtraFieldsFilter,
    set_request_id,
    reset_request_id,
    get_request_id,
)

__all__ = [
    # Logger
    "LoggingConfig",
    "configure_logging",
    "close_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "RequestIdFilter",
    "ExtraFieldsFilter",
    "set_request_id",
    "reset_request_id",
    "get_request_id",
]
