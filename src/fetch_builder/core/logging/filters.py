"""
Log filters for adding execution context to records.
"""

import logging
from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

# Context-local so concurrent execute() calls on one event loop stay apart
_request_id: ContextVar[Optional[str]] = ContextVar("fetch_builder_request_id", default=None)


def set_request_id(request_id: str) -> Token:
    """
    Set request ID for the current context.

    Returns a token for reset_request_id().

    Example:
        >>> set_request_id("req-12345")
        >>> logger.info("Attempt started")  # Will include request_id
    """
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    """Restore the request ID that was current before set_request_id()."""
    _request_id.reset(token)


def get_request_id() -> Optional[str]:
    """Get request ID for the current context, or None."""
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Adds ``request_id`` to every record (``None`` outside an execution)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id()
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Filter that adds extra static fields to all log records.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"service": "billing"}))
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
