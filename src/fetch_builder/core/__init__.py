"""Core fetch-builder модули."""

from .config import (
    HTTPMethod,
    ResponseType,
    RequestConfig,
    TextBody,
    BinaryBody,
    JSONBody,
    resolve_body,
    merge_config,
    merge_headers,
)
from .config_store import ConfigStore, get_config_store
from .backoff import BackoffScheduler, delay_for
from .retry_engine import RetryEngine
from .decoder import ResponseDecoder
from .error_handler import ErrorHandler
from .engine import RequestExecutor
from .result import Success, Failure, Result
from .exceptions import (
    ErrorKind,
    FetchError,
    NetworkError,
    HTTPError,
    TimeoutError,
    AbortError,
    DecodeError,
    UnknownError,
    ConfigurationError,
)

__all__ = [
    # Config
    "HTTPMethod",
    "ResponseType",
    "RequestConfig",
    "TextBody",
    "BinaryBody",
    "JSONBody",
    "resolve_body",
    "merge_config",
    "merge_headers",
    "ConfigStore",
    "get_config_store",
    # Retry
    "BackoffScheduler",
    "delay_for",
    "RetryEngine",
    # Core
    "ResponseDecoder",
    "ErrorHandler",
    "RequestExecutor",
    "Success",
    "Failure",
    "Result",
    # Exceptions
    "ErrorKind",
    "FetchError",
    "NetworkError",
    "HTTPError",
    "TimeoutError",
    "AbortError",
    "DecodeError",
    "UnknownError",
    "ConfigurationError",
]
