"""fetch-builder - fluent HTTP request builder with retries and classified errors."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .builder import FetchBuilder
from .transport import HTTPXTransport, Transport, TransportRequest, TransportResponse
from .core.config import HTTPMethod, ResponseType, RequestConfig
from .core.config_store import ConfigStore, get_config_store
from .core.backoff import BackoffScheduler
from .core.result import Success, Failure, Result
from .core.env_config import FetchSettings, configure_logging_from_env, load_defaults_from_env
from .core.logging import LoggingConfig, configure_logging
from .core.exceptions import (
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

# Set up logging - add NullHandler to prevent "No handler found" warnings
# Users can configure logging themselves using logging.getLogger('fetch_builder')
logging.getLogger('fetch_builder').addHandler(logging.NullHandler())

try:
    __version__ = version("fetch-builder")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__license__ = "MIT"

__all__ = [
    # Builder
    "FetchBuilder",

    # Transport
    "Transport",
    "HTTPXTransport",
    "TransportRequest",
    "TransportResponse",

    # Config
    "HTTPMethod",
    "ResponseType",
    "RequestConfig",
    "ConfigStore",
    "get_config_store",
    "BackoffScheduler",
    "FetchSettings",
    "load_defaults_from_env",
    "configure_logging_from_env",
    "LoggingConfig",
    "configure_logging",

    # Result
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

    # Version
    "__version__",
]
