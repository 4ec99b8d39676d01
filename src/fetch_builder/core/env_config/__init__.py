"""
Environment-based configuration.

Example:
    >>> from fetch_builder.core.env_config import load_defaults_from_env, configure_logging_from_env
    >>> load_defaults_from_env()
    >>> configure_logging_from_env()
"""

from .loader import configure_logging_from_env, load_defaults_from_env
from .validator import FetchSettings

__all__ = [
    "configure_logging_from_env",
    "load_defaults_from_env",
    "FetchSettings",
]
