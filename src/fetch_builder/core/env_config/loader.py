"""
Load request defaults from environment variables and .env files.
"""

import logging
from typing import Any, Dict, Optional

from ..config_store import ConfigStore, get_config_store
from ..logging.logger import ROOT_LOGGER_NAME, configure_logging
from .validator import FetchSettings

logger = logging.getLogger(__name__)

# Settings that map onto request config fields
REQUEST_FIELDS = ("max_retries", "retry_delay_ms", "timeout_ms", "response_type", "headers")


def _settings(env_file: Optional[str]) -> FetchSettings:
    return FetchSettings(_env_file=env_file) if env_file else FetchSettings()


def load_defaults_from_env(
    store: Optional[ConfigStore] = None,
    env_file: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Copy request defaults from the environment into a ConfigStore.

    Only settings that were actually provided (env var or .env entry) are
    copied, so built-in defaults never shadow values already in the store.

    Args:
        store: Target store (process-wide store if None)
        env_file: Custom .env file path

    Returns:
        The fields written to the store

    Example:
        >>> # FETCH_BUILDER_MAX_RETRIES=5
        >>> load_defaults_from_env()
        {'max_retries': 5}
    """
    settings = _settings(env_file)
    provided = {
        name: getattr(settings, name)
        for name in REQUEST_FIELDS
        if name in settings.model_fields_set
    }

    if provided:
        (store or get_config_store()).set_defaults(provided)

    logger.debug("Loaded defaults from environment", extra={"fields": sorted(provided)})
    return provided


def configure_logging_from_env(
    env_file: Optional[str] = None,
    name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """
    Configure the package logger from FETCH_BUILDER_LOG_* settings.

    Example:
        >>> # FETCH_BUILDER_LOG_LEVEL=DEBUG
        >>> # FETCH_BUILDER_LOG_FORMAT=json
        >>> # FETCH_BUILDER_LOG_FILE_PATH=/var/log/fetch.log
        >>> configure_logging_from_env()
    """
    return configure_logging(_settings(env_file).to_logging_config(), name=name)
