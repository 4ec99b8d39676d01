"""
Process-wide default configuration.

Writers are serialized by a lock; every write publishes a fresh read-only
snapshot, so a concurrent reader sees either the old or the new defaults,
never a half-applied update.
"""

import logging
import threading
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .config import normalize_field

logger = logging.getLogger(__name__)


class ConfigStore:
    """
    Holder for default request configuration.

    Example:
        >>> store = ConfigStore()
        >>> store.set_defaults(headers={"Authorization": "Bearer token"}, max_retries=5)
        >>> store.get_defaults()["max_retries"]
        5
        >>> store.reset_defaults()
        >>> dict(store.get_defaults())
        {}
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._defaults: Mapping[str, Any] = MappingProxyType({})

    def set_defaults(self, config: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """
        Merge fields into the current defaults (last write wins per field).

        Args:
            config: Partial configuration as a mapping
            **fields: Partial configuration as keyword arguments

        Raises:
            ConfigurationError: Unknown field or invalid value
        """
        updates = dict(config or {})
        updates.update(fields)
        normalized = {name: normalize_field(name, value) for name, value in updates.items()}

        with self._lock:
            merged = dict(self._defaults)
            merged.update(normalized)
            self._defaults = MappingProxyType(merged)

        logger.debug("Default config updated", extra={"fields": sorted(normalized)})

    def get_defaults(self) -> Mapping[str, Any]:
        """Return a read-only snapshot of the current defaults."""
        return self._defaults

    def reset_defaults(self) -> None:
        """Clear all defaults."""
        with self._lock:
            self._defaults = MappingProxyType({})

        logger.debug("Default config reset")


_default_store: Optional[ConfigStore] = None
_default_store_lock = threading.Lock()


def get_config_store() -> ConfigStore:
    """
    Get the process-wide ConfigStore, creating it on first access.

    Example:
        >>> get_config_store().set_defaults(retry_delay_ms=500)
    """
    global _default_store

    if _default_store is None:
        with _default_store_lock:
            if _default_store is None:
                _default_store = ConfigStore()

    return _default_store
