"""
Wiring of handlers, formatters and filters onto the ``fetch_builder`` logger.

Library modules log through ``logging.getLogger(__name__)``; this module only
decides where those records go.
"""

import logging
import sys
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, List, Mapping, Optional

from ..exceptions import ConfigurationError
from .filters import ExtraFieldsFilter, RequestIdFilter
from .formatters import FORMATTERS, get_formatter

ROOT_LOGGER_NAME = "fetch_builder"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Куда и в каком виде писать логи fetch-builder.

    Файловый лог включается заданием file_path.

    Args:
        level: Имя уровня (DEBUG, INFO, ...), регистр не важен
        format: "json" или "text"
        console: Писать в stdout
        file_path: Путь к файлу с ротацией
        max_bytes: Размер файла до ротации
        backup_count: Сколько ротированных файлов хранить
        request_id: Добавлять request_id текущего execute()
        extra_fields: Статические поля для каждой записи (service, env, ...)

    Example:
        >>> LoggingConfig(level="debug", format="json", file_path="/var/log/fetch.log")
    """

    level: str = "INFO"
    format: str = "text"
    console: bool = True
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    request_id: bool = True
    extra_fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        level = str(self.level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Unknown log level: {self.level}")
        log_format = str(self.format).lower()
        if log_format not in FORMATTERS:
            raise ConfigurationError(f"Unknown log format: {self.format}")
        object.__setattr__(self, "level", level)
        object.__setattr__(self, "format", log_format)

    @property
    def level_no(self) -> int:
        return logging.getLevelName(self.level)


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    """stdout и/или файловый handler с общими formatter и фильтрами."""
    handlers: List[logging.Handler] = []

    if config.console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                config.file_path,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    formatter = get_formatter(config.format)
    for handler in handlers:
        handler.setLevel(config.level_no)
        handler.setFormatter(formatter)
        if config.request_id:
            handler.addFilter(RequestIdFilter())
        if config.extra_fields:
            handler.addFilter(ExtraFieldsFilter(dict(config.extra_fields)))

    return handlers


def configure_logging(
    config: Optional[LoggingConfig] = None,
    name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """
    Configure the package logger.

    Replaces handlers installed by a previous call, so calling it again with
    a new config is safe.

    Args:
        config: Logging configuration (uses defaults if None)
        name: Logger name

    Returns:
        Configured logging.Logger

    Example:
        >>> logger = configure_logging(LoggingConfig(level="DEBUG", format="json"))
    """
    config = config or LoggingConfig()

    logger = logging.getLogger(name)
    close_logging(name)
    logger.setLevel(config.level_no)
    logger.propagate = False

    for handler in _build_handlers(config):
        logger.addHandler(handler)

    return logger


def close_logging(name: str = ROOT_LOGGER_NAME) -> None:
    """
    Flush, close and detach all handlers of the package logger.

    Idempotent.
    """
    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        handler.flush()
        handler.close()
        logger.removeHandler(handler)
