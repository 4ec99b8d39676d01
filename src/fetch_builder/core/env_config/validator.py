"""
Pydantic settings for environment configuration.
"""

from typing import Dict, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..logging.logger import LoggingConfig


class FetchSettings(BaseSettings):
    """
    fetch-builder defaults read from environment variables.

    Reads from:
    1. Environment variables (FETCH_BUILDER_*)
    2. .env file
    3. Defaults

    Example .env file:
        FETCH_BUILDER_MAX_RETRIES=5
        FETCH_BUILDER_RETRY_DELAY_MS=250
        FETCH_BUILDER_TIMEOUT_MS=10000
        FETCH_BUILDER_HEADERS={"Authorization": "Bearer token"}
        FETCH_BUILDER_LOG_LEVEL=DEBUG

    Usage:
        >>> settings = FetchSettings()
        >>> settings.max_retries
        3
    """

    model_config = SettingsConfigDict(
        env_prefix='FETCH_BUILDER_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Request defaults
    max_retries: int = Field(default=3, ge=0, description="Retries after the first attempt")
    retry_delay_ms: int = Field(default=1000, gt=0, description="Base backoff delay in ms")
    timeout_ms: Optional[int] = Field(default=None, gt=0, description="Per-attempt timeout in ms")
    response_type: Literal["json", "text", "blob", "array_buffer"] = Field(default="json")
    headers: Dict[str, str] = Field(default_factory=dict, description="Default headers (JSON object)")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")
    log_file_path: Optional[str] = None

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    def to_logging_config(self) -> LoggingConfig:
        """Build LoggingConfig; a file path enables file logging."""
        return LoggingConfig(
            level=self.log_level,
            format=self.log_format,
            file_path=self.log_file_path,
        )
