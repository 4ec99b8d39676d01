"""
Конфигурация запроса и правило слияния с глобальными настройками.

RequestConfig - frozen dataclass: после передачи в движок не меняется,
интерсепторы получают новый экземпляр через evolve().
"""

import dataclasses
import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel

from .exceptions import ConfigurationError

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ENUMS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPMethod(str, Enum):
    """HTTP методы."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"


class ResponseType(str, Enum):
    """Режим разбора тела ответа."""
    JSON = "json"
    TEXT = "text"
    BLOB = "blob"
    ARRAY_BUFFER = "array_buffer"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# REQUEST BODY
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TextBody:
    """Тело-строка, уходит как есть (UTF-8)."""
    text: str

    def encode(self) -> bytes:
        return self.text.encode("utf-8")


@dataclass(frozen=True)
class BinaryBody:
    """Бинарное тело, уходит без преобразований."""
    data: bytes

    def encode(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class JSONBody:
    """Структурированные данные, сериализуются в JSON."""
    value: Any

    def encode(self) -> bytes:
        # NaN/Infinity не являются валидным JSON
        return json.dumps(self.value, allow_nan=False).encode("utf-8")


RequestBody = Union[TextBody, BinaryBody, JSONBody]


def resolve_body(body: Any) -> Optional[RequestBody]:
    """
    Привести сырое значение тела к одному из вариантов RequestBody.

    Examples:
        >>> resolve_body("hello")
        TextBody(text='hello')
        >>> resolve_body(b"\\x00")
        BinaryBody(data=b'\\x00')
        >>> resolve_body({"a": 1})
        JSONBody(value={'a': 1})
    """
    if body is None or isinstance(body, (TextBody, BinaryBody, JSONBody)):
        return body
    if isinstance(body, str):
        return TextBody(body)
    if isinstance(body, (bytes, bytearray, memoryview)):
        return BinaryBody(bytes(body))
    if isinstance(body, BaseModel):
        return JSONBody(body.model_dump(mode="json"))
    return JSONBody(body)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# VALIDATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_MS = 1000

CONFIG_FIELDS = (
    "url",
    "method",
    "headers",
    "body",
    "response_type",
    "timeout_ms",
    "max_retries",
    "retry_delay_ms",
    "fetch_options",
)


def normalize_field(name: str, value: Any) -> Any:
    """
    Проверить и нормализовать значение поля конфигурации.

    Используется билдером, хранилищем глобальных настроек и RequestConfig,
    чтобы невалидное значение отвергалось в момент установки.

    Raises:
        ConfigurationError: Неизвестное поле или невалидное значение
    """
    if name not in CONFIG_FIELDS:
        raise ConfigurationError(f"Unknown config field: {name}")

    if name == "url":
        if not isinstance(value, str) or not value:
            raise ConfigurationError("url must be a non-empty string")
        return value

    if name == "method":
        try:
            return HTTPMethod(str(getattr(value, "value", value)).upper())
        except ValueError:
            raise ConfigurationError(f"Unsupported HTTP method: {value}") from None

    if name == "response_type":
        raw = getattr(value, "value", value)
        # camelCase вариант тоже принимаем
        if raw == "arrayBuffer":
            raw = "array_buffer"
        try:
            return ResponseType(raw)
        except ValueError:
            raise ConfigurationError(f"Unsupported response type: {value}") from None

    if name == "headers":
        if not isinstance(value, Mapping):
            raise ConfigurationError("headers must be a mapping")
        return {str(k): str(v) for k, v in value.items()}

    if name == "body":
        return resolve_body(value)

    if name == "timeout_ms":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError("timeout_ms must be a positive integer")
        return value

    if name == "max_retries":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError("max_retries must be a non-negative integer")
        return value

    if name == "retry_delay_ms":
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError("retry_delay_ms must be a positive integer")
        return value

    # fetch_options
    if not isinstance(value, Mapping):
        raise ConfigurationError("fetch_options must be a mapping")
    return dict(value)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# REQUEST CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RequestConfig:
    """
    Эффективная конфигурация запроса.

    Args:
        url: URL запроса (обязателен)
        method: HTTP метод
        headers: Заголовки
        body: Тело запроса (TextBody, BinaryBody, JSONBody или None)
        response_type: Как разбирать тело успешного ответа
        timeout_ms: Таймаут одной попытки (мс)
        max_retries: Максимум повторов (без учёта первой попытки)
        retry_delay_ms: Базовая задержка backoff (мс)
        fetch_options: Дополнительные параметры транспорта

    Examples:
        >>> RequestConfig(url="https://api.example.com/users")
        >>> RequestConfig(url="https://api.example.com", method="post", body={"a": 1})
    """
    url: str
    method: HTTPMethod = HTTPMethod.GET
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[RequestBody] = None
    response_type: ResponseType = ResponseType.JSON
    timeout_ms: Optional[int] = None
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS
    fetch_options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Валидация и нормализация."""
        for name in CONFIG_FIELDS:
            value = normalize_field(name, getattr(self, name))
            if name in ("headers", "fetch_options"):
                value = MappingProxyType(value)
            object.__setattr__(self, name, value)

    def evolve(self, **changes: Any) -> "RequestConfig":
        """
        Вернуть копию с изменёнными полями.

        Examples:
            >>> config.evolve(headers={**config.headers, "X-Signature": "abc"})
        """
        return dataclasses.replace(self, **changes)

    def has_header(self, name: str) -> bool:
        """Проверить наличие заголовка (без учёта регистра)."""
        lowered = name.lower()
        return any(key.lower() == lowered for key in self.headers)


def merge_headers(*layers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Объединить слои заголовков; более поздний слой побеждает.

    Ключи сравниваются без учёта регистра, побеждающий ключ
    сохраняет своё написание.

    Examples:
        >>> merge_headers({"accept": "a", "X-A": "1"}, {"Accept": "b"})
        {'X-A': '1', 'Accept': 'b'}
    """
    merged: Dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            for existing in [k for k in merged if k.lower() == key.lower()]:
                del merged[existing]
            merged[key] = value
    return merged


def merge_config(
    defaults: Mapping[str, Any],
    local: Mapping[str, Any],
) -> RequestConfig:
    """
    Слить локальные поля билдера поверх глобальных настроек.

    Правило:
    - любое поле: локальное значение, иначе глобальное, иначе встроенный default
    - headers: объединение, локальный ключ побеждает
    - JSONBody без Content-Type получает Content-Type: application/json

    Args:
        defaults: Частичная конфигурация из ConfigStore
        local: Явно заданные поля билдера

    Returns:
        RequestConfig

    Raises:
        ConfigurationError: Нет url или невалидное значение
    """
    values: Dict[str, Any] = {}
    for name in CONFIG_FIELDS:
        if name == "headers":
            continue
        if name in local:
            values[name] = local[name]
        elif name in defaults:
            values[name] = defaults[name]

    if "url" not in values:
        raise ConfigurationError("url is required")

    values["headers"] = merge_headers(defaults.get("headers"), local.get("headers"))
    config = RequestConfig(**values)

    if isinstance(config.body, JSONBody) and not config.has_header("Content-Type"):
        config = config.evolve(headers={**config.headers, "Content-Type": "application/json"})

    return config
