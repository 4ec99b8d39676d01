# src/fetch_builder/utils/sanitizer.py
"""
Маскирование чувствительных заголовков перед записью в лог.
"""

import re
from typing import Dict, Mapping, Optional

# Заголовки, значения которых не должны попадать в логи (case-insensitive)
SENSITIVE_HEADERS = {
    'authorization', 'proxy-authorization',
    'cookie', 'set-cookie',
    'x-api-key', 'api-key', 'apikey',
    'x-auth-token', 'x-access-token', 'x-csrf-token', 'x-xsrf-token',
}

# Заголовки с такими словами в имени тоже считаем чувствительными
_SENSITIVE_NAME_PATTERN = re.compile(r'(token|secret|password|signature)', re.IGNORECASE)

MASK = "***REDACTED***"


def is_sensitive_header(name: str) -> bool:
    """
    Проверить, нужно ли маскировать заголовок.

    Examples:
        >>> is_sensitive_header("Authorization")
        True
        >>> is_sensitive_header("X-Request-Signature")
        True
        >>> is_sensitive_header("Accept")
        False
    """
    return name.lower() in SENSITIVE_HEADERS or bool(_SENSITIVE_NAME_PATTERN.search(name))


def mask_headers(headers: Optional[Mapping[str, str]], mask: str = MASK) -> Dict[str, str]:
    """
    Вернуть копию заголовков с замаскированными чувствительными значениями.

    Examples:
        >>> mask_headers({"Authorization": "Bearer secret", "Accept": "application/json"})
        {'Authorization': '***REDACTED***', 'Accept': 'application/json'}
    """
    if not headers:
        return {}
    return {
        name: mask if is_sensitive_header(name) else value
        for name, value in headers.items()
    }
