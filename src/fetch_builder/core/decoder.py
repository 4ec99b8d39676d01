"""
Разбор тела успешного ответа по заявленному режиму.
"""

import json
from typing import Any

from .config import ResponseType
from .exceptions import DecodeError


class ResponseDecoder:
    """
    Декодер тела ответа.

    Вызывается только для 2xx ответов: не-2xx статус превращается
    в HTTPError раньше, тело ошибки не разбирается.

    Examples:
        >>> ResponseDecoder.decode(b'{"a": 1}', ResponseType.JSON)
        {'a': 1}
        >>> ResponseDecoder.decode(b"ok", "text")
        'ok'
    """

    @staticmethod
    def decode(content: bytes, response_type: ResponseType) -> Any:
        """
        Разобрать тело.

        Args:
            content: Тело ответа целиком
            response_type: Режим разбора

        Returns:
            dict/list/... для json, str для text, bytes для blob/array_buffer

        Raises:
            DecodeError: Тело не разбирается в этом режиме
        """
        response_type = ResponseType(response_type)

        if response_type is ResponseType.JSON:
            # Пустое тело (204, HEAD) - это отсутствие данных, а не битый JSON
            if not content.strip():
                return None
            try:
                return json.loads(content.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                raise DecodeError(
                    f"Failed to parse response as JSON: {e}",
                    response_type=response_type.value,
                    cause=e,
                ) from e

        if response_type is ResponseType.TEXT:
            try:
                return content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(
                    f"Response body is not valid UTF-8: {e}",
                    response_type=response_type.value,
                    cause=e,
                ) from e

        # blob / array_buffer - сырые байты
        return bytes(content)
