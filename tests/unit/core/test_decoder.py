"""Тесты ResponseDecoder."""

import pytest

from fetch_builder.core.config import ResponseType
from fetch_builder.core.decoder import ResponseDecoder
from fetch_builder.core.exceptions import DecodeError


def test_json_object():
    assert ResponseDecoder.decode(b'{"a": 1}', ResponseType.JSON) == {"a": 1}


def test_json_accepts_string_mode():
    assert ResponseDecoder.decode(b"[1, 2]", "json") == [1, 2]


def test_json_empty_body_is_none():
    assert ResponseDecoder.decode(b"", ResponseType.JSON) is None
    assert ResponseDecoder.decode(b"  \n", ResponseType.JSON) is None


@pytest.mark.parametrize("content", [b"{not json", b'{"a": 1} trailing', b"\xff\xfe"])
def test_json_malformed(content):
    with pytest.raises(DecodeError) as exc_info:
        ResponseDecoder.decode(content, ResponseType.JSON)

    assert exc_info.value.response_type == "json"
    assert exc_info.value.retryable is False


def test_text():
    assert ResponseDecoder.decode("привет".encode("utf-8"), ResponseType.TEXT) == "привет"


def test_text_invalid_utf8():
    with pytest.raises(DecodeError):
        ResponseDecoder.decode(b"\xff\xfe\xfd", ResponseType.TEXT)


@pytest.mark.parametrize("mode", [ResponseType.BLOB, ResponseType.ARRAY_BUFFER])
def test_binary_modes_return_raw_bytes(mode):
    content = b"\x00\x01\xff"
    result = ResponseDecoder.decode(content, mode)

    assert result == content
    assert isinstance(result, bytes)


def test_unknown_mode():
    with pytest.raises(ValueError):
        ResponseDecoder.decode(b"", "xml")
