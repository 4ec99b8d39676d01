"""
Tests for FetchBuilder fluent API.
"""

import pytest
from pydantic import BaseModel

from fetch_builder.builder import FetchBuilder
from fetch_builder.core.config import BinaryBody, HTTPMethod, JSONBody, ResponseType, TextBody
from fetch_builder.core.exceptions import ConfigurationError, HTTPError
from fetch_builder.core.result import Failure, Success


class User(BaseModel):
    name: str
    age: int


class TestSetters:
    """Setters store only explicitly set fields."""

    def test_new_builder_is_empty(self):
        assert FetchBuilder()._config == {}

    def test_setters_are_chainable(self):
        builder = FetchBuilder()
        assert builder.set_url("https://x") is builder
        assert builder.set_method("post") is builder
        assert builder.set_timeout(100) is builder
        assert builder.json() is builder

    def test_values_normalized(self):
        builder = (
            FetchBuilder()
            .set_url("https://x")
            .set_method("patch")
            .set_max_retries(0)
            .set_retry_delay(50)
            .set_timeout(200)
            .set_response_type("arrayBuffer")
        )

        assert builder._config == {
            "url": "https://x",
            "method": HTTPMethod.PATCH,
            "max_retries": 0,
            "retry_delay_ms": 50,
            "timeout_ms": 200,
            "response_type": ResponseType.ARRAY_BUFFER,
        }

    @pytest.mark.parametrize("body,expected", [
        ("text", TextBody("text")),
        (b"\x00", BinaryBody(b"\x00")),
        ({"a": 1}, JSONBody({"a": 1})),
        (User(name="alice", age=30), JSONBody({"name": "alice", "age": 30})),
    ])
    def test_set_body_variants(self, body, expected):
        assert FetchBuilder().set_body(body)._config["body"] == expected

    def test_set_headers_merges(self):
        builder = (
            FetchBuilder()
            .set_headers({"Authorization": "Bearer a", "X-One": "1"})
            .set_headers({"authorization": "Bearer b"})
        )

        assert builder._config["headers"] == {"X-One": "1", "authorization": "Bearer b"}

    def test_last_write_wins(self):
        builder = FetchBuilder().set_url("https://a").set_url("https://b")
        assert builder._config["url"] == "https://b"

    @pytest.mark.parametrize("call", [
        lambda b: b.set_url(""),
        lambda b: b.set_method("TRACE"),
        lambda b: b.set_max_retries(-1),
        lambda b: b.set_retry_delay(0),
        lambda b: b.set_timeout(-5),
        lambda b: b.set_response_type("xml"),
        lambda b: b.set_headers(["not", "a", "mapping"]),
    ])
    def test_invalid_values_rejected(self, call):
        with pytest.raises(ConfigurationError):
            call(FetchBuilder())


class TestResponseModes:

    @pytest.mark.parametrize("mode,response_type,accept", [
        ("json", ResponseType.JSON, "application/json"),
        ("text", ResponseType.TEXT, "text/plain"),
        ("blob", ResponseType.BLOB, "application/octet-stream"),
        ("array_buffer", ResponseType.ARRAY_BUFFER, "application/octet-stream"),
    ])
    def test_mode_sets_accept(self, mode, response_type, accept):
        builder = getattr(FetchBuilder(), mode)()

        assert builder._config["response_type"] is response_type
        assert builder._config["headers"]["Accept"] == accept

    def test_mode_replaces_accept(self):
        builder = FetchBuilder().set_headers({"accept": "*/*"}).text()
        assert builder._config["headers"] == {"Accept": "text/plain"}

    def test_set_response_type_keeps_headers(self):
        builder = FetchBuilder().set_response_type("text")
        assert "headers" not in builder._config


class TestConstructors:

    @pytest.mark.parametrize("name,method", [
        ("get", HTTPMethod.GET),
        ("delete", HTTPMethod.DELETE),
        ("head", HTTPMethod.HEAD),
        ("options", HTTPMethod.OPTIONS),
    ])
    def test_without_body(self, name, method):
        builder = getattr(FetchBuilder, name)("https://x")

        assert builder._config["url"] == "https://x"
        assert builder._config["method"] is method
        assert "body" not in builder._config

    @pytest.mark.parametrize("name,method", [
        ("post", HTTPMethod.POST),
        ("put", HTTPMethod.PUT),
        ("patch", HTTPMethod.PATCH),
    ])
    def test_with_body(self, name, method):
        builder = getattr(FetchBuilder, name)("https://x", {"a": 1})

        assert builder._config["method"] is method
        assert builder._config["body"] == JSONBody({"a": 1})

    def test_post_without_body(self):
        assert FetchBuilder.post("https://x")._config["body"] is None

    def test_constructor_passes_dependencies(self, store, fake_transport, response):
        transport = fake_transport(response(200, {}))
        builder = FetchBuilder.get("https://x", store=store, transport=transport)

        assert builder._executor.store is store


class TestExecute:

    @pytest.mark.asyncio
    async def test_execute_success(self, builder_factory, fake_transport, response):
        transport = fake_transport(response(200, {"id": 7}))

        result = await builder_factory(transport).set_url("https://x/users/7").json().execute()

        assert isinstance(result, Success)
        assert result.value == {"id": 7}
        assert transport.requests[0].headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_result_unpacking(self, builder_factory, fake_transport, response):
        transport = fake_transport(response(200, "pong"))

        error, data = await builder_factory(transport).set_url("https://x/ping").text().execute()

        assert error is None
        assert data == "pong"

    @pytest.mark.asyncio
    async def test_failure_unpacking(self, builder_factory, fake_transport, response):
        transport = fake_transport(response(401, reason="Unauthorized"))

        error, data = await builder_factory(transport).set_url("https://x/me").execute()

        assert isinstance(error, HTTPError)
        assert error.status_code == 401
        assert data is None

    @pytest.mark.asyncio
    async def test_global_defaults_not_shadowed(self, store, builder_factory, fake_transport, response):
        store.set_defaults(method="POST", headers={"X-App": "demo"}, max_retries=0)
        transport = fake_transport(response(500))

        result = await builder_factory(transport).set_url("https://x").execute()

        assert transport.requests[0].method == "POST"
        assert transport.requests[0].headers["X-App"] == "demo"
        assert result.attempts == 1

    @pytest.mark.asyncio
    async def test_builder_reusable(self, builder_factory, fake_transport, response):
        transport = fake_transport(response(200, {}))
        builder = builder_factory(transport).set_url("https://x")

        first = await builder.execute()
        second = await builder.execute()

        assert first.ok and second.ok
        assert transport.calls == 2

    @pytest.mark.asyncio
    async def test_interceptors_registered_through_builder(self, builder_factory, fake_transport, response):
        transport = fake_transport(response(200, {"count": 2}))

        result = await (
            builder_factory(transport)
            .set_url("https://x")
            .add_request_interceptor(lambda c: c.evolve(headers={**c.headers, "X-Key": "k"}))
            .add_response_interceptor(lambda data: data["count"])
            .add_response_interceptor(lambda count: count * 10)
            .execute()
        )

        assert result.value == 20
        assert transport.requests[0].headers["X-Key"] == "k"

    @pytest.mark.asyncio
    async def test_missing_url(self, builder_factory, fake_transport, response):
        transport = fake_transport(response(200, {}))

        result = await builder_factory(transport).execute()

        assert isinstance(result, Failure)
        assert result.attempts == 0
        with pytest.raises(Exception):
            result.unwrap()
