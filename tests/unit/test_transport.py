"""
Tests for HTTPXTransport using respx mocks.
"""

import httpx
import pytest
import respx

from fetch_builder.transport import HTTPXTransport, TransportRequest, TransportResponse


class TestTransportResponse:

    @pytest.mark.parametrize("status,ok", [(200, True), (204, True), (299, True), (301, False), (404, False), (503, False)])
    def test_ok(self, status, ok):
        assert TransportResponse(status_code=status).ok is ok


class TestHTTPXTransport:

    @pytest.mark.asyncio
    @respx.mock
    async def test_perform_get(self, base_url):
        route = respx.get(f"{base_url}/users").mock(
            return_value=httpx.Response(200, content=b'{"users":[]}', headers={"X-Total": "0"})
        )

        async with HTTPXTransport() as transport:
            response = await transport.perform(
                TransportRequest(url=f"{base_url}/users", method="GET", headers={"Accept": "application/json"})
            )

        assert route.called
        assert route.calls.last.request.headers["Accept"] == "application/json"
        assert response.status_code == 200
        assert response.reason_phrase == "OK"
        assert response.headers["x-total"] == "0"
        assert response.content == b'{"users":[]}'

    @pytest.mark.asyncio
    @respx.mock
    async def test_perform_sends_content(self, base_url):
        route = respx.post(f"{base_url}/users").mock(return_value=httpx.Response(201))

        async with HTTPXTransport() as transport:
            response = await transport.perform(
                TransportRequest(
                    url=f"{base_url}/users",
                    method="POST",
                    headers={"Content-Type": "application/json"},
                    content=b'{"name": "alice"}',
                )
            )

        sent = route.calls.last.request
        assert sent.content == b'{"name": "alice"}'
        assert sent.headers["Content-Type"] == "application/json"
        assert response.status_code == 201

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_returned_not_raised(self, base_url):
        respx.get(f"{base_url}/missing").mock(return_value=httpx.Response(404))

        async with HTTPXTransport() as transport:
            response = await transport.perform(TransportRequest(url=f"{base_url}/missing", method="GET"))

        assert response.status_code == 404
        assert response.reason_phrase == "Not Found"
        assert not response.ok

    @pytest.mark.asyncio
    @respx.mock
    async def test_httpx_errors_propagate(self, base_url):
        respx.get(f"{base_url}/down").mock(side_effect=httpx.ConnectError("connection refused"))

        async with HTTPXTransport() as transport:
            with pytest.raises(httpx.ConnectError):
                await transport.perform(TransportRequest(url=f"{base_url}/down", method="GET"))

    @pytest.mark.asyncio
    @respx.mock
    async def test_options_passed_to_client(self, base_url):
        respx.get(f"{base_url}/old").mock(
            return_value=httpx.Response(301, headers={"Location": f"{base_url}/new"})
        )
        respx.get(f"{base_url}/new").mock(return_value=httpx.Response(200, text="moved"))

        async with HTTPXTransport() as transport:
            response = await transport.perform(
                TransportRequest(url=f"{base_url}/old", method="GET", options={"follow_redirects": True})
            )

        assert response.status_code == 200
        assert response.content == b"moved"

    @pytest.mark.asyncio
    async def test_close_owned_client(self):
        transport = HTTPXTransport()
        client = await transport._get_client()

        await transport.close()

        assert client.is_closed
        assert transport._client is None

    @pytest.mark.asyncio
    async def test_external_client_not_closed(self):
        client = httpx.AsyncClient()
        try:
            async with HTTPXTransport(client=client):
                pass

            assert not client.is_closed
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_client_kwargs(self):
        transport = HTTPXTransport(headers={"User-Agent": "fetch-builder-tests"})
        client = await transport._get_client()
        try:
            assert client.headers["User-Agent"] == "fetch-builder-tests"
        finally:
            await transport.close()
