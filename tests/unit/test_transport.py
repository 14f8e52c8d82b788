"""Tests for the httpx transport."""

import json
import warnings

import httpx
import pytest

from rpcfailover.core.transport import HttpxTransport
from rpcfailover.models.request import RpcRequest
from rpcfailover.utils.exceptions import MalformedResponseError, NoResponseError, UpstreamError


def _transport(handler) -> HttpxTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport(client=client)


class TestRpcRequest:
    """Test request URL building."""

    def test_url_joins_path(self, sample_request):
        assert sample_request.url == "https://a.example.com/v1/chain/get_account"

    def test_url_adds_separator(self):
        request = RpcRequest(base_url="https://a.example.com", path="v1/chain/get_info")
        assert request.url == "https://a.example.com/v1/chain/get_info"

    def test_bind_keeps_everything_but_endpoint(self, sample_request):
        rebound = sample_request.bind("https://b.example.com")

        assert rebound.base_url == "https://b.example.com"
        assert rebound.path == sample_request.path
        assert rebound.payload == sample_request.payload
        assert rebound.timeout == sample_request.timeout
        assert sample_request.base_url == "https://a.example.com"

    def test_bind_emits_no_warnings(self, sample_request):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            rebound = sample_request.bind("https://b.example.com")

        assert rebound.url == "https://b.example.com/v1/chain/get_account"


class TestHttpxTransport:
    """Test HttpxTransport against a mocked HTTP layer."""

    @pytest.mark.asyncio
    async def test_success(self, sample_request, good_body):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=good_body)

        transport = _transport(handler)
        result = await transport.send(sample_request)

        assert result == good_body
        assert seen[0].method == "POST"
        assert str(seen[0].url) == "https://a.example.com/v1/chain/get_account"
        assert json.loads(seen[0].content) == {"account_name": "eosio"}

    @pytest.mark.asyncio
    async def test_timeout_is_applied(self, sample_request, good_body):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.extensions["timeout"])
            return httpx.Response(200, json=good_body)

        await _transport(handler).send(sample_request)

        assert seen[0]["read"] == 1.0
        assert seen[0]["connect"] == 1.0

    @pytest.mark.asyncio
    async def test_error_status_with_json_body(self, sample_request):
        body = {"code": 500, "message": "Internal Service Error", "error": {"name": "name_type_exception"}}
        transport = _transport(lambda request: httpx.Response(500, json=body))

        with pytest.raises(UpstreamError) as exc_info:
            await transport.send(sample_request)

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == body
        assert exc_info.value.endpoint == "https://a.example.com"

    @pytest.mark.asyncio
    async def test_non_json_body(self, sample_request):
        transport = _transport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

        with pytest.raises(MalformedResponseError) as exc_info:
            await transport.send(sample_request)

        assert exc_info.value.raw == "<html>maintenance</html>"
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_error_status_with_html_body(self, sample_request):
        transport = _transport(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(MalformedResponseError) as exc_info:
            await transport.send(sample_request)

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_connection_error(self, sample_request):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NoResponseError) as exc_info:
            await _transport(handler).send(sample_request)

        assert exc_info.value.code == "ConnectError"
        assert exc_info.value.endpoint == "https://a.example.com"

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        transport = HttpxTransport(client=client)

        await transport.aclose()

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_aclose_closes_own_client(self):
        transport = HttpxTransport(headers={"X-Api-Key": "secret"})

        assert transport.client.headers["X-Api-Key"] == "secret"
        assert transport.client.headers["Content-Type"] == "application/json"

        await transport.aclose()

        assert transport.client.is_closed
