"""Pytest configuration and fixtures."""

import copy
from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest

from rpcfailover.core.transport import Transport
from rpcfailover.models.request import RpcRequest
from rpcfailover.utils.constants import ENV_MAPPINGS
from rpcfailover.utils.exceptions import NoResponseError


class FakeTransport(Transport):
    """Transport double answering per endpoint.

    Each endpoint maps to a body (returned as a copy), an exception instance
    (raised) or a callable taking the request.
    """

    def __init__(self, behaviors: Dict[str, Any]):
        self.behaviors = behaviors
        self.requests: List[RpcRequest] = []
        self.closed = False

    @property
    def called_endpoints(self) -> List[str]:
        return [request.base_url for request in self.requests]

    async def send(self, request: RpcRequest) -> Any:
        self.requests.append(request)
        behavior = self.behaviors.get(request.base_url, NoResponseError("ENOTFOUND", request.base_url))
        if isinstance(behavior, BaseException):
            raise behavior
        if callable(behavior):
            return behavior(request)
        return copy.deepcopy(behavior)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def good_body() -> Dict[str, Any]:
    """Body returned by healthy endpoints."""
    return {"account_name": "eosio", "head_block_num": 42}


@pytest.fixture
def no_sleep():
    """Sleep replacement that returns immediately."""
    return AsyncMock(return_value=None)


@pytest.fixture
def sample_request() -> RpcRequest:
    """Request bound to the first test endpoint."""
    return RpcRequest(
        base_url="https://a.example.com",
        path="/v1/chain/get_account",
        payload={"account_name": "eosio"}
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove RPCFAILOVER_* variables from the environment."""
    for key in ENV_MAPPINGS:
        monkeypatch.delenv(key, raising=False)
