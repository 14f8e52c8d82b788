"""Transports that send one RPC request to one endpoint."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from rpcfailover.models.request import RpcRequest
from rpcfailover.utils.constants import DEFAULT_HEADERS
from rpcfailover.utils.exceptions import MalformedResponseError, NoResponseError, UpstreamError
from rpcfailover.utils.logging import get_logger


class Transport(ABC):
    """Abstract base class for transports."""

    @abstractmethod
    async def send(self, request: RpcRequest) -> Any:
        """Send a request and return the decoded response body.

        Args:
            request: Request bound to an endpoint

        Returns:
            Decoded JSON body

        Raises:
            TransportError: If the attempt failed
        """
        pass

    async def aclose(self) -> None:
        """Release transport resources (optional)."""
        pass


class HttpxTransport(Transport):
    """POSTs JSON requests with an ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        """Initialize transport.

        Args:
            client: Preconfigured client (custom TLS, proxies, test transports)
            headers: Extra headers merged over the JSON defaults
        """
        self.logger = get_logger("rpcfailover.transport")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            headers={**DEFAULT_HEADERS, **(headers or {})}
        )

    async def send(self, request: RpcRequest) -> Any:
        self.logger.debug("sending request", url=request.url, timeout=request.timeout)

        try:
            response = await self.client.post(
                request.url,
                json=request.payload,
                timeout=request.timeout
            )
        except httpx.RequestError as e:
            raise NoResponseError(
                type(e).__name__,
                endpoint=request.base_url,
                message=f"{request.url}: {str(e) or type(e).__name__}"
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                response.text,
                endpoint=request.base_url,
                status_code=response.status_code
            ) from e

        if response.is_error:
            raise UpstreamError(response.status_code, body, endpoint=request.base_url)

        return body

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
