"""Request model shared by the provider, policies and transports."""

from typing import Any

from pydantic import BaseModel, Field

from rpcfailover.utils.constants import DEFAULT_TRANSPORT_TIMEOUT


class RpcRequest(BaseModel):
    """One outgoing RPC request bound to a base address."""

    base_url: str = Field(..., description="Endpoint the request is sent to")
    path: str = Field(..., description="Request route, e.g. /v1/chain/get_info")
    payload: Any = Field(None, description="JSON request body")
    timeout: float = Field(DEFAULT_TRANSPORT_TIMEOUT, description="Request timeout in seconds")

    @property
    def url(self) -> str:
        """Absolute URL of the request."""
        if not self.path:
            return self.base_url
        if self.path.startswith("/"):
            return f"{self.base_url}{self.path}"
        return f"{self.base_url}/{self.path}"

    def bind(self, endpoint: str) -> "RpcRequest":
        """Return a copy of this request targeting another endpoint."""
        return self.model_copy(update={"base_url": endpoint})
