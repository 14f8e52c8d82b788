"""Base class for failover policies."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Union

from rpcfailover.core.classifier import ClassifiedFailure
from rpcfailover.core.pool import EndpointPool
from rpcfailover.models.request import RpcRequest


@dataclass(frozen=True)
class Retry:
    """Resubmit the request to another endpoint."""

    endpoint: str
    request: RpcRequest


@dataclass(frozen=True)
class Final:
    """Stop and hand ``value`` back to the caller."""

    value: Any


FailoverDecision = Union[Retry, Final]


class FailoverPolicy(ABC):
    """Abstract base class for failover policies."""

    name = "base"

    @abstractmethod
    def decide(self, failure: ClassifiedFailure, pool: EndpointPool) -> FailoverDecision:
        """Decide what happens after a failed attempt.

        Args:
            failure: Classified failure of the last attempt
            pool: Endpoint pool state, which the policy may rotate or reset

        Returns:
            ``Retry`` with the endpoint and rebound request, or ``Final``
        """
        pass

    def on_response(self, body: Any) -> Any:
        """Hook applied to every successful response body (optional)."""
        return body
