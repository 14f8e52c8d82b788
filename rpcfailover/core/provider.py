"""Failover provider: the public entry point for RPC calls."""

import asyncio
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional, Tuple, Type, Union

from rpcfailover.core.classifier import ClassifiedFailure, FailureClassifier
from rpcfailover.core.endpoints import EndpointRegistry, EndpointSource
from rpcfailover.core.policies import FailoverDecision, FailoverPolicy, Final, PolicyRegistry, Retry
from rpcfailover.core.pool import EndpointPool
from rpcfailover.core.scheduler import RetryScheduler
from rpcfailover.core.transport import HttpxTransport, Transport
from rpcfailover.models.config import FailoverConfig
from rpcfailover.models.events import FailoverEvent
from rpcfailover.models.request import RpcRequest
from rpcfailover.utils.constants import (
    DEFAULT_MAX_EVENTS,
    DEFAULT_MODE,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TRANSPORT_TIMEOUT,
)
from rpcfailover.utils.exceptions import ConfigError
from rpcfailover.utils.logging import get_logger


PolicySource = Union[FailoverPolicy, Type[FailoverPolicy], str, None]
TransportSource = Union[Transport, Callable[[], Transport], None]


class FailoverProvider:
    """Sends RPC requests to a pool of equivalent endpoints.

    A failed request is classified, handed to the failover policy and, when
    the policy says so, resubmitted to the next endpoint after a short delay.
    This repeats until a request succeeds or the policy returns a final
    value.

    Note that ``call`` resolves with a structured error body instead of
    raising when every endpoint failed: an upstream error body is returned
    verbatim, otherwise a synthetic ``{"error": {...}}`` object.
    """

    def __init__(
        self,
        endpoints: EndpointSource,
        *,
        transport: TransportSource = None,
        policy: PolicySource = None,
        mode: str = DEFAULT_MODE,
        timeout: float = DEFAULT_TRANSPORT_TIMEOUT,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        max_events: int = DEFAULT_MAX_EVENTS,
        headers: Optional[Dict[str, str]] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """Initialize provider.

        Args:
            endpoints: One base address or an ordered list of base addresses
            transport: Transport instance or a zero-argument factory returning one;
                an ``HttpxTransport`` is created when omitted
            policy: Policy instance, policy class or mode name; overrides ``mode``
            mode: Registered failover mode used when no policy is given
            timeout: Per-request timeout in seconds
            retry_delay: Seconds to wait before each retry
            max_events: Number of failover events kept for diagnostics
            headers: Extra HTTP headers for the default transport
            sleep: Sleep coroutine used between retries

        Raises:
            ConfigError: If the endpoints or options are invalid
        """
        if timeout <= 0:
            raise ConfigError("timeout must be positive", details={"timeout": timeout})
        if retry_delay < 0:
            raise ConfigError("retry_delay cannot be negative", details={"retry_delay": retry_delay})

        self.registry = EndpointRegistry(endpoints)
        self.pool = EndpointPool(self.registry)
        self.policy = self._resolve_policy(policy, mode)
        self.timeout = timeout

        # Transports built here, directly or through a factory, are closed by aclose()
        self.transport, self._owns_transport = self._resolve_transport(transport, headers)
        self.classifier = FailureClassifier()
        self.scheduler = RetryScheduler(self.transport, delay=retry_delay, sleep=sleep)

        # One failover sequence at a time; successful first attempts skip it
        self._failover_lock = asyncio.Lock()
        self._events: Deque[FailoverEvent] = deque(maxlen=max_events)
        self.logger = get_logger("rpcfailover.provider")

    @classmethod
    def from_config(cls, config: FailoverConfig, **kwargs) -> "FailoverProvider":
        """Create a provider from configuration.

        Args:
            config: Failover configuration
            **kwargs: Extra constructor arguments (transport, policy, sleep)

        Returns:
            Provider instance
        """
        return cls(
            config.endpoints,
            mode=config.mode,
            timeout=config.timeout,
            retry_delay=config.retry_delay,
            max_events=config.max_events,
            headers=config.headers,
            **kwargs
        )

    @staticmethod
    def _resolve_transport(
        transport: TransportSource,
        headers: Optional[Dict[str, str]]
    ) -> Tuple[Transport, bool]:
        """Return the transport and whether this provider owns it."""
        if transport is None:
            return HttpxTransport(headers=headers), True

        owned = False
        # A class or a plain function is a factory
        if callable(transport) and (isinstance(transport, type) or not hasattr(transport, "send")):
            transport = transport()
            owned = True

        if not callable(getattr(transport, "send", None)):
            raise ConfigError(
                f"Transport {transport!r} does not implement send(request)",
                suggestion="Subclass rpcfailover.core.transport.Transport"
            )
        return transport, owned

    @staticmethod
    def _resolve_policy(policy: PolicySource, mode: str) -> FailoverPolicy:
        if policy is None:
            return PolicyRegistry.create(mode)
        if isinstance(policy, str):
            return PolicyRegistry.create(policy)
        if isinstance(policy, type):
            policy = policy()
        if not callable(getattr(policy, "decide", None)):
            raise ConfigError(
                f"Policy {policy!r} does not implement decide(failure, pool)",
                suggestion="Subclass rpcfailover.core.policies.FailoverPolicy"
            )
        return policy

    @property
    def endpoints(self) -> Tuple[str, ...]:
        """All endpoints in configured order."""
        return self.registry.endpoints

    @property
    def active(self) -> str:
        """Endpoint the next request is sent to."""
        return self.pool.active

    @property
    def remaining(self) -> Tuple[str, ...]:
        """Fallback endpoints in rotation order."""
        return self.pool.remaining

    @property
    def retries(self) -> int:
        """Rotations since the last success or reset."""
        return self.pool.retries

    def get_pool(self) -> List[str]:
        return list(self.pool.remaining)

    def reset_pool(self) -> None:
        """Restore the configured endpoint order."""
        self.pool.reset()
        self.logger.debug("endpoint pool reset", active=self.pool.active)

    async def call(self, path: str, payload: Any = None) -> Any:
        """Send a request, failing over to other endpoints on error.

        Args:
            path: Request route
            payload: JSON request body

        Returns:
            Decoded response body on success; the upstream error body or a
            synthetic error object when failover could not recover
        """
        request = RpcRequest(
            base_url=self.pool.active,
            path=path,
            payload=payload,
            timeout=self.timeout
        )

        try:
            body = await self.transport.send(request)
        except Exception as e:
            return await self._failover(request, e)

        return self._succeed(body)

    async def _failover(self, request: RpcRequest, error: Exception) -> Any:
        async with self._failover_lock:
            try:
                return await self._run_failover(request, error)
            except BaseException:
                # Cancelled or aborted mid-sequence: the next sequence must start from a clean pool
                self.pool.reset()
                self.logger.warning("failover interrupted", path=request.path, active=self.pool.active)
                raise

    async def _run_failover(self, request: RpcRequest, error: Exception) -> Any:
        if request.base_url != self.pool.active:
            # Another failover sequence moved the pool while this request was in flight
            request = request.bind(self.pool.active)
            try:
                body = await self.transport.send(request)
            except Exception as e:
                error = e
            else:
                return self._succeed(body, recovered=True)

        while True:
            failure = self.classifier.classify(error, request)
            decision = self._decide(failure)
            self._record_event(failure, decision)

            if isinstance(decision, Final):
                self.logger.warning(
                    "request failed",
                    path=request.path,
                    endpoint=request.base_url,
                    failure=failure.kind.value,
                )
                return decision.value

            request = decision.request
            try:
                body = await self.scheduler.retry(decision)
            except Exception as e:
                error = e
                continue

            self.logger.info("request recovered", path=request.path, endpoint=request.base_url)
            return self._succeed(body, recovered=True)

    def _decide(self, failure: ClassifiedFailure) -> FailoverDecision:
        try:
            return self.policy.decide(failure, self.pool)
        except Exception as e:
            self.logger.error(
                "error during failover",
                policy=type(self.policy).__name__,
                error=str(e),
                exc_info=True,
            )
            # The policy may have rotated before failing
            self.pool.reset()
            return Final(failure.final_value())

    def _succeed(self, body: Any, recovered: bool = False) -> Any:
        # A failover sequence in progress owns the retry counter until it ends
        if recovered or not self._failover_lock.locked():
            self.pool.mark_success()
        on_response = getattr(self.policy, "on_response", None)
        if on_response is None:
            return body
        return on_response(body)

    def _record_event(self, failure: ClassifiedFailure, decision: FailoverDecision) -> None:
        self._events.append(FailoverEvent(
            path=failure.request.path,
            from_endpoint=failure.request.base_url,
            to_endpoint=decision.endpoint if isinstance(decision, Retry) else None,
            failure_kind=failure.kind.value,
            retries=self.pool.retries,
            final=isinstance(decision, Final),
        ))

    def get_recent_events(self, limit: int = 50) -> List[FailoverEvent]:
        """Most recent failover decisions, oldest first.

        Args:
            limit: Maximum number of events

        Returns:
            List of events
        """
        if limit <= 0:
            return []
        return list(self._events)[-limit:]

    async def aclose(self) -> None:
        """Close the transport if this provider created it."""
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "FailoverProvider":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()
