"""Retry scheduling."""

import asyncio
from typing import Any, Awaitable, Callable

from rpcfailover.core.policies.base import Retry
from rpcfailover.core.transport import Transport
from rpcfailover.utils.constants import DEFAULT_RETRY_DELAY
from rpcfailover.utils.logging import get_logger


class RetryScheduler:
    """Resubmits a request to the endpoint chosen by the policy."""

    def __init__(
        self,
        transport: Transport,
        delay: float = DEFAULT_RETRY_DELAY,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """Initialize scheduler.

        Args:
            transport: Transport used for resubmission
            delay: Seconds to wait before each retry
            sleep: Sleep coroutine, replaceable for deterministic tests
        """
        self.transport = transport
        self.delay = delay
        self._sleep = sleep
        self.logger = get_logger("rpcfailover.scheduler")

    async def retry(self, decision: Retry) -> Any:
        """Wait ``delay`` seconds, then send the rebound request.

        The result, or the exception, is exactly what a first attempt
        against ``decision.endpoint`` would produce.

        Args:
            decision: Retry decision

        Returns:
            Decoded response body
        """
        await self._sleep(self.delay)
        self.logger.debug("retrying request", endpoint=decision.endpoint, path=decision.request.path)
        return await self.transport.send(decision.request)
