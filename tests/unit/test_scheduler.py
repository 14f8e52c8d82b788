"""Tests for retry scheduling."""

import asyncio

import pytest

from rpcfailover.core.policies import Retry
from rpcfailover.core.scheduler import RetryScheduler
from rpcfailover.utils.constants import DEFAULT_RETRY_DELAY
from rpcfailover.utils.exceptions import NoResponseError


class TestRetryScheduler:
    """Test retry scheduler."""

    @pytest.mark.asyncio
    async def test_waits_then_sends(self, make_transport, no_sleep, sample_request, good_body):
        transport = make_transport({"https://b.example.com": good_body})
        scheduler = RetryScheduler(transport, sleep=no_sleep)
        request = sample_request.bind("https://b.example.com")

        result = await scheduler.retry(Retry("https://b.example.com", request))

        assert result == good_body
        no_sleep.assert_awaited_once_with(DEFAULT_RETRY_DELAY)
        assert transport.requests == [request]

    @pytest.mark.asyncio
    async def test_custom_delay(self, make_transport, no_sleep, sample_request, good_body):
        transport = make_transport({"https://a.example.com": good_body})
        scheduler = RetryScheduler(transport, delay=0.25, sleep=no_sleep)

        await scheduler.retry(Retry("https://a.example.com", sample_request))

        no_sleep.assert_awaited_once_with(0.25)

    @pytest.mark.asyncio
    async def test_failure_propagates(self, make_transport, no_sleep, sample_request):
        error = NoResponseError("ConnectError", endpoint="https://a.example.com")
        scheduler = RetryScheduler(make_transport({"https://a.example.com": error}), sleep=no_sleep)

        with pytest.raises(NoResponseError):
            await scheduler.retry(Retry("https://a.example.com", sample_request))

    @pytest.mark.asyncio
    async def test_retry_is_cancellable(self, make_transport, sample_request, good_body):
        """A retry waiting on its delay can be cancelled before it sends."""
        transport = make_transport({"https://a.example.com": good_body})
        scheduler = RetryScheduler(transport, delay=10)

        task = asyncio.ensure_future(scheduler.retry(Retry("https://a.example.com", sample_request)))
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_real_sleep_default(self, make_transport, sample_request, good_body):
        scheduler = RetryScheduler(make_transport({"https://a.example.com": good_body}), delay=0)
        assert await scheduler.retry(Retry("https://a.example.com", sample_request)) == good_body
