"""Tests for endpoint pool state."""

import pytest

from rpcfailover.core.endpoints import EndpointRegistry
from rpcfailover.core.pool import EndpointPool


ENDPOINTS = ["https://a.example.com", "https://b.example.com", "https://c.example.com"]


@pytest.fixture
def pool() -> EndpointPool:
    return EndpointPool(EndpointRegistry(ENDPOINTS))


class TestEndpointPool:
    """Test pool rotation and reset."""

    def test_initial_state(self, pool):
        assert pool.active == "https://a.example.com"
        assert pool.remaining == ("https://b.example.com", "https://c.example.com")
        assert pool.retries == 0
        assert pool.alternates == 2

    def test_rotate(self, pool):
        """Rotation moves the active endpoint to the back of the queue."""
        new_active = pool.rotate()

        assert new_active == "https://b.example.com"
        assert pool.active == "https://b.example.com"
        assert pool.remaining == ("https://c.example.com", "https://a.example.com")
        assert pool.retries == 1

    def test_full_cycle_returns_to_start(self, pool):
        for _ in range(3):
            pool.rotate()

        assert pool.snapshot() == tuple(ENDPOINTS)
        assert pool.retries == 3

    @pytest.mark.parametrize("rotations", [0, 1, 2, 5, 17])
    def test_permutation_invariant(self, pool, rotations):
        """Active plus remaining always holds every endpoint exactly once."""
        for _ in range(rotations):
            pool.rotate()

        snapshot = pool.snapshot()
        assert len(snapshot) == len(ENDPOINTS)
        assert sorted(snapshot) == sorted(ENDPOINTS)
        assert pool.alternates == len(ENDPOINTS) - 1

    def test_reset_restores_order(self, pool):
        pool.rotate()
        pool.rotate()

        pool.reset()

        assert pool.active == "https://a.example.com"
        assert pool.remaining == ("https://b.example.com", "https://c.example.com")
        assert pool.retries == 0

    def test_mark_success_keeps_order(self, pool):
        """Success clears the counter but leaves the working endpoint active."""
        pool.rotate()

        pool.mark_success()

        assert pool.retries == 0
        assert pool.active == "https://b.example.com"

    def test_rotate_single_endpoint_is_noop(self):
        pool = EndpointPool(EndpointRegistry("https://a.example.com"))

        assert not pool.has_alternates()
        assert pool.rotate() == "https://a.example.com"
        assert pool.retries == 0
        assert pool.remaining == ()
