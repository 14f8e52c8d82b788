"""Mutable endpoint pool state."""

from collections import deque
from typing import Deque, Tuple

from rpcfailover.core.endpoints import EndpointRegistry


class EndpointPool:
    """Active endpoint, queue of fallback endpoints and the retry counter.

    ``{active} + remaining`` is always a permutation of the registry:
    rotation only reorders it and ``reset`` restores the configured order.
    """

    def __init__(self, registry: EndpointRegistry):
        """Initialize pool from a registry.

        Args:
            registry: Configured endpoints
        """
        self.registry = registry
        self.active: str = registry.primary
        self._remaining: Deque[str] = deque(registry.fallbacks)
        self.retries = 0

    @property
    def remaining(self) -> Tuple[str, ...]:
        """Fallback endpoints not yet tried, in rotation order."""
        return tuple(self._remaining)

    @property
    def alternates(self) -> int:
        """Number of endpoints a failover sequence may move to."""
        return len(self._remaining)

    def has_alternates(self) -> bool:
        return bool(self._remaining)

    def rotate(self) -> str:
        """Move the active endpoint to the back and promote the next one.

        Returns:
            The new active endpoint
        """
        if not self._remaining:
            return self.active

        self._remaining.append(self.active)
        self.active = self._remaining.popleft()
        self.retries += 1
        return self.active

    def reset(self) -> None:
        """Restore the configured order and clear the retry counter."""
        self.active = self.registry.primary
        self._remaining = deque(self.registry.fallbacks)
        self.retries = 0

    def mark_success(self) -> None:
        """Clear the retry counter after a successful response."""
        self.retries = 0

    def snapshot(self) -> Tuple[str, ...]:
        """Active endpoint followed by the remaining queue."""
        return (self.active, *self._remaining)

    def __repr__(self) -> str:
        return (
            f"EndpointPool(active={self.active!r}, "
            f"remaining={list(self._remaining)!r}, retries={self.retries})"
        )
