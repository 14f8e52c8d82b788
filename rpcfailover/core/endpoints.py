"""Endpoint normalization and the immutable endpoint registry."""

from typing import Iterator, Sequence, Tuple, Union

from rpcfailover.utils.exceptions import ConfigError


EndpointSource = Union[str, Sequence[str]]


def normalize_endpoint(address: str) -> str:
    """Normalize one endpoint base address.

    Surrounding whitespace is removed and a single trailing ``/`` is stripped,
    along with any whitespace it leaves behind. An address that still ends in
    ``/`` after that (``https://a.example.com//``) is rejected rather than
    stripped further, so every accepted address is returned unchanged when
    normalized again.

    Args:
        address: Raw base address

    Returns:
        Normalized address

    Raises:
        ConfigError: If the address is not a string, is blank or ends in
            repeated separators
    """
    if not isinstance(address, str):
        raise ConfigError(
            f"Endpoint must be a string, got {type(address).__name__}",
            details={"endpoint": repr(address)}
        )

    endpoint = address.strip()
    if endpoint.endswith("/"):
        endpoint = endpoint[:-1].rstrip()

    if not endpoint:
        raise ConfigError(
            "Endpoint address cannot be empty",
            details={"endpoint": repr(address)},
            suggestion="Provide a base address such as https://api.example.com"
        )
    if endpoint.endswith("/"):
        raise ConfigError(
            "Endpoint address ends with more than one path separator",
            details={"endpoint": repr(address)},
            suggestion=f"Use {endpoint.rstrip('/')} instead"
        )
    return endpoint


class EndpointRegistry:
    """Ordered, immutable list of the configured endpoints."""

    def __init__(self, addresses: EndpointSource):
        """Initialize registry.

        Args:
            addresses: One address or an ordered sequence of addresses

        Raises:
            ConfigError: If no endpoint is given or an address is blank
        """
        if isinstance(addresses, str):
            addresses = [addresses]

        self._endpoints: Tuple[str, ...] = tuple(
            normalize_endpoint(address) for address in addresses
        )
        if not self._endpoints:
            raise ConfigError(
                "At least one endpoint is required",
                suggestion="Pass endpoints or set RPCFAILOVER_ENDPOINTS"
            )

    @property
    def endpoints(self) -> Tuple[str, ...]:
        return self._endpoints

    @property
    def primary(self) -> str:
        """Endpoint used first and after every reset."""
        return self._endpoints[0]

    @property
    def fallbacks(self) -> Tuple[str, ...]:
        """Endpoints queued behind the primary, in configured order."""
        return self._endpoints[1:]

    def __len__(self) -> int:
        return len(self._endpoints)

    def __iter__(self) -> Iterator[str]:
        return iter(self._endpoints)

    def __contains__(self, endpoint: object) -> bool:
        return endpoint in self._endpoints

    def __repr__(self) -> str:
        return f"EndpointRegistry({list(self._endpoints)!r})"
