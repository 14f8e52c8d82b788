"""Policy registry mapping failover mode names to policy classes."""

from typing import Dict, List, Type

from rpcfailover.core.policies.base import FailoverPolicy
from rpcfailover.core.policies.fail_fast import FailFastPolicy
from rpcfailover.core.policies.failover import RotatingFailoverPolicy
from rpcfailover.utils.exceptions import ConfigError
from rpcfailover.utils.logging import get_logger


class PolicyRegistry:
    """Registry of failover policies by mode name."""

    _policies: Dict[str, Type[FailoverPolicy]] = {}
    _logger = get_logger("rpcfailover.policy.registry")

    @classmethod
    def register(cls, name: str, policy_class: Type[FailoverPolicy]) -> None:
        """Register a policy class.

        Args:
            name: Mode name
            policy_class: Policy class type
        """
        if not issubclass(policy_class, FailoverPolicy):
            raise TypeError(f"{policy_class} must be a subclass of FailoverPolicy")

        cls._policies[name.lower()] = policy_class
        cls._logger.debug("registered policy", mode=name)

    @classmethod
    def create(cls, name: str) -> FailoverPolicy:
        """Create a new policy instance for a mode.

        Args:
            name: Mode name

        Returns:
            Policy instance

        Raises:
            ConfigError: If the mode is not registered
        """
        policy_class = cls._policies.get(name.lower())
        if policy_class is None:
            available = ", ".join(cls._policies.keys())
            raise ConfigError(
                f"Unknown failover mode '{name}'. Available modes: {available}",
                details={"mode": name}
            )
        return policy_class()

    @classmethod
    def list_available(cls) -> List[str]:
        return list(cls._policies.keys())

    @classmethod
    def unregister(cls, name: str) -> None:
        """Unregister a policy (for testing)."""
        cls._policies.pop(name.lower(), None)


PolicyRegistry.register(RotatingFailoverPolicy.name, RotatingFailoverPolicy)
PolicyRegistry.register(FailFastPolicy.name, FailFastPolicy)
