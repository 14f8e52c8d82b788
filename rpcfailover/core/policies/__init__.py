"""Failover policies."""

from rpcfailover.core.policies.base import FailoverDecision, FailoverPolicy, Final, Retry
from rpcfailover.core.policies.failover import RotatingFailoverPolicy
from rpcfailover.core.policies.fail_fast import FailFastPolicy
from rpcfailover.core.policies.registry import PolicyRegistry

__all__ = [
    "FailoverDecision",
    "FailoverPolicy",
    "Final",
    "Retry",
    "RotatingFailoverPolicy",
    "FailFastPolicy",
    "PolicyRegistry",
]
