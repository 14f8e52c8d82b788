"""Fail-fast policy."""

from rpcfailover.core.classifier import ClassifiedFailure
from rpcfailover.core.policies.base import FailoverDecision, FailoverPolicy, Final
from rpcfailover.core.pool import EndpointPool
from rpcfailover.utils.constants import MODE_FAIL_FAST


class FailFastPolicy(FailoverPolicy):
    """Never retries; the first failure is the final result."""

    name = MODE_FAIL_FAST

    def decide(self, failure: ClassifiedFailure, pool: EndpointPool) -> FailoverDecision:
        return Final(failure.final_value())
