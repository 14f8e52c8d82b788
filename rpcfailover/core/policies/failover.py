"""Rotating failover policy."""

from rpcfailover.core.classifier import ClassifiedFailure
from rpcfailover.core.policies.base import FailoverDecision, FailoverPolicy, Final, Retry
from rpcfailover.core.pool import EndpointPool
from rpcfailover.utils.constants import MODE_FAILOVER
from rpcfailover.utils.logging import get_logger


class RotatingFailoverPolicy(FailoverPolicy):
    """Cycles through the pool once per failover sequence.

    Every failure rotates the pool and retries on the new active endpoint
    until each alternate has been tried once. The pool is then reset to the
    configured order, so the next request starts again from the first
    endpoint, and the last failure becomes the final result.
    """

    name = MODE_FAILOVER

    def __init__(self):
        self.logger = get_logger("rpcfailover.policy.failover")

    def decide(self, failure: ClassifiedFailure, pool: EndpointPool) -> FailoverDecision:
        """Rotate and retry, or give up once the pool is exhausted.

        Args:
            failure: Classified failure of the last attempt
            pool: Endpoint pool state

        Returns:
            Failover decision
        """
        if pool.has_alternates():
            failed = pool.active
            endpoint = pool.rotate()

            if pool.retries <= pool.alternates:
                self.logger.info(
                    "failing over",
                    from_endpoint=failed,
                    to_endpoint=endpoint,
                    retries=pool.retries,
                    failure=failure.kind.value,
                )
                return Retry(endpoint, failure.request.bind(endpoint))

            self.logger.warning(
                "endpoint pool exhausted",
                retries=pool.retries,
                endpoints=len(pool.registry),
                failure=failure.kind.value,
            )
            pool.reset()

        return Final(failure.final_value())
