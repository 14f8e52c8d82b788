"""rpcfailover: a resilient RPC transport that fails over across a pool of equivalent endpoints."""

__version__ = "0.1.0"

from rpcfailover.core.provider import FailoverProvider
from rpcfailover.core.policies import FailFastPolicy, FailoverPolicy, RotatingFailoverPolicy
from rpcfailover.core.transport import HttpxTransport, Transport
from rpcfailover.models.config import FailoverConfig
from rpcfailover.utils.exceptions import ConfigError

__all__ = [
    "__version__",
    "FailoverProvider",
    "FailoverPolicy",
    "RotatingFailoverPolicy",
    "FailFastPolicy",
    "Transport",
    "HttpxTransport",
    "FailoverConfig",
    "ConfigError",
]
