"""Global constants for rpcfailover.

This module defines the default values used throughout the package.
By centralizing constants here, they can be overridden through configuration
and environment variables instead of being hardcoded at call sites.
"""


# ====================
# Timeout Settings (seconds)
# ====================

# Per-request transport timeout
DEFAULT_TRANSPORT_TIMEOUT = 1.0


# ====================
# Retry and Delay Settings
# ====================

# Delay before a failed request is resubmitted to the next endpoint
DEFAULT_RETRY_DELAY = 0.01

# Number of failover events kept for diagnostics
DEFAULT_MAX_EVENTS = 100


# ====================
# Failover Modes
# ====================

MODE_FAILOVER = "failover"
MODE_FAIL_FAST = "fail_fast"

DEFAULT_MODE = MODE_FAILOVER


# ====================
# Synthetic Errors
# ====================

MALFORMED_RESPONSE_MESSAGE = "API server not returning JSON information."

# Code reported when a failure carries no usable transport code
UNKNOWN_FAILURE_CODE = "UNKNOWN"


# ====================
# HTTP Settings
# ====================

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


# ====================
# Environment Variables
# ====================

ENV_PREFIX = "RPCFAILOVER_"

ENV_MAPPINGS = {
    f"{ENV_PREFIX}ENDPOINTS": "endpoints",
    f"{ENV_PREFIX}MODE": "mode",
    f"{ENV_PREFIX}TIMEOUT": "timeout",
    f"{ENV_PREFIX}RETRY_DELAY": "retry_delay",
    f"{ENV_PREFIX}MAX_EVENTS": "max_events",
}
