"""Classification of failed transport attempts."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx

from rpcfailover.models.request import RpcRequest
from rpcfailover.utils.constants import MALFORMED_RESPONSE_MESSAGE, UNKNOWN_FAILURE_CODE
from rpcfailover.utils.exceptions import MalformedResponseError, NoResponseError, UpstreamError
from rpcfailover.utils.logging import get_logger


class FailureKind(str, Enum):
    """What a failed attempt left us with."""

    WITH_RESPONSE = "with_response"
    NO_RESPONSE = "no_response"
    MALFORMED_BODY = "malformed_body"


@dataclass(frozen=True)
class ClassifiedFailure:
    """A failed attempt together with the request that produced it."""

    kind: FailureKind
    request: RpcRequest
    error: BaseException
    body: Any = None
    code: Optional[str] = None

    def final_value(self) -> Any:
        """Value returned to the caller when no retry recovers the request.

        Upstream bodies are returned verbatim, other failures get a minimal
        synthetic error object.
        """
        if self.kind is FailureKind.WITH_RESPONSE:
            return self.body
        if self.kind is FailureKind.MALFORMED_BODY:
            return {"error": {"message": MALFORMED_RESPONSE_MESSAGE}}
        return {"error": {"what": self.code or UNKNOWN_FAILURE_CODE}}


class FailureClassifier:
    """Sorts transport failures into response, no-response and malformed body."""

    def __init__(self):
        self.logger = get_logger("rpcfailover.classifier")

    def classify(self, error: BaseException, request: RpcRequest) -> ClassifiedFailure:
        """Classify a failed attempt. Never raises.

        Args:
            error: Exception raised by the transport
            request: Request that failed

        Returns:
            Classified failure
        """
        try:
            return self._classify(error, request)
        except Exception as e:
            self.logger.warning(
                "failure classification failed",
                endpoint=request.base_url,
                error_type=type(error).__name__,
                classification_error=str(e),
            )
            if getattr(error, "response", None) is not None:
                return ClassifiedFailure(FailureKind.MALFORMED_BODY, request, error)
            return ClassifiedFailure(
                FailureKind.NO_RESPONSE, request, error, code=UNKNOWN_FAILURE_CODE
            )

    def _classify(self, error: BaseException, request: RpcRequest) -> ClassifiedFailure:
        if isinstance(error, UpstreamError):
            return ClassifiedFailure(FailureKind.WITH_RESPONSE, request, error, body=error.body)

        if isinstance(error, MalformedResponseError):
            return ClassifiedFailure(FailureKind.MALFORMED_BODY, request, error)

        if isinstance(error, NoResponseError):
            return ClassifiedFailure(FailureKind.NO_RESPONSE, request, error, code=error.code)

        # Raw httpx errors from injected transports
        if isinstance(error, httpx.HTTPStatusError):
            try:
                body = error.response.json()
            except ValueError:
                return ClassifiedFailure(FailureKind.MALFORMED_BODY, request, error)
            return ClassifiedFailure(FailureKind.WITH_RESPONSE, request, error, body=body)

        if isinstance(error, httpx.RequestError):
            return ClassifiedFailure(
                FailureKind.NO_RESPONSE, request, error, code=type(error).__name__
            )

        code = getattr(error, "code", None)
        return ClassifiedFailure(
            FailureKind.NO_RESPONSE,
            request,
            error,
            code=str(code) if code is not None else type(error).__name__,
        )
