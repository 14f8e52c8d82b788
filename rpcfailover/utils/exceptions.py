"""Exception handling utilities for rpcfailover."""

from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel


class RpcFailoverError(Exception):
    """Base exception for rpcfailover errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
        error_code: Optional[str] = None
    ):
        """Initialize rpcfailover error.

        Args:
            message: Error message
            details: Additional error details
            suggestion: Suggestion for fixing the error
            error_code: Error code for categorization
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion
        self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary.

        Returns:
            Error dictionary representation
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
            "error_code": self.error_code
        }


class ConfigError(RpcFailoverError):
    """Invalid endpoint or provider configuration."""
    pass


class TransportError(RpcFailoverError):
    """A single attempt against one endpoint failed."""

    def __init__(self, message: str, endpoint: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.endpoint = endpoint


class NoResponseError(TransportError):
    """The endpoint never answered (connection refused, DNS failure, timeout)."""

    def __init__(self, code: str, endpoint: Optional[str] = None, message: Optional[str] = None):
        super().__init__(
            message or f"No response from {endpoint or 'endpoint'}: {code}",
            endpoint=endpoint,
            details={"code": code},
            suggestion="Check that the endpoint is reachable",
            error_code=code
        )
        self.code = code


class UpstreamError(TransportError):
    """The endpoint answered with an HTTP error carrying a structured body."""

    def __init__(self, status_code: int, body: Any, endpoint: Optional[str] = None):
        super().__init__(
            f"{endpoint or 'Endpoint'} returned HTTP {status_code}",
            endpoint=endpoint,
            details={"status_code": status_code},
            error_code="UPSTREAM_ERROR"
        )
        self.status_code = status_code
        self.body = body


class MalformedResponseError(TransportError):
    """The endpoint answered but the body is not JSON."""

    def __init__(self, raw: Optional[str] = None, endpoint: Optional[str] = None,
                 status_code: Optional[int] = None):
        super().__init__(
            f"{endpoint or 'Endpoint'} did not return JSON",
            endpoint=endpoint,
            details={"status_code": status_code},
            suggestion="Check that the endpoint is an RPC API server",
            error_code="MALFORMED_RESPONSE"
        )
        self.raw = raw[:500] if raw else raw
        self.status_code = status_code


class ErrorHandler:
    """Centralized error reporting for the command line."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize error handler.

        Args:
            console: Rich console for output
            verbose: Enable verbose error reporting
        """
        self.console = console or Console(stderr=True)
        self.verbose = verbose
        self.error_counts: Dict[str, int] = {}

    def handle_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: Optional[bool] = None
    ) -> None:
        """Handle and display error.

        Args:
            error: Exception to handle
            context: Additional context information
            show_traceback: Whether to show traceback (defaults to verbose setting)
        """
        error_type = type(error).__name__
        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1

        if show_traceback is None:
            show_traceback = self.verbose

        error_content = []
        title = error_type

        if isinstance(error, RpcFailoverError):
            error_content.append(f"[red]{error.message}[/red]")
            if error.details:
                error_content.append("")
                error_content.append("[bold]Details:[/bold]")
                for key, value in error.details.items():
                    error_content.append(f"  {key}: {value}")
            if error.error_code:
                title += f" ({error.error_code})"
        else:
            error_content.append(f"[red]{str(error)}[/red]")

        if context:
            error_content.append("")
            error_content.append("[bold]Context:[/bold]")
            for key, value in context.items():
                error_content.append(f"  {key}: {value}")

        if isinstance(error, RpcFailoverError) and error.suggestion:
            error_content.append("")
            error_content.append(f"[yellow]Suggestion: {error.suggestion}[/yellow]")

        self.console.print(Panel(
            "\n".join(error_content),
            title=title,
            border_style="red"
        ))

        if show_traceback:
            self.console.print("\n[dim]Traceback:[/dim]")
            self.console.print_exception(show_locals=True)

    def get_error_summary(self) -> Dict[str, int]:
        """Get summary of handled errors.

        Returns:
            Dictionary mapping error types to counts
        """
        return self.error_counts.copy()
