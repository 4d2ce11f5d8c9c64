"""User-friendly error messages with actionable suggestions."""

from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel

from printnode_cli.api.exceptions import (
    AuthenticationError,
    DecodeError,
    NotConfiguredError,
    NotFoundError,
    PrintNodeError,
    RateLimitError,
    TransportError,
    ValidationError,
)


@dataclass
class ErrorInfo:
    """Structured error information for display."""

    title: str
    message: str
    suggestion: str
    command: str | None = None


ERROR_MESSAGES = {
    "not_configured": ErrorInfo(
        title="No API key",
        message="No PrintNode API key is configured.",
        suggestion="Store your Integrator API key",
        command="printnode login",
    ),
    "auth_failed": ErrorInfo(
        title="Authentication failed",
        message="PrintNode rejected the API key.",
        suggestion="Check that the key is still valid and store it again",
        command="printnode login",
    ),
    "invalid_input": ErrorInfo(
        title="Invalid input",
        message="{details}",
        suggestion="Correct the value and try again.",
    ),
    "network_error": ErrorInfo(
        title="Network error",
        message="Could not connect to PrintNode.",
        suggestion="Check your internet connection or try again later.",
    ),
    "rate_limit": ErrorInfo(
        title="Too many requests",
        message="PrintNode is rate limiting this API key.",
        suggestion="Wait {retry_after} seconds and try again.",
    ),
    "server_error": ErrorInfo(
        title="PrintNode server error",
        message="The PrintNode API reported an error.",
        suggestion="This is probably temporary. Try again later.",
    ),
    "not_found": ErrorInfo(
        title="Not found",
        message="The requested account or resource does not exist.",
        suggestion="Check the account id, or whether you are acting as the right child account.",
    ),
    "forbidden": ErrorInfo(
        title="Access denied",
        message="This API key may not perform that action.",
        suggestion="Only Integrator accounts can manage child accounts.",
    ),
    "bad_response": ErrorInfo(
        title="Unexpected response",
        message="PrintNode answered with data this client does not understand.",
        suggestion="Run again with --verbose and report the details.",
    ),
    "unknown": ErrorInfo(
        title="Unexpected error",
        message="An unexpected error occurred.",
        suggestion="Run again with --verbose for details.",
    ),
}


def get_error_type(error: Exception) -> str:
    """Determine error type from exception."""
    if isinstance(error, NotConfiguredError):
        return "not_configured"
    elif isinstance(error, ValidationError):
        return "invalid_input"
    elif isinstance(error, AuthenticationError):
        return "auth_failed"
    elif isinstance(error, NotFoundError):
        return "not_found"
    elif isinstance(error, RateLimitError):
        return "rate_limit"
    elif isinstance(error, TransportError):
        return "network_error"
    elif isinstance(error, DecodeError):
        return "bad_response"
    elif isinstance(error, PrintNodeError):
        status = getattr(error, "status_code", None)
        if status == 403:
            return "forbidden"
        elif status and status >= 500:
            return "server_error"

    return "unknown"


def format_error(
    error: Exception,
    console: Console,
    verbose: bool = False,
) -> None:
    """Format and display a user-friendly error message."""
    error_type = get_error_type(error)
    info = ERROR_MESSAGES.get(error_type, ERROR_MESSAGES["unknown"])

    message = info.message.format(details=str(error))
    suggestion = info.suggestion
    if "{retry_after}" in suggestion:
        suggestion = suggestion.format(retry_after=getattr(error, "retry_after", 60))

    content_lines = [
        f"[white]{message}[/white]",
        "",
        f"[yellow]Suggestion:[/yellow] {suggestion}",
    ]

    if info.command:
        content_lines.append("")
        content_lines.append(f"[cyan]{info.command}[/cyan]")

    if verbose:
        content_lines.append("")
        content_lines.append("[dim]" + "-" * 40 + "[/dim]")
        content_lines.append(f"[dim]Type: {type(error).__name__}[/dim]")
        content_lines.append(f"[dim]Details: {error}[/dim]")
        path = getattr(error, "path", None)
        if path:
            content_lines.append(f"[dim]Path: {path}[/dim]")

    console.print()
    console.print(Panel(
        "\n".join(content_lines),
        title=f"[red bold]Error: {info.title}[/red bold]",
        border_style="red",
        padding=(1, 2),
    ))
    console.print()
