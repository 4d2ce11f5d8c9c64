"""CLI utility functions and decorators."""

from functools import wraps
from typing import Callable, TypeVar

import typer
from rich.console import Console

from printnode_cli.api import PrintNodeClient, PrintNodeError, RequestOptions
from printnode_cli.cli.errors import format_error

console = Console()

F = TypeVar("F", bound=Callable)


def handle_api_errors(f: F) -> F:
    """Decorator to handle PrintNode errors in CLI commands.

    Any PrintNodeError is shown as a formatted panel and the command exits
    with status 1.

    Usage:
        @app.command()
        @handle_api_errors
        def my_command(account_id: int):
            ...
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except PrintNodeError as e:
            format_error(e, console, verbose=bool(kwargs.get("verbose")))
            raise typer.Exit(1)

    return wrapper  # type: ignore


def get_client(api_key: str | None = None) -> PrintNodeClient:
    """Create a client; the transport is opened by its context manager."""
    return PrintNodeClient(api_key=api_key)


def child_options(as_child: int | None) -> RequestOptions | None:
    """Per-call impersonation options for the --as-child flag."""
    if as_child is None:
        return None
    return RequestOptions(child_account_by_id=as_child)
