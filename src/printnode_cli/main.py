"""Main CLI entry point for PrintNode CLI."""

import logging
from typing import Annotated

import typer
from rich.console import Console

from printnode_cli.auth import clear_api_key, store_api_key
from printnode_cli.cli.commands import accounts, config
from printnode_cli.cli.formatters import format_account_detail
from printnode_cli.cli.utils import child_options, get_client, handle_api_errors
from printnode_cli.config import get_settings

console = Console()

app = typer.Typer(
    name="printnode",
    help="Manage PrintNode Integrator and child accounts",
    no_args_is_help=True,
)

app.add_typer(accounts.app, name="accounts", help="Manage child accounts")
app.add_typer(config.app, name="config", help="Manage configuration")


@app.callback()
def main(
    debug: Annotated[bool, typer.Option("--debug", help="Log HTTP requests")] = False,
):
    """PrintNode account management."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@app.command("login")
def login(
    api_key: Annotated[
        str,
        typer.Option("--api-key", prompt=True, hide_input=True, help="Integrator API key"),
    ],
    profile: Annotated[str | None, typer.Option("--profile", help="Keyring profile")] = None,
):
    """Store an API key in the OS keyring."""
    profile = profile or get_settings().profile
    store_api_key(api_key, profile)
    console.print(f"[green]API key stored for profile '{profile}'.[/green]")


@app.command("logout")
def logout(
    profile: Annotated[str | None, typer.Option("--profile", help="Keyring profile")] = None,
):
    """Remove the stored API key."""
    profile = profile or get_settings().profile
    if clear_api_key(profile):
        console.print(f"[green]API key removed for profile '{profile}'.[/green]")
    else:
        console.print(f"[yellow]No API key stored for profile '{profile}'.[/yellow]")


@app.command("whoami")
@handle_api_errors
def whoami(
    as_child: Annotated[
        int | None,
        typer.Option("--as-child", help="Show this child account instead"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show error details")] = False,
):
    """Show the account the API key belongs to."""
    with get_client() as client:
        account = client.whoami.check(options=child_options(as_child))

    format_account_detail(account, console)


if __name__ == "__main__":
    app()
