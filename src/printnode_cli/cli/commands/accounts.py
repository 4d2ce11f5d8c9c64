"""Child account CLI commands."""

from typing import Annotated

import typer
from rich.console import Console

from printnode_cli.api import AccountRequestBuilder
from printnode_cli.cli.formatters import (
    format_account_detail,
    format_account_table,
    format_stats,
    format_tags,
)
from printnode_cli.cli.utils import child_options, get_client, handle_api_errors

console = Console()
app = typer.Typer(help="Manage child accounts")

AsChild = Annotated[
    int | None,
    typer.Option("--as-child", help="Act as this child account for this call only"),
]
Verbose = Annotated[bool, typer.Option("--verbose", "-v", help="Show error details")]


@app.command("list")
@handle_api_errors
def list_accounts(as_child: AsChild = None, verbose: Verbose = False):
    """
    List all child accounts.

    Example:
        printnode accounts list
    """
    with get_client() as client:
        accounts = client.accounts.all(options=child_options(as_child))

    format_account_table(accounts, console)


@app.command("show")
@handle_api_errors
def show_account(
    account_id: Annotated[int, typer.Argument(help="Account id")],
    as_child: AsChild = None,
    verbose: Verbose = False,
):
    """Show one child account."""
    with get_client() as client:
        account = client.accounts.retrieve(account_id, options=child_options(as_child))

    format_account_detail(account, console)


@app.command("create")
@handle_api_errors
def create_account(
    email: Annotated[str, typer.Option("--email", "-e", help="Login email of the new account")],
    password: Annotated[
        str,
        typer.Option("--password", "-p", prompt=True, hide_input=True, help="At least 8 characters"),
    ],
    creator_ref: Annotated[
        str | None,
        typer.Option("--ref", "-r", help="Your own unique reference for the account"),
    ] = None,
    api_key: Annotated[
        list[str] | None,
        typer.Option("--api-key", "-k", help="Generate an API key with this description (repeatable)"),
    ] = None,
    tag: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Tag as NAME=VALUE (repeatable)"),
    ] = None,
    as_child: AsChild = None,
    verbose: Verbose = False,
):
    """
    Create a child account.

    Examples:
        printnode accounts create --email customer@example.com --ref customer-123
        printnode accounts create -e c@example.com -k production -t plan=premium
    """
    builder = AccountRequestBuilder().email(email).password(password)
    if creator_ref:
        builder.creator_ref(creator_ref)
    for description in api_key or []:
        builder.add_api_key(description)
    for item in tag or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            console.print(f"[red]Invalid tag '{item}', expected NAME=VALUE[/red]")
            raise typer.Exit(1)
        builder.add_tag(name, value)

    with get_client() as client:
        account = client.accounts.create(builder, options=child_options(as_child))

    console.print(f"[green]Created account {account.id}[/green]")
    format_account_detail(account, console)


@app.command("suspend")
@handle_api_errors
def suspend_account(
    account_id: Annotated[int, typer.Argument(help="Account id")],
    as_child: AsChild = None,
    verbose: Verbose = False,
):
    """Suspend a child account."""
    with get_client() as client:
        account = client.accounts.suspend(account_id, options=child_options(as_child))

    if account.is_suspended():
        console.print(f"[yellow]Account {account_id} is suspended.[/yellow]")
    else:
        console.print(f"[red]Account {account_id} is still {account.state}.[/red]")
        raise typer.Exit(1)


@app.command("activate")
@handle_api_errors
def activate_account(
    account_id: Annotated[int, typer.Argument(help="Account id")],
    as_child: AsChild = None,
    verbose: Verbose = False,
):
    """Reactivate a suspended child account."""
    with get_client() as client:
        account = client.accounts.activate(account_id, options=child_options(as_child))

    if account.is_active():
        console.print(f"[green]Account {account_id} is active.[/green]")
    else:
        console.print(f"[red]Account {account_id} is still {account.state}.[/red]")
        raise typer.Exit(1)


@app.command("delete")
@handle_api_errors
def delete_accounts(
    account_ids: Annotated[list[int], typer.Argument(help="One or more account ids")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
    as_child: AsChild = None,
    verbose: Verbose = False,
):
    """Delete one or more child accounts."""
    ids = ", ".join(str(i) for i in account_ids)
    if not yes and not typer.confirm(f"Delete account(s) {ids}?"):
        raise typer.Abort()

    with get_client() as client:
        deleted = client.accounts.delete_many(account_ids, options=child_options(as_child))

    if deleted:
        console.print(f"[green]Deleted: {', '.join(str(i) for i in deleted)}[/green]")
    missing = [i for i in account_ids if str(i) not in {str(d) for d in deleted}]
    if missing:
        console.print(f"[yellow]Not deleted: {', '.join(str(i) for i in missing)}[/yellow]")


@app.command("tags")
@handle_api_errors
def show_tags(
    account_id: Annotated[int, typer.Argument(help="Account id")],
    as_child: AsChild = None,
    verbose: Verbose = False,
):
    """Show the tags of a child account."""
    with get_client() as client:
        tags = client.accounts.tags(account_id, options=child_options(as_child))

    format_tags(tags, console)


@app.command("add-tag")
@handle_api_errors
def add_tag(
    account_id: Annotated[int, typer.Argument(help="Account id")],
    name: Annotated[str, typer.Argument(help="Tag name")],
    value: Annotated[str, typer.Argument(help="Tag value")],
    as_child: AsChild = None,
    verbose: Verbose = False,
):
    """Add or overwrite one tag on a child account."""
    with get_client() as client:
        tags = client.accounts.add_tags(account_id, {name: value}, options=child_options(as_child))

    format_tags(tags, console)


@app.command("stats")
@handle_api_errors
def show_stats(
    account_id: Annotated[int | None, typer.Argument(help="Account id (all accounts if omitted)")] = None,
    as_child: AsChild = None,
    verbose: Verbose = False,
):
    """Show usage statistics."""
    with get_client() as client:
        stats = client.accounts.stats(account_id, options=child_options(as_child))

    format_stats(stats, console)
