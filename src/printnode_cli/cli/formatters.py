"""Rich output formatters for CLI display."""

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from printnode_cli.api.models import UNLIMITED, Account


def state_label(account: Account) -> str:
    """Colored state text for an account."""
    if account.is_suspended():
        return "[red]suspended[/red]"
    return "[green]active[/green]"


def format_account_table(accounts: list[Account], console: Console) -> None:
    """Print child accounts as a table."""
    if not accounts:
        console.print("[yellow]No child accounts found.[/yellow]")
        return

    table = Table(title="Child accounts")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Email")
    table.add_column("Creator ref", style="cyan")
    table.add_column("State")
    table.add_column("Credits", justify="right")
    table.add_column("Computers", justify="right")

    for account in accounts:
        credits = account.credits
        table.add_row(
            str(account.id),
            account.email or "-",
            account.creator_ref or "-",
            state_label(account),
            "-" if credits is None else str(credits),
            str(account.num_computers),
        )

    console.print(table)


def format_account_detail(account: Account, console: Console) -> None:
    """Print one account with its tags, API keys and usage."""
    lines = [
        f"[bold]Email:[/bold] {account.email or '-'}",
        f"[bold]State:[/bold] {state_label(account)}",
    ]
    if account.is_child_account():
        lines.append(
            f"[bold]Created by:[/bold] {account.creator_email or '-'}"
            f" [dim](ref: {account.creator_ref or '-'})[/dim]"
        )
    created = account.created_at()
    if created:
        lines.append(f"[bold]Created:[/bold] {created.strftime('%Y-%m-%d %H:%M')}")
    if account.credits is not None:
        lines.append(f"[bold]Credits:[/bold] {account.credits}")

    if account.can_create_sub_accounts():
        remaining = account.remaining_sub_accounts()
        label = "unlimited" if remaining is UNLIMITED else str(remaining)
        lines.append(
            f"[bold]Integrator:[/bold] {account.child_account_count} child accounts, "
            f"{label} remaining"
        )

    summary = account.get_stats_summary()
    lines.append("")
    lines.append(
        "[dim]"
        + " | ".join(f"{name.replace('_', ' ')}: {value}" for name, value in summary.items())
        + "[/dim]"
    )

    if account.tags:
        lines.append("")
        lines.append("[bold]Tags[/bold]")
        for name, value in account.tags.items():
            lines.append(f"  • {name} = {value}")

    if account.has_api_keys():
        lines.append("")
        lines.append("[bold]API keys[/bold]")
        for api_key in account.api_keys:
            lines.append(f"  • {api_key.description or '-'} [dim]{api_key.key or ''}[/dim]")

    console.print(Panel(
        "\n".join(lines),
        title=f"[bold]Account {account.id}[/bold]",
        border_style="blue",
        padding=(1, 2),
    ))


def format_tags(tags: dict[str, Any], console: Console) -> None:
    """Print a tag mapping as a two-column table."""
    if not tags:
        console.print("[yellow]No tags set.[/yellow]")
        return

    table = Table(show_header=True)
    table.add_column("Tag", style="cyan")
    table.add_column("Value")
    for name, value in tags.items():
        table.add_row(name, str(value))
    console.print(table)


def format_stats(stats: dict[str, Any], console: Console) -> None:
    """Print a statistics mapping."""
    table = Table(title="Statistics", show_header=False)
    table.add_column("Counter", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in stats.items():
        table.add_row(str(name).replace("_", " "), str(value))
    console.print(table)
