"""Config CLI commands for managing settings."""

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from printnode_cli.config import (
    CONFIG_PATH,
    get_settings,
    load_config,
    reset_settings,
    save_config,
)

console = Console()
app = typer.Typer(help="Manage configuration")

# The API key lives in the keyring (printnode login)
CONFIGURABLE_KEYS = {
    "profile": {
        "description": "Keyring profile holding the API key",
        "type": "str",
    },
    "base_url": {
        "description": "PrintNode API base URL",
        "type": "str",
    },
    "timeout": {
        "description": "HTTP timeout in seconds (5-120)",
        "type": "int",
    },
    "connect_retries": {
        "description": "Attempts when the connection fails (1-10)",
        "type": "int",
    },
}


def parse_value(key: str, value: str) -> str | int:
    """Parse string value to appropriate type based on key."""
    if CONFIGURABLE_KEYS[key]["type"] == "int":
        try:
            return int(value)
        except ValueError:
            raise typer.BadParameter(f"'{value}' is not a number")
    return value


def validate_value(key: str, value: str | int) -> None:
    """Validate a config value."""
    if key == "timeout" and not (5 <= value <= 120):
        raise typer.BadParameter("timeout must be between 5 and 120")
    if key == "connect_retries" and not (1 <= value <= 10):
        raise typer.BadParameter("connect_retries must be between 1 and 10")
    if key == "base_url" and not str(value).startswith("https://"):
        raise typer.BadParameter("base_url must start with https://")


@app.command("show")
def config_show():
    """
    Show all settings and where they come from.

    Example:
        printnode config show
    """
    config = load_config()
    settings = get_settings()

    table = Table(title="PrintNode CLI configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")
    table.add_column("Description", style="dim")

    for key, info in CONFIGURABLE_KEYS.items():
        file_value = config.get(key)
        effective_value = getattr(settings, key, None)

        if file_value is not None:
            source = "config.yaml"
            display_value = str(file_value)
        else:
            source = "default/env"
            display_value = str(effective_value)

        table.add_row(key, display_value, source, info["description"])

    console.print(table)
    console.print()
    console.print(f"[dim]Config file: {CONFIG_PATH}[/dim]")


@app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Setting name")],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """
    Set a configuration value.

    Examples:
        printnode config set timeout 60
        printnode config set profile integrator
    """
    if key not in CONFIGURABLE_KEYS:
        console.print(f"[red]Unknown setting:[/red] {key}")
        console.print()
        console.print("[bold]Available settings:[/bold]")
        for k, info in CONFIGURABLE_KEYS.items():
            console.print(f"  [cyan]{k}[/cyan] - {info['description']}")
        raise typer.Exit(1)

    parsed_value = parse_value(key, value)
    validate_value(key, parsed_value)

    config = load_config()
    config[key] = parsed_value
    save_config(config)
    reset_settings()

    console.print(f"[green]✓[/green] {key} = {parsed_value}")


@app.command("path")
def config_path():
    """Show the path of the configuration file."""
    console.print(str(CONFIG_PATH))
