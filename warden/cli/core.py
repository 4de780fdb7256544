"""Shared CLI application context and setup helpers."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from warden import __logo__, __version__

app = typer.Typer(
    name="warden",
    help=f"{__logo__} warden - command verification and dispatch",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"{__logo__} warden v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
) -> None:
    """warden - command verification and dispatch."""


def load_runtime_config(config_path: Path | None):
    """Load config or exit with a readable error."""
    from warden.config.loader import load_config

    try:
        return load_config(config_path)
    except ValueError as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def onboard(
    admin_id: str = typer.Option("", "--admin-id", help="Administrator id (UUID)"),
    admin_name: str = typer.Option("", "--admin-name", help="Administrator display name"),
) -> None:
    """Create the warden configuration file."""
    from warden.config.loader import get_config_path, save_config
    from warden.config.schema import AdministratorConfig, Config

    config_path = get_config_path()

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    config = Config(administrator=AdministratorConfig(id=admin_id, display_name=admin_name))
    save_config(config, config_path)
    console.print(f"[green]✓[/green] Created config at {config_path}")
    if not config.administrator.configured:
        console.print("  Set [cyan]administrator.id[/cyan] to enable admin-only commands for a player.")
