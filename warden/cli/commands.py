"""CLI commands for warden."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from warden import __logo__
from warden.core.models import Entity

from .core import app, console, load_runtime_config

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Config file (default ~/.warden/config.json)")
AS_OPTION = typer.Option(None, "--as", help="Act as this directory entity instead of the console")


def _resolve_sender(runtime, name: str | None):
    if not name:
        return runtime.console
    entity = runtime.directory.find(name, include_offline=True)
    if entity is None:
        console.print(f"[red]No entity named {name!r} in the directory.[/red]")
        raise typer.Exit(1)
    return entity


def _refresh_sender(runtime, sender):
    """Current directory state of an entity sender; op and deop replace the entity."""
    if isinstance(sender, Entity):
        return runtime.directory.get(sender.id) or sender
    return sender


@app.command("commands")
def list_commands(config_path: Path | None = CONFIG_OPTION) -> None:
    """Show registered commands and their rules."""
    from warden.app.bootstrap import build_runtime

    runtime = build_runtime(load_runtime_config(config_path))

    table = Table(title="Commands")
    table.add_column("Command", style="cyan")
    table.add_column("Aliases")
    table.add_column("Args")
    table.add_column("Access")
    table.add_column("Target")
    table.add_column("Description")

    for entry in runtime.registry:
        rule = entry.rule
        table.add_row(
            entry.usage,
            ", ".join(entry.aliases),
            rule.describe_bounds(),
            rule.access.name,
            rule.target.name if rule.use_target() else "[dim]-[/dim]",
            entry.description,
        )

    console.print(table)


@app.command()
def check(
    line: str = typer.Argument(..., help='Command line, e.g. "kick Steve"'),
    sender_name: str | None = AS_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Verify one command line without running it."""
    from warden.adapters.transport import InMemoryTransport
    from warden.app.bootstrap import build_runtime
    from warden.core.request import Invocation, parse_command_line
    from warden.core.verification import Allowed, Denied, InternalPolicyFault

    runtime = build_runtime(load_runtime_config(config_path), sink=InMemoryTransport())
    sender = _resolve_sender(runtime, sender_name)

    try:
        parsed = parse_command_line(line)
    except ValueError as e:
        console.print(f"[red]Invalid command syntax:[/red] {e}")
        raise typer.Exit(1)
    if parsed is None:
        console.print("[red]Empty command.[/red]")
        raise typer.Exit(1)

    name, args = parsed
    result = runtime.dispatcher.explain(Invocation(sender=sender, command_name=name, args=args))
    if result is None:
        console.print(f"[red]Unknown command '/{name}'.[/red]")
        raise typer.Exit(1)

    entry, verdict = result
    match verdict:
        case Allowed():
            console.print(f"[green]allowed[/green] /{entry.name} for {sender.display_name}")
        case Denied():
            console.print(f"[red]denied[/red] ({verdict.reason.value}): {verdict.message}")
            if verdict.admin_notice:
                console.print(f"  [yellow]admins notified:[/yellow] {verdict.admin_notice}")
            raise typer.Exit(1)
        case InternalPolicyFault():
            console.print(f"[red]internal fault[/red]: unexpected {verdict.policy_kind} {verdict.value!r}")
            raise typer.Exit(2)


@app.command("console")
def console_loop(
    sender_name: str | None = AS_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Interactive command console (Ctrl+C or /stop to exit)."""
    from warden.app.bootstrap import build_runtime

    runtime = build_runtime(load_runtime_config(config_path))
    sender = _resolve_sender(runtime, sender_name)
    console.print(f"{__logo__} Console as {sender.display_name} (Ctrl+C to exit)\n")

    while not runtime.builtins.stop_requested:
        try:
            line = console.input("[bold blue]>[/bold blue] ")
        except (KeyboardInterrupt, EOFError):
            console.print("\nGoodbye!")
            break
        if not line.strip():
            continue
        runtime.dispatcher.dispatch_line(_refresh_sender(runtime, sender), line)
