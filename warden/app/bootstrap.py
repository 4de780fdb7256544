"""Composition root: config in, wired dispatcher out."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from warden.adapters.directory import InMemoryEntityDirectory
from warden.adapters.transport import RichConsoleTransport
from warden.admin.service import AdministratorService
from warden.commands.builtin import BuiltinCommands
from warden.config.schema import Config
from warden.core.dispatcher import Dispatcher
from warden.core.models import ConsoleSender
from warden.core.ports import MessageSinkPort
from warden.core.registry import CommandRegistry
from warden.core.request import RequestServices
from warden.telemetry.inmemory import InMemoryTelemetry


@dataclass(slots=True)
class WardenRuntime:
    """Everything one command-serving process owns."""

    config: Config
    console: ConsoleSender
    directory: InMemoryEntityDirectory
    sink: MessageSinkPort
    admins: AdministratorService
    registry: CommandRegistry
    dispatcher: Dispatcher
    telemetry: InMemoryTelemetry
    builtins: BuiltinCommands

    def run_line(self, line: str) -> bool:
        """Dispatch one line typed at the console."""
        return self.dispatcher.dispatch_line(self.console, line)


def build_runtime(config: Config, *, sink: MessageSinkPort | None = None) -> WardenRuntime:
    """Wire directory, administrator, registry and dispatcher from ``config``."""
    console = ConsoleSender(display_name=config.console.display_name)
    directory = InMemoryEntityDirectory.from_config(config.directory)
    transport = sink or RichConsoleTransport()
    admins = AdministratorService(
        config=config.administrator,
        directory=directory,
        sink=transport,
        console=console,
    )
    if not config.administrator.configured:
        logger.warning("no administrator configured; admin-only commands are console-only")

    registry = CommandRegistry()
    builtins = BuiltinCommands(
        registry=registry,
        directory=directory,
        sink=transport,
        admins=admins,
        console=console,
    )
    builtins.register()

    telemetry = InMemoryTelemetry()
    services = RequestServices(sink=transport, admins=admins, messages=config.messages)
    dispatcher = Dispatcher(
        registry=registry,
        directory=directory,
        services=services,
        telemetry=telemetry,
    )
    return WardenRuntime(
        config=config,
        console=console,
        directory=directory,
        sink=transport,
        admins=admins,
        registry=registry,
        dispatcher=dispatcher,
        telemetry=telemetry,
        builtins=builtins,
    )
