"""Dispatcher: verify one invocation, then run its handler at most once."""

from __future__ import annotations

from loguru import logger

from warden.core.models import Sender
from warden.core.ports import EntityDirectoryPort, TelemetryPort
from warden.core.registry import CommandEntry, CommandRegistry
from warden.core.request import (
    CommandRequest,
    Invocation,
    RequestServices,
    build_request,
    parse_command_line,
)
from warden.core.verification import Allowed, Denied, InternalPolicyFault, Verdict, evaluate, report_verdict


class Dispatcher:
    """Routes raw invocations through verification to registered handlers.

    Every dispatch reports ``True`` to the transport: once a line reaches
    this dispatcher, the outcome (including denials) is handled here.
    """

    def __init__(
        self,
        *,
        registry: CommandRegistry,
        directory: EntityDirectoryPort,
        services: RequestServices,
        telemetry: TelemetryPort | None = None,
    ) -> None:
        self._registry = registry
        self._directory = directory
        self._services = services
        self._telemetry = telemetry

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    def dispatch(self, invocation: Invocation) -> bool:
        entry = self._registry.get(invocation.command_name)
        if entry is None:
            self._unknown(invocation)
            return True

        request = self._build(invocation, entry)
        verdict = evaluate(request, entry.rule)
        if not report_verdict(verdict, request):
            self._record_failure(entry, verdict)
            return True

        logger.info(
            "/{} by {} args={}",
            entry.name,
            invocation.sender.display_name,
            list(request.args),
        )
        self._metric("command_dispatched", entry.name)
        try:
            entry.rule.handler(request)
        except Exception:
            logger.exception("handler for /{} failed", entry.name)
            request.send_error(self._services.messages.internal_error)
            self._metric("command_handler_error", entry.name)
        return True

    def dispatch_line(self, sender: Sender, line: str) -> bool:
        """Parse ``line`` and dispatch it. Blank lines are ignored."""
        try:
            parsed = parse_command_line(line)
        except ValueError as e:
            self._services.sink.send(
                sender,
                self._services.messages.invalid_syntax.format(error=e),
                error=True,
            )
            return True
        if parsed is None:
            return True
        name, args = parsed
        return self.dispatch(Invocation(sender=sender, command_name=name, args=args))

    def explain(self, invocation: Invocation) -> tuple[CommandEntry, Verdict] | None:
        """Evaluate without side effects; ``None`` for unknown commands."""
        entry = self._registry.get(invocation.command_name)
        if entry is None:
            return None
        return entry, evaluate(self._build(invocation, entry), entry.rule)

    def _build(self, invocation: Invocation, entry: CommandEntry) -> CommandRequest:
        return build_request(
            Invocation(sender=invocation.sender, command_name=entry.name, args=invocation.args),
            entry.rule,
            directory=self._directory,
            services=self._services,
        )

    def _unknown(self, invocation: Invocation) -> None:
        name = CommandRegistry.normalize(invocation.command_name)
        logger.warning("unknown command /{} from {}", name, invocation.sender.display_name)
        self._services.sink.send(
            invocation.sender,
            self._services.messages.unknown_command.format(command=name),
            error=True,
        )
        self._metric("command_unknown", name)

    def _record_failure(self, entry: CommandEntry, verdict: Verdict) -> None:
        match verdict:
            case Denied():
                self._metric("command_denied", entry.name, ("reason", verdict.reason.value))
            case InternalPolicyFault():
                self._metric("command_internal_fault", entry.name)
            case Allowed():
                pass

    def _metric(self, name: str, command: str, *extra: tuple[str, str]) -> None:
        if self._telemetry is None:
            return
        self._telemetry.incr(name, labels=(("command", command), *extra))
