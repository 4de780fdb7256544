"""One command invocation and the helpers that build it."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field

from warden.config.schema import MessagesConfig
from warden.core.models import ConsoleSender, Entity, ResolvedTarget, Sender
from warden.core.policies import TargetPolicy
from warden.core.ports import AdministratorPort, EntityDirectoryPort, MessageSinkPort
from warden.core.rules import CommandRule


@dataclass(frozen=True, slots=True, kw_only=True)
class Invocation:
    """Raw command line as handed over by the transport."""

    sender: Sender
    command_name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class RequestServices:
    """Collaborators a request uses for its side effects."""

    sink: MessageSinkPort
    admins: AdministratorPort
    messages: MessagesConfig = field(default_factory=MessagesConfig)


@dataclass(frozen=True, slots=True, kw_only=True)
class CommandRequest:
    """Context of a single invocation, immutable once built.

    Sending diagnostics goes through ``services`` and never changes the
    request itself, so evaluating the same request twice is repeatable.
    """

    sender: Sender
    command_name: str
    args: tuple[str, ...]
    target: ResolvedTarget | None = None
    target_index: int = 0
    services: RequestServices = field(repr=False, compare=False)

    # ── Sender ───────────────────────────────────────────────────────

    @property
    def is_from_console(self) -> bool:
        return isinstance(self.sender, ConsoleSender)

    @property
    def is_from_entity(self) -> bool:
        return isinstance(self.sender, Entity)

    @property
    def sender_entity(self) -> Entity | None:
        return self.sender if isinstance(self.sender, Entity) else None

    @property
    def is_from_privileged(self) -> bool:
        """Console, or an entity carrying the privilege flag."""
        return self.is_from_console or (self.sender_entity is not None and self.sender_entity.privileged)

    @property
    def is_from_admin(self) -> bool:
        entity = self.sender_entity
        return entity is not None and self.services.admins.is_admin(entity)

    # ── Target ───────────────────────────────────────────────────────

    @property
    def target_supplied(self) -> bool:
        """An argument sits at the target position."""
        return len(self.args) > self.target_index

    @property
    def given_target(self) -> str | None:
        return self.args[self.target_index] if self.target_supplied else None

    @property
    def has_online_target(self) -> bool:
        return self.target is not None and self.target.online

    @property
    def targets_admin(self) -> bool:
        target = self.target
        if target is None:
            return False
        admins = self.services.admins
        if target.entity is not None and admins.is_admin(target.entity):
            return True
        return admins.is_admin_name(target.name)

    # ── Side effects ─────────────────────────────────────────────────

    @property
    def messages(self) -> MessagesConfig:
        return self.services.messages

    def format(self, template: str, **extra: str) -> str:
        """Fill a diagnostic template with this request's names."""
        values = {
            "sender": self.sender.display_name,
            "command": self.command_name,
            "target": self.given_target or "",
        }
        values.update(extra)
        return template.format(**values)

    def send_message(self, text: str) -> None:
        self.services.sink.send(self.sender, text)

    def send_error(self, text: str) -> None:
        self.services.sink.send(self.sender, text, error=True)

    def report_to_admins(self, text: str) -> None:
        self.services.admins.broadcast_admins(text)


def parse_command_line(line: str) -> tuple[str, tuple[str, ...]] | None:
    """Split ``[/]name arg1 arg2 ...`` into a lowercased name and its arguments.

    Returns ``None`` for blank input. Raises ``ValueError`` on unbalanced quotes.
    """
    compact = line.strip()
    if compact.startswith("/"):
        compact = compact[1:].strip()
    if not compact:
        return None
    tokens = shlex.split(compact)
    if not tokens:
        return None
    return tokens[0].strip().lower(), tuple(tokens[1:])


def resolve_target(
    rule: CommandRule,
    args: tuple[str, ...],
    directory: EntityDirectoryPort,
) -> ResolvedTarget | None:
    """Look up the target argument the way the rule's policy permits."""
    if not rule.use_target() or len(args) <= rule.target_index:
        return None
    name = args[rule.target_index]
    if rule.target is TargetPolicy.ALLOW_OFFLINE:
        entity = directory.find(name, include_offline=True)
        online = entity is not None and directory.is_online(entity.id)
        return ResolvedTarget(name=name, entity=entity, online=online)
    entity = directory.find(name)
    return ResolvedTarget(name=name, entity=entity, online=entity is not None)


def build_request(
    invocation: Invocation,
    rule: CommandRule,
    *,
    directory: EntityDirectoryPort,
    services: RequestServices,
) -> CommandRequest:
    """Turn a raw invocation into a request, resolving its target when the rule uses one."""
    return CommandRequest(
        sender=invocation.sender,
        command_name=invocation.command_name,
        args=tuple(invocation.args),
        target=resolve_target(rule, tuple(invocation.args), directory),
        target_index=rule.target_index,
        services=services,
    )
