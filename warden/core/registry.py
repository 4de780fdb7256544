"""Command registry: names and aliases mapped to rules and help metadata."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from warden.core.policies import AccessPolicy, TargetPolicy
from warden.core.rules import UNBOUNDED, CommandHandler, CommandRule


@dataclass(frozen=True, slots=True)
class CommandEntry:
    """Static metadata for one registered command."""

    name: str
    rule: CommandRule
    aliases: tuple[str, ...] = ()
    usage: str = ""
    description: str = ""


class CommandRegistry:
    """Explicitly owned table of the commands one dispatcher serves."""

    def __init__(self) -> None:
        self._entries: dict[str, CommandEntry] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        rule: CommandRule,
        *,
        aliases: tuple[str, ...] = (),
        usage: str = "",
        description: str = "",
    ) -> CommandEntry:
        key = self.normalize(name)
        if not key:
            raise ValueError("command name must not be empty")
        alias_keys = tuple(dict.fromkeys(self.normalize(alias) for alias in aliases if self.normalize(alias)))
        for candidate in (key, *alias_keys):
            if candidate in self._entries or candidate in self._aliases:
                raise ValueError(f"command '/{candidate}' is already registered")
        if key in alias_keys:
            raise ValueError(f"command '/{key}' lists itself as an alias")

        entry = CommandEntry(
            name=key,
            rule=rule,
            aliases=alias_keys,
            usage=usage or f"/{key}",
            description=description,
        )
        self._entries[key] = entry
        for alias in alias_keys:
            self._aliases[alias] = key
        return entry

    def register_like(
        self,
        name: str,
        other: str,
        handler: CommandHandler,
        *,
        aliases: tuple[str, ...] = (),
        usage: str = "",
        description: str = "",
    ) -> CommandEntry:
        """Register ``name`` with the constraints of an existing command."""
        base = self.get(other)
        if base is None:
            raise KeyError(f"unknown command '/{other}'")
        return self.register(
            name,
            base.rule.derive(handler),
            aliases=aliases,
            usage=usage,
            description=description,
        )

    def command(
        self,
        name: str,
        *,
        min_args: int = 0,
        max_args: int = UNBOUNDED,
        access: AccessPolicy = AccessPolicy.ANY,
        target: TargetPolicy = TargetPolicy.NONE,
        target_index: int = 0,
        aliases: tuple[str, ...] = (),
        usage: str = "",
        description: str = "",
    ) -> Callable[[CommandHandler], CommandHandler]:
        """Decorator form of :meth:`register`.

        Usage::

            @registry.command("kick", min_args=1, access=AccessPolicy.PRIVILEGED_ONLY,
                              target=TargetPolicy.RESTRICT_ADMIN)
            def kick(request: CommandRequest) -> None:
                ...
        """

        def decorator(handler: CommandHandler) -> CommandHandler:
            rule = CommandRule(
                min_args=min_args,
                max_args=max_args,
                access=access,
                target=target,
                handler=handler,
                target_index=target_index,
            )
            self.register(name, rule, aliases=aliases, usage=usage, description=description)
            return handler

        return decorator

    @staticmethod
    def normalize(name: str) -> str:
        key = (name or "").strip().lower()
        return key[1:] if key.startswith("/") else key

    def resolve_name(self, name: str) -> str | None:
        key = self.normalize(name)
        if key in self._entries:
            return key
        return self._aliases.get(key)

    def get(self, name: str) -> CommandEntry | None:
        key = self.resolve_name(name)
        return self._entries.get(key) if key is not None else None

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._entries))

    def entries(self) -> list[CommandEntry]:
        return [self._entries[name] for name in self.names()]

    def usage_lines(self) -> tuple[str, ...]:
        lines = []
        for entry in self.entries():
            line = entry.usage
            if entry.description:
                line = f"{line} - {entry.description}"
            lines.append(line)
        return tuple(lines)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve_name(name) is not None

    def __iter__(self) -> Iterator[CommandEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self._entries)
