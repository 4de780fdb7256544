"""Built-in server commands, one per policy combination worth exercising."""

from __future__ import annotations

from warden.adapters.directory import InMemoryEntityDirectory
from warden.core.models import ConsoleSender
from warden.core.policies import AccessPolicy, TargetPolicy
from warden.core.ports import AdministratorPort, MessageSinkPort
from warden.core.registry import CommandRegistry
from warden.core.request import CommandRequest
from warden.core.rules import UNBOUNDED


class BuiltinCommands:
    """Handlers for the stock command set.

    Handlers only run after verification, so they may rely on the rule's
    guarantees (argument count, sender class) without re-checking.
    """

    def __init__(
        self,
        *,
        registry: CommandRegistry,
        directory: InMemoryEntityDirectory,
        sink: MessageSinkPort,
        admins: AdministratorPort,
        console: ConsoleSender,
    ) -> None:
        self._registry = registry
        self._directory = directory
        self._sink = sink
        self._admins = admins
        self._console = console
        self.stop_requested = False

    def register(self) -> CommandRegistry:
        r = self._registry
        r.command("help", max_args=1, usage="/help [command]", description="List commands or show one")(self.help)
        r.command("list", max_args=0, aliases=("who", "online"), description="Show online players")(self.list_online)
        r.command(
            "msg",
            min_args=2,
            target=TargetPolicy.ONLINE_ONLY,
            aliases=("tell",),
            usage="/msg <player> <message...>",
            description="Private message an online player",
        )(self.msg)
        r.command(
            "me",
            min_args=1,
            access=AccessPolicy.ENTITY_ONLY,
            usage="/me <action...>",
            description="Emote to everyone online",
        )(self.me)
        r.command(
            "whois",
            max_args=1,
            target=TargetPolicy.ONLY_IF_SENDER_PRIVILEGED,
            usage="/whois [player]",
            description="Show details about yourself, or (operators) another player",
        )(self.whois)
        r.command(
            "seen",
            min_args=1,
            max_args=1,
            target=TargetPolicy.ALLOW_OFFLINE,
            usage="/seen <player>",
            description="Check whether a player is online",
        )(self.seen)
        r.command(
            "kick",
            min_args=1,
            access=AccessPolicy.PRIVILEGED_ONLY,
            target=TargetPolicy.RESTRICT_ADMIN,
            usage="/kick <player> [reason...]",
            description="Disconnect a player",
        )(self.kick)
        r.command(
            "op",
            min_args=1,
            max_args=1,
            access=AccessPolicy.ADMIN_ONLY,
            target=TargetPolicy.ALLOW_OFFLINE,
            usage="/op <player>",
            description="Grant operator privilege",
        )(self.op)
        r.register_like("deop", "op", self.deop, usage="/deop <player>", description="Revoke operator privilege")
        r.command(
            "announce",
            min_args=1,
            access=AccessPolicy.ADMIN_ENTITY_ONLY,
            usage="/announce <message...>",
            description="Broadcast as the admin",
        )(self.announce)
        r.command(
            "stop",
            max_args=0,
            access=AccessPolicy.CONSOLE_ONLY,
            description="Stop the server",
        )(self.stop)
        return r

    # ── Handlers ─────────────────────────────────────────────────────

    def help(self, request: CommandRequest) -> None:
        if request.args:
            entry = self._registry.get(request.args[0])
            if entry is None:
                request.send_error(request.messages.unknown_command.format(command=request.args[0]))
                return
            request.send_message(entry.usage)
            if entry.description:
                request.send_message(entry.description)
            return
        for line in self._registry.usage_lines():
            request.send_message(line)

    def list_online(self, request: CommandRequest) -> None:
        online = self._directory.online()
        names = ", ".join(e.display_name for e in online) or "nobody"
        request.send_message(f"Online ({len(online)}): {names}")

    def msg(self, request: CommandRequest) -> None:
        target = request.target
        if target is None or target.entity is None:
            return
        text = " ".join(request.args[1:])
        self._sink.send(target.entity, f"[{request.sender.display_name} → you] {text}")
        request.send_message(f"[you → {target.entity.display_name}] {text}")

    def me(self, request: CommandRequest) -> None:
        self._broadcast(f"* {request.sender.display_name} {' '.join(request.args)}")

    def whois(self, request: CommandRequest) -> None:
        if request.target is None:
            entity = request.sender_entity
            if entity is None:
                request.send_message(f"You are the console ({request.sender.display_name}).")
                return
        else:
            entity = request.target.entity
            if entity is None:
                request.send_error(request.format(request.messages.target_offline))
                return
        flags = []
        if entity.privileged:
            flags.append("operator")
        if self._admins.is_admin(entity):
            flags.append("admin")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        request.send_message(f"{entity.display_name} ({entity.id}){suffix}")

    def seen(self, request: CommandRequest) -> None:
        target = request.target
        if target is None or target.entity is None:
            request.send_message(f"{request.given_target} has never been seen here.")
            return
        state = "online" if target.online else "offline"
        request.send_message(f"{target.entity.display_name} is {state}.")

    def kick(self, request: CommandRequest) -> None:
        target = request.target
        if target is None or target.entity is None:
            request.send_error(request.format(request.messages.target_offline))
            return
        reason = " ".join(request.args[1:]) or "Kicked by an operator."
        self._sink.send(target.entity, f"You were kicked: {reason}", error=True)
        self._directory.set_online(target.entity.id, False)
        self._broadcast(f"{target.entity.display_name} was kicked by {request.sender.display_name}.")

    def op(self, request: CommandRequest) -> None:
        self._set_privileged(request, True)

    def deop(self, request: CommandRequest) -> None:
        self._set_privileged(request, False)

    def announce(self, request: CommandRequest) -> None:
        self._broadcast(f"[Admin {request.sender.display_name}] {' '.join(request.args)}")

    def stop(self, request: CommandRequest) -> None:
        self.stop_requested = True
        self._broadcast("Server is stopping.")

    # ── Helpers ──────────────────────────────────────────────────────

    def _set_privileged(self, request: CommandRequest, privileged: bool) -> None:
        target = request.target
        if target is None or target.entity is None:
            request.send_error(f"{request.given_target} has never been seen here.")
            return
        entity = self._directory.set_privileged(target.entity.id, privileged)
        verb = "is now" if privileged else "is no longer"
        request.send_message(f"{entity.display_name} {verb} an operator.")
        if target.online:
            self._sink.send(entity, f"You {'are now' if privileged else 'are no longer'} an operator.")

    def _broadcast(self, text: str) -> None:
        for entity in self._directory.online():
            self._sink.send(entity, text)
        self._sink.send(self._console, text)
