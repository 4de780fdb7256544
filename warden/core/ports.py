"""Port interfaces for the collaborators the verification core relies on."""

from __future__ import annotations

from typing import Protocol

from warden.core.models import Entity, Sender


class MessageSinkPort(Protocol):
    """Transport side of diagnostics. Fire-and-forget."""

    def send(self, recipient: Sender, text: str, *, error: bool = False) -> None:
        """Deliver one line to a console or entity recipient."""


class EntityDirectoryPort(Protocol):
    """Lookup of entities by name or id."""

    def find(self, name: str, *, include_offline: bool = False) -> Entity | None:
        """Resolve a display name; offline entities only when asked."""

    def get(self, entity_id: str) -> Entity | None:
        """Resolve a stable id regardless of reachability."""

    def is_online(self, entity_id: str) -> bool:
        """Whether the entity is currently reachable."""

    def online(self) -> list[Entity]:
        """Currently reachable entities."""


class AdministratorPort(Protocol):
    """The single designated administrator."""

    def is_admin(self, entity: Entity) -> bool:
        """Whether ``entity`` is the administrator."""

    def is_admin_name(self, name: str) -> bool:
        """Whether ``name`` is the administrator's display name."""

    def is_reachable(self) -> bool:
        """Whether the administrator is currently online."""

    def send_admin(self, message: str) -> None:
        """Message the administrator when reachable."""

    def broadcast_admins(self, message: str) -> None:
        """Message the administrator and log to the console."""


class TelemetryPort(Protocol):
    """Counter telemetry sink."""

    def incr(self, name: str, value: int = 1, labels: tuple[tuple[str, str], ...] = ()) -> None:
        """Increase named counter with optional labels."""
