"""Sender and target models shared by the verification core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True, kw_only=True)
class ConsoleSender:
    """The server console. Never an entity, never the administrator."""

    display_name: str = "CONSOLE"


@dataclass(frozen=True, slots=True, kw_only=True)
class Entity:
    """Named, addressable non-console participant."""

    id: str
    display_name: str
    privileged: bool = False


Sender: TypeAlias = ConsoleSender | Entity


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedTarget:
    """Target argument of one invocation after directory lookup.

    ``entity`` is ``None`` when the name matched nobody the lookup was allowed
    to see; ``online`` is only ever true for a known entity.
    """

    name: str
    entity: Entity | None = None
    online: bool = False

    @property
    def known(self) -> bool:
        return self.entity is not None


def sender_name(sender: Sender) -> str:
    """Display name used in notifications and logs."""
    return sender.display_name
