"""Immutable per-command constraint bundle."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TypeAlias

from warden.core.policies import AccessPolicy, TargetPolicy

if TYPE_CHECKING:
    from warden.core.request import CommandRequest

UNBOUNDED = -1

CommandHandler: TypeAlias = Callable[["CommandRequest"], None]


@dataclass(frozen=True, slots=True)
class CommandRule:
    """Argument bounds, sender and target policies plus the handler of one command.

    ``max_args`` may be :data:`UNBOUNDED`. ``target_index`` is the argument
    position read as the target name when ``target`` is not ``NONE``.
    """

    min_args: int
    max_args: int
    access: AccessPolicy
    target: TargetPolicy
    handler: CommandHandler
    target_index: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.access, AccessPolicy):
            raise TypeError(f"access must be an AccessPolicy, got {self.access!r}")
        if not isinstance(self.target, TargetPolicy):
            raise TypeError(f"target must be a TargetPolicy, got {self.target!r}")
        if self.min_args < 0:
            raise ValueError(f"min_args must be >= 0, got {self.min_args}")
        if self.max_args != UNBOUNDED and self.max_args < self.min_args:
            raise ValueError(
                f"max_args must be >= min_args ({self.min_args}) or UNBOUNDED, got {self.max_args}"
            )
        if self.target_index < 0:
            raise ValueError(f"target_index must be >= 0, got {self.target_index}")

    @property
    def bounded(self) -> bool:
        return self.max_args != UNBOUNDED

    def use_target(self) -> bool:
        return self.target is not TargetPolicy.NONE

    def derive(self, handler: CommandHandler) -> CommandRule:
        """Same constraints, different handler."""
        return replace(self, handler=handler)

    def describe_bounds(self) -> str:
        if not self.bounded:
            return f"{self.min_args}+"
        if self.min_args == self.max_args:
            return str(self.min_args)
        return f"{self.min_args}-{self.max_args}"
