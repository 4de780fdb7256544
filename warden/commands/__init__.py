"""Stock command sets."""

from warden.commands.builtin import BuiltinCommands

__all__ = ["BuiltinCommands"]
