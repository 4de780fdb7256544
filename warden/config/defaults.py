"""Centralized defaults for generated config files and diagnostics."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

DEFAULT_CONSOLE_NAME = "CONSOLE"

DEFAULT_MESSAGES: dict[str, str] = {
    "players_only": "This command can only be used by players.",
    "not_privileged": "You must be an operator to use this command.",
    "admin_only": "Only the server admin can use this command.",
    "admin_only_notification": "{sender} tried to use the admin-only command /{command}.",
    "console_only": "This command can only be used from the console.",
    "too_few_args": "Not enough arguments for /{command}.",
    "too_many_args": "Too many arguments for /{command}.",
    "admin_protected": "{target} is protected from /{command}.",
    "admin_protected_notification": "{sender} tried to use /{command} on you.",
    "target_requires_privilege": "You must be an operator to use /{command} on another player.",
    "target_offline": "{target} is not online.",
    "internal_error": "An unexpected error occurred. Please notify an admin.",
    "unknown_command": "Unknown command '/{command}'. Try /help.",
    "invalid_syntax": "Invalid command syntax: {error}",
}

DEFAULT_DIRECTORY: list[dict[str, Any]] = []


def default_messages() -> dict[str, str]:
    return dict(DEFAULT_MESSAGES)


def apply_missing_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Fill absent sections of a snake_case config payload in place."""
    messages = data.get("messages")
    if not isinstance(messages, dict):
        messages = {}
        data["messages"] = messages
    for key, value in DEFAULT_MESSAGES.items():
        messages.setdefault(key, value)

    console = data.get("console")
    if not isinstance(console, dict):
        console = {}
        data["console"] = console
    console.setdefault("display_name", DEFAULT_CONSOLE_NAME)

    if not isinstance(data.get("directory"), list):
        data["directory"] = deepcopy(DEFAULT_DIRECTORY)
    return data
