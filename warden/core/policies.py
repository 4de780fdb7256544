"""Closed policy sets declared by every command rule."""

from __future__ import annotations

from enum import Enum


class AccessPolicy(Enum):
    """Which classes of sender may invoke a command."""

    ANY = "any"
    ENTITY_ONLY = "entity_only"
    PRIVILEGED_ONLY = "privileged_only"
    ADMIN_ONLY = "admin_only"
    ADMIN_ENTITY_ONLY = "admin_entity_only"
    CONSOLE_ONLY = "console_only"


class TargetPolicy(Enum):
    """Which classes of target entity are legal for a command."""

    NONE = "none"
    RESTRICT_ADMIN = "restrict_admin"
    ONLY_IF_SENDER_PRIVILEGED = "only_if_sender_privileged"
    ONLINE_ONLY = "online_only"
    ALLOW_OFFLINE = "allow_offline"
