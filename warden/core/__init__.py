"""Command verification and dispatch core."""

from warden.core.dispatcher import Dispatcher
from warden.core.models import ConsoleSender, Entity, ResolvedTarget, Sender
from warden.core.policies import AccessPolicy, TargetPolicy
from warden.core.registry import CommandEntry, CommandRegistry
from warden.core.request import CommandRequest, Invocation, RequestServices, build_request, parse_command_line
from warden.core.rules import UNBOUNDED, CommandHandler, CommandRule
from warden.core.verification import (
    Allowed,
    Denied,
    InternalPolicyFault,
    ReasonCode,
    Verdict,
    check_access,
    check_args,
    check_target,
    evaluate,
    report_verdict,
    verify,
)

__all__ = [
    "AccessPolicy",
    "Allowed",
    "CommandEntry",
    "CommandHandler",
    "CommandRegistry",
    "CommandRequest",
    "CommandRule",
    "ConsoleSender",
    "Denied",
    "Dispatcher",
    "Entity",
    "InternalPolicyFault",
    "Invocation",
    "ReasonCode",
    "RequestServices",
    "ResolvedTarget",
    "Sender",
    "TargetPolicy",
    "UNBOUNDED",
    "Verdict",
    "build_request",
    "check_access",
    "check_args",
    "check_target",
    "evaluate",
    "parse_command_line",
    "report_verdict",
    "verify",
]
