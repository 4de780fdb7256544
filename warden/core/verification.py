"""Verification pipeline: sender, argument count, then target.

Each check is a pure function returning a verdict. :func:`report_verdict`
performs the side effects (diagnostics to the sender, admin notifications,
error logging) and :func:`verify` combines the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias, assert_never

from loguru import logger

from warden.core.policies import AccessPolicy, TargetPolicy
from warden.core.request import CommandRequest
from warden.core.rules import CommandRule


class ReasonCode(Enum):
    """Why a well-formed check denied an invocation."""

    SENDER_INELIGIBLE = "sender_ineligible"
    TOO_FEW_ARGUMENTS = "too_few_arguments"
    TOO_MANY_ARGUMENTS = "too_many_arguments"
    TARGET_INELIGIBLE = "target_ineligible"


@dataclass(frozen=True, slots=True)
class Allowed:
    """The check passed."""


@dataclass(frozen=True, slots=True, kw_only=True)
class Denied:
    """User-input failure; ``message`` goes to the sender.

    ``as_error`` selects error styling at the transport. ``admin_notice``,
    when set, is broadcast to administrators as well.
    """

    reason: ReasonCode
    message: str
    as_error: bool = True
    admin_notice: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class InternalPolicyFault:
    """A policy value outside the closed set reached a decision table."""

    policy_kind: str
    value: object


Verdict: TypeAlias = Allowed | Denied | InternalPolicyFault

ALLOWED = Allowed()


def check_access(policy: AccessPolicy, request: CommandRequest) -> Verdict:
    """Decide whether the sender class may invoke the command."""
    messages = request.messages
    match policy:
        case AccessPolicy.ANY:
            return ALLOWED
        case AccessPolicy.ENTITY_ONLY:
            if request.is_from_entity:
                return ALLOWED
            return Denied(reason=ReasonCode.SENDER_INELIGIBLE, message=request.format(messages.players_only))
        case AccessPolicy.PRIVILEGED_ONLY:
            if request.is_from_privileged:
                return ALLOWED
            return Denied(reason=ReasonCode.SENDER_INELIGIBLE, message=request.format(messages.not_privileged))
        case AccessPolicy.ADMIN_ONLY:
            if request.is_from_console or request.is_from_admin:
                return ALLOWED
            return Denied(
                reason=ReasonCode.SENDER_INELIGIBLE,
                message=request.format(messages.admin_only),
                as_error=False,
                admin_notice=request.format(messages.admin_only_notification),
            )
        case AccessPolicy.ADMIN_ENTITY_ONLY:
            if request.is_from_admin:
                return ALLOWED
            if request.is_from_console:
                return Denied(reason=ReasonCode.SENDER_INELIGIBLE, message=request.format(messages.players_only))
            return Denied(reason=ReasonCode.SENDER_INELIGIBLE, message=request.format(messages.admin_only))
        case AccessPolicy.CONSOLE_ONLY:
            if request.is_from_console:
                return ALLOWED
            return Denied(reason=ReasonCode.SENDER_INELIGIBLE, message=request.format(messages.console_only))
        case _:
            return InternalPolicyFault(policy_kind="AccessPolicy", value=policy)


def check_args(rule: CommandRule, request: CommandRequest) -> Verdict:
    """Check the argument count against the rule's bounds."""
    count = len(request.args)
    if count < rule.min_args:
        return Denied(
            reason=ReasonCode.TOO_FEW_ARGUMENTS,
            message=request.format(request.messages.too_few_args),
        )
    if rule.bounded and count > rule.max_args:
        return Denied(
            reason=ReasonCode.TOO_MANY_ARGUMENTS,
            message=request.format(request.messages.too_many_args),
        )
    return ALLOWED


def check_target(policy: TargetPolicy, request: CommandRequest) -> Verdict:
    """Decide whether the supplied target is legal for the command."""
    messages = request.messages
    match policy:
        case TargetPolicy.NONE:
            return ALLOWED
        case TargetPolicy.RESTRICT_ADMIN:
            if not request.targets_admin:
                return ALLOWED
            return Denied(
                reason=ReasonCode.TARGET_INELIGIBLE,
                message=request.format(messages.admin_protected),
                as_error=False,
                admin_notice=request.format(messages.admin_protected_notification),
            )
        case TargetPolicy.ONLY_IF_SENDER_PRIVILEGED:
            if not request.target_supplied or request.is_from_privileged:
                return ALLOWED
            return Denied(
                reason=ReasonCode.TARGET_INELIGIBLE,
                message=request.format(messages.target_requires_privilege),
            )
        case TargetPolicy.ONLINE_ONLY:
            if request.has_online_target or not request.target_supplied:
                return ALLOWED
            return Denied(reason=ReasonCode.TARGET_INELIGIBLE, message=request.format(messages.target_offline))
        case TargetPolicy.ALLOW_OFFLINE:
            return ALLOWED
        case _:
            return InternalPolicyFault(policy_kind="TargetPolicy", value=policy)


def evaluate(request: CommandRequest, rule: CommandRule) -> Verdict:
    """Run the checks in order and return the first non-allowed verdict.

    Access comes first so a sender who may not use the command never learns
    its argument shape or target rules.
    """
    verdict = check_access(rule.access, request)
    if not isinstance(verdict, Allowed):
        return verdict
    verdict = check_args(rule, request)
    if not isinstance(verdict, Allowed):
        return verdict
    if rule.use_target():
        return check_target(rule.target, request)
    return ALLOWED


def report_verdict(verdict: Verdict, request: CommandRequest) -> bool:
    """Emit the diagnostics for ``verdict``; return whether the command may run."""
    match verdict:
        case Allowed():
            return True
        case Denied():
            if verdict.as_error:
                request.send_error(verdict.message)
            else:
                request.send_message(verdict.message)
            if verdict.admin_notice:
                request.report_to_admins(verdict.admin_notice)
            return False
        case InternalPolicyFault():
            request.send_error(request.messages.internal_error)
            logger.error(
                "unexpected {} value {!r} for /{}; the policy tables need updating",
                verdict.policy_kind,
                verdict.value,
                request.command_name,
            )
            return False
        case _:
            assert_never(verdict)


def verify(request: CommandRequest, rule: CommandRule) -> bool:
    """Evaluate ``request`` against ``rule`` and report the first failure."""
    return report_verdict(evaluate(request, rule), request)
