import pytest

from warden.core.policies import AccessPolicy, TargetPolicy
from warden.core.rules import UNBOUNDED, CommandRule


def _handler(request) -> None:
    del request


def _other(request) -> None:
    del request


def test_rule_is_immutable() -> None:
    rule = CommandRule(0, 1, AccessPolicy.ANY, TargetPolicy.NONE, _handler)
    with pytest.raises(AttributeError):
        rule.min_args = 3  # type: ignore[misc]


@pytest.mark.parametrize(
    ("min_args", "max_args"),
    [(-1, 2), (3, 2), (0, -2)],
)
def test_invalid_bounds_are_rejected(min_args: int, max_args: int) -> None:
    with pytest.raises(ValueError):
        CommandRule(min_args, max_args, AccessPolicy.ANY, TargetPolicy.NONE, _handler)


def test_negative_target_index_is_rejected() -> None:
    with pytest.raises(ValueError):
        CommandRule(0, 1, AccessPolicy.ANY, TargetPolicy.ONLINE_ONLY, _handler, target_index=-1)


def test_policies_must_be_enum_members() -> None:
    with pytest.raises(TypeError):
        CommandRule(0, 1, "any", TargetPolicy.NONE, _handler)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        CommandRule(0, 1, AccessPolicy.ANY, AccessPolicy.ANY, _handler)  # type: ignore[arg-type]


def test_unbounded_max_is_allowed() -> None:
    rule = CommandRule(2, UNBOUNDED, AccessPolicy.ANY, TargetPolicy.NONE, _handler)
    assert not rule.bounded
    assert rule.describe_bounds() == "2+"


def test_describe_bounds() -> None:
    assert CommandRule(1, 1, AccessPolicy.ANY, TargetPolicy.NONE, _handler).describe_bounds() == "1"
    assert CommandRule(0, 2, AccessPolicy.ANY, TargetPolicy.NONE, _handler).describe_bounds() == "0-2"


def test_use_target_follows_target_policy() -> None:
    assert not CommandRule(0, 1, AccessPolicy.ANY, TargetPolicy.NONE, _handler).use_target()
    for policy in TargetPolicy:
        if policy is TargetPolicy.NONE:
            continue
        assert CommandRule(0, 1, AccessPolicy.ANY, policy, _handler).use_target()


def test_derive_keeps_constraints() -> None:
    rule = CommandRule(1, 1, AccessPolicy.ADMIN_ONLY, TargetPolicy.ALLOW_OFFLINE, _handler, target_index=0)
    derived = rule.derive(_other)

    assert derived.handler is _other
    assert rule.handler is _handler
    assert (derived.min_args, derived.max_args, derived.access, derived.target, derived.target_index) == (
        1,
        1,
        AccessPolicy.ADMIN_ONLY,
        TargetPolicy.ALLOW_OFFLINE,
        0,
    )
