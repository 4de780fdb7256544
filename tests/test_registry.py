import pytest

from warden.core.policies import AccessPolicy, TargetPolicy
from warden.core.registry import CommandRegistry


def _handler(request) -> None:
    del request


def _other(request) -> None:
    del request


def test_register_and_lookup_by_alias(make_rule) -> None:
    registry = CommandRegistry()
    entry = registry.register("Msg", make_rule(min_args=2), aliases=("tell", "/W"))

    assert entry.name == "msg"
    assert entry.aliases == ("tell", "w")
    assert entry.usage == "/msg"
    assert registry.get("/TELL") is entry
    assert registry.get("w") is entry
    assert "msg" in registry
    assert "whisper" not in registry
    assert registry.get("whisper") is None


def test_duplicate_names_and_aliases_are_rejected(make_rule) -> None:
    registry = CommandRegistry()
    registry.register("list", make_rule(), aliases=("who",))

    with pytest.raises(ValueError):
        registry.register("LIST", make_rule())
    with pytest.raises(ValueError):
        registry.register("who", make_rule())
    with pytest.raises(ValueError):
        registry.register("online", make_rule(), aliases=("list",))
    with pytest.raises(ValueError):
        registry.register("  ", make_rule())
    with pytest.raises(ValueError):
        registry.register("loop", make_rule(), aliases=("loop",))


def test_register_like_copies_constraints(make_rule) -> None:
    registry = CommandRegistry()
    registry.register("op", make_rule(min_args=1, max_args=1, access=AccessPolicy.ADMIN_ONLY, target=TargetPolicy.ALLOW_OFFLINE))

    entry = registry.register_like("deop", "op", _other, description="Revoke")

    assert entry.rule.handler is _other
    assert entry.rule.access is AccessPolicy.ADMIN_ONLY
    assert entry.rule.target is TargetPolicy.ALLOW_OFFLINE
    assert (entry.rule.min_args, entry.rule.max_args) == (1, 1)
    with pytest.raises(KeyError):
        registry.register_like("x", "missing", _other)


def test_decorator_registers_and_returns_handler() -> None:
    registry = CommandRegistry()

    decorated = registry.command("kick", min_args=1, access=AccessPolicy.PRIVILEGED_ONLY, target=TargetPolicy.RESTRICT_ADMIN)(
        _handler
    )

    assert decorated is _handler
    entry = registry.get("kick")
    assert entry is not None
    assert entry.rule.handler is _handler
    assert entry.rule.access is AccessPolicy.PRIVILEGED_ONLY


def test_names_and_usage_lines_are_sorted(make_rule) -> None:
    registry = CommandRegistry()
    registry.register("stop", make_rule(), description="Stop the server")
    registry.register("help", make_rule(), usage="/help [command]")

    assert registry.names() == ("help", "stop")
    assert registry.usage_lines() == ("/help [command]", "/stop - Stop the server")
    assert [entry.name for entry in registry] == ["help", "stop"]
    assert len(registry) == 2
