import pytest
from conftest import ADMIN, CONSOLE, OTTO, STEVE

from warden.core.dispatcher import Dispatcher
from warden.core.policies import AccessPolicy, TargetPolicy
from warden.core.registry import CommandRegistry
from warden.core.request import CommandRequest, Invocation, parse_command_line
from warden.core.rules import UNBOUNDED
from warden.core.verification import Allowed, Denied, ReasonCode
from warden.telemetry.inmemory import InMemoryTelemetry


class _SpyHandler:
    def __init__(self) -> None:
        self.calls: list[CommandRequest] = []

    def __call__(self, request: CommandRequest) -> None:
        self.calls.append(request)


class _ExplodingHandler:
    def __call__(self, request: CommandRequest) -> None:
        raise RuntimeError("boom")


@pytest.fixture
def telemetry() -> InMemoryTelemetry:
    return InMemoryTelemetry()


@pytest.fixture
def registry() -> CommandRegistry:
    return CommandRegistry()


@pytest.fixture
def dispatcher(registry, directory, services, telemetry) -> Dispatcher:
    return Dispatcher(registry=registry, directory=directory, services=services, telemetry=telemetry)


def test_console_any_allow_offline_runs_handler_once(registry, dispatcher, make_rule, telemetry) -> None:
    spy = _SpyHandler()
    registry.register(
        "seen",
        make_rule(min_args=0, max_args=UNBOUNDED, access=AccessPolicy.ANY, target=TargetPolicy.ALLOW_OFFLINE, handler=spy),
    )

    handled = dispatcher.dispatch(Invocation(sender=CONSOLE, command_name="seen"))

    assert handled is True
    assert len(spy.calls) == 1
    assert spy.calls[0].sender == CONSOLE
    assert spy.calls[0].args == ()
    assert telemetry.get_counter("command_dispatched", (("command", "seen"),)) == 1


def test_restrict_admin_never_invokes_handler(registry, dispatcher, make_rule, transport, telemetry) -> None:
    spy = _SpyHandler()
    registry.register(
        "kick",
        make_rule(min_args=1, max_args=1, target=TargetPolicy.RESTRICT_ADMIN, handler=spy),
    )

    handled = dispatcher.dispatch(Invocation(sender=STEVE, command_name="kick", args=("Overseer",)))

    assert handled is True
    assert spy.calls == []
    assert transport.to(STEVE) == ["Overseer is protected from /kick."]
    assert transport.to(ADMIN) == ["Steve tried to use /kick on you."]
    labels = (("command", "kick"), ("reason", ReasonCode.TARGET_INELIGIBLE.value))
    assert telemetry.get_counter("command_denied", labels) == 1


def test_admin_only_from_non_admin(registry, dispatcher, make_rule, transport) -> None:
    spy = _SpyHandler()
    registry.register("op", make_rule(min_args=1, max_args=1, access=AccessPolicy.ADMIN_ONLY, handler=spy))

    dispatcher.dispatch(Invocation(sender=STEVE, command_name="op", args=("x",)))

    assert spy.calls == []
    assert transport.to(STEVE) == ["Only the server admin can use this command."]
    assert transport.to(ADMIN) == ["Steve tried to use the admin-only command /op."]


def test_unknown_command_reports_and_stays_handled(dispatcher, transport, telemetry) -> None:
    assert dispatcher.dispatch(Invocation(sender=STEVE, command_name="Nope")) is True
    assert transport.to(STEVE) == ["Unknown command '/nope'. Try /help."]
    assert transport.delivered[0].error is True
    assert telemetry.get_counter("command_unknown", (("command", "nope"),)) == 1


def test_handler_failure_is_reported_not_raised(registry, dispatcher, make_rule, transport, telemetry) -> None:
    registry.register("crash", make_rule(handler=_ExplodingHandler()))

    assert dispatcher.dispatch(Invocation(sender=CONSOLE, command_name="crash")) is True
    assert transport.to(CONSOLE) == ["An unexpected error occurred. Please notify an admin."]
    assert telemetry.get_counter("command_handler_error", (("command", "crash"),)) == 1


def test_alias_dispatches_under_canonical_name(registry, dispatcher, make_rule) -> None:
    spy = _SpyHandler()
    registry.register("msg", make_rule(min_args=2, target=TargetPolicy.ONLINE_ONLY, handler=spy), aliases=("tell",))

    dispatcher.dispatch(Invocation(sender=STEVE, command_name="TELL", args=("olive", "hi")))

    assert len(spy.calls) == 1
    assert spy.calls[0].command_name == "msg"
    assert spy.calls[0].target is not None
    assert spy.calls[0].target.online is True


def test_dispatch_line_parses_quotes_and_slash(registry, dispatcher, make_rule) -> None:
    spy = _SpyHandler()
    registry.register("say", make_rule(min_args=1, handler=spy))

    dispatcher.dispatch_line(STEVE, '/say "hello there" friend')

    assert spy.calls[0].args == ("hello there", "friend")


def test_dispatch_line_reports_bad_syntax(dispatcher, transport) -> None:
    assert dispatcher.dispatch_line(STEVE, 'say "unterminated') is True
    assert transport.to(STEVE) == ["Invalid command syntax: No closing quotation"]


def test_dispatch_line_ignores_blank_input(dispatcher, transport) -> None:
    assert dispatcher.dispatch_line(STEVE, "   /  ") is True
    assert transport.delivered == []


def test_explain_has_no_side_effects(registry, dispatcher, make_rule, transport) -> None:
    spy = _SpyHandler()
    registry.register("msg", make_rule(min_args=2, target=TargetPolicy.ONLINE_ONLY, handler=spy))

    result = dispatcher.explain(Invocation(sender=STEVE, command_name="msg", args=("Otto", "hi")))

    assert result is not None
    entry, verdict = result
    assert entry.name == "msg"
    assert isinstance(verdict, Denied)
    assert verdict.message == f"{OTTO.display_name} is not online."
    assert transport.delivered == []
    assert spy.calls == []


def test_explain_allowed_and_unknown(registry, dispatcher, make_rule) -> None:
    registry.register("list", make_rule(max_args=0))
    result = dispatcher.explain(Invocation(sender=CONSOLE, command_name="list"))
    assert result is not None and isinstance(result[1], Allowed)
    assert dispatcher.explain(Invocation(sender=CONSOLE, command_name="missing")) is None


def test_parse_command_line() -> None:
    assert parse_command_line("") is None
    assert parse_command_line("/KICK Steve being rude") == ("kick", ("Steve", "being", "rude"))
    assert parse_command_line("list") == ("list", ())
    with pytest.raises(ValueError):
        parse_command_line("msg 'open")
