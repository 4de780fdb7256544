from collections.abc import Callable

import pytest

from warden.adapters.directory import InMemoryEntityDirectory
from warden.adapters.transport import InMemoryTransport
from warden.admin.service import AdministratorService
from warden.config.schema import AdministratorConfig, MessagesConfig
from warden.core.models import ConsoleSender, Entity
from warden.core.policies import AccessPolicy, TargetPolicy
from warden.core.request import CommandRequest, Invocation, RequestServices, build_request
from warden.core.rules import UNBOUNDED, CommandRule

ADMIN_ID = "5420ca86-36f0-4d54-8096-4352555fd1d6"

ADMIN = Entity(id=ADMIN_ID, display_name="Overseer")
STEVE = Entity(id="steve-1", display_name="Steve")
OLIVE = Entity(id="olive-1", display_name="Olive", privileged=True)
OTTO = Entity(id="otto-1", display_name="Otto")
CONSOLE = ConsoleSender()


def _noop(request: CommandRequest) -> None:
    del request


@pytest.fixture
def directory() -> InMemoryEntityDirectory:
    return InMemoryEntityDirectory(
        [
            (ADMIN, True),
            (STEVE, True),
            (OLIVE, True),
            (OTTO, False),
        ]
    )


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture
def admins(directory: InMemoryEntityDirectory, transport: InMemoryTransport) -> AdministratorService:
    return AdministratorService(
        config=AdministratorConfig(id=ADMIN_ID, display_name="Overseer"),
        directory=directory,
        sink=transport,
        console=CONSOLE,
    )


@pytest.fixture
def services(transport: InMemoryTransport, admins: AdministratorService) -> RequestServices:
    return RequestServices(sink=transport, admins=admins, messages=MessagesConfig())


@pytest.fixture
def make_rule() -> Callable[..., CommandRule]:
    def _make(
        *,
        min_args: int = 0,
        max_args: int = UNBOUNDED,
        access: AccessPolicy = AccessPolicy.ANY,
        target: TargetPolicy = TargetPolicy.NONE,
        handler=_noop,
        target_index: int = 0,
    ) -> CommandRule:
        return CommandRule(
            min_args=min_args,
            max_args=max_args,
            access=access,
            target=target,
            handler=handler,
            target_index=target_index,
        )

    return _make


@pytest.fixture
def make_request(
    directory: InMemoryEntityDirectory,
    services: RequestServices,
) -> Callable[..., CommandRequest]:
    def _make(sender, rule: CommandRule, *args: str, name: str = "cmd") -> CommandRequest:
        return build_request(
            Invocation(sender=sender, command_name=name, args=tuple(args)),
            rule,
            directory=directory,
            services=services,
        )

    return _make
