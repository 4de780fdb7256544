"""Administrator identity service backed by configuration."""

from __future__ import annotations

from loguru import logger

from warden.admin.identity import same_identity
from warden.config.schema import AdministratorConfig, canonical_entity_id
from warden.core.models import ConsoleSender, Entity
from warden.core.ports import EntityDirectoryPort, MessageSinkPort


class AdministratorService:
    """Answers "is this the admin" and delivers admin notifications.

    The identity comes from ``administrator.id`` / ``administrator.displayName``
    in the config; nothing about it is compiled in.
    """

    def __init__(
        self,
        *,
        config: AdministratorConfig,
        directory: EntityDirectoryPort,
        sink: MessageSinkPort,
        console: ConsoleSender,
    ) -> None:
        self._config = config
        self._directory = directory
        self._sink = sink
        self._console = console

    @property
    def admin_id(self) -> str:
        return self._config.id

    @property
    def admin_name(self) -> str:
        """Display name, falling back to the directory when not configured."""
        if self._config.display_name:
            return self._config.display_name
        entity = self.get_admin()
        return entity.display_name if entity is not None else ""

    def is_admin(self, entity: Entity) -> bool:
        return self._config.configured and canonical_entity_id(entity.id) == self._config.id

    def is_admin_name(self, name: str) -> bool:
        return same_identity(self.admin_name, name)

    def get_admin(self) -> Entity | None:
        """Administrator entity when the directory knows it, online or not."""
        if not self._config.configured:
            return None
        return self._directory.get(self._config.id)

    def is_reachable(self) -> bool:
        return self._config.configured and self._directory.is_online(self._config.id)

    def send_admin(self, message: str) -> None:
        if not self.is_reachable():
            return
        admin = self.get_admin()
        if admin is not None:
            self._sink.send(admin, message)

    def broadcast_admins(self, message: str) -> None:
        self.send_admin(message)
        self._sink.send(self._console, message)
        logger.warning("admin notice: {}", message)
