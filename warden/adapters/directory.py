"""In-memory entity directory for the console runtime and tests."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import replace

from warden.admin.identity import normalize_identity_token
from warden.config.schema import DirectoryEntityConfig, canonical_entity_id
from warden.core.models import Entity


class InMemoryEntityDirectory:
    """Entities keyed by canonical id, with an online set and case-insensitive name lookup."""

    def __init__(self, entities: Iterable[tuple[Entity, bool]] = ()) -> None:
        self._lock = threading.RLock()
        self._entities: dict[str, Entity] = {}
        self._online: set[str] = set()
        for entity, online in entities:
            self.add(entity, online=online)

    @classmethod
    def from_config(cls, entries: list[DirectoryEntityConfig]) -> InMemoryEntityDirectory:
        return cls(
            (
                Entity(id=entry.resolved_id, display_name=entry.name, privileged=entry.privileged),
                entry.online,
            )
            for entry in entries
        )

    def add(self, entity: Entity, *, online: bool = True) -> None:
        with self._lock:
            key = canonical_entity_id(entity.id)
            self._entities[key] = entity
            if online:
                self._online.add(key)
            else:
                self._online.discard(key)

    def set_online(self, entity_id: str, online: bool) -> None:
        key = canonical_entity_id(entity_id)
        with self._lock:
            if key not in self._entities:
                raise KeyError(entity_id)
            if online:
                self._online.add(key)
            else:
                self._online.discard(key)

    def set_privileged(self, entity_id: str, privileged: bool) -> Entity:
        with self._lock:
            key = canonical_entity_id(entity_id)
            entity = replace(self._entities[key], privileged=privileged)
            self._entities[key] = entity
            return entity

    def find(self, name: str, *, include_offline: bool = False) -> Entity | None:
        token = normalize_identity_token(name)
        if not token:
            return None
        with self._lock:
            for entity in self._entities.values():
                if normalize_identity_token(entity.display_name) != token:
                    continue
                if include_offline or canonical_entity_id(entity.id) in self._online:
                    return entity
        return None

    def get(self, entity_id: str) -> Entity | None:
        with self._lock:
            return self._entities.get(canonical_entity_id(entity_id))

    def is_online(self, entity_id: str) -> bool:
        with self._lock:
            return canonical_entity_id(entity_id) in self._online

    def online(self) -> list[Entity]:
        with self._lock:
            return sorted(
                (self._entities[entity_id] for entity_id in self._online),
                key=lambda e: e.display_name.lower(),
            )

    def all(self) -> list[Entity]:
        with self._lock:
            return sorted(self._entities.values(), key=lambda e: e.display_name.lower())
