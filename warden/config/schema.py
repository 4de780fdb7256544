"""Configuration schema using Pydantic."""

from string import Formatter
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from warden.config.defaults import DEFAULT_CONSOLE_NAME, DEFAULT_MESSAGES

COMMON_PLACEHOLDERS = frozenset({"sender", "command", "target"})

# Templates not filled through CommandRequest.format
TEMPLATE_PLACEHOLDERS: dict[str, frozenset[str]] = {
    "internal_error": frozenset(),
    "unknown_command": frozenset({"command"}),
    "invalid_syntax": frozenset({"error"}),
}


def canonical_entity_id(value: str) -> str:
    """Key form of an entity id: canonical UUID text when it parses, else casefolded."""
    value = (value or "").strip()
    if not value:
        return ""
    try:
        return str(UUID(value))
    except ValueError:
        return value.casefold()


class AdministratorConfig(BaseModel):
    """The single designated administrator identity.

    An empty ``id`` means no administrator is configured; admin-only
    commands are then reachable from the console alone.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    display_name: str = ""

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        return canonical_entity_id(value)

    @property
    def configured(self) -> bool:
        return bool(self.id)


class ConsoleConfig(BaseModel):
    """Console sender settings."""

    model_config = ConfigDict(extra="ignore")

    display_name: str = DEFAULT_CONSOLE_NAME


class MessagesConfig(BaseModel):
    """User-facing diagnostic strings. ``str.format`` fields are filled per request."""

    model_config = ConfigDict(extra="ignore")

    players_only: str = DEFAULT_MESSAGES["players_only"]
    not_privileged: str = DEFAULT_MESSAGES["not_privileged"]
    admin_only: str = DEFAULT_MESSAGES["admin_only"]
    admin_only_notification: str = DEFAULT_MESSAGES["admin_only_notification"]
    console_only: str = DEFAULT_MESSAGES["console_only"]
    too_few_args: str = DEFAULT_MESSAGES["too_few_args"]
    too_many_args: str = DEFAULT_MESSAGES["too_many_args"]
    admin_protected: str = DEFAULT_MESSAGES["admin_protected"]
    admin_protected_notification: str = DEFAULT_MESSAGES["admin_protected_notification"]
    target_requires_privilege: str = DEFAULT_MESSAGES["target_requires_privilege"]
    target_offline: str = DEFAULT_MESSAGES["target_offline"]
    internal_error: str = DEFAULT_MESSAGES["internal_error"]
    unknown_command: str = DEFAULT_MESSAGES["unknown_command"]
    invalid_syntax: str = DEFAULT_MESSAGES["invalid_syntax"]

    @field_validator("*")
    @classmethod
    def _check_placeholders(cls, value: str, info: ValidationInfo) -> str:
        allowed = TEMPLATE_PLACEHOLDERS.get(info.field_name, COMMON_PLACEHOLDERS)
        for _, field_name, _, _ in Formatter().parse(value):
            if field_name is not None and field_name not in allowed:
                expected = ", ".join(f"{{{name}}}" for name in sorted(allowed)) or "none"
                raise ValueError(f"unknown placeholder {{{field_name}}} (allowed: {expected})")
        try:
            value.format(**{name: "x" for name in allowed})
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"template cannot be filled: {e}") from e
        return value


class DirectoryEntityConfig(BaseModel):
    """Seed entry for the in-memory entity directory."""

    model_config = ConfigDict(extra="ignore")

    name: str
    id: str = ""
    privileged: bool = False
    online: bool = True

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        return canonical_entity_id(value)

    @property
    def resolved_id(self) -> str:
        return self.id or canonical_entity_id(self.name)


class Config(BaseSettings):
    """Root configuration for warden."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, env_prefix="WARDEN_", env_nested_delimiter="__")

    config_version: int = 1
    administrator: AdministratorConfig = Field(default_factory=AdministratorConfig)
    console: ConsoleConfig = Field(default_factory=ConsoleConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    directory: list[DirectoryEntityConfig] = Field(default_factory=list)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """WARDEN_* environment variables win over values read from config.json."""
        return env_settings, init_settings, dotenv_settings, file_secret_settings
