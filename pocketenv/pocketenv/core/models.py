"""Domain models for settings, resolved configuration, runtimes and artifacts."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SettingKind(str, Enum):
    TEXT = "text"
    SECRET = "secret"
    DERIVED = "derived"


class SecretFlavor(str, Enum):
    PASSWORD = "password"
    IV = "iv"


class Rule(str, Enum):
    """Validation rules a setting can reference."""

    PORT = "port"
    IV_TOKEN = "iv_token"
    NON_EMPTY = "non_empty"
    PASSWORD = "password"
    ADMIN_PASSWORD = "admin_password"
    POSITIVE_INT = "positive_int"
    MEMORY_SIZE = "memory_size"
    BOOL = "bool"
    LOG_LEVEL = "log_level"


class Normalizer(str, Enum):
    CSV = "csv"
    BIND_HOST = "bind_host"
    UPPER = "upper"
    BOOL = "bool"


class Section(str, Enum):
    DATABASE = "database"
    BACKEND = "backend"
    WEB_APP = "web_app"
    GENERAL = "general"

    @property
    def title(self) -> str:
        return {
            Section.DATABASE: "Database Configuration",
            Section.BACKEND: "Backend Configuration",
            Section.WEB_APP: "Web App Configuration",
            Section.GENERAL: "General Configuration",
        }[self]


class Setting(BaseModel):
    """Declarative description of one configuration key."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., pattern=r"^[A-Z][A-Z0-9_]*$", description="Env variable name")
    label: str = Field(..., description="Prompt text shown to the operator")
    section: Section
    kind: SettingKind = SettingKind.TEXT
    default: str | None = Field(default=None, description="Prompt default")
    rule: Rule | None = None
    flavor: SecretFlavor | None = Field(
        default=None, description="Generator used for secret settings"
    )
    hidden: bool = Field(default=False, description="Hide operator input")
    required: bool = False
    normalizer: Normalizer | None = Field(
        default=None, description="Canonicalization applied to entered values"
    )
    enabled_by: str | None = Field(
        default=None, description="Boolean setting that must be true to ask this one"
    )
    source: str | None = Field(
        default=None, description="Setting a derived value is extracted from"
    )

    @property
    def is_secret(self) -> bool:
        return self.kind is SettingKind.SECRET


class ResolvedConfiguration(BaseModel):
    """Final key/value settings driving artifact generation."""

    values: dict[str, str] = Field(default_factory=dict)

    def get(self, key: str, default: str = "") -> str:
        return self.values.get(key) or default

    def __getitem__(self, key: str) -> str:
        return self.values.get(key, "")

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def flag(self, key: str) -> bool:
        return self.get(key).strip().lower() in {"true", "1", "yes", "on", "y"}


EscalationPolicy = Literal["docker", "always", "never"]


class RuntimeProfile(BaseModel):
    """The container engine selected for this run."""

    model_config = ConfigDict(frozen=True)

    engine: Literal["docker", "podman"]
    engine_command: tuple[str, ...] = Field(..., min_length=1)
    compose_command: tuple[str, ...] = Field(..., min_length=1)
    needs_privilege_escalation: bool = False

    @property
    def engine_invocation(self) -> str:
        return " ".join(self.engine_command)

    @property
    def compose_invocation(self) -> str:
        return " ".join(self.compose_command)


class Artifact(BaseModel):
    """A rendered file ready to be written."""

    template_id: str
    target_path: Path
    template_body: str
    rendered_body: str
    mode: int = Field(default=0o644, description="File permissions (octal)")
