from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import EscalationPolicy


class ToolSettings(BaseSettings):
    """Settings of the tool itself, read from ``POCKETENV_*`` variables."""

    model_config = SettingsConfigDict(env_prefix="POCKETENV_", case_sensitive=False)

    project_dir: Path = Field(default_factory=Path.cwd)
    config_file: str = ".env"
    volumes_dir: str = "docker-volumes"
    network: str = "pocket-network"
    compose_project: str = "pocket"
    privilege_escalation: EscalationPolicy = "docker"
    non_interactive: bool = False

    @property
    def config_path(self) -> Path:
        return self.project_dir / self.config_file

    @property
    def volumes_path(self) -> Path:
        return self.project_dir / self.volumes_dir
