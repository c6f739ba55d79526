"""Catalog of generated artifacts."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ENV_MODE = 0o600
SCRIPT_MODE = 0o755
CONFIG_MODE = 0o644


class ArtifactSpec(BaseModel):
    """Where and how one template is written."""

    model_config = ConfigDict(frozen=True)

    template_id: str
    template_name: str
    target: str = Field(..., description="Target path relative to the project dir")
    category: Literal["config", "script"]
    contains_secrets: bool = False
    preserve_existing: bool = Field(
        default=False, description="Keep an existing file unless reconfiguring"
    )

    @property
    def mode(self) -> int:
        if self.category == "script":
            return SCRIPT_MODE
        return ENV_MODE if self.contains_secrets else CONFIG_MODE


ENV = ArtifactSpec(
    template_id="env",
    template_name="env.j2",
    target="{config_file}",
    category="config",
    contains_secrets=True,
)
NGINX = ArtifactSpec(
    template_id="nginx",
    template_name="nginx.conf.j2",
    target="nginx/pocket.conf",
    category="config",
    preserve_existing=True,
)
START = ArtifactSpec(
    template_id="start",
    template_name="start_pocket.sh.j2",
    target="start_pocket.sh",
    category="script",
)
STOP = ArtifactSpec(
    template_id="stop",
    template_name="stop_pocket.sh.j2",
    target="stop_pocket.sh",
    category="script",
)
CLEAN = ArtifactSpec(
    template_id="clean",
    template_name="clean_pocket.sh.j2",
    target="clean_pocket.sh",
    category="script",
)
CLEAN_IMAGES = ArtifactSpec(
    template_id="clean-images",
    template_name="clean_images.sh.j2",
    target="clean_images.sh",
    category="script",
)
RUN_BACKEND = ArtifactSpec(
    template_id="run-backend",
    template_name="run_backend.sh.j2",
    target="run_backend.sh",
    category="script",
)

ARTIFACTS: dict[str, ArtifactSpec] = {
    spec.template_id: spec
    for spec in (ENV, NGINX, START, STOP, CLEAN, CLEAN_IMAGES, RUN_BACKEND)
}

LIFECYCLE_SCRIPTS: tuple[ArtifactSpec, ...] = (
    START,
    STOP,
    CLEAN,
    CLEAN_IMAGES,
    RUN_BACKEND,
)


def get_spec(template_id: str) -> ArtifactSpec:
    try:
        return ARTIFACTS[template_id]
    except KeyError:
        raise KeyError(f"Unknown template: {template_id}") from None
