"""Template rendering engine."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined, meta

from ..core.errors import TemplateKeyError
from ..core.models import Artifact
from .artifacts import get_spec
from .io import atomic_write_text

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


@lru_cache(maxsize=1)
def template_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def template_source(template_name: str) -> str:
    env = template_environment()
    source, _, _ = env.loader.get_source(env, template_name)  # type: ignore[union-attr]
    return source


def required_keys(template_name: str) -> set[str]:
    """Return every placeholder the template references."""
    env = template_environment()
    return meta.find_undeclared_variables(env.parse(template_source(template_name)))


def render(template_id: str, context: Mapping[str, Any], dest_root: Path) -> Artifact:
    """Render one catalogued template.

    Args:
        template_id: Artifact identifier (see ``rendering.artifacts``)
        context: Template context data
        dest_root: Base directory for the artifact's relative target

    Returns:
        Rendered artifact (nothing is written)

    Raises:
        TemplateKeyError: The context lacks keys the template references
    """
    spec = get_spec(template_id)
    missing = sorted(required_keys(spec.template_name) - set(context))
    if missing:
        raise TemplateKeyError(template_id, missing)

    body = template_source(spec.template_name)
    rendered = template_environment().get_template(spec.template_name).render(**context)
    target = dest_root / spec.target.format(**context)

    logger.debug(f"Rendered template: {spec.template_name}")
    return Artifact(
        template_id=template_id,
        target_path=target,
        template_body=body,
        rendered_body=rendered,
        mode=spec.mode,
    )


def write_artifact(artifact: Artifact, *, overwrite: bool = True) -> bool:
    """Write an artifact to disk. Returns False when an existing file was kept."""
    if not overwrite and artifact.target_path.exists():
        logger.info(f"Keeping existing {artifact.target_path}")
        return False

    atomic_write_text(artifact.target_path, artifact.rendered_body, mode=artifact.mode)
    logger.info(f"Created {artifact.target_path}")
    return True


def render_all(
    template_ids: list[str], context: Mapping[str, Any], dest_root: Path
) -> list[Artifact]:
    """Render several templates; fails before anything is written."""
    logger.debug(f"Rendering {len(template_ids)} template(s)")
    return [render(template_id, context, dest_root) for template_id in template_ids]
