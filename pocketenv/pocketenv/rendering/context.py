"""Template context assembly."""

from __future__ import annotations

from typing import Any, Iterable

from ..core.catalog import SETTING_KEYS
from ..core.models import ResolvedConfiguration, RuntimeProfile
from ..core.settings import ToolSettings
from .artifacts import LIFECYCLE_SCRIPTS

BASE_SERVICES: tuple[str, ...] = ("pocket-db", "pocket-backend", "pocket-web-backend")
PROXY_SERVICE = "pocket-proxy"


def compose_services(proxy_enabled: bool) -> list[str]:
    services = list(BASE_SERVICES)
    if proxy_enabled:
        services.append(PROXY_SERVICE)
    return services


def build_context(
    config: ResolvedConfiguration,
    profile: RuntimeProfile,
    settings: ToolSettings,
    keys: Iterable[str] = SETTING_KEYS,
) -> dict[str, Any]:
    """Build the rendering context for every artifact.

    Setting keys are exposed upper-case as in the env file; absent keys
    render as the empty string. Lower-case keys are tool-level values.
    """
    context: dict[str, Any] = {key: config[key] for key in keys}
    proxy_enabled = config.flag("ENABLE_PROXY")

    context.update(
        engine=profile.engine,
        engine_invocation=profile.engine_invocation,
        compose_invocation=profile.compose_invocation,
        compose_services=" ".join(compose_services(proxy_enabled)),
        compose_project=settings.compose_project,
        network=settings.network,
        volumes_dir=settings.volumes_dir,
        config_file=settings.config_file,
        proxy_enabled=proxy_enabled,
        script_names=" ".join(spec.target for spec in LIFECYCLE_SCRIPTS),
    )
    return context
