"""Container engine and compose front-end detection."""

from __future__ import annotations

import logging
from typing import Literal

from .._utils import has_command, run_logged
from ..core.errors import MissingComposeFrontendError, RuntimeNotFoundError
from ..core.models import EscalationPolicy, RuntimeProfile

logger = logging.getLogger(__name__)

# Probed in this order; the first engine found wins.
ENGINES: tuple[Literal["podman", "docker"], ...] = ("podman", "docker")

PODMAN_COMPOSE_REMEDIATION = "Please install it: pip install podman-compose"
DOCKER_COMPOSE_REMEDIATION = (
    "Please install the Docker Compose plugin (https://docs.docker.com/compose/install/)"
)


def _needs_escalation(engine: str, policy: EscalationPolicy) -> bool:
    if policy == "always":
        return True
    if policy == "never":
        return False
    return engine == "docker"


def _docker_compose_available() -> bool:
    result = run_logged(
        ["docker", "compose", "version"],
        capture_output=True,
        check=False,
        echo="never",
    )
    return result.returncode == 0


def detect(privilege_escalation: EscalationPolicy = "docker") -> RuntimeProfile:
    """Select the container engine and compose front-end for this host.

    Args:
        privilege_escalation: Which engines get a ``sudo`` prefix

    Returns:
        Immutable runtime profile

    Raises:
        RuntimeNotFoundError: No supported engine is installed
        MissingComposeFrontendError: The engine has no compose front-end
    """
    engine = next((name for name in ENGINES if has_command(name)), None)
    if engine is None:
        raise RuntimeNotFoundError(
            "Neither Podman nor Docker found. Please install one of them."
        )
    logger.info(f"Detected {engine.capitalize()} as container runtime")

    if engine == "podman":
        if not has_command("podman-compose"):
            raise MissingComposeFrontendError("podman", PODMAN_COMPOSE_REMEDIATION)
        compose: tuple[str, ...] = ("podman-compose",)
    else:
        if not _docker_compose_available():
            raise MissingComposeFrontendError("docker", DOCKER_COMPOSE_REMEDIATION)
        compose = ("docker", "compose")

    escalate = _needs_escalation(engine, privilege_escalation)
    prefix: tuple[str, ...] = ("sudo",) if escalate else ()
    return RuntimeProfile(
        engine=engine,
        engine_command=(*prefix, engine),
        compose_command=(*prefix, *compose),
        needs_privilege_escalation=escalate,
    )
