from __future__ import annotations

import logging
import subprocess

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .._utils import run_logged
from ..core.errors import DaemonUnavailableError
from ..core.models import RuntimeProfile

logger = logging.getLogger(__name__)


def _is_daemon_unavailable(exc: subprocess.CalledProcessError) -> bool:
    msg = (exc.stderr or "") + (exc.stdout or "")
    lowered = msg.lower()
    return (
        "cannot connect to the docker daemon" in lowered
        or "is the docker daemon running" in lowered
        or "connection refused" in lowered
    )


def network_exists(profile: RuntimeProfile, name: str) -> bool:
    result = run_logged(
        [*profile.engine_command, "network", "inspect", name],
        capture_output=True,
        check=False,
        echo="never",
    )
    return result.returncode == 0


@retry(
    reraise=True,
    retry=retry_if_exception_type(DaemonUnavailableError),
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    before_sleep=before_sleep_log(logger, logging.WARNING),
)
def ensure_network(profile: RuntimeProfile, name: str) -> bool:
    """Create the named network unless it exists. Returns True when created."""
    logger.info(f"Setting up {profile.engine_invocation} network '{name}'...")
    if network_exists(profile, name):
        logger.info(f"Network '{name}' already exists")
        return False

    logger.info(f"Creating network '{name}'...")
    try:
        run_logged(
            [*profile.engine_command, "network", "create", name],
            capture_output=True,
            echo="on_error",
        )
    except subprocess.CalledProcessError as exc:
        if _is_daemon_unavailable(exc):
            raise DaemonUnavailableError(
                "Cannot reach the container daemon; is it running?"
            ) from exc
        raise
    logger.info(f"Network '{name}' created")
    return True
