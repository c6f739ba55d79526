"""Pre-existing environment loading and value normalization."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, Mapping

from .._utils import read_env
from ..core.catalog import SETTING_KEYS

logger = logging.getLogger(__name__)

_PORT_IN_URL = re.compile(r".*:([0-9]+)")
_LOOPBACK_HOSTS = {"localhost", "127.0.0.1"}


def parse_bool(value: str, *, default: bool = False) -> bool:
    value_lower = value.strip().lower()
    if value_lower in {"true", "1", "yes", "on", "y"}:
        return True
    if value_lower in {"false", "0", "no", "off", "n"}:
        return False
    return default


def normalize_bool(value: str) -> str:
    """Canonicalize recognized booleans to ``true``/``false``; leave others as-is."""
    if value.strip().lower() in {"true", "1", "yes", "on", "y"}:
        return "true"
    if value.strip().lower() in {"false", "0", "no", "off", "n"}:
        return "false"
    return value


def parse_csv_list(raw: str) -> list[str]:
    """Split a comma-separated value into stripped, non-empty items."""
    if not raw.strip():
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def normalize_csv(raw: str) -> str:
    return ",".join(parse_csv_list(raw))


def normalize_bind_host(host: str) -> str:
    """Loopback names cannot be bound inside a container; use all interfaces."""
    if host in _LOOPBACK_HOSTS:
        logger.info("Converting to 0.0.0.0 for container binding")
        return "0.0.0.0"
    return host


def extract_port(url: str, fallback: str) -> str:
    """Return the digits after the last ``:`` in ``url``, or ``fallback``."""
    match = _PORT_IN_URL.match(url)
    if match:
        return match.group(1)
    return fallback


def read_config_file(path: Path) -> dict[str, str]:
    """Read a persisted env file; later duplicate keys override earlier ones."""
    return dict(read_env(path))


def load_existing(
    config_path: Path | None,
    environ: Mapping[str, str] | None = None,
    keys: Iterable[str] = SETTING_KEYS,
) -> dict[str, str]:
    """Collect values already supplied for the catalog keys.

    Process environment values are overlaid by the persisted file, which is
    the same precedence as sourcing the file into the current shell.

    Args:
        config_path: Persisted env file, or None to ignore it
        environ: Process environment (default: ``os.environ``)
        keys: Setting keys to collect

    Returns:
        Mapping of key to non-empty value
    """
    source = os.environ if environ is None else environ
    wanted = set(keys)

    existing: dict[str, str] = {
        key: value for key, value in source.items() if key in wanted and value
    }
    if config_path is not None and config_path.exists():
        logger.info(f"Loading existing configuration from {config_path}")
        for key, value in read_config_file(config_path).items():
            if key in wanted:
                existing[key] = value

    logger.debug(f"Pre-existing values for: {sorted(k for k, v in existing.items() if v)}")
    return {key: value for key, value in existing.items() if value}
