from __future__ import annotations

import logging
import os
from pathlib import Path
from shutil import copy2

from ..core.errors import ProvisionError

logger = logging.getLogger(__name__)

VOLUMES: tuple[str, ...] = ("pocket-db-data", "pocket-logs", "pocket-web-logs")
DB_VOLUME = "pocket-db-data"
SEED_FILES: tuple[str, ...] = ("pocket5.sql", "pocket5-config.yaml")
SEED_SEARCH_DIRS: tuple[Path, ...] = (Path("pocket-backend") / "scripts", Path("scripts"))


def setup_directories(volumes_path: Path) -> list[Path]:
    """Create the volume directories. Returns the directories that were created.

    Raises:
        ProvisionError: A directory could not be created or chmod'ed
    """
    logger.info("Setting up directories and volumes...")
    created: list[Path] = []
    try:
        for path in (volumes_path, *(volumes_path / name for name in VOLUMES)):
            if not path.is_dir():
                path.mkdir(parents=True, exist_ok=True)
                created.append(path)
                logger.info(f"Created volume directory: {path}")
            os.chmod(path, 0o755)

        # MariaDB runs under its own uid inside the container and needs write access.
        os.chmod(volumes_path / DB_VOLUME, 0o777)
    except OSError as exc:
        raise ProvisionError(
            f"Cannot prepare volume directories in {volumes_path}: {exc}"
        ) from exc
    logger.info("All volume directories created and configured")
    return created


def find_seed_file(project_dir: Path, name: str) -> Path | None:
    for directory in SEED_SEARCH_DIRS:
        candidate = project_dir / directory / name
        if candidate.is_file():
            return candidate
    return None


def copy_seed_files(project_dir: Path, volumes_path: Path) -> list[Path]:
    """Copy database seed files into the volumes directory when present."""
    logger.info("Copying configuration files...")
    copied: list[Path] = []
    for name in SEED_FILES:
        source = find_seed_file(project_dir, name)
        if source is None:
            logger.warning(f"{name} not found. You may need to copy it manually.")
            continue
        destination = volumes_path / name
        try:
            copy2(source, destination)
        except OSError as exc:
            raise ProvisionError(f"Cannot copy {source} to {destination}: {exc}") from exc
        copied.append(destination)
        logger.info(f"Copied {source} to {destination}")
    return copied
