"""Main CLI application."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

import typer
from typing_extensions import Annotated

from ..core.errors import (
    ArtifactWriteError,
    ContainerEnvironmentError,
    NonInteractiveResolutionError,
    SetupInterrupted,
)
from ..core.settings import ToolSettings
from ..lifecycle.driver import LifecycleDriver

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="pocketenv",
    help="Interactive environment setup for the Pocket full stack on Docker or Podman.",
    add_completion=False,
)


@app.command()
def setup(
    project_dir: Annotated[
        str,
        typer.Option(
            "--project-dir",
            help="Directory receiving the env file, scripts and volumes (default: cwd).",
            metavar="DIR",
        ),
    ] = "",
    non_interactive: Annotated[
        bool,
        typer.Option(
            "--non-interactive",
            help="Never prompt: generate secrets, take defaults, fail on missing values.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Configure the Pocket environment and generate its lifecycle scripts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    overrides: dict[str, object] = {}
    if project_dir:
        overrides["project_dir"] = Path(project_dir)
    if non_interactive:
        overrides["non_interactive"] = True
    settings = ToolSettings(**overrides)  # type: ignore[arg-type]
    logger.debug(f"Settings: {settings.model_dump()}")

    try:
        LifecycleDriver(settings).run()
    except ContainerEnvironmentError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc
    except SetupInterrupted as exc:
        typer.echo()
        logger.error("Setup interrupted by user")
        raise typer.Exit(code=1) from exc
    except NonInteractiveResolutionError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc
    except ArtifactWriteError as exc:
        logger.error(f"{exc}. The deployment is NOT fully configured.")
        raise typer.Exit(code=1) from exc
    except subprocess.CalledProcessError as exc:
        logger.error(f"Command failed ({exc.returncode}): {' '.join(map(str, exc.cmd))}")
        raise typer.Exit(code=1) from exc


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
