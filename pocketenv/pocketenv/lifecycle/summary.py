"""Human-readable reports printed at the end of a run."""

from __future__ import annotations

import hashlib
import logging
from typing import Iterable, Mapping

import typer
from deepdiff import DeepDiff

from ..core.catalog import SETTINGS
from ..core.models import ResolvedConfiguration, RuntimeProfile, Setting
from ..core.settings import ToolSettings
from ..environment.processor import parse_csv_list
from ..rendering.artifacts import LIFECYCLE_SCRIPTS

logger = logging.getLogger(__name__)

BANNER = """\
╔══════════════════════════════════════════════════════════════╗
║                    POCKET FULL STACK SETUP                   ║
║                                                              ║
║  Backend + Web App + MariaDB                                 ║
║  Secure configuration with auto-generated secrets            ║
║  Docker/Podman compatible                                    ║
╚══════════════════════════════════════════════════════════════╝"""


def show_banner() -> None:
    typer.secho(BANNER, fg=typer.colors.CYAN)


def _heading(title: str) -> None:
    typer.echo()
    typer.secho(title, bold=True)
    typer.echo("=" * len(title))


def _fingerprint(value: str) -> str:
    return "sha256:" + hashlib.sha256(value.encode("utf-8")).hexdigest()[:12]


def redact(
    values: Mapping[str, str], settings: Iterable[Setting] = SETTINGS
) -> dict[str, str]:
    """Replace secret values with a short fingerprint."""
    secret_keys = {setting.key for setting in settings if setting.is_secret}
    return {
        key: _fingerprint(value) if key in secret_keys and value else value
        for key, value in values.items()
    }


def changed_keys(before: Mapping[str, str], after: Mapping[str, str]) -> list[str]:
    diff = DeepDiff(redact(before), redact(after), ignore_order=True)
    return sorted(str(key) for key in diff.affected_root_keys)


def log_changes(before: Mapping[str, str], after: Mapping[str, str]) -> list[str]:
    keys = changed_keys(before, after)
    if keys:
        logger.info(f"Updated settings: {', '.join(keys)}")
    else:
        logger.info("No settings changed")
    return keys


def display_configuration_summary(
    config: ResolvedConfiguration, profile: RuntimeProfile, settings: ToolSettings
) -> None:
    _heading("Configuration Summary")
    typer.echo()
    typer.echo("Database:")
    typer.echo(f"   Username: {config['DB_USERNAME']}")
    typer.echo("   Port: 3306")
    typer.echo()
    typer.echo("Backend:")
    typer.echo(f"   URL: {config['SERVER_URL']}")
    typer.echo(f"   Port: {config['SERVER_PORT']}")
    typer.echo(f"   Admin User: {config['ADMIN_USER']}")
    typer.echo(f"   JVM Memory: {config['JVM_MIN_MEMORY']} - {config['JVM_MAX_MEMORY']}")
    typer.echo()
    typer.echo("Web App:")
    typer.echo(f"   Host: {config['POCKET_HOST']}")
    typer.echo(f"   Port: {config['POCKET_PORT']}")
    if config["BACKEND_URL"]:
        typer.echo(f"   Frontend URL: {config['BACKEND_URL']} (custom)")
    else:
        typer.echo(
            f"   Frontend URL: http://{config['POCKET_HOST']}:{config['POCKET_PORT']} (auto)"
        )
    typer.echo(f"   Max Threads: {config['POCKET_MAX_THREADS']}")
    typer.echo(f"   Session Expiration: {config['POCKET_SESSION_EXPIRATION']} seconds")
    origins = parse_csv_list(config["CORS_ALLOWED_ORIGINS"])
    if origins:
        typer.echo(f"   CORS Origins: {', '.join(origins)}")
    typer.echo()
    typer.echo("General:")
    typer.echo(f"   Log Level: {config['LOG_LEVEL']}")
    typer.echo(f"   Container Runtime: {profile.engine_invocation}")
    if config.flag("ENABLE_PROXY"):
        typer.echo(f"   Reverse Proxy: port {config['PROXY_PORT']}")
    typer.echo()
    typer.echo(f"Volumes Directory: {settings.volumes_dir}")
    typer.echo(f"Network: {settings.network}")


def display_final_info(profile: RuntimeProfile, settings: ToolSettings) -> None:
    compose = profile.compose_invocation
    typer.echo()
    typer.secho(
        "Pocket Full Stack environment setup completed successfully!",
        fg=typer.colors.GREEN,
    )

    _heading("What was created")
    typer.echo(f"  Environment configuration ({settings.config_file})")
    typer.echo(f"  Volume directories ({settings.volumes_dir}/)")
    typer.echo("  Network configuration")
    for spec in LIFECYCLE_SCRIPTS:
        typer.echo(f"  {spec.target}")

    _heading("Next steps")
    typer.echo("1. Build the images:")
    typer.echo(f"   {compose} build")
    typer.echo()
    typer.echo("2. Start the services (will also install CLI tools):")
    typer.echo("   ./start_pocket.sh")
    typer.echo()
    typer.echo("3. Check service status:")
    typer.echo(f"   {compose} ps")

    _heading("Maintenance")
    typer.echo("   Remove images: ./clean_images.sh")
    typer.echo("   Full cleanup:  ./clean_pocket.sh")

    _heading("Security Notes")
    typer.echo(
        f"Keep your {settings.config_file} file secure and never commit it to version control"
    )
    typer.echo(f"All passwords and secrets are stored in {settings.config_file}")
    typer.echo(f"Database and application volumes are in {settings.volumes_dir}/")
    typer.echo()
    logger.warning(
        f"Remember to backup your {settings.config_file} file and {settings.volumes_dir}/ directory!"
    )
