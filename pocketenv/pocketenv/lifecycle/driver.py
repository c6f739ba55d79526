"""Top-level setup flow as an explicit state machine."""

from __future__ import annotations

import logging
import os
import signal
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator

import typer

from ..core.catalog import SETTING_KEYS, SETTINGS
from ..core.errors import SetupInterrupted
from ..core.models import ResolvedConfiguration, RuntimeProfile
from ..core.settings import ToolSettings
from ..environment import processor
from ..environment.resolver import Prompter, Resolver, TyperPrompter, derive_missing
from ..rendering import artifacts, engine
from ..rendering.context import build_context
from ..runtime import detector
from ..runtime.network import ensure_network
from . import provision, summary

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    START = "start"
    DETECT = "detect"
    LOAD_EXISTING = "load_existing"
    CONFIGURE = "configure"
    APPLY = "apply"
    SUMMARIZE = "summarize"
    DONE = "done"


def _raise_interrupted(signum: int, _frame: object) -> None:
    raise SetupInterrupted(f"received signal {signal.Signals(signum).name}")


@contextmanager
def cancellation() -> Iterator[None]:
    """Turn SIGTERM, Ctrl-C and aborted prompts into ``SetupInterrupted``."""
    in_main_thread = threading.current_thread() is threading.main_thread()
    previous = signal.signal(signal.SIGTERM, _raise_interrupted) if in_main_thread else None
    try:
        yield
    except (KeyboardInterrupt, typer.Abort) as exc:
        raise SetupInterrupted("interrupted by user") from exc
    finally:
        if in_main_thread and previous is not None:
            signal.signal(signal.SIGTERM, previous)


class LifecycleDriver:
    """Sequence detection, configuration and artifact generation.

    Nothing is written until configuration has been fully resolved; an
    interruption before ``APPLY`` leaves the project directory untouched.
    """

    def __init__(
        self,
        settings: ToolSettings,
        prompter: Prompter | None = None,
        *,
        detect_runtime: Callable[..., RuntimeProfile] | None = None,
    ) -> None:
        self.settings = settings
        self.prompter = prompter or TyperPrompter()
        self.detect_runtime = detect_runtime or detector.detect
        self.state = LifecycleState.START
        self.profile: RuntimeProfile | None = None
        self.config: ResolvedConfiguration | None = None
        self.previous: dict[str, str] = {}
        self.configured = False
        self.written: list[str] = []

    def run(self) -> ResolvedConfiguration:
        handlers: dict[LifecycleState, Callable[[], LifecycleState]] = {
            LifecycleState.START: self._start,
            LifecycleState.DETECT: self._detect,
            LifecycleState.LOAD_EXISTING: self._load_existing,
            LifecycleState.CONFIGURE: self._configure,
            LifecycleState.APPLY: self._apply,
            LifecycleState.SUMMARIZE: self._summarize,
        }
        with cancellation():
            while self.state is not LifecycleState.DONE:
                logger.debug(f"Entering state {self.state.value}")
                self.state = handlers[self.state]()

        assert self.config is not None
        return self.config

    def _start(self) -> LifecycleState:
        summary.show_banner()
        if hasattr(os, "geteuid") and os.geteuid() == 0:
            logger.warning("Running as root. Consider using a non-root user for better security.")
        return LifecycleState.DETECT

    def _detect(self) -> LifecycleState:
        self.profile = self.detect_runtime(self.settings.privilege_escalation)
        if self.settings.config_path.exists():
            return LifecycleState.LOAD_EXISTING
        return LifecycleState.CONFIGURE

    def _load_existing(self) -> LifecycleState:
        stored = processor.read_config_file(self.settings.config_path)
        self.previous = {key: stored.get(key, "") for key in SETTING_KEYS}
        reconfigure = False
        if not self.settings.non_interactive:
            reconfigure = self.prompter.confirm("Do you want to reconfigure?", False)

        if reconfigure:
            return LifecycleState.CONFIGURE

        logger.info("Using existing configuration")
        values = processor.load_existing(self.settings.config_path)
        self.config = ResolvedConfiguration(values=derive_missing(SETTINGS, values))
        return LifecycleState.APPLY

    def _configure(self) -> LifecycleState:
        logger.info("Starting interactive configuration...")
        # File values are offered as defaults, not kept silently.
        existing = processor.load_existing(None)
        resolver = Resolver(self.prompter, interactive=not self.settings.non_interactive)
        self.config = resolver.resolve(SETTINGS, existing, self.previous)
        self.configured = True
        return LifecycleState.APPLY

    def _template_ids(self) -> list[str]:
        assert self.config is not None
        ids: list[str] = []
        if self.configured:
            ids.append(artifacts.ENV.template_id)
        if self.config.flag("ENABLE_PROXY"):
            ids.append(artifacts.NGINX.template_id)
        ids.extend(spec.template_id for spec in artifacts.LIFECYCLE_SCRIPTS)
        return ids

    def _apply(self) -> LifecycleState:
        assert self.config is not None and self.profile is not None
        settings = self.settings

        context = build_context(self.config, self.profile, settings)
        rendered = engine.render_all(self._template_ids(), context, settings.project_dir)

        if self.configured:
            ensure_network(self.profile, settings.network)
        provision.setup_directories(settings.volumes_path)
        provision.copy_seed_files(settings.project_dir, settings.volumes_path)

        for artifact in rendered:
            spec = artifacts.get_spec(artifact.template_id)
            overwrite = self.configured or not spec.preserve_existing
            if engine.write_artifact(artifact, overwrite=overwrite):
                self.written.append(artifact.template_id)
        if self.configured:
            logger.info(f"Environment configuration saved to {settings.config_path}")
        return LifecycleState.SUMMARIZE

    def _summarize(self) -> LifecycleState:
        assert self.config is not None and self.profile is not None
        if self.configured and self.previous:
            summary.log_changes(self.previous, self.config.values)
        summary.display_configuration_summary(self.config, self.profile, self.settings)
        summary.display_final_info(self.profile, self.settings)
        return LifecycleState.DONE
