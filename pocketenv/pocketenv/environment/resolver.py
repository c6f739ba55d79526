"""Configuration resolution: reuse, prompt, generate, validate."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Protocol

import typer

from ..core.errors import NonInteractiveResolutionError, SettingValidationError
from ..core.models import (
    Normalizer,
    ResolvedConfiguration,
    Section,
    Setting,
    SettingKind,
)
from . import validators
from .generator import generate_for
from .processor import (
    extract_port,
    normalize_bind_host,
    normalize_bool,
    normalize_csv,
    parse_bool,
)

logger = logging.getLogger(__name__)


class Prompter(Protocol):
    def heading(self, title: str) -> None: ...

    def text(self, label: str, default: str | None, hidden: bool) -> str: ...

    def confirm(self, label: str, default: bool) -> bool: ...


class TyperPrompter:
    """Terminal prompts backed by typer."""

    def heading(self, title: str) -> None:
        typer.echo()
        typer.secho(f"[CONFIG] {title}", fg=typer.colors.MAGENTA)
        typer.echo("=" * (len(title) + 9))

    def text(self, label: str, default: str | None, hidden: bool) -> str:
        return typer.prompt(
            label, default=default, hide_input=hidden, show_default=not hidden
        )

    def confirm(self, label: str, default: bool) -> bool:
        return typer.confirm(label, default=default)


def _short_label(setting: Setting) -> str:
    return setting.label.split(" (", 1)[0]


def normalize(setting: Setting, value: str) -> str:
    if not setting.hidden:
        value = value.strip()
    if setting.normalizer is Normalizer.CSV:
        return normalize_csv(value)
    if setting.normalizer is Normalizer.BIND_HOST:
        return normalize_bind_host(value)
    if setting.normalizer is Normalizer.UPPER:
        return value.upper()
    if setting.normalizer is Normalizer.BOOL:
        return normalize_bool(value)
    return value


def validate(setting: Setting, value: str) -> None:
    if setting.required:
        validators.validate_non_empty(value)
    if setting.rule is not None and (value or setting.required):
        validators.check(setting.rule, value)
    if setting.is_secret:
        validators.validate_env_safe(value)


def derive(setting: Setting, values: Mapping[str, str]) -> str:
    """Compute a derived setting from its already-resolved source."""
    if setting.source is None:
        raise ValueError(f"Derived setting {setting.key} has no source")
    fallback = setting.default or ""
    derived = extract_port(values.get(setting.source, ""), fallback)
    try:
        validate(setting, derived)
    except SettingValidationError:
        logger.warning(
            f"Could not use '{derived}' from {setting.source}; falling back to {fallback}"
        )
        derived = fallback
    return derived


def derive_missing(
    settings: Iterable[Setting], values: Mapping[str, str]
) -> dict[str, str]:
    """Fill derived settings absent from a loaded configuration."""
    filled = dict(values)
    for setting in settings:
        if setting.kind is SettingKind.DERIVED and not filled.get(setting.key):
            filled[setting.key] = derive(setting, filled)
            logger.info(f"Derived {setting.key}={filled[setting.key]}")
    return filled


class Resolver:
    """Resolve every setting in declaration order.

    Args:
        prompter: Source of operator input; unused when non-interactive
        interactive: When False, missing or invalid values raise instead of prompting
    """

    def __init__(self, prompter: Prompter | None = None, *, interactive: bool = True):
        if interactive and prompter is None:
            raise ValueError("An interactive resolver needs a prompter")
        self.prompter = prompter
        self.interactive = interactive

    def resolve(
        self,
        settings: Iterable[Setting],
        existing: Mapping[str, str],
        previous: Mapping[str, str] | None = None,
    ) -> ResolvedConfiguration:
        previous = previous or {}
        values: dict[str, str] = {}
        section: Section | None = None

        for setting in settings:
            if setting.section is not section:
                section = setting.section
                if self.interactive and self.prompter is not None:
                    self.prompter.heading(section.title)
            values[setting.key] = self._resolve_one(
                setting, values, existing.get(setting.key, ""), previous.get(setting.key, "")
            )

        return ResolvedConfiguration(values=values)

    def _resolve_one(
        self, setting: Setting, values: Mapping[str, str], prior: str, previous: str
    ) -> str:
        if prior:
            logger.debug(f"Keeping pre-existing value for {setting.key}")
            return prior

        if setting.enabled_by and not parse_bool(values.get(setting.enabled_by, "")):
            return ""

        if setting.kind is SettingKind.DERIVED:
            value = derive(setting, values)
            logger.info(f"Using port {value} from {setting.source}")
            return value

        if setting.is_secret:
            return self._resolve_secret(setting, previous)

        return self._resolve_text(setting, previous or setting.default)

    def _resolve_secret(self, setting: Setting, previous: str) -> str:
        name = _short_label(setting)
        if not self.interactive:
            return previous or self._generate(setting)

        assert self.prompter is not None
        if previous and self.prompter.confirm(f"Keep existing {name}?", True):
            return previous
        if self.prompter.confirm(f"Generate secure {name} automatically?", True):
            return self._generate(setting)
        return self._ask(setting, None, label=f"Enter {setting.label}")

    def _generate(self, setting: Setting) -> str:
        if setting.flavor is None:
            raise ValueError(f"Secret setting {setting.key} has no generator flavor")
        value = generate_for(setting.flavor)
        logger.info(f"Generated secure {_short_label(setting)}")
        return value

    def _resolve_text(self, setting: Setting, default: str | None) -> str:
        if self.interactive:
            return self._ask(setting, default, label=setting.label)

        value = normalize(setting, default or "")
        try:
            validate(setting, value)
        except SettingValidationError as exc:
            raise NonInteractiveResolutionError(setting.key, str(exc)) from exc
        return value

    def _ask(self, setting: Setting, default: str | None, *, label: str) -> str:
        if not self.interactive:
            raise NonInteractiveResolutionError(setting.key, "operator input required")
        assert self.prompter is not None

        while True:
            raw = self.prompter.text(label, default, setting.hidden)
            value = normalize(setting, raw)
            try:
                validate(setting, value)
            except SettingValidationError as exc:
                logger.error(f"{setting.key}: {exc}")
                continue
            return value


def resolve(
    settings: Iterable[Setting],
    existing: Mapping[str, str],
    prompter: Prompter | None = None,
    *,
    interactive: bool = True,
    previous: Mapping[str, str] | None = None,
) -> ResolvedConfiguration:
    """Resolve ``settings`` against pre-existing values and operator input."""
    return Resolver(prompter, interactive=interactive).resolve(
        settings, existing, previous
    )
