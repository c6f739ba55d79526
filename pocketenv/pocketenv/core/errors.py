"""Exception hierarchy for configuration resolution and artifact generation."""

from __future__ import annotations


class PocketEnvError(Exception):
    """Base class for all pocketenv errors."""


class ContainerEnvironmentError(PocketEnvError):
    """The host is missing a container engine or its compose front-end."""


class RuntimeNotFoundError(ContainerEnvironmentError):
    """Neither of the supported container engines is installed."""


class MissingComposeFrontendError(ContainerEnvironmentError):
    """The selected engine has no compose front-end available."""

    def __init__(self, engine: str, remediation: str) -> None:
        super().__init__(
            f"{engine} compose front-end is not installed. {remediation}"
        )
        self.engine = engine
        self.remediation = remediation


class DaemonUnavailableError(ContainerEnvironmentError):
    """The container engine daemon cannot be reached."""


class SettingValidationError(ValueError):
    """A setting value failed validation; recovered by re-prompting."""


class InvalidPortError(SettingValidationError):
    pass


class InvalidTokenError(SettingValidationError):
    pass


class EmptyRequiredError(SettingValidationError):
    pass


class InvalidValueError(SettingValidationError):
    pass


class SetupInterrupted(PocketEnvError):
    """Raised when the run is cancelled by a signal or an aborted prompt."""


class NonInteractiveResolutionError(PocketEnvError):
    """A setting cannot be resolved without asking the operator."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Cannot resolve {key} non-interactively: {reason}")
        self.key = key
        self.reason = reason


class TemplateKeyError(PocketEnvError):
    """A template references keys missing from the rendering context."""

    def __init__(self, template_id: str, missing: list[str]) -> None:
        super().__init__(
            f"Template '{template_id}' is missing context key(s): {', '.join(missing)}"
        )
        self.template_id = template_id
        self.missing = missing


class ArtifactWriteError(PocketEnvError):
    """A generated artifact could not be written to disk."""


class ProvisionError(ArtifactWriteError):
    """Volume directories or seed files could not be prepared."""
