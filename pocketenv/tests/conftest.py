"""Shared fixtures for pocketenv tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from pocketenv.core.catalog import SETTING_KEYS
from pocketenv.core.models import ResolvedConfiguration, RuntimeProfile
from pocketenv.core.settings import ToolSettings

CORS_LABEL = "CORS allowed origins (comma-separated, REQUIRED)"


class ScriptedPrompter:
    """Prompter answering from scripted replies; unscripted prompts take the default."""

    def __init__(self, answers=None, confirms=None, interrupt_on=None):
        self.answers = {
            label: list(value) if isinstance(value, list) else [value]
            for label, value in (answers or {}).items()
        }
        self.confirms = dict(confirms or {})
        self.interrupt_on = interrupt_on
        self.asked: list[str] = []
        self.headings: list[str] = []

    def heading(self, title):
        self.headings.append(title)

    def text(self, label, default, hidden):
        self.asked.append(label)
        if label == self.interrupt_on:
            raise KeyboardInterrupt
        queue = self.answers.get(label)
        if queue:
            return queue.pop(0)
        if default is None:
            raise AssertionError(f"Unscripted prompt without default: {label}")
        return default

    def confirm(self, label, default):
        self.asked.append(label)
        if label == self.interrupt_on:
            raise KeyboardInterrupt
        return self.confirms.get(label, default)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's shell from leaking setting values into tests."""
    for key in SETTING_KEYS:
        monkeypatch.delenv(key, raising=False)
    for name in ("PROJECT_DIR", "CONFIG_FILE", "NON_INTERACTIVE", "PRIVILEGE_ESCALATION"):
        monkeypatch.delenv(f"POCKETENV_{name}", raising=False)


@pytest.fixture
def docker_profile() -> RuntimeProfile:
    return RuntimeProfile(
        engine="docker",
        engine_command=("sudo", "docker"),
        compose_command=("sudo", "docker", "compose"),
        needs_privilege_escalation=True,
    )


@pytest.fixture
def podman_profile() -> RuntimeProfile:
    return RuntimeProfile(
        engine="podman",
        engine_command=("podman",),
        compose_command=("podman-compose",),
    )


@pytest.fixture
def tool_settings(tmp_path: Path) -> ToolSettings:
    return ToolSettings(project_dir=tmp_path)


@pytest.fixture
def sample_config() -> ResolvedConfiguration:
    return ResolvedConfiguration(
        values={
            "DB_ROOT_PASSWORD": "rootpassword1234567890abcdefghij",
            "DB_USERNAME": "pocket_user",
            "DB_PASSWORD": "userpassword1234567890abcdefghij",
            "AES_CBC_IV": "abcdefghijklmnop",
            "ADMIN_USER": "admin@pocket.local",
            "ADMIN_PASSWD": "A" * 32,
            "SERVER_URL": "http://localhost:8081",
            "SERVER_PORT": "8081",
            "CORS_ADDITIONAL_ORIGINS": "",
            "CORS_ENABLE_STRICT": "false",
            "JVM_MAX_MEMORY": "1g",
            "JVM_MIN_MEMORY": "256m",
            "POCKET_HOST": "0.0.0.0",
            "POCKET_PORT": "8080",
            "BACKEND_URL": "",
            "POCKET_MAX_THREADS": "10",
            "POCKET_SESSION_EXPIRATION": "3600",
            "CORS_ALLOWED_ORIGINS": "https://pocket.example.com",
            "LOG_LEVEL": "INFO",
            "ENABLE_PROXY": "false",
            "PROXY_PORT": "",
        }
    )


@pytest.fixture
def make_prompter():
    return ScriptedPrompter
