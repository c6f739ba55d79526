"""The fixed table of settings collected for a Pocket deployment.

Declaration order is resolution order: derived settings follow their source
and settings with ``enabled_by`` follow the flag that enables them.
"""

from __future__ import annotations

from .models import Normalizer, Rule, SecretFlavor, Section, Setting, SettingKind

SERVER_PORT_FALLBACK = "8081"

SETTINGS: tuple[Setting, ...] = (
    # Database
    Setting(
        key="DB_ROOT_PASSWORD",
        label="MariaDB root password",
        section=Section.DATABASE,
        kind=SettingKind.SECRET,
        flavor=SecretFlavor.PASSWORD,
        rule=Rule.PASSWORD,
        hidden=True,
        required=True,
    ),
    Setting(
        key="DB_USERNAME",
        label="Database username",
        section=Section.DATABASE,
        default="pocket_user",
        rule=Rule.NON_EMPTY,
    ),
    Setting(
        key="DB_PASSWORD",
        label="database user password",
        section=Section.DATABASE,
        kind=SettingKind.SECRET,
        flavor=SecretFlavor.PASSWORD,
        rule=Rule.PASSWORD,
        hidden=True,
        required=True,
    ),
    # Backend
    Setting(
        key="AES_CBC_IV",
        label="AES CBC IV (exactly 16 characters)",
        section=Section.BACKEND,
        kind=SettingKind.SECRET,
        flavor=SecretFlavor.IV,
        rule=Rule.IV_TOKEN,
        required=True,
    ),
    Setting(
        key="ADMIN_USER",
        label="Admin username",
        section=Section.BACKEND,
        default="admin@pocket.local",
        rule=Rule.NON_EMPTY,
    ),
    Setting(
        key="ADMIN_PASSWD",
        label="admin password (exactly 32 characters)",
        section=Section.BACKEND,
        kind=SettingKind.SECRET,
        flavor=SecretFlavor.PASSWORD,
        rule=Rule.ADMIN_PASSWORD,
        hidden=True,
        required=True,
    ),
    Setting(
        key="SERVER_URL",
        label="Server URL",
        section=Section.BACKEND,
        default="http://localhost:8081",
        rule=Rule.NON_EMPTY,
    ),
    Setting(
        key="SERVER_PORT",
        label="Backend port",
        section=Section.BACKEND,
        kind=SettingKind.DERIVED,
        source="SERVER_URL",
        default=SERVER_PORT_FALLBACK,
        rule=Rule.PORT,
    ),
    Setting(
        key="CORS_ADDITIONAL_ORIGINS",
        label="Additional CORS origins (comma-separated)",
        section=Section.BACKEND,
        default="",
        normalizer=Normalizer.CSV,
    ),
    Setting(
        key="CORS_ENABLE_STRICT",
        label="Enable strict CORS checking",
        section=Section.BACKEND,
        default="false",
        rule=Rule.BOOL,
        normalizer=Normalizer.BOOL,
    ),
    Setting(
        key="JVM_MAX_MEMORY",
        label="JVM Max Memory",
        section=Section.BACKEND,
        default="512m",
        rule=Rule.MEMORY_SIZE,
    ),
    Setting(
        key="JVM_MIN_MEMORY",
        label="JVM Min Memory",
        section=Section.BACKEND,
        default="256m",
        rule=Rule.MEMORY_SIZE,
    ),
    # Web app
    Setting(
        key="POCKET_HOST",
        label="Bind address/hostname",
        section=Section.WEB_APP,
        default="0.0.0.0",
        rule=Rule.NON_EMPTY,
        normalizer=Normalizer.BIND_HOST,
    ),
    Setting(
        key="POCKET_PORT",
        label="Web app port",
        section=Section.WEB_APP,
        default="8080",
        rule=Rule.PORT,
    ),
    Setting(
        key="BACKEND_URL",
        label="Frontend URL",
        section=Section.WEB_APP,
        default="",
    ),
    Setting(
        key="POCKET_MAX_THREADS",
        label="Max Threads",
        section=Section.WEB_APP,
        default="2",
        rule=Rule.POSITIVE_INT,
    ),
    Setting(
        key="POCKET_SESSION_EXPIRATION",
        label="Session Expiration (seconds)",
        section=Section.WEB_APP,
        default="300",
        rule=Rule.POSITIVE_INT,
    ),
    Setting(
        key="CORS_ALLOWED_ORIGINS",
        label="CORS allowed origins (comma-separated, REQUIRED)",
        section=Section.WEB_APP,
        rule=Rule.NON_EMPTY,
        required=True,
        normalizer=Normalizer.CSV,
    ),
    # General
    Setting(
        key="LOG_LEVEL",
        label="Log Level (DEBUG, INFO, WARN, ERROR)",
        section=Section.GENERAL,
        default="INFO",
        rule=Rule.LOG_LEVEL,
        normalizer=Normalizer.UPPER,
    ),
    Setting(
        key="ENABLE_PROXY",
        label="Enable nginx reverse proxy",
        section=Section.GENERAL,
        default="false",
        rule=Rule.BOOL,
        normalizer=Normalizer.BOOL,
    ),
    Setting(
        key="PROXY_PORT",
        label="Reverse proxy port",
        section=Section.GENERAL,
        default="80",
        rule=Rule.PORT,
        enabled_by="ENABLE_PROXY",
    ),
)

SETTING_KEYS: tuple[str, ...] = tuple(setting.key for setting in SETTINGS)


def by_key(key: str) -> Setting:
    for setting in SETTINGS:
        if setting.key == key:
            return setting
    raise KeyError(f"Unknown setting: {key}")
