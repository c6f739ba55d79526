"""Pure validation predicates for setting values.

Every validator takes a string and either returns ``None`` or raises a
:class:`~pocketenv.core.errors.SettingValidationError` subclass describing the
problem in operator-facing terms.
"""

from __future__ import annotations

import re
import string

from ..core.errors import (
    EmptyRequiredError,
    InvalidPortError,
    InvalidTokenError,
    InvalidValueError,
)
from ..core.models import Rule

IV_LENGTH = 16
IV_CHARSET = frozenset(string.ascii_letters + string.digits + "_-")
ADMIN_PASSWORD_LENGTH = 32
MIN_PASSWORD_LENGTH = 8
LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

_DIGITS = re.compile(r"^[0-9]+$")
_MEMORY_SIZE = re.compile(r"^[0-9]+[kKmMgG]?$")
_BOOL_VALUES = {"true", "false", "1", "0", "yes", "no", "on", "off", "y", "n"}
# Characters that change the meaning of an unquoted value in a sourced env file.
_ENV_UNSAFE = re.compile(r"[\s=\"'$`\\]")


def validate_port(value: str) -> None:
    if not _DIGITS.match(value) or not 1 <= int(value) <= 65535:
        raise InvalidPortError(f"Invalid port number: {value}")


def validate_fixed_token(value: str, length: int, charset: frozenset[str]) -> None:
    if len(value) != length:
        raise InvalidTokenError(
            f"Value must be exactly {length} characters long (current: {len(value)})"
        )
    if any(ch not in charset for ch in value):
        raise InvalidTokenError(
            "Value contains invalid characters. Use only A-Z, a-z, 0-9, _, -"
        )


def validate_non_empty(value: str) -> None:
    if not value.strip():
        raise EmptyRequiredError("A value is required")


def validate_env_safe(value: str) -> None:
    if _ENV_UNSAFE.search(value):
        raise InvalidValueError(
            "Value must not contain whitespace, quotes, backslashes, '=', '$' or backticks"
        )


def validate_min_length(value: str, length: int) -> None:
    if len(value) < length:
        raise InvalidValueError(f"Password must be at least {length} characters long")


def validate_exact_length(value: str, length: int) -> None:
    if len(value) != length:
        raise InvalidValueError(
            f"Value must be exactly {length} characters long (current: {len(value)})"
        )


def validate_positive_int(value: str) -> None:
    if not _DIGITS.match(value) or int(value) <= 0:
        raise InvalidValueError(f"Must be a positive number: {value}")


def validate_memory_size(value: str) -> None:
    if not _MEMORY_SIZE.match(value):
        raise InvalidValueError(
            f"Invalid memory size: {value} (expected e.g. 256m, 1g)"
        )


def validate_bool(value: str) -> None:
    if value.strip().lower() not in _BOOL_VALUES:
        raise InvalidValueError(f"Expected true or false, got: {value}")


def validate_choice(value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise InvalidValueError(
            f"Invalid value: {value}. Available: {', '.join(choices)}"
        )


def check(rule: Rule, value: str) -> None:
    """Apply the validator registered for ``rule``."""
    if rule is Rule.PORT:
        validate_port(value)
    elif rule is Rule.IV_TOKEN:
        validate_fixed_token(value, IV_LENGTH, IV_CHARSET)
    elif rule is Rule.NON_EMPTY:
        validate_non_empty(value)
    elif rule is Rule.PASSWORD:
        validate_min_length(value, MIN_PASSWORD_LENGTH)
    elif rule is Rule.ADMIN_PASSWORD:
        validate_exact_length(value, ADMIN_PASSWORD_LENGTH)
    elif rule is Rule.POSITIVE_INT:
        validate_positive_int(value)
    elif rule is Rule.MEMORY_SIZE:
        validate_memory_size(value)
    elif rule is Rule.BOOL:
        validate_bool(value)
    elif rule is Rule.LOG_LEVEL:
        validate_choice(value, LOG_LEVELS)
    else:
        raise ValueError(f"Unknown rule: {rule}")
