"""Tests for setting validators and secret generation."""

import pytest

from pocketenv.core.errors import (
    EmptyRequiredError,
    InvalidPortError,
    InvalidTokenError,
    InvalidValueError,
    SettingValidationError,
)
from pocketenv.core.models import Rule, SecretFlavor
from pocketenv.environment import validators
from pocketenv.environment.generator import generate_for, generate_iv, generate_secret


class TestValidatePort:
    @pytest.mark.parametrize("value", ["1", "80", "8080", "65535"])
    def test_accepts_ports_in_range(self, value):
        validators.validate_port(value)

    @pytest.mark.parametrize("value", ["0", "65536", "-1", "80a", "", " 80", "8.0", "99999"])
    def test_rejects_everything_else(self, value):
        with pytest.raises(InvalidPortError, match="Invalid port number"):
            validators.validate_port(value)

    def test_port_error_is_a_validation_error(self):
        with pytest.raises(SettingValidationError):
            validators.check(Rule.PORT, "abc")


class TestValidateIvToken:
    @pytest.mark.parametrize("value", ["abcdefghijklmnop", "A1_-B2c3D4e5F6g7", "0" * 16])
    def test_accepts_sixteen_allowed_characters(self, value):
        validators.check(Rule.IV_TOKEN, value)

    def test_rejects_wrong_length(self):
        with pytest.raises(InvalidTokenError, match=r"exactly 16 characters long \(current: 15\)"):
            validators.check(Rule.IV_TOKEN, "a" * 15)
        with pytest.raises(InvalidTokenError):
            validators.check(Rule.IV_TOKEN, "a" * 17)

    @pytest.mark.parametrize("bad", ["+", "=", "/", " ", "."])
    def test_rejects_characters_outside_charset(self, bad):
        with pytest.raises(InvalidTokenError, match="invalid characters"):
            validators.check(Rule.IV_TOKEN, "a" * 15 + bad)


class TestOtherRules:
    def test_non_empty(self):
        validators.check(Rule.NON_EMPTY, "x")
        with pytest.raises(EmptyRequiredError):
            validators.check(Rule.NON_EMPTY, "   ")

    def test_password_minimum_length(self):
        validators.check(Rule.PASSWORD, "12345678")
        with pytest.raises(InvalidValueError, match="at least 8"):
            validators.check(Rule.PASSWORD, "1234567")

    def test_admin_password_exact_length(self):
        validators.check(Rule.ADMIN_PASSWORD, "x" * 32)
        with pytest.raises(InvalidValueError):
            validators.check(Rule.ADMIN_PASSWORD, "x" * 31)

    def test_positive_int(self):
        validators.check(Rule.POSITIVE_INT, "300")
        for value in ("0", "-5", "ten"):
            with pytest.raises(InvalidValueError):
                validators.check(Rule.POSITIVE_INT, value)

    @pytest.mark.parametrize("value", ["512m", "1g", "1024", "2G", "64k"])
    def test_memory_size_accepts(self, value):
        validators.check(Rule.MEMORY_SIZE, value)

    @pytest.mark.parametrize("value", ["", "m", "1gb", "1.5g"])
    def test_memory_size_rejects(self, value):
        with pytest.raises(InvalidValueError):
            validators.check(Rule.MEMORY_SIZE, value)

    def test_log_level(self):
        validators.check(Rule.LOG_LEVEL, "WARN")
        with pytest.raises(InvalidValueError, match="Available: DEBUG, INFO, WARN, ERROR"):
            validators.check(Rule.LOG_LEVEL, "TRACE")

    def test_bool(self):
        validators.check(Rule.BOOL, "Yes")
        with pytest.raises(InvalidValueError):
            validators.check(Rule.BOOL, "maybe")


class TestGenerator:
    def test_default_secret_shape(self):
        for _ in range(200):
            secret = generate_secret()
            assert len(secret) == 32
            assert not set(secret) & set("=+/")
            assert secret.isalnum()

    def test_forbidden_characters_are_stripped_from_custom_charset(self):
        secret = generate_secret(64, "ab=+/")
        assert len(secret) == 64
        assert set(secret) <= {"a", "b"}

    def test_iv_is_valid_token(self):
        for _ in range(200):
            iv = generate_iv()
            validators.check(Rule.IV_TOKEN, iv)

    def test_values_differ_between_calls(self):
        assert len({generate_secret() for _ in range(20)}) == 20

    def test_generate_for_flavor(self):
        assert len(generate_for(SecretFlavor.PASSWORD)) == 32
        assert len(generate_for(SecretFlavor.IV)) == 16

    def test_invalid_arguments(self):
        with pytest.raises(ValueError, match="positive"):
            generate_secret(0)
        with pytest.raises(ValueError, match="empty"):
            generate_secret(8, "=+/")


class TestEnvSafeValues:
    @pytest.mark.parametrize("value", ["Abc123xyz", "safe-password_1", "a.b,c:d@e"])
    def test_accepts_plain_values(self, value):
        validators.validate_env_safe(value)

    @pytest.mark.parametrize(
        "value", ["two words", "tab\there", "a=b", "pa$$word", "it's", 'say"hi"', "`id`", "back\\slash"]
    )
    def test_rejects_shell_sensitive_characters(self, value):
        with pytest.raises(InvalidValueError):
            validators.validate_env_safe(value)

    def test_generated_secrets_are_safe(self):
        for _ in range(50):
            validators.validate_env_safe(generate_secret())
            validators.validate_env_safe(generate_iv())
