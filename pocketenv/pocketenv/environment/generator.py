"""Cryptographically strong secret generation.

Passwords use an alphanumeric alphabet so generated values never contain the
``=``, ``+`` or ``/`` characters that break the unquoted env file.

The AES-CBC IV is exactly 16 characters because the cipher needs a 16-byte IV.
Restricting it to ``[A-Za-z0-9_-]`` is a convenience policy: with 64 symbols
per character the IV carries 96 bits of entropy rather than 128.
"""

from __future__ import annotations

import secrets
import string

from ..core.models import SecretFlavor
from .validators import IV_CHARSET, IV_LENGTH

DEFAULT_CHARSET = string.ascii_letters + string.digits
DEFAULT_LENGTH = 32
_FORBIDDEN = frozenset("=+/")


def generate_secret(length: int = DEFAULT_LENGTH, charset: str = DEFAULT_CHARSET) -> str:
    if length <= 0:
        raise ValueError(f"Secret length must be positive, got {length}")
    alphabet = "".join(ch for ch in dict.fromkeys(charset) if ch not in _FORBIDDEN)
    if not alphabet:
        raise ValueError("Secret alphabet is empty")
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_iv() -> str:
    return generate_secret(IV_LENGTH, "".join(sorted(IV_CHARSET)))


def generate_for(flavor: SecretFlavor) -> str:
    if flavor is SecretFlavor.IV:
        return generate_iv()
    return generate_secret(DEFAULT_LENGTH)
