"""Redaction of StackIt payloads for API trace logging.

The auth round trip carries a password and a bearer token, and ``/auth/me``
returns the account e-mail. Trace logs keep the shape of those payloads
but never their secrets.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"

# Keys are matched case-insensitively on their suffix, so ``access_token``
# and ``hashed_password`` are covered while ``token_type`` is kept.
_SECRET_KEY_SUFFIXES: tuple[str, ...] = ("password", "token", "secret", "authorization", "cookie")
_EMAIL_KEYS: frozenset[str] = frozenset({"email", "e-mail", "email_address"})

_BEARER_RE = re.compile(r"(?i)\bbearer\s+[^\s,;]+")
_MAX_DEPTH = 20


def _is_secret_key(key: str) -> bool:
    return key.lower().endswith(_SECRET_KEY_SUFFIXES)


def mask_email(value: str) -> str:
    """Keep the first character and the domain: ``alice@x.org`` -> ``a***@x.org``."""
    local, sep, domain = value.partition("@")
    if not sep or not local:
        return REDACTED
    return f"{local[0]}***@{domain}"


def _redact_string(value: str, max_string: int) -> str:
    value = _BEARER_RE.sub(f"Bearer {REDACTED}", value)
    if len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value


def _redact_mapping(value: Mapping[Any, Any], max_string: int, depth: int) -> dict[str, Any]:
    redacted: dict[str, Any] = {}
    for raw_key, item in value.items():
        key = str(raw_key)
        if _is_secret_key(key):
            redacted[key] = REDACTED
        elif key.lower() in _EMAIL_KEYS and isinstance(item, str):
            redacted[key] = mask_email(item)
        else:
            redacted[key] = redact_for_log(item, max_string=max_string, _depth=depth + 1)
    return redacted


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of a request or response body that is safe to log at DEBUG.

    Secret fields and bearer tokens inside strings become ``<redacted>``.
    E-mail addresses keep only their first letter and domain. Long text such
    as question HTML is cut at *max_string* characters.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _redact_string(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return _redact_mapping(value, max_string, _depth)
    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
    return repr(value)
