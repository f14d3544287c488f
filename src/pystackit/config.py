"""Client configuration for pystackit."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pystackit._constants import API_PREFIX, BASE_URL, USER_AGENT
from pystackit.exceptions import StackItConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise StackItConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class StackItConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Scheme and host of the StackIt backend.
    api_prefix : str
        Path prefix prepended to every endpoint (``/api/v1``).
    username : str or None
        Account used by :meth:`StackItClient.login` when called without
        explicit credentials, and for automatic re-login after the token
        expires.
    password : str or None
        Password for *username*.
    request_timeout : float or None
        Total per-request timeout in seconds. ``None`` keeps aiohttp's
        default.
    session_ttl : float
        Bearer token time-to-live in seconds. ``0`` disables client-side
        expiry; the token is then only dropped when the server rejects it.
    api_trace_enabled : bool
        Log redacted request and response bodies at DEBUG level.
    user_agent : str
        ``User-Agent`` header value.
    """

    base_url: str = BASE_URL
    api_prefix: str = API_PREFIX
    username: str | None = None
    password: str | None = None
    request_timeout: float | None = None
    session_ttl: float = 0.0
    api_trace_enabled: bool = False
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise StackItConfigError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise StackItConfigError("request_timeout must be positive")
        if self.session_ttl < 0:
            raise StackItConfigError("session_ttl must not be negative")

    @property
    def api_root(self) -> str:
        """``base_url`` joined with ``api_prefix`` without duplicate slashes."""
        prefix = self.api_prefix.strip("/")
        root = self.base_url.rstrip("/")
        return f"{root}/{prefix}" if prefix else root

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and bool(self.password)

    @classmethod
    def from_env(cls, **overrides: Any) -> StackItConfig:
        """Create configuration from environment variables.

        Reads ``STACKIT_BASE_URL``, ``STACKIT_USERNAME``,
        ``STACKIT_PASSWORD`` and the other optional ``STACKIT_*``
        variables. Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        StackItConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "STACKIT_BASE_URL": "base_url",
            "STACKIT_API_PREFIX": "api_prefix",
            "STACKIT_USERNAME": "username",
            "STACKIT_PASSWORD": "password",
            "STACKIT_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("STACKIT_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("STACKIT_REQUEST_TIMEOUT", timeout_env)

        ttl_env = env.get("STACKIT_SESSION_TTL")
        if ttl_env is not None and "session_ttl" not in overrides:
            config_kwargs["session_ttl"] = _env_float("STACKIT_SESSION_TTL", ttl_env)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("STACKIT_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
