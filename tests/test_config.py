from __future__ import annotations

import pytest

from pystackit.config import StackItConfig
from pystackit.exceptions import StackItConfigError


def test_from_env_reads_stackit_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STACKIT_BASE_URL", "https://forum.example.com/")
    monkeypatch.setenv("STACKIT_USERNAME", "alice")
    monkeypatch.setenv("STACKIT_PASSWORD", "secret")
    monkeypatch.setenv("STACKIT_REQUEST_TIMEOUT", "7.5")
    monkeypatch.setenv("STACKIT_API_TRACE_ENABLED", "yes")

    config = StackItConfig.from_env()

    assert config.api_root == "https://forum.example.com/api/v1"
    assert config.has_credentials is True
    assert config.request_timeout == pytest.approx(7.5)
    assert config.api_trace_enabled is True
    assert config.session_ttl == 0.0


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STACKIT_USERNAME", "alice")
    monkeypatch.setenv("STACKIT_SESSION_TTL", "not-a-number")

    config = StackItConfig.from_env(username="bob", session_ttl=60.0)

    assert config.username == "bob"
    assert config.session_ttl == 60.0


def test_from_env_rejects_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STACKIT_REQUEST_TIMEOUT", "soon")
    with pytest.raises(StackItConfigError):
        StackItConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_url": "localhost:8000"},
        {"request_timeout": 0},
        {"session_ttl": -1},
    ],
)
def test_invalid_config_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(StackItConfigError):
        StackItConfig(**kwargs)  # type: ignore[arg-type]


def test_defaults_point_at_local_backend() -> None:
    config = StackItConfig()
    assert config.api_root == "http://localhost:8000/api/v1"
    assert config.has_credentials is False
