"""Tests for environment-driven settings."""

from __future__ import annotations

from agify.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.base_url == "https://api.agify.io"
    assert s.api_key is None
    assert s.timeout == 30.0
    assert s.log_level == "INFO"
    assert s.log_format == "text"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AGIFY_BASE_URL", "http://localhost:8080")
    monkeypatch.setenv("AGIFY_API_KEY", "secret")
    monkeypatch.setenv("AGIFY_TIMEOUT", "2.5")
    s = Settings(_env_file=None)
    assert s.base_url == "http://localhost:8080"
    assert s.api_key == "secret"
    assert s.timeout == 2.5
