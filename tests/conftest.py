import pytest

_ENV_VARS = (
    "AGIFY_BASE_URL",
    "AGIFY_API_KEY",
    "AGIFY_TIMEOUT",
    "AGIFY_LOG_LEVEL",
    "AGIFY_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer AGIFY_* variables out of settings-based tests."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
