"""Settings validation."""

import pytest
from pydantic import ValidationError

from agora.core.config import Settings


def test_defaults_use_memory_backend() -> None:
    settings = Settings(_env_file=None)
    assert settings.database_backend == "memory"
    assert settings.identity_fallback_on_delete is True
    assert settings.feed_default_limit == 20
    assert settings.feed_max_limit == 100


def test_postgres_requires_database_url() -> None:
    with pytest.raises(ValidationError, match="DATABASE_URL"):
        Settings(_env_file=None, database_backend="postgres", database_url="")


def test_unknown_backend_rejected() -> None:
    with pytest.raises(ValidationError, match="database_backend"):
        Settings(_env_file=None, database_backend="mongo")


def test_feed_limits_validated() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, feed_default_limit=50, feed_max_limit=10)


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IDENTITY_FALLBACK_ON_DELETE", "false")
    monkeypatch.setenv("DATABASE_BACKEND", "postgres")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost/agora")

    settings = Settings(_env_file=None)

    assert settings.identity_fallback_on_delete is False
    assert settings.database_backend == "postgres"
