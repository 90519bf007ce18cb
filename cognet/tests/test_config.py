"""Tests for settings loading."""

from cognet.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.redis_url == "redis://localhost:6379/0"
    assert settings.suggestion_limit == 10
    assert settings.min_prefix_length == 2
    assert settings.import_batch_size == 1000


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("REDIS_HOST", "cache.internal")
    monkeypatch.setenv("REDIS_PASSWORD", "s3cret")
    monkeypatch.setenv("REDIS_DB", "2")
    monkeypatch.setenv("SUGGESTION_LIMIT", "5")

    settings = Settings(_env_file=None)

    assert settings.redis_url == "redis://:s3cret@cache.internal:6379/2"
    assert settings.suggestion_limit == 5
