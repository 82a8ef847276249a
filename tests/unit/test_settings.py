"""Test that settings are accessible and carry sane defaults."""

from tripstate.config import Settings, get_settings


def test_settings_accessible() -> None:
    """Test that Settings can be imported and accessed."""
    settings = get_settings()
    assert settings is not None
    assert get_settings() is settings


def test_preference_defaults() -> None:
    """Test preference slot defaults."""
    settings = Settings(_env_file=None)
    assert settings.preferences_backend == "memory"
    assert settings.preferences_key == "preferences"
    assert settings.serialize_preference_writes is False


def test_fetch_delay_overridden_for_tests() -> None:
    """Test conftest disables the simulated upstream delay."""
    assert get_settings().fetch_delay_ms == 0


def test_env_override(monkeypatch) -> None:
    """Test environment variables override defaults."""
    monkeypatch.setenv("PREFERENCES_BACKEND", "redis")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")

    settings = Settings(_env_file=None)

    assert settings.preferences_backend == "redis"
    assert settings.redis_url == "redis://localhost:6379/0"
