from __future__ import annotations

import pytest

from marketplace.core.config import Settings, load_settings

_ENV_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "LOG_JSON",
    "PORT",
    "DATABASE_URL",
    "REDIS_URL",
    "SESSION_TTL_MIN",
    "SEED_SAMPLE_DATA",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = load_settings()
    assert s.app_env == "dev"
    assert s.log_level == "info"
    assert s.log_json is False
    assert s.port == 8000
    assert s.database_url is None
    assert s.redis_url is None
    assert s.session_ttl_min == 60 * 24 * 7
    assert s.seed_sample_data is True


def test_env_vars_respected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", " PROD ")
    monkeypatch.setenv("LOG_LEVEL", "Warning")
    monkeypatch.setenv("LOG_JSON", "yes")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/marketplace")
    monkeypatch.setenv("SESSION_TTL_MIN", "30")
    monkeypatch.setenv("SEED_SAMPLE_DATA", "off")

    s = load_settings()
    assert s.app_env == "prod"
    assert s.log_level == "warning"
    assert s.log_json is True
    assert s.port == 9000
    assert s.database_url == "postgresql+asyncpg://db/marketplace"
    assert s.session_ttl_min == 30
    assert s.seed_sample_data is False


def test_empty_urls_mean_not_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "  ")
    monkeypatch.setenv("REDIS_URL", "")
    s = load_settings()
    assert s.database_url is None
    assert s.redis_url is None


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("APP_ENV", "staging", "APP_ENV must be dev|test|prod"),
        ("LOG_LEVEL", "verbose", "LOG_LEVEL must be debug|info|warning|error"),
        ("PORT", "eighty", "PORT must be an integer"),
        ("SESSION_TTL_MIN", "0", "SESSION_TTL_MIN must be positive"),
        ("LOG_JSON", "maybe", "LOG_JSON must be a boolean"),
        ("SEED_SAMPLE_DATA", "2", "SEED_SAMPLE_DATA must be a boolean"),
    ],
)
def test_invalid_values_rejected(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str, message: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=message.replace("|", r"\|")):
        load_settings()


def test_env_properties() -> None:
    def make(env: str) -> Settings:
        return Settings(  # type: ignore[arg-type]
            app_env=env,
            log_level="info",
            log_json=False,
            port=8000,
            database_url=None,
            redis_url=None,
        )

    assert make("dev").is_dev and not make("dev").is_prod
    assert make("test").is_test
    assert make("prod").is_prod and not make("prod").is_dev


def test_settings_is_frozen() -> None:
    s = load_settings()
    with pytest.raises(AttributeError):
        s.port = 1  # type: ignore[misc]
