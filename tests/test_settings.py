"""Tests for settings, backend selection and logging configuration."""
import pytest

from brand_pricing.config.logging import get_logging_config
from brand_pricing.config.settings import DEFAULT_DATABASE_URL, Settings, get_settings, reset_settings
from brand_pricing.storage import InMemoryRepository, SqlRepository, create_repository


def test_defaults():
    settings = Settings.load({})

    assert settings.backend == "memory"
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.seed_example_data is False
    assert settings.example_prices_csv.name == "example_prices.csv"
    assert settings.example_prices_csv.exists()
    assert settings.port == 8080


def test_load_from_environment(tmp_path):
    settings = Settings.load({
        "PRICING_BACKEND": "SQL",
        "PRICING_DATABASE_URL": "sqlite:///prices.db",
        "PRICING_SEED_EXAMPLE": "yes",
        "PRICING_EXAMPLE_PRICES": str(tmp_path / "prices.csv"),
        "PRICING_LOG_LEVEL": "debug",
        "PRICING_PORT": "9000",
    })

    assert settings.backend == "sql"
    assert settings.database_url == "sqlite:///prices.db"
    assert settings.seed_example_data is True
    assert settings.example_prices_csv == tmp_path / "prices.csv"
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000


def test_unknown_backend_rejected():
    with pytest.raises(ValueError, match="redis"):
        Settings.load({"PRICING_BACKEND": "redis"})


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("PRICING_BACKEND", "memory")
    reset_settings()
    try:
        assert get_settings() is get_settings()
    finally:
        reset_settings()


def test_create_repository_memory():
    repo = create_repository(Settings(backend="memory"))
    assert isinstance(repo, InMemoryRepository)


def test_create_repository_sql(tmp_path):
    repo = create_repository(Settings(backend="sql", database_url=f"sqlite:///{tmp_path / 'p.db'}"))
    try:
        assert isinstance(repo, SqlRepository)
    finally:
        repo.shutdown()


@pytest.mark.parametrize("environment,formatter", [
    ("development", "simple"),
    ("production", "json"),
    ("test", "json"),
])
def test_logging_formatter_per_environment(environment, formatter):
    config = get_logging_config(environment, "INFO")

    assert config["handlers"]["console"]["formatter"] == formatter
    assert config["root"]["level"] == "INFO"
