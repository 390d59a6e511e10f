"""
Unit Tests - Configuration
"""
import pytest
from pydantic import ValidationError

from retail_seed.config import Settings, get_settings
from retail_seed.config.logging import configure_logging
from retail_seed.config.settings import DatabaseSettings, SeedSettings


class TestSettings:
    """Tests for Settings"""

    def test_seed_defaults(self, monkeypatch):
        for var in ["SEED_PROFILE", "SEED_BCRYPT_ROUNDS", "SEED_INVENTORY_MIN", "SEED_INVENTORY_MAX"]:
            monkeypatch.delenv(var, raising=False)

        seed = SeedSettings()

        assert seed.profile == "full"
        assert seed.bcrypt_rounds == 12
        assert (seed.inventory_min, seed.inventory_max) == (10, 60)

    def test_seed_from_environment(self, monkeypatch):
        monkeypatch.setenv("SEED_PROFILE", "MINIMAL")
        monkeypatch.setenv("SEED_RANDOM_SEED", "7")

        seed = SeedSettings()

        assert seed.profile == "minimal"
        assert seed.random_seed == 7

    @pytest.mark.parametrize("kwargs", [
        {"profile": "demo"},
        {"bcrypt_rounds": 3},
        {"bcrypt_rounds": 32},
        {"inventory_min": 10, "inventory_max": 10},
        {"inventory_min": -1},
    ])
    def test_seed_validation(self, kwargs):
        with pytest.raises(ValidationError):
            SeedSettings(**kwargs)

    def test_database_url_built_from_parts(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        database = DatabaseSettings(host="db", port=5433, db="retail", user="seed", password="s3cret")

        assert database.async_url == "postgresql+asyncpg://seed:s3cret@db:5433/retail"

    def test_database_url_override(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///seed.db")

        assert DatabaseSettings().async_url == "sqlite+aiosqlite:///seed.db"

    def test_app_env_validation(self):
        assert Settings(app_env="TESTING").app_env == "testing"
        with pytest.raises(ValidationError):
            Settings(app_env="qa")

    def test_logging_overrides_skip_settings(self, clean_settings, monkeypatch):
        monkeypatch.setenv("SEED_BCRYPT_ROUNDS", "2")
        get_settings.cache_clear()

        configure_logging("INFO", "json")

        with pytest.raises(ValidationError):
            get_settings()
