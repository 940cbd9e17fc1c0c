"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from config import Settings


class TestSettings:
    """Test Settings validation and derived properties."""

    def test_base_url_gets_trailing_slash(self):
        assert Settings(base_url="https://taaskly.example.com").base_url == "https://taaskly.example.com/"
        assert Settings(base_url="https://taaskly.example.com//").base_url == "https://taaskly.example.com/"

    def test_blank_base_url_rejected(self):
        with pytest.raises(ValidationError):
            Settings(base_url="  ")

    def test_database_url_override(self):
        settings = Settings(database_url_override="sqlite+aiosqlite:///./taaskly.db")
        assert settings.database_url == "sqlite+aiosqlite:///./taaskly.db"
        assert settings.uses_sqlite is True

    def test_postgres_url(self):
        settings = Settings(
            database_url_override=None,
            postgres_host="db",
            postgres_user="svc",
            postgres_password="secret",
            postgres_db="links",
        )
        assert settings.database_url == "postgresql+asyncpg://svc:secret@db:5432/links"
        assert settings.uses_sqlite is False

    def test_collection_limit_bounds(self):
        with pytest.raises(ValidationError):
            Settings(collection_limit=0)
