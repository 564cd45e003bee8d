"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from article_gate.config import Settings, clear_settings_cache, get_settings


@pytest.fixture
def fresh_settings():
    """Drop cached settings before and after the test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestSettings:
    """Tests for defaults and derived values."""

    def test_gate_defaults(self):
        """Should default to 3-6 sources, 1200 words and 3 keywords."""
        settings = Settings(_env_file=None)

        assert settings.min_sources == 3
        assert settings.max_sources == 6
        assert settings.min_word_count == 1200
        assert settings.min_secondary_keywords == 3
        assert settings.max_body_bytes == 2 * 1024 * 1024

    def test_source_range_must_not_be_empty(self):
        """Should reject max_sources below min_sources."""
        with pytest.raises(ValidationError, match="max_sources"):
            Settings(min_sources=5, max_sources=4, _env_file=None)

    def test_cors_origins_list(self):
        """Should split comma-separated origins and drop blanks."""
        settings = Settings(cors_origins="https://a.example, https://b.example,", _env_file=None)

        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_is_serverless(self):
        """Should treat VERCEL=1 as an on-demand deployment."""
        assert Settings(vercel="1", _env_file=None).is_serverless is True
        assert Settings(_env_file=None).is_serverless is False


class TestSettingsCache:
    """Tests for the cached accessor."""

    def test_settings_are_cached(self, fresh_settings):
        """Should return the same instance until the cache is cleared."""
        assert get_settings() is get_settings()

    def test_clear_cache_rereads_environment(self, fresh_settings, monkeypatch):
        """Should pick up changed environment variables after clearing."""
        before = get_settings()
        monkeypatch.setenv("MIN_SOURCES", "4")

        assert get_settings() is before

        clear_settings_cache()

        assert get_settings().min_sources == 4
