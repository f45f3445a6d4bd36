"""
Unit tests for moodhome.core.config module.
"""
from moodhome.core.config import Settings


class TestSettings:
    """Test Settings configuration."""

    def test_settings_defaults(self):
        """Defaults mirror the generation config of the mobile app."""
        s = Settings(_env_file=None)
        assert s.GEMINI_MODEL == "gemini-1.5-flash"
        assert s.GEMINI_TEMPERATURE == 0.7
        assert s.GEMINI_TOP_K == 40
        assert s.GEMINI_MAX_OUTPUT_TOKENS == 1024
        assert s.ANALYTICS_WINDOW == 100
        assert s.ACTIVE_SUGGESTION_LIMIT == 5
        assert s.DATABASE_URL.startswith("sqlite")

    def test_settings_env_override(self, monkeypatch):
        """Environment variables override defaults, case-insensitively."""
        monkeypatch.setenv("APP_NAME", "Test API")
        monkeypatch.setenv("gemini_temperature", "0.2")
        monkeypatch.setenv("ANALYTICS_WINDOW", "30")

        s = Settings(_env_file=None)

        assert s.APP_NAME == "Test API"
        assert s.GEMINI_TEMPERATURE == 0.2
        assert s.ANALYTICS_WINDOW == 30
