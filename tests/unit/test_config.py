"""Tests for application configuration."""

from app.config import Settings, get_settings, settings


class TestSettings:
    """Tests for Settings class."""

    def test_settings_loads_from_env(self, monkeypatch):
        monkeypatch.setenv("API_TITLE", "Test API")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("PORT", "9000")

        test_settings = Settings()
        assert test_settings.API_TITLE == "Test API"
        assert test_settings.DEBUG is True
        assert test_settings.PORT == 9000

    def test_settings_debug_parses_boolean(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "True")
        assert Settings().DEBUG is True

        monkeypatch.setenv("DEBUG", "false")
        assert Settings().DEBUG is False

    def test_vector_defaults(self, monkeypatch):
        monkeypatch.delenv("VECTOR_EXTENSION", raising=False)
        monkeypatch.delenv("EMBEDDING_DIMENSIONS", raising=False)

        test_settings = Settings()
        assert test_settings.VECTOR_EXTENSION == "vector"
        assert test_settings.EMBEDDING_DIMENSIONS == 1536

    def test_embedding_dimensions_parse_integer(self, monkeypatch):
        monkeypatch.setenv("EMBEDDING_DIMENSIONS", "768")
        assert Settings().EMBEDDING_DIMENSIONS == 768

    def test_log_level_is_uppercased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().LOG_LEVEL == "DEBUG"

    def test_is_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")
        assert Settings().is_production is True

        monkeypatch.setenv("ENVIRONMENT", "development")
        assert Settings().is_production is False

    def test_get_settings_returns_global_instance(self):
        assert get_settings() is settings
