"""Tests for environment-driven settings."""

from image_relay.config.settings import Settings


class TestSettings:
    """Loading from the environment and .env files."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("PORT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.gemini_api_key is None
        assert settings.key_loaded is False
        assert settings.port == 3001
        assert settings.image_model_candidates[0] == "gemini-2.5-flash-image-preview"

    def test_reads_environment_case_insensitively(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "AIzaFromEnv-123")
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.setenv("port", "8080")
        monkeypatch.setenv("IMAGE_MODEL_CANDIDATES", '["model-x", "model-y"]')
        settings = Settings(_env_file=None)

        assert settings.key_preview == "AIzaFromEn..."
        assert settings.port == 8080
        assert settings.image_model_candidates == ["model-x", "model-y"]

    def test_env_file_with_unrelated_keys_is_accepted(self, monkeypatch, tmp_path):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("GEMINI_API_KEY=AIzaFromFile\nNODE_ENV=production\n")
        settings = Settings(_env_file=env_file)

        assert settings.gemini_api_key == "AIzaFromFile"
