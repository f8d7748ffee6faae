"""Unit tests for Settings loading."""

import pytest

from src.core.config import Settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Run without a .env file and without provider keys from the host."""
    monkeypatch.chdir(tmp_path)
    for name in ("GEMINI_API_KEY", "API_KEY", "LLM_PROVIDER", "ANALYSIS_TEMPERATURE"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.llm_provider == "gemini"
        assert settings.stt_provider == "gemini"
        assert settings.gemini_api_key == ""
        assert settings.analysis_temperature == 0.2
        assert settings.raw_excerpt_chars == 100

    def test_gemini_key_from_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gm-from-env")
        assert Settings().gemini_api_key == "gm-from-env"

    def test_api_key_alias(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "gm-alias")
        assert Settings().gemini_api_key == "gm-alias"

    def test_specific_name_wins_over_alias(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "gm-alias")
        monkeypatch.setenv("GEMINI_API_KEY", "gm-specific")
        assert Settings().gemini_api_key == "gm-specific"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("LLM_PROVIDER=ollama\nANALYSIS_TEMPERATURE=0.5\n")

        settings = Settings()

        assert settings.llm_provider == "ollama"
        assert settings.analysis_temperature == 0.5
