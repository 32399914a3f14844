import pytest

from core.config.settings import RadarSettings, load_settings
from core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("GITHUB_TOKEN", "GITHUB_TOKEN_BOT", "GITHUB_TOKEN_VITALETS", "OPENAI_API_KEY",
                 "TARGET_LANGUAGES", "TOPIC_KEYWORDS", "BATCH_SIZE", "RADAR_CONFIG_PATH"):
        monkeypatch.delenv(name, raising=False)
    # keep .env / radar.config.yml of the working tree out of the tests
    monkeypatch.chdir(tmp_path)


class TestGithubToken:
    def test_first_available_token(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN_BOT", "bot-token")
        monkeypatch.setenv("GITHUB_TOKEN_VITALETS", "other-token")
        assert RadarSettings().get_github_token() == "bot-token"

    def test_primary_token_wins(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "main-token")
        monkeypatch.setenv("GITHUB_TOKEN_BOT", "bot-token")
        assert RadarSettings().get_github_token() == "main-token"

    def test_missing_token_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            RadarSettings().get_github_token()


class TestDefaults:
    def test_defaults(self):
        settings = RadarSettings()
        assert settings.TARGET_LANGUAGES == []
        assert settings.TOPIC_KEYWORDS == []
        assert settings.MAX_AI_SUMMARIES == 10
        assert settings.BATCH_SIZE == 5
        assert settings.README_MAX_CHARS == 5000
        assert settings.ENABLE_AI_SUMMARIES is True

    def test_list_from_env_json(self, monkeypatch):
        monkeypatch.setenv("TARGET_LANGUAGES", '["python", "rust"]')
        assert RadarSettings().TARGET_LANGUAGES == ["python", "rust"]


class TestLoadSettings:
    def test_missing_default_file_uses_env(self, monkeypatch):
        monkeypatch.setenv("BATCH_SIZE", "3")
        assert load_settings().BATCH_SIZE == 3

    def test_missing_explicit_file_is_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_settings(str(tmp_path / "nope.yml"))

    def test_missing_env_config_path_is_error(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RADAR_CONFIG_PATH", str(tmp_path / "missing.yml"))
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings()

    def test_env_config_path_picked_up(self, monkeypatch, tmp_path):
        path = tmp_path / "custom.yml"
        path.write_text("batch_size: 7\n", encoding="utf-8")
        monkeypatch.setenv("RADAR_CONFIG_PATH", str(path))
        assert load_settings().BATCH_SIZE == 7

    def test_yaml_overrides_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BATCH_SIZE", "3")
        path = tmp_path / "radar.config.yml"
        path.write_text(
            "target_languages:\n  - Python\n"
            "topic_keywords:\n  - AI\n  - LLM Agent\n"
            "batch_size: 4\n"
            "issue_label: trending-daily\n",
            encoding="utf-8",
        )

        settings = load_settings(str(path))

        assert settings.TARGET_LANGUAGES == ["Python"]
        assert settings.TOPIC_KEYWORDS == ["AI", "LLM Agent"]
        assert settings.BATCH_SIZE == 4

    def test_default_path_picked_up(self, tmp_path):
        (tmp_path / "radar.config.yml").write_text("max_ai_summaries: 2\n", encoding="utf-8")
        assert load_settings().MAX_AI_SUMMARIES == 2

    def test_null_lists_become_empty(self, tmp_path):
        path = tmp_path / "radar.config.yml"
        path.write_text("target_languages:\ntopic_keywords:\n", encoding="utf-8")
        settings = load_settings(str(path))
        assert settings.TARGET_LANGUAGES == []
        assert settings.TOPIC_KEYWORDS == []

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "radar.config.yml"
        path.write_text("target_languages: [python\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(str(path))

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "radar.config.yml"
        path.write_text("batch_size: 0\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "radar.config.yml"
        path.write_text("- python\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(str(path))
