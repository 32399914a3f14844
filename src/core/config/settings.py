from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigurationError


GITHUB_TOKEN_NAMES = (
    "GITHUB_TOKEN",
    "GITHUB_TOKEN_BOT",
    "GITHUB_TOKEN_VITALETS",
)


class RadarSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Trending Radar"
    LOG_LEVEL: str = "INFO"

    # ===== GitHub =====
    GITHUB_TOKEN: Optional[str] = None
    GITHUB_TOKEN_BOT: Optional[str] = None
    GITHUB_TOKEN_VITALETS: Optional[str] = None
    GITHUB_MAX_RETRIES: int = Field(default=3, ge=0)

    # ===== OpenAI =====
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"

    # ===== Radar interests =====
    TARGET_LANGUAGES: List[str] = Field(default_factory=list)
    TOPIC_KEYWORDS: List[str] = Field(default_factory=list)
    MIN_RELEVANCE_SCORE: int = 1

    # ===== Analysis =====
    ENABLE_AI_SUMMARIES: bool = True
    MAX_AI_SUMMARIES: int = Field(default=10, ge=0)
    BATCH_SIZE: int = Field(default=5, ge=1)
    BATCH_DELAY_SECONDS: float = Field(default=1.0, ge=0)
    RATE_LIMIT_BACKOFF_SECONDS: float = Field(default=60.0, ge=0)
    README_MAX_CHARS: int = Field(default=5000, ge=0)

    # ===== Files =====
    RADAR_CONFIG_PATH: str = "radar.config.yml"
    RADAR_INPUT_PATH: str = "trending.json"
    RADAR_REPORT_PATH: str = "radar-report.md"

    def get_github_token(self) -> str:
        """
        Return the first configured GitHub token.

        Raises:
            ConfigurationError: none of the supported variables is set
        """
        for name in GITHUB_TOKEN_NAMES:
            token = getattr(self, name)
            if token:
                return token
        raise ConfigurationError(
            "GitHub token not found. Please set one of these environment variables: "
            + ", ".join(GITHUB_TOKEN_NAMES)
        )


def load_settings(path: Optional[str] = None) -> RadarSettings:
    """
    Build settings from the environment, overlaid with the YAML radar config.

    Args:
        path: YAML file. When omitted, RADAR_CONFIG_PATH is used. Only the
              built-in default may be missing; a path given here or through
              the environment must exist.
    Returns:
        RadarSettings
    """
    try:
        base = RadarSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e

    explicit = bool(path) or "RADAR_CONFIG_PATH" in base.model_fields_set
    config_file = Path(path or base.RADAR_CONFIG_PATH)
    if not config_file.exists():
        if explicit:
            raise ConfigurationError(f"Radar configuration file not found: {config_file}")
        return base

    try:
        with config_file.open("r", encoding="utf-8") as handle:
            raw_cfg = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Unreadable radar configuration {config_file}: {e}") from e

    if not isinstance(raw_cfg, dict):
        raise ConfigurationError(f"Radar configuration {config_file} must be a mapping")

    # radar.config.yml uses lowercase keys (target_languages, topic_keywords, ...)
    overrides = {str(key).upper(): value for key, value in raw_cfg.items()}
    for key in ("TARGET_LANGUAGES", "TOPIC_KEYWORDS"):
        if key in overrides and overrides[key] is None:
            overrides[key] = []

    try:
        return RadarSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid radar configuration {config_file}: {e}") from e

