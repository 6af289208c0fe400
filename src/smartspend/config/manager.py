"""Configuration manager: settings file plus environment credentials."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .settings import AppSettings

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


@dataclass
class Config:
    """Runtime configuration."""
    gemini_api_key: str
    settings: AppSettings

    @property
    def log_level(self) -> str:
        return self.settings.log_level


class ConfigManager:
    """Builds the runtime configuration."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = settings_path

    def load_config(self) -> Optional[Config]:
        """Load configuration; returns None when no API key is set."""
        api_key = self.find_api_key()
        if not api_key:
            return None

        try:
            settings = AppSettings.load(self.settings_path)
        except (OSError, KeyError, TypeError) as e:
            raise RuntimeError(f"Failed to load configuration: {e}")

        return Config(gemini_api_key=api_key, settings=settings)

    @staticmethod
    def find_api_key() -> str:
        """Return the first API key found in the environment."""
        for name in API_KEY_ENV_VARS:
            value = os.getenv(name, "").strip()
            if value:
                return value
        return ""

    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.gemini_api_key:
            return False, "Gemini API key is required"

        settings = config.settings

        if not settings.llm_model_name:
            return False, "LLM model name is required"

        if settings.llm_request_timeout_seconds <= 0:
            return False, "Request timeout must be positive"

        if settings.llm_max_retries < 0:
            return False, "Max retries cannot be negative"

        if settings.max_upload_mb < 1:
            return False, "Upload limit must be at least 1 MB"

        if not settings.allowed_mime_types:
            return False, "At least one image type must be allowed"

        return True, "Configuration is valid"
