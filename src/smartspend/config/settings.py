"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from settings.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int

    # LLM
    llm_model_name: str
    llm_temperature: float
    llm_request_timeout_seconds: float
    llm_max_retries: int
    llm_initial_delay_seconds: float
    llm_backoff_factor: float

    # Statement input and display
    statement_region: str
    currency: str
    currency_symbol: str
    digit_grouping: str
    max_upload_mb: int
    allowed_mime_types: List[str] = field(default_factory=list)

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv("SMARTSPEND_CONFIG")
            config_path = Path(env_path) if env_path else DEFAULT_SETTINGS_PATH

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return cls(
            app_name=config["app"]["name"],
            app_version=config["app"]["version"],
            log_level=config["logging"]["level"],
            log_max_file_size_mb=config["logging"]["max_file_size_mb"],
            log_backup_count=config["logging"]["backup_count"],
            llm_model_name=config["llm"]["model_name"],
            llm_temperature=config["llm"]["temperature"],
            llm_request_timeout_seconds=config["llm"]["request_timeout_seconds"],
            llm_max_retries=config["llm"]["max_retries"],
            llm_initial_delay_seconds=config["llm"]["initial_delay_seconds"],
            llm_backoff_factor=config["llm"]["backoff_factor"],
            statement_region=config["statement"]["region"],
            currency=config["statement"]["currency"],
            currency_symbol=config["statement"]["currency_symbol"],
            digit_grouping=config["statement"]["digit_grouping"],
            max_upload_mb=config["statement"]["max_upload_mb"],
            allowed_mime_types=list(config["statement"]["allowed_mime_types"])
        )


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
