"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass

from rupiya.utils.exceptions import ConfigError


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str

    # LLM
    llm_model_name: str
    llm_temperature: float
    llm_call_timeout_seconds: Optional[float]
    llm_categories: List[str]
    llm_probe_max_retries: int
    llm_probe_initial_delay_seconds: float
    llm_probe_backoff_factor: float

    # Pipeline
    min_line_length: int
    default_bank_name: str
    default_payment_mode: str
    default_category: str
    keywords: List[str]

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv("RUPIYA_CONFIG")
            config_path = Path(env_path) if env_path else Path(__file__).parent / "config.yaml"

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        try:
            return cls(
                app_name=config["app"]["name"],
                app_version=str(config["app"]["version"]),
                log_level=config["logging"]["level"],
                llm_model_name=config["llm"]["model_name"],
                llm_temperature=config["llm"]["temperature"],
                llm_call_timeout_seconds=config["llm"].get("call_timeout_seconds"),
                llm_categories=list(config["llm"]["categories"]),
                llm_probe_max_retries=config["llm"]["probe_max_retries"],
                llm_probe_initial_delay_seconds=config["llm"]["probe_initial_delay_seconds"],
                llm_probe_backoff_factor=config["llm"]["probe_backoff_factor"],
                min_line_length=config["pipeline"]["min_line_length"],
                default_bank_name=config["pipeline"]["default_bank_name"],
                default_payment_mode=config["pipeline"]["default_payment_mode"],
                default_category=config["pipeline"]["default_category"],
                keywords=[str(k).lower() for k in config["pipeline"]["keywords"]],
            )
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Invalid configuration file {config_path}: missing {e}")


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
