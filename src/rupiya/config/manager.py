"""User configuration (API key) stored in the Rupiya home directory."""
import json
import os
from dataclasses import dataclass, asdict
from typing import Optional, Tuple

from rupiya.utils.logger import get_app_home
from rupiya.utils.exceptions import ConfigError

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


@dataclass
class Config:
    """User configuration."""
    gemini_api_key: str = ""
    use_model: bool = True
    model_name: Optional[str] = None


class ConfigManager:
    """Loads and saves the user configuration file."""

    def __init__(self):
        self.config_dir = get_app_home()
        self.config_file = self.config_dir / "config.json"

    def load_config(self) -> Config:
        """Load configuration; environment variables override the stored API key."""
        config = Config()

        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    config = Config(**json.load(f))
            except (OSError, ValueError, TypeError) as e:
                raise ConfigError(f"Failed to load configuration: {e}")

        for env_var in API_KEY_ENV_VARS:
            env_key = os.getenv(env_var)
            if env_key:
                config.gemini_api_key = env_key
                break

        return config

    def save_config(self, config: Config) -> None:
        """Save configuration as JSON."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(asdict(config), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}")

    def validate_config(self, config: Config) -> Tuple[bool, str]:
        """Validate configuration values."""
        if config.use_model and not config.gemini_api_key:
            return False, "Gemini API key is required when the model is enabled"

        if config.model_name is not None and not config.model_name.strip():
            return False, "Model name must not be blank"

        return True, "Configuration is valid"
