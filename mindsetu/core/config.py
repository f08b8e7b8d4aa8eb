"""
Engine settings using Pydantic Settings.

Environment variables (``MINDSETU_*``, or a ``.env`` file) override the
``logging`` section of config/defaults.yaml. Tunables for the engine's rules
live in the ``engine`` section (see defaults_loader / typed_config).
"""

from functools import lru_cache
from typing import Any, Dict

from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults_loader import get_config_value, get_log_dir


class Settings(BaseSettings):
    """Logging settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="MINDSETU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"

    def logging_options(self) -> Dict[str, Any]:
        """Effective logging options: explicitly set values beat the YAML defaults."""
        explicit = self.model_fields_set
        return {
            "log_level": (
                self.log_level
                if "log_level" in explicit
                else str(get_config_value("logging.level", self.log_level))
            ),
            "log_to_file": (
                self.log_to_file
                if "log_to_file" in explicit
                else bool(get_config_value("logging.to_file", self.log_to_file))
            ),
            "log_dir": self.log_dir if "log_dir" in explicit else get_log_dir(self.log_dir),
        }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
