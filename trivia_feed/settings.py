"""
Runtime Settings

Loads settings from environment variables and provides defaults.
Supports loading from a .env file using python-dotenv.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models.config import DEFAULT_CONFIG, PersonalizationConfig

BASE_DIR = Path(__file__).resolve().parent.parent

root_env = BASE_DIR / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class Settings:
    """Runtime settings for hosting the engine."""

    # JSON file backing JsonProfileStore
    profiles_path: Path = BASE_DIR / "data" / "profiles.json"
    # Optional JSON file with PersonalizationConfig overrides
    config_path: Optional[Path] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        return cls(
            profiles_path=_path_env("TRIVIA_FEED_PROFILES_PATH", BASE_DIR / "data" / "profiles.json"),
            config_path=_path_env("TRIVIA_FEED_CONFIG_PATH"),
            log_level=os.getenv("TRIVIA_FEED_LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the settings.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []
        if self.config_path is not None and not self.config_path.exists():
            errors.append(f"Config file not found: {self.config_path}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")
        return len(errors) == 0, errors

    def load_personalization_config(self) -> PersonalizationConfig:
        """Engine config from config_path, or the defaults."""
        if self.config_path is None:
            return DEFAULT_CONFIG
        return PersonalizationConfig.from_file(self.config_path)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Send trivia_feed logs to stdout at the given level."""
    logger = logging.getLogger("trivia_feed")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers so repeated calls don't duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global _settings
    _settings = None
    return get_settings()
