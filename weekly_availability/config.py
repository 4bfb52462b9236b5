"""
Configuration management using Pydantic.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator

MINUTES_PER_DAY = 24 * 60


class AppConfig(BaseModel):
    """Application configuration."""
    api_url: str = "http://localhost:3000"
    access_token: Optional[str] = None
    timeout_seconds: float = 30
    locale: str = "en"
    week_start: int = 0  # 0=Sunday, 1=Monday
    increment_minutes: int = 15
    store_file: Path = Path("schedule.json")

    @field_validator("week_start")
    @classmethod
    def validate_week_start(cls, value: int) -> int:
        """Ensure the first weekday is in valid range."""
        if value not in range(7):
            raise ValueError(f"week_start must be between 0 and 6, got {value}")
        return value

    @field_validator("increment_minutes")
    @classmethod
    def validate_increment(cls, value: int) -> int:
        """Ensure the picker increment splits a day evenly."""
        if value <= 0:
            raise ValueError("increment_minutes must be greater than zero")
        if MINUTES_PER_DAY % value:
            raise ValueError(f"increment_minutes must divide {MINUTES_PER_DAY}, got {value}")
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Read settings from a YAML mapping; absent keys keep their defaults.

        Raises:
            FileNotFoundError: If ``config_path`` is missing
            ValueError: On broken YAML, a non-mapping root or invalid values
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


CONFIG_FILENAME = "config.yaml"


def get_default_config_path() -> Path:
    """
    The working directory's config.yaml, else the one next to the package.

    The returned path may not exist; callers fall back to defaults.
    """
    candidates = [Path.cwd() / CONFIG_FILENAME, Path(__file__).resolve().parent.parent / CONFIG_FILENAME]
    return next((path for path in candidates if path.exists()), candidates[0])
