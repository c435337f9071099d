"""Configuration management for arfocus.

Loads settings from a YAML configuration file with environment variable
overrides (``ARFOCUS_`` prefix, ``__`` as the nested delimiter). Supports
.env files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/arfocus.yaml")

WORK_MINUTES_RANGE = (5, 120)
BREAK_MINUTES_RANGE = (3, 60)


def clamp_minutes(value: float, bounds: tuple[int, int]) -> int:
    """Clamp a user-supplied minute count into ``bounds`` (inclusive)."""
    low, high = bounds
    return max(low, min(high, int(value)))


class TimerConfig(BaseModel):
    work_minutes: int = Field(default=25, description="Work phase length, clamped to 5-120")
    break_minutes: int = Field(default=5, description="Break phase length, clamped to 3-60")
    mode: Literal["alpha", "beta"] = Field(default="alpha")
    tick_interval: float = Field(default=1.0, gt=0, description="Seconds between clock ticks")


class AttentionConfig(BaseModel):
    grace_ms: float = Field(default=1500.0, ge=0)
    sample_interval_ms: float = Field(default=200.0, gt=0)


class ScoringConfig(BaseModel):
    focus_reward_per_sec: float = Field(default=0.06, ge=0)
    distract_penalty_per_sec: float = Field(default=0.5, ge=0)


class CaptureConfig(BaseModel):
    camera_enabled: bool = Field(default=True)
    device_index: int = Field(default=0, description="OpenCV camera device index")
    frame_interval: float = Field(default=1 / 30, gt=0, description="Seconds between frame reads")
    resolution_width: int | None = Field(default=640)
    resolution_height: int | None = Field(default=480)


class DetectionConfig(BaseModel):
    cascade_path: str | None = Field(
        default=None, description="Haar cascade XML; defaults to OpenCV's bundled frontal face model"
    )
    scale_factor: float = Field(default=1.1, gt=1.0)
    min_neighbors: int = Field(default=5, ge=0)
    min_face_size: int = Field(default=60, gt=0)


class StorageConfig(BaseModel):
    path: str = Field(default="~/.arfocus/sessions.json")
    key: str = Field(default="arfocus.sessions.v1")
    max_entries: int = Field(default=300, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the arfocus system.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically. The YAML data arrives as init kwargs,
    so the sources are reordered to let the environment win over it.
    """

    model_config = {
        "env_prefix": "ARFOCUS_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    timer: TimerConfig = Field(default_factory=TimerConfig)
    attention: AttentionConfig = Field(default_factory=AttentionConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
