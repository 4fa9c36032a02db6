"""Application configuration.

Settings come from, lowest priority first:
- field defaults
- ``.env`` file and ``RATIO_*`` environment variables
- ``ratio_signal.yaml`` (when present), via ``load_settings``
"""

import logging
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ratio_core.errors import InvalidConfiguration
from ratio_core.models import DEFAULT_THRESHOLD, DEFAULT_WINDOW_CAPACITY, EngineConfig

logger = logging.getLogger(__name__)

ErrorPolicy = Literal["skip", "halt"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RATIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Engine
    window_capacity: int = DEFAULT_WINDOW_CAPACITY
    threshold: float = DEFAULT_THRESHOLD

    # Instruments (feed "stock" symbols); unset = use feed order
    instrument_a: str | None = None
    instrument_b: str | None = None

    # What to do with a malformed update: skip it or stop the stream
    on_invalid: ErrorPolicy = "skip"

    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_instruments(self):
        if (self.instrument_a is None) != (self.instrument_b is None):
            raise ValueError("instrument_a and instrument_b must be set together")
        if self.instrument_a is not None and self.instrument_a == self.instrument_b:
            raise ValueError("instrument_a and instrument_b must differ")
        return self

    def engine_config(self) -> EngineConfig:
        """Build the engine configuration.

        Raises:
            InvalidConfiguration: If capacity or threshold is out of range.
        """
        return EngineConfig(
            window_capacity=self.window_capacity,
            threshold=self.threshold,
        )


_DEFAULT_PATH = Path("ratio_signal.yaml")


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, applying YAML overrides on top of the environment.

    Falls back to environment/defaults if the YAML file doesn't exist.

    Raises:
        InvalidConfiguration: If the file is not valid YAML or its top
            level is not a mapping.
        ValidationError: If a value has the wrong type or is not allowed.
    """
    config_path = path or _DEFAULT_PATH

    # Load .env next to the YAML file into os.environ
    env_path = config_path.parent / ".env"
    load_dotenv(env_path, override=False)

    if not config_path.exists():
        logger.info("No config file found at %s, using environment/defaults", config_path)
        return Settings()

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidConfiguration(f"{config_path} is not valid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise InvalidConfiguration(
            f"{config_path} must contain a mapping, got {type(raw).__name__}"
        )

    settings = Settings(**raw)
    logger.info(
        "Loaded config from %s: window_capacity=%d threshold=%s on_invalid=%s",
        config_path,
        settings.window_capacity,
        settings.threshold,
        settings.on_invalid,
    )
    return settings
