"""Application configuration using Pydantic Settings."""

import logging
from datetime import timedelta
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from watchpost.common.constants import DEFAULT_EVALUATION_PERIODS, DEFAULT_TIMEOUT_PERCENT


class WatchpostSettings(BaseSettings):
    """Configuration loaded from environment variables."""

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    default_evaluation_periods: int = Field(default=DEFAULT_EVALUATION_PERIODS, ge=1)
    default_period_minutes: int = Field(default=1, ge=1)
    default_timeout_percent: float = Field(default=DEFAULT_TIMEOUT_PERCENT, gt=0.0)

    model_config = {"env_prefix": "WATCHPOST_", "case_sensitive": False}

    @property
    def default_period(self) -> timedelta:
        return timedelta(minutes=self.default_period_minutes)


def configure_logging(settings: WatchpostSettings | None = None) -> None:
    """Configure root logging from settings."""
    settings = settings or WatchpostSettings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


__all__ = ["WatchpostSettings", "configure_logging"]
