"""Configuration loader for the library lending statistics."""

import os
from datetime import datetime
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

EVALUATION_TIME_ENV = "LIBRARY_STATS_EVALUATION_TIME"


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Library Lending Statistics"
    version: str = "1.0.0"


class StatisticsConfig(BaseModel):
    """Thresholds and labels used by the lending statistics engine."""

    specialist_min_loans: int = 5
    specialist_min_days: int = 14
    unreliable_days: int = 30
    unknown_author: str = "Author not determined"
    # Fixed reporting instant; None means the wall clock at query time
    evaluation_time: datetime | None = None


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    statistics: StatisticsConfig = Field(default_factory=StatisticsConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Override the reporting instant from environment
    evaluation_time = os.getenv(EVALUATION_TIME_ENV)
    if evaluation_time:
        config.statistics.evaluation_time = datetime.fromisoformat(evaluation_time)

    return config
