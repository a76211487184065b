"""Configuration loader for Dry Spell Pricer."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class AnalysisConfig(BaseModel):
    dry_day_threshold_mm: float = 1.0
    consecutive_day_thresholds: list[int] = [3, 4, 5]
    sum_insured: float = 1000.0
    season_months: list[int] = [1, 2, 3]
    longitude: float = -69.3
    latitude: float = -18.3

    def to_threshold_config(self):
        from dryspell.core.models import ThresholdConfig

        return ThresholdConfig(
            dry_day_threshold_mm=self.dry_day_threshold_mm,
            consecutive_day_thresholds=tuple(self.consecutive_day_thresholds),
            sum_insured=self.sum_insured,
            season_months=frozenset(self.season_months),
        )


class OpenMeteoConfig(BaseModel):
    archive_url: str = "https://archive-api.open-meteo.com/v1/archive"
    timeout_seconds: int = 60
    cache_dir: str = "data/cache/open_meteo"
    cache_ttl_days: int = 30
    start_date: str = "1981-01-01"
    end_date: str = "2016-12-31"
    timezone: str = "GMT"


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True
    workers: int = 1
    cors_origins: list[str] = ["http://localhost:8501"]


class UIConfig(BaseModel):
    port: int = 8501
    theme: str = "light"
    chart_color: str = "#87CEEB"


class LoggingConfig(BaseModel):
    level: str = "DEBUG"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
    rotation: str = "10 MB"
    retention: str = "7 days"
    log_dir: str = "logs"
    enqueue: bool = False


class AppConfig(BaseModel):
    name: str = "dryspell"
    version: str = "0.1.0"
    environment: str = "development"
    debug: bool = True


class Settings(BaseModel):
    app: AppConfig = AppConfig()
    logging: LoggingConfig = LoggingConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    open_meteo: OpenMeteoConfig = OpenMeteoConfig()
    api: APIConfig = APIConfig()
    ui: UIConfig = UIConfig()


def get_project_root() -> Path:
    return Path(__file__).parent.parent.parent


def load_yaml_config(env: str = "development") -> dict[str, Any]:
    config_path = get_project_root() / "config" / "environments" / f"{env}.yaml"
    if not config_path.exists():
        return {}
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def get_settings(env: Optional[str] = None) -> Settings:
    env = env or os.getenv("APP_ENV", "development")
    yaml_config = load_yaml_config(env)

    # Override with env vars
    if os.getenv("OPEN_METEO_ARCHIVE_URL"):
        yaml_config.setdefault("open_meteo", {})["archive_url"] = os.getenv("OPEN_METEO_ARCHIVE_URL")
    if os.getenv("DRYSPELL_CACHE_DIR"):
        yaml_config.setdefault("open_meteo", {})["cache_dir"] = os.getenv("DRYSPELL_CACHE_DIR")
    if os.getenv("LOG_LEVEL"):
        yaml_config.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")
    if os.getenv("DRYSPELL_LOG_DIR"):
        yaml_config.setdefault("logging", {})["log_dir"] = os.getenv("DRYSPELL_LOG_DIR")

    return Settings(**yaml_config) if yaml_config else Settings()


settings = get_settings()
