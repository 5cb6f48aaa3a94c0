"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import List
from dataclasses import dataclass

from spendtrack.filters.models import FilterMode
from spendtrack.utils.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int

    # Paths
    data_dir: Path
    database_file: str
    logs_dir: str
    log_file: str

    # Filters
    default_filter_mode: str

    # Chart
    chart_colors: List[str]

    @property
    def database_path(self) -> Path:
        return self.data_dir / self.database_file

    @property
    def log_path(self) -> Path:
        return self.data_dir / self.logs_dir / self.log_file

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv("SPENDTRACK_CONFIG")
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        try:
            data_dir = os.getenv("SPENDTRACK_HOME") or config["paths"]["data_dir"]
            settings = cls(
                app_name=config["app"]["name"],
                app_version=str(config["app"]["version"]),
                log_level=config["logging"]["level"],
                log_max_file_size_mb=config["logging"]["max_file_size_mb"],
                log_backup_count=config["logging"]["backup_count"],
                data_dir=Path(data_dir).expanduser(),
                database_file=config["paths"]["database_file"],
                logs_dir=config["paths"]["logs_dir"],
                log_file=config["paths"]["log_file"],
                default_filter_mode=config["filters"]["default_mode"],
                chart_colors=list(config["chart"]["colors"] or [])
            )
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Missing configuration key in {config_path}: {e}")

        settings.validate()
        return settings

    def validate(self) -> None:
        """Reject values the rest of the application cannot work with."""
        valid_modes = [mode.value for mode in FilterMode]
        if self.default_filter_mode not in valid_modes:
            raise ConfigError(
                f"filters.default_mode must be one of {valid_modes}, got {self.default_filter_mode!r}"
            )
        if not self.chart_colors:
            raise ConfigError("chart.colors must list at least one color")


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
