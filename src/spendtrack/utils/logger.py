"""Logging infrastructure with filter-mode context."""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def default_data_dir() -> Path:
    """Directory holding the database and logs unless configured otherwise."""
    home = os.getenv("SPENDTRACK_HOME")
    if home:
        return Path(home)
    return Path.home() / ".spendtrack"


class FilterContextFilter(logging.Filter):
    """Add the active filter mode to log records."""

    def __init__(self):
        super().__init__()
        self.filter_mode: Optional[str] = None

    def filter(self, record):
        """Add filter_mode to record."""
        record.filter_mode = self.filter_mode or "system"
        return True


class SpendTrackLogger:
    """Centralized logging manager."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_file: Optional[Path] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 5,
    ):
        self.log_file = Path(log_file) if log_file else default_data_dir() / "logs" / "spendtrack.log"
        self.log_dir = self.log_file.parent
        self.context_filter = FilterContextFilter()

        self.logger = logging.getLogger("spendtrack")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [filter:%(filter_mode)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.context_filter)
        self.logger.addHandler(console_handler)

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8"
            )
        except OSError as e:
            self.logger.warning(f"File logging disabled, cannot write to {self.log_dir}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.context_filter)
            self.logger.addHandler(file_handler)

    def set_filter_context(self, mode: Optional[str]):
        """Set current filter mode for logging."""
        self.context_filter.filter_mode = mode

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[SpendTrackLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = SpendTrackLogger(log_level)
    return _logger_instance.get_logger()


def configure_logging(
    log_level: str,
    log_file: Optional[Path] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> logging.Logger:
    """Rebuild the global logger from application settings."""
    global _logger_instance
    _logger_instance = SpendTrackLogger(log_level, log_file, max_file_size_mb, backup_count)
    return _logger_instance.get_logger()


def set_filter_context(mode: Optional[str]):
    """Set filter mode context for logging."""
    if _logger_instance:
        _logger_instance.set_filter_context(mode)
