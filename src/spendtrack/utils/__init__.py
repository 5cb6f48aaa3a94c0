"""Utility modules."""
from .logger import get_logger, configure_logging, set_filter_context
from .exceptions import (
    SpendTrackError,
    ConfigError,
    StorageError,
    ValidationError,
    InvalidFilterMode
)

__all__ = [
    "get_logger",
    "configure_logging",
    "set_filter_context",
    "SpendTrackError",
    "ConfigError",
    "StorageError",
    "ValidationError",
    "InvalidFilterMode"
]
