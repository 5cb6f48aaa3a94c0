"""Custom exception classes for SpendTrack."""


class SpendTrackError(Exception):
    """Base exception for SpendTrack."""
    pass


class ConfigError(SpendTrackError):
    """Configuration-related errors."""
    pass


class StorageError(SpendTrackError):
    """Expense database errors."""
    pass


class ValidationError(SpendTrackError):
    """Data validation errors."""
    pass


class InvalidFilterMode(SpendTrackError):
    """Filter mode outside all/week/month. Indicates a caller bug."""

    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"Invalid filter mode: {mode!r} (expected 'all', 'week' or 'month')")
