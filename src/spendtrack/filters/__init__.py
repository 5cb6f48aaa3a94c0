"""Date-range filtering module."""
from .models import DateRange, FilterMode
from .resolver import DateRangeResolver, filter_label, format_date_iso, parse_mode

__all__ = ["DateRange", "FilterMode", "DateRangeResolver", "filter_label", "format_date_iso", "parse_mode"]
