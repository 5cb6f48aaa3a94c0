"""SpendTrack: date-range filtering and category totals for student expenses."""
from .filters import DateRange, DateRangeResolver, FilterMode
from .aggregation import CategoryTotal, ExpenseAggregator, ExpenseSummary
from .utils.exceptions import InvalidFilterMode

__version__ = "0.1.0"

__all__ = [
    "DateRange",
    "DateRangeResolver",
    "FilterMode",
    "CategoryTotal",
    "ExpenseAggregator",
    "ExpenseSummary",
    "InvalidFilterMode",
]
