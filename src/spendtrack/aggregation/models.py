"""Data models for expense aggregation."""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, NamedTuple


@dataclass(frozen=True)
class CategoryTotal:
    """Summed amount for one category."""
    category: str
    sum: Decimal


class ExpenseSummary(NamedTuple):
    """Grand total plus per-category breakdown, in first-seen category order."""
    total: Decimal
    by_category: List[CategoryTotal]
