"""Expense screen logic: one render cycle from query to chart input.

The caller picks a filter mode and supplies "now"; the service resolves the
date range, queries the store, aggregates the rows and prepares chart slices.
Nothing is cached between calls, so a filter change is simply another load().
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from spendtrack.aggregation import CategoryTotal, ExpenseAggregator
from spendtrack.chart import ChartSlice, DEFAULT_COLORS, build_chart_slices
from spendtrack.config.settings import AppSettings
from spendtrack.filters import DateRange, DateRangeResolver, FilterMode, filter_label, parse_mode
from spendtrack.storage import ExpenseRecord, ExpenseStore
from spendtrack.utils.logger import get_logger, set_filter_context

logger = get_logger()


@dataclass
class ExpenseView:
    """Everything the expense screen renders for one filter selection."""
    mode: FilterMode
    label: str
    date_range: Optional[DateRange]
    records: List[ExpenseRecord] = field(default_factory=list)
    total: Decimal = Decimal(0)
    by_category: List[CategoryTotal] = field(default_factory=list)
    slices: List[ChartSlice] = field(default_factory=list)


class ExpenseService:
    """Wires the store, the date-range resolver and the aggregator together."""

    def __init__(self, store: ExpenseStore, settings: Optional[AppSettings] = None):
        self.store = store
        self.chart_colors = list(settings.chart_colors) if settings else list(DEFAULT_COLORS)
        self.resolver = DateRangeResolver()
        self.aggregator = ExpenseAggregator()

    def load(self, mode: Union[str, FilterMode], now: Union[date, datetime]) -> ExpenseView:
        """
        Load expenses and totals for a filter mode.

        Args:
            mode: "all", "week" or "month"
            now: Reference instant for week/month boundaries

        Returns:
            ExpenseView for rendering
        """
        filter_mode = parse_mode(mode)
        set_filter_context(filter_mode.value)

        date_range = self.resolver.resolve(filter_mode, now)
        records = self.store.list_expenses(date_range)
        total, by_category = self.aggregator.compute_all(records)

        logger.info(
            f"Loaded {len(records)} expenses, total {total} across {len(by_category)} categories"
        )

        return ExpenseView(
            mode=filter_mode,
            label=filter_label(filter_mode),
            date_range=date_range,
            records=records,
            total=total,
            by_category=by_category,
            slices=build_chart_slices(by_category, self.chart_colors)
        )

    def add(self, amount, category, note=None, date=None) -> int:
        return self.store.add_expense(amount, category, note, date)

    def update(self, expense_id: int, amount, category, note=None, date=None) -> bool:
        return self.store.update_expense(expense_id, amount, category, note, date)

    def delete(self, expense_id: int) -> bool:
        return self.store.delete_expense(expense_id)
