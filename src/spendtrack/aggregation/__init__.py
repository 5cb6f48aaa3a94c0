"""Expense aggregation module."""
from .models import CategoryTotal, ExpenseSummary
from .aggregator import ExpenseAggregator

__all__ = ["CategoryTotal", "ExpenseSummary", "ExpenseAggregator"]
