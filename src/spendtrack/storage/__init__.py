"""Expense storage module."""
from .models import ExpenseRecord, ExpenseInput
from .store import ExpenseStore

__all__ = ["ExpenseRecord", "ExpenseInput", "ExpenseStore"]
