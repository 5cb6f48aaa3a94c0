"""Expense aggregation module."""
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation, Overflow, localcontext
from typing import Any, Iterable, List

from .models import CategoryTotal, ExpenseSummary
from spendtrack.utils.logger import get_logger

logger = get_logger()

FALLBACK_CATEGORY = "Other"

# Widest exponent a REAL (IEEE double) column can hold
MAX_EXPONENT = 308


def _field(record: Any, name: str) -> Any:
    """Read `name` from a mapping or an attribute-style record."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def to_amount(value: Any) -> Decimal:
    """
    Coerce a stored amount to Decimal.

    Anything that is not a finite number, or a string spelling one, counts as 0,
    as does a number outside the range a REAL column can store.
    """
    if isinstance(value, bool):
        return Decimal(0)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return Decimal(0)
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return Decimal(0)
    else:
        return Decimal(0)

    if not amount.is_finite() or abs(amount.adjusted()) > MAX_EXPONENT:
        return Decimal(0)
    return amount


def _finite_or_zero(amount: Decimal) -> Decimal:
    return amount if amount.is_finite() else Decimal(0)


def to_category(value: Any) -> str:
    """Category label, with None and "" grouped under "Other"."""
    if value is None or value == "":
        return FALLBACK_CATEGORY
    return str(value)


class ExpenseAggregator:
    """Reduces expense records into a grand total and per-category sums."""

    def compute_all(self, records: Iterable[Any]) -> ExpenseSummary:
        """
        Aggregate records in one pass.

        Args:
            records: Expense records (mappings or objects with amount/category)

        Returns:
            ExpenseSummary whose total equals the sum of its category sums
        """
        # dict keeps first-seen insertion order
        sums = {}
        count = 0
        with localcontext() as ctx:
            # Overflow yields Infinity instead of raising; Infinity then counts as 0
            ctx.traps[Overflow] = False
            for record in records:
                category = to_category(_field(record, "category"))
                running = sums.get(category, Decimal(0)) + to_amount(_field(record, "amount"))
                sums[category] = _finite_or_zero(running)
                count += 1

            by_category = [CategoryTotal(category, total) for category, total in sums.items()]
            total = _finite_or_zero(sum((item.sum for item in by_category), Decimal(0)))

        logger.debug(f"Aggregated {count} expenses into {len(by_category)} categories")
        return ExpenseSummary(total=total, by_category=by_category)

    def compute_total(self, records: Iterable[Any]) -> Decimal:
        """Sum of all amounts; 0 for no records."""
        return self.compute_all(records).total

    def compute_by_category(self, records: Iterable[Any]) -> List[CategoryTotal]:
        """Per-category sums in first-seen order."""
        return self.compute_all(records).by_category
