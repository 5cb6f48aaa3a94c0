"""Pie-chart input built from per-category totals."""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence

from spendtrack.aggregation.models import CategoryTotal

DEFAULT_COLORS = [
    "#FF6384",
    "#36A2EB",
    "#FFCE56",
    "#4BC0C0",
    "#9966FF",
    "#FF9F40",
]


@dataclass(frozen=True)
class ChartSlice:
    """One wedge of the category pie chart."""
    name: str
    amount: Decimal
    color: str
    share: Decimal


def build_chart_slices(
    by_category: Sequence[CategoryTotal],
    colors: Sequence[str] = DEFAULT_COLORS
) -> List[ChartSlice]:
    """
    Map category totals to chart slices, keeping their order.

    Args:
        by_category: Output of ExpenseAggregator.compute_by_category
        colors: Palette, reused cyclically when there are more categories than colors

    Returns:
        List of ChartSlice objects (empty when there is nothing to chart)
    """
    if not colors:
        raise ValueError("Chart palette must contain at least one color")

    total = sum((item.sum for item in by_category), Decimal(0))
    return [
        ChartSlice(
            name=item.category,
            amount=item.sum,
            color=colors[index % len(colors)],
            share=item.sum / total if total else Decimal(0)
        )
        for index, item in enumerate(by_category)
    ]
