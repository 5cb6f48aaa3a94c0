"""Category chart module."""
from .slices import ChartSlice, build_chart_slices, DEFAULT_COLORS

__all__ = ["ChartSlice", "build_chart_slices", "DEFAULT_COLORS"]
