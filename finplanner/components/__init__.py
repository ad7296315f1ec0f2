"""Expose component submodules for convenience."""

from .charts import (
    retirement_chart,
    savings_chart,
    tax_breakdown_chart,
    bracket_chart,
    allocation_pie,
    growth_chart,
)
from .export import series_to_csv
from .workbook import SheetInfo, sample_workbook

__all__ = [
    "retirement_chart",
    "savings_chart",
    "tax_breakdown_chart",
    "bracket_chart",
    "allocation_pie",
    "growth_chart",
    "series_to_csv",
    "SheetInfo",
    "sample_workbook",
]
