"""Data models and engine for index fund growth projections."""

from .period import (
    IskTaxPolicy,
    Period,
    ProjectionInputs,
    find_overlapping_periods,
)
from .projection import (
    GrowthProjection,
    ProjectionResult,
    YearlyBalance,
    calculate_growth,
    project,
)
from .timeline import (
    LegacyCalculationInputs,
    PeriodDraft,
    calculate_growth_legacy,
    stitch_periods,
)
from .summary import (
    PeriodSummary,
    build_chart_series,
    build_table_rows,
    summarize_periods,
)

__all__ = [
    "IskTaxPolicy",
    "Period",
    "ProjectionInputs",
    "find_overlapping_periods",
    "GrowthProjection",
    "ProjectionResult",
    "YearlyBalance",
    "calculate_growth",
    "project",
    "LegacyCalculationInputs",
    "PeriodDraft",
    "calculate_growth_legacy",
    "stitch_periods",
    "PeriodSummary",
    "build_chart_series",
    "build_table_rows",
    "summarize_periods",
]
