"""
Summaries and display series derived from a projection result.

These helpers shape engine output for a table and a chart without doing any
formatting: every number stays a raw float.
"""

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from .period import Period
from .projection import ProjectionResult


class PeriodSummary(BaseModel):
    """Where the money stands when a period begins."""

    index: int = Field(..., ge=0, description="Position of the period as given")
    period: Period = Field(..., description="The summarized period")
    start_balance: Optional[float] = Field(
        default=None, description="Balance at the period's start age, if projected"
    )
    start_withdrawal_rate: Optional[float] = Field(
        default=None, description="Withdrawal rate at the period's start age"
    )
    duration_years: int = Field(..., ge=0, description="Length of the period")


def summarize_periods(
    periods: Sequence[Period], result: ProjectionResult
) -> List[PeriodSummary]:
    """
    Summarize each period against the projection.

    Args:
        periods: Periods in the order the caller shows them
        result: Projection run over those periods

    Returns:
        One summary per period, in the given order
    """
    summaries = []
    for index, period in enumerate(periods):
        snapshot = result.get_balance_at_age(period.start_age)
        summaries.append(
            PeriodSummary(
                index=index,
                period=period,
                start_balance=snapshot.balance if snapshot else None,
                start_withdrawal_rate=snapshot.withdrawal_rate if snapshot else None,
                duration_years=period.duration_years,
            )
        )
    return summaries


def build_table_rows(
    result: ProjectionResult, periods: Sequence[Period]
) -> List[Dict[str, object]]:
    """One row per snapshot, flagging the ages where a period begins."""
    start_ages = {period.start_age for period in periods}
    rows = []
    for snapshot in result.yearly_balances:
        row: Dict[str, object] = snapshot.model_dump()
        row["is_period_start"] = snapshot.age in start_ages
        rows.append(row)
    return rows


def build_chart_series(
    result: ProjectionResult, include_real: bool = False
) -> Dict[str, List[float]]:
    """
    Build the series plotted against age.

    Args:
        result: Projection result
        include_real: Whether to add the inflation-adjusted balance line

    Returns:
        Dictionary of equally long lists keyed by series name
    """
    series = {
        "age": [snapshot.age for snapshot in result.yearly_balances],
        "balance": result.balances().tolist(),
        "contributions": result.contributions().tolist(),
        "growth": result.growth().tolist(),
    }
    if include_real:
        series["real_balance"] = result.real_balances().tolist()
    return series
