"""
Input models for the growth projection engine.

This module defines the financial regimes (periods) that make up a person's
timeline and the fully resolved parameter set handed to the projection
engine. All rates are expressed as percentages (7.0 means 7 %).
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Period(BaseModel):
    """A financial regime covering the half-open age interval [start_age, end_age)."""

    model_config = ConfigDict(frozen=True)

    start_age: int = Field(..., ge=0, le=150, description="First age covered")
    end_age: int = Field(
        ..., ge=0, le=150, description="Age at which the period stops (exclusive)"
    )
    monthly_contribution: float = Field(
        default=0.0, ge=0, description="Amount added every month, never inflated"
    )
    monthly_spending: float = Field(
        default=0.0,
        ge=0,
        description="Amount withdrawn every month in start-age money, grows with inflation",
    )
    annual_return: Optional[float] = Field(
        default=None,
        description="Annual return override in percent; falls back to the global rate",
    )

    def contains(self, age: float) -> bool:
        """Check whether a (possibly fractional) age falls inside the period."""
        return self.start_age <= age < self.end_age

    @property
    def duration_years(self) -> int:
        """Length of the period in years (never negative)."""
        return max(self.end_age - self.start_age, 0)


class IskTaxPolicy(BaseModel):
    """
    Presumptive (ISK-style) tax charged once a year on a notional yield.

    The yield is balance x government_borrowing_rate, and the tax is that
    yield x capital_income_tax_rate. Realized gains play no part.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Whether the tax is charged")
    government_borrowing_rate: float = Field(
        default=0.0, description="Notional yield basis in percent"
    )
    capital_income_tax_rate: float = Field(
        default=0.30, ge=0, le=1, description="Tax rate applied to the notional yield"
    )


class ProjectionInputs(BaseModel):
    """Explicit parameter set for one projection run.

    Defaults:
        end_age: 100 (the horizon age is inclusive)
        inflation_rate: 0.0 percent
        isk_tax: None (no tax)
    """

    model_config = ConfigDict(frozen=True)

    initial_amount: float = Field(..., description="Balance at the start age")
    periods: List[Period] = Field(..., description="Financial regimes")
    annual_return: float = Field(..., description="Global annual return in percent")
    end_age: int = Field(default=100, ge=0, le=150, description="Horizon age")
    inflation_rate: float = Field(
        default=0.0, gt=-100, description="Annual inflation rate in percent"
    )
    isk_tax: Optional[IskTaxPolicy] = Field(
        default=None, description="Optional presumptive tax policy"
    )

    @property
    def tax_enabled(self) -> bool:
        """Whether a presumptive tax is charged during the run."""
        return self.isk_tax is not None and self.isk_tax.enabled


def find_overlapping_periods(periods: List[Period]) -> List[Tuple[Period, Period]]:
    """
    Find pairs of periods whose age intervals overlap.

    Overlaps are legal for the engine (the earliest-starting period wins) but
    usually point at a caller mistake when stitching the timeline.

    Args:
        periods: Periods in any order

    Returns:
        List of (earlier, later) pairs sharing at least one age
    """
    ordered = sorted(periods, key=lambda period: period.start_age)
    overlaps = []
    for i, earlier in enumerate(ordered):
        if earlier.duration_years == 0:
            continue
        for later in ordered[i + 1 :]:
            if later.duration_years == 0:
                continue
            if later.start_age < earlier.end_age:
                overlaps.append((earlier, later))
    return overlaps
