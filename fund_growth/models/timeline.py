"""
Timeline helpers that build period lists for the projection engine.

Callers usually describe a life as a list of phases that each start at some
age and run until the next one begins. These helpers turn such drafts into
contiguous periods and keep the older single-retirement-age interface alive.
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .period import Period, ProjectionInputs
from .projection import ProjectionResult, calculate_growth


class PeriodDraft(BaseModel):
    """A period as entered by a user: a start age without an end age."""

    model_config = ConfigDict(frozen=True)

    start_age: int = Field(..., ge=0, le=150, description="First age covered")
    monthly_contribution: float = Field(default=0.0, ge=0)
    monthly_spending: float = Field(default=0.0, ge=0)
    annual_return: Optional[float] = Field(default=None)


def stitch_periods(drafts: Sequence[PeriodDraft], end_age: int = 100) -> List[Period]:
    """
    Build contiguous periods from drafts.

    Each draft ends where the next one starts and the last one ends at the
    horizon age. Drafts are stitched in the order given.

    Args:
        drafts: Period drafts in timeline order
        end_age: Horizon age closing the last period

    Returns:
        List of periods with end ages filled in
    """
    periods = []
    for index, draft in enumerate(drafts):
        if index == len(drafts) - 1:
            period_end = end_age
        else:
            period_end = drafts[index + 1].start_age
        periods.append(Period(end_age=period_end, **draft.model_dump()))
    return periods


class LegacyCalculationInputs(BaseModel):
    """Single working phase followed by a single retirement phase."""

    initial_amount: float = Field(..., description="Balance at the start age")
    monthly_contribution: float = Field(
        default=0.0, ge=0, description="Monthly saving until retirement"
    )
    monthly_spending: float = Field(
        default=0.0, ge=0, description="Monthly spending from retirement on"
    )
    annual_return: float = Field(..., description="Annual return in percent")
    start_age: int = Field(..., ge=0, le=150)
    retirement_age: int = Field(..., ge=0, le=150)
    end_age: int = Field(default=100, ge=0, le=150)

    def to_periods(self) -> List[Period]:
        """Map the inputs onto a saving period and a spending period."""
        return [
            Period(
                start_age=self.start_age,
                end_age=self.retirement_age,
                monthly_contribution=self.monthly_contribution,
                monthly_spending=0.0,
            ),
            Period(
                start_age=self.retirement_age,
                end_age=self.end_age,
                monthly_contribution=0.0,
                monthly_spending=self.monthly_spending,
            ),
        ]


def calculate_growth_legacy(inputs: LegacyCalculationInputs) -> ProjectionResult:
    """Run a projection for the two-phase legacy inputs (no inflation or tax)."""
    return calculate_growth(
        ProjectionInputs(
            initial_amount=inputs.initial_amount,
            periods=inputs.to_periods(),
            annual_return=inputs.annual_return,
            end_age=inputs.end_age,
        )
    )
