"""
Period-based compounding projection engine.

This module projects an investment balance month by month across a sequence
of financial regimes and samples the trajectory once per whole year of age.
Within each month the order of operations is fixed:

1. growth at the active period's rate (or the global rate)
2. inflation multiplier advance
3. contribution and inflation-scaled spending
4. at each year end: presumptive tax, then the yearly snapshot

The engine is a pure function of its inputs: it works on a sorted private
copy of the periods and returns freshly built, immutable snapshots.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from fund_growth.exceptions import InvalidInputError

from .period import IskTaxPolicy, Period, ProjectionInputs, find_overlapping_periods

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


class YearlyBalance(BaseModel):
    """Snapshot of the projection at a whole year of age."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(..., description="Age at the snapshot")
    balance: float = Field(..., description="Nominal balance")
    real_balance: float = Field(
        ..., description="Balance deflated to start-age purchasing power"
    )
    contributions: float = Field(
        ..., description="Initial amount plus all contributions, not net of spending"
    )
    growth: float = Field(..., description="balance - contributions")
    withdrawal_rate: float = Field(
        ..., description="Annualized inflated spending over balance, in percent"
    )
    tax_paid: float = Field(..., description="Cumulative presumptive tax paid")


class ProjectionResult(BaseModel):
    """Result of a projection run."""

    model_config = ConfigDict(frozen=True)

    inputs: ProjectionInputs = Field(..., description="Inputs the run was built from")
    yearly_balances: Tuple[YearlyBalance, ...] = Field(
        ..., description="Snapshots in ascending age order"
    )

    def __len__(self) -> int:
        return len(self.yearly_balances)

    def _series(self, field_name: str) -> NDArray[np.float64]:
        return np.array(
            [getattr(snapshot, field_name) for snapshot in self.yearly_balances],
            dtype=np.float64,
        )

    def ages(self) -> NDArray[np.float64]:
        return self._series("age")

    def balances(self) -> NDArray[np.float64]:
        return self._series("balance")

    def real_balances(self) -> NDArray[np.float64]:
        return self._series("real_balance")

    def contributions(self) -> NDArray[np.float64]:
        return self._series("contributions")

    def growth(self) -> NDArray[np.float64]:
        return self._series("growth")

    def withdrawal_rates(self) -> NDArray[np.float64]:
        return self._series("withdrawal_rate")

    def tax_paid(self) -> NDArray[np.float64]:
        return self._series("tax_paid")

    def get_final_balance(self) -> float:
        """Nominal balance at the horizon age."""
        return self.yearly_balances[-1].balance

    def get_total_tax_paid(self) -> float:
        """Cumulative tax paid over the whole run."""
        return self.yearly_balances[-1].tax_paid

    def get_depletion_age(self) -> Optional[int]:
        """
        Get the first age at which the balance is exhausted.

        Returns:
            Age of the first snapshot with a balance at or below zero, or None
            if the money lasts through the horizon
        """
        depleted = self.balances() <= 0
        if not np.any(depleted):
            return None
        return self.yearly_balances[int(np.argmax(depleted))].age

    def get_balance_at_age(self, age: int) -> Optional[YearlyBalance]:
        """Get the snapshot for a given age, if the run covers it."""
        for snapshot in self.yearly_balances:
            if snapshot.age == age:
                return snapshot
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the snapshots to JSON-friendly dictionaries."""
        return {
            "yearly_balances": [
                snapshot.model_dump() for snapshot in self.yearly_balances
            ],
            "final_balance": self.get_final_balance(),
            "depletion_age": self.get_depletion_age(),
            "total_tax_paid": self.get_total_tax_paid(),
        }


class GrowthProjection:
    """Projects a balance month by month through a sequence of periods."""

    def __init__(self, inputs: ProjectionInputs):
        """Initialize the projection.

        Args:
            inputs: Fully resolved projection parameters

        Raises:
            InvalidInputError: If no period is given
        """
        self.inputs = inputs
        self._validate_inputs()

        # Stable sort: periods sharing a start age keep their declared order
        self.periods: List[Period] = sorted(
            inputs.periods, key=lambda period: period.start_age
        )
        self.start_age = self.periods[0].start_age

    def _validate_inputs(self) -> None:
        """Validate the inputs before simulating."""
        if len(self.inputs.periods) == 0:
            raise InvalidInputError("At least one period is required")

    def get_period_for_age(self, age: float) -> Optional[Period]:
        """
        Get the active period for an age.

        The first period in ascending start-age order whose interval contains
        the age wins, so overlapping periods resolve to the earliest one.

        Args:
            age: Age in years, possibly fractional

        Returns:
            The active period, or None if no period covers the age
        """
        for period in self.periods:
            if period.contains(age):
                return period
        return None

    def simulate(self) -> ProjectionResult:
        """
        Run the projection.

        Returns:
            ProjectionResult with one snapshot per whole year from the start
            age to the horizon age
        """
        inputs = self.inputs
        overlaps = find_overlapping_periods(self.periods)
        if overlaps:
            logger.warning(
                f"{len(overlaps)} overlapping period pair(s); "
                "the earliest-starting period wins where they overlap"
            )

        start_age = self.start_age
        total_years = inputs.end_age - start_age
        months = total_years * MONTHS_PER_YEAR
        inflation = inputs.inflation_rate / 100
        monthly_inflation_factor = (1 + inflation) ** (1 / MONTHS_PER_YEAR)
        tax_policy: Optional[IskTaxPolicy] = inputs.isk_tax if inputs.tax_enabled else None

        balance = inputs.initial_amount
        inflation_multiplier = 1.0
        cumulative_tax_paid = 0.0
        total_contributions = inputs.initial_amount

        yearly_balances: List[YearlyBalance] = [
            YearlyBalance(
                age=start_age,
                balance=balance,
                real_balance=balance,
                contributions=total_contributions,
                growth=0.0,
                withdrawal_rate=self._withdrawal_rate(
                    self.get_period_for_age(start_age), balance, inflation_multiplier
                ),
                tax_paid=0.0,
            )
        ]

        for month in range(1, months + 1):
            current_age = start_age + (month - 1) / MONTHS_PER_YEAR
            active_period = self.get_period_for_age(current_age)

            if active_period is not None and active_period.annual_return is not None:
                effective_return = active_period.annual_return
            else:
                effective_return = inputs.annual_return
            monthly_rate = effective_return / 100 / MONTHS_PER_YEAR
            balance = balance * (1 + monthly_rate)

            inflation_multiplier *= monthly_inflation_factor

            if active_period is not None:
                balance += active_period.monthly_contribution
                balance -= active_period.monthly_spending * inflation_multiplier
                total_contributions += active_period.monthly_contribution

            if month % MONTHS_PER_YEAR == 0:
                years_elapsed = month // MONTHS_PER_YEAR
                age = start_age + years_elapsed

                if tax_policy is not None:
                    annual_tax = (
                        balance
                        * (tax_policy.government_borrowing_rate / 100)
                        * tax_policy.capital_income_tax_rate
                    )
                    balance -= annual_tax
                    cumulative_tax_paid += annual_tax

                yearly_balances.append(
                    YearlyBalance(
                        age=age,
                        balance=balance,
                        real_balance=balance / (1 + inflation) ** years_elapsed,
                        contributions=total_contributions,
                        growth=balance - total_contributions,
                        withdrawal_rate=self._withdrawal_rate(
                            self.get_period_for_age(age), balance, inflation_multiplier
                        ),
                        tax_paid=cumulative_tax_paid,
                    )
                )

        logger.debug(
            f"Projected {len(yearly_balances)} years from age {start_age} "
            f"to {yearly_balances[-1].age}, final balance {balance:.2f}"
        )

        return ProjectionResult(inputs=inputs, yearly_balances=tuple(yearly_balances))

    @staticmethod
    def _withdrawal_rate(
        period: Optional[Period], balance: float, inflation_multiplier: float
    ) -> float:
        """Annualized spending over balance in percent, 0 when nothing is left."""
        if period is None or balance <= 0:
            return 0.0
        annual_spending = (
            period.monthly_spending * MONTHS_PER_YEAR * inflation_multiplier
        )
        return (annual_spending / balance) * 100


def calculate_growth(inputs: ProjectionInputs) -> ProjectionResult:
    """Run a projection for a resolved parameter set."""
    return GrowthProjection(inputs).simulate()


def project(
    initial_amount: float,
    periods: Sequence[Period],
    annual_return: float,
    end_age: int = 100,
    inflation_rate: float = 0.0,
    isk_tax: Optional[IskTaxPolicy] = None,
) -> Tuple[YearlyBalance, ...]:
    """
    Project a balance through a sequence of periods.

    Args:
        initial_amount: Balance at the earliest period's start age
        periods: Financial regimes, in any order
        annual_return: Global annual return in percent
        end_age: Horizon age, inclusive
        inflation_rate: Annual inflation in percent
        isk_tax: Optional presumptive tax policy

    Returns:
        Yearly snapshots in ascending age order

    Raises:
        InvalidInputError: If periods is empty
    """
    inputs = ProjectionInputs(
        initial_amount=initial_amount,
        periods=list(periods),
        annual_return=annual_return,
        end_age=end_age,
        inflation_rate=inflation_rate,
        isk_tax=isk_tax,
    )
    return calculate_growth(inputs).yearly_balances
