"""
Projection service for turning API payloads into projection results.

This service resolves defaults, stitches user-entered periods into a
contiguous timeline when asked to, runs the projection engine and shapes the
result for a table and a chart.
"""

import logging
from typing import Any, Dict, List

from fund_growth.exceptions import InvalidInputError
from fund_growth.models.period import Period, ProjectionInputs
from fund_growth.models.projection import calculate_growth
from fund_growth.models.summary import (
    build_chart_series,
    build_table_rows,
    summarize_periods,
)
from fund_growth.models.timeline import (
    LegacyCalculationInputs,
    PeriodDraft,
    calculate_growth_legacy,
    stitch_periods,
)

logger = logging.getLogger(__name__)


class ProjectionService:
    """Service for running growth projections from request payloads."""

    def __init__(
        self,
        default_end_age: int = 100,
        default_inflation_rate: float = 0.0,
        max_periods: int = 50,
    ) -> None:
        """Initialize the projection service.

        Args:
            default_end_age: Horizon age used when a payload omits end_age
            default_inflation_rate: Inflation in percent used when omitted
            max_periods: Largest number of periods accepted per request
        """
        self.default_end_age = default_end_age
        self.default_inflation_rate = default_inflation_rate
        self.max_periods = max_periods
        self.logger = logging.getLogger(__name__)

    def resolve_inputs(self, payload: Dict[str, Any]) -> ProjectionInputs:
        """Build a fully resolved parameter set from a request payload.

        Args:
            payload: Request body. Periods may omit end_age when "stitch" is true.

        Returns:
            Validated projection inputs

        Raises:
            InvalidInputError: If there are too many periods
            pydantic.ValidationError: If any field is malformed
        """
        data = {
            key: value
            for key, value in payload.items()
            if key not in ("stitch", "include_real")
        }
        data.setdefault("end_age", self.default_end_age)
        data.setdefault("inflation_rate", self.default_inflation_rate)

        raw_periods = data.get("periods") or []
        if isinstance(raw_periods, list) and len(raw_periods) > self.max_periods:
            raise InvalidInputError(
                f"At most {self.max_periods} periods are allowed, got {len(raw_periods)}"
            )

        if payload.get("stitch") and isinstance(raw_periods, list):
            drafts = [PeriodDraft.model_validate(raw) for raw in raw_periods]
            data["periods"] = stitch_periods(drafts, end_age=data["end_age"])

        return ProjectionInputs.model_validate(data)

    def run_projection(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Run a projection and shape the result for display.

        Args:
            payload: Request body, see resolve_inputs

        Returns:
            Dictionary with snapshots, period summaries, table rows and chart series
        """
        inputs = self.resolve_inputs(payload)
        self.logger.info(
            f"Running projection with {len(inputs.periods)} periods to age {inputs.end_age}"
        )

        try:
            result = calculate_growth(inputs)
        except InvalidInputError as e:
            self.logger.error(f"Projection rejected: {str(e)}")
            raise

        periods: List[Period] = list(inputs.periods)
        include_real = bool(payload.get("include_real")) or inputs.inflation_rate != 0

        response = result.to_dict()
        response["period_summaries"] = [
            summary.model_dump() for summary in summarize_periods(periods, result)
        ]
        response["table"] = build_table_rows(result, periods)
        response["chart"] = build_chart_series(result, include_real=include_real)

        self.logger.info(
            f"Completed projection: {len(result)} years, final balance {result.get_final_balance():.2f}"
        )
        return response

    def run_legacy_projection(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Run a projection from the two-phase legacy inputs."""
        inputs = LegacyCalculationInputs.model_validate(payload)
        self.logger.info(
            f"Running legacy projection from age {inputs.start_age} "
            f"retiring at {inputs.retirement_age}"
        )
        return calculate_growth_legacy(inputs).to_dict()
