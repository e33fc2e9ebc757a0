"""
Projection blueprint for running growth projections.

This module provides API endpoints that run the projection engine and return
yearly snapshots, period summaries and chart series as JSON.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from fund_growth.exceptions import InvalidInputError
from fund_growth.models.schema_generator import generate_projection_schema
from fund_growth.services.projection_service import ProjectionService

projection_bp = Blueprint("projection", __name__, url_prefix="/api")


def _get_service() -> ProjectionService:
    return ProjectionService(
        default_end_age=current_app.config["DEFAULT_END_AGE"],
        default_inflation_rate=current_app.config["DEFAULT_INFLATION_RATE"],
        max_periods=current_app.config["MAX_PERIODS"],
    )


@projection_bp.route("/projections", methods=["POST"])
def create_projection() -> Any:
    """Run a projection over a list of periods.

    Returns:
        JSON response with snapshots, summaries, table rows and chart series
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        return jsonify(_get_service().run_projection(data)), 200

    except ValidationError as e:
        return (
            jsonify(
                {
                    "error": "Invalid projection inputs",
                    "details": e.errors(include_url=False, include_context=False),
                }
            ),
            400,
        )

    except InvalidInputError as e:
        return jsonify({"error": "Invalid projection inputs", "message": str(e)}), 400

    except Exception as e:
        current_app.logger.error(f"Error running projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/projections/legacy", methods=["POST"])
def create_legacy_projection() -> Any:
    """Run a projection from a single retirement age.

    Returns:
        JSON response with yearly snapshots
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        return jsonify(_get_service().run_legacy_projection(data)), 200

    except ValidationError as e:
        return (
            jsonify(
                {
                    "error": "Invalid projection inputs",
                    "details": e.errors(include_url=False, include_context=False),
                }
            ),
            400,
        )

    except Exception as e:
        current_app.logger.error(f"Error running legacy projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/projections/schema", methods=["GET"])
def get_projection_schema() -> Any:
    """Get the JSON schema of the projection inputs."""
    return jsonify(generate_projection_schema()), 200
