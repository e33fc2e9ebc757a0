"""
JSON Schema generator for the projection input models.

This module provides utilities to generate JSON schemas from the Pydantic
input models and save them to files for use by form-building clients.
"""

import json
from pathlib import Path
from typing import Any, Dict

from .period import ProjectionInputs


def generate_projection_schema() -> Dict[str, Any]:
    """Generate JSON schema for the ProjectionInputs model."""
    schema = ProjectionInputs.model_json_schema()

    # Add metadata to the schema
    schema.update(
        {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "Index Fund Growth Projection Inputs v0.1",
            "description": "Initial balance, financial periods, return, horizon, inflation and presumptive tax for a growth projection",
        }
    )
    return schema


def save_projection_schema(output_path: Path) -> None:
    """Save the projection inputs JSON schema to a file."""
    schema = generate_projection_schema()

    with open(output_path, "w") as f:
        json.dump(schema, f, indent=2)

