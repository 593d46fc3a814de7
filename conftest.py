"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Factory schema fixtures
- Sample operation batches
"""

from __future__ import annotations

from typing import Any

import pytest
from dotenv import load_dotenv

from dashboard_engine.schema import get_blank_schema, get_default_schema

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Schema Fixtures
# =============================================================================


@pytest.fixture
def default_schema() -> dict[str, Any]:
    """Populated light schema (table1, chart1)."""
    return get_default_schema()


@pytest.fixture
def blank_schema() -> dict[str, Any]:
    """Light schema without components."""
    return get_blank_schema()


# =============================================================================
# Operation Fixtures
# =============================================================================


@pytest.fixture
def sample_operations() -> list[dict[str, Any]]:
    """A valid mixed batch against the default schema.

    Sets two columns, adds kpi1, moves it to the top and styles it.
    """
    return [
        {"op": "update", "path": "layout/columns", "value": 2},
        {
            "op": "add_component",
            "component": {
                "id": "kpi1",
                "type": "kpi",
                "props": {"dataSource": "/api/data", "calculation": "count", "label": "Total Items"},
            },
        },
        {"op": "reorder_component", "id": "kpi1", "newIndex": 0},
        {"op": "set_style", "path": "components[id=kpi1]/style/color", "value": "#ff0000"},
        {"op": "set_style", "path": "theme/primaryColor", "value": "#10b981"},
    ]
