"""
Shared test fixtures and path constants for chartspec tests.

All fixture file paths are defined here as module-level constants for
easy discovery and modification. If fixture files move or new ones are
added, update this file.
"""

import json
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Fixture file paths -- edit here if files move or new ones are added
# ---------------------------------------------------------------------------
FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"

CHARTJS_BAR_JSON = FIXTURE_DIR / "chartjs_bar.json"
CHARTJS_BUBBLE_JSON = FIXTURE_DIR / "chartjs_bubble.json"
PLOTLY_HEATMAP_JSON = FIXTURE_DIR / "plotly_heatmap.json"
PLOTLY_FIGURE_JSON = FIXTURE_DIR / "plotly_figure.json"
ECHARTS_LINE_JSON = FIXTURE_DIR / "echarts_line.json"
HIGHCHARTS_COLUMN_JSON = FIXTURE_DIR / "highcharts_column.json"
VEGALITE_GROUPED_JSON = FIXTURE_DIR / "vegalite_grouped.json"
CUSTOM_AREA_JSON = FIXTURE_DIR / "custom_area.json"
PIE_FLAT_JSON = FIXTURE_DIR / "pie_flat.json"


def as_json(obj) -> bytes:
    """Encode a Python object as the raw bytes a caller would hand over."""
    return json.dumps(obj).encode("utf-8")


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (decodes fixture files end to end)",
    )
