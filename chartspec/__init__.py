"""
chartspec: decode chart payloads from several charting ecosystems into one
canonical, rendering-agnostic chart specification.

Public API surface:

- ``parse_spec(raw, config=None)`` -- **recommended entry point**. Accepts
  JSON bytes (or text) in any supported wire format and returns a ``Spec``.
  Raises ``UnsupportedFormatError`` when nothing matches.

- ``detect_format(raw, config=None)`` -- name of the wire format that
  ``parse_spec`` would use, without mapping.

- ``load_config(path)`` / ``save_config(config, path)`` -- YAML I/O for
  ``DecoderConfig``.

Supported formats, in detection priority order: Chart.js, Plotly heatmap,
Plotly figure, ECharts, Highcharts, Vega-Lite (inline rows), the simple
custom schema and the flat pie schema.

Examples::

    import chartspec

    spec = chartspec.parse_spec(response_bytes)
    for series in spec.series:
        print(series.name, [(p.x, p.y) for p in series.points])
"""

from __future__ import annotations

from chartspec.config import DecoderConfig, load_config, save_config
from chartspec.detect import detect_format, parse_spec
from chartspec.exceptions import (
    ChartSpecError,
    ConfigValidationError,
    UnsupportedFormatError,
)
from chartspec.model import ChartKind, Point, Series, Spec
from chartspec.values import JsonKind, JsonValue

__all__ = [
    "parse_spec",
    "detect_format",
    "DecoderConfig",
    "load_config",
    "save_config",
    "ChartKind",
    "Point",
    "Series",
    "Spec",
    "JsonKind",
    "JsonValue",
    "ChartSpecError",
    "ConfigValidationError",
    "UnsupportedFormatError",
]
