"""
Plotly heatmap formats for chartspec.

Two wire shapes carry a heatmap matrix:

- Single spec::

    {"type": "heatmap",
     "data": {"z": [[1, 2], [3, 4]], "x": ["c1", "c2"], "y": ["r1", "r2"]},
     "layout": {"title": "Load"}}

- Figure: ``{"data": [trace, ...], "layout": {...}}`` where the first trace
  with ``type == "heatmap"`` and a ``z`` matrix is used. A figure without
  such a trace does not match this format.

``z`` is row-major. One series is produced per row, named by the row
category; every cell becomes a point whose ``x`` is the column category and
whose ``intensity`` is the cell value. ``y`` stays 0.
"""

from __future__ import annotations

from pydantic import StrictFloat, StrictStr, model_validator

from chartspec.config import DecoderConfig
from chartspec.formats.base import ChartFormat, WireShape
from chartspec.model import ChartKind, Point, Series, Spec
from chartspec.values import NULL, JsonValue, text_of

Matrix = list[list[StrictFloat]]


# ---------------------------------------------------------------------------
# Wire shapes
# ---------------------------------------------------------------------------

class PlotlyAxis(WireShape):
    title: JsonValue = NULL


class PlotlyLayout(WireShape):
    title: JsonValue = NULL
    xaxis: PlotlyAxis | None = None
    yaxis: PlotlyAxis | None = None


class PlotlyHeatmapData(WireShape):
    z: Matrix
    x: list[StrictStr] | None = None
    y: list[StrictStr] | None = None


class PlotlySingleShape(WireShape):
    type: StrictStr
    data: PlotlyHeatmapData
    layout: PlotlyLayout | None = None

    @model_validator(mode="after")
    def _require_heatmap_type(self) -> PlotlySingleShape:
        if self.type.strip().lower() != "heatmap":
            raise ValueError(f"type is {self.type!r}, expected 'heatmap'")
        return self


class PlotlyTrace(WireShape):
    type: StrictStr | None = None
    z: Matrix | None = None
    x: list[StrictStr] | None = None
    y: list[StrictStr] | None = None
    name: StrictStr | None = None

    @property
    def is_heatmap(self) -> bool:
        return (
            self.type is not None
            and self.type.strip().lower() == "heatmap"
            and self.z is not None
        )


class PlotlyFigureShape(WireShape):
    data: list[PlotlyTrace]
    layout: PlotlyLayout | None = None

    @model_validator(mode="after")
    def _require_heatmap_trace(self) -> PlotlyFigureShape:
        if self.heatmap_trace() is None:
            raise ValueError("no trace with type 'heatmap' and a 'z' matrix")
        return self

    def heatmap_trace(self) -> PlotlyTrace | None:
        return next((t for t in self.data if t.is_heatmap), None)


# ---------------------------------------------------------------------------
# Mappers
# ---------------------------------------------------------------------------

def _category(categories: list[str], idx: int) -> str:
    return categories[idx] if idx < len(categories) else str(idx)


def _matrix_series(
    z: list[list[float]],
    columns: list[str] | None,
    rows: list[str] | None,
) -> tuple[Series, ...]:
    if columns is None:
        columns = [str(j) for j in range(len(z[0]))] if z else []
    if rows is None:
        rows = [str(i) for i in range(len(z))]

    series: list[Series] = []
    for i, row in enumerate(z):
        points = tuple(
            Point(x=_category(columns, j), y=0.0, intensity=float(cell))
            for j, cell in enumerate(row)
        )
        series.append(Series(name=_category(rows, i), points=points))
    return tuple(series)


def _layout_labels(layout: PlotlyLayout | None) -> dict[str, str | None]:
    if layout is None:
        return {"title": None, "x_label": None, "y_label": None}
    return {
        "title": text_of(layout.title),
        "x_label": text_of(layout.xaxis.title) if layout.xaxis is not None else None,
        "y_label": text_of(layout.yaxis.title) if layout.yaxis is not None else None,
    }


def map_plotly_heatmap(shape: PlotlySingleShape, config: DecoderConfig) -> Spec:
    """Map a single-spec heatmap."""
    data = shape.data
    return Spec(
        kind=ChartKind.HEATMAP,
        series=_matrix_series(data.z, data.x, data.y),
        **_layout_labels(shape.layout),
    )


def map_plotly_figure(shape: PlotlyFigureShape, config: DecoderConfig) -> Spec:
    """Map the first heatmap trace of a figure."""
    trace = shape.heatmap_trace()
    return Spec(
        kind=ChartKind.HEATMAP,
        series=_matrix_series(trace.z, trace.x, trace.y),
        **_layout_labels(shape.layout),
    )


class PlotlyHeatmapFormat(ChartFormat):
    """Plotly ``{type: "heatmap", data: {z, x, y}}`` payloads."""

    name = "plotly_heatmap"
    shape_model = PlotlySingleShape

    def to_spec(self, shape: PlotlySingleShape, config: DecoderConfig) -> Spec:
        return map_plotly_heatmap(shape, config)


class PlotlyFigureFormat(ChartFormat):
    """Plotly figures ``{data: [traces], layout}`` holding a heatmap trace."""

    name = "plotly_figure"
    shape_model = PlotlyFigureShape

    def to_spec(self, shape: PlotlyFigureShape, config: DecoderConfig) -> Spec:
        return map_plotly_figure(shape, config)
