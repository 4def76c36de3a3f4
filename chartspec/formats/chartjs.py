"""
Chart.js format for chartspec.

Input structure::

    {
      "type": "bar",
      "title": "Revenue",
      "data": {
        "labels": ["Q1", "Q2"],
        "datasets": [{"label": "2024", "data": [10, 12]}]
      },
      "options": {"scales": {"y": {"beginAtZero": true}}}
    }

A dataset value is either a bare number or an object ``{x, y, r}``.
Two layouts are supported:

- With ``data.labels``: values are aligned to the labels by position
  (bar/line/area). An object value contributes its ``y`` and ``r``.
- Without labels: every value must be a self-describing ``{x, y, r}``
  object (scatter/bubble).

``pie`` and ``doughnut`` go through a dedicated mapper that reads only the
first dataset.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from pydantic import Field, StrictBool, StrictStr

from chartspec.config import DecoderConfig
from chartspec.formats.base import ChartFormat, WireShape, lookup_kind
from chartspec.model import ChartKind, Point, Series, Spec
from chartspec.values import NULL, JsonKind, JsonValue, text_of

logger = logging.getLogger(__name__)

_PIE_TYPES = frozenset({"pie", "doughnut"})

# radar and polarArea have no canonical counterpart and fall back.
_KINDS: dict[str, ChartKind] = {
    "line": ChartKind.LINE,
    "bar": ChartKind.BAR,
    "area": ChartKind.AREA,
    "scatter": ChartKind.SCATTER,
    "bubble": ChartKind.BUBBLE,
    "radar": ChartKind.BAR,
    "polararea": ChartKind.PIE,
}


# ---------------------------------------------------------------------------
# Wire shape
# ---------------------------------------------------------------------------

class ChartJSDataset(WireShape):
    label: StrictStr | None = None
    data: list[JsonValue]


class ChartJSData(WireShape):
    labels: list[StrictStr] | None = None
    datasets: list[ChartJSDataset]


class ChartJSScale(WireShape):
    begin_at_zero: StrictBool | None = Field(None, alias="beginAtZero")
    title: JsonValue = NULL


class ChartJSScales(WireShape):
    x: ChartJSScale | None = None
    y: ChartJSScale | None = None


class ChartJSPlugins(WireShape):
    title: JsonValue = NULL


class ChartJSOptions(WireShape):
    scales: ChartJSScales | None = None
    plugins: ChartJSPlugins | None = None


class ChartJSShape(WireShape):
    type: StrictStr
    data: ChartJSData
    title: StrictStr | None = None
    options: ChartJSOptions | None = None


# ---------------------------------------------------------------------------
# Mappers
# ---------------------------------------------------------------------------

class _Value(NamedTuple):
    x: JsonValue | None
    y: float | None
    r: float | None


def _read_value(value: JsonValue) -> _Value:
    """Read a dataset value: a bare number or an ``{x, y, r}`` object."""
    if value.kind is JsonKind.NUMBER:
        return _Value(None, value.as_number(), None)
    if value.kind is JsonKind.MAP:
        y = value.get("y")
        r = value.get("r")
        return _Value(
            value.get("x"),
            y.as_number() if y is not None else None,
            r.as_number() if r is not None else None,
        )
    return _Value(None, None, None)


def _title(shape: ChartJSShape) -> str | None:
    if shape.title is not None:
        return shape.title
    if shape.options is not None and shape.options.plugins is not None:
        return text_of(shape.options.plugins.title)
    return None


def _axis_label(shape: ChartJSShape, axis: str) -> str | None:
    if shape.options is None or shape.options.scales is None:
        return None
    scale = getattr(shape.options.scales, axis)
    return text_of(scale.title) if scale is not None else None


def map_chartjs_pie(shape: ChartJSShape, config: DecoderConfig) -> Spec:
    """Map a pie/doughnut payload: one series from the first dataset.

    Values pair with ``labels`` by position; without labels the positions
    themselves (``"0"``, ``"1"``, ...) become the labels. Values that are
    not numeric are dropped.
    """
    title = _title(shape)
    if not shape.data.datasets:
        return Spec(kind=ChartKind.PIE, title=title)

    dataset = shape.data.datasets[0]
    labels = shape.data.labels
    if labels is None:
        labels = [str(i) for i in range(len(dataset.data))]

    points: list[Point] = []
    for label, raw in zip(labels, dataset.data):
        value = _read_value(raw)
        if value.y is None:
            continue
        points.append(Point(x=label, y=value.y))

    name = dataset.label if dataset.label is not None else config.default_pie_name
    return Spec(
        kind=ChartKind.PIE,
        title=title,
        series=(Series(name=name, points=tuple(points)),),
    )


def _aligned_points(labels: list[str], data: list[JsonValue]) -> list[Point]:
    points: list[Point] = []
    for idx, label in enumerate(labels):
        if idx >= len(data):
            continue
        value = _read_value(data[idx])
        if value.y is None:
            continue
        points.append(Point(x=label, y=value.y, size=value.r))
    return points


def _self_described_points(data: list[JsonValue]) -> list[Point]:
    points: list[Point] = []
    for raw in data:
        value = _read_value(raw)
        x = value.x.as_label() if value.x is not None else None
        if x is None or value.y is None:
            continue
        points.append(Point(x=x, y=value.y, size=value.r))
    return points


def map_chartjs_general(shape: ChartJSShape, config: DecoderConfig) -> Spec:
    """Map every non-pie Chart.js payload, one series per dataset."""
    labels = shape.data.labels
    begin_at_zero = False
    if (
        shape.options is not None
        and shape.options.scales is not None
        and shape.options.scales.y is not None
        and shape.options.scales.y.begin_at_zero is not None
    ):
        begin_at_zero = shape.options.scales.y.begin_at_zero

    series: list[Series] = []
    for dataset in shape.data.datasets:
        if labels is not None:
            points = _aligned_points(labels, dataset.data)
        else:
            points = _self_described_points(dataset.data)
        name = dataset.label if dataset.label is not None else config.default_series_name
        dropped = len(dataset.data) - len(points)
        if dropped > 0:
            logger.debug("Chart.js dataset '%s': dropped %d value(s)", name, dropped)
        series.append(Series(name=name, points=tuple(points)))

    return Spec(
        kind=lookup_kind(_KINDS, shape.type),
        title=_title(shape),
        x_label=_axis_label(shape, "x"),
        y_label=_axis_label(shape, "y"),
        begin_at_zero_y=begin_at_zero,
        series=tuple(series),
    )


class ChartJSFormat(ChartFormat):
    """Chart.js ``{type, data: {labels, datasets}}`` payloads."""

    name = "chartjs"
    shape_model = ChartJSShape

    def to_spec(self, shape: ChartJSShape, config: DecoderConfig) -> Spec:
        if shape.type.strip().lower() in _PIE_TYPES:
            return map_chartjs_pie(shape, config)
        return map_chartjs_general(shape, config)
