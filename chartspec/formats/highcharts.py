"""
Highcharts format for chartspec.

Input structure::

    {"title": {"text": "Fruit"},
     "chart": {"type": "column"},
     "xAxis": {"categories": ["Apples", "Pears"]},
     "yAxis": [{"title": {"text": "Amount"}}],
     "series": [{"name": "Jane", "data": [1, 3]}]}

Items are bare numbers aligned to ``xAxis.categories`` (or to the running
point count without categories), numeric ``[x, y]`` pairs, or
``{y, name | x}`` point objects. Anything unreadable counts as ``0`` at
its position.

The kind comes from the first series' ``type``, falling back to
``chart.type``. ``column`` folds to bar and ``spline`` to line.
"""

from __future__ import annotations

import logging

from pydantic import StrictStr

from chartspec.config import DecoderConfig
from chartspec.formats.base import ChartFormat, WireShape, lookup_kind
from chartspec.model import ChartKind, Point, Series, Spec
from chartspec.values import JsonKind, JsonValue, format_number

logger = logging.getLogger(__name__)

_KINDS: dict[str, ChartKind] = {
    "bar": ChartKind.BAR,
    "column": ChartKind.BAR,
    "line": ChartKind.LINE,
    "spline": ChartKind.LINE,
    "scatter": ChartKind.SCATTER,
    "pie": ChartKind.PIE,
}


# ---------------------------------------------------------------------------
# Wire shape
# ---------------------------------------------------------------------------

class HighchartsTitle(WireShape):
    text: StrictStr | None = None


class HighchartsChart(WireShape):
    type: StrictStr | None = None


class HighchartsXAxis(WireShape):
    categories: list[StrictStr] | None = None


class HighchartsSeries(WireShape):
    name: StrictStr | None = None
    type: StrictStr | None = None
    data: list[JsonValue]


class HighchartsShape(WireShape):
    title: HighchartsTitle | None = None
    chart: HighchartsChart | None = None
    xAxis: HighchartsXAxis | None = None
    series: list[HighchartsSeries]


# ---------------------------------------------------------------------------
# Mapper
# ---------------------------------------------------------------------------

def _object_point(item: JsonValue, category: str | None, running: str) -> Point:
    """Read a ``{y, name | x}`` point object.

    The label is the axis category, else ``name``, else ``x``, else
    *running*. A missing or non-numeric ``y`` reads as 0.
    """
    y = item.get("y")
    number = y.as_number() if y is not None else None
    label = category
    if label is None:
        name = item.get("name")
        x = item.get("x")
        label = name.as_string() if name is not None else None
        if label is None and x is not None:
            label = x.as_label()
    return Point(
        x=label if label is not None else running,
        y=number if number is not None else 0.0,
    )


def _series_points(data: list[JsonValue], categories: list[str] | None) -> list[Point]:
    points: list[Point] = []
    for idx, item in enumerate(data):
        category = None
        if categories is not None:
            category = categories[idx] if idx < len(categories) else str(idx)

        pair = item.as_pair()
        if pair is not None:
            points.append(Point(x=format_number(pair[0]), y=pair[1]))
            continue
        if item.kind is JsonKind.MAP:
            points.append(_object_point(item, category, str(len(points))))
            continue
        if item.kind is JsonKind.LIST and all(
            element.kind is JsonKind.NUMBER for element in item.as_list()
        ):
            continue

        number = item.as_number() if item.kind is JsonKind.NUMBER else None
        x = category if category is not None else str(len(points))
        points.append(Point(x=x, y=number if number is not None else 0.0))
    return points


def map_highcharts(shape: HighchartsShape, config: DecoderConfig) -> Spec:
    """Map a Highcharts options object."""
    categories = shape.xAxis.categories if shape.xAxis is not None else None

    series: list[Series] = []
    for s in shape.series:
        name = s.name if s.name is not None else config.default_series_name
        points = _series_points(s.data, categories)
        dropped = len(s.data) - len(points)
        if dropped > 0:
            logger.debug("Highcharts series '%s': dropped %d item(s)", name, dropped)
        series.append(Series(name=name, points=tuple(points)))

    declared = shape.series[0].type if shape.series else None
    if declared is None and shape.chart is not None:
        declared = shape.chart.type
    return Spec(
        kind=lookup_kind(_KINDS, declared),
        title=shape.title.text if shape.title is not None else None,
        series=tuple(series),
    )


class HighchartsFormat(ChartFormat):
    """Highcharts ``{xAxis: {categories}, series}`` payloads."""

    name = "highcharts"
    shape_model = HighchartsShape

    def to_spec(self, shape: HighchartsShape, config: DecoderConfig) -> Spec:
        return map_highcharts(shape, config)
