"""
ECharts format for chartspec.

Input structure::

    {"title": {"text": "Visits"},
     "xAxis": {"type": "category", "data": ["Mon", "Tue"]},
     "series": [{"name": "web", "type": "bar", "data": [120, 200]}]}

The ``Spec`` kind comes from the first series' ``type`` only; per-series kinds
are not kept.

Pie series expect ``{"name": ..., "value": ...}`` items. Other series accept
three item shapes:

- a bare number, paired with ``xAxis.data`` by position (or with the
  running point count when there is no category axis);
- a numeric pair ``[x, y]``;
- a map with a numeric ``value`` (labelled by ``name`` or ``x`` when there
  is no category axis).

Any other item counts as ``0`` at its position.
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
    "line": ChartKind.LINE,
    "scatter": ChartKind.SCATTER,
    "pie": ChartKind.PIE,
}


# ---------------------------------------------------------------------------
# Wire shape
# ---------------------------------------------------------------------------

class EChartsTitle(WireShape):
    text: StrictStr | None = None


class EChartsAxis(WireShape):
    data: list[StrictStr] | None = None
    type: StrictStr | None = None


class EChartsSeries(WireShape):
    name: StrictStr | None = None
    type: StrictStr | None = None
    data: list[JsonValue]


class EChartsShape(WireShape):
    title: EChartsTitle | None = None
    xAxis: EChartsAxis | None = None
    yAxis: EChartsAxis | None = None
    series: list[EChartsSeries]


# ---------------------------------------------------------------------------
# Mappers
# ---------------------------------------------------------------------------

def _pie_points(data: list[JsonValue]) -> list[Point]:
    points: list[Point] = []
    for item in data:
        name = item.get("name")
        value = item.get("value")
        label = name.as_string() if name is not None else None
        number = value.as_number() if value is not None else None
        if label is None or number is None:
            continue
        points.append(Point(x=label, y=number))
    return points


def _item_point(item: JsonValue, category: str | None, running: str) -> Point | None:
    """Read one non-pie item.

    *category* is the axis category at this item's position, or ``None``
    when there is no category axis. *running* is the label used by bare
    numbers without an axis: the count of points kept so far.
    """
    pair = item.as_pair()
    if pair is not None:
        return Point(x=format_number(pair[0]), y=pair[1])

    if item.kind is JsonKind.MAP:
        value = item.get("value")
        number = value.as_number() if value is not None else None
        if number is None:
            return None
        label = category
        if label is None:
            name = item.get("name")
            x = item.get("x")
            label = name.as_string() if name is not None else None
            if label is None and x is not None:
                label = x.as_label()
        if label is None:
            return None
        return Point(x=label, y=number)

    # Numeric lists that do not form a readable pair carry no point.
    if item.kind is JsonKind.LIST and all(
        element.kind is JsonKind.NUMBER for element in item.as_list()
    ):
        return None

    number = item.as_number() if item.kind is JsonKind.NUMBER else None
    return Point(
        x=category if category is not None else running,
        y=number if number is not None else 0.0,
    )


def _series_points(data: list[JsonValue], categories: list[str] | None) -> list[Point]:
    points: list[Point] = []
    for idx, item in enumerate(data):
        category = None
        if categories is not None:
            category = categories[idx] if idx < len(categories) else str(idx)
        point = _item_point(item, category, str(len(points)))
        if point is not None:
            points.append(point)
    return points


def map_echarts(shape: EChartsShape, config: DecoderConfig) -> Spec:
    """Map an ECharts option object."""
    categories = shape.xAxis.data if shape.xAxis is not None else None

    series: list[Series] = []
    for s in shape.series:
        name = s.name if s.name is not None else config.default_series_name
        if s.type is not None and s.type.strip().lower() == "pie":
            points = _pie_points(s.data)
        else:
            points = _series_points(s.data, categories)
        dropped = len(s.data) - len(points)
        if dropped > 0:
            logger.debug("ECharts series '%s': dropped %d item(s)", name, dropped)
        series.append(Series(name=name, points=tuple(points)))

    first_type = shape.series[0].type if shape.series else None
    return Spec(
        kind=lookup_kind(_KINDS, first_type),
        title=shape.title.text if shape.title is not None else None,
        series=tuple(series),
    )


class EChartsFormat(ChartFormat):
    """ECharts ``{xAxis, series: [{type, data}]}`` payloads."""

    name = "echarts"
    shape_model = EChartsShape

    def to_spec(self, shape: EChartsShape, config: DecoderConfig) -> Spec:
        return map_echarts(shape, config)
