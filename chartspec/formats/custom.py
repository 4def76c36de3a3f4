"""
Custom and flat-pie formats for chartspec.

Custom schema::

    {"title": "Sales", "x_label": "Month", "y_label": "Units",
     "chart_type": "Bar",
     "series": [{"name": "A", "points": [{"x": "Jan", "y": 3}]}]}

Flat pie schema::

    {"type": "pie", "title": "Share",
     "data": [{"label": "Android", "value": 71.9}]}

Both are direct renames. The custom ``chart_type`` is case-folded and
matched against the full kind set, falling back to line.
"""

from __future__ import annotations

from pydantic import StrictFloat, StrictStr, model_validator

from chartspec.config import DecoderConfig
from chartspec.formats.base import ChartFormat, WireShape
from chartspec.model import ChartKind, Point, Series, Spec


# ---------------------------------------------------------------------------
# Custom schema
# ---------------------------------------------------------------------------

class CustomPoint(WireShape):
    x: StrictStr
    y: StrictFloat


class CustomSeries(WireShape):
    name: StrictStr
    points: list[CustomPoint]


class CustomShape(WireShape):
    title: StrictStr | None = None
    x_label: StrictStr | None = None
    y_label: StrictStr | None = None
    chart_type: StrictStr
    series: list[CustomSeries]


def map_custom(shape: CustomShape, config: DecoderConfig) -> Spec:
    series = tuple(
        Series(name=s.name, points=tuple(Point(x=p.x, y=float(p.y)) for p in s.points))
        for s in shape.series
    )
    return Spec(
        kind=ChartKind.resolve(shape.chart_type),
        title=shape.title,
        x_label=shape.x_label,
        y_label=shape.y_label,
        series=series,
    )


class CustomFormat(ChartFormat):
    name = "custom"
    shape_model = CustomShape

    def to_spec(self, shape: CustomShape, config: DecoderConfig) -> Spec:
        return map_custom(shape, config)


# ---------------------------------------------------------------------------
# Flat pie schema
# ---------------------------------------------------------------------------

class PieFlatItem(WireShape):
    label: StrictStr
    value: StrictFloat


class PieFlatShape(WireShape):
    type: StrictStr
    title: StrictStr | None = None
    data: list[PieFlatItem]

    @model_validator(mode="after")
    def _require_pie_type(self) -> PieFlatShape:
        if self.type.strip().lower() != "pie":
            raise ValueError(f"type is {self.type!r}, expected 'pie'")
        return self


def map_pie_flat(shape: PieFlatShape, config: DecoderConfig) -> Spec:
    name = shape.title if shape.title is not None else config.default_pie_name
    points = tuple(Point(x=item.label, y=float(item.value)) for item in shape.data)
    return Spec(
        kind=ChartKind.PIE,
        title=shape.title,
        series=(Series(name=name, points=points),),
    )


class PieFlatFormat(ChartFormat):
    name = "pie_flat"
    shape_model = PieFlatShape

    def to_spec(self, shape: PieFlatShape, config: DecoderConfig) -> Spec:
        return map_pie_flat(shape, config)
