"""
Vega-Lite (subset) format for chartspec.

Only inline row data is supported::

    {"$schema": "https://vega.github.io/schema/vega-lite/v5.json",
     "data": {"values": [{"cat": "A", "x": "1", "y": 5}]},
     "mark": "bar",
     "encoding": {"x": {"field": "x"}, "y": {"field": "y"},
                  "color": {"field": "cat"}}}

URL-referenced data (``data.url``) does not match this format.

Rows are grouped into series by the string value of the ``color`` field, in
order of first appearance. Rows without a color binding, or whose color
value is not a string, share one series named by
``DecoderConfig.default_series_name``. ``x`` values become strings; ``y``
falls back to 0 when absent or not numeric.

The mark decides the kind of the whole spec. A mark object such as
``{"type": "bar"}`` is read by its ``type``; any other non-string mark is
treated as ``point``.
"""

from __future__ import annotations

import logging

from pydantic import Field, StrictStr, model_validator

from chartspec.config import DecoderConfig
from chartspec.formats.base import ChartFormat, WireShape, lookup_kind
from chartspec.model import ChartKind, Point, Series, Spec
from chartspec.values import NULL, JsonValue, format_number, text_of

logger = logging.getLogger(__name__)

_KINDS: dict[str, ChartKind] = {
    "line": ChartKind.LINE,
    "bar": ChartKind.BAR,
    "area": ChartKind.AREA,
    "point": ChartKind.SCATTER,
    "rect": ChartKind.HEATMAP,
}


# ---------------------------------------------------------------------------
# Wire shape
# ---------------------------------------------------------------------------

class VegaFieldRef(WireShape):
    field: StrictStr | None = None
    title: JsonValue = NULL


class VegaEncoding(WireShape):
    x: VegaFieldRef | None = None
    y: VegaFieldRef | None = None
    color: VegaFieldRef | None = None
    size: VegaFieldRef | None = None


class VegaData(WireShape):
    values: list[JsonValue] | None = None


class VegaLiteShape(WireShape):
    schema_url: StrictStr | None = Field(None, alias="$schema")
    data: VegaData
    mark: JsonValue
    encoding: VegaEncoding
    title: JsonValue = NULL

    @model_validator(mode="after")
    def _require_inline_values(self) -> VegaLiteShape:
        if self.data.values is None:
            raise ValueError("data.values is missing; only inline rows are supported")
        return self


# ---------------------------------------------------------------------------
# Mapper
# ---------------------------------------------------------------------------

def _field(ref: VegaFieldRef | None) -> str | None:
    return ref.field if ref is not None else None


def _mark_type(mark: JsonValue) -> str:
    text = mark.as_string()
    if text is None:
        inner = mark.get("type")
        text = inner.as_string() if inner is not None else None
    return text if text is not None else "point"


def _x_label(cell: JsonValue | None) -> str:
    if cell is not None:
        text = cell.as_string()
        if text is not None:
            return text
        number = cell.as_number()
        if number is not None:
            return format_number(number)
    return "0"


def map_vegalite(shape: VegaLiteShape, config: DecoderConfig) -> Spec:
    """Group inline rows into series and map the mark to a kind."""
    encoding = shape.encoding
    x_field = _field(encoding.x) or "x"
    y_field = _field(encoding.y) or "y"
    color_field = _field(encoding.color)
    size_field = _field(encoding.size)

    groups: dict[str, list[Point]] = {}
    for row in shape.data.values:
        key = None
        if color_field is not None:
            color = row.get(color_field)
            key = color.as_string() if color is not None else None
        if key is None:
            key = config.default_series_name

        y_cell = row.get(y_field)
        y = y_cell.as_number() if y_cell is not None else None

        size = None
        if size_field is not None:
            size_cell = row.get(size_field)
            size = size_cell.as_number() if size_cell is not None else None

        point = Point(x=_x_label(row.get(x_field)), y=y if y is not None else 0.0, size=size)
        groups.setdefault(key, []).append(point)

    logger.debug(
        "Vega-Lite: %d row(s) grouped into %d series",
        len(shape.data.values), len(groups),
    )
    return Spec(
        kind=lookup_kind(_KINDS, _mark_type(shape.mark)),
        title=text_of(shape.title),
        x_label=text_of(encoding.x.title) if encoding.x is not None else None,
        y_label=text_of(encoding.y.title) if encoding.y is not None else None,
        series=tuple(Series(name=name, points=tuple(points)) for name, points in groups.items()),
    )


class VegaLiteFormat(ChartFormat):
    """Vega-Lite ``{data: {values}, mark, encoding}`` payloads."""

    name = "vegalite"
    shape_model = VegaLiteShape

    def to_spec(self, shape: VegaLiteShape, config: DecoderConfig) -> Spec:
        return map_vegalite(shape, config)
