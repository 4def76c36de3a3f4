"""
Unit tests for the Vega-Lite subset (chartspec.formats.vegalite).

Covers row grouping by the color channel, value coercion and the
mark-to-kind mapping.
"""

from __future__ import annotations

import pytest

from chartspec.config import DecoderConfig
from chartspec.formats.vegalite import VegaLiteFormat
from chartspec.model import ChartKind, Point
from tests.conftest import as_json

FMT = VegaLiteFormat()


def _payload(values, mark="point", **encoding) -> dict:
    if not encoding:
        encoding = {"x": {"field": "x"}, "y": {"field": "y"}}
    return {"data": {"values": values}, "mark": mark, "encoding": encoding}


def _map(payload: dict, config: DecoderConfig | None = None):
    attempt = FMT.try_decode(as_json(payload))
    assert attempt.matched, attempt.error
    return FMT.to_spec(attempt.shape, config or DecoderConfig())


class TestVegaLiteDecode:
    def test_url_data_does_not_match(self):
        payload = {"data": {"url": "data/cars.json"}, "mark": "bar", "encoding": {}}
        attempt = FMT.try_decode(as_json(payload))
        assert not attempt.matched
        assert "inline" in attempt.error

    def test_mark_required(self):
        payload = _payload([])
        del payload["mark"]
        assert not FMT.try_decode(as_json(payload)).matched

    def test_encoding_required(self):
        assert not FMT.try_decode(as_json({"data": {"values": []}, "mark": "bar"})).matched

    def test_non_object_channel_fails(self):
        assert not FMT.try_decode(as_json(_payload([], x="month"))).matched


class TestVegaLiteGrouping:
    """Rows grouped into series by the color field."""

    def test_two_groups(self):
        spec = _map(_payload(
            [{"cat": "A", "x": "1", "y": 5}, {"cat": "B", "x": "1", "y": 7}],
            x={"field": "x"}, y={"field": "y"}, color={"field": "cat"},
        ))
        assert spec.series_names() == ["A", "B"]
        assert spec.series[0].points == (Point(x="1", y=5.0),)
        assert spec.series[1].points == (Point(x="1", y=7.0),)

    def test_group_order_is_first_appearance(self):
        rows = [{"c": k, "x": str(i), "y": i} for i, k in enumerate(["z", "a", "z", "m", "a"])]
        spec = _map(_payload(rows, x={"field": "x"}, y={"field": "y"}, color={"field": "c"}))
        assert spec.series_names() == ["z", "a", "m"]
        assert [p.x for p in spec.series[0].points] == ["0", "2"]

    def test_no_color_binding_single_series(self):
        spec = _map(_payload([{"x": "a", "y": 1}, {"x": "b", "y": 2}]))
        assert spec.series_names() == ["Series"]
        assert len(spec.series[0].points) == 2

    def test_non_string_color_falls_into_default(self):
        spec = _map(_payload(
            [{"c": 2020, "x": "a", "y": 1}, {"c": "x", "x": "b", "y": 2}],
            x={"field": "x"}, y={"field": "y"}, color={"field": "c"},
        ))
        assert spec.series_names() == ["Series", "x"]

    def test_configured_default_name(self):
        spec = _map(_payload([{"x": "a", "y": 1}]), DecoderConfig(default_series_name="All"))
        assert spec.series_names() == ["All"]

    def test_empty_rows(self):
        assert _map(_payload([])).series == ()


class TestVegaLiteValues:
    """Coercion of x, y and size."""

    def test_numeric_x_stringified(self):
        spec = _map(_payload([{"x": 3, "y": 1}, {"x": 1.5, "y": 1}]))
        assert [p.x for p in spec.series[0].points] == ["3", "1.5"]

    def test_missing_x_is_zero(self):
        spec = _map(_payload([{"y": 1}]))
        assert spec.series[0].points[0].x == "0"

    def test_missing_or_bad_y_is_zero(self):
        spec = _map(_payload([{"x": "a"}, {"x": "b", "y": "high"}, {"x": "c", "y": True}]))
        assert [p.y for p in spec.series[0].points] == [0.0, 0.0, 1.0]

    def test_default_field_names(self):
        payload = {"data": {"values": [{"x": "a", "y": 2}]}, "mark": "line", "encoding": {}}
        spec = _map(payload)
        assert spec.series[0].points == (Point(x="a", y=2.0),)

    def test_size_channel(self):
        spec = _map(_payload(
            [{"x": "a", "y": 1, "pop": 40}, {"x": "b", "y": 2}],
            x={"field": "x"}, y={"field": "y"}, size={"field": "pop"},
        ))
        assert [p.size for p in spec.series[0].points] == [40.0, None]

    def test_non_object_rows_are_empty_records(self):
        spec = _map(_payload([5, {"x": "a", "y": 1}]))
        assert spec.series[0].points == (Point(x="0", y=0.0), Point(x="a", y=1.0))

    def test_oversized_integers(self):
        huge = 10 ** 400
        spec = _map(_payload([{"x": huge, "y": huge}]))
        assert spec.series[0].points == (Point(x="0", y=0.0),)


class TestVegaLiteKind:
    @pytest.mark.parametrize(
        "mark, kind",
        [
            ("line", ChartKind.LINE),
            ("bar", ChartKind.BAR),
            ("area", ChartKind.AREA),
            ("point", ChartKind.SCATTER),
            ("rect", ChartKind.HEATMAP),
            ("tick", ChartKind.LINE),
            ("BAR", ChartKind.BAR),
            ({"type": "area", "opacity": 0.5}, ChartKind.AREA),
            ({"opacity": 0.5}, ChartKind.SCATTER),
            (7, ChartKind.SCATTER),
            (None, ChartKind.SCATTER),
        ],
    )
    def test_mark_mapping(self, mark, kind):
        assert _map(_payload([], mark=mark)).kind is kind

    def test_titles(self):
        payload = _payload(
            [], x={"field": "m", "title": "Month"}, y={"field": "v", "title": "Value"},
        )
        payload["title"] = {"text": "Sales"}
        spec = _map(payload)
        assert spec.title == "Sales"
        assert spec.x_label == "Month"
        assert spec.y_label == "Value"
