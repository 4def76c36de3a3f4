"""
Integration tests: config round-trip workflow.

Tests the full cycle: save a DecoderConfig -> load it back -> decode
fixtures with it. Verifies that disabled formats are skipped by the
detection chain and that default names flow into the decoded spec.
"""

from __future__ import annotations

import pytest

import chartspec
from chartspec.exceptions import ConfigValidationError, UnsupportedFormatError
from tests.conftest import (
    CHARTJS_BAR_JSON,
    ECHARTS_LINE_JSON,
    PIE_FLAT_JSON,
    VEGALITE_GROUPED_JSON,
)


@pytest.mark.integration
class TestConfigRoundtrip:
    """Tests for the config-driven decode workflow."""

    def test_saved_config_drives_detection(self, tmp_path):
        """save -> load -> a disabled format is no longer detected."""
        config_path = tmp_path / "chartspec.yaml"
        enabled = [name for name in chartspec.DecoderConfig().enabled_formats if name != "echarts"]
        chartspec.save_config(chartspec.DecoderConfig(enabled_formats=enabled), config_path)

        cfg = chartspec.load_config(config_path)
        assert "echarts" not in cfg.enabled_formats

        raw = ECHARTS_LINE_JSON.read_bytes()
        assert chartspec.detect_format(raw) == "echarts"
        # Without echarts the same option object still fits the Highcharts shape.
        assert chartspec.detect_format(raw, cfg) == "highcharts"
        assert len(chartspec.parse_spec(raw, cfg).series) == 2

    def test_restricted_config_rejects_other_formats(self, tmp_path):
        config_path = tmp_path / "chartspec.yaml"
        chartspec.save_config(chartspec.DecoderConfig(enabled_formats=["pie_flat"]), config_path)
        cfg = chartspec.load_config(config_path)

        assert chartspec.parse_spec(PIE_FLAT_JSON.read_bytes(), cfg).kind is chartspec.ChartKind.PIE
        with pytest.raises(UnsupportedFormatError, match="Tried 1 formats"):
            chartspec.parse_spec(CHARTJS_BAR_JSON.read_bytes(), cfg)

    def test_default_names_survive_round_trip(self, tmp_path):
        config_path = tmp_path / "chartspec.yaml"
        chartspec.save_config(
            chartspec.DecoderConfig(default_series_name="All rows", default_pie_name="Share"),
            config_path,
        )
        cfg = chartspec.load_config(config_path)

        payload = b'{"type": "pie", "data": [{"label": "a", "value": 1}]}'
        assert chartspec.parse_spec(payload, cfg).series_names() == ["Share"]

        # Vega rows without a color value fall into the configured series.
        spec = chartspec.parse_spec(
            b'{"data": {"values": [{"x": "a", "y": 1}]}, "mark": "bar", "encoding": {}}', cfg,
        )
        assert spec.series_names() == ["All rows"]

    def test_hand_edited_config_with_typo_fails(self, tmp_path):
        config_path = tmp_path / "chartspec.yaml"
        config_path.write_text("enabled_formats:\n  - chartjs\n  - vega-lite\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError, match="vega-lite"):
            chartspec.load_config(config_path)

    def test_fixture_decodes_identically_with_loaded_defaults(self, tmp_path):
        config_path = tmp_path / "chartspec.yaml"
        chartspec.save_config(chartspec.DecoderConfig(), config_path)
        cfg = chartspec.load_config(config_path)

        raw = VEGALITE_GROUPED_JSON.read_bytes()
        assert chartspec.parse_spec(raw, cfg) == chartspec.parse_spec(raw)
