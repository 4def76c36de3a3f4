"""
Format detection for chart payloads.

Tries each wire format's structural decoder in a fixed priority order and
maps the first match to the canonical ``Spec``:

1. chartjs         -- ``{type, data: {labels, datasets}}``
2. plotly_heatmap  -- ``{type: "heatmap", data: {z}}``
3. plotly_figure   -- ``{data: [traces]}`` with a heatmap trace
4. echarts         -- ``{xAxis: {data}, series: [{type, data}]}``
5. highcharts      -- ``{xAxis: {categories}, series}``
6. vegalite        -- ``{data: {values}, mark, encoding}``
7. custom          -- ``{chart_type, series: [{name, points}]}``
8. pie_flat        -- ``{type: "pie", data: [{label, value}]}``

Schemas overlap: a payload valid under two of them is always read per the
earlier entry. ``DecoderConfig.enabled_formats`` can drop entries but never
reorders them.

Detection algorithm:
1. For each enabled format (in priority order), validate the raw bytes
   against its shape model.
2. The first successful validation wins; its mapper builds the Spec.
3. Fallback: raise UnsupportedFormatError listing every rejection reason.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydantic import BaseModel

from chartspec.config import DecoderConfig
from chartspec.exceptions import UnsupportedFormatError
from chartspec.formats.base import ChartFormat, DecodeAttempt
from chartspec.formats.chartjs import ChartJSFormat
from chartspec.formats.custom import CustomFormat, PieFlatFormat
from chartspec.formats.echarts import EChartsFormat
from chartspec.formats.highcharts import HighchartsFormat
from chartspec.formats.plotly import PlotlyFigureFormat, PlotlyHeatmapFormat
from chartspec.formats.vegalite import VegaLiteFormat
from chartspec.model import Spec

logger = logging.getLogger(__name__)

_SNIPPET_LENGTH = 200

FORMAT_CHAIN: tuple[ChartFormat, ...] = (
    ChartJSFormat(),
    PlotlyHeatmapFormat(),
    PlotlyFigureFormat(),
    EChartsFormat(),
    HighchartsFormat(),
    VegaLiteFormat(),
    CustomFormat(),
    PieFlatFormat(),
)

_FORMATS_BY_NAME: dict[str, ChartFormat] = {f.name: f for f in FORMAT_CHAIN}


def _snippet(raw: bytes | str) -> str:
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if len(text) > _SNIPPET_LENGTH:
        return text[:_SNIPPET_LENGTH] + "..."
    return text


def enabled_chain(config: DecoderConfig | None = None) -> list[ChartFormat]:
    """Formats the chain will try for *config*, in priority order."""
    config = config or DecoderConfig()
    return [_FORMATS_BY_NAME[name] for name in config.ordered_formats()]


def iter_attempts(
    raw: bytes | str,
    config: DecoderConfig | None = None,
) -> Iterator[DecodeAttempt]:
    """Lazily try each enabled format, yielding one attempt per format."""
    for fmt in enabled_chain(config):
        yield fmt.try_decode(raw)


def decode_format(
    raw: bytes | str,
    config: DecoderConfig | None = None,
) -> tuple[ChartFormat, BaseModel]:
    """Find the first format whose structural decoder accepts *raw*.

    Args:
        raw: JSON payload.
        config: Decoder settings (optional; defaults apply if None).

    Returns:
        Tuple of (chart_format, decoded_shape).

    Raises:
        UnsupportedFormatError: If no enabled format matches.
    """
    rejected: list[DecodeAttempt] = []
    for attempt in iter_attempts(raw, config):
        if attempt.matched:
            logger.info("Detected chart format '%s'", attempt.format_name)
            return _FORMATS_BY_NAME[attempt.format_name], attempt.shape
        logger.debug("Format '%s' rejected: %s", attempt.format_name, attempt.error)
        rejected.append(attempt)

    reasons = "\n".join(f"  {a.format_name}: {a.error}" for a in rejected)
    raise UnsupportedFormatError(
        f"Unsupported chart format.\n"
        f"Tried {len(rejected)} formats, none matched:\n{reasons}\n"
        f"Payload:\n{_snippet(raw)}"
    )


def detect_format(raw: bytes | str, config: DecoderConfig | None = None) -> str:
    """Name of the first format that accepts *raw*.

    Raises:
        UnsupportedFormatError: If no enabled format matches.
    """
    fmt, _shape = decode_format(raw, config)
    return fmt.name


def parse_spec(raw: bytes | str, config: DecoderConfig | None = None) -> Spec:
    """Decode a chart payload into the canonical Spec.

    Args:
        raw: JSON payload in any supported wire format.
        config: Decoder settings (optional; defaults apply if None).

    Returns:
        The canonical Spec.

    Raises:
        UnsupportedFormatError: If no enabled format matches.
    """
    config = config or DecoderConfig()
    fmt, shape = decode_format(raw, config)
    spec = fmt.to_spec(shape, config)
    logger.debug(
        "Mapped '%s' payload to %s spec: %d series, %d points",
        fmt.name, spec.kind.value, len(spec.series), spec.point_count,
    )
    return spec
