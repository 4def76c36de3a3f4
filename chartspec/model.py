"""
Canonical chart model for chartspec.

Every wire format decodes into the same three immutable types:

- ``Spec``: title, resolved ``ChartKind``, optional axis labels, the
  "begin Y axis at zero" flag and an ordered tuple of series.
- ``Series``: a name and an ordered tuple of points.
- ``Point``: a category label ``x``, a numeric ``y`` and the optional
  ``size`` (bubble radius) and ``intensity`` (heatmap cell value).

For heatmaps the cell value lives in ``intensity`` and ``y`` stays 0.
Renderers should read ``Point.cell_value``, which handles both cases.

A ``Spec`` is produced once per decode call and handed to the caller as a
value; it has no mutation API.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import pandas as pd


class ChartKind(str, Enum):
    """Closed set of chart kinds understood by the rendering layer."""

    LINE = "line"
    BAR = "bar"
    AREA = "area"
    SCATTER = "scatter"
    BUBBLE = "bubble"
    PIE = "pie"
    HEATMAP = "heatmap"
    HISTOGRAM = "histogram"

    @classmethod
    def resolve(cls, text: str | None) -> ChartKind:
        """Case-fold *text* and match it; unknown or missing gives ``LINE``."""
        if text is None:
            return cls.LINE
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.LINE


@dataclass(frozen=True)
class Point:
    """One data point."""

    x: str
    y: float = 0.0
    size: float | None = None
    intensity: float | None = None

    @property
    def cell_value(self) -> float:
        """``intensity`` when present, otherwise ``y``."""
        return self.intensity if self.intensity is not None else self.y


@dataclass(frozen=True)
class Series:
    """A named, ordered run of points."""

    name: str
    points: tuple[Point, ...] = ()


@dataclass(frozen=True)
class Spec:
    """Schema-independent chart specification.

    Attributes:
        title: Chart title, if the source carried one.
        kind: Always resolved; unrecognized source types fall back to line.
        x_label: X axis label, if any.
        y_label: Y axis label, if any.
        begin_at_zero_y: Whether the Y axis must include zero.
        series: Ordered series. May be empty, never ``None``.
    """

    kind: ChartKind
    series: tuple[Series, ...] = ()
    title: str | None = None
    x_label: str | None = None
    y_label: str | None = None
    begin_at_zero_y: bool = False

    @property
    def point_count(self) -> int:
        return sum(len(s.points) for s in self.series)

    def series_names(self) -> list[str]:
        return [s.name for s in self.series]

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation for the rendering layer."""
        return {
            "title": self.title,
            "kind": self.kind.value,
            "x_label": self.x_label,
            "y_label": self.y_label,
            "begin_at_zero_y": self.begin_at_zero_y,
            "series": [
                {
                    "name": s.name,
                    "points": [
                        {"x": p.x, "y": p.y, "size": p.size, "intensity": p.intensity}
                        for p in s.points
                    ],
                }
                for s in self.series
            ],
        }

    def to_frame(self) -> pd.DataFrame:
        """Flatten into a long DataFrame, one row per point.

        Columns: ``series``, ``x``, ``y``, ``size``, ``intensity``. Missing
        ``size``/``intensity`` values are ``NaN``.
        """
        rows = [
            {
                "series": s.name,
                "x": p.x,
                "y": p.y,
                "size": p.size,
                "intensity": p.intensity,
            }
            for s in self.series
            for p in s.points
        ]
        columns = ["series", "x", "y", "size", "intensity"]
        df = pd.DataFrame(rows, columns=columns)
        for col in ("y", "size", "intensity"):
            df[col] = pd.to_numeric(df[col], errors="coerce")
        return df
