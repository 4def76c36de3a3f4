"""
Derived summaries over a canonical Spec.

Helpers for renderers that draw histograms and pie charts from a decoded
spec. Both read only the first series.

- histogram_bins(): equal-width bins over the ``y`` values (numpy).
- pie_slices(): each point's share of the series total.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from chartspec.model import Spec

# Lower bound for the pie total, so an all-zero pie yields zero fractions.
_MIN_PIE_TOTAL = 1e-6


@dataclass(frozen=True)
class HistogramBin:
    """One histogram bucket; ``upper`` is exclusive except for the last bin."""

    label: str
    lower: float
    upper: float
    count: int


@dataclass(frozen=True)
class PieSlice:
    label: str
    value: float
    fraction: float


def histogram_bins(spec: Spec, bins: int = 10) -> list[HistogramBin]:
    """Bin the first series' ``y`` values into equal-width buckets.

    Args:
        spec: A decoded spec (usually of kind ``histogram``).
        bins: Number of buckets; values below 1 are treated as 1.

    Returns:
        One HistogramBin per bucket, or an empty list when there are no
        finite values or all finite values are equal. Infinite and NaN
        values are left out.
    """
    if not spec.series:
        return []
    values = np.array([p.y for p in spec.series[0].points], dtype=float)
    values = values[np.isfinite(values)]
    if values.size == 0 or values.max() <= values.min():
        return []

    counts, edges = np.histogram(values, bins=max(bins, 1))
    return [
        HistogramBin(
            label=f"{edges[i]:.1f}–{edges[i + 1]:.1f}",
            lower=float(edges[i]),
            upper=float(edges[i + 1]),
            count=int(counts[i]),
        )
        for i in range(len(counts))
    ]


def pie_slices(spec: Spec) -> list[PieSlice]:
    """Share of each point of the first series in the series total."""
    if not spec.series:
        return []
    points = spec.series[0].points
    total = max(sum(p.y for p in points), _MIN_PIE_TOTAL)
    return [PieSlice(label=p.x, value=p.y, fraction=p.y / total) for p in points]
