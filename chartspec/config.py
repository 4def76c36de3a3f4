"""
Decoder configuration and YAML I/O for chartspec.

``DecoderConfig`` controls which wire formats the detection chain may try
and the default names given to unnamed series. Every decode function takes
an optional config; ``None`` means ``DecoderConfig()``.

The priority order of formats is fixed by ``FORMAT_PRIORITY``.
``enabled_formats`` only removes entries from the chain; it never reorders
them.

Key functions:
- load_config(path) -> DecoderConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from chartspec.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

# Detection priority. A payload valid under two schemas is read per the
# earlier entry.
FORMAT_PRIORITY: tuple[str, ...] = (
    "chartjs",
    "plotly_heatmap",
    "plotly_figure",
    "echarts",
    "highcharts",
    "vegalite",
    "custom",
    "pie_flat",
)


class DecoderConfig(BaseModel):
    """Settings for the detection chain and the mappers."""

    enabled_formats: list[str] = Field(
        default_factory=lambda: list(FORMAT_PRIORITY),
        description="Formats the detection chain may try; order is ignored",
    )
    default_series_name: str = Field(
        "Series", description="Name for datasets/traces that carry none"
    )
    default_pie_name: str = Field(
        "Pie", description="Name for the single series of an unnamed pie"
    )

    @field_validator("enabled_formats")
    @classmethod
    def _check_known_formats(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in FORMAT_PRIORITY]
        if unknown:
            raise ValueError(
                f"Unknown format name(s): {unknown}. "
                f"Known formats: {list(FORMAT_PRIORITY)}"
            )
        if len(set(value)) != len(value):
            raise ValueError(f"enabled_formats contains duplicates: {value}")
        return value

    def ordered_formats(self) -> list[str]:
        """Enabled format names in detection priority order."""
        enabled = set(self.enabled_formats)
        return [name for name in FORMAT_PRIORITY if name in enabled]


def load_config(path: str | Path) -> DecoderConfig:
    """Load and validate a decoder config YAML file.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    try:
        config = DecoderConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid decoder config in {path}:\n{e}") from e
    logger.info("Loaded config from %s", path)
    return config


def save_config(config: DecoderConfig, path: str | Path) -> None:
    """Serialize a DecoderConfig to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# chartspec decoder configuration\n")
        f.write("# Remove entries from enabled_formats to skip those schemas.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
