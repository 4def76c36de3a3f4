"""
Base format protocol / ABC for chartspec.

Every wire format implements this interface. The contract is:
1. ``shape_model`` is a pydantic model describing the raw JSON structure.
   It checks field presence and type only.
2. ``try_decode()`` validates raw bytes against the shape and returns a
   ``DecodeAttempt``; it never raises.
3. ``to_spec()`` maps a decoded shape to the canonical ``Spec``. Mappers are
   pure and never abort: bad points are dropped or defaulted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from chartspec.config import DecoderConfig
from chartspec.model import ChartKind, Spec


class WireShape(BaseModel):
    """Common settings for every wire shape: unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


@dataclass(frozen=True)
class DecodeAttempt:
    """Outcome of one structural decode.

    Attributes:
        format_name: The format that was tried.
        shape: The populated shape on success, ``None`` on failure.
        error: First validation error on failure, ``None`` on success.
    """

    format_name: str
    shape: WireShape | None = None
    error: str | None = None

    @property
    def matched(self) -> bool:
        return self.shape is not None


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid")
    return f"{loc}: {msg}" if loc else msg


class ChartFormat(ABC):
    """Abstract base class for chart wire formats.

    Subclasses set ``name`` and ``shape_model`` and implement ``to_spec()``.
    """

    name: ClassVar[str]
    shape_model: ClassVar[type[WireShape]]

    def try_decode(self, raw: bytes | str) -> DecodeAttempt:
        """Validate *raw* JSON against this format's shape."""
        try:
            shape = self.shape_model.model_validate_json(raw)
        except ValidationError as e:
            return DecodeAttempt(format_name=self.name, error=_first_error(e))
        return DecodeAttempt(format_name=self.name, shape=shape)

    @abstractmethod
    def to_spec(self, shape: WireShape, config: DecoderConfig) -> Spec:
        """Map a decoded shape to the canonical spec.

        Args:
            shape: An instance of ``shape_model`` returned by ``try_decode()``.
            config: Supplies default series names.

        Returns:
            The canonical ``Spec``.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


def lookup_kind(table: Mapping[str, ChartKind], declared: str | None) -> ChartKind:
    """Case-fold a declared type and look it up; unknown gives ``LINE``."""
    if declared is None:
        return ChartKind.LINE
    return table.get(declared.strip().lower(), ChartKind.LINE)
