"""
Heterogeneous JSON value decoder for chartspec.

Chart payloads embed fragments whose shape is not known before decoding: a
data item may be a bare number, a ``[x, y]`` pair or an object with named
fields. ``JsonValue`` wraps any such fragment in a closed, recursive tagged
variant and offers typed projections that return ``None`` instead of
raising.

Resolution order for a raw value: number, string, bool, map, list. Numbers
are never read as strings and strings are never read as numbers. Python's
``bool`` is checked explicitly so that ``True`` is never taken for ``1``.

``JsonValue`` plugs into pydantic: a model field annotated ``JsonValue``
accepts any JSON value and never fails validation.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic_core import core_schema


class JsonKind(str, Enum):
    """Tag of a ``JsonValue``."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAP = "map"


def format_number(value: float | int) -> str:
    """Render a number as a category label.

    Integral finite values lose their fractional part (``5.0 -> "5"``), so
    that ``5`` and ``5.0`` produce the same label. Everything else uses the
    shortest float repr; integers too large for a float render as ``inf``.
    """
    try:
        number = float(value)
    except OverflowError:
        number = math.copysign(math.inf, value)
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number)


def _to_float(value: float | int) -> float | None:
    try:
        return float(value)
    except OverflowError:
        return None


@dataclass(frozen=True)
class JsonValue:
    """A decoded JSON value of unknown shape.

    Attributes:
        kind: The variant tag.
        value: The payload. ``None`` for null, ``bool``, ``int``/``float``,
            ``str``, ``tuple[JsonValue, ...]`` for lists and
            ``dict[str, JsonValue]`` for maps.
    """

    kind: JsonKind
    value: Any = None

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------

    @classmethod
    def from_python(cls, obj: Any) -> JsonValue:
        """Decode a parsed JSON object. Never raises."""
        if isinstance(obj, JsonValue):
            return obj
        if isinstance(obj, (int, float)) and not isinstance(obj, bool):
            return cls(JsonKind.NUMBER, obj)
        if isinstance(obj, str):
            return cls(JsonKind.STRING, obj)
        if isinstance(obj, bool):
            return cls(JsonKind.BOOL, obj)
        if isinstance(obj, dict):
            return cls(
                JsonKind.MAP,
                {str(k): cls.from_python(v) for k, v in obj.items()},
            )
        if isinstance(obj, (list, tuple)):
            return cls(JsonKind.LIST, tuple(cls.from_python(v) for v in obj))
        return NULL

    @classmethod
    def loads(cls, raw: bytes | str) -> JsonValue:
        """Parse JSON text and decode it.

        Raises:
            ValueError: If *raw* is not valid JSON.
        """
        return cls.from_python(json.loads(raw))

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(cls.from_python)

    # -----------------------------------------------------------------
    # Typed projections
    # -----------------------------------------------------------------

    @property
    def is_null(self) -> bool:
        return self.kind is JsonKind.NULL

    def as_string(self) -> str | None:
        """The text of a string value; ``None`` for every other kind."""
        if self.kind is JsonKind.STRING:
            return self.value
        return None

    def as_number(self) -> float | None:
        """The value of a number as ``float``.

        Booleans coerce to ``1.0``/``0.0`` because some formats encode flags
        as value fields. Every other kind gives ``None``, and so do integers
        too large for a float.
        """
        if self.kind is JsonKind.NUMBER:
            return _to_float(self.value)
        if self.kind is JsonKind.BOOL:
            return 1.0 if self.value else 0.0
        return None

    def as_list(self) -> tuple[JsonValue, ...] | None:
        if self.kind is JsonKind.LIST:
            return self.value
        return None

    def as_map(self) -> dict[str, JsonValue] | None:
        if self.kind is JsonKind.MAP:
            return self.value
        return None

    def get(self, key: str) -> JsonValue | None:
        """Look up *key* in a map value; ``None`` if absent or not a map."""
        if self.kind is JsonKind.MAP:
            return self.value.get(key)
        return None

    def as_label(self) -> str | None:
        """A category label: strings as-is, numbers via ``format_number``."""
        if self.kind is JsonKind.STRING:
            return self.value
        number = self.as_number() if self.kind is JsonKind.NUMBER else None
        if number is not None:
            return format_number(number)
        return None

    def as_pair(self) -> tuple[float, float] | None:
        """The first two elements of an all-numeric list.

        Returns ``None`` when the value is not a list, holds anything other
        than numbers (booleans included), has fewer than two elements or
        holds a number too large for a float.
        """
        items = self.as_list()
        if items is None or len(items) < 2:
            return None
        if any(item.kind is not JsonKind.NUMBER for item in items):
            return None
        x, y = _to_float(items[0].value), _to_float(items[1].value)
        if x is None or y is None:
            return None
        return x, y

    def to_python(self) -> Any:
        """Convert back to plain Python objects."""
        if self.kind is JsonKind.LIST:
            return [item.to_python() for item in self.value]
        if self.kind is JsonKind.MAP:
            return {k: v.to_python() for k, v in self.value.items()}
        return self.value


NULL = JsonValue(JsonKind.NULL)


def text_of(value: JsonValue | None) -> str | None:
    """Read a title that is either a bare string or a ``{"text": ...}`` map."""
    if value is None:
        return None
    text = value.as_string()
    if text is not None:
        return text
    inner = value.get("text")
    return inner.as_string() if inner is not None else None
