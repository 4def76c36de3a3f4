"""
Custom exception hierarchy for chartspec.

Callers catch ``UnsupportedFormatError`` to show a fallback state when a
payload matches none of the known chart schemas. Structural problems inside
a single schema are never raised: the detection chain records them and moves
on to the next schema.
"""


class ChartSpecError(Exception):
    """Base exception for all chartspec errors."""


class UnsupportedFormatError(ChartSpecError):
    """Raised when a payload does not match any enabled chart schema.

    The message lists every schema that was tried with the first validation
    error it reported, followed by a snippet of the payload.
    """


class ConfigValidationError(ChartSpecError):
    """Raised when a decoder config file fails validation.

    This can happen if:
    - The YAML file is empty.
    - ``enabled_formats`` names an unknown format or repeats one.
    - A field has the wrong type.
    """
