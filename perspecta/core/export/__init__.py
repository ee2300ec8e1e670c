"""Result presentation."""

from .display import (
    FieldOfViewFormat,
    OrientationFormat,
    PrincipalPointFormat,
    ResultDisplay,
    ResultDisplaySettings,
    format_result,
)

__all__ = [
    "FieldOfViewFormat",
    "OrientationFormat",
    "PrincipalPointFormat",
    "ResultDisplay",
    "ResultDisplaySettings",
    "format_result",
]
