"""Sensor presets and focal length reconciliation."""

from .presets import CAMERA_PRESETS
from .reconciler import (
    absolute_focal_length,
    image_proportions_match_sensor,
    reconcile,
    relative_focal_length,
    resolve_sensor,
)

__all__ = [
    "CAMERA_PRESETS",
    "absolute_focal_length",
    "image_proportions_match_sensor",
    "reconcile",
    "relative_focal_length",
    "resolve_sensor",
]
