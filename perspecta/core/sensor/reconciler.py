"""Conversion between relative and absolute focal length for a sensor."""

import logging
from typing import Mapping, Tuple

from ..models.result import FocalLengthReport
from ..models.settings import SensorDescriptor
from .. import messages
from ..errors import InvalidSensorDimensions
from .presets import CAMERA_PRESETS

logger = logging.getLogger(__name__)


def resolve_sensor(
    sensor: SensorDescriptor,
    presets: Mapping[str, Tuple[float, float]] = CAMERA_PRESETS
) -> Tuple[float, float]:
    """Sensor (width, height) in mm from a preset or custom dimensions.

    Raises:
        InvalidSensorDimensions: Unknown preset or non-positive dimensions
    """
    if sensor.preset_id is not None:
        if sensor.preset_id not in presets:
            raise InvalidSensorDimensions(
                messages.UNKNOWN_SENSOR_PRESET.format(preset_id=sensor.preset_id)
            )
        width, height = presets[sensor.preset_id]
    else:
        width, height = sensor.sensor_width, sensor.sensor_height

    if width <= 0 or height <= 0:
        raise InvalidSensorDimensions(
            messages.INVALID_SENSOR_DIMENSIONS.format(width=width, height=height)
        )

    return float(width), float(height)


def sensor_aspect_ratio(sensor_width: float, sensor_height: float) -> float:
    """Width over height; a degenerate height is treated as a square sensor."""
    return sensor_width / sensor_height if sensor_height > 0 else 1.0


def _long_edge(sensor_width: float, sensor_height: float) -> float:
    if sensor_aspect_ratio(sensor_width, sensor_height) > 1:
        return sensor_width
    return sensor_height


def absolute_focal_length(
    relative_focal_length: float,
    sensor_width: float,
    sensor_height: float
) -> float:
    """Focal length in mm; the relative focal length is in half long-edge units."""
    return 0.5 * _long_edge(sensor_width, sensor_height) * relative_focal_length


def relative_focal_length(
    absolute_focal_length: float,
    sensor_width: float,
    sensor_height: float
) -> float:
    """Inverse of ``absolute_focal_length``."""
    long_edge = _long_edge(sensor_width, sensor_height)
    if long_edge <= 0:
        raise InvalidSensorDimensions(
            messages.INVALID_SENSOR_DIMENSIONS.format(width=sensor_width, height=sensor_height)
        )
    return 2.0 * absolute_focal_length / long_edge


def image_proportions_match_sensor(
    image_width: float,
    image_height: float,
    sensor_width: float,
    sensor_height: float,
    tolerance: float = 0.01
) -> bool:
    """Check that image and sensor aspect ratios agree within a relative tolerance.

    Degenerate sizes cannot be compared and count as a match.
    """
    if image_width <= 0 or image_height <= 0 or sensor_width <= 0 or sensor_height <= 0:
        return True

    image_aspect = image_width / image_height
    sensor_aspect = sensor_width / sensor_height
    return abs(image_aspect - sensor_aspect) / sensor_aspect <= tolerance


def reconcile(
    relative_focal_length: float,
    sensor: SensorDescriptor,
    image_width: float,
    image_height: float,
    presets: Mapping[str, Tuple[float, float]] = CAMERA_PRESETS,
    tolerance: float = 0.01
) -> FocalLengthReport:
    """Absolute focal length and sensor consistency for a solved camera."""
    try:
        sensor_width, sensor_height = resolve_sensor(sensor, presets)
    except InvalidSensorDimensions as e:
        logger.warning(f"Cannot compute absolute focal length: {e.message}")
        return FocalLengthReport(errors=[e.message])

    proportions_match = image_proportions_match_sensor(
        image_width, image_height, sensor_width, sensor_height, tolerance
    )
    warnings = [] if proportions_match else [messages.SENSOR_ASPECT_MISMATCH]

    return FocalLengthReport(
        absolute_focal_length=absolute_focal_length(
            relative_focal_length, sensor_width, sensor_height
        ),
        sensor_width=sensor_width,
        sensor_height=sensor_height,
        proportions_match=proportions_match,
        warnings=warnings
    )

