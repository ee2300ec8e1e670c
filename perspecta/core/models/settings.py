"""Calibration and display settings."""

from enum import Enum
from typing import Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, field_validator


class CalibrationMode(str, Enum):
    """Number of vanishing points used to calibrate."""

    ONE_VANISHING_POINT = "one_vanishing_point"
    TWO_VANISHING_POINTS = "two_vanishing_points"


class PrincipalPointMode(str, Enum):
    """How the principal point is obtained."""

    DEFAULT = "default"  # image center
    MANUAL = "manual"
    FROM_THIRD_VANISHING_POINT = "from_third_vanishing_point"


class Axis(str, Enum):
    """World axis a vanishing point's lines run along."""

    POSITIVE_X = "x"
    POSITIVE_Y = "y"
    POSITIVE_Z = "z"
    NEGATIVE_X = "-x"
    NEGATIVE_Y = "-y"
    NEGATIVE_Z = "-z"

    def to_numpy(self) -> np.ndarray:
        """Unit vector of the axis."""
        sign = -1.0 if self.value.startswith("-") else 1.0
        index = "xyz".index(self.value[-1])
        v = np.zeros(3)
        v[index] = sign
        return v


class SensorDescriptor(BaseModel):
    """Camera sensor, either a named preset or custom dimensions in mm."""

    preset_id: Optional[str] = Field(
        default=None,
        description="Camera preset ID; overrides the custom dimensions"
    )
    sensor_width: float = Field(default=36.0, description="Custom sensor width in mm")
    sensor_height: float = Field(default=24.0, description="Custom sensor height in mm")


class CalibrationSettings(BaseModel):
    """Everything besides the control points that a solve depends on."""

    calibration_mode: CalibrationMode = Field(
        default=CalibrationMode.TWO_VANISHING_POINTS,
        description="Calibration mode"
    )
    principal_point_mode: PrincipalPointMode = Field(
        default=PrincipalPointMode.DEFAULT,
        description="Principal point source"
    )
    vanishing_point_axes: Tuple[Axis, Axis] = Field(
        default=(Axis.POSITIVE_X, Axis.POSITIVE_Y),
        description="World axes of vanishing points 1 and 2"
    )
    sensor: SensorDescriptor = Field(default_factory=SensorDescriptor)
    relative_focal_length: Optional[float] = Field(
        default=None,
        gt=0,
        description="Known focal length in half long-edge units"
    )
    absolute_focal_length: float = Field(
        default=24.0,
        gt=0,
        description="Focal length in mm used with the sensor in one vanishing point mode"
    )
    reference_axis: Optional[Axis] = Field(
        default=None,
        description="World axis along which the reference distance is measured"
    )
    reference_distance: Optional[float] = Field(
        default=None,
        description="Length of the reference distance segment in scene units"
    )
    compute_absolute_focal_length: bool = Field(
        default=False,
        description="Convert the focal length to mm using the sensor"
    )

    @field_validator('reference_distance')
    @classmethod
    def validate_reference_distance(cls, v):
        if v is not None and v <= 0:
            raise ValueError("reference_distance must be positive")
        return v

    def uses_third_vanishing_point(self) -> bool:
        """Check whether a third line group is required."""
        return (
            self.calibration_mode == CalibrationMode.TWO_VANISHING_POINTS
            and self.principal_point_mode == PrincipalPointMode.FROM_THIRD_VANISHING_POINT
        )

    def required_vanishing_points(self) -> int:
        """Number of line groups the settings call for."""
        if self.calibration_mode == CalibrationMode.ONE_VANISHING_POINT:
            return 1
        return 3 if self.uses_third_vanishing_point() else 2
