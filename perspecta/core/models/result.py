"""Solver outputs: vanishing points, camera parameters and results."""

import math
from typing import List, Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator

from ..math.homogeneous import dehomogenize, normalize
from .settings import Axis


class VanishingPoint(BaseModel):
    """Homogeneous vanishing point [x, y, w] in image-plane coordinates.

    Points at infinity keep w = 0 and store the unit image-space direction
    of their lines in (x, y).
    """

    x: float = Field(description="Homogeneous x")
    y: float = Field(description="Homogeneous y")
    w: float = Field(description="Homogeneous w (0 at infinity)")
    at_infinity: bool = Field(default=False, description="Lines are parallel in the image")
    residual: float = Field(
        default=0.0,
        ge=0,
        description="RMS angle in radians between the lines and the point"
    )
    line_count: int = Field(default=2, ge=2, description="Number of lines used")

    def to_numpy(self) -> np.ndarray:
        """Homogeneous coordinates as numpy array."""
        return np.array([self.x, self.y, self.w])

    def position(self) -> np.ndarray:
        """Finite image-plane position [x, y]."""
        if self.at_infinity:
            raise ValueError("Vanishing point at infinity has no finite position")
        return dehomogenize(self.to_numpy())

    def direction(self) -> np.ndarray:
        """Unit image-space direction of a point at infinity."""
        if not self.at_infinity:
            raise ValueError("Finite vanishing point has no direction")
        return normalize(np.array([self.x, self.y]))


class CameraParameters(BaseModel):
    """Calibrated camera."""

    camera_transform: List[List[float]] = Field(
        description="4x4 camera-to-world transform (columns 0-2 axes, column 3 position)"
    )
    view_transform: List[List[float]] = Field(
        description="4x4 world-to-camera transform"
    )
    relative_focal_length: float = Field(gt=0, description="Focal length in half long-edge units")
    horizontal_field_of_view: float = Field(gt=0, lt=math.pi, description="Radians")
    vertical_field_of_view: float = Field(gt=0, lt=math.pi, description="Radians")
    principal_point: List[float] = Field(
        description="Principal point in image-plane coordinates",
        min_length=2,
        max_length=2
    )
    image_width: int = Field(gt=0, description="Image width in pixels")
    image_height: int = Field(gt=0, description="Image height in pixels")
    vanishing_points: List[VanishingPoint] = Field(
        default_factory=list,
        description="Vanishing points used, in image-plane coordinates"
    )
    vanishing_point_axes: List[Axis] = Field(
        default_factory=list,
        description="World axes assigned to the vanishing points"
    )

    @field_validator('camera_transform', 'view_transform')
    @classmethod
    def validate_transform(cls, v):
        if len(v) != 4 or any(len(row) != 4 for row in v):
            raise ValueError("Transform must be a 4x4 matrix")
        return v

    def get_camera_transform(self) -> np.ndarray:
        """Camera-to-world transform as numpy array."""
        return np.array(self.camera_transform)

    def get_view_transform(self) -> np.ndarray:
        """World-to-camera transform as numpy array."""
        return np.array(self.view_transform)

    def get_rotation(self) -> np.ndarray:
        """Camera-to-world rotation."""
        return self.get_camera_transform()[:3, :3]

    def get_position(self) -> np.ndarray:
        """Camera position in world coordinates."""
        return self.get_camera_transform()[:3, 3]

    def get_principal_point(self) -> np.ndarray:
        """Principal point as numpy array."""
        return np.array(self.principal_point)

    def view_direction(self) -> np.ndarray:
        """World-space direction the camera looks along (its local -Z)."""
        return -self.get_rotation()[:, 2]


class SolverResult(BaseModel):
    """Outcome of a solve.

    ``camera_parameters`` is None when the configuration cannot be solved.
    Errors and warnings are independent ordered message lists; warnings may
    accompany a valid result.
    """

    camera_parameters: Optional[CameraParameters] = Field(default=None)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    absolute_focal_length: Optional[float] = Field(
        default=None,
        description="Focal length in mm, when requested"
    )

    @property
    def success(self) -> bool:
        return self.camera_parameters is not None


class FocalLengthReport(BaseModel):
    """Relative focal length reconciled against a sensor."""

    absolute_focal_length: Optional[float] = Field(default=None, description="mm")
    sensor_width: Optional[float] = Field(default=None, description="mm")
    sensor_height: Optional[float] = Field(default=None, description="mm")
    proportions_match: bool = Field(default=True)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
