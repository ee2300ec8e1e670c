"""Control point entities: points, line segments and vanishing point groups."""

from typing import List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..math.coordinates import ImageCoordinateFrame, convert_coordinates


class Point2D(BaseModel):
    """2D point in some image coordinate frame."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="x coordinate")
    y: float = Field(description="y coordinate")

    @classmethod
    def from_numpy(cls, p: np.ndarray) -> "Point2D":
        """Create point from a 2-element array."""
        if p.shape != (2,):
            raise ValueError("p must be 2-element array")
        return cls(x=float(p[0]), y=float(p[1]))

    def to_numpy(self) -> np.ndarray:
        """Convert to numpy array [x, y]."""
        return np.array([self.x, self.y])


class ControlPointPair(BaseModel):
    """Line segment marked on the image, defined by its two end points."""

    model_config = ConfigDict(frozen=True)

    start: Point2D = Field(description="First end point")
    end: Point2D = Field(description="Second end point")

    def direction(self) -> np.ndarray:
        """Unnormalized direction from start to end."""
        return self.end.to_numpy() - self.start.to_numpy()

    def midpoint(self) -> np.ndarray:
        """Segment midpoint."""
        return 0.5 * (self.start.to_numpy() + self.end.to_numpy())

    def length(self) -> float:
        """Segment length."""
        return float(np.linalg.norm(self.direction()))


class VanishingPointGroup(BaseModel):
    """Line segments asserted to be parallel in the scene."""

    model_config = ConfigDict(frozen=True)

    lines: List[ControlPointPair] = Field(
        description="Segments that share one vanishing point",
        min_length=1
    )


class ControlPoints(BaseModel):
    """All user-placed geometry for one calibration.

    Every point is expressed in ``frame``. Groups are ordered: the first is
    vanishing point 1, the second vanishing point 2 and an optional third is
    used to locate the principal point.
    """

    model_config = ConfigDict(frozen=True)

    frame: ImageCoordinateFrame = Field(
        default=ImageCoordinateFrame.RELATIVE,
        description="Coordinate frame of every point below"
    )
    vanishing_points: List[VanishingPointGroup] = Field(
        default_factory=list,
        description="Line groups, one per vanishing point",
        max_length=3
    )
    origin: Optional[Point2D] = Field(
        default=None,
        description="Image position of the world origin (image center if omitted)"
    )
    horizon: Optional[ControlPointPair] = Field(
        default=None,
        description="Horizon direction for one vanishing point calibration"
    )
    principal_point: Optional[Point2D] = Field(
        default=None,
        description="Manually placed principal point"
    )
    reference_distance_anchor: Optional[Point2D] = Field(
        default=None,
        description="First end of the reference distance segment"
    )
    reference_distance_point: Optional[Point2D] = Field(
        default=None,
        description="Second end of the reference distance segment"
    )

    @field_validator('vanishing_points')
    @classmethod
    def validate_groups(cls, v):
        for group in v:
            if not group.lines:
                raise ValueError("Vanishing point groups must contain at least one line")
        return v

    def to_image_plane(self, image_width: float, image_height: float) -> "ControlPoints":
        """Return a copy with every point converted to the image-plane frame."""
        if self.frame == ImageCoordinateFrame.IMAGE_PLANE:
            return self

        def point(p: Optional[Point2D]) -> Optional[Point2D]:
            if p is None:
                return None
            converted = convert_coordinates(
                p.to_numpy(), self.frame, ImageCoordinateFrame.IMAGE_PLANE,
                image_width, image_height
            )
            return Point2D.from_numpy(converted)

        def segment(s: Optional[ControlPointPair]) -> Optional[ControlPointPair]:
            if s is None:
                return None
            return ControlPointPair(start=point(s.start), end=point(s.end))

        return ControlPoints(
            frame=ImageCoordinateFrame.IMAGE_PLANE,
            vanishing_points=[
                VanishingPointGroup(lines=[segment(line) for line in group.lines])
                for group in self.vanishing_points
            ],
            origin=point(self.origin),
            horizon=segment(self.horizon),
            principal_point=point(self.principal_point),
            reference_distance_anchor=point(self.reference_distance_anchor),
            reference_distance_point=point(self.reference_distance_point),
        )
