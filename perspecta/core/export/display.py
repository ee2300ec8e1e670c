"""Formatting of solver results for display.

Pure functions of a ``SolverResult`` and explicit display settings. Nothing
here changes how results are computed; values only get converted to the
requested units, frames and rotation representations.
"""

import math
from enum import Enum
from typing import List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

from ..math.coordinates import ImageCoordinateFrame, convert_coordinates
from ..math.quaternions import (
    quat_from_matrix,
    quat_to_euler,
    rotation_matrix_to_axis_angle,
    rotation_matrix_to_quaternion,
)
from ..models.result import CameraParameters, SolverResult
from ..models.settings import CalibrationMode, CalibrationSettings
from ..sensor.presets import CAMERA_PRESETS
from ..sensor.reconciler import reconcile


class FieldOfViewFormat(str, Enum):
    """Angle units for field of view (and pan/tilt/roll angles)."""

    DEGREES = "degrees"
    RADIANS = "radians"


class OrientationFormat(str, Enum):
    """Rotation representation."""

    AXIS_ANGLE_DEGREES = "axis_angle_degrees"
    AXIS_ANGLE_RADIANS = "axis_angle_radians"
    QUATERNION = "quaternion"
    PAN_TILT_ROLL = "pan_tilt_roll"


class PrincipalPointFormat(str, Enum):
    """Coordinate frame for the principal point."""

    IMAGE_PLANE = "image_plane"
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class ResultDisplaySettings(BaseModel):
    """How a result should be presented."""

    field_of_view_format: FieldOfViewFormat = Field(default=FieldOfViewFormat.DEGREES)
    orientation_format: OrientationFormat = Field(default=OrientationFormat.AXIS_ANGLE_DEGREES)
    principal_point_format: PrincipalPointFormat = Field(default=PrincipalPointFormat.ABSOLUTE)
    display_absolute_focal_length: bool = Field(default=False)


class DisplayRow(BaseModel):
    """One labelled value."""

    title: str
    value: float


class DisplaySection(BaseModel):
    """Group of rows under a heading."""

    title: str
    rows: List[DisplayRow] = Field(default_factory=list)


class ResultDisplay(BaseModel):
    """Display-ready result: sections plus the solver's messages verbatim."""

    sections: List[DisplaySection] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def section(self, title: str) -> Optional[DisplaySection]:
        """Find a section by title."""
        for section in self.sections:
            if section.title == title:
                return section
        return None


def _section(title: str, rows: List[Tuple[str, float]]) -> DisplaySection:
    return DisplaySection(
        title=title,
        rows=[DisplayRow(title=name, value=float(value)) for name, value in rows]
    )


def _angle_factor(fov_format: FieldOfViewFormat) -> float:
    return 180.0 / math.pi if fov_format == FieldOfViewFormat.DEGREES else 1.0


def format_field_of_view(
    parameters: CameraParameters,
    fov_format: FieldOfViewFormat
) -> DisplaySection:
    factor = _angle_factor(fov_format)
    return _section("Field of view", [
        ("Horizontal", factor * parameters.horizontal_field_of_view),
        ("Vertical", factor * parameters.vertical_field_of_view),
    ])


def format_orientation(
    parameters: CameraParameters,
    orientation_format: OrientationFormat,
    fov_format: FieldOfViewFormat = FieldOfViewFormat.DEGREES
) -> DisplaySection:
    """Camera orientation in the requested representation.

    Pan/tilt/roll angles use the field of view angle units.
    """
    transform = parameters.get_camera_transform()

    if orientation_format == OrientationFormat.QUATERNION:
        x, y, z, w = rotation_matrix_to_quaternion(transform)
        rows = [("x", x), ("y", y), ("z", z), ("w", w)]
    elif orientation_format == OrientationFormat.PAN_TILT_ROLL:
        roll, pitch, yaw = quat_to_euler(quat_from_matrix(transform))
        factor = _angle_factor(fov_format)
        rows = [("tilt", factor * roll), ("roll", factor * pitch), ("pan", factor * yaw)]
    else:
        x, y, z, angle = rotation_matrix_to_axis_angle(transform)
        if orientation_format == OrientationFormat.AXIS_ANGLE_DEGREES:
            angle = math.degrees(angle)
        rows = [("x", x), ("y", y), ("z", z), ("Angle", angle)]

    return _section("Camera orientation", rows)


def format_principal_point(
    parameters: CameraParameters,
    point_format: PrincipalPointFormat
) -> DisplaySection:
    point = convert_coordinates(
        parameters.get_principal_point(),
        ImageCoordinateFrame.IMAGE_PLANE,
        ImageCoordinateFrame(point_format.value),
        parameters.image_width,
        parameters.image_height
    )
    return _section("Principal point", [("x", point[0]), ("y", point[1])])


def format_result(
    result: SolverResult,
    display_settings: Optional[ResultDisplaySettings] = None,
    calibration_settings: Optional[CalibrationSettings] = None,
    presets: Mapping[str, Tuple[float, float]] = CAMERA_PRESETS
) -> ResultDisplay:
    """Build the display sections for a solver result.

    Args:
        result: Solver output
        display_settings: Units, frames and rotation representation
        calibration_settings: Settings the result was solved with; supplies
            the sensor for the absolute focal length
        presets: Camera sensor preset table

    Returns:
        Display model; only errors and warnings when there is no camera
    """
    display_settings = display_settings or ResultDisplaySettings()
    display = ResultDisplay(errors=list(result.errors), warnings=list(result.warnings))

    parameters = result.camera_parameters
    if parameters is None:
        return display

    position = parameters.get_position()
    display.sections.extend([
        _section("Image", [("Width", parameters.image_width), ("Height", parameters.image_height)]),
        format_field_of_view(parameters, display_settings.field_of_view_format),
        _section("Camera position", [("x", position[0]), ("y", position[1]), ("z", position[2])]),
        format_orientation(
            parameters, display_settings.orientation_format, display_settings.field_of_view_format
        ),
        format_principal_point(parameters, display_settings.principal_point_format),
    ])

    # The focal length is an input in one vanishing point mode
    one_point = (
        calibration_settings is not None
        and calibration_settings.calibration_mode == CalibrationMode.ONE_VANISHING_POINT
    )
    if display_settings.display_absolute_focal_length and calibration_settings and not one_point:
        report = reconcile(
            parameters.relative_focal_length,
            calibration_settings.sensor,
            parameters.image_width,
            parameters.image_height,
            presets
        )
        if report.absolute_focal_length is not None:
            display.sections.append(
                _section("Focal length", [("Value (mm)", report.absolute_focal_length)])
            )
        for message in report.errors:
            if message not in display.errors:
                display.errors.append(message)
        for message in report.warnings:
            if message not in display.warnings:
                display.warnings.append(message)

    return display
