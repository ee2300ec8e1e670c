"""Perspecta - Single-view camera calibration

Recovers focal length, orientation and position of a camera from vanishing
points of orthogonal scene directions marked on one photograph.
"""

__version__ = "0.1.0"

# Core models
from .core.models.entities import ControlPointPair, ControlPoints, Point2D, VanishingPointGroup
from .core.models.settings import (
    Axis,
    CalibrationMode,
    CalibrationSettings,
    PrincipalPointMode,
    SensorDescriptor,
)
from .core.models.result import CameraParameters, SolverResult, VanishingPoint

# Solver
from .core.solver.camera_solver import CameraSolver, SolverOptions, solve
from .core.solver.vanishing_points import estimate_vanishing_point

# Sensor
from .core.sensor.presets import CAMERA_PRESETS
from .core.sensor.reconciler import image_proportions_match_sensor, reconcile

# Math
from .core.math.coordinates import ImageCoordinateFrame, convert_coordinates
from .core.math.quaternions import rotation_matrix_to_axis_angle, rotation_matrix_to_quaternion

# Presentation
from .core.export.display import ResultDisplaySettings, format_result

__all__ = [
    # Version
    "__version__",
    # Models
    "Point2D",
    "ControlPointPair",
    "ControlPoints",
    "VanishingPointGroup",
    "Axis",
    "CalibrationMode",
    "CalibrationSettings",
    "PrincipalPointMode",
    "SensorDescriptor",
    "CameraParameters",
    "SolverResult",
    "VanishingPoint",
    # Solver
    "CameraSolver",
    "SolverOptions",
    "solve",
    "estimate_vanishing_point",
    # Sensor
    "CAMERA_PRESETS",
    "image_proportions_match_sensor",
    "reconcile",
    # Math
    "ImageCoordinateFrame",
    "convert_coordinates",
    "rotation_matrix_to_axis_angle",
    "rotation_matrix_to_quaternion",
    # Presentation
    "ResultDisplaySettings",
    "format_result",
]
