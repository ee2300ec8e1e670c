"""Data models for Perspecta."""

from .entities import Point2D, ControlPointPair, VanishingPointGroup, ControlPoints
from .settings import (
    Axis,
    CalibrationMode,
    CalibrationSettings,
    PrincipalPointMode,
    SensorDescriptor,
)
from .result import VanishingPoint, CameraParameters, SolverResult, FocalLengthReport

__all__ = [
    "Point2D",
    "ControlPointPair",
    "VanishingPointGroup",
    "ControlPoints",
    "Axis",
    "CalibrationMode",
    "CalibrationSettings",
    "PrincipalPointMode",
    "SensorDescriptor",
    "VanishingPoint",
    "CameraParameters",
    "SolverResult",
    "FocalLengthReport",
]
