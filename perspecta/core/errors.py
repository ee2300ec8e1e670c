"""Calibration failures.

Each exception carries the message shown to the user. ``solve`` catches
them and reports the message in ``SolverResult.errors``.
"""


class CalibrationError(ValueError):
    """Base class for configurations that cannot be calibrated."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InsufficientConstraints(CalibrationError):
    """Fewer control-point groups or lines than the mode requires."""


class DegenerateGeometry(CalibrationError):
    """Vanishing points or directions that do not span a valid basis."""


class NoRealFocalLengthSolution(CalibrationError):
    """The orthogonality equation has no real root."""


class InvalidSensorDimensions(CalibrationError):
    """Unknown preset or non-positive sensor width/height."""
