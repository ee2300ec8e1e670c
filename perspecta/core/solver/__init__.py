"""Single-view calibration solver for Perspecta."""

from .camera_solver import CameraSolver, SolverOptions, solve
from .vanishing_points import estimate_vanishing_point

__all__ = [
    "CameraSolver",
    "SolverOptions",
    "solve",
    "estimate_vanishing_point",
]
