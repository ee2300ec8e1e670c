"""Solver API routes."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from perspecta.core.export.display import ResultDisplay, ResultDisplaySettings, format_result
from perspecta.core.models.entities import ControlPoints
from perspecta.core.models.result import SolverResult
from perspecta.core.models.settings import CalibrationSettings
from perspecta.core.solver.camera_solver import CameraSolver

router = APIRouter(prefix="/solve", tags=["solve"])

logger = logging.getLogger(__name__)

solver = CameraSolver()


class SolveRequest(BaseModel):
    """Request model for a calibration."""

    control_points: ControlPoints
    settings: CalibrationSettings = Field(default_factory=CalibrationSettings)
    image_width: int = Field(gt=0)
    image_height: int = Field(gt=0)


class FormatRequest(SolveRequest):
    """Calibration plus display preferences."""

    display_settings: ResultDisplaySettings = Field(default_factory=ResultDisplaySettings)


@router.post("")
async def solve_camera(request: SolveRequest) -> SolverResult:
    """Calibrate a camera.

    Unsolvable configurations are reported in ``errors`` with status 200.
    """
    result = solver.solve(
        request.control_points, request.settings, request.image_width, request.image_height
    )
    if result.errors:
        logger.info(f"Solve returned errors: {result.errors}")
    return result


@router.post("/format")
async def solve_and_format(request: FormatRequest) -> ResultDisplay:
    """Calibrate a camera and format the result for display."""
    result = solver.solve(
        request.control_points, request.settings, request.image_width, request.image_height
    )
    return format_result(result, request.display_settings, request.settings)
