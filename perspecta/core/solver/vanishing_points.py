"""Vanishing point estimation from groups of parallel line segments."""

import logging
import math
from typing import List, Sequence

import numpy as np
from scipy.linalg import svd

from ..math.homogeneous import intersect_lines, is_at_infinity, line_through
from ..models.entities import ControlPointPair
from ..models.result import VanishingPoint
from .. import messages
from ..errors import DegenerateGeometry, InsufficientConstraints

logger = logging.getLogger(__name__)


def _homogeneous_lines(lines: Sequence[ControlPointPair], index: int, epsilon: float) -> np.ndarray:
    homogeneous_lines = []
    for line_number, segment in enumerate(lines, start=1):
        try:
            homogeneous_lines.append(
                line_through(segment.start.to_numpy(), segment.end.to_numpy(), epsilon)
            )
        except ValueError:
            raise DegenerateGeometry(
                messages.DEGENERATE_LINE.format(index=index, line=line_number)
            )
    return np.array(homogeneous_lines)


def _angular_deviation(segment: ControlPointPair, target: np.ndarray) -> float:
    """Unsigned angle between a segment and a direction, folded into [0, pi/2]."""
    t = segment.direction()
    t_norm = np.linalg.norm(t)
    target_norm = np.linalg.norm(target)
    if t_norm < 1e-15 or target_norm < 1e-15:
        return 0.0

    sin_angle = abs(t[0] * target[1] - t[1] * target[0]) / (t_norm * target_norm)
    return math.asin(min(1.0, sin_angle))


def convergence_residual(lines: Sequence[ControlPointPair], vp: VanishingPoint) -> float:
    """RMS angle between each segment and the direction from its midpoint to vp."""
    deviations: List[float] = []
    for segment in lines:
        if vp.at_infinity:
            target = vp.direction()
        else:
            target = vp.position() - segment.midpoint()
        deviations.append(_angular_deviation(segment, target))

    return float(np.sqrt(np.mean(np.square(deviations))))


def estimate_vanishing_point(
    lines: Sequence[ControlPointPair],
    index: int = 1,
    infinity_tolerance: float = 1e-9,
    epsilon: float = 1e-10
) -> VanishingPoint:
    """Compute the common vanishing point of segments that are parallel in 3D.

    Two lines intersect exactly. More lines are combined with a homogeneous
    least-squares fit: the right singular vector of the stacked line matrix
    with the smallest singular value.

    Args:
        lines: Segments in image-plane coordinates
        index: 1-based vanishing point number, used in messages
        infinity_tolerance: Relative |w| below which the point is at infinity
        epsilon: Threshold for degenerate segments and identical lines

    Returns:
        Vanishing point, possibly at infinity

    Raises:
        InsufficientConstraints: Fewer than two lines
        DegenerateGeometry: Zero-length segments or identical lines
    """
    if len(lines) == 0:
        raise InsufficientConstraints(messages.MISSING_VANISHING_POINT.format(index=index))
    if len(lines) < 2:
        raise InsufficientConstraints(
            messages.TOO_FEW_LINES.format(index=index, count=len(lines))
        )

    L = _homogeneous_lines(lines, index, epsilon)

    if len(L) == 2:
        vp = intersect_lines(L[0], L[1])
        scale = max(1.0, np.linalg.norm(L[0]) * np.linalg.norm(L[1]))
        if np.linalg.norm(vp) < epsilon * scale:
            raise DegenerateGeometry(messages.IDENTICAL_LINES.format(index=index))
    else:
        _, singular_values, Vt = svd(L)
        # A rank-one line matrix means every line is the same line
        if singular_values[1] < epsilon * max(1.0, singular_values[0]):
            raise DegenerateGeometry(messages.IDENTICAL_LINES.format(index=index))
        vp = Vt[-1]

    if is_at_infinity(vp, infinity_tolerance):
        direction = vp[:2] / np.linalg.norm(vp[:2])
        # Orient along the first segment as drawn
        if np.dot(direction, lines[0].direction()) < 0:
            direction = -direction
        result = VanishingPoint(
            x=float(direction[0]),
            y=float(direction[1]),
            w=0.0,
            at_infinity=True,
            line_count=len(lines)
        )
    else:
        result = VanishingPoint(
            x=float(vp[0] / vp[2]),
            y=float(vp[1] / vp[2]),
            w=1.0,
            line_count=len(lines)
        )

    if len(lines) > 2:
        result = result.model_copy(update={"residual": convergence_residual(lines, result)})

    logger.debug(
        f"Vanishing point {index}: {result.to_numpy()} "
        f"(at infinity: {result.at_infinity}, residual: {result.residual:.3g} rad)"
    )
    return result
