"""User-facing error and warning messages.

Front ends display these verbatim.
"""

# Errors
INVALID_IMAGE_DIMENSIONS = "Invalid image dimensions {width}x{height}"
MISSING_VANISHING_POINT = "Vanishing point {index} requires control lines, but none were given"
TOO_FEW_LINES = "Vanishing point {index} requires at least two lines, but only {count} was given"
DEGENERATE_LINE = "Vanishing point {index}: line {line} has zero length"
IDENTICAL_LINES = "Vanishing point {index}: lines are identical, cannot compute a vanishing point"
IDENTICAL_AXES = "Vanishing points 1 and 2 cannot be assigned the same axis ({axis})"
COINCIDENT_VANISHING_POINTS = "Vanishing points 1 and 2 coincide"
PARALLEL_VANISHING_DIRECTIONS = (
    "Vanishing points 1 and 2 are both at infinity in the same direction"
)
DEGENERATE_BASIS = "The vanishing directions do not span a valid camera orientation"
THIRD_VANISHING_POINT_AT_INFINITY = (
    "Cannot compute the principal point: vanishing point {index} is at infinity"
)
DEGENERATE_VANISHING_TRIANGLE = (
    "Cannot compute the principal point: the three vanishing points are collinear"
)
MISSING_PRINCIPAL_POINT = "Manual principal point mode requires a principal point"
DEGENERATE_HORIZON = "The horizon line has zero length"
NO_REAL_FOCAL_LENGTH = (
    "Failed to compute focal length. "
    "The vanishing points do not describe a valid orthogonal pair"
)
INVALID_FOCAL_LENGTH = "Invalid focal length {focal_length}"
DEGENERATE_FIELD_OF_VIEW = "Focal length {focal_length:.4g} gives a degenerate field of view"
UNKNOWN_SENSOR_PRESET = "Unknown camera preset '{preset_id}'"
INVALID_SENSOR_DIMENSIONS = "Invalid sensor dimensions {width} x {height} mm"

# Warnings
POOR_CONVERGENCE = (
    "The lines of vanishing point {index} do not converge well "
    "(RMS deviation {degrees:.2f} degrees)"
)
SENSOR_ASPECT_MISMATCH = "The image and sensor proportions do not match"
FOCAL_LENGTH_NOT_OBSERVABLE = (
    "A vanishing point is at infinity, so the focal length cannot be computed. "
    "Using a relative focal length of {focal_length:.4g}"
)
DEFAULT_FOCAL_LENGTH_USED = "No focal length was given, the default was used"
NON_ORTHOGONAL_DIRECTIONS = (
    "The vanishing directions are not orthogonal (off by {degrees:.2f} degrees) "
    "and were adjusted"
)
DEGENERATE_REFERENCE_DISTANCE = (
    "The reference distance points could not be placed on the reference axis "
    "and were ignored"
)
INCOMPLETE_REFERENCE_DISTANCE = (
    "Reference distance needs an axis, a distance and two points, and was ignored"
)
