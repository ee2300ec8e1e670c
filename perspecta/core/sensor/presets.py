"""Camera sensor presets: preset ID -> sensor size in millimetres."""

from types import MappingProxyType
from typing import Mapping, Tuple

CAMERA_PRESETS: Mapping[str, Tuple[float, float]] = MappingProxyType({
    "full_frame": (36.0, 24.0),
    "aps_h": (27.9, 18.6),
    "aps_c_canon": (22.3, 14.9),
    "aps_c": (23.6, 15.6),
    "four_thirds": (17.3, 13.0),
    "one_inch": (13.2, 8.8),
    "super_35": (24.89, 18.66),
    "medium_format_44x33": (43.8, 32.9),
    "super_8": (5.79, 4.01),
    "16mm": (10.26, 7.49),
})
