"""Layered soil profiles, property averaging and geostatic stress.

Example::

    from tunnelface.soil import SoilProfile, vertical_effective_stress

    profile = SoilProfile([
        {"name": "Sand", "depth": 5, "gamma_max": 18, "gamma_prime_max": 8,
         "phi": 30, "c": 0},
        {"name": "Clay", "depth": 15, "gamma_max": 19, "gamma_prime_max": 9,
         "phi": 32, "c": 5},
    ])
    sigma_v = vertical_effective_stress(12.0, 10.0, 3.0, profile)
"""

from tunnelface.soil.profile import (
    GAMMA_W,
    InvalidInputError,
    SoilLayer,
    SoilProfile,
    as_layers,
    water_pressure,
)
from tunnelface.soil.averaging import (
    AveragedProperties,
    average_properties,
    face_friction_angle,
    layer_slices,
    prism_averages,
    split_at_water,
    wedge_averages,
)
from tunnelface.soil.stress import vertical_effective_stress

__all__ = [
    "GAMMA_W",
    "InvalidInputError",
    "SoilLayer",
    "SoilProfile",
    "as_layers",
    "water_pressure",
    "AveragedProperties",
    "average_properties",
    "face_friction_angle",
    "layer_slices",
    "prism_averages",
    "split_at_water",
    "wedge_averages",
    "vertical_effective_stress",
]
