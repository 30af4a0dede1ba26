"""
tunnelface: Face support pressure of slurry and air supported shield
tunnels in layered soil.

Subpackages
-----------
soil
    Layered soil profiles, property averaging, geostatic stress.
face
    Silo and sliding-wedge models, face forces, support pressure
    scenarios, blow-out check.
"""

from tunnelface import soil, face
from tunnelface.soil import InvalidInputError, SoilLayer, SoilProfile
from tunnelface.face import FaceSupportConfig, FaceSupportResult, analyze_face_support

__version__ = "0.1.0"

__all__ = [
    "soil",
    "face",
    "InvalidInputError",
    "SoilLayer",
    "SoilProfile",
    "FaceSupportConfig",
    "FaceSupportResult",
    "analyze_face_support",
]
