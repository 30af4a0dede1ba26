"""Face stability of slurry and air supported shield tunnels.

Sliding wedge / silo model for the required face support pressure.

Silo
~~~~
:func:`silo_effective_stress` — Janssen reduction of the crown stress
over a Terzaghi silo of half-width b₁, capped at 5 b₁.

Wedge
~~~~~
:func:`wedge_components` — equilibrium of one trial wedge;
:func:`critical_wedge` — grid search for the critical sliding angle.

Forces and pressures
~~~~~~~~~~~~~~~~~~~~
:func:`aggregate_forces` — earth and water forces on the circular face;
``pressure_profile_*`` — support pressure for the no / full / partial
lowering scenarios; :func:`blowout_check` — crown blow-out check.

Example::

    from tunnelface.soil import SoilProfile, wedge_averages, prism_averages
    from tunnelface.face import critical_wedge

    side = wedge_averages(15.0, 10.0, 5.0, profile)
    base = prism_averages(15.0, 10.0, profile)
    result = critical_wedge(10.0, 185.0, side, base)
    print(result.theta_crit, result.Ere_max)
"""

from tunnelface.face.silo import SiloResult, silo_effective_stress, terzaghi_half_width
from tunnelface.face.wedge import (
    K2Model,
    VerticalStressModel,
    WedgeComponents,
    lateral_coefficient,
    wedge_components,
)
from tunnelface.face.search import CriticalWedge, critical_wedge
from tunnelface.face.forces import (
    FaceForces,
    aggregate_forces,
    water_force_circular,
    water_force_square,
)
from tunnelface.face.pressure import (
    IngressCheck,
    PressureProfile,
    pressure_profile_full_lowering,
    pressure_profile_no_lowering,
    pressure_profile_partial_lowering,
)
from tunnelface.face.blowout import BlowoutResult, blowout_check
from tunnelface.face.analysis import (
    FaceSupportConfig,
    FaceSupportResult,
    analyze_face_support,
)

__all__ = [
    "SiloResult",
    "silo_effective_stress",
    "terzaghi_half_width",
    "K2Model",
    "VerticalStressModel",
    "WedgeComponents",
    "lateral_coefficient",
    "wedge_components",
    "CriticalWedge",
    "critical_wedge",
    "FaceForces",
    "aggregate_forces",
    "water_force_circular",
    "water_force_square",
    "IngressCheck",
    "PressureProfile",
    "pressure_profile_full_lowering",
    "pressure_profile_no_lowering",
    "pressure_profile_partial_lowering",
    "BlowoutResult",
    "blowout_check",
    "FaceSupportConfig",
    "FaceSupportResult",
    "analyze_face_support",
]
