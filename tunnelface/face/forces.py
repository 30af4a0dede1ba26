"""Earth and water forces on the tunnel face.

The wedge analysis works on a square face of side *D*; its result is
scaled to the inscribed circle by π/4.  The hydrostatic force on the
circular face is integrated over horizontal strips whenever the water
table cuts the face, because the chord width varies non-linearly with
depth.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tunnelface.soil.profile import GAMMA_W, water_pressure

#: Ratio of circular to square face area.
CIRCULAR_FACE_FACTOR = np.pi / 4.0

#: Number of strips used to integrate the water force on the circle.
N_STRIPS = 200


def water_force_square(
    diameter: float,
    crown_depth: float,
    water_depth: float,
    gamma_w: float = GAMMA_W,
) -> float:
    """Water force on the square face, W_re = D² (u_crown + u_invert) / 2."""
    if diameter <= 0:
        return 0.0
    u_crown = water_pressure(crown_depth, water_depth, gamma_w)
    u_invert = water_pressure(crown_depth + diameter, water_depth, gamma_w)
    return 0.5 * (u_crown + u_invert) * diameter**2


def water_force_circular(
    diameter: float,
    crown_depth: float,
    water_depth: float,
    gamma_w: float = GAMMA_W,
    n_strips: int = N_STRIPS,
) -> float:
    """Water force on the circular face by strip integration.

    W_ci = Σ u(z_i) · 2√(r² − y_i²) · Δy

    with strips of height Δy = D / n_strips evaluated at their centres.

    Returns:
        Force in kN; zero when the water table lies below the invert.
    """
    if diameter <= 0 or water_depth >= crown_depth + diameter:
        return 0.0
    r = 0.5 * diameter
    dy = diameter / n_strips
    y = -r + (np.arange(n_strips) + 0.5) * dy
    z = crown_depth + r - y
    u = np.maximum(0.0, z - water_depth) * gamma_w
    width = 2.0 * np.sqrt(r * r - y * y)
    return float(np.sum(u * width) * dy)


@dataclass(frozen=True)
class FaceForces:
    """Forces on the tunnel face (kN).

    Attributes:
        E_max_re: Critical earth force on the square face.
        E_max_ci: Earth force on the circular face.
        W_re: Water force on the square face.
        W_ci: Water force on the circular face.
        S_ci: Required stabilization force η_E E_ci + η_W W_ci.
        area_re: Square face area D².
        area_ci: Circular face area π D² / 4.
    """

    E_max_re: float
    E_max_ci: float
    W_re: float
    W_ci: float
    S_ci: float
    area_re: float
    area_ci: float


def aggregate_forces(
    E_max_re: float,
    diameter: float,
    crown_depth: float,
    water_depth: float,
    eta_E: float,
    eta_W: float,
    gamma_w: float = GAMMA_W,
) -> FaceForces:
    """Combine the critical earth force and the water force.

    When the water table lies below the crown the circular water force
    is integrated exactly; otherwise the linear pressure distribution
    allows scaling the square-face force by π/4.
    """
    diameter = max(diameter, 0.0)
    E_max_ci = E_max_re * CIRCULAR_FACE_FACTOR
    W_re = water_force_square(diameter, crown_depth, water_depth, gamma_w)
    if water_depth > crown_depth:
        W_ci = water_force_circular(diameter, crown_depth, water_depth, gamma_w)
    else:
        W_ci = W_re * CIRCULAR_FACE_FACTOR
    return FaceForces(
        E_max_re=E_max_re,
        E_max_ci=E_max_ci,
        W_re=W_re,
        W_ci=W_ci,
        S_ci=eta_E * E_max_ci + eta_W * W_ci,
        area_re=diameter**2,
        area_ci=float(CIRCULAR_FACE_FACTOR * diameter**2),
    )
