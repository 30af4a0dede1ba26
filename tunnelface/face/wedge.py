"""Sliding-wedge limit equilibrium at the tunnel face.

The face of a circular tunnel of diameter *D* is idealized as a square
of side *D*.  A rigid wedge bounded by the face, two vertical side
triangles and an inclined sliding plane through the invert at angle θ
is loaded by its own weight G and by the vertical load Pv of the soil
prism resting on it.  Shear on the side triangles (T) and cohesion and
friction on the sliding plane resist movement; the remainder must be
carried by the support force

    E_re = [(G + Pv)(sin θ − cos θ tan φ_b) − 2T − c_b D² / sin θ]
           / (cos θ + sin θ tan φ_b)

References
----------
- Anagnostou & Kovári (1994), The face stability of slurry-shield-driven
  tunnels, *Tunnelling and Underground Space Technology* 9(2).
- Jancsecz & Steiner (1994), Face support for a large mix-shield in
  heterogeneous ground conditions, *Tunnelling '94*.
- Kirsch & Kolymbas (2005), Theoretische Untersuchung zur Ortsbrust-
  stabilität, *Bautechnik* 82(7).
"""

from __future__ import annotations

import enum
import logging
import re
import unicodedata
from dataclasses import dataclass

import numpy as np

from tunnelface.soil.averaging import AveragedProperties

logger = logging.getLogger(__name__)

#: Trial angles outside this open interval are degenerate.
THETA_MIN = 0.1
THETA_MAX = 89.9


def _normalize(label: str) -> str:
    # Fold accents before stripping, so "Kovári" matches "Kovari".
    decomposed = unicodedata.normalize("NFKD", label)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^a-z]", "", folded.lower())


class _ModelEnum(str, enum.Enum):
    @classmethod
    def coerce(cls, value: object):
        """Return the member matching *value*.

        Accepts a member, its value, or a label such as
        ``"Jancsecz–Steiner"`` (case and punctuation are ignored).
        Unrecognized values fall back to Jancsecz–Steiner.
        """
        if isinstance(value, cls):
            return value
        key = _normalize(str(value))
        for member in cls:
            if key in (_normalize(member.value), _normalize(member.name)):
                return member
        logger.warning(
            "Unknown %s %r; using %s", cls.__name__, value, cls.JANCSECZ_STEINER.value
        )
        return cls.JANCSECZ_STEINER


class K2Model(_ModelEnum):
    """Lateral pressure coefficient on the wedge side faces."""

    JANCSECZ_STEINER = "JancseczSteiner"
    KIRSCH_KOLYMBAS = "KirschKolymbas"
    ANAGNOSTOU_KOVARI = "AnagnostouKovari"


class VerticalStressModel(_ModelEnum):
    """Distribution of the crown stress over the wedge side faces."""

    JANCSECZ_STEINER = "JancseczSteiner"
    KIRSCH_KOLYMBAS = "KirschKolymbas"


def lateral_coefficient(phi: float, model: K2Model | str) -> tuple[float, float]:
    """K₂ for the side faces.

    - Jancsecz–Steiner: (k₀ + kₐ) / 2
    - Kirsch–Kolymbas: k₀ = 1 − sin φ'
    - Anagnostou–Kovári: 0.4

    Returns:
        ``(K2, ka)`` where kₐ = tan²(45° − φ'/2).
    """
    model = K2Model.coerce(model)
    ka = float(np.tan(np.radians(45.0 - phi / 2.0)) ** 2)
    k0 = float(1.0 - np.sin(np.radians(phi)))
    K2 = {
        K2Model.JANCSECZ_STEINER: 0.5 * (k0 + ka),
        K2Model.KIRSCH_KOLYMBAS: k0,
        K2Model.ANAGNOSTOU_KOVARI: 0.4,
    }[model]
    return K2, ka


@dataclass(frozen=True)
class WedgeComponents:
    """Force components of one trial wedge (per face width, kN).

    Attributes:
        theta: Trial sliding angle (degrees).
        Ere: Required support force on the square face.
        G: Wedge weight.
        Pv: Vertical load of the overlying prism.
        T: Total shear on one side face (T_R + T_C).
        T_R: Frictional side shear.
        T_C: Cohesive side shear.
        C_base: Cohesive force on the sliding plane.
        K2: Lateral pressure coefficient.
        ka: Active earth pressure coefficient.
        phi_side, c_side: Side-face strength parameters.
        phi_base, c_base: Sliding-plane strength parameters.
    """

    theta: float
    Ere: float
    G: float
    Pv: float
    T: float
    T_R: float
    T_C: float
    C_base: float
    K2: float
    ka: float
    phi_side: float
    c_side: float
    phi_base: float
    c_base: float


def wedge_components(
    diameter: float,
    crown_stress: float,
    theta_deg: float,
    side_props: AveragedProperties,
    base_props: AveragedProperties,
    k2_model: K2Model | str = K2Model.JANCSECZ_STEINER,
    pv_model: VerticalStressModel | str = VerticalStressModel.JANCSECZ_STEINER,
) -> WedgeComponents | None:
    """Equilibrium of a trial wedge at angle *theta_deg*.

    Args:
        diameter: Tunnel diameter D (m).
        crown_stress: Effective vertical stress at the crown (kN/m²).
        theta_deg: Inclination of the sliding plane (degrees).
        side_props: Area-weighted side properties (γ', φ', c').
        base_props: Face-window properties of the sliding plane (φ', c').
        k2_model: Lateral pressure coefficient model.
        pv_model: Vertical stress distribution model for side shear.

    Returns:
        :class:`WedgeComponents`, or ``None`` when the angle is outside
        (0.1°, 89.9°), the diameter or the effective unit weight is not
        positive.
    """
    if theta_deg <= THETA_MIN or theta_deg >= THETA_MAX:
        return None
    if diameter <= 0:
        return None
    gamma = side_props.gamma_eff
    if gamma <= 0:
        return None

    D = diameter
    theta = np.radians(theta_deg)
    tan_theta = np.tan(theta)
    tan_phi_side = np.tan(np.radians(side_props.phi))
    tan_phi_base = np.tan(np.radians(base_props.phi))

    K2, ka = lateral_coefficient(side_props.phi, k2_model)

    T_C = side_props.c * D**2 / (2.0 * tan_theta)
    T_R2 = D**3 * gamma / (6.0 * tan_theta)
    if VerticalStressModel.coerce(pv_model) is VerticalStressModel.KIRSCH_KOLYMBAS:
        T_R1 = D**2 * crown_stress / (2.0 * tan_theta)
    else:
        T_R1 = D**2 * crown_stress / (3.0 * tan_theta)
    T_R = K2 * tan_phi_side * (T_R1 + T_R2)
    T = T_R + T_C

    G = 0.5 * D**3 * gamma / tan_theta
    Pv = D**2 * crown_stress / tan_theta
    C_base = base_props.c * D**2 / np.sin(theta)

    numerator = (G + Pv) * (np.sin(theta) - np.cos(theta) * tan_phi_base) - 2.0 * T - C_base
    denominator = np.cos(theta) + np.sin(theta) * tan_phi_base
    Ere = 0.0 if abs(denominator) < 1e-9 else numerator / denominator

    return WedgeComponents(
        theta=float(theta_deg),
        Ere=float(max(Ere, 0.0)),
        G=float(G),
        Pv=float(Pv),
        T=float(T),
        T_R=float(T_R),
        T_C=float(T_C),
        C_base=float(C_base),
        K2=K2,
        ka=ka,
        phi_side=side_props.phi,
        c_side=side_props.c,
        phi_base=base_props.phi,
        c_base=base_props.c,
    )
