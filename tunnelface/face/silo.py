"""Silo (Janssen) reduction of the vertical stress at the tunnel crown.

The soil column above the crown is treated as a vertical silo of
half-width b₁ (Terzaghi).  Shear on the silo walls carries part of the
overburden (arching), so the vertical stress reaching the crown is

    σ'_v = σ_s · e^(−λ h₁ / b₁) + (γ' b₁ − c') / λ · (1 − e^(−λ h₁ / b₁))

with λ = K₁ tan φ'.  Only the lowest ``h₁ = min(t_crown, 5 b₁)`` of the
column is treated as a silo; the soil above it (height h₂) acts as an
additional surcharge.

References
----------
- DAUB (2016), *Recommendations for face support pressure calculations
  for shield tunnelling in soft ground*.
- Terzaghi (1943), *Theoretical Soil Mechanics*, Wiley.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from tunnelface.soil.averaging import (
    AveragedProperties,
    average_properties,
    face_friction_angle,
)
from tunnelface.soil.profile import LayerSpec, SoilProfile, as_layers

logger = logging.getLogger(__name__)

#: Effective silo height cap as a multiple of b₁.
HEIGHT_LIMIT_FACTOR = 5.0


@dataclass(frozen=True)
class SiloResult:
    """Outcome of a silo stress calculation.

    Attributes:
        sigma_v: Reduced effective vertical stress at the crown (kN/m²).
        B: Silo half-width b₁ (m).
        h1: Effective silo height (m).
        h2: Height of soil treated as surcharge above the silo (m).
        lam: Decay parameter λ = K₁ tan φ'_silo.
        surcharge: Surcharge at the top of h₁ (kN/m²).
        user_surcharge: Surface surcharge supplied by the caller (kN/m²).
        h_limit: Height cap 5 b₁ (m).
        phi_face: Friction angle over the face used for b₁ (degrees).
        props: Soil properties averaged over h₁.
    """

    sigma_v: float
    B: float = 0.0
    h1: float = 0.0
    h2: float = 0.0
    lam: float = 0.0
    surcharge: float = 0.0
    user_surcharge: float = 0.0
    h_limit: float = 0.0
    phi_face: float = 0.0
    props: AveragedProperties = field(default_factory=AveragedProperties)

    def remaining_load(self, unreduced_sigma_v: float) -> float:
        """Fraction of the unreduced crown stress transmitted by the silo."""
        if unreduced_sigma_v <= 1e-6:
            return 0.0
        return self.sigma_v / unreduced_sigma_v


def terzaghi_half_width(diameter: float, phi_face: float) -> float:
    """b₁ = r / tan((45° + φ'/2) / 2)."""
    theta = np.radians(45.0 + phi_face / 2.0)
    return float(0.5 * diameter / np.tan(theta / 2.0))


def janssen_stress(
    surcharge: float,
    gamma_eff: float,
    c: float,
    phi: float,
    height: float,
    B: float,
    K1: float,
) -> tuple[float, float]:
    """Janssen vertical stress at the bottom of a silo of given *height*.

    Falls back to the linear no-arching estimate
    ``σ_s + (γ' − c/B) · h`` when λ or *B* vanish.

    Returns:
        ``(sigma_v, lam)``.
    """
    lam = float(K1 * np.tan(np.radians(phi)))
    if abs(lam) < 1e-9 or B < 1e-6:
        logger.debug("Silo without arching (lambda=%.3g, B=%.3g)", lam, B)
        return surcharge + (gamma_eff - c / max(B, 1e-6)) * height, lam
    decay = float(np.exp(-lam * height / B))
    sigma = surcharge * decay + (gamma_eff * B - c) / lam * (1.0 - decay)
    return sigma, lam


def silo_effective_stress(
    crown_depth: float,
    surcharge: float,
    water_depth: float,
    layers: SoilProfile | Sequence[LayerSpec],
    diameter: float,
    K1: float = 0.8,
    use_min: bool = False,
) -> SiloResult:
    """Effective vertical stress at the crown using silo theory.

    Args:
        crown_depth: Overburden above the crown t_crown (m).
        surcharge: Surface surcharge σ_s (kN/m²).
        water_depth: Groundwater depth below the surface (m).
        layers: Soil profile.
        diameter: Tunnel diameter D (m).
        K1: Lateral pressure coefficient in the silo.
        use_min: Use lower-bound unit weights.

    Returns:
        :class:`SiloResult`.  For ``t_crown <= 0`` or ``D <= 0`` the
        surcharge is returned unchanged with zero geometry.
    """
    profile = as_layers(layers)
    if crown_depth <= 0 or diameter <= 0:
        return SiloResult(
            sigma_v=surcharge, surcharge=surcharge, user_surcharge=surcharge
        )

    phi_face = face_friction_angle(crown_depth, diameter, profile)
    B = terzaghi_half_width(diameter, phi_face)

    h_limit = HEIGHT_LIMIT_FACTOR * B
    if crown_depth <= h_limit:
        h1, h2 = crown_depth, 0.0
    else:
        h1, h2 = h_limit, crown_depth - h_limit

    silo_surcharge = surcharge
    if h2 > 0:
        upper = average_properties(h2, water_depth, profile, use_min)
        silo_surcharge += upper.gamma_eff * h2

    # Properties are averaged from the surface over the height h1.
    props = average_properties(h1, water_depth, profile, use_min)
    sigma_v, lam = janssen_stress(
        silo_surcharge, props.gamma_eff, props.c, props.phi, h1, B, K1
    )
    return SiloResult(
        sigma_v=sigma_v,
        B=B,
        h1=h1,
        h2=h2,
        lam=lam,
        surcharge=silo_surcharge,
        user_surcharge=surcharge,
        h_limit=h_limit,
        phi_face=phi_face,
        props=props,
    )
