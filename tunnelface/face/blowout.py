"""Blow-out check at the tunnel crown.

The support pressure at the crown must not exceed 90 % of the minimum
total vertical stress there, computed with lower-bound unit weights and
permanent surcharge only.
"""

from __future__ import annotations

from dataclasses import dataclass

from tunnelface.soil.profile import GAMMA_W, water_pressure

#: Fraction of the minimum total overburden usable as support pressure.
BLOWOUT_FACTOR = 0.9


@dataclass(frozen=True)
class BlowoutResult:
    """Outcome of a blow-out check.

    Attributes:
        sigma_v_min: Minimum total vertical stress at the crown (kN/m²).
        allowable: Maximum allowable crown support pressure (kN/m²).
        required: Crown pressure to be verified (kN/m²).
        eta: allowable / required, ``inf`` when ``required <= 0``.
        passed: ``allowable >= required``.
    """

    sigma_v_min: float
    allowable: float
    required: float
    eta: float
    passed: bool


def blowout_check(
    crown_depth: float,
    min_crown_stress: float,
    water_depth: float,
    support_pressure: float,
    delta_P: float = 0.0,
    gamma_w: float = GAMMA_W,
) -> BlowoutResult:
    """Compare the allowable crown pressure with the operational pressure.

    Args:
        crown_depth: Depth of the crown t_crown (m).
        min_crown_stress: σ'_v,crown,min from lower-bound unit weights
            and permanent surcharge (kN/m²).
        water_depth: Groundwater depth below the surface (m).
        support_pressure: Minimum required crown support pressure of the
            scenario (kN/m²).
        delta_P: Support pressure deviation; the pressure verified is
            ``support_pressure + delta_P``.

    Returns:
        :class:`BlowoutResult`.
    """
    sigma_v_min = min_crown_stress + water_pressure(crown_depth, water_depth, gamma_w)
    allowable = BLOWOUT_FACTOR * sigma_v_min
    required = support_pressure + delta_P
    eta = allowable / required if required > 0 else float("inf")
    return BlowoutResult(
        sigma_v_min=sigma_v_min,
        allowable=allowable,
        required=required,
        eta=eta,
        passed=allowable >= required,
    )
