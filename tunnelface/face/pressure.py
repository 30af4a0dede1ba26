"""Support pressure distributions for the three face-support scenarios.

no lowering
    Face fully supported by slurry of unit weight γ_S; the support
    pressure increases linearly with depth.
full lowering
    Slurry level lowered below the invert; compressed air gives a
    constant support pressure over the face.
partial lowering
    Slurry fills the lower part of the face, compressed air the rest;
    the pressure is constant above the slurry surface and increases
    linearly inside the slurry.

Each scenario returns the minimum crown pressure (the largest of its
stability and water-ingress requirements), the operational pressure
(minimum + ΔP) and profiles sampled from crown to invert.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from tunnelface.soil.profile import GAMMA_W, water_pressure

#: Number of depth samples between crown and invert.
N_SAMPLES = 51

#: Tolerance for reporting which requirement governs.
GOVERNING_TOL = 0.01

STABILITY = "stability"
WATER_CROWN = "water_crown"
WATER_INVERT = "water_invert"
MINIMUM = "minimum"


@dataclass(frozen=True)
class IngressCheck:
    """Water ingress check at one level of the face.

    Attributes:
        required: Factored water pressure η_W · u (kN/m²).
        unfactored_water: Water pressure u (kN/m²).
        provided: Minimum support pressure at that level (kN/m²).
        eta: provided / required, ``inf`` when nothing is required.
        passed: ``eta >= 1``.
    """

    required: float
    unfactored_water: float
    provided: float
    eta: float
    passed: bool


def ingress_check(unfactored_water: float, eta_W: float, provided: float) -> IngressCheck:
    required = unfactored_water * eta_W
    eta = provided / required if required > 1e-6 else float("inf")
    return IngressCheck(
        required=required,
        unfactored_water=unfactored_water,
        provided=provided,
        eta=eta,
        passed=eta >= 1.0,
    )


@dataclass
class PressureProfile:
    """Support pressure profile of one scenario.

    Attributes:
        scenario: ``"no_lowering"``, ``"full_lowering"`` or
            ``"partial_lowering"``.
        s_min: Minimum required support pressure at the crown (kN/m²).
        s_operational: s_min + ΔP (kN/m²).
        candidates: Crown pressure required by each constraint.
        governing: Name of the constraint matching ``s_min``.
        depths: Sample depths from crown to invert (m).
        water: Unfactored water pressure (kN/m²).
        earth: Average earth pressure E_ci / A_ci (kN/m²).
        support_min: Minimum support pressure (kN/m²).
        support_operational: Operational support pressure (kN/m²).
        ingress_crown: Water ingress check at the crown.
        ingress_invert: Water ingress check at the invert.
    """

    scenario: str
    s_min: float
    s_operational: float
    candidates: dict[str, float]
    governing: str
    depths: np.ndarray
    water: np.ndarray
    earth: np.ndarray
    support_min: np.ndarray
    support_operational: np.ndarray
    ingress_crown: IngressCheck | None = field(default=None)
    ingress_invert: IngressCheck | None = field(default=None)


def _governing(value: float, order: list[tuple[str, float]], default: str) -> str:
    for name, candidate in order:
        if abs(value - candidate) < GOVERNING_TOL:
            return name
    return default


def _face_samples(
    diameter: float, crown_depth: float, water_depth: float, gamma_w: float
) -> tuple[np.ndarray, np.ndarray]:
    depths = np.linspace(crown_depth, crown_depth + diameter, N_SAMPLES)
    water = np.maximum(0.0, depths - water_depth) * gamma_w
    return depths, water


def _build(
    scenario: str,
    s_min: float,
    delta_P: float,
    candidates: dict[str, float],
    governing: str,
    depths: np.ndarray,
    water: np.ndarray,
    earth: float,
    increment: np.ndarray,
    eta_W: float,
) -> PressureProfile:
    support_min = s_min + increment
    s_operational = s_min + delta_P
    return PressureProfile(
        scenario=scenario,
        s_min=s_min,
        s_operational=s_operational,
        candidates=candidates,
        governing=governing,
        depths=depths,
        water=water,
        earth=np.full_like(depths, earth),
        support_min=support_min,
        support_operational=s_operational + increment,
        ingress_crown=ingress_check(float(water[0]), eta_W, float(support_min[0])),
        ingress_invert=ingress_check(float(water[-1]), eta_W, float(support_min[-1])),
    )


def pressure_profile_no_lowering(
    diameter: float,
    crown_depth: float,
    water_depth: float,
    S_ci: float,
    E_max_ci: float,
    gamma_slurry: float,
    eta_W: float,
    delta_P: float = 0.0,
    gamma_w: float = GAMMA_W,
) -> PressureProfile:
    """Slurry-supported face.

    s_min = max(S_ci / A − γ_S D/2,  η_W u_crown,  η_W u_invert − γ_S D)
    """
    diameter = max(diameter, 0.0)
    area = np.pi * diameter**2 / 4.0
    stability = S_ci / area - gamma_slurry * diameter / 2.0 if area > 0 else 0.0
    water_crown = water_pressure(crown_depth, water_depth, gamma_w) * eta_W
    water_invert = (
        water_pressure(crown_depth + diameter, water_depth, gamma_w) * eta_W
        - gamma_slurry * diameter
    )
    s_min = max(stability, water_crown, water_invert)
    governing = _governing(
        s_min, [(STABILITY, stability), (WATER_INVERT, water_invert)], WATER_CROWN
    )

    depths, water = _face_samples(diameter, crown_depth, water_depth, gamma_w)
    return _build(
        "no_lowering",
        s_min,
        delta_P,
        {STABILITY: stability, WATER_CROWN: water_crown, WATER_INVERT: water_invert},
        governing,
        depths,
        water,
        E_max_ci / area if area > 0 else 0.0,
        gamma_slurry * (depths - crown_depth),
        eta_W,
    )


def pressure_profile_full_lowering(
    diameter: float,
    crown_depth: float,
    water_depth: float,
    S_ci: float,
    E_max_ci: float,
    eta_W: float,
    delta_P: float = 0.0,
    gamma_w: float = GAMMA_W,
) -> PressureProfile:
    """Air-supported face with constant pressure.

    s_min = max(S_ci / A,  η_W u_invert)
    """
    diameter = max(diameter, 0.0)
    area = np.pi * diameter**2 / 4.0
    stability = S_ci / area if area > 0 else 0.0
    water_invert = water_pressure(crown_depth + diameter, water_depth, gamma_w) * eta_W
    s_min = max(stability, water_invert)
    governing = _governing(s_min, [(STABILITY, stability)], WATER_INVERT)

    depths, water = _face_samples(diameter, crown_depth, water_depth, gamma_w)
    return _build(
        "full_lowering",
        s_min,
        delta_P,
        {STABILITY: stability, WATER_INVERT: water_invert},
        governing,
        depths,
        water,
        E_max_ci / area if area > 0 else 0.0,
        np.zeros_like(depths),
        eta_W,
    )


def pressure_profile_partial_lowering(
    diameter: float,
    crown_depth: float,
    water_depth: float,
    S_ci: float,
    E_max_ci: float,
    eta_W: float,
    delta_P: float = 0.0,
    slurry_level: float = 0.5,
    gamma_slurry: float = 11.5,
    gamma_w: float = GAMMA_W,
) -> PressureProfile:
    """Face with slurry in the lower part and air above.

    With a slurry column of height L = slurry_level · D above the invert:

    s_min = max(0,  η_W u_invert − γ_S L,  S_ci / A − γ_S L / 2)

    Args:
        slurry_level: Slurry column height as a fraction of D.
        gamma_slurry: Slurry unit weight γ_S,part (kN/m³).
    """
    diameter = max(diameter, 0.0)
    area = np.pi * diameter**2 / 4.0
    L = diameter * slurry_level
    water_invert = (
        water_pressure(crown_depth + diameter, water_depth, gamma_w) * eta_W
        - gamma_slurry * L
    )
    stability = S_ci / area - gamma_slurry * L / 2.0 if area > 0 else 0.0
    s_min = max(water_invert, stability, 0.0)
    governing = _governing(
        s_min, [(WATER_INVERT, water_invert), (STABILITY, stability)], MINIMUM
    )

    depths, water = _face_samples(diameter, crown_depth, water_depth, gamma_w)
    above_invert = crown_depth + diameter - depths
    return _build(
        "partial_lowering",
        s_min,
        delta_P,
        {STABILITY: stability, WATER_INVERT: water_invert, MINIMUM: 0.0},
        governing,
        depths,
        water,
        E_max_ci / area if area > 0 else 0.0,
        gamma_slurry * np.maximum(0.0, L - above_invert),
        eta_W,
    )
