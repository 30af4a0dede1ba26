"""Complete face support pressure calculation.

:func:`analyze_face_support` runs one calculation pass for a soil
profile and a :class:`FaceSupportConfig`:

1. side (wedge) and base (prism) property averages over the face,
2. crown stress with upper-bound unit weights and total surcharge,
   optionally reduced by silo theory,
3. crown stress with lower-bound unit weights and permanent surcharge,
4. critical sliding angle search,
5. earth and water forces on the circular face,
6. the three support pressure scenarios and a blow-out check for each.

Example::

    from tunnelface import SoilProfile, FaceSupportConfig, analyze_face_support

    profile = SoilProfile([
        {"name": "Sand", "depth": 5, "gamma_max": 18, "gamma_min": 17,
         "gamma_prime_max": 8, "gamma_prime_min": 7, "phi": 30, "c": 0},
        {"name": "Clay", "depth": 30, "gamma_max": 19, "gamma_min": 18,
         "gamma_prime_max": 9, "gamma_prime_min": 8, "phi": 32, "c": 5},
    ])
    config = FaceSupportConfig(diameter=10, crown_depth=15, water_depth=5)
    result = analyze_face_support(profile, config)
    print(result.wedge.theta_crit, result.no_lowering.s_operational)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from tunnelface.face.blowout import BlowoutResult, blowout_check
from tunnelface.face.forces import FaceForces, aggregate_forces
from tunnelface.face.pressure import (
    PressureProfile,
    pressure_profile_full_lowering,
    pressure_profile_no_lowering,
    pressure_profile_partial_lowering,
)
from tunnelface.face.search import CriticalWedge, critical_wedge
from tunnelface.face.silo import SiloResult, silo_effective_stress
from tunnelface.face.wedge import K2Model, VerticalStressModel
from tunnelface.soil.averaging import AveragedProperties, prism_averages, wedge_averages
from tunnelface.soil.profile import (
    GAMMA_W,
    InvalidInputError,
    LayerSpec,
    SoilProfile,
    as_layers,
)
from tunnelface.soil.stress import vertical_effective_stress

logger = logging.getLogger(__name__)

# Flat input keys used by the tabular import format.
_KEY_ALIASES = {
    "D": "diameter",
    "t_crown": "crown_depth",
    "h_w": "water_depth",
    "sigma_s_p": "surcharge_permanent",
    "sigma_s_t": "surcharge_traffic",
    "gamma_S": "gamma_slurry",
    "gamma_S_partial": "gamma_slurry_partial",
    "sigma_v_model": "vertical_stress_model",
}


@dataclass
class FaceSupportConfig:
    """Geometry, loading and safety configuration of a calculation.

    Args:
        diameter: Tunnel diameter D (m).
        crown_depth: Overburden above the crown t_crown (m).
        water_depth: Groundwater depth below the surface h_w (m).
        surcharge_permanent: Permanent surface surcharge (kN/m²).
        surcharge_traffic: Traffic surface surcharge (kN/m²).
        eta_E: Partial safety factor on the earth force.
        eta_W: Partial safety factor on the water force.
        delta_P: Support pressure deviation ΔP (kN/m²).
        apply_silo: Reduce the crown stress with silo theory.
        silo_k1: Lateral pressure coefficient K₁ in the silo.
        k2_model: Lateral pressure coefficient model on the wedge sides.
        vertical_stress_model: Crown stress distribution on the sides.
        gamma_slurry: Slurry unit weight, no lowering (kN/m³).
        slurry_level: Slurry height as a fraction of D, partial lowering.
        gamma_slurry_partial: Slurry unit weight, partial lowering (kN/m³).
        gamma_w: Unit weight of water (kN/m³).
    """

    diameter: float = 10.0
    crown_depth: float = 15.0
    water_depth: float = 5.0
    surcharge_permanent: float = 0.0
    surcharge_traffic: float = 0.0
    eta_E: float = 1.5
    eta_W: float = 1.05
    delta_P: float = 0.0
    apply_silo: bool = False
    silo_k1: float = 0.8
    k2_model: K2Model | str = K2Model.JANCSECZ_STEINER
    vertical_stress_model: VerticalStressModel | str = VerticalStressModel.JANCSECZ_STEINER
    gamma_slurry: float = 10.0
    slurry_level: float = 0.5
    gamma_slurry_partial: float = 11.5
    gamma_w: float = GAMMA_W

    def __post_init__(self) -> None:
        self.k2_model = K2Model.coerce(self.k2_model)
        self.vertical_stress_model = VerticalStressModel.coerce(
            self.vertical_stress_model
        )

    @property
    def surcharge_total(self) -> float:
        return self.surcharge_permanent + self.surcharge_traffic

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> FaceSupportConfig:
        """Build a configuration from flat key/value pairs.

        Accepts field names as well as the short keys of the tabular
        input format (``D``, ``t_crown``, ``h_w``, ``sigma_s_p``, …).
        ``slurry_level_partial`` is given in percent of D.  Values may
        be strings; unknown keys are ignored.

        Raises:
            InvalidInputError: If a value cannot be converted.
        """
        types = {f.name: f.type for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, raw in values.items():
            if key == "slurry_level_partial":
                kwargs["slurry_level"] = _to_float(key, raw) / 100.0
                continue
            name = _KEY_ALIASES.get(key, key)
            if name not in types:
                continue
            if name == "apply_silo":
                kwargs[name] = _to_bool(raw)
            elif name in ("k2_model", "vertical_stress_model"):
                kwargs[name] = raw
            else:
                kwargs[name] = _to_float(key, raw)
        return cls(**kwargs)


def _to_float(key: str, raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid value for {key!r}: {raw!r}") from exc


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "1", "yes", "on")
    return bool(raw)


@dataclass
class FaceSupportResult:
    """All records of one calculation pass.

    Attributes:
        config: Configuration used.
        side_props: Area-weighted wedge side properties.
        base_props: Face-window base properties.
        crown_stress_unreduced: σ'_v,crown,max without silo reduction.
        crown_stress: σ'_v,crown,max used for the wedge.
        crown_stress_min: σ'_v,crown,min for the blow-out check.
        silo: Silo result when silo theory is applied.
        wedge: Critical wedge search result.
        forces: Face forces.
        no_lowering, full_lowering, partial_lowering: Scenario profiles.
        blowout: Blow-out check per scenario name.
    """

    config: FaceSupportConfig
    side_props: AveragedProperties
    base_props: AveragedProperties
    crown_stress_unreduced: float
    crown_stress: float
    crown_stress_min: float
    silo: SiloResult | None
    wedge: CriticalWedge
    forces: FaceForces
    no_lowering: PressureProfile
    full_lowering: PressureProfile
    partial_lowering: PressureProfile
    blowout: dict[str, BlowoutResult] = field(default_factory=dict)

    @property
    def scenarios(self) -> dict[str, PressureProfile]:
        return {
            p.scenario: p
            for p in (self.no_lowering, self.full_lowering, self.partial_lowering)
        }


def analyze_face_support(
    layers: SoilProfile | Sequence[LayerSpec],
    config: FaceSupportConfig | None = None,
) -> FaceSupportResult:
    """Run a complete face support pressure calculation.

    Args:
        layers: Soil profile (or a sequence of layer records).
        config: Calculation configuration; defaults are used if omitted.

    Returns:
        :class:`FaceSupportResult`.

    Raises:
        InvalidInputError: If the soil profile is malformed.
    """
    profile = as_layers(layers)
    cfg = config if config is not None else FaceSupportConfig()
    D = cfg.diameter
    t_crown = cfg.crown_depth
    h_w = cfg.water_depth

    side_props = wedge_averages(t_crown, D, h_w, profile)
    base_props = prism_averages(t_crown, D, profile)

    crown_unreduced = vertical_effective_stress(
        t_crown, cfg.surcharge_total, h_w, profile
    )
    silo = None
    crown_stress = crown_unreduced
    if cfg.apply_silo:
        silo = silo_effective_stress(
            t_crown, cfg.surcharge_total, h_w, profile, D, cfg.silo_k1
        )
        crown_stress = silo.sigma_v
    crown_min = vertical_effective_stress(
        t_crown, cfg.surcharge_permanent, h_w, profile, use_min=True
    )

    wedge = critical_wedge(
        D, crown_stress, side_props, base_props,
        cfg.k2_model, cfg.vertical_stress_model,
    )
    forces = aggregate_forces(
        wedge.Ere_max, D, t_crown, h_w, cfg.eta_E, cfg.eta_W, cfg.gamma_w
    )

    no_lowering = pressure_profile_no_lowering(
        D, t_crown, h_w, forces.S_ci, forces.E_max_ci,
        cfg.gamma_slurry, cfg.eta_W, cfg.delta_P, cfg.gamma_w,
    )
    full_lowering = pressure_profile_full_lowering(
        D, t_crown, h_w, forces.S_ci, forces.E_max_ci,
        cfg.eta_W, cfg.delta_P, cfg.gamma_w,
    )
    partial_lowering = pressure_profile_partial_lowering(
        D, t_crown, h_w, forces.S_ci, forces.E_max_ci,
        cfg.eta_W, cfg.delta_P, cfg.slurry_level, cfg.gamma_slurry_partial,
        cfg.gamma_w,
    )

    blowout = {
        p.scenario: blowout_check(
            t_crown, crown_min, h_w, p.s_min, cfg.delta_P, cfg.gamma_w
        )
        for p in (no_lowering, full_lowering, partial_lowering)
    }

    logger.info(
        "Critical angle %d deg, E_re=%.2f kN, S_ci=%.2f kN; "
        "s_crown,min: no lowering %.2f, full %.2f, partial %.2f kN/m2",
        wedge.theta_crit, wedge.Ere_max, forces.S_ci,
        no_lowering.s_min, full_lowering.s_min, partial_lowering.s_min,
    )
    failed = [name for name, check in blowout.items() if not check.passed]
    if failed:
        logger.info("Blow-out check not satisfied for: %s", ", ".join(failed))

    return FaceSupportResult(
        config=cfg,
        side_props=side_props,
        base_props=base_props,
        crown_stress_unreduced=crown_unreduced,
        crown_stress=crown_stress,
        crown_stress_min=crown_min,
        silo=silo,
        wedge=wedge,
        forces=forces,
        no_lowering=no_lowering,
        full_lowering=full_lowering,
        partial_lowering=partial_lowering,
        blowout=blowout,
    )
