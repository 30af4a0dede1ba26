"""Geostatic effective vertical stress in a layered profile."""

from __future__ import annotations

from typing import Sequence

from tunnelface.soil.averaging import layer_slices, split_at_water
from tunnelface.soil.profile import LayerSpec, SoilProfile, as_layers


def vertical_effective_stress(
    depth: float,
    surcharge: float,
    water_depth: float,
    layers: SoilProfile | Sequence[LayerSpec],
    use_min: bool = False,
) -> float:
    """Effective vertical stress σ'_v at *depth*.

    σ'_v = σ_s + Σ γ_i · Δz_i(above h_w) + Σ γ'_i · Δz_i(below h_w)

    Args:
        depth: Depth below the surface (m).
        surcharge: Surface surcharge σ_s (kN/m²).
        water_depth: Groundwater depth below the surface (m).
        layers: Soil profile.
        use_min: Use lower-bound unit weights (stabilizing estimate)
            instead of upper-bound ones (destabilizing estimate).

    Returns:
        σ'_v in kN/m².  Equal to *surcharge* for ``depth <= 0``.
    """
    profile = as_layers(layers)
    sigma = surcharge
    if depth <= 0:
        return sigma

    for lay, lo, hi in layer_slices(profile, 0.0, depth):
        above, below = split_at_water(lo, hi, water_depth)
        gamma, gamma_prime = lay.unit_weights(use_min)
        sigma += gamma * above + gamma_prime * below
    return sigma
