"""Weighted averaging of soil properties over depth windows.

Three distinct weighting rules are used by the face-stability model and
are kept as separate operations:

average_properties
    Soil column from the surface down to a target depth, weighted by
    layer thickness.  Used for the silo column and surcharge heights.
prism_averages
    Face window ``[t_crown, t_crown + D]``, weighted by layer thickness.
    Gives the base properties of the sliding wedge and the face friction
    angle of the silo.
wedge_averages
    Face window weighted by the area of a triangle whose width decreases
    linearly from *D* at the crown to zero at the invert.  Gives the side
    properties of the sliding wedge.

All windows walk the layers from the surface, stop as soon as the window
bottom is reached, and extend the last layer below the profile.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from tunnelface.soil.profile import LayerSpec, SoilLayer, SoilProfile, as_layers

logger = logging.getLogger(__name__)

#: Accumulated measure below which a window is considered empty.
MIN_MEASURE = 1e-6


@dataclass(frozen=True)
class AveragedProperties:
    """Soil properties averaged over a window.

    Attributes:
        gamma_eff: Effective unit weight (bulk above, submerged below the
            water table) (kN/m³).  Zero for windows that do not average it.
        phi: Friction angle (degrees).
        c: Cohesion (kN/m²).
        top: Window top depth (m).
        bottom: Window bottom depth (m).
    """

    gamma_eff: float = 0.0
    phi: float = 0.0
    c: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    @classmethod
    def zero(cls, top: float = 0.0, bottom: float = 0.0) -> AveragedProperties:
        return cls(top=top, bottom=bottom)


# ======================================================================
# Layer traversal
# ======================================================================


def layer_slices(
    profile: SoilProfile,
    top: float,
    bottom: float,
) -> Iterator[tuple[SoilLayer, float, float]]:
    """Yield ``(layer, slice_top, slice_bottom)`` for a depth window.

    Layers are visited from the surface down.  The traversal stops once
    the window bottom lies within the current layer; any part of the
    window below the profile is attributed to the last layer.
    """
    layer_top = 0.0
    for lay in profile:
        lo = max(top, layer_top)
        hi = min(bottom, lay.depth_bottom)
        if hi > lo:
            yield lay, lo, hi
        layer_top = lay.depth_bottom
        if bottom <= layer_top:
            return
    lo = max(top, layer_top)
    if bottom > lo:
        yield profile[-1], lo, bottom


def split_at_water(
    top: float, bottom: float, water_depth: float
) -> tuple[float, float]:
    """Split the interval ``[top, bottom]`` at the water table.

    Returns:
        ``(above, below)`` thicknesses; they sum to ``bottom - top``.
    """
    above = max(0.0, min(bottom, water_depth) - top)
    below = max(0.0, bottom - max(top, water_depth))
    return above, below


def _center_fallback(
    profile: SoilProfile,
    top: float,
    bottom: float,
    water_depth: float,
    with_gamma: bool,
) -> AveragedProperties:
    center = 0.5 * (top + bottom)
    lay = profile.layer_at(center)
    logger.debug(
        "Empty averaging window [%.3f, %.3f]; using layer %r at depth %.3f",
        top, bottom, lay.name, center,
    )
    gamma = lay.effective_unit_weight(center > water_depth) if with_gamma else 0.0
    return AveragedProperties(
        gamma_eff=gamma, phi=lay.phi, c=lay.c, top=top, bottom=bottom
    )


# ======================================================================
# Column [0, Z]
# ======================================================================


def average_properties(
    target_depth: float,
    water_depth: float,
    layers: SoilProfile | Sequence[LayerSpec],
    use_min: bool = False,
) -> AveragedProperties:
    """Height-weighted average of γ', c and φ from the surface to *target_depth*.

    The bulk unit weight is used above the water table and the
    submerged unit weight below it.

    Args:
        target_depth: Bottom of the soil column (m).
        water_depth: Groundwater depth below the surface (m).
        layers: Soil profile.
        use_min: Use lower-bound unit weights.

    Returns:
        :class:`AveragedProperties`; all zero for ``target_depth <= 0``.
    """
    profile = as_layers(layers)
    if target_depth <= 0:
        return AveragedProperties.zero()

    weighted_gamma = 0.0
    weighted_c = 0.0
    weighted_phi = 0.0
    total = 0.0
    for lay, lo, hi in layer_slices(profile, 0.0, target_depth):
        height = hi - lo
        above, below = split_at_water(lo, hi, water_depth)
        gamma, gamma_prime = lay.unit_weights(use_min)
        weighted_gamma += gamma * above + gamma_prime * below
        weighted_c += lay.c * height
        weighted_phi += lay.phi * height
        total += height

    if total <= 0:
        return AveragedProperties.zero(bottom=target_depth)
    return AveragedProperties(
        gamma_eff=weighted_gamma / total,
        phi=weighted_phi / total,
        c=weighted_c / total,
        top=0.0,
        bottom=target_depth,
    )


# ======================================================================
# Face window [t_crown, t_crown + D]
# ======================================================================


def prism_averages(
    crown_depth: float,
    diameter: float,
    layers: SoilProfile | Sequence[LayerSpec],
) -> AveragedProperties:
    """Height-weighted φ and c over the face height.

    Used for the base of the sliding wedge.  ``gamma_eff`` is not
    averaged and is returned as zero.
    """
    profile = as_layers(layers)
    top = crown_depth
    bottom = crown_depth + diameter

    weighted_phi = 0.0
    weighted_c = 0.0
    total = 0.0
    for lay, lo, hi in layer_slices(profile, top, bottom):
        height = hi - lo
        weighted_phi += lay.phi * height
        weighted_c += lay.c * height
        total += height

    if total < MIN_MEASURE:
        return _center_fallback(profile, top, bottom, 0.0, with_gamma=False)
    return AveragedProperties(
        phi=weighted_phi / total, c=weighted_c / total, top=top, bottom=bottom
    )


def face_friction_angle(
    crown_depth: float,
    diameter: float,
    layers: SoilProfile | Sequence[LayerSpec],
) -> float:
    """Height-weighted friction angle over the face (0 for ``D <= 0``)."""
    if diameter <= 0:
        return 0.0
    return prism_averages(crown_depth, diameter, layers).phi


def _triangle_area(diameter: float, h: float) -> float:
    # Integral of the width (D - h) from the crown down to relative depth h.
    return diameter * h - 0.5 * h * h


def wedge_averages(
    crown_depth: float,
    diameter: float,
    water_depth: float,
    layers: SoilProfile | Sequence[LayerSpec],
) -> AveragedProperties:
    """Area-weighted γ', φ and c over the wedge side face.

    The side face of the wedge is a triangle of height *D* whose width
    tapers from *D* at the crown to zero at the invert; a layer slice
    between relative depths ``h_top`` and ``h_bottom`` contributes the
    area ``A(h_bottom) - A(h_top)`` with ``A(h) = D·h - h²/2``.  Upper
    bound unit weights are used.
    """
    profile = as_layers(layers)
    top = crown_depth
    bottom = crown_depth + diameter
    water_rel = water_depth - crown_depth

    weighted_gamma = 0.0
    weighted_phi = 0.0
    weighted_c = 0.0
    total = 0.0
    for lay, lo, hi in layer_slices(profile, top, bottom):
        h_top = lo - crown_depth
        h_bottom = hi - crown_depth
        area = _triangle_area(diameter, h_bottom) - _triangle_area(diameter, h_top)
        weighted_phi += lay.phi * area
        weighted_c += lay.c * area
        total += area

        above, below = split_at_water(h_top, h_bottom, water_rel)
        if above > 0:
            weighted_gamma += lay.gamma_max * (
                _triangle_area(diameter, h_top + above)
                - _triangle_area(diameter, h_top)
            )
        if below > 0:
            weighted_gamma += lay.gamma_prime_max * (
                _triangle_area(diameter, h_bottom)
                - _triangle_area(diameter, h_bottom - below)
            )

    if total < MIN_MEASURE:
        return _center_fallback(profile, top, bottom, water_depth, with_gamma=True)
    return AveragedProperties(
        gamma_eff=weighted_gamma / total,
        phi=weighted_phi / total,
        c=weighted_c / total,
        top=top,
        bottom=bottom,
    )
