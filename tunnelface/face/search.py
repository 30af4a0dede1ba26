"""Critical sliding angle search.

E_re(θ) is evaluated on a 1° grid from 1° to 89° and the angle with the
largest required support force is retained.  The function is not
guaranteed to be unimodal, so no local refinement is attempted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from tunnelface.face.wedge import (
    K2Model,
    VerticalStressModel,
    WedgeComponents,
    wedge_components,
)
from tunnelface.soil.averaging import AveragedProperties

logger = logging.getLogger(__name__)

#: Trial sliding angles (degrees).
THETA_GRID = np.arange(1, 90)


@dataclass
class CriticalWedge:
    """Result of the critical angle search.

    Attributes:
        theta_crit: Critical sliding angle (degrees), one of 1…89.
        Ere_max: Required support force at the critical angle (kN).
        thetas: Trial angles (degrees).
        curve: E_re for every trial angle; degenerate trials count as 0.
        components: Full force components at the critical angle, or
            ``None`` if that trial was degenerate.
    """

    theta_crit: int
    Ere_max: float
    thetas: np.ndarray
    curve: np.ndarray
    components: WedgeComponents | None = None


def critical_wedge(
    diameter: float,
    crown_stress: float,
    side_props: AveragedProperties,
    base_props: AveragedProperties,
    k2_model: K2Model | str = K2Model.JANCSECZ_STEINER,
    pv_model: VerticalStressModel | str = VerticalStressModel.JANCSECZ_STEINER,
) -> CriticalWedge:
    """Grid search for the sliding angle maximizing E_re.

    Ties keep the smallest angle.

    Args:
        diameter: Tunnel diameter D (m).
        crown_stress: Effective vertical stress at the crown (kN/m²).
        side_props: Area-weighted side properties.
        base_props: Face-window base properties.
        k2_model: Lateral pressure coefficient model.
        pv_model: Vertical stress distribution model.

    Returns:
        :class:`CriticalWedge`.
    """
    k2_model = K2Model.coerce(k2_model)
    pv_model = VerticalStressModel.coerce(pv_model)

    trials = [
        wedge_components(
            diameter, crown_stress, float(theta), side_props, base_props,
            k2_model, pv_model,
        )
        for theta in THETA_GRID
    ]
    curve = np.array([t.Ere if t is not None else 0.0 for t in trials])
    best = int(np.argmax(curve))
    degenerate = sum(t is None for t in trials)
    if degenerate:
        logger.debug("%d of %d trial wedges degenerate", degenerate, len(trials))

    return CriticalWedge(
        theta_crit=int(THETA_GRID[best]),
        Ere_max=float(curve[best]),
        thetas=THETA_GRID.copy(),
        curve=curve,
        components=trials[best],
    )
