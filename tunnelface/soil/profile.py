"""Layered soil profile definition.

A :class:`SoilProfile` is an ordered, immutable sequence of
:class:`SoilLayer` records measured as depths below the ground surface.
The top of layer *i* is the bottom of layer *i - 1*; the first layer
starts at the surface.  The profile is semi-infinite: depths below the
last layer bottom inherit the last layer's properties.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterator, Mapping, Sequence, Union

#: Unit weight of water (kN/m³).
GAMMA_W = 10.0


class InvalidInputError(ValueError):
    """Raised when a soil profile or configuration is malformed."""


@dataclass(frozen=True)
class SoilLayer:
    """Material properties of one soil layer.

    Args:
        name: Layer label.
        depth_bottom: Depth of the layer bottom below the surface (m).
        gamma_max: Upper-bound bulk unit weight above the water table (kN/m³).
        gamma_prime_max: Upper-bound submerged unit weight below the
            water table (kN/m³).
        phi: Effective friction angle φ' (degrees).
        c: Effective cohesion c' (kN/m²).
        gamma_min: Lower-bound bulk unit weight.  Defaults to
            ``gamma_max`` when not given.
        gamma_prime_min: Lower-bound submerged unit weight.  Defaults to
            ``gamma_prime_max`` when not given.
    """

    name: str
    depth_bottom: float
    gamma_max: float
    gamma_prime_max: float
    phi: float
    c: float = 0.0
    gamma_min: float | None = None
    gamma_prime_min: float | None = None

    def unit_weights(self, use_min: bool = False) -> tuple[float, float]:
        """Return ``(gamma, gamma_prime)`` for the requested bound.

        Lower-bound values that are unset (or zero) fall back to the
        upper-bound values.
        """
        if not use_min:
            return self.gamma_max, self.gamma_prime_max
        return (
            self.gamma_min or self.gamma_max,
            self.gamma_prime_min or self.gamma_prime_max,
        )

    def effective_unit_weight(
        self, below_water: bool, use_min: bool = False
    ) -> float:
        gamma, gamma_prime = self.unit_weights(use_min)
        return gamma_prime if below_water else gamma


LayerSpec = Union[SoilLayer, Mapping[str, Any]]


class SoilProfile:
    """Ordered stratigraphy of horizontal soil layers.

    Args:
        layers: Layers from top to bottom.  Each may be a
            :class:`SoilLayer` or a dict with keys ``name``, ``depth``
            (or ``depth_bottom``), ``gamma_max``, ``gamma_min``,
            ``gamma_prime_max``, ``gamma_prime_min``, ``phi`` and ``c``.

    Raises:
        InvalidInputError: If the sequence is empty, the layer bottoms
            are not strictly increasing, or a property is out of range.

    Example::

        profile = SoilProfile([
            {"name": "Sand", "depth": 5, "gamma_max": 18, "gamma_prime_max": 8,
             "phi": 30, "c": 0},
            {"name": "Clay", "depth": 15, "gamma_max": 19, "gamma_prime_max": 9,
             "phi": 32, "c": 5},
        ])
    """

    def __init__(self, layers: Sequence[LayerSpec]) -> None:
        self._layers: tuple[SoilLayer, ...] = tuple(
            self._to_layer(lay) for lay in layers
        )
        self._validate()

    @staticmethod
    def _to_layer(spec: LayerSpec) -> SoilLayer:
        if isinstance(spec, SoilLayer):
            return spec
        try:
            depth = spec["depth"] if "depth" in spec else spec["depth_bottom"]
            gamma_min = spec.get("gamma_min")
            gamma_prime_min = spec.get("gamma_prime_min")
            return SoilLayer(
                name=str(spec.get("name", "")),
                depth_bottom=float(depth),
                gamma_max=float(spec["gamma_max"]),
                gamma_prime_max=float(spec["gamma_prime_max"]),
                phi=float(spec.get("phi", 0.0)),
                c=float(spec.get("c", 0.0)),
                gamma_min=float(gamma_min) if gamma_min is not None else None,
                gamma_prime_min=(
                    float(gamma_prime_min) if gamma_prime_min is not None else None
                ),
            )
        except KeyError as exc:
            raise InvalidInputError(f"Soil layer is missing key {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Invalid soil layer {spec!r}: {exc}") from exc

    def _validate(self) -> None:
        if not self._layers:
            raise InvalidInputError("A soil profile requires at least one layer.")
        previous = 0.0
        for i, lay in enumerate(self._layers):
            if lay.depth_bottom <= previous:
                raise InvalidInputError(
                    f"Layer {i} ({lay.name!r}): depth_bottom={lay.depth_bottom} "
                    f"must be greater than {previous}."
                )
            previous = lay.depth_bottom
            weights = [lay.gamma_max, lay.gamma_prime_max, lay.c]
            weights += [w for w in (lay.gamma_min, lay.gamma_prime_min) if w is not None]
            if any(w < 0 for w in weights):
                raise InvalidInputError(
                    f"Layer {i} ({lay.name!r}): unit weights and cohesion "
                    "must be non-negative."
                )
            if not 0.0 <= lay.phi < 90.0:
                raise InvalidInputError(
                    f"Layer {i} ({lay.name!r}): phi={lay.phi} must lie in [0, 90)."
                )

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[SoilLayer]:
        return iter(self._layers)

    def __getitem__(self, index: int) -> SoilLayer:
        return self._layers[index]

    @property
    def layers(self) -> tuple[SoilLayer, ...]:
        return self._layers

    @property
    def depth(self) -> float:
        """Depth of the deepest defined layer bottom."""
        return self._layers[-1].depth_bottom

    def layer_top(self, index: int) -> float:
        """Depth of the top of layer *index*."""
        return 0.0 if index == 0 else self._layers[index - 1].depth_bottom

    def layer_at(self, depth: float) -> SoilLayer:
        """Return the layer whose depth range contains *depth*.

        Depths below the profile return the last layer.
        """
        for lay in self._layers:
            if depth <= lay.depth_bottom:
                return lay
        return self._layers[-1]

    # ------------------------------------------------------------------
    # Editing (returns new profiles)
    # ------------------------------------------------------------------

    def with_layer(self, layer: LayerSpec | None = None) -> SoilProfile:
        """Return a new profile with *layer* appended.

        Without an explicit layer, the last layer's properties are
        repeated 5 m deeper.
        """
        if layer is None:
            last = self._layers[-1]
            layer = replace(last, name="New Layer", depth_bottom=last.depth_bottom + 5.0)
        return SoilProfile([*self._layers, layer])

    def without_layer(self, index: int) -> SoilProfile:
        """Return a new profile with layer *index* removed.

        The last remaining layer cannot be removed.
        """
        if len(self._layers) <= 1:
            raise InvalidInputError("Cannot remove the only layer of a profile.")
        layers = list(self._layers)
        del layers[index]
        return SoilProfile(layers)

    def __repr__(self) -> str:
        names = [lay.name for lay in self._layers]
        return f"SoilProfile(layers={names})"


def as_layers(layers: SoilProfile | Sequence[LayerSpec]) -> SoilProfile:
    """Coerce *layers* into a validated :class:`SoilProfile`."""
    if isinstance(layers, SoilProfile):
        return layers
    return SoilProfile(layers)


def water_pressure(
    depth: float, water_depth: float, gamma_w: float = GAMMA_W
) -> float:
    """Hydrostatic pore pressure u = γ_w · max(0, z − h_w)."""
    return max(0.0, depth - water_depth) * gamma_w
