"""Tests for the sliding-wedge equilibrium and the critical angle search.

Tests cover:
- Lateral pressure coefficient models and model selection
- Force components of a single trial wedge against hand calculation
- Degenerate angles and soil
- Critical angle grid search
- Reference case D=10, t_crown=15, h_w=5 in homogeneous soil
"""

import logging
import math

import numpy as np
import pytest

from tunnelface.soil.profile import SoilProfile
from tunnelface.soil.averaging import AveragedProperties, prism_averages, wedge_averages
from tunnelface.soil.stress import vertical_effective_stress
from tunnelface.face.wedge import (
    K2Model,
    VerticalStressModel,
    lateral_coefficient,
    wedge_components,
)
from tunnelface.face.search import THETA_GRID, CriticalWedge, critical_wedge


# ======================================================================
# Common test fixtures
# ======================================================================


def _homogeneous():
    return SoilProfile([
        {"name": "Clay", "depth": 100, "gamma_max": 19, "gamma_prime_max": 9,
         "phi": 30, "c": 5},
    ])


def _side():
    return AveragedProperties(gamma_eff=9.0, phi=30.0, c=5.0)


def _base():
    return AveragedProperties(phi=30.0, c=5.0)


def _reference_ere(D, sigma, theta, side, base, K2, divisor=3.0):
    """Hand evaluation of the wedge force balance."""
    t = math.radians(theta)
    tp_s = math.tan(math.radians(side.phi))
    tp_b = math.tan(math.radians(base.phi))
    T_C = side.c * D**2 / (2 * math.tan(t))
    T_R = K2 * tp_s * (
        D**2 * sigma / (divisor * math.tan(t))
        + D**3 * side.gamma_eff / (6 * math.tan(t))
    )
    G = 0.5 * D**3 * side.gamma_eff / math.tan(t)
    Pv = D**2 * sigma / math.tan(t)
    num = (G + Pv) * (math.sin(t) - math.cos(t) * tp_b) - 2 * (T_R + T_C) \
        - base.c * D**2 / math.sin(t)
    den = math.cos(t) + math.sin(t) * tp_b
    return max(num / den, 0.0)


# ======================================================================
# Lateral pressure coefficient
# ======================================================================


class TestLateralCoefficient:
    def test_jancsecz_steiner(self):
        K2, ka = lateral_coefficient(30.0, K2Model.JANCSECZ_STEINER)
        assert ka == pytest.approx(1.0 / 3.0)
        assert K2 == pytest.approx(0.5 * (0.5 + 1.0 / 3.0))

    def test_kirsch_kolymbas(self):
        K2, _ = lateral_coefficient(30.0, K2Model.KIRSCH_KOLYMBAS)
        assert K2 == pytest.approx(0.5)

    def test_anagnostou_kovari(self):
        K2, _ = lateral_coefficient(30.0, "AnagnostouKovari")
        assert K2 == pytest.approx(0.4)

    def test_labels(self):
        assert K2Model.coerce("Jancsecz–Steiner") is K2Model.JANCSECZ_STEINER
        assert K2Model.coerce("kirsch-kolymbas") is K2Model.KIRSCH_KOLYMBAS
        assert K2Model.coerce("ANAGNOSTOU_KOVARI") is K2Model.ANAGNOSTOU_KOVARI
        assert VerticalStressModel.coerce("Kirsch Kolymbas") is VerticalStressModel.KIRSCH_KOLYMBAS
        assert K2Model.coerce("Anagnostou–Kovári") is K2Model.ANAGNOSTOU_KOVARI

    def test_accented_label(self, caplog):
        with caplog.at_level(logging.WARNING, logger="tunnelface"):
            K2, _ = lateral_coefficient(30.0, "Anagnostou–Kovári")
        assert K2 == pytest.approx(0.4)
        assert "Unknown" not in caplog.text

    def test_unknown_model_defaults(self, caplog):
        with caplog.at_level(logging.WARNING, logger="tunnelface"):
            K2, _ = lateral_coefficient(30.0, "Rankine")
        assert K2 == pytest.approx(0.5 * (0.5 + 1.0 / 3.0))
        assert "Rankine" in caplog.text


# ======================================================================
# Single trial wedge
# ======================================================================


class TestWedgeComponents:
    def test_matches_hand_calculation(self):
        K2 = 0.5 * (0.5 + 1.0 / 3.0)
        for theta in (30.0, 45.0, 60.0, 75.0):
            comp = wedge_components(10.0, 185.0, theta, _side(), _base())
            expected = _reference_ere(10.0, 185.0, theta, _side(), _base(), K2)
            assert comp.Ere == pytest.approx(expected)

    def test_components_at_60(self):
        comp = wedge_components(10.0, 185.0, 60.0, _side(), _base())
        tan60 = math.tan(math.radians(60.0))
        assert comp.theta == 60.0
        assert comp.G == pytest.approx(0.5 * 1000 * 9 / tan60)
        assert comp.Pv == pytest.approx(100 * 185 / tan60)
        assert comp.T_C == pytest.approx(5 * 100 / (2 * tan60))
        assert comp.T == pytest.approx(comp.T_R + comp.T_C)
        assert comp.C_base == pytest.approx(5 * 100 / math.sin(math.radians(60.0)))
        assert comp.Ere == pytest.approx(4671.0, rel=1e-3)

    def test_kirsch_kolymbas_stress_model(self):
        K2 = 0.5 * (0.5 + 1.0 / 3.0)
        comp = wedge_components(
            10.0, 185.0, 60.0, _side(), _base(),
            pv_model=VerticalStressModel.KIRSCH_KOLYMBAS,
        )
        expected = _reference_ere(10.0, 185.0, 60.0, _side(), _base(), K2, divisor=2.0)
        assert comp.Ere == pytest.approx(expected)
        default = wedge_components(10.0, 185.0, 60.0, _side(), _base())
        assert comp.T_R > default.T_R
        assert comp.Ere < default.Ere

    def test_degenerate_angles(self):
        for theta in (0.0, 0.1, 89.9, 90.0):
            assert wedge_components(10.0, 185.0, theta, _side(), _base()) is None

    def test_non_positive_diameter(self):
        for D in (0.0, -10.0):
            assert wedge_components(D, 185.0, 60.0, _side(), _base()) is None
        result = critical_wedge(-10.0, 185.0, _side(), _base())
        assert result.Ere_max == 0.0
        assert result.theta_crit == 1

    def test_non_positive_unit_weight(self):
        side = AveragedProperties(gamma_eff=0.0, phi=30.0, c=5.0)
        assert wedge_components(10.0, 185.0, 45.0, side, _base()) is None

    def test_clamped_at_zero(self):
        strong = AveragedProperties(gamma_eff=9.0, phi=40.0, c=200.0)
        comp = wedge_components(10.0, 50.0, 45.0, strong, strong)
        assert comp.Ere == 0.0

    def test_frictionless_undrained(self):
        side = AveragedProperties(gamma_eff=18.0, phi=0.0, c=0.0)
        base = AveragedProperties(phi=0.0, c=0.0)
        comp = wedge_components(4.0, 100.0, 45.0, side, base)
        # Without strength E = (G + Pv) tan θ, i.e. G + Pv at 45°.
        assert comp.T_R == pytest.approx(0.0)
        assert comp.Ere == pytest.approx(comp.G + comp.Pv)


# ======================================================================
# Critical angle search
# ======================================================================


class TestCriticalWedge:
    def test_reference_case(self):
        profile = _homogeneous()
        sigma = vertical_effective_stress(15.0, 0.0, 5.0, profile)
        assert sigma == pytest.approx(185.0)
        side = wedge_averages(15.0, 10.0, 5.0, profile)
        base = prism_averages(15.0, 10.0, profile)
        result = critical_wedge(10.0, sigma, side, base, "JancseczSteiner")

        assert isinstance(result, CriticalWedge)
        assert 1 <= result.theta_crit <= 89
        assert len(result.curve) == 89
        assert np.isfinite(result.Ere_max)
        assert result.Ere_max > 0
        assert result.Ere_max == pytest.approx(result.curve.max())
        assert result.curve[0] < result.Ere_max
        assert result.curve[-1] < result.Ere_max
        assert result.components.theta == result.theta_crit
        assert result.components.Ere == result.Ere_max

    def test_grid(self):
        np.testing.assert_array_equal(THETA_GRID, np.arange(1, 90))

    def test_maximum_over_all_angles(self):
        result = critical_wedge(8.0, 120.0, _side(), _base())
        idx = result.theta_crit - 1
        assert np.all(result.curve <= result.curve[idx])
        for theta, ere in zip(result.thetas, result.curve):
            comp = wedge_components(8.0, 120.0, float(theta), _side(), _base())
            assert ere == pytest.approx(comp.Ere)

    def test_all_degenerate(self):
        side = AveragedProperties(gamma_eff=0.0)
        result = critical_wedge(10.0, 185.0, side, _base())
        assert result.theta_crit == 1
        assert result.Ere_max == 0.0
        assert result.components is None
        assert not result.curve.any()

    def test_ties_keep_smallest_angle(self):
        strong = AveragedProperties(gamma_eff=9.0, phi=40.0, c=500.0)
        result = critical_wedge(10.0, 10.0, strong, strong)
        assert result.Ere_max == 0.0
        assert result.theta_crit == 1

    def test_increases_with_depth(self):
        profile = _homogeneous()
        side = wedge_averages(20.0, 10.0, 200.0, profile)
        base = prism_averages(20.0, 10.0, profile)
        previous = -1.0
        for t_crown in (5.0, 10.0, 15.0, 20.0, 30.0, 45.0):
            sigma = vertical_effective_stress(t_crown, 0.0, 200.0, profile)
            ere = critical_wedge(10.0, sigma, side, base).Ere_max
            assert ere >= previous
            previous = ere

    def test_stronger_soil_needs_less_support(self):
        weak = AveragedProperties(gamma_eff=9.0, phi=25.0, c=0.0)
        strong = AveragedProperties(gamma_eff=9.0, phi=35.0, c=0.0)
        e_weak = critical_wedge(10.0, 150.0, weak, weak).Ere_max
        e_strong = critical_wedge(10.0, 150.0, strong, strong).Ere_max
        assert e_strong < e_weak

    def test_idempotent(self):
        a = critical_wedge(10.0, 185.0, _side(), _base())
        b = critical_wedge(10.0, 185.0, _side(), _base())
        assert a.theta_crit == b.theta_crit
        np.testing.assert_array_equal(a.curve, b.curve)
        assert a.components == b.components
