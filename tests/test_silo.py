"""Tests for the silo (Janssen) crown stress reduction."""

import numpy as np
import pytest

from tunnelface.soil.profile import SoilProfile
from tunnelface.soil.stress import vertical_effective_stress
from tunnelface.face.silo import (
    SiloResult,
    janssen_stress,
    silo_effective_stress,
    terzaghi_half_width,
)


def _dry_sand(c=0.0):
    """Homogeneous sand down to 100 m: γ=19, γ'=9, φ=30°."""
    return SoilProfile([
        {"name": "Sand", "depth": 100, "gamma_max": 19, "gamma_min": 18,
         "gamma_prime_max": 9, "gamma_prime_min": 8, "phi": 30, "c": c},
    ])


def _layered():
    return SoilProfile([
        {"name": "Fill", "depth": 4, "gamma_max": 17, "gamma_prime_max": 7,
         "phi": 25, "c": 0},
        {"name": "Sand", "depth": 12, "gamma_max": 19, "gamma_prime_max": 10,
         "phi": 35, "c": 0},
        {"name": "Clay", "depth": 40, "gamma_max": 20, "gamma_prime_max": 10,
         "phi": 22, "c": 15},
    ])


class TestHalfWidth:
    def test_terzaghi_width(self):
        # (45 + 15) / 2 = 30 degrees
        assert terzaghi_half_width(10.0, 30.0) == pytest.approx(5.0 / np.tan(np.radians(30)))

    def test_frictionless(self):
        assert terzaghi_half_width(10.0, 0.0) == pytest.approx(5.0 / np.tan(np.radians(22.5)))


class TestJanssen:
    def test_no_arching_fallback(self):
        sigma, lam = janssen_stress(10.0, 18.0, 4.0, 30.0, 12.0, B=8.0, K1=0.0)
        assert lam == 0.0
        assert sigma == pytest.approx(10.0 + (18.0 - 4.0 / 8.0) * 12.0)

    def test_zero_width_fallback(self):
        sigma, _ = janssen_stress(10.0, 18.0, 0.0, 30.0, 12.0, B=0.0, K1=0.8)
        assert sigma == pytest.approx(10.0 + 18.0 * 12.0)

    def test_closed_form(self):
        B, h, K1 = 8.0, 12.0, 0.8
        lam = K1 * np.tan(np.radians(30.0))
        decay = np.exp(-lam * h / B)
        expected = 20.0 * decay + (18.0 * B - 3.0) / lam * (1 - decay)
        sigma, lam_out = janssen_stress(20.0, 18.0, 3.0, 30.0, h, B, K1)
        assert lam_out == pytest.approx(lam)
        assert sigma == pytest.approx(expected)

    def test_deep_silo_limit(self):
        # Very tall silo: stress tends to (γ B − c) / λ.
        B, K1 = 5.0, 1.0
        lam = np.tan(np.radians(30.0))
        sigma, _ = janssen_stress(0.0, 18.0, 0.0, 30.0, 1e4, B, K1)
        assert sigma == pytest.approx(18.0 * B / lam)


class TestSiloEffectiveStress:
    def test_shallow_tunnel_full_height(self):
        res = silo_effective_stress(15.0, 0.0, 100.0, _dry_sand(), 10.0, K1=0.8)
        B = terzaghi_half_width(10.0, 30.0)
        assert res.B == pytest.approx(B)
        assert res.h_limit == pytest.approx(5 * B)
        assert res.h1 == pytest.approx(15.0)
        assert res.h2 == 0.0
        assert res.phi_face == pytest.approx(30.0)
        assert res.surcharge == 0.0

    def test_reduces_stress(self):
        profile = _dry_sand()
        res = silo_effective_stress(15.0, 0.0, 100.0, profile, 10.0, K1=0.8)
        unreduced = vertical_effective_stress(15.0, 0.0, 100.0, profile)
        assert 0 < res.sigma_v < unreduced
        assert 0 < res.remaining_load(unreduced) < 1

    def test_k1_zero_matches_geostatic(self):
        profile = _dry_sand()
        res = silo_effective_stress(15.0, 10.0, 100.0, profile, 10.0, K1=0.0)
        expected = vertical_effective_stress(15.0, 10.0, 100.0, profile)
        assert res.sigma_v == pytest.approx(expected)

    def test_small_k1_converges(self):
        profile = _dry_sand()
        expected = vertical_effective_stress(15.0, 0.0, 100.0, profile)
        res = silo_effective_stress(15.0, 0.0, 100.0, profile, 10.0, K1=1e-6)
        assert res.sigma_v == pytest.approx(expected, rel=1e-4)

    def test_height_cap_adds_surcharge(self):
        profile = _dry_sand()
        res = silo_effective_stress(60.0, 10.0, 100.0, profile, 10.0, K1=0.8)
        B = terzaghi_half_width(10.0, 30.0)
        assert res.h1 == pytest.approx(5 * B)
        assert res.h2 == pytest.approx(60.0 - 5 * B)
        assert res.user_surcharge == 10.0
        assert res.surcharge == pytest.approx(10.0 + 19.0 * res.h2)

    def test_cap_bounds_stress(self):
        # Beyond the cap the column above acts as surcharge, which the
        # silo still attenuates.
        profile = _dry_sand()
        shallow = silo_effective_stress(40.0, 0.0, 100.0, profile, 10.0, K1=0.8)
        deep = silo_effective_stress(80.0, 0.0, 100.0, profile, 10.0, K1=0.8)
        assert deep.sigma_v > shallow.sigma_v
        assert deep.sigma_v < vertical_effective_stress(80.0, 0.0, 100.0, profile)

    def test_cohesion_reduces_stress(self):
        loose = silo_effective_stress(15.0, 0.0, 100.0, _dry_sand(0.0), 10.0)
        bonded = silo_effective_stress(15.0, 0.0, 100.0, _dry_sand(5.0), 10.0)
        assert bonded.sigma_v < loose.sigma_v

    def test_layered_uses_face_phi(self):
        res = silo_effective_stress(20.0, 0.0, 6.0, _layered(), 8.0)
        assert res.phi_face == pytest.approx(22.0)
        assert res.props.bottom == pytest.approx(res.h1)

    def test_degenerate_geometry(self):
        res = silo_effective_stress(0.0, 25.0, 5.0, _dry_sand(), 10.0)
        assert res == SiloResult(sigma_v=25.0, surcharge=25.0, user_surcharge=25.0)
        res = silo_effective_stress(15.0, 25.0, 5.0, _dry_sand(), 0.0)
        assert res.sigma_v == 25.0
        assert res.B == 0.0 and res.h1 == 0.0

    def test_remaining_load_zero_reference(self):
        res = SiloResult(sigma_v=5.0)
        assert res.remaining_load(0.0) == 0.0
