# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # 01 — Face Support Pressure of a Slurry Shield
#
# Required face support pressure of a 10 m slurry shield with 15 m
# cover in a three-layer profile.  The sliding wedge gives the earth
# force on the face; water and earth forces are combined with partial
# safety factors and checked for the three lowering scenarios.
#
# **Modules**: `tunnelface.soil`, `tunnelface.face`

# %%
import logging

import numpy as np

from tunnelface import SoilProfile, FaceSupportConfig, analyze_face_support
from tunnelface.logging_config import setup_logging

setup_logging(logging.INFO)

# %% [markdown]
# ## 1. Soil Profile
#
# Unit weights in kN/m³, cohesion in kN/m², friction angle in degrees.
# Upper-bound values are used for the wedge, lower-bound values for the
# blow-out check.

# %%
profile = SoilProfile([
    {"name": "Sand", "depth": 5, "gamma_max": 18, "gamma_min": 17,
     "gamma_prime_max": 8, "gamma_prime_min": 7, "phi": 30, "c": 0},
    {"name": "Clay", "depth": 15, "gamma_max": 19, "gamma_min": 18,
     "gamma_prime_max": 9, "gamma_prime_min": 8, "phi": 32, "c": 5},
    {"name": "Rock", "depth": 30, "gamma_max": 20, "gamma_min": 19,
     "gamma_prime_max": 10, "gamma_prime_min": 9, "phi": 35, "c": 10},
])
print(profile)

# %% [markdown]
# ## 2. Configuration
#
# Parameters may also be read from flat key/value records as used in
# tabular input files.

# %%
config = FaceSupportConfig.from_dict({
    "D": 10, "t_crown": 15, "h_w": 5,
    "sigma_s_p": 10, "sigma_s_t": 10,
    "eta_E": 1.5, "eta_W": 1.05, "delta_P": 10,
    "apply_silo": "false",
    "slurry_level_partial": 50,
})

result = analyze_face_support(profile, config)

# %% [markdown]
# ## 3. Critical Wedge

# %%
wedge = result.wedge
print(f"Crown stress σ'v:     {result.crown_stress:.1f} kN/m²")
print(f"Critical angle θ:     {wedge.theta_crit} deg")
print(f"Earth force E_re:     {wedge.Ere_max:.1f} kN")
print(f"Stabilizing force S:  {result.forces.S_ci:.1f} kN")

ascii_width = 50
peak = max(wedge.curve.max(), 1e-9)
for theta, ere in zip(wedge.thetas[::8], wedge.curve[::8]):
    bar = "#" * int(ascii_width * ere / peak)
    print(f"{theta:3d} {bar}")

# %% [markdown]
# ## 4. Support Pressure Scenarios

# %%
for name, p in result.scenarios.items():
    check = result.blowout[name]
    print(f"{name:17s} s_min={p.s_min:7.1f}  s_op={p.s_operational:7.1f}  "
          f"governing={p.governing:12s}  blow-out η={check.eta:.2f}")

# %% [markdown]
# ## 5. Silo Reduction
#
# Arching over the crown reduces the vertical stress acting on the
# wedge.

# %%
config.apply_silo = True
with_silo = analyze_face_support(profile, config)
print(f"σ'v unreduced: {with_silo.crown_stress_unreduced:.1f} kN/m²")
print(f"σ'v silo:      {with_silo.crown_stress:.1f} kN/m²")
print(f"Remaining load: "
      f"{with_silo.silo.remaining_load(with_silo.crown_stress_unreduced):.0%}")

# %% [markdown]
# ## 6. Pressure Profile (no lowering)

# %%
p = result.no_lowering
for z, s, u in zip(p.depths[::10], p.support_operational[::10], p.water[::10]):
    print(f"z={z:5.1f} m  s={s:7.1f}  u={u:6.1f} kN/m²")
print(f"Mean operational pressure: {np.mean(p.support_operational):.1f} kN/m²")
