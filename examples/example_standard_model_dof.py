"""
example_standard_model_dof.py

Showcase for CosmoThermo, in two examples:

  * Example A – Standard-Model bath: g_eff(T), h_eff(T) and sqrt(g*)(T) from
                the packaged table, including the flat asymptotes outside
                10^-4.5 GeV < T < 10^4 GeV.
  * Example B – Single species: geff and heff of a boson and a fermion as
                functions of x = m/T, showing the 1 → 7/8 massless ratio and
                the Boltzmann suppression for x ≫ 1.

Run with ``python examples/example_standard_model_dof.py`` (needs matplotlib).
"""

import logging

import numpy as np
import matplotlib.pyplot as plt

from CosmoThermo import (ThermodynamicParticle, bath_geff, bath_heff, bath_sqrt_gstar,
                         bath_geff_deriv)

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("example_standard_model_dof")

# -----------------------------------------------------------------------------
# Example A – Standard-Model bath
# -----------------------------------------------------------------------------

T = np.logspace(-5.5, 5.0, 600)  # GeV

fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8, 7), sharex=True)
ax1.plot(T, bath_geff(T), label=r"$g_{\rm eff}$", lw=2)
ax1.plot(T, bath_heff(T), label=r"$h_{\rm eff}$", lw=2, ls="--")
ax1.plot(T, bath_sqrt_gstar(T)**2, label=r"$g_*$", lw=1.5, ls=":")
for edge in (10**-4.5, 10**4.0):
    ax1.axvline(edge, color="k", alpha=0.3)
ax1.set_xscale("log"); ax1.set_yscale("log")
ax1.set_ylabel("degrees of freedom")
ax1.legend(); ax1.grid(True, alpha=0.3)

ax2.plot(T, T * bath_geff_deriv(T), lw=2)
ax2.set_xscale("log")
ax2.set_xlabel("T [GeV]"); ax2.set_ylabel(r"$T\, dg_{\rm eff}/dT$")
ax2.grid(True, alpha=0.3)
fig.suptitle("Standard-Model bath")
fig.tight_layout()

log.info("g_eff(1 GeV) = %.4f, h_eff(1 GeV) = %.4f, sqrt(g*)(1 GeV) = %.4f",
         bath_geff(1.0), bath_heff(1.0), bath_sqrt_gstar(1.0))

# -----------------------------------------------------------------------------
# Example B – Single species vs m/T
# -----------------------------------------------------------------------------

boson = ThermodynamicParticle(m=1.0, g=1.0, spin2=0)
fermion = ThermodynamicParticle(m=1.0, g=1.0, spin2=1)

x = np.logspace(-2, 1.3, 80)
temps = boson.m / x

plt.figure(figsize=(8, 4.5))
plt.plot(x, boson.geff(temps), label="boson $g_{\\rm eff}$", lw=2)
plt.plot(x, boson.heff(temps), label="boson $h_{\\rm eff}$", lw=2, ls="--")
plt.plot(x, fermion.geff(temps), label="fermion $g_{\\rm eff}$", lw=2)
plt.plot(x, fermion.heff(temps), label="fermion $h_{\\rm eff}$", lw=2, ls="--")
plt.axhline(7.0 / 8.0, color="k", alpha=0.3, ls=":")
plt.xscale("log"); plt.yscale("log")
plt.xlabel("x = m/T"); plt.ylabel("degrees of freedom (g = 1)")
plt.title("Single species")
plt.legend(); plt.grid(True, alpha=0.3); plt.tight_layout()

log.info("fermion/boson geff at x=0.01: %.5f (massless limit 0.875)",
         fermion.geff(100.0) / boson.geff(100.0))

plt.show()
