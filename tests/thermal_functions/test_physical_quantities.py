# ---------------- Physical Thermal Quantities — Tests ----------------
# What this file checks:
# 1) Massless degrees of freedom: geff = heff = g (bosons), 7/8 g (fermions).
# 2) Powers of T: quantities at fixed m/T scale as T³ / T⁴.
# 3) Positivity over a grid of species.
# 4) heff and geff differ for massive species.
# 5) Array temperatures (scalar-in → scalar-out) and input validation.
# ---------------------------------------------------------------------

import numpy as np
import pytest

from CosmoThermo import (neq, energy_density, pressure_density, entropy_density, geff, heff,
                         neq_scaled, energy_density_scaled, InvalidInputError)


# =============================================================================
# Test 1 — Massless degrees of freedom
# =============================================================================

@pytest.mark.parametrize("spin2, expected", [(0, 2.0), (2, 2.0), (1, 1.75), (3, 1.75)])
def test_massless_geff_heff(spin2, expected):
    assert geff(1.0, 0.0, 2.0, spin2) == pytest.approx(expected, rel=1e-6)
    assert heff(1.0, 0.0, 2.0, spin2) == pytest.approx(expected, rel=1e-6)


def test_light_species_is_close_to_relativistic():
    # m/T = 1e-3: within 1% of the massless constant
    assert geff(1.0e3, 1.0, 2.0, 1) == pytest.approx(1.75, rel=1e-2)
    assert geff(1.0e3, 1.0, 1.0, 0) == pytest.approx(1.0, rel=1e-2)


def test_massless_energy_density_is_stefan_boltzmann():
    T = 3.0
    assert energy_density(T, 0.0, 2.0, 2) == pytest.approx(np.pi**2 / 30.0 * 2.0 * T**4, rel=1e-7)


# =============================================================================
# Test 2 — Powers of T at fixed x = m/T
# =============================================================================

def test_temperature_scaling_at_fixed_x():
    m, g, spin2 = 1.0, 3.0, 1
    assert neq(2.0, 2.0 * m, g, spin2) == pytest.approx(8.0 * neq(1.0, m, g, spin2), rel=1e-12)
    assert energy_density(2.0, 2.0 * m, g, spin2) == pytest.approx(16.0 * energy_density(1.0, m, g, spin2), rel=1e-12)
    assert pressure_density(2.0, 2.0 * m, g, spin2) == pytest.approx(16.0 * pressure_density(1.0, m, g, spin2), rel=1e-12)
    assert entropy_density(2.0, 2.0 * m, g, spin2) == pytest.approx(8.0 * entropy_density(1.0, m, g, spin2), rel=1e-12)
    assert geff(2.0, 2.0 * m, g, spin2) == pytest.approx(geff(1.0, m, g, spin2), rel=1e-12)


def test_degeneracy_is_a_prefactor():
    assert neq(1.3, 0.7, 4.0, 0) == pytest.approx(4.0 * neq_scaled(0.7 / 1.3, 0) * 1.3**3, rel=1e-12)
    assert geff(1.0, 0.5, 2.0, 1) == pytest.approx(30.0 / np.pi**2 * 2.0 * energy_density_scaled(0.5, 1), rel=1e-12)


def test_entropy_from_energy_and_pressure():
    T, m, g, spin2 = 2.0, 3.0, 2.0, 0
    s = entropy_density(T, m, g, spin2)
    assert s == pytest.approx((energy_density(T, m, g, spin2) + pressure_density(T, m, g, spin2)) / T, rel=1e-6)


# =============================================================================
# Test 3 — Positivity
# =============================================================================

@pytest.mark.parametrize("m", [0.0, 0.5, 5.0])
@pytest.mark.parametrize("spin2", [0, 1, 2, 3])
def test_quantities_are_non_negative(m, spin2):
    T, g = 1.0, 2.0
    for f in (neq, energy_density, pressure_density, entropy_density, geff, heff):
        assert f(T, m, g, spin2) >= 0.0


def test_heavier_species_has_fewer_degrees_of_freedom():
    assert geff(1.0, 2.0, 2.0, 0) < geff(1.0, 1.0, 2.0, 0) < geff(1.0, 0.0, 2.0, 0)


# =============================================================================
# Test 4 — heff is the entropy-based quantity, not an alias of geff
# =============================================================================

@pytest.mark.parametrize("spin2", [0, 1])
def test_heff_differs_from_geff_for_massive_species(spin2):
    g_val = geff(1.0, 1.0, 2.0, spin2)
    h_val = heff(1.0, 1.0, 2.0, spin2)
    assert abs(h_val - g_val) > 1e-3 * g_val
    # P < ρ/3 for massive species ⇒ heff = 3/4 (1 + P/ρ) geff < geff
    assert h_val < g_val


# =============================================================================
# Test 5 — Array input and validation
# =============================================================================

def test_array_temperature():
    T = np.array([0.5, 1.0, 2.0])
    out = neq(T, 1.0, 2.0, 1)
    assert isinstance(out, np.ndarray) and out.shape == (3,)
    np.testing.assert_allclose(out, [neq(t, 1.0, 2.0, 1) for t in T], rtol=1e-12)
    assert isinstance(neq(1.0, 1.0, 2.0, 1), float)


@pytest.mark.parametrize("T", [0.0, -1.0, np.nan, np.inf])
def test_invalid_temperature(T):
    with pytest.raises(InvalidInputError):
        energy_density(T, 1.0, 2.0, 0)


def test_invalid_temperature_inside_array():
    with pytest.raises(InvalidInputError):
        neq(np.array([1.0, -2.0]), 1.0, 2.0, 0)


@pytest.mark.parametrize("m, g, spin2", [(-1.0, 2.0, 0), (1.0, 0.0, 0), (1.0, -2.0, 1), (1.0, 2.0, -1), (1.0, 2.0, 0.5)])
def test_invalid_species(m, g, spin2):
    with pytest.raises(InvalidInputError):
        geff(1.0, m, g, spin2)
