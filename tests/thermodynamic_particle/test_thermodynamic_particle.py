# ---------------- ThermodynamicParticle — Tests ----------------
# What this file checks:
# 1) Construction: field coercion, validation, immutability.
# 2) Statistics helpers (eta, is_fermion).
# 3) Every accessor delegates to thermal_functions with the particle's fields.
# 4) Regression: heff uses the entropy formula and differs from geff.
# 5) _replace / _make validate; heavy bosons at low temperature.
# ----------------------------------------------------------------

import numpy as np
import pytest

from CosmoThermo import ThermodynamicParticle, InvalidInputError, BOSON, FERMION
from CosmoThermo import thermal_functions as tf


# =============================================================================
# Test 1 — Construction
# =============================================================================

def test_fields_are_coerced():
    p = ThermodynamicParticle(1, 2, 1)
    assert p == (1.0, 2.0, 1)
    assert isinstance(p.m, float) and isinstance(p.g, float) and isinstance(p.spin2, int)


def test_keyword_construction():
    p = ThermodynamicParticle(m=0.511e-3, g=4.0, spin2=1)
    assert p.m == 0.511e-3 and p.g == 4.0 and p.spin2 == 1


def test_is_immutable():
    p = ThermodynamicParticle(1.0, 2.0, 0)
    with pytest.raises(AttributeError):
        p.m = 2.0
    with pytest.raises(AttributeError):
        p.extra = 1


def test_is_hashable_value():
    assert ThermodynamicParticle(1.0, 2.0, 0) == ThermodynamicParticle(1.0, 2.0, 0)
    assert len({ThermodynamicParticle(1.0, 2.0, 0), ThermodynamicParticle(1.0, 2.0, 0)}) == 1


@pytest.mark.parametrize("m, g, spin2", [(-0.1, 2.0, 0), (np.nan, 2.0, 0), (1.0, 0.0, 0),
                                         (1.0, -1.0, 0), (1.0, 2.0, -2), (1.0, 2.0, 1.0), (1.0, 2.0, False)])
def test_invalid_construction(m, g, spin2):
    with pytest.raises(InvalidInputError):
        ThermodynamicParticle(m, g, spin2)


# =============================================================================
# Test 2 — Statistics
# =============================================================================

def test_statistics_helpers():
    photon = ThermodynamicParticle(0.0, 2.0, 2)
    electron = ThermodynamicParticle(0.511e-3, 4.0, 1)
    assert photon.eta == BOSON and not photon.is_fermion
    assert electron.eta == FERMION and electron.is_fermion


# =============================================================================
# Test 3 — Delegation
# =============================================================================

@pytest.mark.parametrize("name", ["neq", "energy_density", "pressure_density", "entropy_density", "geff", "heff"])
def test_accessors_delegate(name):
    p = ThermodynamicParticle(1.5, 3.0, 1)
    T = 2.0
    expected = getattr(tf, name)(T, p.m, p.g, p.spin2)
    assert getattr(p, name)(T) == pytest.approx(expected, rel=1e-14)


def test_photon_geff():
    photon = ThermodynamicParticle(0.0, 2.0, 2)
    assert photon.geff(1.0) == pytest.approx(2.0, rel=1e-6)
    assert photon.heff(1.0) == pytest.approx(2.0, rel=1e-6)


def test_massless_fermion_geff():
    nu = ThermodynamicParticle(0.0, 2.0, 1)
    assert nu.geff(1.0) == pytest.approx(1.75, rel=1e-6)


def test_array_temperature():
    p = ThermodynamicParticle(1.0, 2.0, 0)
    out = p.energy_density(np.array([1.0, 2.0]))
    assert out.shape == (2,)
    assert np.all(out > 0.0)


# =============================================================================
# Test 4 — heff is not an alias of geff
# =============================================================================

@pytest.mark.parametrize("spin2", [0, 1])
def test_heff_differs_from_geff(spin2):
    p = ThermodynamicParticle(1.0, 2.0, spin2)
    T = 1.0
    assert p.heff(T) != pytest.approx(p.geff(T), rel=1e-3)
    assert p.heff(T) == pytest.approx(45.0 / (2.0 * np.pi**2) * p.entropy_density(T) / T**3, rel=1e-12)
    assert p.geff(T) == pytest.approx(30.0 / np.pi**2 * p.energy_density(T) / T**4, rel=1e-12)


# =============================================================================
# Test 5 — Derived instances and heavy species
# =============================================================================

def test_replace_validates():
    p = ThermodynamicParticle(1.0, 2.0, 0)
    q = p._replace(m=3)
    assert q == (3.0, 2.0, 0) and isinstance(q, ThermodynamicParticle)
    assert isinstance(q.m, float)
    for bad in ({"m": -5.0}, {"g": 0.0}, {"spin2": 1.5}):
        with pytest.raises(InvalidInputError):
            p._replace(**bad)
    with pytest.raises(ValueError):
        p._replace(mass=1.0)


def test_make_validates():
    assert ThermodynamicParticle._make([0.5, 4, 1]) == (0.5, 4.0, 1)
    with pytest.raises(InvalidInputError):
        ThermodynamicParticle._make([-1.0, 2.0, 0])


def test_heavy_boson_at_low_temperature():
    # m/T = 720 sits in the subnormal range of the scaled integrals
    p = ThermodynamicParticle(m=0.72, g=1.0, spin2=0)
    out = p.pressure_density(np.array([1.0, 0.1, 1.0e-3]))
    assert np.all(np.isfinite(out)) and np.all(out >= 0.0)
    assert out[0] > out[1] > out[2]
    assert p.neq(1.0e-3) >= 0.0
