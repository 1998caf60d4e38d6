"""
thermal_functions
=================

Equilibrium thermodynamics of a single particle species in a hot plasma.

For a species of mass ``m``, internal degeneracy ``g`` and twice-spin
``spin2`` at temperature ``T`` we compute the number, energy, pressure and
entropy densities and the effective relativistic degrees of freedom
``geff``/``heff``. Everything is built from four dimensionless integrals of
``x = m/T``,

    I(x) = ∫_x^∞ dz  P(z, x) / (e^z − η),

where ``η = +1`` for Bose–Einstein and ``η = −1`` for Fermi–Dirac statistics.

Statistics convention
---------------------
``spin2`` even (integer spin) → boson, ``η = +1``;
``spin2`` odd (half-integer spin) → fermion, ``η = −1``.

Notes
-----
- The ``*_scaled`` functions are dimensionless functions of ``x``; the
  physical wrappers multiply them by ``g T^n``.
- The factor ``e^{−x}`` is pulled out of the quadrature and applied last, so
  heavy species underflow to 0 rather than failing.
- Quadrature failures raise :class:`IntegrationError`; no NaN is returned.
"""

import numpy as np
from scipy import special
from typing import Callable

from .helper_functions import (ArrayLike, DEFAULT_QUADRATURE, InvalidInputError, QuadratureConfig,
                               _apply_elementwise, check_positive_temperature, integrate_to_infinity)

__all__ = ["BOSON", "FERMION", "statistics_sign",
           "neq_integrand", "energy_density_integrand", "pressure_density_integrand", "entropy_density_integrand",
           "neq_scaled", "energy_density_scaled", "pressure_density_scaled", "entropy_density_scaled",
           "neq", "energy_density", "pressure_density", "entropy_density", "geff", "heff"]

pi = np.pi
sqrt, exp = np.sqrt, np.exp

BOSON = 1.0
FERMION = -1.0

# Normalisations of the scaled integrals
_NEQ_NORM = 2.0 * pi**2
_ENERGY_NORM = 2.0 * pi**2
_PRESSURE_NORM = 6.0 * pi**2
_ENTROPY_NORM = 6.0 * pi**2

# Prefactors turning scaled densities into degrees of freedom
_GEFF_PREFACTOR = 30.0 / pi**2
_HEFF_PREFACTOR = 45.0 / (2.0 * pi**2)

# Above this, 1/expm1(z) underflows towards exp(-z) anyway
_Z_SWITCH = 40.0


# --------------------------
# Statistics
# --------------------------

def statistics_sign(spin2: int) -> float:
    """
    Sign ``η`` entering the occupation factor ``1/(e^z − η)``.

    Parameters
    ----------
    spin2 : int
        Twice the spin, a non-negative integer.

    Returns
    -------
    float
        ``+1.0`` (boson) for even `spin2`, ``-1.0`` (fermion) for odd.

    Raises
    ------
    InvalidInputError
        If `spin2` is not a non-negative integer (bools are rejected).
    """
    if isinstance(spin2, (bool, np.bool_)) or not isinstance(spin2, (int, np.integer)):
        raise InvalidInputError(f"spin2 must be a non-negative integer, got {spin2!r}.")
    if spin2 < 0:
        raise InvalidInputError(f"spin2 must be non-negative, got {spin2}.")
    return BOSON if spin2 % 2 == 0 else FERMION


def _occupation(z: float, eta: float) -> float:
    """Overflow-safe ``1/(e^z − η)`` for ``z > 0``."""
    if eta > 0:
        if z <= _Z_SWITCH:
            return 1.0 / np.expm1(z)
        return exp(-z)
    return special.expit(-z)


def _suppressed_occupation(z: float, x: float, eta: float) -> float:
    """``e^x/(e^z − η) = e^{−(z−x)}/(1 − η e^{−z})`` for ``z > x >= 0``, at most ``1/(1 − η e^{−z})``."""
    if eta > 0:
        return exp(x - z) / -np.expm1(-z)
    return exp(x - z) / (1.0 + exp(-z))


# ---------------------------------------------------------------------
# Dimensionless integrands, pure functions of (z, x, eta) with z >= x
# ---------------------------------------------------------------------

def _neq_kernel(z: float, x: float) -> float:
    return z * sqrt(z * z - x * x)


def _energy_kernel(z: float, x: float) -> float:
    return z * z * sqrt(z * z - x * x)


def _pressure_kernel(z: float, x: float) -> float:
    return (z * z - x * x)**1.5


def _entropy_kernel(z: float, x: float) -> float:
    return (4.0 * z * z - x * x) * sqrt(z * z - x * x)


def neq_integrand(z: float, x: float, eta: float) -> float:
    """Number density: ``z √(z²−x²) / (e^z − η)``."""
    if z <= x:
        return 0.0
    return _neq_kernel(z, x) * _occupation(z, eta)


def energy_density_integrand(z: float, x: float, eta: float) -> float:
    """Energy density: ``z² √(z²−x²) / (e^z − η)``."""
    if z <= x:
        return 0.0
    return _energy_kernel(z, x) * _occupation(z, eta)


def pressure_density_integrand(z: float, x: float, eta: float) -> float:
    """Pressure: ``(z²−x²)^{3/2} / (e^z − η)``."""
    if z <= x:
        return 0.0
    return _pressure_kernel(z, x) * _occupation(z, eta)


def entropy_density_integrand(z: float, x: float, eta: float) -> float:
    """Entropy density: ``(4z²−x²) √(z²−x²) / (e^z − η)``."""
    if z <= x:
        return 0.0
    return _entropy_kernel(z, x) * _occupation(z, eta)


# ---------------------------------------------------------
# Scaled (dimensionless) quantities of x = m/T
# ---------------------------------------------------------

def _scaled_integral(kernel: Callable[[float, float], float], x: float, spin2: int,
                     config: QuadratureConfig) -> float:
    """
    ``∫_x^∞ kernel(z, x) / (e^z − η) dz``, computed as ``e^{−x} ∫_x^∞ kernel · e^x/(e^z − η) dz``.

    The integrand handed to QUADPACK has no ``e^{−x}`` factor for any ``x``, so
    heavy species never produce subnormal partial sums; the ``e^{−x}``
    suppression is applied once at the end and may underflow to 0.
    """
    x = float(x)
    if not np.isfinite(x) or x < 0.0:
        raise InvalidInputError(f"x = m/T must be finite and non-negative, got {x!r}.")
    eta = statistics_sign(spin2)

    def f(z):
        if z <= x:
            return 0.0
        return kernel(z, x) * _suppressed_occupation(z, x, eta)

    return integrate_to_infinity(f, x, config).value * exp(-x)


def neq_scaled(x: float, spin2: int, config: QuadratureConfig = DEFAULT_QUADRATURE) -> float:
    """
    Dimensionless number density ``n / (g T³)`` as a function of ``x = m/T``.

    Parameters
    ----------
    x : float
        Mass over temperature, ``x >= 0``.
    spin2 : int
        Twice the spin; selects the statistics (see :func:`statistics_sign`).
    config : QuadratureConfig, optional
        Quadrature settings.

    Returns
    -------
    float
        ``(1/2π²) ∫_x^∞ z √(z²−x²) / (e^z − η) dz``.

    Raises
    ------
    InvalidInputError
        For negative/non-finite `x` or malformed `spin2`.
    IntegrationError
        If the quadrature does not converge.
    """
    return _scaled_integral(_neq_kernel, x, spin2, config) / _NEQ_NORM


def energy_density_scaled(x: float, spin2: int, config: QuadratureConfig = DEFAULT_QUADRATURE) -> float:
    """
    Dimensionless energy density ``ρ / (g T⁴)``:
    ``(1/2π²) ∫_x^∞ z² √(z²−x²) / (e^z − η) dz``.
    """
    return _scaled_integral(_energy_kernel, x, spin2, config) / _ENERGY_NORM


def pressure_density_scaled(x: float, spin2: int, config: QuadratureConfig = DEFAULT_QUADRATURE) -> float:
    """
    Dimensionless pressure ``P / (g T⁴)``:
    ``(1/6π²) ∫_x^∞ (z²−x²)^{3/2} / (e^z − η) dz``.
    """
    return _scaled_integral(_pressure_kernel, x, spin2, config) / _PRESSURE_NORM


def entropy_density_scaled(x: float, spin2: int, config: QuadratureConfig = DEFAULT_QUADRATURE) -> float:
    """
    Dimensionless entropy density ``s / (g T³)``:
    ``(1/6π²) ∫_x^∞ (4z²−x²) √(z²−x²) / (e^z − η) dz``.

    Equals ``energy_density_scaled + pressure_density_scaled`` (``s = (ρ+P)/T``).
    """
    return _scaled_integral(_entropy_kernel, x, spin2, config) / _ENTROPY_NORM


# ---------------------------------------------------------
# Physical-unit quantities
# ---------------------------------------------------------

def _check_species(m: float, g: float) -> None:
    if not np.isfinite(m) or m < 0.0:
        raise InvalidInputError(f"Mass must be finite and non-negative, got {m!r}.")
    if not np.isfinite(g) or g <= 0.0:
        raise InvalidInputError(f"Degeneracy must be finite and positive, got {g!r}.")


def _rescaled(scaled: Callable[..., float], power: int, prefactor: float, where: str,
              T: ArrayLike, m: float, g: float, spin2: int, config: QuadratureConfig) -> ArrayLike:
    """Evaluate ``prefactor · g · T^power · scaled(m/T)`` element-wise in `T`."""
    _check_species(m, g)
    statistics_sign(spin2)
    check_positive_temperature(T, where)
    return _apply_elementwise(lambda t: prefactor * g * t**power * scaled(m / t, spin2, config), T)


def neq(T: ArrayLike, m: float, g: float, spin2: int,
        config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
    """
    Equilibrium number density ``n = g T³ neq_scaled(m/T)``.

    Parameters
    ----------
    T : float or array-like
        Temperature(s), ``T > 0``. Scalar-in → scalar-out.
    m : float
        Mass, ``m >= 0``, same units as `T`.
    g : float
        Internal degeneracy, ``g > 0``.
    spin2 : int
        Twice the spin.
    config : QuadratureConfig, optional
        Quadrature settings.

    Returns
    -------
    float or ndarray
        Number density in units of ``T³``.
    """
    return _rescaled(neq_scaled, 3, 1.0, "neq", T, m, g, spin2, config)


def energy_density(T: ArrayLike, m: float, g: float, spin2: int,
                   config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
    """Equilibrium energy density ``ρ = g T⁴ energy_density_scaled(m/T)``."""
    return _rescaled(energy_density_scaled, 4, 1.0, "energy_density", T, m, g, spin2, config)


def pressure_density(T: ArrayLike, m: float, g: float, spin2: int,
                     config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
    """Equilibrium pressure ``P = g T⁴ pressure_density_scaled(m/T)``."""
    return _rescaled(pressure_density_scaled, 4, 1.0, "pressure_density", T, m, g, spin2, config)


def entropy_density(T: ArrayLike, m: float, g: float, spin2: int,
                    config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
    """Equilibrium entropy density ``s = g T³ entropy_density_scaled(m/T)``."""
    return _rescaled(entropy_density_scaled, 3, 1.0, "entropy_density", T, m, g, spin2, config)


def geff(T: ArrayLike, m: float, g: float, spin2: int,
         config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
    """
    Effective degrees of freedom in energy, ``ρ = (π²/30) geff T⁴``.

    Returns ``30/π² · g · energy_density_scaled(m/T)``. For ``m/T → 0`` this
    tends to ``g`` for bosons and ``7/8 g`` for fermions.
    """
    return _rescaled(energy_density_scaled, 0, _GEFF_PREFACTOR, "geff", T, m, g, spin2, config)


def heff(T: ArrayLike, m: float, g: float, spin2: int,
         config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
    """
    Effective degrees of freedom in entropy, ``s = (2π²/45) heff T³``.

    Returns ``45/(2π²) · g · entropy_density_scaled(m/T)``. Same massless
    limits as :func:`geff`; for massive species ``heff < geff``.
    """
    return _rescaled(entropy_density_scaled, 0, _HEFF_PREFACTOR, "heff", T, m, g, spin2, config)
