"""
thermodynamic_particle
======================

An immutable particle species ``(m, g, spin2)`` whose equilibrium
thermodynamics can be evaluated at any temperature.
"""

from typing import NamedTuple

import numpy as np

from . import thermal_functions
from .helper_functions import ArrayLike, DEFAULT_QUADRATURE, InvalidInputError, QuadratureConfig

__all__ = ["ThermodynamicParticle"]


class _ParticleFields(NamedTuple):
    m: float
    g: float
    spin2: int


class ThermodynamicParticle(_ParticleFields):
    """
    A particle species in kinetic and chemical equilibrium with the plasma
    (zero chemical potential).

    Parameters
    ----------
    m : float
        Mass, ``m >= 0`` (same units as the temperatures passed later).
    g : float
        Internal degeneracy, ``g > 0``.
    spin2 : int
        Twice the spin. Even → Bose–Einstein, odd → Fermi–Dirac.

    Raises
    ------
    InvalidInputError
        If any field is outside its domain.

    Examples
    --------
    >>> photon = ThermodynamicParticle(0.0, 2.0, 2)
    >>> round(photon.geff(1.0), 6)
    2.0
    """
    __slots__ = ()

    def __new__(cls, m: float, g: float, spin2: int) -> "ThermodynamicParticle":
        thermal_functions.statistics_sign(spin2)
        m, g = float(m), float(g)
        if not np.isfinite(m) or m < 0.0:
            raise InvalidInputError(f"ThermodynamicParticle: mass must be finite and non-negative, got {m}.")
        if not np.isfinite(g) or g <= 0.0:
            raise InvalidInputError(f"ThermodynamicParticle: degeneracy must be finite and positive, got {g}.")
        return super().__new__(cls, m, g, int(spin2))

    # The NamedTuple versions bypass __new__; both go through validation here.
    @classmethod
    def _make(cls, iterable) -> "ThermodynamicParticle":
        return cls(*iterable)

    def _replace(self, **kwargs) -> "ThermodynamicParticle":
        unknown = set(kwargs) - set(self._fields)
        if unknown:
            raise ValueError(f"ThermodynamicParticle._replace: unknown field(s) {sorted(unknown)}.")
        return type(self)(**{**self._asdict(), **kwargs})

    @property
    def eta(self) -> float:
        """Statistics sign: +1 for bosons, -1 for fermions."""
        return thermal_functions.statistics_sign(self.spin2)

    @property
    def is_fermion(self) -> bool:
        return self.spin2 % 2 == 1

    def neq(self, temperature: ArrayLike, config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
        """Equilibrium number density at `temperature`."""
        return thermal_functions.neq(temperature, self.m, self.g, self.spin2, config)

    def energy_density(self, temperature: ArrayLike, config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
        """Equilibrium energy density at `temperature`."""
        return thermal_functions.energy_density(temperature, self.m, self.g, self.spin2, config)

    def pressure_density(self, temperature: ArrayLike, config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
        """Equilibrium pressure at `temperature`."""
        return thermal_functions.pressure_density(temperature, self.m, self.g, self.spin2, config)

    def entropy_density(self, temperature: ArrayLike, config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
        """Equilibrium entropy density at `temperature`."""
        return thermal_functions.entropy_density(temperature, self.m, self.g, self.spin2, config)

    def geff(self, temperature: ArrayLike, config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
        """Degrees of freedom stored in energy at `temperature`."""
        return thermal_functions.geff(temperature, self.m, self.g, self.spin2, config)

    def heff(self, temperature: ArrayLike, config: QuadratureConfig = DEFAULT_QUADRATURE) -> ArrayLike:
        """Degrees of freedom stored in entropy at `temperature`."""
        return thermal_functions.heff(temperature, self.m, self.g, self.spin2, config)
