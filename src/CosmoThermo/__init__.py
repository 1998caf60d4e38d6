"""CosmoThermo: equilibrium thermodynamics of particle species and of the Standard-Model bath."""

from .helper_functions import (CosmoThermoError, InvalidInputError, IntegrationError, InitializationError,
                               QuadratureConfig, QuadResult, DEFAULT_QUADRATURE, SplineConfig, DEFAULT_SPLINE,
                               integrate_to_infinity, build_spline)

from .thermal_functions import (BOSON, FERMION, statistics_sign,
                                neq_integrand, energy_density_integrand, pressure_density_integrand,
                                entropy_density_integrand,
                                neq_scaled, energy_density_scaled, pressure_density_scaled, entropy_density_scaled,
                                neq, energy_density, pressure_density, entropy_density, geff, heff)

from .thermodynamic_particle import ThermodynamicParticle

from .standard_model import (BathTables, BathAsymptotes, SM_ASYMPTOTES, StandardModelBath,
                             load_standard_model_tables, get_standard_model_bath,
                             bath_geff, bath_heff, bath_sqrt_gstar, bath_geff_deriv, bath_heff_deriv,
                             bath_energy_density, bath_energy_density_deriv,
                             bath_entropy_density, bath_entropy_density_deriv)

__version__ = "0.1.0"
