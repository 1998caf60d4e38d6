"""
standard_model
==============

Effective degrees of freedom of the Standard-Model plasma as continuous
functions of the temperature ``T`` (GeV).

Three cubic interpolating splines are fitted once, in ``L = log10(T)``, to the
tabulated ``g_eff``, ``h_eff`` and ``sqrt(g*)`` shipped with the package. Every
public function follows the same three-piece policy:

================  ======================  ==============================
region            condition               value
================  ======================  ==============================
low asymptote     ``L <= L_min``          fixed front constant
interior          ``L_min < L < L_max``   spline evaluated at ``L``
high asymptote    ``L >= L_max``          fixed back constant
================  ======================  ==============================

Temperature derivatives are ``spline'(L) / (T ln 10)`` inside the window and
exactly 0 outside it. The spline values at the window edges need not match the
constants; that small jump is accepted.

The splines are built lazily the first time any ``bath_*`` function is called
(exactly once, even under concurrent first use). A different table can be
used by building a :class:`StandardModelBath` directly.
"""

import logging
import os
import threading
from typing import NamedTuple, Optional

import numpy as np
from scipy.interpolate import UnivariateSpline

from .helper_functions import (ArrayLike, DEFAULT_SPLINE, InvalidInputError, SplineConfig,
                               build_spline, check_positive_temperature)

__all__ = ["BathTables", "BathAsymptotes", "SM_ASYMPTOTES", "StandardModelBath",
           "load_standard_model_tables", "get_standard_model_bath",
           "bath_geff", "bath_heff", "bath_sqrt_gstar", "bath_geff_deriv", "bath_heff_deriv",
           "bath_energy_density", "bath_energy_density_deriv",
           "bath_entropy_density", "bath_entropy_density_deriv"]

log = logging.getLogger(__name__)

pi = np.pi
_LN10 = np.log(10.0)

# ---------------------------------------------------------------------------
# Static data
# ---------------------------------------------------------------------------

SM_LOG_TEMP_MIN = -4.5
SM_LOG_TEMP_MAX = 4.0
SM_LOG_TEMP_POINTS = 341

data_path = os.path.join(os.path.dirname(__file__), "data")
SM_DOF_FILE = os.path.join(data_path, "standard_model_dof.dat")


class BathTables(NamedTuple):
    """Tabulated bath data, all arrays aligned with ``log_temp``."""
    log_temp: np.ndarray
    sqrt_gstar: np.ndarray
    heff: np.ndarray
    geff: np.ndarray


class BathAsymptotes(NamedTuple):
    """Validity window in ``log10(T)`` and the constants used outside it."""
    log_temp_min: float
    log_temp_max: float
    geff_front: float
    geff_back: float
    heff_front: float
    heff_back: float
    sqrt_gstar_front: float
    sqrt_gstar_back: float


SM_ASYMPTOTES = BathAsymptotes(
    log_temp_min=SM_LOG_TEMP_MIN,
    log_temp_max=SM_LOG_TEMP_MAX,
    geff_front=3.3839699989395835,
    geff_back=106.83,
    heff_front=3.9387999991430975,
    heff_back=106.83,
    sqrt_gstar_front=2.141289997868463,
    sqrt_gstar_back=10.3359,
)


def load_standard_model_tables(path: Optional[str] = None) -> BathTables:
    """
    Read the Standard-Model degrees-of-freedom table.

    Parameters
    ----------
    path : str, optional
        Whitespace-separated file with columns ``log10(T/GeV)``, ``sqrt(g*)``,
        ``h_eff``, ``g_eff`` and ``#`` comments. Defaults to the packaged
        table.

    Returns
    -------
    BathTables
        The grid is returned as ``linspace(-4.5, 4.0, 341)`` once the file's
        first column has been checked against it.

    Raises
    ------
    InvalidInputError
        If the file does not have four columns on the expected grid.
    """
    path = SM_DOF_FILE if path is None else path
    data = np.loadtxt(path, comments="#", dtype=float, ndmin=2)
    if data.shape != (SM_LOG_TEMP_POINTS, 4):
        raise InvalidInputError(
            f"load_standard_model_tables: expected a ({SM_LOG_TEMP_POINTS}, 4) table in {path}, got {data.shape}.")
    grid = np.linspace(SM_LOG_TEMP_MIN, SM_LOG_TEMP_MAX, SM_LOG_TEMP_POINTS)
    if not np.allclose(data[:, 0], grid, rtol=0.0, atol=1e-6):
        raise InvalidInputError(f"load_standard_model_tables: first column of {path} is not the log10(T) grid.")
    log.debug("load_standard_model_tables: read %d rows from %s", data.shape[0], path)
    return BathTables(grid, data[:, 1].copy(), data[:, 2].copy(), data[:, 3].copy())


# ---------------------------------------------------------------------------
# Bath object
# ---------------------------------------------------------------------------

class StandardModelBath:
    """
    Interpolated degrees of freedom of a thermal bath.

    Parameters
    ----------
    tables : BathTables
        Grid in ``log10(T)`` and the three aligned datasets.
    asymptotes : BathAsymptotes, optional
        Validity window and limiting constants. The window must lie inside the
        tabulated grid. Default: :data:`SM_ASYMPTOTES`.
    spline_config : SplineConfig, optional
        Applied identically to all three splines. Default: cubic, zero
        smoothing, ``"const"`` extrapolation.

    Raises
    ------
    InvalidInputError
        Bad grid/data (see :func:`build_spline`) or a window outside the grid.
    InitializationError
        If a spline cannot be fitted.

    Notes
    -----
    Instances are read-only after construction and safe to share between
    threads.
    """

    def __init__(self, tables: BathTables, asymptotes: BathAsymptotes = SM_ASYMPTOTES,
                 spline_config: SplineConfig = DEFAULT_SPLINE) -> None:
        log_temp = np.array(tables.log_temp, dtype=float)
        if log_temp.ndim != 1 or log_temp.size == 0:
            raise InvalidInputError("StandardModelBath: the log10(T) grid must be a non-empty 1D array.")
        if not asymptotes.log_temp_min < asymptotes.log_temp_max:
            raise InvalidInputError("StandardModelBath: log_temp_min must be smaller than log_temp_max.")

        self._spline_sqrt_gstar: UnivariateSpline = build_spline(log_temp, tables.sqrt_gstar, spline_config)
        self._spline_heff: UnivariateSpline = build_spline(log_temp, tables.heff, spline_config)
        self._spline_geff: UnivariateSpline = build_spline(log_temp, tables.geff, spline_config)

        if asymptotes.log_temp_min < log_temp[0] or asymptotes.log_temp_max > log_temp[-1]:
            raise InvalidInputError(
                f"StandardModelBath: window [{asymptotes.log_temp_min}, {asymptotes.log_temp_max}] "
                f"exceeds the tabulated grid [{log_temp[0]}, {log_temp[-1]}].")

        self._dspline_heff = self._spline_heff.derivative(1)
        self._dspline_geff = self._spline_geff.derivative(1)
        self.asymptotes = asymptotes
        self.spline_config = spline_config
        log.debug("StandardModelBath: %d nodes, window log10(T) in (%g, %g)",
                  log_temp.size, asymptotes.log_temp_min, asymptotes.log_temp_max)

    # --- three-piece evaluation -------------------------------------------
    def _piecewise(self, T: ArrayLike, spl, front: float, back: float, where: str) -> ArrayLike:
        T_arr = check_positive_temperature(T, where)
        L = np.log10(T_arr).reshape(-1)

        m_lo = L <= self.asymptotes.log_temp_min
        m_hi = L >= self.asymptotes.log_temp_max
        m_in = ~(m_lo | m_hi)

        out = np.empty_like(L, dtype=float)
        if np.any(m_in):
            out[m_in] = spl(L[m_in])
        out[m_lo] = front
        out[m_hi] = back
        return float(out[0]) if T_arr.ndim == 0 else out.reshape(T_arr.shape)

    def _piecewise_deriv(self, T: ArrayLike, dspl, where: str) -> ArrayLike:
        T_arr = check_positive_temperature(T, where)
        T_flat = T_arr.reshape(-1)
        L = np.log10(T_flat)

        m_in = (L > self.asymptotes.log_temp_min) & (L < self.asymptotes.log_temp_max)

        # d/dT = (d/dL) / (T ln 10); flat outside the window
        out = np.zeros_like(L, dtype=float)
        if np.any(m_in):
            out[m_in] = dspl(L[m_in]) / (T_flat[m_in] * _LN10)
        return float(out[0]) if T_arr.ndim == 0 else out.reshape(T_arr.shape)

    # --- degrees of freedom -----------------------------------------------
    def geff(self, T: ArrayLike) -> ArrayLike:
        """Degrees of freedom in energy, ``g_eff(T)``."""
        a = self.asymptotes
        return self._piecewise(T, self._spline_geff, a.geff_front, a.geff_back, "geff")

    def heff(self, T: ArrayLike) -> ArrayLike:
        """Degrees of freedom in entropy, ``h_eff(T)``."""
        a = self.asymptotes
        return self._piecewise(T, self._spline_heff, a.heff_front, a.heff_back, "heff")

    def sqrt_gstar(self, T: ArrayLike) -> ArrayLike:
        """
        ``sqrt(g*)(T)`` from its own tabulated data.

        The table was generated from ``(1 + T/(3h) dh/dT) h / sqrt(g)``; that
        relation is not re-evaluated here.
        """
        a = self.asymptotes
        return self._piecewise(T, self._spline_sqrt_gstar, a.sqrt_gstar_front, a.sqrt_gstar_back, "sqrt_gstar")

    def geff_deriv(self, T: ArrayLike) -> ArrayLike:
        """``d g_eff / dT``; exactly 0 outside the validity window."""
        return self._piecewise_deriv(T, self._dspline_geff, "geff_deriv")

    def heff_deriv(self, T: ArrayLike) -> ArrayLike:
        """``d h_eff / dT``; exactly 0 outside the validity window."""
        return self._piecewise_deriv(T, self._dspline_heff, "heff_deriv")

    # --- densities ----------------------------------------------------------
    def energy_density(self, T: ArrayLike) -> ArrayLike:
        """Bath energy density ``π²/30 g_eff(T) T⁴``."""
        T = _float_or_array(T)
        return pi**2 / 30.0 * self.geff(T) * T**4

    def energy_density_deriv(self, T: ArrayLike) -> ArrayLike:
        """``dρ/dT = π²/30 T³ (T g_eff'(T) + 4 g_eff(T))``."""
        T = _float_or_array(T)
        return pi**2 / 30.0 * T**3 * (T * self.geff_deriv(T) + 4.0 * self.geff(T))

    def entropy_density(self, T: ArrayLike) -> ArrayLike:
        """Bath entropy density ``2π²/45 h_eff(T) T³``."""
        T = _float_or_array(T)
        return 2.0 * pi**2 / 45.0 * self.heff(T) * T**3

    def entropy_density_deriv(self, T: ArrayLike) -> ArrayLike:
        """``ds/dT = 2π²/45 T² (T h_eff'(T) + 3 h_eff(T))``."""
        T = _float_or_array(T)
        return 2.0 * pi**2 / 45.0 * T**2 * (T * self.heff_deriv(T) + 3.0 * self.heff(T))


def _float_or_array(T: ArrayLike) -> ArrayLike:
    T_arr = np.asarray(T, dtype=float)
    return float(T_arr) if T_arr.ndim == 0 else T_arr


# ---------------------------------------------------------------------------
# Process-wide Standard-Model bath (built once, on first use)
# ---------------------------------------------------------------------------

_SM_BATH: Optional[StandardModelBath] = None
_SM_BATH_LOCK = threading.Lock()


def get_standard_model_bath() -> StandardModelBath:
    """
    Return the shared Standard-Model bath, building it on the first call.

    Construction happens once per process even when several threads call
    concurrently; later calls take no lock.
    """
    global _SM_BATH
    bath = _SM_BATH
    if bath is not None:
        return bath
    with _SM_BATH_LOCK:
        if _SM_BATH is None:
            log.debug("get_standard_model_bath: building splines from %s", SM_DOF_FILE)
            _SM_BATH = StandardModelBath(load_standard_model_tables())
        return _SM_BATH


def bath_geff(T: ArrayLike) -> ArrayLike:
    """
    Effective number of degrees of freedom in energy of the SM bath.

    Parameters
    ----------
    T : float or array-like
        Temperature in GeV, ``T > 0``. Scalar-in → scalar-out.

    Returns
    -------
    float or ndarray
        ``g_eff(T)``; ``3.38...`` below ``10^-4.5`` GeV and ``106.83`` above
        ``10^4`` GeV.
    """
    return get_standard_model_bath().geff(T)


def bath_heff(T: ArrayLike) -> ArrayLike:
    """Effective number of degrees of freedom in entropy of the SM bath."""
    return get_standard_model_bath().heff(T)


def bath_sqrt_gstar(T: ArrayLike) -> ArrayLike:
    """Square root of ``g*`` of the SM bath."""
    return get_standard_model_bath().sqrt_gstar(T)


def bath_geff_deriv(T: ArrayLike) -> ArrayLike:
    """Temperature derivative of :func:`bath_geff` (0 outside the tabulated window)."""
    return get_standard_model_bath().geff_deriv(T)


def bath_heff_deriv(T: ArrayLike) -> ArrayLike:
    """Temperature derivative of :func:`bath_heff` (0 outside the tabulated window)."""
    return get_standard_model_bath().heff_deriv(T)


def bath_energy_density(T: ArrayLike) -> ArrayLike:
    """Energy density of the SM bath, ``π²/30 g_eff T⁴``."""
    return get_standard_model_bath().energy_density(T)


def bath_energy_density_deriv(T: ArrayLike) -> ArrayLike:
    """Temperature derivative of :func:`bath_energy_density`."""
    return get_standard_model_bath().energy_density_deriv(T)


def bath_entropy_density(T: ArrayLike) -> ArrayLike:
    """Entropy density of the SM bath, ``2π²/45 h_eff T³``."""
    return get_standard_model_bath().entropy_density(T)


def bath_entropy_density_deriv(T: ArrayLike) -> ArrayLike:
    """Temperature derivative of :func:`bath_entropy_density`."""
    return get_standard_model_bath().entropy_density_deriv(T)
