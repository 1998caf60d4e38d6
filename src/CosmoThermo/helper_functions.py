# Helper functions: errors, quadrature and spline back-ends

import logging
import numpy as np
from collections import namedtuple
from typing import Callable, NamedTuple, Union
from scipy import integrate
from scipy.interpolate import UnivariateSpline

log = logging.getLogger(__name__)

Number = Union[float, np.floating]
ArrayLike = Union[float, np.ndarray]

##########################################
# Errors - Exceptions raised by the package
##########################################

class CosmoThermoError(Exception):
    """Base class for every error raised by CosmoThermo."""
    pass


class InvalidInputError(CosmoThermoError, ValueError):
    """
    Raised for physically or structurally invalid inputs: negative masses,
    non-positive temperatures or degeneracies, malformed ``spin2``, grids that
    are not strictly ascending, mismatched or empty tables, unsupported
    configuration values.
    """
    pass


class IntegrationError(CosmoThermoError):
    """Raised when the quadrature cannot meet the requested tolerance."""
    pass


class InitializationError(CosmoThermoError):
    """Raised when a spline cannot be built from the supplied data."""
    pass


###############################################################
# Miscellaneous functions - Functions to help others in general
###############################################################

def _asarray(x: ArrayLike) -> np.ndarray:
    """Convert to ndarray without copying unnecessarily."""
    return np.asarray(x)


def _is_scalar(x: ArrayLike) -> bool:
    """True if `x` is a scalar (0-d array or python/scalar numpy types)."""
    return np.ndim(x) == 0


def _apply_elementwise(f: Callable[[float], float], x: ArrayLike) -> ArrayLike:
    """
    Apply scalar function `f` element-wise to `x` (scalar or array).
    Preserves scalar-in → scalar-out. Exceptions raised by `f` propagate:
    an element that cannot be evaluated is never replaced by NaN.
    """
    if _is_scalar(x):
        return f(float(x))

    x_arr = _asarray(x).astype(np.float64, copy=False)
    out = np.empty(x_arr.shape, dtype=np.float64)
    for idx in np.ndindex(x_arr.shape):
        out[idx] = f(float(x_arr[idx]))
    return out


def check_positive_temperature(T: ArrayLike, where: str) -> np.ndarray:
    """Return `T` as a float array, raising InvalidInputError unless every entry is finite and > 0."""
    T_arr = _asarray(T).astype(np.float64, copy=False)
    if not np.all(np.isfinite(T_arr)) or np.any(T_arr <= 0.0):
        raise InvalidInputError(f"{where}: temperature must be finite and positive, got {T!r}.")
    return T_arr


####################################################################################
# Numerical integration - Semi-infinite Gauss-Kronrod quadrature (QUADPACK qagi)
####################################################################################

# qagi maps [a, inf) onto (0, 1] and always applies the 15-point Kronrod rule.
QAGI_RULE_ORDER = 15

# Smallest relative tolerance QUADPACK accepts when epsabs <= 0.
_MIN_EPSREL = 50.0 * np.finfo(float).eps


class QuadratureConfig(NamedTuple):
    """
    Fixed configuration of the semi-infinite quadrature.

    Parameters
    ----------
    absolute_tolerance :
        Absolute error goal (``epsabs``). Zero means the relative goal alone
        controls convergence.
    relative_tolerance :
        Relative error goal (``epsrel``).
    rule_order :
        Number of Gauss-Kronrod points of the interval rule. QUADPACK's
        semi-infinite driver only provides the 15-point rule.
    limit :
        Maximum number of subintervals (the iteration budget).
    """
    absolute_tolerance: float = 0.0
    relative_tolerance: float = 1e-8
    rule_order: int = QAGI_RULE_ORDER
    limit: int = 200


DEFAULT_QUADRATURE = QuadratureConfig()

QuadResult = namedtuple("QuadResult", "value error_estimate")


def _check_quadrature_config(config: QuadratureConfig) -> None:
    if config.rule_order != QAGI_RULE_ORDER:
        raise InvalidInputError(
            f"rule_order={config.rule_order} is not available; the semi-infinite "
            f"Gauss-Kronrod rule has {QAGI_RULE_ORDER} points.")
    if config.absolute_tolerance < 0.0 or config.relative_tolerance < 0.0:
        raise InvalidInputError("Quadrature tolerances must be non-negative.")
    if config.absolute_tolerance <= 0.0 and config.relative_tolerance < _MIN_EPSREL:
        raise InvalidInputError(
            f"relative_tolerance must be >= {_MIN_EPSREL:.3g} when absolute_tolerance is 0.")
    if int(config.limit) < 1:
        raise InvalidInputError("Quadrature limit must be a positive integer.")


def integrate_to_infinity(f: Callable[[float], float], a: float,
                          config: QuadratureConfig = DEFAULT_QUADRATURE) -> QuadResult:
    """
    Integrate `f` over ``[a, +inf)`` with adaptive Gauss-Kronrod quadrature.

    Parameters
    ----------
    f : callable
        Real integrand ``f(z) -> float``.
    a : float
        Finite lower bound.
    config : QuadratureConfig, optional
        Tolerances, rule order and subdivision budget.

    Returns
    -------
    QuadResult
        Named tuple ``(value, error_estimate)``.

    Raises
    ------
    IntegrationError
        If QUADPACK reports that the tolerance could not be met (subdivision
        limit, roundoff, divergence) or the result is not finite.
    InvalidInputError
        If `config` asks for something the back-end cannot do.
    """
    _check_quadrature_config(config)
    out = integrate.quad(f, a, np.inf,
                         epsabs=config.absolute_tolerance,
                         epsrel=config.relative_tolerance,
                         limit=int(config.limit),
                         full_output=1)
    # quad appends a message to the returned tuple only when ier != 0
    if len(out) > 3:
        log.debug("integrate_to_infinity: a=%g failed after %d subintervals: %s",
                  a, out[2].get("last", -1), out[3])
        raise IntegrationError(f"Quadrature on [{a:g}, inf) did not converge: {out[3]}")
    value, abserr = float(out[0]), float(out[1])
    if not np.isfinite(value):
        raise IntegrationError(f"Quadrature on [{a:g}, inf) returned a non-finite value ({value}).")
    return QuadResult(value, abserr)


######################################################################################
# Interpolation Functions - exact interpolating splines through tabulated data
######################################################################################

# FITPACK extrapolation modes accepted by UnivariateSpline(ext=...)
_EXTRAPOLATION_MODES = {"extrapolate": 0, "zeros": 1, "raise": 2, "const": 3}


class SplineConfig(NamedTuple):
    """
    Configuration of an interpolating spline.

    Parameters
    ----------
    degree :
        Spline degree ``k`` (1 <= k <= 5).
    smoothing :
        FITPACK smoothing factor ``s``; 0 forces exact interpolation.
    extrapolation :
        One of ``"extrapolate"``, ``"zeros"``, ``"raise"``, ``"const"``.
    """
    degree: int = 3
    smoothing: float = 0.0
    extrapolation: str = "const"


DEFAULT_SPLINE = SplineConfig()


def build_spline(x: ArrayLike, y: ArrayLike, config: SplineConfig = DEFAULT_SPLINE) -> UnivariateSpline:
    """
    Build a univariate spline through ``(x, y)``.

    Parameters
    ----------
    x : array_like
        Strictly ascending abscissae.
    y : array_like
        Ordinates, same length as `x`.
    config : SplineConfig, optional
        Degree, smoothing factor and extrapolation mode.

    Returns
    -------
    scipy.interpolate.UnivariateSpline
        ``spl(x)`` evaluates, ``spl(x, nu=1)`` or ``spl.derivative(1)(x)``
        differentiates.

    Raises
    ------
    InvalidInputError
        Non-1D, empty, non-finite, mismatched or non-ascending inputs, too few
        points for the degree, or an unknown extrapolation mode.
    InitializationError
        If FITPACK rejects the data.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.ndim != 1 or y.ndim != 1:
        raise InvalidInputError("build_spline: x and y must be 1D.")
    if x.size == 0 or y.size == 0:
        raise InvalidInputError("build_spline: empty data.")
    if x.size != y.size:
        raise InvalidInputError(f"build_spline: length mismatch ({x.size} abscissae, {y.size} values).")
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise InvalidInputError("build_spline: data must be finite.")
    if np.any(np.diff(x) <= 0.0):
        raise InvalidInputError("build_spline: x must be strictly ascending.")

    k = int(config.degree)
    if not 1 <= k <= 5:
        raise InvalidInputError(f"build_spline: degree must be in 1..5, got {config.degree}.")
    if x.size <= k:
        raise InvalidInputError(f"build_spline: need more than {k} points for degree {k}, got {x.size}.")
    if config.smoothing < 0.0:
        raise InvalidInputError("build_spline: smoothing factor must be non-negative.")
    try:
        ext = _EXTRAPOLATION_MODES[config.extrapolation]
    except KeyError as exc:
        msg = (f"build_spline: unknown extrapolation mode {config.extrapolation!r}; "
               f"choose one of {sorted(_EXTRAPOLATION_MODES)}.")
        raise InvalidInputError(msg) from exc

    try:
        spl = UnivariateSpline(x, y, k=k, s=float(config.smoothing), ext=ext)
    except ValueError as exc:
        raise InitializationError(f"build_spline: FITPACK rejected the data ({exc}).") from exc
    log.debug("build_spline: %d nodes on [%g, %g], k=%d, s=%g, ext=%s",
              x.size, x[0], x[-1], k, config.smoothing, config.extrapolation)
    return spl
