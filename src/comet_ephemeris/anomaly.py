"""Kepler's equation and anomaly conversions for elliptical, parabolic, hyperbolic orbits.

Angles cross this module's boundary in degrees, except the eccentric anomaly,
which is returned (and accepted) in radians.
"""

from __future__ import annotations

import logging
import math
import sys

from comet_ephemeris.constants import (
    GAUSSIAN_K,
    HIGH_ECCENTRICITY_LIMIT,
    KEPLER_MAX_ITERATIONS,
    KEPLER_THRESHOLD,
    LOW_ECCENTRICITY_LIMIT,
    SMALL_MEAN_ANOMALY_RAD,
)
from comet_ephemeris.errors import ConvergenceFailure, DegenerateInputError, InvalidDomainError
from comet_ephemeris.regime import OrbitRegime, classify_orbit, unhandled_regime

logger = logging.getLogger(__name__)

TWOPI = 2.0 * math.pi

# Residuals below this (scaled by |M|) are at the limit of double precision.
_RESIDUAL_FLOOR = 16.0 * sys.float_info.epsilon


def _cbrt(x: float) -> float:
    """Real cube root, sign preserving."""
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


def acosh_checked(x: float) -> float:
    """Inverse hyperbolic cosine restricted to arguments above 1.

    Raises:
        InvalidDomainError: x <= 1 or NaN.
    """
    if not x > 1.0:
        raise InvalidDomainError(f'acosh argument must be > 1, got {x!r}')
    return math.acosh(x)


def _tolerance(eccentricity: float, mean_anomaly: float, threshold: float) -> float:
    return max(threshold * abs(1.0 - eccentricity), _RESIDUAL_FLOOR * max(1.0, mean_anomaly))


def _solve_elliptical(
    e: float,
    m: float,
    threshold: float,
    max_iterations: int,
) -> float:
    """Solve E - e sin E = m for 0 <= e < 1 (m, E in radians)."""
    revolutions = round(m / TWOPI)
    reduced = m - revolutions * TWOPI
    sign = -1.0 if reduced < 0.0 else 1.0
    reduced = abs(reduced)
    # The root of the reduced problem lies in [0, pi]; iterates are kept there.
    lower, upper = 0.0, math.pi
    tolerance = _tolerance(e, reduced, threshold)

    if e < LOW_ECCENTRICITY_LIMIT:
        ecc_anom = math.atan2(math.sin(reduced), math.cos(reduced) - e)
        ecc_anom -= (ecc_anom - e * math.sin(ecc_anom) - reduced) / (1.0 - e * math.cos(ecc_anom))
    elif e > HIGH_ECCENTRICITY_LIMIT and reduced < SMALL_MEAN_ANOMALY_RAD:
        ecc_anom = _cbrt(6.0 * reduced)
    else:
        ecc_anom = reduced
    ecc_anom = min(max(ecc_anom, lower), upper)

    residual = ecc_anom - e * math.sin(ecc_anom) - reduced
    for iteration in range(max_iterations):
        if abs(residual) < tolerance:
            logger.debug('Elliptical Kepler solve e=%.8f M=%.10f: %d Newton steps', e, reduced, iteration)
            return sign * ecc_anom + revolutions * TWOPI
        ecc_anom -= residual / (1.0 - e * math.cos(ecc_anom))
        ecc_anom = min(max(ecc_anom, lower), upper)
        residual = ecc_anom - e * math.sin(ecc_anom) - reduced
    if abs(residual) < tolerance:
        return sign * ecc_anom + revolutions * TWOPI
    logger.warning('Elliptical Kepler solve failed: e=%r M=%r residual=%.3e', e, reduced, residual)
    raise ConvergenceFailure(e, reduced, max_iterations, residual)


def _solve_hyperbolic(
    e: float,
    m: float,
    threshold: float,
    max_iterations: int,
) -> float:
    """Solve e sinh H - H = m for e > 1 (m, H in radians)."""
    sign = -1.0 if m < 0.0 else 1.0
    reduced = abs(m)
    tolerance = _tolerance(e, reduced, threshold)

    if reduced < e:
        # Near-parabolic-like: e sinh H - H ~ (e - 1) H + e H^3 / 6
        hyp_anom = _cbrt(6.0 * reduced / e)
    else:
        hyp_anom = math.asinh(reduced / e)

    residual = e * math.sinh(hyp_anom) - hyp_anom - reduced
    for iteration in range(max_iterations):
        if abs(residual) < tolerance:
            logger.debug('Hyperbolic Kepler solve e=%.8f M=%.10f: %d Newton steps', e, reduced, iteration)
            return sign * hyp_anom
        hyp_anom -= residual / (e * math.cosh(hyp_anom) - 1.0)
        hyp_anom = max(hyp_anom, 0.0)
        residual = e * math.sinh(hyp_anom) - hyp_anom - reduced
    if abs(residual) < tolerance:
        return sign * hyp_anom
    logger.warning('Hyperbolic Kepler solve failed: e=%r M=%r residual=%.3e', e, reduced, residual)
    raise ConvergenceFailure(e, reduced, max_iterations, residual)


def solve_eccentric_anomaly(
    eccentricity: float,
    mean_anomaly_deg: float,
    *,
    threshold: float = KEPLER_THRESHOLD,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> float:
    """Solve Kepler's equation for the eccentric (or hyperbolic) anomaly.

    Elliptical orbits solve E - e sin E = M; hyperbolic orbits solve
    e sinh E - E = M. Whole revolutions and the sign of M are carried through,
    so the returned E reproduces the input M exactly up to the tolerance.

    Parameters:
        eccentricity: e >= 0, e != 1.
        mean_anomaly_deg: Mean anomaly M in degrees (any sign, any magnitude).
        threshold: Convergence requires |residual| < threshold * |1 - e|.
        max_iterations: Newton iteration cap.

    Returns:
        Eccentric anomaly E in radians.

    Raises:
        DegenerateInputError: e == 1; parabolic orbits use barker_true_anomaly().
        ConvergenceFailure: Tolerance not met within max_iterations.
        ValueError: Negative eccentricity.
    """
    m = math.radians(mean_anomaly_deg)
    regime = classify_orbit(eccentricity)
    if regime is OrbitRegime.ELLIPTICAL:
        return _solve_elliptical(eccentricity, m, threshold, max_iterations)
    if regime is OrbitRegime.HYPERBOLIC:
        return _solve_hyperbolic(eccentricity, m, threshold, max_iterations)
    if regime is OrbitRegime.PARABOLIC:
        raise DegenerateInputError(
            'Eccentric anomaly is undefined for a parabolic orbit (e == 1); '
            'use barker_true_anomaly()'
        )
    raise unhandled_regime(regime)


def barker_true_anomaly(
    perihelion_distance: float,
    days_since_perihelion: float,
    gaussian_k: float = GAUSSIAN_K,
) -> float:
    """True anomaly on a parabolic orbit from Barker's equation s^3 + 3s - W = 0.

    Parameters:
        perihelion_distance: q in AU (> 0).
        days_since_perihelion: Signed time from perihelion passage (days).
        gaussian_k: Gaussian gravitational constant.

    Returns:
        True anomaly in degrees, same sign as days_since_perihelion.
    """
    if perihelion_distance <= 0.0:
        raise ValueError(f'Perihelion distance must be positive, got {perihelion_distance!r}')
    w = 3.0 * gaussian_k / math.sqrt(2.0) * days_since_perihelion / perihelion_distance**1.5
    # Solve for |g| and restore the sign: avoids cancellation in g + sqrt(g^2 + 1) for g < 0.
    g = abs(w) / 2.0
    y = _cbrt(g + math.sqrt(g * g + 1.0))
    s = math.copysign(y - 1.0 / y, w)
    return math.degrees(2.0 * math.atan(s))


def true_anomaly_from_eccentric(eccentricity: float, eccentric_anomaly_rad: float) -> float:
    """Convert eccentric (or hyperbolic) anomaly in radians to true anomaly in degrees.

    For elliptical orbits whole revolutions of E carry over to the true anomaly.

    Raises:
        DegenerateInputError: e == 1.
    """
    e = eccentricity
    regime = classify_orbit(e)
    if regime is OrbitRegime.ELLIPTICAL:
        revolutions = round(eccentric_anomaly_rad / TWOPI)
        reduced = eccentric_anomaly_rad - revolutions * TWOPI
        nu = 2.0 * math.atan(math.sqrt((1.0 + e) / (1.0 - e)) * math.tan(reduced / 2.0))
        return math.degrees(nu) + 360.0 * revolutions
    if regime is OrbitRegime.HYPERBOLIC:
        nu = 2.0 * math.atan(math.sqrt((e + 1.0) / (e - 1.0)) * math.tanh(eccentric_anomaly_rad / 2.0))
        return math.degrees(nu)
    if regime is OrbitRegime.PARABOLIC:
        raise DegenerateInputError('Eccentric anomaly is undefined for a parabolic orbit (e == 1)')
    raise unhandled_regime(regime)


def eccentric_anomaly_from_true(eccentricity: float, true_anomaly_deg: float) -> float:
    """Inverse of true_anomaly_from_eccentric: true anomaly (deg) to E (radians).

    Raises:
        DegenerateInputError: e == 1.
        InvalidDomainError: Hyperbolic true anomaly at or beyond the asymptote.
    """
    e = eccentricity
    nu = math.radians(true_anomaly_deg)
    regime = classify_orbit(e)
    if regime is OrbitRegime.ELLIPTICAL:
        revolutions = round(nu / TWOPI)
        reduced = nu - revolutions * TWOPI
        ecc_anom = math.atan2(math.sqrt(1.0 - e * e) * math.sin(reduced), e + math.cos(reduced))
        return ecc_anom + revolutions * TWOPI
    if regime is OrbitRegime.HYPERBOLIC:
        denom = 1.0 + e * math.cos(nu)
        if denom <= 0.0:
            raise InvalidDomainError(
                f'True anomaly {true_anomaly_deg!r} deg is beyond the asymptote for e={e!r}'
            )
        # cosh H = (e + cos nu) / (1 + e cos nu), written as 1 + (non-negative term)
        cosh_h = 1.0 + (e - 1.0) * (1.0 - math.cos(nu)) / denom
        if cosh_h == 1.0:
            # perihelion
            return 0.0
        return math.copysign(acosh_checked(cosh_h), nu)
    if regime is OrbitRegime.PARABOLIC:
        raise DegenerateInputError('Eccentric anomaly is undefined for a parabolic orbit (e == 1)')
    raise unhandled_regime(regime)


def mean_anomaly_from_true(eccentricity: float, true_anomaly_deg: float) -> float:
    """Mean anomaly in degrees for a true anomaly in degrees (non-parabolic orbits)."""
    e = eccentricity
    regime = classify_orbit(e)
    if regime is OrbitRegime.ELLIPTICAL:
        ecc_anom = eccentric_anomaly_from_true(e, true_anomaly_deg)
        return math.degrees(ecc_anom - e * math.sin(ecc_anom))
    if regime is OrbitRegime.HYPERBOLIC:
        hyp_anom = eccentric_anomaly_from_true(e, true_anomaly_deg)
        return math.degrees(e * math.sinh(hyp_anom) - hyp_anom)
    if regime is OrbitRegime.PARABOLIC:
        raise DegenerateInputError('Mean anomaly is undefined for a parabolic orbit (e == 1)')
    raise unhandled_regime(regime)
