"""Orbit regime classification by eccentricity.

The regime is never stored: every query classifies again from the eccentricity
and the parabolic tag, so the two can never drift apart.
"""

from __future__ import annotations

import enum
import math

from comet_ephemeris.constants import NEAR_PARABOLIC_MAX_E, NEAR_PARABOLIC_MIN_E


class OrbitRegime(enum.Enum):
    """Conic section family of a two-body orbit."""

    ELLIPTICAL = 'elliptical'
    PARABOLIC = 'parabolic'
    HYPERBOLIC = 'hyperbolic'


def classify_orbit(eccentricity: float, parabolic: bool = False) -> OrbitRegime:
    """Return the regime for an eccentricity and optional parabolic tag.

    Parameters:
        eccentricity: Orbital eccentricity (>= 0).
        parabolic: Explicit parabolic-orbit tag; wins over the eccentricity.

    Raises:
        ValueError: Negative or non-finite eccentricity.
    """
    if not math.isfinite(eccentricity) or eccentricity < 0.0:
        raise ValueError(f'Eccentricity must be finite and >= 0, got {eccentricity!r}')
    if parabolic or eccentricity == 1.0:
        return OrbitRegime.PARABOLIC
    if eccentricity < 1.0:
        return OrbitRegime.ELLIPTICAL
    return OrbitRegime.HYPERBOLIC


def is_near_parabolic(eccentricity: float) -> bool:
    """True for 0.98 < e < 1.02 excluding e == 1.

    Informational only; solvers select their path from classify_orbit().
    """
    return NEAR_PARABOLIC_MIN_E < eccentricity < NEAR_PARABOLIC_MAX_E and eccentricity != 1.0


def unhandled_regime(regime: OrbitRegime) -> ValueError:
    """Error for a regime missing from a dispatch chain."""
    return ValueError(f'Unhandled orbit regime {regime!r}')
