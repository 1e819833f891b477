"""Two-body orbit solver and ephemeris tools for comets.

Computes true, mean and eccentric anomalies (Kepler's equation for elliptical
and hyperbolic orbits, Barker's equation for parabolic ones), heliocentric
ecliptic and equatorial positions via the Gaussian P/Q vectors, velocities,
and text ephemeris reports. Calendar dates are converted with rms-julian.
"""

from comet_ephemeris.constants import DEFAULT_CONSTANTS, PhysicalConstants
from comet_ephemeris.elements import EARTH, CometElements
from comet_ephemeris.errors import (
    ConvergenceFailure,
    DegenerateInputError,
    InvalidDomainError,
    OrbitError,
)
from comet_ephemeris.kinematics import OrbitKinematics, OrbitState
from comet_ephemeris.regime import OrbitRegime, classify_orbit, is_near_parabolic

__all__: list[str] = [
    'DEFAULT_CONSTANTS',
    'EARTH',
    'CometElements',
    'ConvergenceFailure',
    'DegenerateInputError',
    'InvalidDomainError',
    'OrbitError',
    'OrbitKinematics',
    'OrbitRegime',
    'OrbitState',
    'PhysicalConstants',
    'classify_orbit',
    'is_near_parabolic',
]
