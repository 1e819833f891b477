"""Fixed constants: physical constants, time scales, solver thresholds.

Module-level literals seed ``DEFAULT_CONSTANTS``; code that computes orbits takes a
``PhysicalConstants`` instance so an alternate constant set can be substituted.
"""

from __future__ import annotations

from dataclasses import dataclass

# Physical constants (IAU 2012 au, exact speed of light, Gauss)
AU_KM = 149597870.7
SPEED_OF_LIGHT_KM_S = 299792.458
GAUSSIAN_K = 0.01720209895  # AU^(3/2) / day, mass of the Sun = 1

# Time
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.25  # Julian year
DAYS_PER_MILLENNIUM = 365250.0
J2000_JD = 2451545.0  # 2000-01-01 12:00 TT
JD_OF_DAY_ZERO = 2451544.5  # rms-julian day 0 (2000-01-01 00:00) as a Julian Day

# Angle
DEGREES_PER_CIRCLE = 360.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0

# Obliquity of the ecliptic, linear model anchored at J2000 (arcsec, arcsec/millennium)
OBLIQUITY_J2000_ARCSEC = 84381.448
OBLIQUITY_RATE_ARCSEC = -0.024

# Solver thresholds
KEPLER_THRESHOLD = 1e-8
KEPLER_MAX_ITERATIONS = 50
LOW_ECCENTRICITY_LIMIT = 0.3
HIGH_ECCENTRICITY_LIMIT = 0.8
SMALL_MEAN_ANOMALY_RAD = 1.0

# Near-parabolic band (informational only)
NEAR_PARABOLIC_MIN_E = 0.98
NEAR_PARABOLIC_MAX_E = 1.02

# Default finite-difference half step for numerical velocity (one second)
DEFAULT_VELOCITY_STEP_DAYS = 1.0 / SECONDS_PER_DAY


@dataclass(frozen=True)
class PhysicalConstants:
    """Constant set used by OrbitKinematics.

    Frozen so one instance can be shared freely between concurrent queries.
    """

    au_km: float = AU_KM
    speed_of_light_km_s: float = SPEED_OF_LIGHT_KM_S
    gaussian_k: float = GAUSSIAN_K
    seconds_per_day: float = SECONDS_PER_DAY
    days_per_year: float = DAYS_PER_YEAR
    j2000_jd: float = J2000_JD
    kepler_threshold: float = KEPLER_THRESHOLD
    max_iterations: int = KEPLER_MAX_ITERATIONS

    def __post_init__(self) -> None:
        """Reject non-physical values."""
        for name in ('au_km', 'speed_of_light_km_s', 'gaussian_k', 'seconds_per_day', 'days_per_year'):
            if getattr(self, name) <= 0.0:
                raise ValueError(f'{name} must be positive, got {getattr(self, name)!r}')
        if self.kepler_threshold <= 0.0:
            raise ValueError(f'kepler_threshold must be positive, got {self.kepler_threshold!r}')
        if self.max_iterations < 1:
            raise ValueError(f'max_iterations must be at least 1, got {self.max_iterations!r}')

    @property
    def mu_au3_day2(self) -> float:
        """Gravitational parameter of the Sun, k^2 (AU^3/day^2)."""
        return self.gaussian_k * self.gaussian_k

    @property
    def au_per_day_to_km_s(self) -> float:
        """Multiply a speed in AU/day by this to get km/s."""
        return self.au_km / self.seconds_per_day

    @property
    def light_time_days_per_au(self) -> float:
        """Light travel time across one AU, in days."""
        return self.au_km / self.speed_of_light_km_s / self.seconds_per_day


DEFAULT_CONSTANTS = PhysicalConstants()
