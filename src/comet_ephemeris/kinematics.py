"""Two-body kinematics of a comet: anomalies, distance, position, velocity.

OrbitKinematics combines the anomaly solver and frame transforms. Every query is
a pure function of the element set and a Julian Day; the regime is classified
again on each call.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from comet_ephemeris.anomaly import (
    barker_true_anomaly,
    solve_eccentric_anomaly,
    true_anomaly_from_eccentric,
)
from comet_ephemeris.config import get_velocity_step_days
from comet_ephemeris.constants import DEFAULT_CONSTANTS, PhysicalConstants
from comet_ephemeris.elements import EARTH, CometElements
from comet_ephemeris.errors import DegenerateInputError, InvalidDomainError
from comet_ephemeris.frames import (
    ecliptic_from_orbit_plane,
    ecliptic_to_equatorial,
    gaussian_vectors,
    obliquity_rad,
    project_pq,
)
from comet_ephemeris.regime import OrbitRegime, classify_orbit, unhandled_regime
from comet_ephemeris.vectors import Vector2, Vector3, separation_distance

logger = logging.getLogger(__name__)

FRAMES = ('ecliptic', 'equatorial')


@dataclass(frozen=True)
class OrbitState:
    """Snapshot of a comet's heliocentric state at one Julian Day.

    Positions in AU, velocity in AU/day (analytic, equatorial frame).
    Mean and eccentric anomaly are None for parabolic orbits.
    """

    jd: float
    regime: OrbitRegime
    near_parabolic: bool
    days_since_perihelion: float
    mean_anomaly_deg: float | None
    eccentric_anomaly_rad: float | None
    true_anomaly_deg: float
    distance_au: float
    plane_position: Vector2
    ecliptic_position: Vector3
    equatorial_position: Vector3
    velocity: Vector3
    speed_km_s: float


class OrbitKinematics:
    """Position and velocity of a body on a Keplerian heliocentric orbit.

    Parameters:
        constants: Physical constants and solver settings.
        velocity_step_days: Half step for numerical_velocity(); defaults to the
            configured value (one second unless COMET_EPHEMERIS_STEP_SECONDS is set).
    """

    def __init__(
        self,
        constants: PhysicalConstants = DEFAULT_CONSTANTS,
        velocity_step_days: float | None = None,
    ) -> None:
        self.constants = constants
        if velocity_step_days is None:
            velocity_step_days = get_velocity_step_days()
        if not velocity_step_days > 0.0:
            raise ValueError(f'velocity_step_days must be positive, got {velocity_step_days!r}')
        self.velocity_step_days = velocity_step_days

    # Orbit shape

    @staticmethod
    def regime(elements: CometElements) -> OrbitRegime:
        return classify_orbit(elements.eccentricity, elements.parabolic)

    @staticmethod
    def days_since_perihelion(elements: CometElements, jd: float) -> float:
        """Signed days from perihelion passage to jd."""
        return jd - elements.perihelion_jd

    def semi_major_axis(self, elements: CometElements) -> float:
        """Semi-major axis in AU, negative for hyperbolic orbits.

        Raises:
            DegenerateInputError: Parabolic orbit.
        """
        regime = self.regime(elements)
        if regime is OrbitRegime.PARABOLIC:
            raise DegenerateInputError(f'Semi-major axis is undefined for parabolic orbit of {elements.name}')
        if regime is OrbitRegime.ELLIPTICAL or regime is OrbitRegime.HYPERBOLIC:
            return elements.perihelion_distance / (1.0 - elements.eccentricity)
        raise unhandled_regime(regime)

    @staticmethod
    def reciprocal_semi_major_axis(elements: CometElements) -> float:
        """1/a in 1/AU; zero for parabolic, negative for hyperbolic orbits."""
        return (1.0 - elements.eccentricity) / elements.perihelion_distance

    def _require_elliptical(self, elements: CometElements, quantity: str) -> float:
        if self.regime(elements) is not OrbitRegime.ELLIPTICAL:
            raise DegenerateInputError(
                f'{quantity} is only defined for elliptical orbits '
                f'({elements.name} has e={elements.eccentricity})'
            )
        return self.semi_major_axis(elements)

    def period_years(self, elements: CometElements) -> float:
        """Orbital period in Julian years (elliptical orbits only)."""
        a = self._require_elliptical(elements, 'Orbital period')
        c = self.constants
        return 2.0 * math.pi * a**1.5 / c.gaussian_k / c.days_per_year

    def aphelion_distance(self, elements: CometElements) -> float:
        """Aphelion distance in AU (elliptical orbits only)."""
        a = self._require_elliptical(elements, 'Aphelion distance')
        return a * (1.0 + elements.eccentricity)

    def mean_motion_deg_per_day(self, elements: CometElements) -> float:
        """Mean motion k / |a|^(3/2) in degrees per day.

        Raises:
            DegenerateInputError: Parabolic orbit.
        """
        a = self.semi_major_axis(elements)
        return math.degrees(self.constants.gaussian_k / abs(a) ** 1.5)

    # Anomalies

    def mean_anomaly(self, elements: CometElements, jd: float) -> float:
        """Mean anomaly in degrees (unreduced, signed).

        Raises:
            DegenerateInputError: Parabolic orbit.
        """
        return self.mean_motion_deg_per_day(elements) * self.days_since_perihelion(elements, jd)

    def eccentric_anomaly(self, elements: CometElements, jd: float) -> float:
        """Eccentric (or hyperbolic) anomaly in radians.

        Raises:
            DegenerateInputError: Parabolic orbit.
            ConvergenceFailure: Solver did not converge.
        """
        regime = self.regime(elements)
        if regime is OrbitRegime.PARABOLIC:
            raise DegenerateInputError(f'Eccentric anomaly is undefined for parabolic orbit of {elements.name}')
        if regime is OrbitRegime.ELLIPTICAL or regime is OrbitRegime.HYPERBOLIC:
            return solve_eccentric_anomaly(
                elements.eccentricity,
                self.mean_anomaly(elements, jd),
                threshold=self.constants.kepler_threshold,
                max_iterations=self.constants.max_iterations,
            )
        raise unhandled_regime(regime)

    def true_anomaly(self, elements: CometElements, jd: float) -> float:
        """True anomaly in degrees (Barker's equation for parabolic orbits)."""
        regime = self.regime(elements)
        if regime is OrbitRegime.PARABOLIC:
            return barker_true_anomaly(
                elements.perihelion_distance,
                self.days_since_perihelion(elements, jd),
                self.constants.gaussian_k,
            )
        if regime is OrbitRegime.ELLIPTICAL or regime is OrbitRegime.HYPERBOLIC:
            ecc_anom = self.eccentric_anomaly(elements, jd)
            return true_anomaly_from_eccentric(elements.eccentricity, ecc_anom)
        raise unhandled_regime(regime)

    # Distance and position

    @staticmethod
    def distance(perihelion_distance: float, eccentricity: float, true_anomaly_deg: float) -> float:
        """Heliocentric distance r in AU for (q, e, nu).

        Raises:
            InvalidDomainError: Hyperbolic true anomaly at or beyond the asymptote.
        """
        q = perihelion_distance
        e = eccentricity
        nu = math.radians(true_anomaly_deg)
        regime = classify_orbit(e)
        if regime is OrbitRegime.PARABOLIC:
            t = math.tan(nu / 2.0)
            return q * (1.0 + t * t)
        if regime is OrbitRegime.ELLIPTICAL or regime is OrbitRegime.HYPERBOLIC:
            denom = 1.0 + e * math.cos(nu)
            if denom <= 0.0:
                raise InvalidDomainError(f'True anomaly {true_anomaly_deg!r} deg unreachable for e={e!r}')
            return q * (1.0 + e) / denom
        raise unhandled_regime(regime)

    def heliocentric_distance(self, elements: CometElements, jd: float) -> float:
        """r in AU at jd."""
        nu = self.true_anomaly(elements, jd)
        return self.distance(elements.perihelion_distance, elements.eccentricity, nu)

    def orbit_plane_position(self, elements: CometElements, jd: float) -> Vector2:
        """(r cos nu, r sin nu) in AU; x axis toward perihelion."""
        nu = self.true_anomaly(elements, jd)
        r = self.distance(elements.perihelion_distance, elements.eccentricity, nu)
        nu_rad = math.radians(nu)
        return Vector2(r * math.cos(nu_rad), r * math.sin(nu_rad))

    def frame_obliquity(self, elements: CometElements, frame: str) -> float:
        """Obliquity (radians) for the requested frame: 0 for ecliptic, epoch value for equatorial."""
        if frame == 'ecliptic':
            return 0.0
        if frame == 'equatorial':
            return obliquity_rad(elements.epoch_jd, self.constants.j2000_jd)
        raise ValueError(f'Invalid frame {frame!r}; expected one of {", ".join(FRAMES)}')

    def basis(self, elements: CometElements, frame: str = 'equatorial') -> tuple[Vector3, Vector3]:
        """Gaussian P, Q vectors of the orbit in the requested frame."""
        return gaussian_vectors(
            elements.inclination_deg,
            elements.node_deg,
            elements.arg_perihelion_deg,
            self.frame_obliquity(elements, frame),
        )

    def position(self, elements: CometElements, jd: float, frame: str = 'equatorial') -> Vector3:
        """Heliocentric position in AU, projected with the P/Q vectors."""
        p, q = self.basis(elements, frame)
        plane = self.orbit_plane_position(elements, jd)
        return project_pq(plane.x, plane.y, p, q)

    def ecliptic_position(self, elements: CometElements, jd: float) -> Vector3:
        return self.position(elements, jd, 'ecliptic')

    def equatorial_position(self, elements: CometElements, jd: float) -> Vector3:
        return self.position(elements, jd, 'equatorial')

    def ecliptic_position_by_rotation(self, elements: CometElements, jd: float) -> Vector3:
        """Ecliptic position via direct rotation of the planar point (no P/Q vectors)."""
        plane = self.orbit_plane_position(elements, jd)
        return ecliptic_from_orbit_plane(
            plane.x,
            plane.y,
            elements.inclination_deg,
            elements.node_deg,
            elements.arg_perihelion_deg,
        )

    # Velocity

    def numerical_velocity(
        self,
        elements: CometElements,
        jd: float,
        frame: str = 'equatorial',
        step_days: float | None = None,
    ) -> Vector3:
        """Velocity in AU/day by central finite differences of position.

        Evaluates position at jd - step and jd + step. Carries the truncation
        error of central differencing; analytic_velocity() is exact.
        """
        h = self.velocity_step_days if step_days is None else step_days
        if not h > 0.0:
            raise ValueError(f'step_days must be positive, got {h!r}')
        before = self.position(elements, jd - h, frame)
        after = self.position(elements, jd + h, frame)
        return (after - before).scaled(1.0 / (2.0 * h))

    def analytic_plane_velocity(self, elements: CometElements, jd: float) -> Vector2:
        """Closed-form orbit-plane velocity in AU/day."""
        e = elements.eccentricity
        regime = self.regime(elements)
        if regime is OrbitRegime.ELLIPTICAL:
            a = self.semi_major_axis(elements)
            n = self.constants.gaussian_k / a**1.5
            ecc_anom = self.eccentric_anomaly(elements, jd)
            denom = 1.0 - e * math.cos(ecc_anom)
            return Vector2(
                -a * n * math.sin(ecc_anom) / denom,
                a * n * math.sqrt(1.0 - e * e) * math.cos(ecc_anom) / denom,
            )
        if regime is OrbitRegime.PARABOLIC or regime is OrbitRegime.HYPERBOLIC:
            semi_parameter = elements.perihelion_distance * (1.0 + e)
            nu = math.radians(self.true_anomaly(elements, jd))
            c = math.sqrt(self.constants.mu_au3_day2 / semi_parameter)
            return Vector2(-c * math.sin(nu), c * (e + math.cos(nu)))
        raise unhandled_regime(regime)

    def analytic_velocity(self, elements: CometElements, jd: float, frame: str = 'equatorial') -> Vector3:
        """Closed-form heliocentric velocity in AU/day."""
        p, q = self.basis(elements, frame)
        v = self.analytic_plane_velocity(elements, jd)
        return project_pq(v.x, v.y, p, q)

    def speed_km_s(self, velocity: Vector3 | Vector2) -> float:
        """Convert a velocity in AU/day to a speed in km/s."""
        return velocity.norm() * self.constants.au_per_day_to_km_s

    # Observer geometry

    @staticmethod
    def separation_distance(a: Vector3, b: Vector3) -> float:
        """Euclidean distance between two heliocentric positions, in AU."""
        return separation_distance(a, b)

    def light_time_days(self, distance_au: float) -> float:
        """One-way light travel time in days for a distance in AU."""
        return distance_au * self.constants.light_time_days_per_au

    def geocentric_position(
        self,
        elements: CometElements,
        jd: float,
        frame: str = 'equatorial',
        observer: CometElements = EARTH,
    ) -> Vector3:
        """Observer-to-comet vector in AU.

        Both bodies are placed in the ecliptic frame first so that the equatorial
        rotation uses a single obliquity, the comet's epoch value.
        """
        comet = self.ecliptic_position(elements, jd)
        obs = self.ecliptic_position(observer, jd)
        rel = comet - obs
        return ecliptic_to_equatorial(rel, self.frame_obliquity(elements, frame))

    def state(self, elements: CometElements, jd: float) -> OrbitState:
        """Collect the heliocentric state used by reports."""
        regime = self.regime(elements)
        if elements.near_parabolic:
            logger.debug(
                '%s is near-parabolic (e=%.6f); solved as %s',
                elements.name,
                elements.eccentricity,
                regime.value,
            )
        mean_anom: float | None = None
        ecc_anom: float | None = None
        if regime is not OrbitRegime.PARABOLIC:
            mean_anom = self.mean_anomaly(elements, jd)
            ecc_anom = self.eccentric_anomaly(elements, jd)
        nu = self.true_anomaly(elements, jd)
        r = self.distance(elements.perihelion_distance, elements.eccentricity, nu)
        velocity = self.analytic_velocity(elements, jd)
        return OrbitState(
            jd=jd,
            regime=regime,
            near_parabolic=elements.near_parabolic,
            days_since_perihelion=self.days_since_perihelion(elements, jd),
            mean_anomaly_deg=mean_anom,
            eccentric_anomaly_rad=ecc_anom,
            true_anomaly_deg=nu,
            distance_au=r,
            plane_position=self.orbit_plane_position(elements, jd),
            ecliptic_position=self.ecliptic_position(elements, jd),
            equatorial_position=self.equatorial_position(elements, jd),
            velocity=velocity,
            speed_km_s=self.speed_km_s(velocity),
        )
