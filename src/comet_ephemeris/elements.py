"""Orbital element set of a comet (or any body on a two-body heliocentric orbit)."""

from __future__ import annotations

import math
from dataclasses import dataclass

from comet_ephemeris.constants import J2000_JD
from comet_ephemeris.regime import OrbitRegime, classify_orbit, is_near_parabolic
from comet_ephemeris.time_utils import jd_from_string


@dataclass(frozen=True)
class CometElements:
    """Classical perihelion-based elements, read-only input to the orbit solver.

    Units:
        perihelion_distance: AU
        inclination_deg, node_deg, arg_perihelion_deg: degrees (J2000 ecliptic)
        perihelion_jd, epoch_jd: Julian Day
    """

    name: str
    eccentricity: float
    perihelion_distance: float
    inclination_deg: float
    node_deg: float
    arg_perihelion_deg: float
    perihelion_jd: float
    epoch_jd: float | None = None
    parabolic: bool = False

    def __post_init__(self) -> None:
        for label in (
            'eccentricity',
            'perihelion_distance',
            'inclination_deg',
            'node_deg',
            'arg_perihelion_deg',
            'perihelion_jd',
        ):
            value = getattr(self, label)
            if not math.isfinite(value):
                raise ValueError(f'{label} must be finite. Got: {value}')
        if self.perihelion_distance <= 0.0:
            raise ValueError(f'Perihelion distance must be positive. Got: {self.perihelion_distance}')
        if self.eccentricity < 0.0:
            raise ValueError(f'Eccentricity must be >= 0. Got: {self.eccentricity}')
        if not (0.0 <= self.inclination_deg <= 180.0):
            raise ValueError(f'Inclination must be in range [0, 180] degrees. Got: {self.inclination_deg}')
        if self.parabolic and self.eccentricity != 1.0:
            raise ValueError(f'Orbit tagged parabolic but eccentricity is {self.eccentricity}')
        if self.epoch_jd is None:
            object.__setattr__(self, 'epoch_jd', self.perihelion_jd)
        elif not math.isfinite(self.epoch_jd):
            raise ValueError(f'epoch_jd must be finite. Got: {self.epoch_jd}')

    @classmethod
    def from_dates(
        cls,
        name: str,
        eccentricity: float,
        perihelion_distance: float,
        inclination_deg: float,
        node_deg: float,
        arg_perihelion_deg: float,
        perihelion_date: str,
        epoch_date: str | None = None,
        parabolic: bool = False,
    ) -> CometElements:
        """Build an element set from calendar-date strings (e.g. '1997-04-01 05:00').

        Raises:
            ValueError: Unparseable date or invalid element.
        """
        perihelion_jd = jd_from_string(perihelion_date)
        epoch_jd = jd_from_string(epoch_date) if epoch_date else None
        return cls(
            name=name,
            eccentricity=eccentricity,
            perihelion_distance=perihelion_distance,
            inclination_deg=inclination_deg,
            node_deg=node_deg,
            arg_perihelion_deg=arg_perihelion_deg,
            perihelion_jd=perihelion_jd,
            epoch_jd=epoch_jd,
            parabolic=parabolic,
        )

    @property
    def regime(self) -> OrbitRegime:
        """Regime classified from the current eccentricity and tag (not cached)."""
        return classify_orbit(self.eccentricity, self.parabolic)

    @property
    def near_parabolic(self) -> bool:
        return is_near_parabolic(self.eccentricity)


# Earth-Moon barycenter, J2000 mean elements (Standish, JPL approximate positions),
# used as the observer for geocentric quantities.
EARTH = CometElements(
    name='Earth',
    eccentricity=0.01671123,
    perihelion_distance=0.98329134,
    inclination_deg=0.0,
    node_deg=0.0,
    arg_perihelion_deg=102.93768193,
    perihelion_jd=2451547.5092,
    epoch_jd=J2000_JD,
)
