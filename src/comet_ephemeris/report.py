"""Single-epoch orbit summary report."""

from __future__ import annotations

from typing import TextIO

from comet_ephemeris.angle_utils import dec_string, normalize_degrees, ra_string
from comet_ephemeris.elements import EARTH, CometElements
from comet_ephemeris.errors import DegenerateInputError
from comet_ephemeris.frames import radec_from_vector
from comet_ephemeris.kinematics import OrbitKinematics
from comet_ephemeris.regime import OrbitRegime
from comet_ephemeris.time_utils import format_jd
from comet_ephemeris.vectors import Vector3

NOT_DEFINED = 'undefined'
LABEL_WIDTH = 24
NUMERICAL_VELOCITY_FORMAT = '14.7f'


def _w(stream: TextIO, line: str) -> None:
    stream.write(line + '\n')


def _field(stream: TextIO, label: str, value: str) -> None:
    _w(stream, f'{label:>{LABEL_WIDTH}}: {value}')


def _vec(v: Vector3, fmt: str = '14.9f') -> str:
    return f'{v.x:{fmt}} {v.y:{fmt}} {v.z:{fmt}}'


def _optional(value: float | None, fmt: str, unit: str = '') -> str:
    if value is None:
        return NOT_DEFINED
    return f'{value:{fmt}}' + (f' {unit}' if unit else '')


def _elliptical_only(kin: OrbitKinematics, elements: CometElements) -> tuple[float | None, ...]:
    """(a, period, aphelion); each None where undefined for the regime."""
    try:
        a: float | None = kin.semi_major_axis(elements)
    except DegenerateInputError:
        a = None
    if kin.regime(elements) is OrbitRegime.ELLIPTICAL:
        return (a, kin.period_years(elements), kin.aphelion_distance(elements))
    return (a, None, None)


def write_elements_summary(
    stream: TextIO,
    elements: CometElements,
    kinematics: OrbitKinematics | None = None,
) -> None:
    """Write the orbital elements section."""
    kin = kinematics or OrbitKinematics()
    a, period, aphelion = _elliptical_only(kin, elements)
    regime = kin.regime(elements)
    title = f'Orbital Elements: {elements.name}'
    _w(stream, title)
    _w(stream, '-' * len(title))
    _w(stream, ' ')
    _field(stream, 'Regime', regime.value + (' (near-parabolic)' if elements.near_parabolic else ''))
    _field(stream, 'Eccentricity', f'{elements.eccentricity:.8f}')
    _field(stream, 'Perihelion distance q', f'{elements.perihelion_distance:.8f} AU')
    _field(stream, 'Inclination', f'{elements.inclination_deg:.5f} deg')
    _field(stream, 'Ascending node', f'{elements.node_deg:.5f} deg')
    _field(stream, 'Argument of perihelion', f'{elements.arg_perihelion_deg:.5f} deg')
    _field(
        stream,
        'Perihelion date',
        f'{format_jd(elements.perihelion_jd, seconds=True)} (JD {elements.perihelion_jd:.5f})',
    )
    _field(stream, 'Epoch', f'{format_jd(elements.epoch_jd, seconds=True)} (JD {elements.epoch_jd:.5f})')
    _field(stream, 'Semi-major axis', _optional(a, '.8f', 'AU'))
    _field(stream, '1/a', f'{kin.reciprocal_semi_major_axis(elements):.8f} 1/AU')
    _field(stream, 'Period', _optional(period, '.4f', 'years'))
    _field(stream, 'Aphelion distance Q', _optional(aphelion, '.6f', 'AU'))
    _w(stream, ' ')


def write_state_report(
    stream: TextIO,
    elements: CometElements,
    jd: float,
    kinematics: OrbitKinematics | None = None,
    observer: CometElements = EARTH,
) -> None:
    """Write elements summary plus position and velocity at one Julian Day.

    The numerical velocity differs from the analytic one by the finite-difference
    step error plus the Kepler solver tolerance (relative 1e-5 or better with the
    default constants), so it is printed to fewer decimals.
    """
    kin = kinematics or OrbitKinematics()
    write_elements_summary(stream, elements, kin)
    state = kin.state(elements, jd)
    numerical = kin.numerical_velocity(elements, jd)
    geo = kin.geocentric_position(elements, jd, 'equatorial', observer)
    delta = geo.norm()
    ra, dec = radec_from_vector(geo)
    mean_anom = None if state.mean_anomaly_deg is None else normalize_degrees(state.mean_anomaly_deg)

    title = f'State at {format_jd(jd, seconds=True)} (JD {jd:.5f})'
    _w(stream, title)
    _w(stream, '-' * len(title))
    _w(stream, ' ')
    _field(stream, 'Days from perihelion', f'{state.days_since_perihelion:.5f}')
    _field(stream, 'Mean anomaly', _optional(mean_anom, '.6f', 'deg'))
    _field(stream, 'Eccentric anomaly', _optional(state.eccentric_anomaly_rad, '.8f', 'rad'))
    _field(stream, 'True anomaly', f'{state.true_anomaly_deg:.6f} deg')
    _field(stream, 'Heliocentric distance', f'{state.distance_au:.8f} AU')
    _field(stream, 'Orbit plane x, y (AU)', f'{state.plane_position.x:.9f} {state.plane_position.y:.9f}')
    _field(stream, 'Ecliptic x, y, z (AU)', _vec(state.ecliptic_position))
    _field(stream, 'Equatorial x, y, z (AU)', _vec(state.equatorial_position))
    _field(stream, 'Velocity (AU/day)', _vec(state.velocity, '14.10f'))
    _field(stream, 'Velocity, numerical', _vec(numerical, NUMERICAL_VELOCITY_FORMAT))
    _field(stream, 'Heliocentric speed', f'{state.speed_km_s:.4f} km/s')
    _field(stream, 'Observer distance', f'{delta:.8f} AU ({observer.name})')
    _field(stream, 'Light time', f'{kin.light_time_days(delta) * 1440.0:.3f} min')
    _field(stream, 'RA, Dec', f'{ra_string(ra)} {dec_string(dec)}')
