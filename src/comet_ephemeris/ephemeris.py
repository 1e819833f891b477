"""Ephemeris table generator: one row per time step over a date range."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TextIO

import numpy as np

from comet_ephemeris.angle_utils import dec_string, ra_string
from comet_ephemeris.elements import EARTH, CometElements
from comet_ephemeris.frames import radec_from_vector
from comet_ephemeris.kinematics import OrbitKinematics
from comet_ephemeris.record import Record
from comet_ephemeris.time_utils import format_jd, interval_days
from comet_ephemeris.vectors import Vector3

logger = logging.getLogger(__name__)

MAX_ROWS = 100000

# Column IDs, in the order listed by --help
COL_JD = 1
COL_DATE = 2
COL_SUNDIST = 3
COL_OBSDIST = 4
COL_RADEC = 5
COL_RADEG = 6
COL_SPEED = 7
COL_LTIME = 8
COL_TRUEANOM = 9
COL_ELONG = 10
COL_PHASE = 11

COLUMN_NAMES: dict[str, int] = {
    'jd': COL_JD,
    'date': COL_DATE,
    'r': COL_SUNDIST,
    'sundist': COL_SUNDIST,
    'delta': COL_OBSDIST,
    'obsdist': COL_OBSDIST,
    'radec': COL_RADEC,
    'radeg': COL_RADEG,
    'speed': COL_SPEED,
    'ltime': COL_LTIME,
    'nu': COL_TRUEANOM,
    'elong': COL_ELONG,
    'phase': COL_PHASE,
}

DEFAULT_COLUMNS = [COL_DATE, COL_RADEC, COL_SUNDIST, COL_OBSDIST, COL_ELONG]

# (header, width) per column; data fields are right-aligned to the width.
_HEADERS: dict[int, tuple[str, int]] = {
    COL_JD: ('jd', 13),
    COL_DATE: ('date', 16),
    COL_SUNDIST: ('r (AU)', 9),
    COL_OBSDIST: ('delta (AU)', 10),
    COL_RADEC: ('ra (h m s)     dec (d m s)', 27),
    COL_RADEG: ('ra (deg)   dec (deg)', 20),
    COL_SPEED: ('v (km/s)', 8),
    COL_LTIME: ('ltime (min)', 11),
    COL_TRUEANOM: ('nu (deg)', 9),
    COL_ELONG: ('elong', 6),
    COL_PHASE: ('phase', 6),
}


def parse_column_spec(tokens: list[str]) -> list[int]:
    """Parse column IDs or names (e.g. ['1', 'radec', 'delta']) into column IDs.

    Raises:
        ValueError: Unknown column.
    """
    columns: list[int] = []
    for token in tokens:
        for part in token.replace(',', ' ').split():
            key = part.strip().lower()
            if key.isdigit() and int(key) in _HEADERS:
                columns.append(int(key))
            elif key in COLUMN_NAMES:
                columns.append(COLUMN_NAMES[key])
            else:
                raise ValueError(f'Unknown ephemeris column {part!r}')
    return columns


@dataclass
class EphemerisParams:
    """Inputs for generate_ephemeris().

    start_jd, stop_jd: Julian Days (inclusive range).
    interval, time_unit: Step size, e.g. 1 'day' or 6 'hour'.
    """

    elements: CometElements
    start_jd: float
    stop_jd: float
    interval: float = 1.0
    time_unit: str = 'day'
    columns: list[int] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    observer: CometElements = EARTH


def sample_times(start_jd: float, stop_jd: float, step_days: float) -> np.ndarray:
    """Julian Days from start to stop (inclusive where it lands on a step).

    Raises:
        ValueError: Reversed range or more than MAX_ROWS steps.
    """
    if stop_jd < start_jd:
        raise ValueError('Stop time precedes start time')
    nsteps = int(math.floor((stop_jd - start_jd) / step_days + 1e-9)) + 1
    if nsteps > MAX_ROWS:
        raise ValueError(f'Number of time steps exceeds limit of {MAX_ROWS}')
    return start_jd + step_days * np.arange(nsteps, dtype=np.float64)


def _angle_between(a: Vector3, b: Vector3) -> float:
    """Angle between two vectors in degrees."""
    na, nb = a.norm(), b.norm()
    if na == 0.0 or nb == 0.0:
        return 0.0
    return math.degrees(math.acos(max(-1.0, min(1.0, a.dot(b) / (na * nb)))))


def _header_record(columns: list[int]) -> Record:
    rec = Record()
    for col in columns:
        title, width = _HEADERS[col]
        rec.append(title.ljust(width))
    return rec


def _row_record(
    kin: OrbitKinematics,
    params: EphemerisParams,
    jd: float,
) -> Record:
    elements = params.elements
    helio_ecl = kin.ecliptic_position(elements, jd)
    observer_ecl = kin.ecliptic_position(params.observer, jd)
    geo_ecl = helio_ecl - observer_ecl
    geo_eq = kin.geocentric_position(elements, jd, 'equatorial', params.observer)
    r = helio_ecl.norm()
    delta = geo_ecl.norm()

    rec = Record()
    for col in params.columns:
        width = _HEADERS[col][1]
        if col == COL_JD:
            rec.append(f'{jd:{width}.5f}')
        elif col == COL_DATE:
            rec.append(format_jd(jd))
        elif col == COL_SUNDIST:
            rec.append(f'{r:{width}.6f}')
        elif col == COL_OBSDIST:
            rec.append(f'{delta:{width}.6f}')
        elif col == COL_RADEC:
            ra, dec = radec_from_vector(geo_eq)
            rec.append(f'{ra_string(ra):>13} {dec_string(dec):>13}')
        elif col == COL_RADEG:
            ra, dec = radec_from_vector(geo_eq)
            rec.append(f'{ra:9.5f} {dec:10.5f}')
        elif col == COL_SPEED:
            speed = kin.speed_km_s(kin.analytic_velocity(elements, jd))
            rec.append(f'{speed:{width}.3f}')
        elif col == COL_LTIME:
            rec.append(f'{kin.light_time_days(delta) * 1440.0:{width}.3f}')
        elif col == COL_TRUEANOM:
            rec.append(f'{kin.true_anomaly(elements, jd):{width}.4f}')
        elif col == COL_ELONG:
            # Sun-observer-comet angle
            rec.append(f'{_angle_between(observer_ecl.scaled(-1.0), geo_ecl):{width}.2f}')
        elif col == COL_PHASE:
            # Sun-comet-observer angle
            rec.append(f'{_angle_between(helio_ecl.scaled(-1.0), geo_ecl.scaled(-1.0)):{width}.2f}')
    return rec


def generate_ephemeris(
    params: EphemerisParams,
    output: TextIO,
    kinematics: OrbitKinematics | None = None,
) -> int:
    """Write an ephemeris table (header plus one row per time step) to output.

    Returns:
        Number of data rows written.

    Raises:
        ValueError: Bad time range or interval, unknown column.
        OrbitError subclasses: Solver failures at a time step.
    """
    kin = kinematics or OrbitKinematics()
    for col in params.columns:
        if col not in _HEADERS:
            raise ValueError(f'Unknown ephemeris column id {col!r}')
    step = interval_days(params.interval, params.time_unit)
    times = sample_times(params.start_jd, params.stop_jd, step)
    logger.info('Ephemeris for %s: %d rows, step %.6f day', params.elements.name, len(times), step)

    _header_record(params.columns).write(output)
    for jd in times:
        _row_record(kin, params, float(jd)).write(output)
    return len(times)
