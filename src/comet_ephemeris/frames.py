"""Frame transforms: orbital plane -> ecliptic -> equatorial (Gaussian P/Q vectors)."""

from __future__ import annotations

import math

from comet_ephemeris.constants import (
    ARCSEC_PER_DEGREE,
    J2000_JD,
    OBLIQUITY_J2000_ARCSEC,
    OBLIQUITY_RATE_ARCSEC,
)
from comet_ephemeris.time_utils import julian_millennia_since_j2000
from comet_ephemeris.vectors import Vector3, linear_combination


def obliquity_rad(jd: float, j2000_jd: float = J2000_JD) -> float:
    """Mean obliquity of the ecliptic, linear in Julian millennia from J2000.

    Parameters:
        jd: Julian Day of the element-set epoch.
        j2000_jd: Julian Day of J2000.0.

    Returns:
        Obliquity in radians.
    """
    t = julian_millennia_since_j2000(jd, j2000_jd)
    return math.radians((OBLIQUITY_J2000_ARCSEC + OBLIQUITY_RATE_ARCSEC * t) / ARCSEC_PER_DEGREE)


def gaussian_vectors(
    inclination_deg: float,
    node_deg: float,
    arg_perihelion_deg: float,
    obliquity: float = 0.0,
) -> tuple[Vector3, Vector3]:
    """Gaussian vectors P (toward perihelion) and Q (90 deg ahead in the orbit plane).

    Parameters:
        inclination_deg, node_deg, arg_perihelion_deg: Angular elements (degrees, ecliptic).
        obliquity: Obliquity in radians; 0 gives the vectors in the ecliptic frame.

    Returns:
        (P, Q), orthonormal.
    """
    si, ci = math.sin(math.radians(inclination_deg)), math.cos(math.radians(inclination_deg))
    sn, cn = math.sin(math.radians(node_deg)), math.cos(math.radians(node_deg))
    sw, cw = math.sin(math.radians(arg_perihelion_deg)), math.cos(math.radians(arg_perihelion_deg))
    se, ce = math.sin(obliquity), math.cos(obliquity)

    # Ecliptic components
    px = cw * cn - sw * sn * ci
    py = cw * sn + sw * cn * ci
    pz = sw * si
    qx = -sw * cn - cw * sn * ci
    qy = -sw * sn + cw * cn * ci
    qz = cw * si

    p = Vector3(px, py * ce - pz * se, py * se + pz * ce)
    q = Vector3(qx, qy * ce - qz * se, qy * se + qz * ce)
    return (p, q)


def project_pq(x: float, y: float, p: Vector3, q: Vector3) -> Vector3:
    """Orbit-plane coordinates (x toward perihelion) to 3-D: x*P + y*Q."""
    return linear_combination(x, p, y, q)


def ecliptic_from_orbit_plane(
    x: float,
    y: float,
    inclination_deg: float,
    node_deg: float,
    arg_perihelion_deg: float,
) -> Vector3:
    """Rotate an orbit-plane point into the ecliptic frame via the argument of latitude.

    Independent of the P/Q construction; both must agree.
    """
    r = math.hypot(x, y)
    u = math.radians(arg_perihelion_deg) + math.atan2(y, x)
    si, ci = math.sin(math.radians(inclination_deg)), math.cos(math.radians(inclination_deg))
    sn, cn = math.sin(math.radians(node_deg)), math.cos(math.radians(node_deg))
    su, cu = math.sin(u), math.cos(u)
    return Vector3(
        r * (cn * cu - sn * su * ci),
        r * (sn * cu + cn * su * ci),
        r * su * si,
    )


def ecliptic_to_equatorial(v: Vector3, obliquity: float) -> Vector3:
    """Rotate from ecliptic to equatorial frame about the x axis (obliquity in radians)."""
    se, ce = math.sin(obliquity), math.cos(obliquity)
    return Vector3(v.x, ce * v.y - se * v.z, se * v.y + ce * v.z)


def radec_from_vector(v: Vector3) -> tuple[float, float]:
    """Equatorial vector to (right ascension, declination) in degrees; RA in [0, 360)."""
    r = v.norm()
    if r == 0.0:
        return (0.0, 0.0)
    dec = math.degrees(math.asin(max(-1.0, min(1.0, v.z / r))))
    ra = math.degrees(math.atan2(v.y, v.x)) % 360.0
    return (ra, dec)
