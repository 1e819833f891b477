"""Orbit diagram: the comet's track projected on the ecliptic plane (matplotlib)."""

from __future__ import annotations

import logging
import math

import numpy as np

from comet_ephemeris.elements import EARTH, CometElements
from comet_ephemeris.kinematics import OrbitKinematics
from comet_ephemeris.regime import OrbitRegime

logger = logging.getLogger(__name__)

DEFAULT_MAX_RADIUS_AU = 6.0


def _true_anomaly_limit(q: float, e: float, r_max: float) -> float:
    """Largest |nu| (radians) with r <= r_max; pi when the whole orbit fits."""
    if e < 1.0 and q * (1.0 + e) / (1.0 - e) <= r_max:
        return math.pi
    cos_nu = (q * (1.0 + e) / r_max - 1.0) / e
    return math.acos(max(-1.0, min(1.0, cos_nu)))


def orbit_track(
    elements: CometElements,
    kinematics: OrbitKinematics | None = None,
    max_radius_au: float = DEFAULT_MAX_RADIUS_AU,
    npoints: int = 361,
) -> np.ndarray:
    """Ecliptic positions along the orbit, shape (npoints, 3), in AU.

    Open orbits and long ellipses are cut where r exceeds max_radius_au
    (raised to 2.5 q for orbits that never come that close).
    """
    kin = kinematics or OrbitKinematics()
    q = elements.perihelion_distance
    e = elements.eccentricity
    r_max = max(max_radius_au, 2.5 * q)
    limit = _true_anomaly_limit(q, e, r_max)
    nu = np.linspace(-limit, limit, npoints)
    if elements.regime is OrbitRegime.PARABOLIC:
        radius = q * (1.0 + np.tan(nu / 2.0) ** 2)
    else:
        radius = q * (1.0 + e) / (1.0 + e * np.cos(nu))
    x = radius * np.cos(nu)
    y = radius * np.sin(nu)
    p, qv = kin.basis(elements, 'ecliptic')
    basis = np.array([p.as_tuple(), qv.as_tuple()], dtype=np.float64)
    return np.column_stack((x, y)) @ basis


def draw_orbit(
    elements: CometElements,
    jd: float | None = None,
    output_path: str | None = None,
    kinematics: OrbitKinematics | None = None,
    max_radius_au: float = DEFAULT_MAX_RADIUS_AU,
    show_earth: bool = True,
) -> None:
    """Render the orbit in the ecliptic x-y plane; mark the comet (and Earth) at jd.

    Parameters:
        elements: Comet element set.
        jd: Julian Day to mark, or None for the track only.
        output_path: Image file to write (format from extension); None draws nothing to disk.
        kinematics: Kinematics instance (defaults to standard constants).
        max_radius_au: Track cut-off radius.
        show_earth: Also draw Earth's orbit and position.
    """
    try:
        import matplotlib

        matplotlib.use('Agg')
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError('matplotlib is required for draw_orbit') from None
    kin = kinematics or OrbitKinematics()
    track = orbit_track(elements, kin, max_radius_au)

    fig, ax = plt.subplots(figsize=(7.0, 7.0))
    ax.plot(track[:, 0], track[:, 1], color='tab:blue', linewidth=1.2, label=elements.name)
    ax.plot([0.0], [0.0], marker='o', color='gold', markersize=10, linestyle='none', label='Sun')
    if show_earth:
        earth_track = orbit_track(EARTH, kin, max_radius_au)
        ax.plot(earth_track[:, 0], earth_track[:, 1], color='tab:green', linewidth=0.8, linestyle='--')
    if jd is not None:
        pos = kin.ecliptic_position(elements, jd)
        ax.plot([pos.x], [pos.y], marker='o', color='tab:blue', linestyle='none')
        if show_earth:
            earth = kin.ecliptic_position(EARTH, jd)
            ax.plot([earth.x], [earth.y], marker='o', color='tab:green', linestyle='none', label='Earth')
    ax.set_aspect('equal', adjustable='datalim')
    ax.set_xlabel('x (AU, ecliptic)')
    ax.set_ylabel('y (AU, ecliptic)')
    ax.set_title(f'{elements.name} ({elements.regime.value})')
    ax.grid(True, linewidth=0.3)
    ax.legend(loc='upper right', fontsize='small')
    if output_path:
        fig.savefig(output_path)
        logger.info('Orbit diagram written to %s', output_path)
    plt.close(fig)
