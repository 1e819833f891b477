"""Configuration: leap-second kernel and numerical step sizes from environment."""

import os

from comet_ephemeris.constants import DEFAULT_VELOCITY_STEP_DAYS, SECONDS_PER_DAY


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Uses JULIAN_LEAPSECS when set; otherwise None, meaning the LSK bundled
    with rms-julian.

    Returns:
        Path string, or None for the bundled kernel.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    return path or None


def get_velocity_step_days() -> float:
    """Return the finite-difference half step for numerical velocity, in days.

    COMET_EPHEMERIS_STEP_SECONDS overrides the one-second default; values that
    are not positive numbers are ignored.
    """
    raw = os.environ.get('COMET_EPHEMERIS_STEP_SECONDS', '').strip()
    if not raw:
        return DEFAULT_VELOCITY_STEP_DAYS
    try:
        seconds = float(raw)
    except ValueError:
        return DEFAULT_VELOCITY_STEP_DAYS
    if not seconds > 0.0:
        return DEFAULT_VELOCITY_STEP_DAYS
    return seconds / SECONDS_PER_DAY
