"""Angle normalization and sexagesimal formatting for RA/Dec columns."""

from __future__ import annotations

from comet_ephemeris.constants import DEGREES_PER_CIRCLE, DEGREES_PER_HOUR_RA


def normalize_degrees(angle: float) -> float:
    """Reduce an angle to [0, 360)."""
    reduced = angle % DEGREES_PER_CIRCLE
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if reduced == DEGREES_PER_CIRCLE else reduced


def dms_string(
    value: float,
    separator: str = '   ',
    ndecimal: int = 2,
    signed: bool = False,
    wrap: int | None = None,
) -> str:
    """Format a value as whole units, minutes and seconds.

    Parameters:
        value: Degrees, or hours for right ascension.
        separator: Three characters placed after units, minutes, seconds
            (e.g. 'hms' or 'dms'); blanks when shorter than three.
        ndecimal: Decimal places for seconds.
        signed: Always emit a sign character ('+' or '-'), as for declination.
        wrap: Reduce whole units modulo this value after rounding (24 for RA).

    Returns:
        Formatted string, e.g. ' 12h 30m 45.12s'.
    """
    if len(separator) < 3:
        sep1 = sep2 = sep3 = ' '
    else:
        sep1, sep2, sep3 = separator[0], separator[1], separator[2]
    negative = value < 0.0
    scale = 10**ndecimal
    # Round once in the smallest unit so carries propagate (59.999s -> next minute).
    total = round(abs(value) * 3600.0 * scale)
    frac = total % scale
    whole_sec = total // scale
    units, rem = divmod(whole_sec, 3600)
    if wrap is not None:
        units %= wrap
    minutes, seconds = divmod(rem, 60)
    sign = '-' if negative and total > 0 else ('+' if signed else ' ')
    sec_text = f'{seconds:02d}.{frac:0{ndecimal}d}' if ndecimal > 0 else f'{seconds:02d}'
    return f'{sign}{units:02d}{sep1} {minutes:02d}{sep2} {sec_text}{sep3}'.rstrip()


def ra_string(ra_deg: float, ndecimal: int = 2) -> str:
    """Right ascension in degrees as hours, minutes, seconds."""
    return dms_string(normalize_degrees(ra_deg) / DEGREES_PER_HOUR_RA, 'hms', ndecimal, wrap=24).lstrip()


def dec_string(dec_deg: float, ndecimal: int = 1) -> str:
    """Declination in degrees as signed degrees, arcminutes, arcseconds."""
    return dms_string(dec_deg, 'dms', ndecimal, signed=True)
