"""Julian Day conversions built on rms-julian (calendar dates <-> continuous day count)."""

from __future__ import annotations

import logging
import math
import re

import julian

from comet_ephemeris.config import get_leapsecs_path
from comet_ephemeris.constants import (
    DAYS_PER_MILLENNIUM,
    J2000_JD,
    JD_OF_DAY_ZERO,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load the leap seconds kernel if not already loaded.

    A configured LSK that cannot be read is logged and replaced by the kernel
    bundled with rms-julian.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info('Leap seconds from %s not used (%s); using rms-julian bundled LSK.', path, e)
    julian.load_lsk()
    _leapsecs_loaded = True


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse date/time string to UTC (day, sec).

    Parameters:
        string: Date/time string (any format accepted by rms-julian). A trailing
            ISO "Z" is accepted, as is a bare "YYYY" meaning January 1st.

    Returns:
        (day, sec) where day is days since 2000-01-01 and sec is seconds within
        that day; None on parse failure.
    """
    _ensure_leapsecs()
    stripped = string.strip()
    if not stripped:
        return None
    if re.fullmatch(r'\d{4}', stripped):
        candidate_strings = [f'{stripped}-01-01']
    else:
        candidate_strings = [stripped]
    if stripped.endswith(('Z', 'z')):
        candidate_strings.append(stripped[:-1])
    for candidate in candidate_strings:
        try:
            result = julian.day_sec_from_string(candidate)
            day, sec = result[0], result[1]
            return (int(day), float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def jd_from_day_sec(day: int, sec: float) -> float:
    """Convert (day since 2000-01-01, seconds in day) to a Julian Day."""
    return JD_OF_DAY_ZERO + day + sec / SECONDS_PER_DAY


def day_sec_from_jd(jd: float) -> tuple[int, float]:
    """Split a Julian Day into (day since 2000-01-01, seconds within day)."""
    offset = jd - JD_OF_DAY_ZERO
    day = math.floor(offset)
    sec = (offset - day) * SECONDS_PER_DAY
    # Guard against 86400.0 from rounding just below the next midnight.
    if sec >= SECONDS_PER_DAY:
        day += 1
        sec -= SECONDS_PER_DAY
    return (int(day), sec)


def jd_from_string(string: str) -> float:
    """Parse a date/time string to a Julian Day.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    parsed = parse_datetime(string)
    if parsed is None:
        raise ValueError(f'Invalid date/time {string!r}')
    return jd_from_day_sec(*parsed)


def jd_from_ymd(year: int, month: int, day: float) -> float:
    """Convert a calendar date with fractional day to a Julian Day.

    Parameters:
        year, month: Calendar year and month.
        day: Day of month; the fractional part is the time of day (e.g. 14.25 = 06:00).

    Returns:
        Julian Day.
    """
    whole = math.floor(day)
    days = int(julian.day_from_ymd(year, month, int(whole)))
    return jd_from_day_sec(days, (day - whole) * SECONDS_PER_DAY)


def ymd_from_jd(jd: float) -> tuple[int, int, float]:
    """Convert a Julian Day to (year, month, fractional day of month)."""
    day, sec = day_sec_from_jd(jd)
    y, m, d = julian.ymd_from_day(day)
    return (int(y), int(m), int(d) + sec / SECONDS_PER_DAY)


def format_jd(jd: float, seconds: bool = False) -> str:
    """Format a Julian Day as 'YYYY-MM-DD HH:MM' (or with ':SS' when seconds=True)."""
    day, sec = day_sec_from_jd(jd)
    sec = round(sec) if seconds else SECONDS_PER_MINUTE * round(sec / SECONDS_PER_MINUTE)
    if sec >= SECONDS_PER_DAY:
        day += 1
        sec -= SECONDS_PER_DAY
    y, m, d = julian.ymd_from_day(day)
    hour = int(sec // SECONDS_PER_HOUR)
    minute = int((sec - hour * SECONDS_PER_HOUR) // SECONDS_PER_MINUTE)
    text = f'{int(y):04d}-{int(m):02d}-{int(d):02d} {hour:02d}:{minute:02d}'
    if seconds:
        whole_sec = int(sec - hour * SECONDS_PER_HOUR - minute * SECONDS_PER_MINUTE)
        text += f':{whole_sec:02d}'
    return text


def julian_millennia_since_j2000(jd: float, j2000_jd: float = J2000_JD) -> float:
    """Julian millennia elapsed since J2000.0 (negative before)."""
    return (jd - j2000_jd) / DAYS_PER_MILLENNIUM


def interval_days(interval: float, time_unit: str) -> float:
    """Convert interval and time_unit to days.

    Parameters:
        interval: Numeric interval value.
        time_unit: One of 'sec', 'min', 'hour', 'day' (case-insensitive, first 4 chars).

    Returns:
        Interval in days (absolute value).

    Raises:
        ValueError: Unknown time unit or zero interval.
    """
    u = time_unit.strip().lower()[:4]
    if u in ('sec', 'seco'):
        dsec = abs(interval)
    elif u in ('min', 'minu'):
        dsec = abs(interval) * SECONDS_PER_MINUTE
    elif u == 'hour':
        dsec = abs(interval) * SECONDS_PER_HOUR
    elif u == 'day':
        dsec = abs(interval) * SECONDS_PER_DAY
    else:
        raise ValueError(f'Invalid time_unit {time_unit!r}; expected one of sec, min, hour, day')
    if dsec == 0.0:
        raise ValueError('Interval must be non-zero')
    return dsec / SECONDS_PER_DAY
