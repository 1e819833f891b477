"""Built-in element sets for a few well-known comets (osculating, heliocentric J2000 ecliptic)."""

from __future__ import annotations

from comet_ephemeris.elements import CometElements

COMETS: dict[str, CometElements] = {
    # 1986 apparition; T = 1986 Feb 9.45891
    'halley': CometElements(
        name='1P/Halley',
        eccentricity=0.967277,
        perihelion_distance=0.587104,
        inclination_deg=162.23932,
        node_deg=58.14397,
        arg_perihelion_deg=111.84658,
        perihelion_jd=2446470.95891,
        epoch_jd=2446480.5,
    ),
    # T = 2017 Mar 10.07
    'encke': CometElements(
        name='2P/Encke',
        eccentricity=0.8471,
        perihelion_distance=0.3359,
        inclination_deg=11.78,
        node_deg=334.57,
        arg_perihelion_deg=186.54,
        perihelion_jd=2457822.57,
    ),
    # T = 1997 Apr 1.1375
    'hale-bopp': CometElements(
        name='C/1995 O1 (Hale-Bopp)',
        eccentricity=0.995068,
        perihelion_distance=0.914142,
        inclination_deg=89.4300,
        node_deg=282.4707,
        arg_perihelion_deg=130.5887,
        perihelion_jd=2450539.6375,
    ),
    # Interstellar, hyperbolic; T = 2017 Sep 9.51
    'oumuamua': CometElements(
        name="1I/'Oumuamua",
        eccentricity=1.20113,
        perihelion_distance=0.255912,
        inclination_deg=122.7417,
        node_deg=24.5969,
        arg_perihelion_deg=241.8105,
        perihelion_jd=2458006.01,
    ),
}

_ALIASES: dict[str, str] = {
    '1p': 'halley',
    '2p': 'encke',
    'c/1995 o1': 'hale-bopp',
    'halebopp': 'hale-bopp',
    '1i': 'oumuamua',
    "'oumuamua": 'oumuamua',
}


def parse_comet(name: str) -> CometElements:
    """Look up a built-in comet by name or designation (case-insensitive).

    Raises:
        ValueError: Unknown comet.
    """
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in COMETS:
        raise ValueError(f'Unknown comet {name!r}; known: {", ".join(sorted(COMETS))}')
    return COMETS[key]
