"""Tests for element sets, regime classification and the built-in comet table."""

from __future__ import annotations

import dataclasses

import pytest

from comet_ephemeris.comets import COMETS, parse_comet
from comet_ephemeris.elements import EARTH, CometElements
from comet_ephemeris.regime import OrbitRegime, classify_orbit, is_near_parabolic


def _kwargs(**overrides: object) -> dict[str, object]:
    base: dict[str, object] = {
        'name': 'Test',
        'eccentricity': 0.5,
        'perihelion_distance': 1.0,
        'inclination_deg': 10.0,
        'node_deg': 20.0,
        'arg_perihelion_deg': 30.0,
        'perihelion_jd': 2451545.0,
    }
    base.update(overrides)
    return base


def test_epoch_defaults_to_perihelion() -> None:
    """Missing epoch is the perihelion date."""
    elements = CometElements(**_kwargs())  # type: ignore[arg-type]
    assert elements.epoch_jd == elements.perihelion_jd


def test_elements_are_immutable() -> None:
    """Element sets are frozen."""
    elements = CometElements(**_kwargs())  # type: ignore[arg-type]
    with pytest.raises(dataclasses.FrozenInstanceError):
        elements.eccentricity = 0.6  # type: ignore[misc]


@pytest.mark.parametrize(
    'overrides',
    [
        {'perihelion_distance': 0.0},
        {'perihelion_distance': -1.0},
        {'eccentricity': -0.01},
        {'eccentricity': float('nan')},
        {'inclination_deg': 181.0},
        {'node_deg': float('inf')},
        {'epoch_jd': float('nan')},
        {'parabolic': True},
    ],
)
def test_invalid_elements_rejected(overrides: dict[str, object]) -> None:
    """Non-physical element values raise ValueError."""
    with pytest.raises(ValueError):
        CometElements(**_kwargs(**overrides))  # type: ignore[arg-type]


def test_from_dates_parses_calendar_strings() -> None:
    """Perihelion and epoch dates are converted to Julian Days."""
    elements = CometElements.from_dates(
        name='Dated',
        eccentricity=1.0,
        perihelion_distance=0.5,
        inclination_deg=0.0,
        node_deg=0.0,
        arg_perihelion_deg=0.0,
        perihelion_date='2000-01-01 12:00',
        epoch_date='2000-01-02 00:00',
        parabolic=True,
    )
    assert elements.perihelion_jd == pytest.approx(2451545.0)
    assert elements.epoch_jd == pytest.approx(2451545.5)
    assert elements.regime is OrbitRegime.PARABOLIC


def test_from_dates_rejects_bad_date() -> None:
    """Unparseable dates raise ValueError."""
    with pytest.raises(ValueError):
        CometElements.from_dates('Bad', 0.5, 1.0, 0.0, 0.0, 0.0, 'not a date')


def test_classify_orbit() -> None:
    """Regime follows e, with the parabolic tag taking precedence."""
    assert classify_orbit(0.0) is OrbitRegime.ELLIPTICAL
    assert classify_orbit(0.999999) is OrbitRegime.ELLIPTICAL
    assert classify_orbit(1.0) is OrbitRegime.PARABOLIC
    assert classify_orbit(1.0, parabolic=True) is OrbitRegime.PARABOLIC
    assert classify_orbit(1.000001) is OrbitRegime.HYPERBOLIC
    with pytest.raises(ValueError):
        classify_orbit(-1.0)
    with pytest.raises(ValueError):
        classify_orbit(float('inf'))


def test_near_parabolic_band() -> None:
    """0.98 < e < 1.02, excluding e == 1."""
    assert is_near_parabolic(0.99)
    assert is_near_parabolic(1.01)
    assert not is_near_parabolic(1.0)
    assert not is_near_parabolic(0.98)
    assert not is_near_parabolic(1.02)
    assert not is_near_parabolic(0.5)


def test_regime_follows_current_eccentricity() -> None:
    """A copy with a different e is classified afresh."""
    elements = CometElements(**_kwargs(eccentricity=0.995))  # type: ignore[arg-type]
    assert elements.regime is OrbitRegime.ELLIPTICAL
    assert elements.near_parabolic
    hyperbolic = dataclasses.replace(elements, eccentricity=1.005)
    assert hyperbolic.regime is OrbitRegime.HYPERBOLIC
    assert hyperbolic.near_parabolic


def test_parse_comet_names_and_aliases() -> None:
    """Built-in comets are found by key or designation, case-insensitively."""
    assert parse_comet('Halley').name == '1P/Halley'
    assert parse_comet(' 1P ') is COMETS['halley']
    assert parse_comet('HaleBopp') is COMETS['hale-bopp']
    assert parse_comet('1I').regime is OrbitRegime.HYPERBOLIC
    with pytest.raises(ValueError):
        parse_comet('no-such-comet')


def test_builtin_regimes() -> None:
    """The built-in table covers elliptical and hyperbolic orbits."""
    assert COMETS['encke'].regime is OrbitRegime.ELLIPTICAL
    assert COMETS['hale-bopp'].near_parabolic
    assert COMETS['oumuamua'].regime is OrbitRegime.HYPERBOLIC
    assert EARTH.regime is OrbitRegime.ELLIPTICAL
    assert EARTH.epoch_jd == 2451545.0
