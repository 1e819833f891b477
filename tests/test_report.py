"""Tests for the single-epoch elements and state report."""

from __future__ import annotations

import io

from comet_ephemeris.comets import parse_comet
from comet_ephemeris.elements import CometElements
from comet_ephemeris.report import NOT_DEFINED, write_elements_summary, write_state_report


def _report_lines(elements: CometElements, jd: float | None = None) -> list[str]:
    buf = io.StringIO()
    if jd is None:
        write_elements_summary(buf, elements)
    else:
        write_state_report(buf, elements, jd)
    return buf.getvalue().splitlines()


def _value(lines: list[str], label: str) -> str:
    for line in lines:
        if line.strip().startswith(label + ':'):
            return line.split(':', 1)[1].strip()
    raise AssertionError(f'No line labelled {label!r}')


def test_elements_summary_elliptical() -> None:
    """Period and aphelion are shown for an ellipse."""
    lines = _report_lines(parse_comet('halley'))
    assert lines[0] == 'Orbital Elements: 1P/Halley'
    assert _value(lines, 'Regime') == 'elliptical'
    assert _value(lines, 'Period').endswith('years')
    assert _value(lines, 'Perihelion date').startswith('1986-02-09')


def test_elements_summary_hyperbolic() -> None:
    """Hyperbolic orbits have a (negative) a but no period or aphelion."""
    lines = _report_lines(parse_comet('oumuamua'))
    assert _value(lines, 'Regime') == 'hyperbolic'
    assert _value(lines, 'Semi-major axis').startswith('-')
    assert _value(lines, 'Period') == NOT_DEFINED
    assert _value(lines, 'Aphelion distance Q') == NOT_DEFINED


def test_elements_summary_near_parabolic() -> None:
    """Hale-Bopp is flagged near-parabolic."""
    lines = _report_lines(parse_comet('hale-bopp'))
    assert _value(lines, 'Regime') == 'elliptical (near-parabolic)'


def test_state_report_parabolic() -> None:
    """Parabolic state: mean and eccentric anomaly undefined, true anomaly zero at T."""
    comet = CometElements(
        name='Parabolic',
        eccentricity=1.0,
        perihelion_distance=1.0,
        inclination_deg=45.0,
        node_deg=10.0,
        arg_perihelion_deg=20.0,
        perihelion_jd=2451545.0,
    )
    lines = _report_lines(comet, 2451545.0)
    assert _value(lines, 'Semi-major axis') == NOT_DEFINED
    assert _value(lines, 'Mean anomaly') == NOT_DEFINED
    assert _value(lines, 'Eccentric anomaly') == NOT_DEFINED
    assert _value(lines, 'True anomaly') == '0.000000 deg'
    assert _value(lines, 'Heliocentric distance') == '1.00000000 AU'


def test_state_report_sections() -> None:
    """State report lists position, velocity and observer quantities."""
    halley = parse_comet('halley')
    lines = _report_lines(halley, halley.perihelion_jd + 30.0)
    assert any(line.startswith('State at 1986-03-11') for line in lines)
    assert _value(lines, 'Heliocentric speed').endswith('km/s')
    assert _value(lines, 'Observer distance').endswith('(Earth)')
    assert 'h' in _value(lines, 'RA, Dec')


def test_state_report_numerical_velocity_precision() -> None:
    """The finite-difference velocity is printed to 7 decimals, the analytic one to 10."""
    halley = parse_comet('halley')
    lines = _report_lines(halley, halley.perihelion_jd + 30.0)
    numerical = _value(lines, 'Velocity, numerical').split()
    analytic = _value(lines, 'Velocity (AU/day)').split()
    assert len(numerical) == 3
    assert all(len(v.split('.')[1]) == 7 for v in numerical)
    assert all(len(v.split('.')[1]) == 10 for v in analytic)
    for n, a in zip(numerical, analytic):
        assert abs(float(n) - float(a)) < 1e-6
