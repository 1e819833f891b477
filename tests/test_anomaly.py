"""Tests for Kepler/Barker solvers and anomaly conversions."""

from __future__ import annotations

import math

import pytest

from comet_ephemeris.anomaly import (
    acosh_checked,
    barker_true_anomaly,
    eccentric_anomaly_from_true,
    mean_anomaly_from_true,
    solve_eccentric_anomaly,
    true_anomaly_from_eccentric,
)
from comet_ephemeris.errors import (
    ConvergenceFailure,
    DegenerateInputError,
    InvalidDomainError,
    OrbitError,
)

ELLIPTICAL_E = [0.0, 0.1, 0.3, 0.5, 0.8, 0.9, 0.97, 0.999]
HYPERBOLIC_E = [1.0001, 1.01, 1.2, 2.0, 5.0, 50.0]
MEAN_ANOMALIES = [-720.5, -179.0, -90.0, -1e-3, 0.0, 1e-3, 0.5, 10.0, 90.0, 179.9, 180.0, 270.0, 1000.0]


def _elliptical_mean(e: float, ecc_anom: float) -> float:
    return ecc_anom - e * math.sin(ecc_anom)


def _hyperbolic_mean(e: float, hyp_anom: float) -> float:
    return e * math.sinh(hyp_anom) - hyp_anom


@pytest.mark.parametrize('e', [0.0, 0.05, 0.1, 0.2, 0.29, 0.2999])
def test_low_eccentricity_start_matches_tight_solution(e: float) -> None:
    """For e < 0.3 the default solve agrees with a tightly converged solve to 1e-8."""
    for m_deg in range(-350, 360, 25):
        fast = solve_eccentric_anomaly(e, float(m_deg))
        tight = solve_eccentric_anomaly(e, float(m_deg), threshold=1e-14)
        assert abs(fast - tight) < 1e-8


@pytest.mark.parametrize('e', ELLIPTICAL_E)
def test_elliptical_solution_reproduces_mean_anomaly(e: float) -> None:
    """E - e sin E returns the input M, revolutions and sign included."""
    for m_deg in MEAN_ANOMALIES:
        ecc_anom = solve_eccentric_anomaly(e, m_deg)
        assert abs(_elliptical_mean(e, ecc_anom) - math.radians(m_deg)) < 1e-8


@pytest.mark.parametrize('e', HYPERBOLIC_E)
def test_hyperbolic_solution_reproduces_mean_anomaly(e: float) -> None:
    """e sinh H - H returns the input M within the scaled tolerance."""
    for m_deg in [-500.0, -30.0, -1.0, 0.0, 0.01, 1.0, 45.0, 1000.0, 1e5]:
        m = math.radians(m_deg)
        hyp_anom = solve_eccentric_anomaly(e, m_deg)
        tol = max(1e-8 * abs(1.0 - e), 1e-11 * max(1.0, abs(m)))
        assert abs(_hyperbolic_mean(e, hyp_anom) - m) <= tol
        assert math.copysign(1.0, hyp_anom) == math.copysign(1.0, m) or hyp_anom == 0.0


def test_moderate_eccentricity_quarter_orbit() -> None:
    """e = 0.5, M = 90 deg: E satisfies Kepler's equation and nu lies past 90 deg."""
    ecc_anom = solve_eccentric_anomaly(0.5, 90.0)
    assert abs(_elliptical_mean(0.5, ecc_anom) - math.pi / 2.0) < 1e-8
    nu = true_anomaly_from_eccentric(0.5, ecc_anom)
    assert 90.0 < nu < 180.0


@pytest.mark.parametrize('m_deg', [-400.0, -180.0, -30.0, 0.0, 12.5, 180.0, 400.0, 1234.5])
def test_circular_orbit_true_anomaly_equals_mean(m_deg: float) -> None:
    """With e = 0 the eccentric and true anomalies equal the mean anomaly."""
    ecc_anom = solve_eccentric_anomaly(0.0, m_deg)
    assert ecc_anom == pytest.approx(math.radians(m_deg), abs=1e-12)
    assert true_anomaly_from_eccentric(0.0, ecc_anom) == pytest.approx(m_deg, abs=1e-9)


def test_parabolic_eccentric_anomaly_is_degenerate() -> None:
    """e == 1 has no eccentric anomaly."""
    with pytest.raises(DegenerateInputError):
        solve_eccentric_anomaly(1.0, 10.0)
    with pytest.raises(DegenerateInputError):
        true_anomaly_from_eccentric(1.0, 0.2)
    with pytest.raises(DegenerateInputError):
        eccentric_anomaly_from_true(1.0, 20.0)
    # Also catchable as a ValueError
    with pytest.raises(ValueError):
        solve_eccentric_anomaly(1.0, 10.0)


def test_negative_eccentricity_rejected() -> None:
    """Negative eccentricity is invalid input."""
    with pytest.raises(ValueError):
        solve_eccentric_anomaly(-0.1, 10.0)


def test_iteration_cap_raises_convergence_failure() -> None:
    """A hard near-parabolic case cannot converge in a single Newton step."""
    with pytest.raises(ConvergenceFailure) as excinfo:
        solve_eccentric_anomaly(0.99, 0.01, max_iterations=1)
    err = excinfo.value
    assert isinstance(err, OrbitError)
    assert isinstance(err, RuntimeError)
    assert err.iterations == 1
    assert err.eccentricity == 0.99
    assert abs(err.residual) > 0.0


def test_hyperbolic_iteration_cap_raises_convergence_failure() -> None:
    """A large hyperbolic mean anomaly needs more than one Newton step."""
    with pytest.raises(ConvergenceFailure) as excinfo:
        solve_eccentric_anomaly(5.0, 1e5, max_iterations=1)
    err = excinfo.value
    assert err.eccentricity == 5.0
    assert err.iterations == 1
    assert err.mean_anomaly_rad == pytest.approx(math.radians(1e5))


def test_barker_zero_at_perihelion() -> None:
    """Barker's equation gives nu = 0 exactly at perihelion."""
    assert barker_true_anomaly(1.0, 0.0) == 0.0
    assert barker_true_anomaly(0.3, 0.0) == 0.0


@pytest.mark.parametrize('q', [0.1, 1.0, 4.5])
def test_barker_solves_cubic_with_sign_symmetry(q: float) -> None:
    """tan(nu/2) solves s^3 + 3s = W, and nu is odd in time from perihelion."""
    k = 0.01720209895
    for dt in [0.5, 10.0, 100.0, 5000.0]:
        nu = barker_true_anomaly(q, dt)
        s = math.tan(math.radians(nu) / 2.0)
        w = 3.0 * k / math.sqrt(2.0) * dt / q**1.5
        assert s**3 + 3.0 * s == pytest.approx(w, rel=1e-10)
        assert barker_true_anomaly(q, -dt) == -nu
        assert 0.0 < nu < 180.0


def test_barker_rejects_non_positive_q() -> None:
    """q must be positive."""
    with pytest.raises(ValueError):
        barker_true_anomaly(0.0, 10.0)


def test_acosh_checked_domain() -> None:
    """acosh accepts x > 1 and raises at or below 1."""
    assert acosh_checked(2.0) == pytest.approx(math.acosh(2.0))
    assert acosh_checked(1.0 + 1e-12) > 0.0
    with pytest.raises(InvalidDomainError):
        acosh_checked(1.0)
    with pytest.raises(InvalidDomainError):
        acosh_checked(0.999)
    with pytest.raises(InvalidDomainError):
        acosh_checked(float('nan'))


@pytest.mark.parametrize(('e', 'nu_deg'), [(0.6, 120.0), (0.2, -45.0), (0.9, 500.0), (1.5, -100.0), (3.0, 80.0)])
def test_true_eccentric_round_trip(e: float, nu_deg: float) -> None:
    """true -> eccentric -> true returns the starting angle."""
    ecc_anom = eccentric_anomaly_from_true(e, nu_deg)
    assert true_anomaly_from_eccentric(e, ecc_anom) == pytest.approx(nu_deg, abs=1e-9)


def test_hyperbolic_true_anomaly_beyond_asymptote() -> None:
    """For e = 1.5 the asymptote is at acos(-1/1.5) ~ 131.8 deg."""
    with pytest.raises(InvalidDomainError):
        eccentric_anomaly_from_true(1.5, 140.0)


@pytest.mark.parametrize(('e', 'm_deg'), [(0.3, 47.0), (0.7, -160.0), (0.95, 3.0), (1.3, 20.0), (2.5, -300.0)])
def test_mean_anomaly_from_true_inverts_solver(e: float, m_deg: float) -> None:
    """mean_anomaly_from_true undoes solve + true_anomaly_from_eccentric."""
    nu = true_anomaly_from_eccentric(e, solve_eccentric_anomaly(e, m_deg, threshold=1e-14))
    assert mean_anomaly_from_true(e, nu) == pytest.approx(m_deg, abs=1e-7)


@pytest.mark.parametrize('e', [1.0001, 1.5, 3.0])
def test_hyperbolic_perihelion_eccentric_anomaly_is_zero(e: float) -> None:
    """nu = 0 gives H = 0 without reaching the acosh domain edge."""
    assert eccentric_anomaly_from_true(e, 0.0) == 0.0
    assert mean_anomaly_from_true(e, 0.0) == 0.0


def test_mean_anomaly_from_true_parabolic_is_degenerate() -> None:
    """Mean anomaly has no parabolic counterpart."""
    with pytest.raises(DegenerateInputError):
        mean_anomaly_from_true(1.0, 30.0)
