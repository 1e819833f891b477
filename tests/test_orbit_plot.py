"""Tests for the orbit track and diagram."""

from __future__ import annotations

import numpy as np
import pytest

from comet_ephemeris.comets import parse_comet
from comet_ephemeris.elements import EARTH, CometElements
from comet_ephemeris.kinematics import OrbitKinematics
from comet_ephemeris.rendering.orbit_plot import draw_orbit, orbit_track


def test_closed_orbit_track() -> None:
    """A small ellipse is drawn whole and closes on itself."""
    track = orbit_track(EARTH, npoints=181)
    assert track.shape == (181, 3)
    np.testing.assert_allclose(track[0], track[-1], atol=1e-12)
    radii = np.linalg.norm(track, axis=1)
    assert radii.min() == pytest.approx(EARTH.perihelion_distance)
    assert radii.max() == pytest.approx(1.01671, abs=1e-4)


@pytest.mark.parametrize('name', ['halley', 'oumuamua'])
def test_open_track_is_cut_at_max_radius(name: str) -> None:
    """Long ellipses and hyperbolas stop at the cut-off radius."""
    elements = parse_comet(name)
    track = orbit_track(elements, max_radius_au=4.0)
    radii = np.linalg.norm(track, axis=1)
    assert radii.max() == pytest.approx(4.0, rel=1e-9)
    assert radii.min() == pytest.approx(elements.perihelion_distance, rel=1e-3)


def test_parabolic_track_passes_through_position() -> None:
    """The comet's position at a date lies on the parabolic track plane."""
    comet = CometElements(
        name='Parabola',
        eccentricity=1.0,
        perihelion_distance=0.5,
        inclination_deg=60.0,
        node_deg=100.0,
        arg_perihelion_deg=200.0,
        perihelion_jd=2451545.0,
    )
    kin = OrbitKinematics()
    track = orbit_track(comet, kin, max_radius_au=3.0)
    p, q = kin.basis(comet, 'ecliptic')
    normal = np.cross(p.as_tuple(), q.as_tuple())
    np.testing.assert_allclose(track @ normal, 0.0, atol=1e-12)
    pos = kin.ecliptic_position(comet, 2451545.0 + 20.0)
    assert float(np.dot(pos.as_tuple(), normal)) == pytest.approx(0.0, abs=1e-12)


def test_draw_orbit_writes_image(tmp_path) -> None:  # type: ignore[no-untyped-def]
    """draw_orbit saves a PNG."""
    pytest.importorskip('matplotlib')
    out = tmp_path / 'halley.png'
    halley = parse_comet('halley')
    draw_orbit(halley, halley.perihelion_jd + 30.0, output_path=str(out))
    assert out.exists()
    assert out.stat().st_size > 0
