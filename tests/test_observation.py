# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for topocentric observation geometry (az/el/range)."""
import math

import pytest

from orbitsim.domain.coordinate_frames import geodetic_to_ecef
from orbitsim.domain.observation import GroundStation, Observation, compute_observation


# ── Helpers ──────────────────────────────────────────────────────────

def _overhead_ecef(lat_deg, lon_deg, alt_km):
    return geodetic_to_ecef(math.radians(lat_deg), math.radians(lon_deg), alt_km)


# ── Dataclasses ──────────────────────────────────────────────────────

class TestGroundStation:

    def test_frozen(self):
        station = GroundStation(name="Test", lat_deg=0.0, lon_deg=0.0)
        with pytest.raises(AttributeError):
            station.lat_deg = 10.0

    def test_alt_default_zero(self):
        assert GroundStation(name="Delft", lat_deg=52.0, lon_deg=4.4).alt_km == 0.0

    def test_radians(self):
        station = GroundStation(name="S", lat_deg=45.0, lon_deg=-90.0)
        assert station.lat_rad == pytest.approx(math.pi / 4)
        assert station.lon_rad == pytest.approx(-math.pi / 2)

    def test_ecef_on_surface(self):
        station = GroundStation(name="S", lat_deg=0.0, lon_deg=0.0)
        assert station.ecef() == pytest.approx((6378.137, 0.0, 0.0))


class TestObservationVisibility:

    def test_visible_above_horizon(self):
        assert Observation(10.0, 5.0, 1000.0).is_visible

    def test_not_visible_below_horizon(self):
        assert not Observation(10.0, -5.0, 1000.0).is_visible


# ── Geometry ─────────────────────────────────────────────────────────

class TestComputeObservation:

    def test_zenith(self):
        station = GroundStation(name="Delft", lat_deg=52.0, lon_deg=4.4)
        obs = compute_observation(station, _overhead_ecef(52.0, 4.4, 500.0))
        assert obs.elevation_deg == pytest.approx(90.0, abs=1e-6)
        assert obs.slant_range_km == pytest.approx(500.0, abs=1e-6)

    def test_north_azimuth(self):
        station = GroundStation(name="Eq", lat_deg=0.0, lon_deg=0.0)
        obs = compute_observation(station, _overhead_ecef(5.0, 0.0, 500.0))
        assert obs.azimuth_deg == pytest.approx(0.0, abs=1e-6)

    def test_east_azimuth(self):
        station = GroundStation(name="Eq", lat_deg=0.0, lon_deg=0.0)
        obs = compute_observation(station, _overhead_ecef(0.0, 5.0, 500.0))
        assert obs.azimuth_deg == pytest.approx(90.0, abs=1e-6)

    def test_west_azimuth(self):
        station = GroundStation(name="Eq", lat_deg=0.0, lon_deg=0.0)
        obs = compute_observation(station, _overhead_ecef(0.0, -5.0, 500.0))
        assert obs.azimuth_deg == pytest.approx(270.0, abs=1e-6)

    def test_antipode_below_horizon(self):
        station = GroundStation(name="Eq", lat_deg=0.0, lon_deg=0.0)
        obs = compute_observation(station, _overhead_ecef(0.0, 180.0, 500.0))
        assert obs.elevation_deg == pytest.approx(-90.0, abs=1e-6)
        assert not obs.is_visible

    def test_ranges(self):
        station = GroundStation(name="S", lat_deg=-33.9, lon_deg=151.2, alt_km=0.1)
        for lat, lon in ((-30.0, 150.0), (-40.0, 160.0), (0.0, 100.0)):
            obs = compute_observation(station, _overhead_ecef(lat, lon, 800.0))
            assert 0.0 <= obs.azimuth_deg < 360.0
            assert -90.0 <= obs.elevation_deg <= 90.0
            assert obs.slant_range_km > 0.0
