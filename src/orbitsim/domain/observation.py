# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Topocentric observation geometry.

Computes azimuth, elevation, and slant range from a ground station
to a satellite given in ECEF coordinates.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from orbitsim.domain.coordinate_frames import ecef_to_enu, geodetic_to_ecef
from orbitsim.domain.vectors import Vec3, vec_sub


@dataclass(frozen=True)
class GroundStation:
    """A ground observation station (degrees at the boundary)."""
    name: str
    lat_deg: float
    lon_deg: float
    alt_km: float = 0.0

    @property
    def lat_rad(self) -> float:
        return math.radians(self.lat_deg)

    @property
    def lon_rad(self) -> float:
        return math.radians(self.lon_deg)

    def ecef(self) -> Vec3:
        return geodetic_to_ecef(self.lat_rad, self.lon_rad, self.alt_km)


@dataclass(frozen=True)
class Observation:
    """Topocentric observation: azimuth, elevation, slant range."""
    azimuth_deg: float
    elevation_deg: float
    slant_range_km: float

    @property
    def is_visible(self) -> bool:
        return self.elevation_deg > 0.0


def compute_observation(station: GroundStation, satellite_ecef: Vec3) -> Observation:
    """
    Compute topocentric azimuth, elevation, and slant range.

    Args:
        station: Ground station with geodetic coordinates.
        satellite_ecef: Satellite ECEF position (km).

    Returns:
        Observation with azimuth [0, 360), elevation [-90, 90],
        and slant range in km.
    """
    e, n, u = ecef_to_enu(
        vec_sub(satellite_ecef, station.ecef()), station.lat_rad, station.lon_rad,
    )

    slant_range = math.sqrt(e ** 2 + n ** 2 + u ** 2)
    horizontal = math.sqrt(e ** 2 + n ** 2)

    return Observation(
        azimuth_deg=math.degrees(math.atan2(e, n)) % 360.0,
        elevation_deg=math.degrees(math.atan2(u, horizontal)),
        slant_range_km=slant_range,
    )
