# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coordinate frame conversions.

Pure mathematical transformations between ECI, ECEF, Geodetic and ENU
frames. No state, no locks.

Reference frames:
    ECI  — Earth-Centered Inertial (non-rotating)
    ECEF — Earth-Centered Earth-Fixed (rotating with Earth)
    Geodetic — Latitude, Longitude, Altitude (WGS84 ellipsoid)
    ENU  — East-North-Up, local to an observer

The ECI→ECEF rotation is a Z-axis rotation by θ = ω⊕·t, with t in
seconds since the element epoch (the frames coincide at t = 0).
ECEF→Geodetic iterates latitude on the WGS84 ellipsoid until it moves
less than 1e-12 rad.

Distances in km, velocities in km/s, angles in radians.
"""
import math
from dataclasses import dataclass

from orbitsim.domain.orbital_mechanics import OrbitalConstants
from orbitsim.domain.vectors import Vec3, vec_norm, vec_sub

GEODETIC_TOLERANCE_RAD = 1e-12
_GEODETIC_MAX_ITERATIONS = 50


def earth_rotation_angle(t_seconds: float) -> float:
    """Earth rotation angle θ = ω⊕·t (radians)."""
    return OrbitalConstants.EARTH_ROTATION_RATE * t_seconds


# ── ECI ↔ ECEF ──────────────────────────────────────────────────────

def eci_to_ecef(pos_eci: Vec3, t_seconds: float) -> Vec3:
    """
    Rotate an ECI position into ECEF.

        [x_ecef]   [ cos(θ)  sin(θ)  0] [x_eci]
        [y_ecef] = [-sin(θ)  cos(θ)  0] [y_eci]
        [z_ecef]   [   0       0     1] [z_eci]
    """
    theta = earth_rotation_angle(t_seconds)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return (
        cos_t * pos_eci[0] + sin_t * pos_eci[1],
        -sin_t * pos_eci[0] + cos_t * pos_eci[1],
        pos_eci[2],
    )


def ecef_to_eci(pos_ecef: Vec3, t_seconds: float) -> Vec3:
    """Inverse of eci_to_ecef."""
    theta = earth_rotation_angle(t_seconds)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return (
        cos_t * pos_ecef[0] - sin_t * pos_ecef[1],
        sin_t * pos_ecef[0] + cos_t * pos_ecef[1],
        pos_ecef[2],
    )


def eci_to_ecef_velocity(pos_eci: Vec3, vel_eci: Vec3, t_seconds: float) -> Vec3:
    """
    ECEF velocity from an ECI state: v_ecef = R·v_eci − ω⊕ × r_ecef.

    Args:
        pos_eci: ECI position (km).
        vel_eci: ECI velocity (km/s).
        t_seconds: Seconds since epoch.

    Returns:
        ECEF velocity (km/s).
    """
    omega = OrbitalConstants.EARTH_ROTATION_RATE
    rx, ry, _ = eci_to_ecef(pos_eci, t_seconds)
    rvx, rvy, rvz = eci_to_ecef(vel_eci, t_seconds)
    return (rvx + omega * ry, rvy - omega * rx, rvz)


def ecef_to_eci_velocity(pos_ecef: Vec3, vel_ecef: Vec3, t_seconds: float) -> Vec3:
    """ECI velocity from an ECEF state: v_eci = Rᵀ·(v_ecef + ω⊕ × r_ecef)."""
    omega = OrbitalConstants.EARTH_ROTATION_RATE
    inertial_rate = (
        vel_ecef[0] - omega * pos_ecef[1],
        vel_ecef[1] + omega * pos_ecef[0],
        vel_ecef[2],
    )
    return ecef_to_eci(inertial_rate, t_seconds)


# ── ECEF ↔ Geodetic ─────────────────────────────────────────────────

def ecef_to_geodetic(pos_ecef: Vec3) -> tuple[float, float, float]:
    """
    Convert ECEF position to geodetic coordinates (WGS84 ellipsoid).

    Latitude is found by fixed-point iteration
        lat ← atan2(z + e²·N(lat)·sin(lat), p)
    starting from the spherical-with-flattening estimate.

    Args:
        pos_ecef: Position in ECEF frame (km).

    Returns:
        (latitude_rad, longitude_rad, altitude_km)
        Latitude in [-π/2, π/2], longitude in (-π, π].
    """
    c = OrbitalConstants
    a = c.R_EARTH_EQUATORIAL
    e2 = c.E_SQUARED

    x, y, z = pos_ecef
    p = math.sqrt(x ** 2 + y ** 2)
    lon = math.atan2(y, x)

    lat = math.atan2(z, p * (1.0 - e2))
    for _ in range(_GEODETIC_MAX_ITERATIONS):
        sin_lat = math.sin(lat)
        n = a / math.sqrt(1.0 - e2 * sin_lat ** 2)
        lat_next = math.atan2(z + e2 * n * sin_lat, p)
        converged = abs(lat_next - lat) < GEODETIC_TOLERANCE_RAD
        lat = lat_next
        if converged:
            break

    sin_lat = math.sin(lat)
    cos_lat = math.cos(lat)
    n = a / math.sqrt(1.0 - e2 * sin_lat ** 2)

    if abs(cos_lat) > 1e-10:
        alt = p / cos_lat - n
    else:
        alt = abs(z) - c.R_EARTH_POLAR

    return lat, lon, alt


def geodetic_to_ecef(lat_rad: float, lon_rad: float, alt_km: float) -> Vec3:
    """
    Convert geodetic coordinates to ECEF position (WGS84 ellipsoid).

    Closed form using the prime-vertical radius of curvature N.
    """
    c = OrbitalConstants
    e2 = c.E_SQUARED

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    n = c.R_EARTH_EQUATORIAL / math.sqrt(1.0 - e2 * sin_lat ** 2)

    return (
        (n + alt_km) * cos_lat * math.cos(lon_rad),
        (n + alt_km) * cos_lat * math.sin(lon_rad),
        (n * (1.0 - e2) + alt_km) * sin_lat,
    )


# ── ECEF ↔ ENU ──────────────────────────────────────────────────────

def ecef_to_enu(delta_ecef: Vec3, lat_rad: float, lon_rad: float) -> Vec3:
    """
    Rotate an ECEF vector into East-North-Up at (lat, lon).

    Works for offsets and velocities alike.
    """
    dx, dy, dz = delta_ecef
    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    sin_lon = math.sin(lon_rad)
    cos_lon = math.cos(lon_rad)

    e = -sin_lon * dx + cos_lon * dy
    n = -sin_lat * cos_lon * dx - sin_lat * sin_lon * dy + cos_lat * dz
    u = cos_lat * cos_lon * dx + cos_lat * sin_lon * dy + sin_lat * dz
    return e, n, u


def enu_to_ecef(enu: Vec3, lat_rad: float, lon_rad: float) -> Vec3:
    """Inverse of ecef_to_enu (transpose rotation)."""
    e, n, u = enu
    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    sin_lon = math.sin(lon_rad)
    cos_lon = math.cos(lon_rad)

    dx = -sin_lon * e - sin_lat * cos_lon * n + cos_lat * cos_lon * u
    dy = cos_lon * e - sin_lat * sin_lon * n + cos_lat * sin_lon * u
    dz = cos_lat * n + sin_lat * u
    return dx, dy, dz


def ecef_velocity_to_enu(vel_ecef: Vec3, lat_rad: float, lon_rad: float) -> Vec3:
    """ENU components of an ECEF velocity at (lat, lon)."""
    return ecef_to_enu(vel_ecef, lat_rad, lon_rad)


def ecef_to_topocentric(
    pos_ecef: Vec3,
    vel_ecef: Vec3,
    observer_lat_rad: float,
    observer_lon_rad: float,
    observer_alt_km: float = 0.0,
) -> tuple[Vec3, Vec3]:
    """
    Satellite state relative to a ground observer, in the observer's ENU.

    The observer is fixed in ECEF, so the relative velocity is the ECEF
    velocity itself and the observer altitude only affects position.

    Returns:
        (enu_position_km, enu_velocity_km_s)
    """
    observer = geodetic_to_ecef(observer_lat_rad, observer_lon_rad, observer_alt_km)
    enu_pos = ecef_to_enu(vec_sub(pos_ecef, observer), observer_lat_rad, observer_lon_rad)
    enu_vel = ecef_to_enu(vel_ecef, observer_lat_rad, observer_lon_rad)
    return enu_pos, enu_vel


# ── Composite ECI → LLA ─────────────────────────────────────────────

def normalize_longitude(lon_rad: float) -> float:
    """Wrap a longitude into (-π, π]."""
    two_pi = 2.0 * math.pi
    wrapped = (lon_rad + math.pi) % two_pi - math.pi
    if wrapped <= -math.pi:
        wrapped += two_pi
    return wrapped


@dataclass(frozen=True)
class LlaState:
    """Geodetic position with ENU velocity, for presentation."""
    lat_rad: float
    lon_rad: float
    alt_km: float
    enu_velocity: Vec3

    @property
    def lat_deg(self) -> float:
        return math.degrees(self.lat_rad)

    @property
    def lon_deg(self) -> float:
        return math.degrees(self.lon_rad)

    @property
    def ground_speed_km_s(self) -> float:
        return vec_norm(self.enu_velocity)


def eci_to_lla(pos_eci: Vec3, vel_eci: Vec3, minutes: float) -> LlaState:
    """
    ECI state → latitude, longitude, altitude and ENU velocity.

    Composes eci_to_ecef, eci_to_ecef_velocity, ecef_to_geodetic and
    ecef_velocity_to_enu.

    Args:
        pos_eci: ECI position (km).
        vel_eci: ECI velocity (km/s).
        minutes: Minutes since epoch (drives Earth rotation).

    Returns:
        LlaState with longitude normalized to (-π, π].
    """
    t_seconds = minutes * 60.0
    pos_ecef = eci_to_ecef(pos_eci, t_seconds)
    vel_ecef = eci_to_ecef_velocity(pos_eci, vel_eci, t_seconds)

    lat, lon, alt = ecef_to_geodetic(pos_ecef)
    lon = normalize_longitude(lon)
    return LlaState(
        lat_rad=lat,
        lon_rad=lon,
        alt_km=alt,
        enu_velocity=ecef_velocity_to_enu(vel_ecef, lat, lon),
    )
