# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Earth constants, J2 secular rates, Kepler's equation and the
perifocal→ECI rotation shared by every analytical propagation model.
Units are kilometres and seconds unless a name says otherwise.
"""
import logging
import math
from dataclasses import dataclass

import numpy as np

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _OrbitalConstants:
    """Standard orbital constants (WGS84 ellipsoid, km units)."""
    MU_EARTH: float = 398600.4418          # km³/s² — gravitational parameter
    R_EARTH_MEAN: float = 6371.0           # km — mean radius (regime thresholds)
    R_EARTH_EQUATORIAL: float = 6378.137   # km — WGS84 semi-major axis
    FLATTENING: float = 1.0 / 298.257223563
    J2_EARTH: float = 1.08263e-3           # J2 zonal harmonic coefficient
    EARTH_ROTATION_RATE: float = 7.2921159e-5  # rad/s — sidereal rotation rate
    SECONDS_PER_DAY: float = 86400.0
    MINUTES_PER_DAY: float = 1440.0

    @property
    def R_EARTH_POLAR(self) -> float:
        """WGS84 semi-minor axis (km)."""
        return self.R_EARTH_EQUATORIAL * (1.0 - self.FLATTENING)

    @property
    def E_SQUARED(self) -> float:
        """WGS84 first eccentricity squared."""
        b = self.R_EARTH_POLAR
        a = self.R_EARTH_EQUATORIAL
        return 1.0 - (b * b) / (a * a)


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()

KEPLER_MAX_ITERATIONS = 15
KEPLER_TOLERANCE = 1e-8


def semi_major_axis_from_mean_motion(mean_motion_rev_per_day: float) -> float:
    """
    Semi-major axis from mean motion via Kepler's third law.

        n (rad/s) = mean_motion × 2π / 86400
        a = (μ / n²)^(1/3)

    Args:
        mean_motion_rev_per_day: Mean motion (rev/day), must be positive.

    Returns:
        Semi-major axis in km.
    """
    n_rad_s = mean_motion_rev_per_day * 2.0 * math.pi / OrbitalConstants.SECONDS_PER_DAY
    return (OrbitalConstants.MU_EARTH / (n_rad_s ** 2)) ** (1.0 / 3.0)


def mean_motion_rad_s(a: float) -> float:
    """Unperturbed mean motion sqrt(μ/a³) in rad/s for a in km."""
    return math.sqrt(OrbitalConstants.MU_EARTH / a ** 3)


def j2_raan_rate(n: float, a: float, e: float, i_rad: float) -> float:
    """
    J2 secular rate of RAAN.

    dΩ/dt = -3/2 · J2 · (R_E/p)² · n · cos(i),  p = a(1-e²)

    Args:
        n: Mean motion (rad/s).
        a: Semi-major axis (km).
        e: Eccentricity.
        i_rad: Inclination (radians).

    Returns:
        RAAN rate in rad/s. Negative for prograde, positive for retrograde.
    """
    c = OrbitalConstants
    p = a * (1.0 - e ** 2)
    return -1.5 * c.J2_EARTH * (c.R_EARTH_EQUATORIAL / p) ** 2 * n * math.cos(i_rad)


def j2_arg_perigee_rate(n: float, a: float, e: float, i_rad: float) -> float:
    """
    J2 secular rate of argument of perigee.

    dω/dt = 3/4 · J2 · (R_E/p)² · n · (5cos²i - 1),  p = a(1-e²)

    Zero at the critical inclination (~63.4°).

    Args:
        n: Mean motion (rad/s).
        a: Semi-major axis (km).
        e: Eccentricity.
        i_rad: Inclination (radians).

    Returns:
        Argument of perigee rate in rad/s.
    """
    c = OrbitalConstants
    p = a * (1.0 - e ** 2)
    return 0.75 * c.J2_EARTH * (c.R_EARTH_EQUATORIAL / p) ** 2 * n * (5.0 * math.cos(i_rad) ** 2 - 1.0)


def solve_kepler(mean_anomaly_rad: float, e: float) -> float:
    """
    Solve Kepler's equation M = E - e·sin(E) by Newton-Raphson.

    Seeded at E₀ = M. Stops after KEPLER_MAX_ITERATIONS or once the
    residual drops below KEPLER_TOLERANCE. Never raises: the last
    iterate is returned when the cap is reached.

    Args:
        mean_anomaly_rad: Mean anomaly (radians).
        e: Eccentricity in [0, 1).

    Returns:
        Eccentric anomaly (radians).
    """
    ecc_anomaly = mean_anomaly_rad
    for _ in range(KEPLER_MAX_ITERATIONS):
        residual = ecc_anomaly - e * math.sin(ecc_anomaly) - mean_anomaly_rad
        ecc_anomaly -= residual / (1.0 - e * math.cos(ecc_anomaly))
        if abs(residual) < KEPLER_TOLERANCE:
            break
    else:
        _log.debug(
            "Kepler solver hit %d iterations (M=%g, e=%g)",
            KEPLER_MAX_ITERATIONS, mean_anomaly_rad, e,
        )
    return ecc_anomaly


def eccentric_to_true_anomaly(ecc_anomaly_rad: float, e: float) -> float:
    """True anomaly from eccentric anomaly via the half-angle relation."""
    return 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(ecc_anomaly_rad / 2.0),
        math.sqrt(1.0 - e) * math.cos(ecc_anomaly_rad / 2.0),
    )


def perifocal_rotation(raan_rad: float, i_rad: float, arg_perigee_rad: float) -> np.ndarray:
    """
    Perifocal (PQW) → ECI rotation matrix, 3-1-3 sequence R3(-Ω)·R1(-i)·R3(-ω).

    Args:
        raan_rad: Right ascension of ascending node (radians).
        i_rad: Inclination (radians).
        arg_perigee_rad: Argument of perigee (radians).

    Returns:
        3x3 rotation matrix.
    """
    cO = math.cos(raan_rad)
    sO = math.sin(raan_rad)
    co = math.cos(arg_perigee_rad)
    so = math.sin(arg_perigee_rad)
    ci = math.cos(i_rad)
    si = math.sin(i_rad)

    return np.array([
        [cO * co - sO * so * ci, -cO * so - sO * co * ci, sO * si],
        [sO * co + cO * so * ci, -sO * so + cO * co * ci, -cO * si],
        [so * si, co * si, ci],
    ])


def perifocal_to_eci(
    pos_pqw: tuple[float, float, float],
    vel_pqw: tuple[float, float, float],
    raan_rad: float,
    i_rad: float,
    arg_perigee_rad: float,
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """
    Rotate a perifocal position/velocity pair into the ECI frame.

    Returns:
        (position_eci, velocity_eci) as float tuples.
    """
    rotation = perifocal_rotation(raan_rad, i_rad, arg_perigee_rad)
    pos = rotation @ np.asarray(pos_pqw, dtype=float)
    vel = rotation @ np.asarray(vel_pqw, dtype=float)
    return (
        (float(pos[0]), float(pos[1]), float(pos[2])),
        (float(vel[0]), float(vel[1]), float(vel[2])),
    )
