# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital regime classification (LEO / MEO / GEO).

Thresholds are kept here so the propagator factory stays a table lookup.
"""
from enum import Enum

from orbitsim.domain.orbital_mechanics import OrbitalConstants

LEO_MAX_ALT_KM = 2000.0
MEO_MAX_ALT_KM = 35786.0

# ~15 rev/day is a 400 km LEO; GEO is ~1 rev/day.
LEO_MIN_MEAN_MOTION = 10.0
MEO_MIN_MEAN_MOTION = 1.1


class OrbitalRegime(Enum):
    """Coarse orbit classification used as a propagation dispatch key."""
    LEO = "LEO"
    MEO = "MEO"
    GEO = "GEO"


def classify_semi_major_axis(semi_major_axis_km: float) -> OrbitalRegime:
    """
    Classify by altitude of the semi-major axis above the mean Earth radius.

    Args:
        semi_major_axis_km: Semi-major axis (km).

    Returns:
        LEO up to 2000 km, MEO up to 35786 km, GEO beyond.
    """
    alt_km = max(0.0, semi_major_axis_km - OrbitalConstants.R_EARTH_MEAN)
    if alt_km <= LEO_MAX_ALT_KM:
        return OrbitalRegime.LEO
    if alt_km <= MEO_MAX_ALT_KM:
        return OrbitalRegime.MEO
    return OrbitalRegime.GEO


def classify_mean_motion(mean_motion_rev_per_day: float) -> OrbitalRegime:
    """Classify from mean motion (rev/day) when semi-major axis is unknown."""
    if mean_motion_rev_per_day > LEO_MIN_MEAN_MOTION:
        return OrbitalRegime.LEO
    if mean_motion_rev_per_day > MEO_MIN_MEAN_MOTION:
        return OrbitalRegime.MEO
    return OrbitalRegime.GEO
