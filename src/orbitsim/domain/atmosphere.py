# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Atmospheric density model and drag decay of the semi-major axis.

Single-layer exponential atmosphere anchored at the Earth's surface:
    rho = rho0 * exp(-(a - R_E) / H)

The decay is linear in elapsed time and is not clamped: long enough
propagations drive the semi-major axis below the Earth's surface.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from orbitsim.domain.orbital_mechanics import OrbitalConstants

RHO0 = 3.614e-13        # reference density (km-based model units)
SCALE_HEIGHT_KM = 88.667


@dataclass(frozen=True)
class DragConfig:
    """Drag configuration for a satellite.

    cd: drag coefficient (dimensionless, typically 2.0-2.5)
    area_m2: cross-sectional area (m²)
    mass_kg: satellite mass (kg)
    """
    cd: float = 2.2
    area_m2: float = 10.0
    mass_kg: float = 500.0

    def __post_init__(self):
        if self.mass_kg <= 0:
            raise ValueError(f"mass_kg must be positive, got {self.mass_kg}")
        if self.area_m2 < 0:
            raise ValueError(f"area_m2 must be non-negative, got {self.area_m2}")

    @property
    def area_to_mass(self) -> float:
        """A / m (m²/kg)."""
        return self.area_m2 / self.mass_kg


DEFAULT_DRAG = DragConfig()


def atmospheric_density(semi_major_axis_km: float) -> float:
    """Exponential density at the altitude of the semi-major axis."""
    altitude_km = semi_major_axis_km - OrbitalConstants.R_EARTH_EQUATORIAL
    return RHO0 * math.exp(-altitude_km / SCALE_HEIGHT_KM)


def semi_major_axis_decay(
    semi_major_axis_km: float,
    elapsed_s: float,
    drag_config: DragConfig = DEFAULT_DRAG,
) -> float:
    """Semi-major axis loss after elapsed_s seconds of drag.

    Δa = ½ · C_d · (A/m) · rho(a) · sqrt(μ/a) · t

    Args:
        semi_major_axis_km: Semi-major axis at epoch (km).
        elapsed_s: Seconds since epoch (negative values raise a).
        drag_config: Satellite drag configuration.

    Returns:
        Δa in km, to be subtracted from the epoch value.
    """
    rho = atmospheric_density(semi_major_axis_km)
    speed = math.sqrt(OrbitalConstants.MU_EARTH / semi_major_axis_km)
    return 0.5 * drag_config.cd * drag_config.area_to_mass * rho * speed * elapsed_s
