# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Deep-space mean anomaly corrections for MEO/GEO propagation.

Each correction is a named strategy evaluated against an element set
and a time offset; the deep-space model sums an ordered tuple of them
and applies the total to the mean anomaly (radians).
"""
import math
from dataclasses import dataclass
from typing import Callable

from orbitsim.domain.element_set import OrbitalElements
from orbitsim.domain.orbital_mechanics import OrbitalConstants


@dataclass(frozen=True)
class DeepSpaceCorrection:
    """A named correction term: apply(elements, minutes) -> radians."""
    name: str
    apply: Callable[[OrbitalElements, float], float]


def _mean_motion_rad_min(elements: OrbitalElements) -> float:
    return elements.mean_motion_rev_per_day * 2.0 * math.pi / OrbitalConstants.MINUTES_PER_DAY


def dp_init(elements: OrbitalElements, minutes: float) -> float:
    """Initial mean motion correction: 1e-4 · sin(n·t)."""
    return 0.0001 * math.sin(_mean_motion_rad_min(elements) * minutes)


def dp_sec(elements: OrbitalElements, minutes: float) -> float:
    """Secular correction: 5e-5 · t · cos(i)."""
    return 0.00005 * minutes * math.cos(math.radians(elements.inclination_deg))


def dp_per(elements: OrbitalElements, minutes: float) -> float:
    """Periodic correction: 2e-5 · sin(n·t) + 1e-5 · cos(n·t)."""
    phase = _mean_motion_rad_min(elements) * minutes
    return 0.00002 * math.sin(phase) + 0.00001 * math.cos(phase)


DEEP_SPACE_CORRECTIONS: tuple[DeepSpaceCorrection, ...] = (
    DeepSpaceCorrection("dp_init", dp_init),
    DeepSpaceCorrection("dp_sec", dp_sec),
    DeepSpaceCorrection("dp_per", dp_per),
)


def total_correction(
    elements: OrbitalElements,
    minutes: float,
    corrections: tuple[DeepSpaceCorrection, ...] = DEEP_SPACE_CORRECTIONS,
) -> float:
    """Sum of all corrections, in order, at minutes since epoch."""
    total = 0.0
    for correction in corrections:
        total += correction.apply(elements, minutes)
    return total
