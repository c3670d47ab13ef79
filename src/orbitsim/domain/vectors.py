# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Three-vector helpers on plain float tuples.

State vectors throughout the package are (x, y, z) tuples; these are the
few operations the frame conversions and observation geometry need on
them. Orbit-plane rotation is the numpy matrix in orbital_mechanics; the
Earth-frame rotations in coordinate_frames are written out with math.
"""
import math

Vec3 = tuple[float, float, float]


def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(a: Vec3, factor: float) -> Vec3:
    return (a[0] * factor, a[1] * factor, a[2] * factor)


def vec_norm(a: Vec3) -> float:
    """Euclidean magnitude."""
    return math.sqrt(a[0] ** 2 + a[1] ** 2 + a[2] ** 2)


def vec_normalize(a: Vec3) -> Vec3:
    """
    Unit vector in the direction of a.

    Raises:
        ValueError: If a has zero length.
    """
    n = vec_norm(a)
    if n == 0.0:
        raise ValueError("Cannot normalize zero-length vector")
    return vec_scale(a, 1.0 / n)
