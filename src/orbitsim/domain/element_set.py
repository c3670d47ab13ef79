# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-line element set parsing.

Converts fixed-column TLE text into an immutable orbital element record
and derives semi-major axis from mean motion via Kepler's third law.
Also renders synthesized element sets back to the same column layout so
they enter the system through the same parser as catalog data.

External dependency: numpy (via orbital_mechanics.perifocal_to_eci,
used only by circular_state). Parsing itself is stdlib math only.
"""
import math
from dataclasses import dataclass

from orbitsim.domain.orbital_mechanics import (
    OrbitalConstants,
    perifocal_to_eci,
    semi_major_axis_from_mean_motion,
)
from orbitsim.domain.vectors import Vec3

# Line 2 column ranges (0-based, end-exclusive)
_INCLINATION_COLS = (8, 16)
_RAAN_COLS = (17, 25)
_ECCENTRICITY_COLS = (26, 33)
_ARG_PERIGEE_COLS = (34, 42)
_MEAN_ANOMALY_COLS = (43, 51)
_MEAN_MOTION_COLS = (52, 63)

TLE_LINE_LENGTH = 69
_MIN_LINE2_LENGTH = _MEAN_MOTION_COLS[1]


class ElementSetFormatError(ValueError):
    """Element set text is missing, too short, or not numeric."""


@dataclass(frozen=True)
class OrbitalElements:
    """Classical orbital elements parsed from a two-line element set."""
    name: str
    line1: str
    line2: str
    inclination_deg: float
    raan_deg: float
    eccentricity: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float
    semi_major_axis_km: float

    @property
    def perigee_km(self) -> float:
        """Perigee radius a(1-e) in km."""
        return self.semi_major_axis_km * (1 - self.eccentricity)

    @property
    def apogee_km(self) -> float:
        """Apogee radius a(1+e) in km."""
        return self.semi_major_axis_km * (1 + self.eccentricity)

    @property
    def period_min(self) -> float:
        """Orbital period in minutes."""
        return OrbitalConstants.MINUTES_PER_DAY / self.mean_motion_rev_per_day

    def circular_state(self, true_anomaly_deg: float) -> tuple[Vec3, Vec3]:
        """
        ECI position/velocity on the circular approximation of this orbit.

        Radius is the semi-major axis and speed the circular speed
        sqrt(μ/a); orientation uses the stored RAAN, inclination and
        argument of perigee.

        Args:
            true_anomaly_deg: Angle from perigee along the orbit (degrees).

        Returns:
            (position_km, velocity_km_s) in the ECI frame.
        """
        theta = math.radians(true_anomaly_deg)
        r = self.semi_major_axis_km
        v = math.sqrt(OrbitalConstants.MU_EARTH / r)
        return perifocal_to_eci(
            (r * math.cos(theta), r * math.sin(theta), 0.0),
            (-v * math.sin(theta), v * math.cos(theta), 0.0),
            math.radians(self.raan_deg),
            math.radians(self.inclination_deg),
            math.radians(self.arg_perigee_deg),
        )

    def __str__(self) -> str:
        return (
            f"{self.name} [inc={self.inclination_deg:.4f}°, "
            f"ecc={self.eccentricity:.6f}, "
            f"n={self.mean_motion_rev_per_day:.4f} rev/day, "
            f"a={self.semi_major_axis_km:.2f} km, "
            f"perigee={self.perigee_km:.2f} km, apogee={self.apogee_km:.2f} km, "
            f"period={self.period_min:.2f} min]"
        )


def _field(line: str, cols: tuple[int, int], label: str) -> float:
    text = line[cols[0]:cols[1]].strip()
    try:
        return float(text)
    except ValueError as e:
        raise ElementSetFormatError(f"Invalid {label} field: {text!r}") from e


def parse_two_line_element(name: str, line1: str, line2: str) -> OrbitalElements:
    """
    Parse a two-line element set into an OrbitalElements record.

    Only line 2 carries the fields used for propagation; line 1 is kept
    verbatim. The eccentricity field is a 7-digit mantissa with an
    implied leading decimal point.

    Args:
        name: Free-text satellite name.
        line1: First element line.
        line2: Second element line (at least 63 characters).

    Returns:
        OrbitalElements domain object.

    Raises:
        ElementSetFormatError: If a line is missing or too short, a field
            is not numeric, or the derived orbit violates e ∈ [0, 1),
            n > 0 or a > R_E.
    """
    if name is None or line1 is None or line2 is None:
        raise ElementSetFormatError("Element set name and lines must be provided")
    if len(line2) < _MIN_LINE2_LENGTH:
        raise ElementSetFormatError(
            f"Line 2 is too short: {len(line2)} characters, "
            f"need at least {_MIN_LINE2_LENGTH}"
        )

    inclination = _field(line2, _INCLINATION_COLS, "inclination")
    raan = _field(line2, _RAAN_COLS, "RAAN")
    arg_perigee = _field(line2, _ARG_PERIGEE_COLS, "argument of perigee")
    mean_anomaly = _field(line2, _MEAN_ANOMALY_COLS, "mean anomaly")
    mean_motion = _field(line2, _MEAN_MOTION_COLS, "mean motion")

    mantissa = line2[_ECCENTRICITY_COLS[0]:_ECCENTRICITY_COLS[1]].strip()
    if not (mantissa.isascii() and mantissa.isdigit()):
        raise ElementSetFormatError(f"Invalid eccentricity field: {mantissa!r}")
    eccentricity = float("0." + mantissa)

    if not mean_motion > 0:
        raise ElementSetFormatError(f"Mean motion must be positive, got {mean_motion}")

    try:
        a_km = semi_major_axis_from_mean_motion(mean_motion)
    except (ZeroDivisionError, OverflowError) as e:
        raise ElementSetFormatError(
            f"Mean motion {mean_motion} gives no finite semi-major axis"
        ) from e
    if not a_km > OrbitalConstants.R_EARTH_EQUATORIAL:
        raise ElementSetFormatError(
            f"Semi-major axis {a_km:.1f} km is not above the Earth's surface"
        )

    return OrbitalElements(
        name=name,
        line1=line1,
        line2=line2,
        inclination_deg=inclination,
        raan_deg=raan,
        eccentricity=eccentricity,
        arg_perigee_deg=arg_perigee,
        mean_anomaly_deg=mean_anomaly,
        mean_motion_rev_per_day=mean_motion,
        semi_major_axis_km=a_km,
    )


def tle_checksum(line: str) -> int:
    """Modulo-10 checksum: digits count at face value, '-' counts as 1."""
    total = 0
    for ch in line[:TLE_LINE_LENGTH - 1]:
        if ch.isdigit():
            total += int(ch)
        elif ch == "-":
            total += 1
    return total % 10


def format_element_lines(
    catalog_number: int,
    inclination_deg: float,
    raan_deg: float,
    eccentricity: float,
    arg_perigee_deg: float,
    mean_anomaly_deg: float,
    mean_motion_rev_per_day: float,
) -> tuple[str, str]:
    """
    Render orbital elements as a pair of 69-character element lines.

    Epoch, drag and designator fields of line 1 are placeholders; only
    line 2 carries orbit information.

    Args:
        catalog_number: Satellite number, 0-99999.
        inclination_deg: Inclination in [0, 180] degrees.
        raan_deg: RAAN (degrees, wrapped to [0, 360)).
        eccentricity: Eccentricity in [0, 1).
        arg_perigee_deg: Argument of perigee (degrees, wrapped).
        mean_anomaly_deg: Mean anomaly (degrees, wrapped).
        mean_motion_rev_per_day: Mean motion, (0, 100) rev/day.

    Returns:
        (line1, line2)

    Raises:
        ValueError: If a value does not fit its column.
    """
    if not 0 <= catalog_number <= 99999:
        raise ValueError(f"Catalog number out of range: {catalog_number}")
    if not 0.0 <= inclination_deg <= 180.0:
        raise ValueError(f"Inclination out of range: {inclination_deg}")
    if not 0.0 < mean_motion_rev_per_day < 100.0:
        raise ValueError(f"Mean motion out of range: {mean_motion_rev_per_day}")
    ecc_digits = int(round(eccentricity * 1e7))
    if not 0 <= ecc_digits <= 9_999_999:
        raise ValueError(f"Eccentricity out of range: {eccentricity}")

    body1 = (
        f"1 {catalog_number:05d}U "
        f"{'00000A':<8} "
        f"{'00001.00000000':>14} "
        f"{' .00000000':>10} "
        f"{' 00000-0':>8} "
        f"{' 00000-0':>8} "
        f"0 "
        f"{'999':>4}"
    )
    body2 = (
        f"2 {catalog_number:05d} "
        f"{inclination_deg:8.4f} "
        f"{raan_deg % 360.0:8.4f} "
        f"{ecc_digits:07d} "
        f"{arg_perigee_deg % 360.0:8.4f} "
        f"{mean_anomaly_deg % 360.0:8.4f} "
        f"{mean_motion_rev_per_day:11.8f}"
        f"{0:5d}"
    )
    return (
        body1 + str(tle_checksum(body1)),
        body2 + str(tle_checksum(body2)),
    )
