# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
orbitsim

Analytical orbit propagation and Earth-frame coordinate conversion for
satellites described by two-line element sets. Includes Kepler, J2 and
drag-corrected propagators with regime-based selection (LEO/MEO/GEO),
thread-safe per-satellite state history, constellation-wide batch
propagation, and ECI/ECEF/geodetic/ENU transforms.
"""

from orbitsim.domain.orbital_mechanics import (
    OrbitalConstants,
    semi_major_axis_from_mean_motion,
    j2_raan_rate,
    j2_arg_perigee_rate,
    solve_kepler,
    eccentric_to_true_anomaly,
    perifocal_to_eci,
)
from orbitsim.domain.vectors import (
    Vec3,
    vec_norm,
    vec_normalize,
)
from orbitsim.domain.element_set import (
    ElementSetFormatError,
    OrbitalElements,
    parse_two_line_element,
    format_element_lines,
)
from orbitsim.domain.regime import (
    OrbitalRegime,
    classify_semi_major_axis,
    classify_mean_motion,
)
from orbitsim.domain.atmosphere import (
    DragConfig,
    DEFAULT_DRAG,
)
from orbitsim.domain.deep_space import (
    DeepSpaceCorrection,
    DEEP_SPACE_CORRECTIONS,
    total_correction,
)
from orbitsim.domain.propagation import (
    PropagationModel,
    Propagator,
    OrbitPropagator,
    RegimePropagator,
    create_regime_propagator,
    perturbed_state,
    deep_space_state,
    circular_state,
)
from orbitsim.domain.satellite import (
    IncompleteSatelliteError,
    Satellite,
    SatelliteBuilder,
)
from orbitsim.domain.constellation import (
    Constellation,
    build_satellite,
    build_satellites,
    build_constellation,
)
from orbitsim.domain.coordinate_frames import (
    LlaState,
    eci_to_ecef,
    ecef_to_eci,
    eci_to_ecef_velocity,
    ecef_to_eci_velocity,
    ecef_to_geodetic,
    geodetic_to_ecef,
    ecef_to_enu,
    enu_to_ecef,
    ecef_to_topocentric,
    eci_to_lla,
)
from orbitsim.domain.observation import (
    GroundStation,
    Observation,
    compute_observation,
)
from orbitsim.domain.simulation import RegimeAwareSimulator

__version__ = "1.0.0"
