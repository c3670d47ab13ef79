# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Analytical orbit propagation.

Three closed-form models share one entry signature
(elements, minutes, drag_config) -> (position_km, velocity_km_s):

    PERTURBED   Kepler + J2 secular rates + exponential-atmosphere drag (LEO)
    DEEP_SPACE  Kepler + J2 secular rates + summed deep-space corrections
                on the mean anomaly, no drag (MEO/GEO)
    CIRCULAR    Circular two-body orbit swept linearly over one period

OrbitPropagator binds one element set to one model and caches the most
recent result under a lock. RegimePropagator wraps an OrbitPropagator
chosen from the element set's orbital regime.

External dependency: numpy (via orbital_mechanics rotation).
"""
import logging
import math
import threading
from enum import Enum
from typing import Iterable, Protocol, runtime_checkable

from orbitsim.domain.atmosphere import DEFAULT_DRAG, DragConfig, semi_major_axis_decay
from orbitsim.domain.deep_space import total_correction
from orbitsim.domain.element_set import OrbitalElements
from orbitsim.domain.orbital_mechanics import (
    OrbitalConstants,
    eccentric_to_true_anomaly,
    j2_arg_perigee_rate,
    j2_raan_rate,
    mean_motion_rad_s,
    perifocal_to_eci,
    solve_kepler,
)
from orbitsim.domain.regime import OrbitalRegime, classify_semi_major_axis
from orbitsim.domain.vectors import Vec3

_log = logging.getLogger(__name__)

State = tuple[Vec3, Vec3]

_NAN_VEC: Vec3 = (math.nan, math.nan, math.nan)
UNDEFINED_STATE: State = (_NAN_VEC, _NAN_VEC)


class PropagationModel(Enum):
    """Closed set of analytical propagation strategies."""
    PERTURBED = "perturbed"
    DEEP_SPACE = "deep_space"
    CIRCULAR = "circular"


def _elapsed_seconds(minutes: float) -> float | None:
    t_s = minutes * 60.0
    return t_s if math.isfinite(t_s) else None


def _secular_kepler_state(
    elements: OrbitalElements,
    t_s: float,
    a_km: float,
    mean_anomaly_offset_rad: float = 0.0,
) -> State:
    """Kepler orbit with J2-precessed node/perigee at t_s seconds.

    Mean motion and J2 rates use the epoch semi-major axis; radius and
    vis-viva speed use a_km, which may already include drag decay.
    """
    a0 = elements.semi_major_axis_km
    e = elements.eccentricity
    i_rad = math.radians(elements.inclination_deg)
    n = mean_motion_rad_s(a0)

    raan = math.radians(elements.raan_deg) + j2_raan_rate(n, a0, e, i_rad) * t_s
    arg_perigee = math.radians(elements.arg_perigee_deg) + j2_arg_perigee_rate(n, a0, e, i_rad) * t_s

    mean_anomaly = math.radians(elements.mean_anomaly_deg) + n * t_s + mean_anomaly_offset_rad
    ecc_anomaly = solve_kepler(mean_anomaly, e)
    theta = eccentric_to_true_anomaly(ecc_anomaly, e)
    r = a_km * (1.0 - e * math.cos(ecc_anomaly))

    # Speed floors at zero once an unclamped decay leaves the orbit unbound.
    v = math.sqrt(max(0.0, OrbitalConstants.MU_EARTH * (2.0 / r - 1.0 / a_km)))

    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return perifocal_to_eci(
        (r * cos_t, r * sin_t, 0.0),
        (-v * sin_t, v * cos_t, 0.0),
        raan, i_rad, arg_perigee,
    )


def perturbed_state(
    elements: OrbitalElements,
    minutes: float,
    drag_config: DragConfig = DEFAULT_DRAG,
) -> State:
    """
    Kepler + J2 + drag state at minutes since epoch.

    Args:
        elements: Parsed element set.
        minutes: Minutes since element epoch.
        drag_config: Drag coefficient, area and mass.

    Returns:
        (position_km, velocity_km_s) in ECI; NaN vectors if the elapsed
        time is not finite.
    """
    t_s = _elapsed_seconds(minutes)
    if t_s is None:
        return UNDEFINED_STATE
    a0 = elements.semi_major_axis_km
    a = a0 - semi_major_axis_decay(a0, t_s, drag_config)
    return _secular_kepler_state(elements, t_s, a)


def deep_space_state(
    elements: OrbitalElements,
    minutes: float,
    drag_config: DragConfig = DEFAULT_DRAG,
) -> State:
    """
    Kepler + J2 with deep-space mean anomaly corrections, no drag.

    drag_config is accepted for signature compatibility and ignored.
    """
    t_s = _elapsed_seconds(minutes)
    if t_s is None:
        return UNDEFINED_STATE
    offset = total_correction(elements, minutes)
    return _secular_kepler_state(elements, t_s, elements.semi_major_axis_km, offset)


def circular_state(
    elements: OrbitalElements,
    minutes: float,
    drag_config: DragConfig = DEFAULT_DRAG,
) -> State:
    """
    Unperturbed circular approximation.

    True anomaly sweeps 360° linearly over one orbital period, starting
    from the epoch mean anomaly:
        θ = M₀ + 360 · (t mod P) / P
    """
    if _elapsed_seconds(minutes) is None:
        return UNDEFINED_STATE
    period = elements.period_min
    true_anomaly_deg = elements.mean_anomaly_deg + (minutes % period) / period * 360.0
    return elements.circular_state(true_anomaly_deg)


_STATE_FUNCTIONS = {
    PropagationModel.PERTURBED: perturbed_state,
    PropagationModel.DEEP_SPACE: deep_space_state,
    PropagationModel.CIRCULAR: circular_state,
}


def _same_time(a: float, b: float) -> bool:
    return a == b or (math.isnan(a) and math.isnan(b))


@runtime_checkable
class Propagator(Protocol):
    """Anything that yields ECI state for minutes since epoch."""

    def state_at(self, minutes: float) -> State:
        ...

    def position_at(self, minutes: float) -> Vec3:
        ...

    def reset(self) -> None:
        ...


class OrbitPropagator:
    """
    Thread-safe, caching propagator for one element set.

    The most recent (minutes, state) pair is cached. A single lock covers
    cache check, computation and cache write, so concurrent requests for
    the same time compute once and requests for different times serialize.

    Args:
        elements: Element set to propagate.
        model: Which analytical model to run.
        drag_config: Drag parameters for the PERTURBED model.
    """

    def __init__(
        self,
        elements: OrbitalElements,
        model: PropagationModel = PropagationModel.PERTURBED,
        drag_config: DragConfig = DEFAULT_DRAG,
    ):
        if elements is None:
            raise ValueError("elements must not be None")
        self._elements = elements
        self._model = model
        self._drag_config = drag_config
        self._simplified = True
        self._lock = threading.Lock()
        self._cache: tuple[float, State] | None = None

    @property
    def elements(self) -> OrbitalElements:
        return self._elements

    @property
    def model(self) -> PropagationModel:
        return self._model

    @property
    def drag_config(self) -> DragConfig:
        return self._drag_config

    @property
    def simplified_model(self) -> bool:
        """Whether the simplified force model flag is set (default True)."""
        return self._simplified

    def set_simplified_model(self, enable: bool) -> None:
        self._simplified = bool(enable)

    def state_at(self, minutes: float) -> State:
        """ECI (position_km, velocity_km_s) at minutes since epoch."""
        with self._lock:
            cached = self._cache
            if cached is not None and _same_time(cached[0], minutes):
                return cached[1]
            _log.debug("%s: computing %s state at t=%s min",
                       self._elements.name, self._model.value, minutes)
            state = _STATE_FUNCTIONS[self._model](self._elements, minutes, self._drag_config)
            self._cache = (minutes, state)
            return state

    def position_at(self, minutes: float) -> Vec3:
        """ECI position (km) at minutes since epoch."""
        return self.state_at(minutes)[0]

    def propagate_states(self, times: Iterable[float] | None) -> list[State]:
        """States for each time, in the order given."""
        if times is None:
            return []
        return [self.state_at(t) for t in times]

    def reset(self) -> None:
        """Discard the cached state."""
        with self._lock:
            self._cache = None

    def __repr__(self) -> str:
        return f"OrbitPropagator({self._elements.name!r}, model={self._model.name})"


class RegimePropagator:
    """
    Transparent wrapper that records which regime selected its delegate.

    Every call is forwarded unchanged to the delegate propagator.
    """

    def __init__(self, regime: OrbitalRegime, delegate: OrbitPropagator):
        self._regime = regime
        self._delegate = delegate

    @property
    def regime(self) -> OrbitalRegime:
        return self._regime

    @property
    def delegate(self) -> OrbitPropagator:
        return self._delegate

    @property
    def elements(self) -> OrbitalElements:
        return self._delegate.elements

    @property
    def drag_config(self) -> DragConfig:
        return self._delegate.drag_config

    @property
    def simplified_model(self) -> bool:
        return self._delegate.simplified_model

    def set_simplified_model(self, enable: bool) -> None:
        self._delegate.set_simplified_model(enable)

    def state_at(self, minutes: float) -> State:
        return self._delegate.state_at(minutes)

    def position_at(self, minutes: float) -> Vec3:
        return self._delegate.position_at(minutes)

    def propagate_states(self, times: Iterable[float] | None) -> list[State]:
        return self._delegate.propagate_states(times)

    def reset(self) -> None:
        self._delegate.reset()

    def __repr__(self) -> str:
        return f"RegimePropagator({self._regime.name}, {self._delegate!r})"


_REGIME_MODELS = {
    OrbitalRegime.LEO: PropagationModel.PERTURBED,
    OrbitalRegime.MEO: PropagationModel.DEEP_SPACE,
    OrbitalRegime.GEO: PropagationModel.DEEP_SPACE,
}


def model_for_regime(regime: OrbitalRegime) -> PropagationModel:
    """LEO uses the drag-perturbed model; MEO and GEO use the deep-space model."""
    return _REGIME_MODELS[regime]


def create_regime_propagator(
    elements: OrbitalElements,
    drag_config: DragConfig = DEFAULT_DRAG,
) -> RegimePropagator:
    """
    Build a propagator whose model is selected by the orbit's regime.

    Args:
        elements: Element set; its semi-major axis decides the regime.
        drag_config: Drag parameters passed to the delegate.

    Returns:
        RegimePropagator wrapping a new OrbitPropagator.
    """
    regime = classify_semi_major_axis(elements.semi_major_axis_km)
    delegate = OrbitPropagator(elements, model_for_regime(regime), drag_config)
    return RegimePropagator(regime, delegate)
