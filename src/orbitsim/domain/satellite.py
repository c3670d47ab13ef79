# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite entity with bounded propagation history.

A Satellite owns one element set and one propagator and records every
propagated state into three parallel histories (position, velocity,
time). The histories keep insertion order and evict the oldest entry once
max_history is reached. All history mutation happens under one lock per
satellite.
"""
import threading
from collections import deque
from typing import Iterable, Sequence

from orbitsim.domain.atmosphere import DEFAULT_DRAG, DragConfig
from orbitsim.domain.element_set import OrbitalElements
from orbitsim.domain.propagation import Propagator, State, circular_state
from orbitsim.domain.vectors import Vec3

DEFAULT_MAX_HISTORY = 100


class IncompleteSatelliteError(RuntimeError):
    """A Satellite was built without all mandatory parts."""


class Satellite:
    """
    A propagated satellite. SatelliteBuilder is the usual entry point.

    name, elements and propagator are mandatory and max_history must be a
    positive int; otherwise IncompleteSatelliteError is raised.

    drag_config is descriptive metadata (mass, cross-section). Propagation
    uses whatever drag the propagator was built with, so when drag_config
    is omitted it is taken from propagator.drag_config to keep the two in
    agreement, falling back to DEFAULT_DRAG for propagators without one.
    """

    def __init__(
        self,
        name: str,
        elements: OrbitalElements,
        propagator: Propagator,
        regime_label: str = "LEO",
        drag_config: DragConfig | None = None,
        max_history: int = DEFAULT_MAX_HISTORY,
        initial_position: Vec3 | None = None,
        orbit_points: Sequence[Vec3] | None = None,
    ):
        missing = [
            label for label, value in (
                ("name", name),
                ("elements", elements),
                ("propagator", propagator),
            )
            if value is None
        ]
        if missing:
            raise IncompleteSatelliteError(
                f"Cannot build Satellite: missing {', '.join(missing)}"
            )
        if isinstance(max_history, bool) or not isinstance(max_history, int) or max_history < 1:
            raise IncompleteSatelliteError(
                f"max_history must be an int of at least 1, got {max_history!r}"
            )
        if drag_config is None:
            drag_config = getattr(propagator, "drag_config", DEFAULT_DRAG)

        self._name = name
        self._elements = elements
        self._propagator = propagator
        self._regime_label = regime_label
        self._drag_config = drag_config
        self._max_history = max_history
        self._initial_position = initial_position
        self._orbit_points = tuple(orbit_points) if orbit_points is not None else ()

        self._lock = threading.RLock()
        self._positions: deque[Vec3] = deque(maxlen=max_history)
        self._velocities: deque[Vec3] = deque(maxlen=max_history)
        self._times: deque[float] = deque(maxlen=max_history)

    # ── Accessors ───────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def elements(self) -> OrbitalElements:
        return self._elements

    @property
    def propagator(self) -> Propagator:
        return self._propagator

    @property
    def regime_label(self) -> str:
        return self._regime_label

    @property
    def drag_config(self) -> DragConfig:
        return self._drag_config

    @property
    def mass_kg(self) -> float:
        return self._drag_config.mass_kg

    @property
    def cross_section_m2(self) -> float:
        return self._drag_config.area_m2

    @property
    def max_history(self) -> int:
        return self._max_history

    @property
    def initial_position(self) -> Vec3 | None:
        return self._initial_position

    @property
    def orbit_points(self) -> tuple[Vec3, ...]:
        """Precomputed orbit polyline for display; never read by propagation."""
        return self._orbit_points

    # ── Propagation ─────────────────────────────────────────────────

    def propagate_state(self, minutes: float) -> State:
        """Propagate to minutes since epoch and record the result."""
        with self._lock:
            state = self._propagator.state_at(minutes)
            self._positions.append(state[0])
            self._velocities.append(state[1])
            self._times.append(minutes)
            return state

    def propagate_states(self, times: Iterable[float]) -> list[State]:
        """
        Propagate over a batch of times in increasing order.

        Times are sorted ascending and de-duplicated before propagation,
        so the history grows in simulated time whatever the input order.

        Returns:
            States in ascending time order, one per distinct time.
        """
        ordered = sorted(set(times))
        with self._lock:
            return [self.propagate_state(t) for t in ordered]

    def predict_state(self, minutes: float) -> State:
        """State at minutes since epoch without touching history."""
        return self._propagator.state_at(minutes)

    def approximate_state(self, minutes: float) -> State:
        """Circular two-body approximation, bypassing the propagator."""
        return circular_state(self._elements, minutes)

    def current_state(self) -> State | None:
        """Most recently recorded state, or None before any propagation."""
        with self._lock:
            if not self._positions:
                return None
            return self._positions[-1], self._velocities[-1]

    def clear_history(self) -> None:
        with self._lock:
            self._positions.clear()
            self._velocities.clear()
            self._times.clear()

    # ── History access ──────────────────────────────────────────────

    @property
    def position_history(self) -> tuple[Vec3, ...]:
        with self._lock:
            return tuple(self._positions)

    @property
    def velocity_history(self) -> tuple[Vec3, ...]:
        with self._lock:
            return tuple(self._velocities)

    @property
    def time_history(self) -> tuple[float, ...]:
        with self._lock:
            return tuple(self._times)

    def history(self) -> list[State]:
        """All recorded (position, velocity) pairs, oldest first."""
        with self._lock:
            return list(zip(self._positions, self._velocities))

    def last_n_states(self, n: int) -> list[State]:
        """Up to n most recent (position, velocity) pairs, oldest first."""
        with self._lock:
            states = list(zip(self._positions, self._velocities))
        if n <= 0:
            return []
        return states[-n:]

    def position_at(self, index: int) -> Vec3:
        with self._lock:
            return self._positions[index]

    def velocity_at(self, index: int) -> Vec3:
        with self._lock:
            return self._velocities[index]

    def time_at(self, index: int) -> float:
        with self._lock:
            return self._times[index]

    def __len__(self) -> int:
        with self._lock:
            return len(self._times)

    def __repr__(self) -> str:
        return f"Satellite({self._name!r}, {self._regime_label}, history={len(self)})"


class SatelliteBuilder:
    """
    Fluent builder for Satellite.

    name, elements and propagator are mandatory; build() raises
    IncompleteSatelliteError if any is missing.
    """

    def __init__(self):
        self._name: str | None = None
        self._elements: OrbitalElements | None = None
        self._propagator: Propagator | None = None
        self._regime_label = "LEO"
        self._drag_config: DragConfig | None = None
        self._max_history = DEFAULT_MAX_HISTORY
        self._initial_position: Vec3 | None = None
        self._orbit_points: Sequence[Vec3] | None = None

    def name(self, name: str) -> "SatelliteBuilder":
        self._name = name
        return self

    def elements(self, elements: OrbitalElements) -> "SatelliteBuilder":
        self._elements = elements
        return self

    def propagator(self, propagator: Propagator) -> "SatelliteBuilder":
        self._propagator = propagator
        return self

    def regime_label(self, label: str) -> "SatelliteBuilder":
        self._regime_label = label
        return self

    def drag_config(self, drag_config: DragConfig) -> "SatelliteBuilder":
        self._drag_config = drag_config
        return self

    def max_history(self, max_history: int) -> "SatelliteBuilder":
        self._max_history = max_history
        return self

    def initial_position(self, position: Vec3) -> "SatelliteBuilder":
        self._initial_position = position
        return self

    def orbit_points(self, points: Sequence[Vec3]) -> "SatelliteBuilder":
        self._orbit_points = points
        return self

    def build(self) -> Satellite:
        """Construct the Satellite; validation is the constructor's."""
        return Satellite(
            name=self._name,
            elements=self._elements,
            propagator=self._propagator,
            regime_label=self._regime_label,
            drag_config=self._drag_config,
            max_history=self._max_history,
            initial_position=self._initial_position,
            orbit_points=self._orbit_points,
        )
