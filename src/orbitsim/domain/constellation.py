# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Constellation of propagated satellites.

An ordered, append-only collection of Satellite objects with batched
propagation and name-keyed queries. Name lookups scan linearly and the
first satellite with a matching name wins; a miss returns None or an
empty list.

Also builds satellites and constellations from element sets with
regime-selected propagators.
"""
import logging
from typing import Iterable

from orbitsim.domain.atmosphere import DEFAULT_DRAG, DragConfig
from orbitsim.domain.element_set import OrbitalElements
from orbitsim.domain.propagation import State, create_regime_propagator
from orbitsim.domain.satellite import DEFAULT_MAX_HISTORY, Satellite, SatelliteBuilder

_log = logging.getLogger(__name__)


class Constellation:
    """Named, ordered group of satellites."""

    def __init__(self, name: str = "Constellation", satellites: Iterable[Satellite] | None = None):
        self._name = name
        self._satellites: list[Satellite] = []
        if satellites is not None:
            self.add_satellites(satellites)

    @property
    def name(self) -> str:
        return self._name

    @property
    def satellites(self) -> tuple[Satellite, ...]:
        return tuple(self._satellites)

    def add_satellite(self, satellite: Satellite | None) -> None:
        if satellite is not None:
            self._satellites.append(satellite)

    def add_satellites(self, satellites: Iterable[Satellite] | None) -> None:
        if satellites is None:
            return
        for satellite in satellites:
            self.add_satellite(satellite)

    def find_satellite(self, name: str) -> Satellite | None:
        """First satellite with the given name, or None."""
        for satellite in self._satellites:
            if satellite.name == name:
                return satellite
        _log.debug("%s: no satellite named %r", self._name, name)
        return None

    # ── Propagation ─────────────────────────────────────────────────

    def propagate_all_at_time(self, minutes: float) -> dict[str, State]:
        """
        Propagate every satellite to one time, recording history.

        Returns:
            Name → (position, velocity), in satellite insertion order.
        """
        result: dict[str, State] = {}
        for satellite in self._satellites:
            result[satellite.name] = satellite.propagate_state(minutes)
        return result

    def propagate_all(self, times: Iterable[float]) -> dict[str, list[State]]:
        """
        Propagate every satellite over a batch of times.

        Each satellite sorts and de-duplicates the times itself.

        Returns:
            Name → states in ascending time order.
        """
        times = list(times)
        result: dict[str, list[State]] = {}
        for satellite in self._satellites:
            result[satellite.name] = satellite.propagate_states(times)
        return result

    # ── Queries ─────────────────────────────────────────────────────

    def query_satellite(self, name: str, minutes: float) -> State | None:
        """Predicted state of one satellite without recording history."""
        satellite = self.find_satellite(name)
        if satellite is None:
            return None
        return satellite.predict_state(minutes)

    def get_satellite_history(self, name: str) -> list[State]:
        satellite = self.find_satellite(name)
        if satellite is None:
            return []
        return satellite.history()

    def get_last_n_states(self, name: str, n: int) -> list[State]:
        satellite = self.find_satellite(name)
        if satellite is None:
            return []
        return satellite.last_n_states(n)

    def clear_all_histories(self) -> None:
        for satellite in self._satellites:
            satellite.clear_history()

    def __len__(self) -> int:
        return len(self._satellites)

    def __iter__(self):
        return iter(tuple(self._satellites))

    def __str__(self) -> str:
        return f"{self._name}: {len(self._satellites)} satellites"


def build_satellite(
    elements: OrbitalElements,
    drag_config: DragConfig = DEFAULT_DRAG,
    max_history: int = DEFAULT_MAX_HISTORY,
) -> Satellite:
    """Satellite with a regime-selected propagator, named after its element set."""
    propagator = create_regime_propagator(elements, drag_config)
    return (
        SatelliteBuilder()
        .name(elements.name)
        .elements(elements)
        .propagator(propagator)
        .regime_label(propagator.regime.value)
        .drag_config(drag_config)
        .max_history(max_history)
        .build()
    )


def build_satellites(
    element_sets: Iterable[OrbitalElements],
    drag_config: DragConfig = DEFAULT_DRAG,
    max_history: int = DEFAULT_MAX_HISTORY,
) -> list[Satellite]:
    return [build_satellite(e, drag_config, max_history) for e in element_sets]


def build_constellation(
    name: str,
    element_sets: Iterable[OrbitalElements],
    drag_config: DragConfig = DEFAULT_DRAG,
    max_history: int = DEFAULT_MAX_HISTORY,
) -> Constellation:
    """
    Constellation of regime-propagated satellites.

    Args:
        name: Constellation name.
        element_sets: One element set per satellite.
        drag_config: Drag parameters shared by all satellites.
        max_history: History bound per satellite.

    Returns:
        Constellation in element-set order.
    """
    return Constellation(name, build_satellites(element_sets, drag_config, max_history))
