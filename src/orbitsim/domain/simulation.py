# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Regime-aware simulation facade.

Wraps a Constellation and re-expresses its ECI states as geodetic and
topocentric summaries. Summaries are returned, never stored: only the
ECI propagation calls that record history touch satellite state.
"""
from collections import Counter

from orbitsim.domain.constellation import Constellation
from orbitsim.domain.coordinate_frames import LlaState, eci_to_ecef, eci_to_lla
from orbitsim.domain.observation import GroundStation, Observation, compute_observation
from orbitsim.domain.propagation import State


class RegimeAwareSimulator:
    """Geodetic and topocentric views over a constellation."""

    def __init__(self, constellation: Constellation):
        self._constellation = constellation

    @property
    def constellation(self) -> Constellation:
        return self._constellation

    def propagate_all_at_time(self, minutes: float) -> dict[str, State]:
        """Delegates to the constellation (records history)."""
        return self._constellation.propagate_all_at_time(minutes)

    def propagate_lla_at_time(self, minutes: float) -> dict[str, LlaState]:
        """
        Propagate all satellites (recording ECI history) and return LLA views.

        Returns:
            Name → LlaState in satellite insertion order.
        """
        states = self.propagate_all_at_time(minutes)
        return {
            name: eci_to_lla(pos, vel, minutes)
            for name, (pos, vel) in states.items()
        }

    def predict_lla_at_time(self, minutes: float) -> dict[str, LlaState]:
        """Like propagate_lla_at_time but leaves every history untouched."""
        result: dict[str, LlaState] = {}
        for satellite in self._constellation.satellites:
            pos, vel = satellite.predict_state(minutes)
            result[satellite.name] = eci_to_lla(pos, vel, minutes)
        return result

    def observe_at_time(self, station: GroundStation, minutes: float) -> dict[str, Observation]:
        """Look angles from a ground station to every satellite, without history."""
        t_seconds = minutes * 60.0
        result: dict[str, Observation] = {}
        for satellite in self._constellation.satellites:
            pos, _ = satellite.predict_state(minutes)
            result[satellite.name] = compute_observation(station, eci_to_ecef(pos, t_seconds))
        return result

    def regime_counts(self) -> dict[str, int]:
        """Number of satellites per regime label."""
        return dict(Counter(s.regime_label for s in self._constellation.satellites))
